# homeofficecart/data/models/order.py
import enum
from decimal import Decimal

from sqlalchemy import Column, Integer, ForeignKey, String, Numeric, Index, text
from sqlalchemy.orm import relationship

from homeofficecart.data.database import Base


class OrderStatus(str, enum.Enum):
    CART = "CART"
    PLACED = "PLACED"


#only one open cart per customer, placed orders are not restricted
OPEN_CART_WHERE = text("status = 'CART'")


class OrderModel(Base):
    __tablename__ = "order"  # reserved word, the dialect quotes it

    order_id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, ForeignKey("customer.customer_id"), nullable=False, index=True)

    status = Column(String(20), nullable=False, default=OrderStatus.CART.value)  # CART, PLACED
    total_amount = Column(Numeric(10, 2), nullable=False, default=Decimal("0.00"))

    customer = relationship("CustomerModel", back_populates="orders")
    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.order_item_id",
    )

    __table_args__ = (
        Index(
            "uq_order_open_cart",
            "customer_id",
            unique=True,
            postgresql_where=OPEN_CART_WHERE,
            sqlite_where=OPEN_CART_WHERE,
        ),
    )
