# homeofficecart/repos/order_repo.py
from decimal import Decimal
from typing import List

from sqlalchemy import select, update
from sqlalchemy.orm import Session, selectinload

from homeofficecart.data.database import upsert_insert
from homeofficecart.data.models.order import OrderModel, OrderStatus, OPEN_CART_WHERE
from homeofficecart.data.models.order_item import OrderItemModel


class OrderRepo:
    """
    Orders and their line items. A cart is an order in status CART.
    Nothing here commits; the service owns the transaction.
    """

    def __init__(self, db: Session):
        self.db = db

    # =====================================================
    # ORDERS
    # =====================================================
    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def get_open_cart(self, customer_id: int, with_items: bool = False) -> OrderModel | None:
        stmt = select(OrderModel).where(
            OrderModel.customer_id == customer_id,
            OrderModel.status == OrderStatus.CART.value,
        )
        if with_items:
            stmt = stmt.options(selectinload(OrderModel.items).selectinload(OrderItemModel.product))
        return self.db.execute(stmt.execution_options(populate_existing=True)).scalar_one_or_none()

    def create_cart_if_absent(self, customer_id: int) -> OrderModel:
        insert = upsert_insert(self.db)

        if insert is None:
            cart = self.get_open_cart(customer_id)
            if cart:
                return cart
            cart = OrderModel(
                customer_id=customer_id,
                status=OrderStatus.CART.value,
                total_amount=Decimal("0.00"),
            )
            self.db.add(cart)
            self.db.flush()
            return cart

        stmt = (
            insert(OrderModel)
            .values(customer_id=customer_id, status=OrderStatus.CART.value, total_amount=Decimal("0.00"))
            .on_conflict_do_nothing(index_elements=["customer_id"], index_where=OPEN_CART_WHERE)
        )
        self.db.execute(stmt)
        return self.get_open_cart(customer_id)

    def set_total(self, order: OrderModel, total: Decimal):
        order.total_amount = total
        self.db.flush()

    def mark_placed(self, order_id: int) -> int:
        #conditional update, 0 rows means the cart was already placed
        result = self.db.execute(
            update(OrderModel)
            .where(
                OrderModel.order_id == order_id,
                OrderModel.status == OrderStatus.CART.value,
            )
            .values(status=OrderStatus.PLACED.value)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    # =====================================================
    # ITEMS
    # =====================================================
    def get_item(self, order_id: int, product_id: int) -> OrderItemModel | None:
        return self.db.execute(
            select(OrderItemModel).where(
                OrderItemModel.order_id == order_id,
                OrderItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def get_items(self, order_id: int) -> List[OrderItemModel]:
        stmt = (
            select(OrderItemModel)
            .where(OrderItemModel.order_id == order_id)
            .order_by(OrderItemModel.order_item_id)
            .execution_options(populate_existing=True)
        )
        return list(self.db.execute(stmt).scalars())

    def upsert_item(self, order_id: int, product_id: int, quantity: int, price: Decimal):
        """
        Add quantity to the (order, product) line, creating it with the given
        price when absent. An existing line keeps its price snapshot.
        """
        insert = upsert_insert(self.db)

        if insert is None:
            item = self.get_item(order_id, product_id)
            if item:
                item.quantity += quantity
            else:
                self.db.add(
                    OrderItemModel(
                        order_id=order_id,
                        product_id=product_id,
                        quantity=quantity,
                        price=price,
                    )
                )
            self.db.flush()
            return

        stmt = insert(OrderItemModel).values(
            order_id=order_id,
            product_id=product_id,
            quantity=quantity,
            price=price,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["order_id", "product_id"],
            set_={"quantity": OrderItemModel.quantity + stmt.excluded.quantity},
        )
        self.db.execute(stmt)

    def delete_item(self, item: OrderItemModel):
        self.db.delete(item)
        self.db.flush()
