from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from homeofficecart.data.database import Base


class CustomerModel(Base):
    __tablename__ = "customer"

    customer_id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True)
    phone = Column(String, nullable=True)

    orders = relationship("OrderModel", back_populates="customer")
