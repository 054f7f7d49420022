#import every model so SQLAlchemy registers it in Base.metadata

from homeofficecart.data.models.customer import CustomerModel
from homeofficecart.data.models.product import ProductModel
from homeofficecart.data.models.order import OrderModel, OrderStatus
from homeofficecart.data.models.order_item import OrderItemModel

__all__ = ["CustomerModel", "ProductModel", "OrderModel", "OrderStatus", "OrderItemModel"]
