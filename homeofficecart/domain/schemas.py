# homeofficecart/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, model_serializer
from typing import List
from decimal import Decimal


class HealthOut(BaseModel):
    status: str
    message: str


class ProductOut(BaseModel):
    """Product as listed in the catalogue."""

    product_id: int
    name: str
    description: str | None = None
    price: Decimal
    stock_quantity: int

    model_config = ConfigDict(from_attributes=True)


class AddItemIn(BaseModel):
    """Body of the add-to-cart request, camelCase on the wire."""

    product_id: int = Field(..., alias="productId", gt=0, description="Product id (> 0)")
    quantity: int = Field(..., gt=0, description="Quantity to add (> 0)")

    model_config = ConfigDict(populate_by_name=True)


class OrderItemOut(BaseModel):
    """Cart line with its product."""

    order_item_id: int
    order_id: int
    product_id: int
    quantity: int
    price: Decimal
    product: ProductOut

    model_config = ConfigDict(from_attributes=True)


class CartOut(BaseModel):
    """Cart view. cart_id is absent when the customer has no cart yet."""

    cart_id: int | None = None
    total_amount: Decimal = Decimal("0.00")
    items: List[OrderItemOut] = []

    @model_serializer(mode="wrap")
    def _omit_missing_cart_id(self, handler):
        data = handler(self)
        if data.get("cart_id") is None:
            data.pop("cart_id", None)
        return data


class MessageOut(BaseModel):
    message: str


class CartItemAddedOut(MessageOut):
    cart_id: int


class OrderPlacedOut(MessageOut):
    order_id: int
