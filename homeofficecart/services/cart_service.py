# homeofficecart/services/cart_service.py
from decimal import Decimal
from typing import Any, Dict, Iterable

from sqlalchemy.orm import Session

from homeofficecart.data.models.order import OrderModel
from homeofficecart.data.models.order_item import OrderItemModel
from homeofficecart.data.models.product import ProductModel
from homeofficecart.domain.errors import (
    CartNotFoundError,
    EmptyCartError,
    InvalidQuantityError,
    ItemNotFoundError,
    ProductNotFoundError,
)
from homeofficecart.repos.order_repo import OrderRepo
from homeofficecart.repos.product_repo import ProductRepo
from homeofficecart.services.customer_resolver import CustomerResolver
from homeofficecart.services.unit_of_work import unit_of_work
from homeofficecart.utils.logging import get_logger

logger = get_logger(__name__)


def compute_total(items: Iterable[OrderItemModel]) -> Decimal:
    #decimal only, floats drift after a few additions
    return sum((i.price * i.quantity for i in items), Decimal("0.00"))


def _product_dict(p: ProductModel) -> Dict[str, Any]:
    return {
        "product_id": p.product_id,
        "name": p.name,
        "description": p.description,
        "price": p.price,
        "stock_quantity": p.stock_quantity,
    }


class CartService:
    """
    Use cases of the cart: a cart is the customer's order in status CART.
    commands (add, remove, checkout) change state and commit once,
    query (view) only reads.
    """

    def __init__(self, db: Session, customer_resolver: CustomerResolver):
        self.db = db
        self.repo = OrderRepo(db)
        self.products = ProductRepo(db)
        self.customer_resolver = customer_resolver

    #query
    def view_cart(self, customer_id: int) -> Dict[str, Any]:
        with unit_of_work(self.db, "view cart"):
            cart = self.repo.get_open_cart(customer_id, with_items=True)

            if not cart:
                #no cart yet is not an error
                return {"cart_id": None, "total_amount": Decimal("0.00"), "items": []}

            return {
                "cart_id": cart.order_id,
                "total_amount": cart.total_amount,
                "items": [
                    {
                        "order_item_id": i.order_item_id,
                        "order_id": i.order_id,
                        "product_id": i.product_id,
                        "quantity": i.quantity,
                        "price": i.price,
                        "product": _product_dict(i.product),
                    }
                    for i in cart.items
                ],
            }

    #commands
    def resolve_or_create_cart(self, customer_id: int) -> OrderModel:
        with unit_of_work(self.db, "resolve cart"):
            return self._resolve_or_create_cart(customer_id)

    def _resolve_or_create_cart(self, customer_id: int) -> OrderModel:
        self.customer_resolver.resolve(customer_id)

        cart = self.repo.get_open_cart(customer_id)
        if cart:
            return cart

        cart = self.repo.create_cart_if_absent(customer_id)
        logger.info(f"Cart {cart.order_id} opened for customer {customer_id}")
        return cart

    def add_item(self, customer_id: int, product_id: int, quantity: int) -> int:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise InvalidQuantityError(quantity)

        with unit_of_work(self.db, "add item"):
            #product first, an unknown product must not open a cart
            product = self.products.get_product(product_id)
            if not product:
                raise ProductNotFoundError(product_id)

            cart = self._resolve_or_create_cart(customer_id)

            logger.info(f"Adding {quantity} x product {product_id} to cart {cart.order_id}")
            self.repo.upsert_item(
                order_id=cart.order_id,
                product_id=product_id,
                quantity=quantity,
                price=product.price,
            )

            total = self._recompute_total(cart)
            logger.info(f"Cart {cart.order_id} total is now {total}")

            return cart.order_id

    def remove_item(self, customer_id: int, product_id: int) -> None:
        with unit_of_work(self.db, "remove item"):
            cart = self.repo.get_open_cart(customer_id)
            if not cart:
                raise CartNotFoundError(customer_id)

            item = self.repo.get_item(cart.order_id, product_id)
            if not item:
                raise ItemNotFoundError(cart.order_id, product_id)

            #whole line goes, whatever the quantity
            logger.info(f"Removing product {product_id} (qty {item.quantity}) from cart {cart.order_id}")
            self.repo.delete_item(item)

            self._recompute_total(cart)

    def checkout(self, customer_id: int) -> int:
        with unit_of_work(self.db, "checkout"):
            cart = self.repo.get_open_cart(customer_id, with_items=True)

            if not cart or not cart.items:
                raise EmptyCartError(customer_id)

            #total stays as last computed by add/remove
            if self.repo.mark_placed(cart.order_id) == 0:
                raise EmptyCartError(customer_id)

            logger.info(f"Order {cart.order_id} placed by customer {customer_id}, total {cart.total_amount}")
            return cart.order_id

    def _recompute_total(self, cart: OrderModel) -> Decimal:
        total = compute_total(self.repo.get_items(cart.order_id))
        self.repo.set_total(cart, total)
        return total
