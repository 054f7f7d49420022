# homeofficecart/domain/errors.py


class CartError(Exception):
    """Base class for every failure the cart service reports to its callers."""


class NotFoundError(CartError):
    pass


class ProductNotFoundError(NotFoundError):
    def __init__(self, product_id: int):
        super().__init__("Product not found")
        self.product_id = product_id


class CartNotFoundError(NotFoundError):
    def __init__(self, customer_id: int):
        super().__init__("Cart not found")
        self.customer_id = customer_id


class ItemNotFoundError(NotFoundError):
    def __init__(self, order_id: int, product_id: int):
        super().__init__("Item not found in cart")
        self.order_id = order_id
        self.product_id = product_id


class CustomerNotFoundError(NotFoundError):
    def __init__(self, customer_id: int):
        super().__init__("Customer not found")
        self.customer_id = customer_id


class InvalidStateError(CartError):
    pass


class CustomerConflictError(InvalidStateError):
    def __init__(self, customer_id: int, email: str):
        super().__init__(f"Cannot provision customer {customer_id}: email {email} is already taken")
        self.customer_id = customer_id
        self.email = email


class EmptyCartError(InvalidStateError):
    def __init__(self, customer_id: int):
        super().__init__("Cart is empty")
        self.customer_id = customer_id


class InvalidQuantityError(CartError, ValueError):
    def __init__(self, quantity):
        super().__init__("Quantity must be a positive integer")
        self.quantity = quantity


class StorageError(CartError):
    """Any persistence-layer failure; the original exception is chained."""
