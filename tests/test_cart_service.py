"""
Service-level tests for CartService.

They run against an in-memory SQLite database with the real repositories,
so the storage constraints and upserts are exercised as well.
"""
from decimal import Decimal

import pytest
from sqlalchemy import select, func
from sqlalchemy.exc import OperationalError

from homeofficecart.data.models import CustomerModel, OrderModel, OrderItemModel, OrderStatus
from homeofficecart.domain.errors import (
    CartNotFoundError,
    CustomerConflictError,
    CustomerNotFoundError,
    EmptyCartError,
    InvalidQuantityError,
    ItemNotFoundError,
    NotFoundError,
    InvalidStateError,
    ProductNotFoundError,
    StorageError,
)
from homeofficecart.repos.order_repo import OrderRepo
from homeofficecart.services.cart_service import CartService, compute_total
from homeofficecart.services.customer_resolver import (
    AutoProvisionCustomerResolver,
    CustomerResolver,
    StrictCustomerResolver,
    get_customer_resolver,
)


def count(db, model, *where):
    return db.execute(select(func.count()).select_from(model).where(*where)).scalar_one()


class TestResolveOrCreateCart:
    def test_same_cart_returned_twice_for_new_customer(self, db, cart_service):
        first = cart_service.resolve_or_create_cart(7)
        second = cart_service.resolve_or_create_cart(7)

        assert first.order_id == second.order_id
        assert count(db, OrderModel, OrderModel.customer_id == 7) == 1

    def test_new_cart_is_empty_with_zero_total(self, cart_service):
        cart = cart_service.resolve_or_create_cart(7)

        assert cart.status == OrderStatus.CART.value
        assert cart.total_amount == Decimal("0.00")

    def test_unknown_customer_gets_placeholder_identity(self, db, cart_service):
        cart_service.resolve_or_create_cart(42)

        customer = db.get(CustomerModel, 42)
        assert customer.first_name == "Test"
        assert customer.last_name == "Customer"
        assert customer.email == "test42@example.com"
        assert customer.phone is None

    def test_existing_customer_is_not_touched(self, db, cart_service):
        db.add(CustomerModel(customer_id=5, first_name="Ada", last_name="Lovelace", email="ada@example.com"))
        db.commit()

        cart_service.resolve_or_create_cart(5)

        assert db.get(CustomerModel, 5).first_name == "Ada"
        assert count(db, CustomerModel) == 1

    def test_strict_resolver_rejects_unknown_customer(self, db):
        svc = CartService(db, StrictCustomerResolver(db))

        with pytest.raises(CustomerNotFoundError):
            svc.resolve_or_create_cart(99)

        assert count(db, OrderModel) == 0
        assert count(db, CustomerModel) == 0

    def test_resolver_factory_follows_policy_flag(self, db):
        assert isinstance(get_customer_resolver(db, auto_provision=True), AutoProvisionCustomerResolver)
        assert isinstance(get_customer_resolver(db, auto_provision=False), StrictCustomerResolver)

    def test_placeholder_email_taken_by_other_customer_is_rejected(self, db, cart_service):
        db.add(CustomerModel(customer_id=5, first_name="Ada", last_name="Lovelace", email="test42@example.com"))
        db.commit()

        with pytest.raises(CustomerConflictError):
            cart_service.resolve_or_create_cart(42)

        assert db.get(CustomerModel, 42) is None
        assert count(db, OrderModel) == 0

    def test_base_resolver_is_abstract(self, db):
        with pytest.raises(TypeError):
            CustomerResolver(db)


class TestAddItem:
    def test_same_product_twice_merges_into_one_line(self, db, cart_service, products):
        cart_id = cart_service.add_item(1, products["lamp"], 2)
        again = cart_service.add_item(1, products["lamp"], 3)

        assert again == cart_id
        items = OrderRepo(db).get_items(cart_id)
        assert len(items) == 1
        assert items[0].quantity == 5

    def test_total_is_exact_decimal_sum(self, db, cart_service, products):
        cart_service.add_item(1, products["lamp"], 1)
        cart_service.add_item(1, products["organizer"], 2)
        cart_id = cart_service.add_item(1, products["pad"], 1)

        cart = OrderRepo(db).get_order(cart_id)
        assert cart.total_amount == Decimal("34.99")
        assert isinstance(cart.total_amount, Decimal)

    def test_many_small_additions_do_not_drift(self, db, cart_service, products):
        for _ in range(10):
            cart_id = cart_service.add_item(1, products["lamp"], 1)

        assert OrderRepo(db).get_order(cart_id).total_amount == Decimal("199.90")

    def test_price_snapshot_is_kept_when_product_price_changes(self, db, cart_service, products):
        cart_id = cart_service.add_item(1, products["lamp"], 1)

        lamp = cart_service.products.get_product(products["lamp"])
        lamp.price = Decimal("25.00")
        db.commit()

        cart_service.add_item(1, products["lamp"], 1)

        item = OrderRepo(db).get_items(cart_id)[0]
        assert item.price == Decimal("19.99")
        assert item.quantity == 2
        assert OrderRepo(db).get_order(cart_id).total_amount == Decimal("39.98")

    def test_unknown_product_leaves_nothing_behind(self, db, cart_service, products):
        with pytest.raises(ProductNotFoundError):
            cart_service.add_item(3, 9999, 1)

        assert count(db, CustomerModel) == 0
        assert count(db, OrderModel) == 0

    @pytest.mark.parametrize("quantity", [0, -2, 1.5, True])
    def test_non_positive_or_non_integer_quantity_is_rejected(self, db, cart_service, products, quantity):
        with pytest.raises(InvalidQuantityError):
            cart_service.add_item(1, products["lamp"], quantity)

        assert count(db, OrderItemModel) == 0

    def test_storage_failure_rolls_back_the_whole_call(self, db, cart_service, products, monkeypatch):
        def boom(**kwargs):
            raise OperationalError("INSERT INTO order_item", {}, Exception("disk I/O error"))

        monkeypatch.setattr(cart_service.repo, "upsert_item", boom)

        with pytest.raises(StorageError) as exc_info:
            cart_service.add_item(1, products["lamp"], 1)

        assert isinstance(exc_info.value.__cause__, OperationalError)
        assert count(db, OrderModel) == 0
        assert count(db, CustomerModel) == 0


class TestRemoveItem:
    def test_removal_deletes_whole_line(self, db, cart_service, products):
        cart_id = cart_service.add_item(1, products["lamp"], 3)

        cart_service.remove_item(1, products["lamp"])

        assert OrderRepo(db).get_items(cart_id) == []

        with pytest.raises(ItemNotFoundError):
            cart_service.remove_item(1, products["lamp"])

    def test_total_is_recomputed_after_removal(self, db, cart_service, products):
        cart_service.add_item(1, products["lamp"], 1)
        cart_id = cart_service.add_item(1, products["organizer"], 2)

        cart_service.remove_item(1, products["lamp"])

        assert OrderRepo(db).get_order(cart_id).total_amount == Decimal("10.00")

    def test_removing_last_item_zeroes_total(self, db, cart_service, products):
        cart_id = cart_service.add_item(1, products["pad"], 4)

        cart_service.remove_item(1, products["pad"])

        assert OrderRepo(db).get_order(cart_id).total_amount == Decimal("0.00")

    def test_no_cart_is_not_found(self, cart_service, products):
        with pytest.raises(CartNotFoundError):
            cart_service.remove_item(1, products["lamp"])

    def test_product_not_in_cart_is_not_found(self, cart_service, products):
        cart_service.add_item(1, products["lamp"], 1)

        with pytest.raises(ItemNotFoundError) as exc_info:
            cart_service.remove_item(1, products["pad"])

        assert isinstance(exc_info.value, NotFoundError)


class TestViewCart:
    def test_no_cart_gives_empty_view(self, db, cart_service):
        view = cart_service.view_cart(11)

        assert view == {"cart_id": None, "total_amount": Decimal("0.00"), "items": []}
        assert count(db, CustomerModel) == 0

    def test_view_lists_items_with_products_in_insertion_order(self, cart_service, products):
        cart_service.add_item(1, products["pad"], 1)
        cart_id = cart_service.add_item(1, products["lamp"], 2)

        view = cart_service.view_cart(1)

        assert view["cart_id"] == cart_id
        assert view["total_amount"] == Decimal("44.98")
        assert [i["product_id"] for i in view["items"]] == [products["pad"], products["lamp"]]
        lamp_line = view["items"][1]
        assert lamp_line["quantity"] == 2
        assert lamp_line["price"] == Decimal("19.99")
        assert lamp_line["product"]["name"] == "Desk Lamp"

    def test_placed_order_is_not_shown_as_cart(self, cart_service, products):
        cart_service.add_item(1, products["lamp"], 1)
        cart_service.checkout(1)

        assert cart_service.view_cart(1)["items"] == []


class TestCheckout:
    def test_empty_cart_cannot_be_placed(self, db, cart_service):
        cart = cart_service.resolve_or_create_cart(1)

        with pytest.raises(EmptyCartError) as exc_info:
            cart_service.checkout(1)

        assert isinstance(exc_info.value, InvalidStateError)
        assert OrderRepo(db).get_order(cart.order_id).status == OrderStatus.CART.value

    def test_missing_cart_cannot_be_placed(self, cart_service):
        with pytest.raises(EmptyCartError):
            cart_service.checkout(1)

    def test_checkout_places_cart_and_keeps_total(self, db, cart_service, products):
        cart_id = cart_service.add_item(1, products["lamp"], 1)

        order_id = cart_service.checkout(1)

        order = OrderRepo(db).get_order(order_id)
        assert order_id == cart_id
        assert order.status == OrderStatus.PLACED.value
        assert order.total_amount == Decimal("19.99")

    def test_second_checkout_fails_and_next_add_opens_new_cart(self, db, cart_service, products):
        cart_service.add_item(1, products["lamp"], 1)
        order_id = cart_service.checkout(1)

        with pytest.raises(EmptyCartError):
            cart_service.checkout(1)

        new_cart_id = cart_service.add_item(1, products["pad"], 1)

        assert new_cart_id != order_id
        placed = OrderRepo(db).get_order(order_id)
        assert placed.status == OrderStatus.PLACED.value
        assert [i.product_id for i in OrderRepo(db).get_items(order_id)] == [products["lamp"]]
        assert count(db, OrderModel, OrderModel.customer_id == 1) == 2


def test_compute_total_of_nothing_is_zero():
    assert compute_total([]) == Decimal("0.00")
