"""Integration tests for the PlaceOrder use case.

Uses in-memory fake repositories, no network.
"""

import pytest

from construapp.application.add_to_cart import AddToCartHandler
from construapp.application.notifications import Notifier, NotificationKind
from construapp.application.place_order import PlaceOrderHandler
from construapp.application.session import StorefrontSession
from construapp.domain.exceptions import ValidationError
from construapp.domain.model.fallback_catalog import fallback_products
from construapp.domain.model.value_objects import Money
from tests.fakes import SERVER_TIME, FakeOrderRepository


def _setup(address="Av. Juárez 100, Centro", phone="555-0100", fill_cart=True):
    session = StorefrontSession(user_id="user-1", products=fallback_products())
    notifier = Notifier()
    if fill_cart:
        add = AddToCartHandler(session, notifier)
        add.handle("1")
        add.handle("1")
        add.handle("2")
    session.checkout.address = address
    session.checkout.phone = phone
    order_repo = FakeOrderRepository()
    handler = PlaceOrderHandler(session, order_repo, notifier)
    return handler, session, order_repo, notifier


class TestPlaceOrderHappyPath:

    def test_writes_order_document(self):
        handler, _, order_repo, _ = _setup()
        assert handler.handle() is True

        (order,) = order_repo.list_all()
        assert order.id == "order-1"
        assert order.customer_id == "user-1"
        assert order.status.value == "Pending"
        assert order.total == Money.of("705.50")
        assert order.address == "Av. Juárez 100, Centro"
        assert order.phone == "555-0100"
        assert [(i.product_id, i.quantity.value) for i in order.items] == [("1", 2), ("2", 1)]

    def test_timestamp_comes_from_the_store(self):
        handler, _, order_repo, _ = _setup()
        handler.handle()
        assert order_repo.get_by_id("order-1").created_at == SERVER_TIME

    def test_clears_fields_but_keeps_cart(self):
        handler, session, _, notifier = _setup()
        handler.handle()

        assert session.checkout.address == ""
        assert session.checkout.phone == ""
        assert session.checkout.order_placed is True
        assert session.checkout.last_order_id == "order-1"
        assert session.cart.item_count() == 3
        assert notifier.current().message == "Order placed successfully!"

    def test_new_attempt_gets_new_key(self):
        handler, session, _, _ = _setup()
        key = session.checkout.idempotency_key
        handler.handle()
        assert session.checkout.idempotency_key != key


class TestPlaceOrderValidation:

    @pytest.mark.parametrize("address,phone", [("", "555-0100"), ("Calle 1", ""), ("", "")])
    def test_missing_fields_never_write(self, address, phone):
        handler, _, order_repo, notifier = _setup(address=address, phone=phone)

        with pytest.raises(ValidationError):
            handler.handle()

        assert order_repo.add_calls == 0
        note = notifier.current()
        assert note.kind is NotificationKind.ERROR
        assert "address and phone" in note.message

    def test_empty_cart_never_writes(self):
        handler, _, order_repo, notifier = _setup(fill_cart=False)
        with pytest.raises(ValidationError, match="Cart is empty"):
            handler.handle()
        assert order_repo.add_calls == 0
        assert notifier.current().kind is NotificationKind.ERROR

    def test_store_unavailable(self):
        _, session, _, notifier = _setup()
        handler = PlaceOrderHandler(session, None, notifier)
        with pytest.raises(ValidationError, match="unavailable"):
            handler.handle()
        assert session.checkout.order_placed is False


class TestPlaceOrderFailures:

    def test_write_failure_notifies_and_keeps_form(self):
        handler, session, order_repo, notifier = _setup()
        order_repo.fail_writes = True

        assert handler.handle() is False

        assert order_repo.list_all() == []
        assert session.checkout.order_placed is False
        assert session.checkout.address == "Av. Juárez 100, Centro"
        note = notifier.current()
        assert note.message == "Could not send the order, please try again."
        assert note.kind is NotificationKind.ERROR

    def test_no_automatic_retry(self):
        handler, _, order_repo, _ = _setup()
        order_repo.fail_writes = True
        handler.handle()
        assert order_repo.add_calls == 1

    def test_manual_retry_after_failure_succeeds(self):
        handler, session, order_repo, _ = _setup()
        order_repo.fail_writes = True
        handler.handle()
        order_repo.fail_writes = False

        assert handler.handle() is True
        assert len(order_repo.list_all()) == 1


class TestPlaceOrderDeduplication:

    def test_retry_after_lost_ack_does_not_double_submit(self):
        handler, session, order_repo, notifier = _setup()
        order_repo.lose_ack = True
        assert handler.handle() is False  # the write landed, the reply did not

        order_repo.lose_ack = False
        assert handler.handle() is True

        assert len(order_repo.list_all()) == 1
        assert session.checkout.order_placed is True
        assert notifier.current().message == "Order already received."

    def test_separate_checkouts_create_separate_orders(self):
        handler, session, order_repo, _ = _setup()
        handler.handle()
        session.checkout.address = "Calle 2"
        session.checkout.phone = "555-0200"
        handler.handle()
        assert len(order_repo.list_all()) == 2

    def test_changed_cart_after_lost_ack_is_a_new_order(self):
        handler, session, order_repo, notifier = _setup(address="A")
        order_repo.lose_ack = True
        handler.handle()
        first_key = session.checkout.idempotency_key

        order_repo.lose_ack = False
        AddToCartHandler(session, notifier).handle("2")
        session.checkout.address = "B"
        assert handler.handle() is True

        latest = order_repo.get_by_id(session.checkout.last_order_id)
        assert latest.address == "B"
        assert [(i.product_id, i.quantity.value) for i in latest.items] == [("1", 2), ("2", 2)]
        assert latest.idempotency_key != first_key
        assert notifier.current().message == "Order placed successfully!"

    def test_changed_phone_after_failure_gets_new_key(self):
        handler, session, order_repo, _ = _setup()
        order_repo.fail_writes = True
        handler.handle()
        first_key = session.checkout.idempotency_key

        session.checkout.phone = "555-0999"
        handler.handle()
        assert session.checkout.idempotency_key != first_key

    def test_unchanged_retry_keeps_key(self):
        handler, session, order_repo, _ = _setup()
        order_repo.fail_writes = True
        handler.handle()
        first_key = session.checkout.idempotency_key

        handler.handle()
        assert session.checkout.idempotency_key == first_key
