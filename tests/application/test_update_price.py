"""Integration tests for the admin login and UpdatePrice use cases."""

import pytest

from construapp.application.admin_login import AdminLoginHandler
from construapp.application.notifications import Notifier, NotificationKind
from construapp.application.session import StorefrontSession
from construapp.application.update_price import UpdatePriceHandler
from construapp.domain.exceptions import AccessDeniedError, EntityNotFoundError, ValidationError
from construapp.domain.model.cart import Cart, PricePolicy
from construapp.domain.model.fallback_catalog import fallback_products
from construapp.domain.model.value_objects import Money
from tests.fakes import FakeProductStore


def _setup(admin=True, policy=PricePolicy.SNAPSHOT):
    store = FakeProductStore(fallback_products())
    session = StorefrontSession(
        user_id="user-1",
        products=store.list_all(),
        cart=Cart(price_policy=policy),
    )
    notifier = Notifier()
    if admin:
        session.admin.login("1234")
    handler = UpdatePriceHandler(session, store, notifier)
    return handler, session, store, notifier


class TestAdminLogin:

    def test_wrong_pin(self):
        session = StorefrontSession()
        notifier = Notifier()
        assert AdminLoginHandler(session, notifier).login("0000") is False
        assert notifier.current().message == "Incorrect PIN"
        assert notifier.current().kind is NotificationKind.ERROR
        assert not session.admin.is_admin

    def test_correct_pin(self):
        session = StorefrontSession()
        notifier = Notifier()
        assert AdminLoginHandler(session, notifier).login("1234") is True
        assert notifier.current().message == "Admin mode enabled."
        assert session.admin.is_admin

    def test_logout(self):
        session = StorefrontSession()
        handler = AdminLoginHandler(session, Notifier())
        handler.login("1234")
        handler.logout()
        assert not session.admin.is_admin


class TestUpdatePriceHappyPath:

    def test_local_and_remote_updated(self):
        handler, session, store, notifier = _setup()

        assert handler.handle("1", "249.90") is True

        assert session.find_product("1").price == Money.of("249.90")
        assert store.price_writes == [("1", Money.of("249.90"))]
        assert notifier.current().message == "Price of product 1 updated."

    def test_only_price_field_written(self):
        handler, _, store, _ = _setup()
        handler.handle("1", "249.90")
        stored = store.get_by_id("1")
        assert stored.name == "Cemento Portland Gris"
        assert stored.specs == (("Resistencia", "30 MPa"), ("Peso", "50 kg"))

    def test_zero_is_a_valid_price(self):
        handler, session, _, _ = _setup()
        assert handler.handle("1", "0") is True
        assert session.find_product("1").price == Money.of("0")

    def test_every_edit_is_written(self):
        handler, _, store, _ = _setup()
        for raw in ("2", "24", "249"):
            handler.handle("1", raw)
        assert len(store.price_writes) == 3

    def test_live_policy_reprices_cart(self):
        handler, session, _, _ = _setup(policy=PricePolicy.LIVE)
        session.cart.add(session.find_product("1"))
        handler.handle("1", "300")
        assert session.cart.total() == Money.of("300")


class TestUpdatePriceValidation:

    @pytest.mark.parametrize("raw", ["", "abc", "-5", "nan", "1e400"])
    def test_invalid_input_rejected_not_zeroed(self, raw):
        handler, session, store, notifier = _setup()

        with pytest.raises(ValidationError):
            handler.handle("1", raw)

        assert session.find_product("1").price == Money.of("260.00")
        assert store.price_writes == []
        assert notifier.current().kind is NotificationKind.ERROR

    def test_requires_admin_mode(self):
        handler, _, store, _ = _setup(admin=False)
        with pytest.raises(AccessDeniedError):
            handler.handle("1", "100")
        assert store.price_writes == []

    def test_unknown_product(self):
        handler, _, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            handler.handle("404", "100")

    def test_read_only_without_store(self):
        _, session, _, notifier = _setup()
        handler = UpdatePriceHandler(session, None, notifier)
        with pytest.raises(ValidationError, match="read-only"):
            handler.handle("1", "100")


class TestUpdatePriceFailure:

    def test_failed_write_reverts_local_price(self):
        handler, session, store, notifier = _setup()
        store.fail_writes = True

        assert handler.handle("1", "999") is False

        assert session.find_product("1").price == Money.of("260.00")
        note = notifier.current()
        assert note.message == "Could not save the price."
        assert note.kind is NotificationKind.ERROR

    def test_failed_write_reverts_live_cart_price(self):
        handler, session, store, _ = _setup(policy=PricePolicy.LIVE)
        session.cart.add(session.find_product("1"))
        store.fail_writes = True

        handler.handle("1", "999")

        assert session.cart.total() == Money.of("260.00")
