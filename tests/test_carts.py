from datetime import timedelta

import pytest

from storefront.core.exceptions import InvalidQuantityError
from storefront.database.carts import CartDatabase
from storefront.models.cart import CartState
from storefront.services import ledger


class TestCartDatabase:
    """Session-scoped cart storage"""

    def test_new_session_has_empty_cart(self):
        cart_db = CartDatabase()
        session = cart_db.create_session()

        assert cart_db.get_session(session.session_id) is session
        assert session.cart.state == CartState.EMPTY

    def test_apply_stores_transition_result(self, phone_a):
        cart_db = CartDatabase()
        session = cart_db.create_session()
        previous = session.cart

        cart_db.apply(session.session_id, lambda cart: ledger.add_item(cart, phone_a))

        assert ledger.total_items(session.cart) == 1
        assert previous.is_empty

    def test_failed_transition_keeps_cart(self, phone_a):
        cart_db = CartDatabase()
        session = cart_db.create_session()
        cart_db.apply(session.session_id, lambda cart: ledger.add_item(cart, phone_a))

        with pytest.raises(InvalidQuantityError):
            cart_db.apply(session.session_id, lambda cart: ledger.set_quantity(cart, phone_a.id, -1))

        assert session.cart.lines[0].quantity == 1

    def test_apply_to_unknown_session_returns_none(self):
        assert CartDatabase().apply("missing", ledger.clear) is None

    def test_cleanup_removes_idle_sessions(self):
        cart_db = CartDatabase()
        idle = cart_db.create_session()
        active = cart_db.create_session()
        idle.updated_at -= timedelta(hours=25)

        assert cart_db.cleanup_old_sessions(max_age_hours=24) == 1
        assert cart_db.get_session(idle.session_id) is None
        assert cart_db.get_session(active.session_id) is active

    def test_delete_session(self):
        cart_db = CartDatabase()
        session = cart_db.create_session()

        assert cart_db.delete_session(session.session_id) is True
        assert cart_db.delete_session(session.session_id) is False

    def test_creating_session_expires_idle_ones(self, phone_a):
        cart_db = CartDatabase(max_age_hours=1)
        idle = cart_db.create_session()
        active = cart_db.create_session()
        cart_db.apply(active.session_id, lambda cart: ledger.add_item(cart, phone_a))
        idle.updated_at -= timedelta(hours=2)

        fresh = cart_db.create_session()

        assert set(cart_db.sessions) == {active.session_id, fresh.session_id}
        assert cart_db.apply(idle.session_id, ledger.clear) is None

    def test_cart_change_keeps_session_alive(self, phone_a):
        cart_db = CartDatabase(max_age_hours=1)
        session = cart_db.create_session()
        session.updated_at -= timedelta(hours=2)

        cart_db.apply(session.session_id, lambda cart: ledger.add_item(cart, phone_a))
        cart_db.create_session()

        assert cart_db.get_session(session.session_id) is session
