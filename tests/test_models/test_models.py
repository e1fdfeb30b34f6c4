# tests/test_models/test_models.py - schema defaults and constraints

from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from app.crud import user as crud_user
from app.models.models import CartItem, User
from app.models.order import Order, OrderStatus
from app.models.payment import CardType, Payment, PaymentStatus
from app.models.product import Category, ImageCarousel, Product, Review


def test_defaults(session_factory):
    """Defaults applied on insert: role, quantity, status, timestamps."""
    with session_factory() as db:
        db.add(User(uid="u1", email="u1@example.com"))
        db.add(Product(id=1, title="Mascara", price=Decimal("9.99"), images=["http://x/a.png"]))
        db.flush()
        cart = CartItem(user_uid="u1", product_id=1, img_url="http://x/a.png", price=Decimal("9.99"))
        order = Order(user_uid="u1", product_id=1, img_url="http://x/a.png", quantity=2, price=Decimal("9.99"))
        payment = Payment(amount=100, card_type=CardType.visa, card_number="4242", expiry="12/30", cvv="123")
        db.add_all([cart, order, payment])
        db.commit()

        assert db.get(User, "u1").role == "user"
        assert cart.quantity == 1
        assert cart.added_at is not None
        assert order.status == OrderStatus.pending.value
        assert order.ordered_at is not None
        assert payment.status == PaymentStatus.pending
        assert payment.created_at is not None


def test_money_keeps_two_decimals(session_factory):
    with session_factory() as db:
        db.add(Order(user_uid="u1", product_id=1, img_url="x", quantity=1, price=Decimal("19.98")))
        db.commit()
        assert db.query(Order).one().price == Decimal("19.98")


def test_email_is_unique(session_factory):
    with session_factory() as db:
        db.add(User(uid="u1", email="same@example.com"))
        db.commit()
        db.add(User(uid="u2", email="same@example.com"))
        with pytest.raises(IntegrityError):
            db.commit()


def test_associations(session_factory):
    with session_factory() as db:
        product = Product(id=7, title="Lipstick")
        user = User(uid="u1", email="u1@example.com")
        db.add_all([product, user, Category(name="beauty"), ImageCarousel(image_url="http://x/banner.png")])
        db.flush()
        db.add(Review(product_id=7, rating=5, comment="Great", reviewer_name="Ann"))
        db.add(Order(user_uid="u1", product_id=7, img_url="x", quantity=1, price=Decimal("1.00")))
        db.commit()

        db.refresh(product)
        db.refresh(user)
        assert [r.rating for r in product.reviews] == [5]
        assert len(user.orders) == 1
        assert user.orders[0].product.title == "Lipstick"


def test_upsert_user_recovers_from_concurrent_insert(session_factory, monkeypatch):
    with session_factory() as other:
        other.add(User(uid="u1", email="old@example.com"))
        other.commit()

    real_lookup = crud_user.get_user_by_uid
    lookups = []

    def stale_first_lookup(db, uid):
        # The first lookup runs before the other login commits
        lookups.append(uid)
        return None if len(lookups) == 1 else real_lookup(db, uid)

    monkeypatch.setattr(crud_user, "get_user_by_uid", stale_first_lookup)

    with session_factory() as db:
        user, created = crud_user.upsert_user(db, "u1", "new@example.com", "Ann")

        assert created is False
        assert user.email == "new@example.com"
        assert user.name == "Ann"
        assert db.query(User).count() == 1
