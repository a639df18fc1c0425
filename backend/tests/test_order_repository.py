from decimal import Decimal

import pytest
from sqlalchemy.orm.exc import StaleDataError

from domain.aggregates.order import Order
from domain.entities.order_item import OrderItem
from domain.value_objects.order_status import OrderStatus
from models import OrderModel, OrderItemModel
from repositories.order_repository import OrderRepository


def _order(*lines):
    order = Order("c1")
    for product_id, qty, price in lines:
        order.add_item(OrderItem(product_id, qty, Decimal(price)))
    return order


def test_first_save_assigns_identifier(db_session):
    repo = OrderRepository(db_session)
    order = _order(("A1", 2, "10.00"))

    saved = repo.save(order)
    db_session.commit()

    assert saved is order
    assert isinstance(order.id, str) and order.id
    assert db_session.query(OrderModel).count() == 1


def test_round_trip_preserves_every_field(db_session, session_factory):
    repo = OrderRepository(db_session)
    order = _order(("A1", 2, "10.00"), ("B2", 1, "20.00"), ("C3", 3, "0.33"))
    repo.save(order)
    db_session.commit()

    with session_factory() as other:
        loaded = OrderRepository(other).find_by_id(order.id)

    assert loaded.customer_id == "c1"
    assert [(i.product_id, i.quantity, i.price) for i in loaded.items] == [
        ("A1", 2, Decimal("10.00")),
        ("B2", 1, Decimal("20.00")),
        ("C3", 3, Decimal("0.33")),
    ]
    assert loaded.total_price == Decimal("40.99")
    assert loaded.status is OrderStatus.CREATED
    assert loaded.created_at == order.created_at
    assert loaded.updated_at == order.updated_at


def test_money_is_stored_exactly(db_session):
    repo = OrderRepository(db_session)
    order = _order(("A1", 1, "12345678.91"))
    repo.save(order)
    db_session.commit()

    row = db_session.query(OrderItemModel).one()
    assert row.price == Decimal("12345678.91")
    assert db_session.query(OrderModel).one().total_price == Decimal("12345678.91")


def test_find_unknown_returns_none(db_session):
    repo = OrderRepository(db_session)
    assert repo.find_by_id("missing") is None
    assert repo.find_by_id_for_update("missing") is None


def test_second_save_updates_header(db_session, session_factory):
    repo = OrderRepository(db_session)
    order = _order(("A1", 1, "5.00"))
    repo.save(order)
    db_session.commit()

    order.update_status(OrderStatus.PROCESSING)
    repo.save(order)
    db_session.commit()

    with session_factory() as other:
        loaded = OrderRepository(other).find_by_id(order.id)
    assert loaded.status is OrderStatus.PROCESSING
    assert loaded.updated_at == order.updated_at
    assert db_session.query(OrderModel).count() == 1


def test_second_save_appends_only_new_items(db_session):
    repo = OrderRepository(db_session)
    order = _order(("A1", 1, "5.00"))
    repo.save(order)
    db_session.commit()

    order.add_item(OrderItem("B2", 2, Decimal("1.25")))
    repo.save(order)
    db_session.commit()

    rows = db_session.query(OrderItemModel).order_by(OrderItemModel.position).all()
    assert [(r.position, r.product_id) for r in rows] == [(0, "A1"), (1, "B2")]
    assert db_session.query(OrderModel).one().total_price == Decimal("7.50")


def test_save_with_unknown_identifier_fails(db_session):
    repo = OrderRepository(db_session)
    order = _order(("A1", 1, "5.00"))
    order.assign_id("does-not-exist")

    with pytest.raises(LookupError):
        repo.save(order)


def test_items_reference_order_by_key(db_session):
    repo = OrderRepository(db_session)
    order = _order(("A1", 1, "5.00"), ("B2", 1, "6.00"))
    repo.save(order)
    db_session.commit()

    order_ids = {row.order_id for row in db_session.query(OrderItemModel).all()}
    assert order_ids == {order.id}
    assert not hasattr(order.items[0], "order")


def test_large_total_is_stored_exactly(db_session, session_factory):
    repo = OrderRepository(db_session)
    order = _order(("A1", 1000, "99999999.99"))
    repo.save(order)
    db_session.commit()

    with session_factory() as other:
        loaded = OrderRepository(other).find_by_id(order.id)
    assert loaded.total_price == Decimal("99999999990.00")
    assert OrderModel.__table__.c.total_price.type.impl.length is None
    assert OrderItemModel.__table__.c.price.type.impl.length == 12


def test_saves_track_row_version(db_session):
    repo = OrderRepository(db_session)
    order = _order(("A1", 1, "5.00"))
    repo.save(order)
    db_session.commit()
    first = order.version

    order.update_status(OrderStatus.PROCESSING)
    repo.save(order)
    db_session.commit()

    assert first is not None
    assert order.version > first
    assert repo.find_by_id(order.id).version == order.version


def test_stale_copy_cannot_overwrite_newer_state(db_session, session_factory):
    repo = OrderRepository(db_session)
    order = _order(("A1", 1, "5.00"))
    repo.save(order)
    db_session.commit()

    with session_factory() as other:
        stale = OrderRepository(other).find_by_id_for_update(order.id)

        order.update_status(OrderStatus.PROCESSING)
        repo.save(order)
        order.update_status(OrderStatus.COMPLETED)
        repo.save(order)
        db_session.commit()

        stale.update_status(OrderStatus.CANCELLED)
        with pytest.raises(StaleDataError):
            OrderRepository(other).save(stale)
        other.rollback()

    with session_factory() as fresh:
        assert OrderRepository(fresh).find_by_id(order.id).status is OrderStatus.COMPLETED


def test_copy_older_than_cached_row_is_rejected(db_session):
    repo = OrderRepository(db_session)
    order = _order(("A1", 1, "5.00"))
    repo.save(order)
    db_session.commit()
    stale = repo.find_by_id(order.id)

    order.update_status(OrderStatus.PROCESSING)
    repo.save(order)
    db_session.commit()

    stale.update_status(OrderStatus.CANCELLED)
    with pytest.raises(StaleDataError):
        repo.save(stale)
