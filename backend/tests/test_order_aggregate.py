import itertools
from datetime import datetime, timedelta
from decimal import Decimal

import pytest

import domain.aggregates.order as order_module
from domain.aggregates.order import Order
from domain.entities.order_item import OrderItem
from domain.exceptions import IllegalStatusTransitionError, InvalidOrderError
from domain.value_objects.order_status import OrderStatus


@pytest.fixture
def clock(monkeypatch):
    """Deterministic clock: each call advances one second"""
    ticks = (datetime(2024, 1, 1, 12, 0, 0) + timedelta(seconds=n) for n in itertools.count())
    monkeypatch.setattr(order_module, "_now", lambda: next(ticks))


def test_new_order_has_initial_state(clock):
    order = Order("c1")

    assert order.id is None
    assert order.customer_id == "c1"
    assert order.items == []
    assert order.total_price == Decimal("0")
    assert order.status is OrderStatus.CREATED
    assert order.created_at == order.updated_at


@pytest.mark.parametrize("customer_id", ["", "   ", None])
def test_blank_customer_rejected(customer_id):
    with pytest.raises(InvalidOrderError) as exc_info:
        Order(customer_id)
    assert exc_info.value.field == "customer_id"


def test_add_item_calculates_total():
    order = Order("c1")
    order.add_item(OrderItem("A1", 2, Decimal("10.00")))
    order.add_item(OrderItem("B2", 1, Decimal("20.00")))

    assert order.total_price == Decimal("40.00")
    assert [i.product_id for i in order.items] == ["A1", "B2"]


def test_total_is_exact_for_values_floats_get_wrong():
    order = Order("c1")
    order.add_item(OrderItem("A", 1, Decimal("0.10")))
    order.add_item(OrderItem("B", 1, Decimal("0.20")))

    assert order.total_price == Decimal("0.30")


def test_total_is_independent_of_addition_order():
    lines = [
        ("A", 3, Decimal("1.99")),
        ("B", 1, Decimal("0.01")),
        ("C", 7, Decimal("12.50")),
        ("D", 2, Decimal("0")),
    ]
    expected = sum((price * qty for _, qty, price in lines), Decimal("0"))

    for permutation in itertools.permutations(lines):
        order = Order("c1")
        for product_id, qty, price in permutation:
            order.add_item(OrderItem(product_id, qty, price))
        assert order.total_price == expected


def test_add_item_updates_timestamp_only(clock):
    order = Order("c1")
    created = order.created_at

    order.add_item(OrderItem("A1", 1, Decimal("5")))

    assert order.created_at == created
    assert order.updated_at > created


def test_items_returns_copy():
    order = Order("c1")
    order.add_item(OrderItem("A1", 1, Decimal("5")))

    items = order.items
    items.append(OrderItem("X", 1, Decimal("100")))
    items.clear()

    assert len(order.items) == 1
    assert order.total_price == Decimal("5")


def test_add_item_rejects_non_items():
    order = Order("c1")
    with pytest.raises(InvalidOrderError):
        order.add_item(("A1", 1, Decimal("5")))


def test_valid_transition_updates_status(clock):
    order = Order("c1")
    before = order.updated_at

    order.update_status(OrderStatus.PROCESSING)

    assert order.status is OrderStatus.PROCESSING
    assert order.updated_at > before


def test_invalid_transition_raises_and_leaves_order_untouched(clock):
    order = Order("c1")
    before = order.updated_at

    with pytest.raises(IllegalStatusTransitionError) as exc_info:
        order.update_status(OrderStatus.COMPLETED)

    assert exc_info.value.source is OrderStatus.CREATED
    assert exc_info.value.target is OrderStatus.COMPLETED
    assert "CREATED" in str(exc_info.value) and "COMPLETED" in str(exc_info.value)
    assert order.status is OrderStatus.CREATED
    assert order.updated_at == before


def test_full_lifecycle_then_terminal():
    order = Order("c1")
    order.update_status(OrderStatus.PROCESSING)
    order.update_status(OrderStatus.COMPLETED)

    for target in OrderStatus:
        assert not order.status.can_transition_to(target)
    with pytest.raises(IllegalStatusTransitionError):
        order.update_status(OrderStatus.PROCESSING)


def test_status_name_is_stored_as_enum():
    order = Order("c1")
    order.update_status("processing")

    assert order.status is OrderStatus.PROCESSING
    assert order.status.value == "PROCESSING"


def test_unknown_status_name_rejected():
    order = Order("c1")
    with pytest.raises(InvalidOrderError) as exc_info:
        order.update_status("SHIPPED")

    assert exc_info.value.field == "status"
    assert order.status is OrderStatus.CREATED


def test_disallowed_status_name_reports_enum_target():
    order = Order("c1")
    with pytest.raises(IllegalStatusTransitionError) as exc_info:
        order.update_status("COMPLETED")

    assert exc_info.value.target is OrderStatus.COMPLETED
    assert str(exc_info.value) == "Cannot transition from CREATED to COMPLETED"


def test_add_item_has_no_status_check():
    order = Order("c1")
    order.update_status(OrderStatus.PROCESSING)
    order.add_item(OrderItem("A1", 1, Decimal("3.00")))

    assert order.total_price == Decimal("3.00")


def test_restore_recomputes_total_and_keeps_timestamps():
    created = datetime(2024, 1, 1)
    updated = datetime(2024, 1, 2)
    order = Order.restore(
        order_id="o-1",
        customer_id="c1",
        items=[OrderItem("A1", 2, Decimal("1.50"))],
        status=OrderStatus.PROCESSING,
        created_at=created,
        updated_at=updated,
        version=4,
    )

    assert order.id == "o-1"
    assert order.version == 4
    assert order.total_price == Decimal("3.00")
    assert order.status is OrderStatus.PROCESSING
    assert (order.created_at, order.updated_at) == (created, updated)


def test_assign_id_refuses_to_change_identity():
    order = Order("c1")
    order.assign_id("o-1")
    order.assign_id("o-1")
    with pytest.raises(ValueError):
        order.assign_id("o-2")


class TestOrderItem:

    def test_subtotal(self):
        assert OrderItem("A1", 3, Decimal("2.25")).subtotal == Decimal("6.75")

    def test_price_is_normalised_to_decimal(self):
        assert OrderItem("A1", 1, "9.99").price == Decimal("9.99")
        assert OrderItem("A1", 1, 5).price == Decimal("5")
        assert OrderItem("A1", 1, 0.1).price == Decimal("0.1")

    def test_zero_price_allowed(self):
        assert OrderItem("FREE", 2, Decimal("0")).subtotal == Decimal("0")

    @pytest.mark.parametrize(
        "product_id,quantity,price,field",
        [
            ("", 1, Decimal("1"), "product_id"),
            ("  ", 1, Decimal("1"), "product_id"),
            ("A1", 0, Decimal("1"), "quantity"),
            ("A1", -2, Decimal("1"), "quantity"),
            ("A1", 1.5, Decimal("1"), "quantity"),
            ("A1", True, Decimal("1"), "quantity"),
            ("A1", 1, Decimal("-0.01"), "price"),
            ("A1", 1, "abc", "price"),
            ("A1", 1, Decimal("NaN"), "price"),
        ],
    )
    def test_invalid_lines_rejected(self, product_id, quantity, price, field):
        with pytest.raises(InvalidOrderError) as exc_info:
            OrderItem(product_id, quantity, price)
        assert exc_info.value.field == field
