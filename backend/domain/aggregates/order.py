"""
Order Aggregate

The Order is the aggregate root for an order and its line items. It is the
only object allowed to change the item list, and it keeps the total price and
the status consistent with the rules below:

- total_price always equals the sum of item subtotals
- status only moves along OrderStatus.allowed_transitions()
- every mutation refreshes updated_at; created_at never changes
"""

from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Optional

from domain.entities.order_item import OrderItem
from domain.exceptions import IllegalStatusTransitionError, InvalidOrderError
from domain.value_objects.order_status import OrderStatus


def _now() -> datetime:
    return datetime.now()


class Order:
    """Aggregate root for a customer order."""

    def __init__(self, customer_id: str):
        """
        Start a new, empty order.

        Args:
            customer_id: Customer identifier (non-blank)

        Raises:
            InvalidOrderError: If customer_id is missing or blank
        """
        if not isinstance(customer_id, str) or not customer_id.strip():
            raise InvalidOrderError("Customer ID is required", field="customer_id")

        now = _now()
        self._id: Optional[str] = None
        self._version: Optional[int] = None
        self._customer_id = customer_id
        self._items: List[OrderItem] = []
        self._total_price = Decimal("0")
        self._status = OrderStatus.CREATED
        self._created_at = now
        self._updated_at = now

    @classmethod
    def restore(
        cls,
        order_id: str,
        customer_id: str,
        items: Iterable[OrderItem],
        status: OrderStatus,
        created_at: datetime,
        updated_at: datetime,
        version: Optional[int] = None,
    ) -> "Order":
        """
        Rebuild a persisted order without treating it as a mutation.

        The total is recomputed from the items rather than trusted from storage.
        """
        order = cls.__new__(cls)
        order._id = order_id
        order._version = version
        order._customer_id = customer_id
        order._items = list(items)
        order._status = OrderStatus(status)
        order._created_at = created_at
        order._updated_at = updated_at
        order._total_price = order._sum_subtotals()
        return order

    @property
    def id(self) -> Optional[str]:
        return self._id

    def assign_id(self, order_id: str) -> None:
        """Record the identifier handed out by storage on first save."""
        if self._id is not None and self._id != order_id:
            raise ValueError(f"Order already has identifier {self._id}")
        self._id = order_id

    @property
    def version(self) -> Optional[int]:
        """Storage version this copy was loaded or last saved at."""
        return self._version

    def record_version(self, version: int) -> None:
        self._version = version

    @property
    def customer_id(self) -> str:
        return self._customer_id

    @property
    def items(self) -> List[OrderItem]:
        """Copy of the item list; changing it does not affect the order."""
        return list(self._items)

    @property
    def item_count(self) -> int:
        return len(self._items)

    @property
    def total_price(self) -> Decimal:
        return self._total_price

    @property
    def status(self) -> OrderStatus:
        return self._status

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def add_item(self, item: OrderItem) -> None:
        """
        Append an item and recompute the total.

        No status check is made here; callers decide when items may be added.
        """
        if not isinstance(item, OrderItem):
            raise InvalidOrderError(f"Expected OrderItem, got {type(item).__name__}", field="items")
        self._items.append(item)
        self._recalculate_total()

    def update_status(self, new_status: OrderStatus) -> None:
        """
        Move the order to new_status.

        Raises:
            InvalidOrderError: If new_status is not a known status
            IllegalStatusTransitionError: If the transition is not allowed
        """
        if not isinstance(new_status, OrderStatus):
            try:
                new_status = OrderStatus.from_string(new_status)
            except ValueError as e:
                raise InvalidOrderError(str(e), field="status")
        if not self._status.can_transition_to(new_status):
            raise IllegalStatusTransitionError(self._status, new_status)
        self._status = new_status
        self._updated_at = _now()

    def _sum_subtotals(self) -> Decimal:
        return sum((item.subtotal for item in self._items), Decimal("0"))

    def _recalculate_total(self) -> None:
        self._total_price = self._sum_subtotals()
        self._updated_at = _now()

    def __repr__(self) -> str:
        return (
            f"Order(id={self._id!r}, customer_id={self._customer_id!r}, "
            f"items={len(self._items)}, total_price={self._total_price}, "
            f"status={self._status.value})"
        )
