"""
Order repository: stores and reloads Order aggregates.

The aggregate never points back at rows; this repository maps between the
domain Order and the OrderModel/OrderItemModel tables.
"""

from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from domain.aggregates.order import Order
from domain.entities.order_item import OrderItem
from domain.value_objects.order_status import OrderStatus
from models import OrderModel, OrderItemModel
from .base_repository import BaseRepository


class OrderRepository(BaseRepository[OrderModel]):
    """Repository for Order aggregates."""

    def __init__(self, db: Session):
        super().__init__(db, OrderModel)

    def save(self, order: Order) -> Order:
        """
        Persist the full current state of an order.

        A new order gets its rows inserted and its identifier assigned.
        An existing order has its header updated and any items beyond those
        already stored appended (items are append-only).
        Updates are guarded by the row version, so a copy read before another
        writer committed is rejected rather than overwriting that change.

        Args:
            order: Aggregate to persist

        Returns:
            The same aggregate, now carrying its identifier

        Raises:
            LookupError: If the order has an identifier that is not stored
            StaleDataError: If the stored order changed since this copy was read
        """
        if order.id is None:
            row = OrderModel(
                customer_id=order.customer_id,
                total_price=order.total_price,
                status=order.status.value,
                created_at=order.created_at,
                updated_at=order.updated_at,
            )
            self._append_items(row, order, start=0)
            self.add(row)
            order.assign_id(row.id)
            order.record_version(row.version)
            return order

        row = self.get_row(order.id)
        if row is None:
            raise LookupError(f"Order {order.id} is not stored")
        if order.version is not None and row.version != order.version:
            raise StaleDataError(
                f"Order {order.id} is at version {row.version}, "
                f"this copy was read at version {order.version}"
            )

        row.total_price = order.total_price
        row.status = order.status.value
        row.updated_at = order.updated_at
        self._append_items(row, order, start=len(row.items))
        self.db.flush()
        order.record_version(row.version)
        return order

    def find_by_id(self, order_id: str) -> Optional[Order]:
        """
        Load an order by identifier.

        Returns:
            Reconstituted Order, or None if not found
        """
        row = self.get_row(order_id)
        return self._to_domain(row) if row else None

    def find_by_id_for_update(self, order_id: str) -> Optional[Order]:
        """
        Load an order and lock its row until the transaction ends.

        Returns:
            Reconstituted Order, or None if not found
        """
        row = self.get_row(order_id, for_update=True)
        return self._to_domain(row) if row else None

    @staticmethod
    def _append_items(row: OrderModel, order: Order, start: int) -> None:
        for position, item in enumerate(order.items[start:], start=start):
            row.items.append(
                OrderItemModel(
                    position=position,
                    product_id=item.product_id,
                    quantity=item.quantity,
                    price=item.price,
                )
            )

    @staticmethod
    def _to_domain(row: OrderModel) -> Order:
        """Row → aggregate."""
        return Order.restore(
            order_id=row.id,
            customer_id=row.customer_id,
            items=[
                OrderItem(product_id=i.product_id, quantity=i.quantity, price=i.price)
                for i in row.items
            ],
            status=OrderStatus(row.status),
            created_at=row.created_at,
            updated_at=row.updated_at,
            version=row.version,
        )
