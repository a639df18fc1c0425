"""
Internal Order DTOs

Plain-data types passed between the order service and its callers.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional, Tuple


@dataclass(frozen=True)
class NewOrderItem:
    """
    Internal DTO for one requested order line.

    Used when the order service is called without going through the API.
    """

    product_id: str
    quantity: int
    price: Decimal


@dataclass(frozen=True)
class OrderItemProjection:
    """Flattened view of one order line."""

    product_id: str
    quantity: int
    price: Decimal
    subtotal: Decimal


@dataclass(frozen=True)
class OrderProjection:
    """
    Read-only view of an order returned by the order service.

    Holds no behaviour and no reference to the aggregate it was built from.
    """

    id: Optional[str]
    customer_id: str
    items: Tuple[OrderItemProjection, ...]
    total_price: Decimal
    status: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_aggregate(cls, order) -> "OrderProjection":
        """Snapshot an Order aggregate."""
        return cls(
            id=order.id,
            customer_id=order.customer_id,
            items=tuple(
                OrderItemProjection(
                    product_id=item.product_id,
                    quantity=item.quantity,
                    price=item.price,
                    subtotal=item.subtotal,
                )
                for item in order.items
            ),
            total_price=order.total_price,
            status=order.status.value,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )
