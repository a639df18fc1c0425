"""
OrderStatus Value Object

Immutable representation of an order's position in its lifecycle.
"""

from enum import Enum
from typing import FrozenSet


class OrderStatus(str, Enum):
    """
    Order lifecycle status.

    CREATED is the only initial state. COMPLETED and CANCELLED are terminal.
    """

    CREATED = "CREATED"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    def allowed_transitions(self) -> FrozenSet["OrderStatus"]:
        """
        Statuses reachable from this one in a single step.

        Returns:
            Frozen set of target statuses (empty for terminal states)
        """
        match self:
            case OrderStatus.CREATED:
                return frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED})
            case OrderStatus.PROCESSING:
                return frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED})
            case OrderStatus.COMPLETED | OrderStatus.CANCELLED:
                return frozenset()

    def can_transition_to(self, new_status: "OrderStatus") -> bool:
        """
        Check if transition to new status is valid.

        Args:
            new_status: Target status

        Returns:
            True if transition is allowed
        """
        return new_status in self.allowed_transitions()

    def is_terminal(self) -> bool:
        """Check if this status is terminal (no further transitions)."""
        return not self.allowed_transitions()

    @classmethod
    def from_string(cls, value: str) -> "OrderStatus":
        """
        Create OrderStatus from its name, case-insensitively.

        Raises:
            ValueError: If value is not a valid status
        """
        try:
            return cls(value.strip().upper())
        except (AttributeError, ValueError):
            raise ValueError(f"Invalid order status: {value}")
