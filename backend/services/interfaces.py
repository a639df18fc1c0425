"""
Service Interfaces

Abstract base classes for service layer following Dependency Inversion Principle.
This allows for dependency injection and easier testing/mocking.
"""

from abc import ABC, abstractmethod
from typing import Iterable

from domain.value_objects.order_status import OrderStatus
from dtos.internal.order_dto import OrderProjection


class IOrderService(ABC):
    """
    Abstract interface for order management services.
    """

    @abstractmethod
    def create_order(self, customer_id: str, items: Iterable) -> OrderProjection:
        """
        Create and persist a new order.

        Args:
            customer_id: Customer identifier
            items: Non-empty sequence of objects with product_id, quantity and price

        Returns:
            Projection of the stored order, including its identifier

        Raises:
            ValidationError: If the customer or any item is invalid, or items is empty
        """
        pass

    @abstractmethod
    def get_order(self, order_id: str) -> OrderProjection:
        """
        Retrieve an order.

        Raises:
            NotFoundError: If no order has this identifier
        """
        pass

    @abstractmethod
    def update_order_status(self, order_id: str, new_status: OrderStatus) -> OrderProjection:
        """
        Move an order to a new status.

        Raises:
            NotFoundError: If no order has this identifier
            InvalidTransitionError: If the current status does not allow it
            ConflictError: If the order changed after it was read
        """
        pass
