"""
Domain Value Objects

Value objects are immutable types that represent descriptive aspects of the domain.
They have no conceptual identity and are compared by their values, not by ID.

Examples:
- OrderStatus: Lifecycle status of an order with its transition table
"""

from .order_status import OrderStatus

__all__ = ["OrderStatus"]
