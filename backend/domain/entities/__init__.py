"""
Domain Entities

Entities are business objects owned by an aggregate.

Examples:
- OrderItem: A product line inside an Order
"""

from .order_item import OrderItem, to_decimal

__all__ = ["OrderItem", "to_decimal"]
