"""
Internal DTOs

DTOs for service-to-service communication. These are not exposed via the API.
"""

from .order_dto import NewOrderItem, OrderItemProjection, OrderProjection

__all__ = ["NewOrderItem", "OrderItemProjection", "OrderProjection"]
