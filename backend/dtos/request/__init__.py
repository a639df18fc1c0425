"""
Request DTOs

DTOs for incoming API requests. These decouple the API from database models
and provide a clear contract for what data the API expects.
"""

from .order_request import CreateOrderRequest, OrderItemRequest, UpdateOrderStatusRequest

__all__ = ["CreateOrderRequest", "OrderItemRequest", "UpdateOrderStatusRequest"]
