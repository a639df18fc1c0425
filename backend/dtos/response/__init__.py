"""
Response DTOs

DTOs for outgoing API responses. These decouple the API from database models
and provide a clear contract for what data the API returns.
"""

from .order_response import ErrorResponse, OrderItemResponse, OrderResponse

__all__ = ["ErrorResponse", "OrderItemResponse", "OrderResponse"]
