"""
Orders API endpoints
"""
from fastapi import APIRouter, Depends
import logging

from constants import HTTPStatus
from dependencies import get_order_service
from dtos.request.order_request import CreateOrderRequest, UpdateOrderStatusRequest
from dtos.response.order_response import ErrorResponse, OrderResponse
from services.interfaces import IOrderService
from utils.error_handlers import handle_api_errors

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    HTTPStatus.BAD_REQUEST: {"model": ErrorResponse},
    HTTPStatus.NOT_FOUND: {"model": ErrorResponse},
}


@router.post(
    "/orders",
    response_model=OrderResponse,
    status_code=HTTPStatus.CREATED,
    responses={HTTPStatus.BAD_REQUEST: {"model": ErrorResponse}},
)
@handle_api_errors("Create order")
def create_order(
    request: CreateOrderRequest,
    service: IOrderService = Depends(get_order_service)
):
    """
    Create a new order.

    The total price is computed from the items; the order starts as CREATED.

    Returns:
        OrderResponse: The stored order with its identifier
    """
    logger.info(f"Received request to create order for customer: {request.customer_id}")
    projection = service.create_order(request.customer_id, request.items)
    return OrderResponse.model_validate(projection)


@router.get("/orders/{order_id}", response_model=OrderResponse, responses=ERROR_RESPONSES)
@handle_api_errors("Get order")
def get_order(order_id: str, service: IOrderService = Depends(get_order_service)):
    """
    Get a specific order with its items

    Args:
        order_id: Order identifier
        service: Order service (injected)

    Raises:
        HTTPException: 404 if the order does not exist
    """
    logger.info(f"Received request to retrieve order: {order_id}")
    return OrderResponse.model_validate(service.get_order(order_id))


@router.patch("/orders/{order_id}/status", response_model=OrderResponse,
              responses={**ERROR_RESPONSES, HTTPStatus.CONFLICT: {"model": ErrorResponse}})
@handle_api_errors("Update order status")
def update_order_status(
    order_id: str,
    request: UpdateOrderStatusRequest,
    service: IOrderService = Depends(get_order_service)
):
    """
    Move an order to a new status.

    Allowed: CREATED → PROCESSING | CANCELLED, PROCESSING → COMPLETED | CANCELLED.

    Raises:
        HTTPException: 400 on a disallowed transition, 404 if the order does not exist,
            409 if the order changed concurrently
    """
    logger.info(f"Received request to update order {order_id} status to: {request.status.value}")
    projection = service.update_order_status(order_id, request.status)
    return OrderResponse.model_validate(projection)
