"""
API router for order creation.

Receives orders from the customer ordering client and from the merchant
dashboard (manual counter orders). Every price in the request is
re-derived server-side; the request is rejected with a single French error
message when anything does not match.
"""

import logging
import uuid
from datetime import datetime

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from db import get_db_session
from models.order_request import CreateOrderRequest
from services.order import OrderService
from utils.error_handler import handle_service_error

logger = logging.getLogger(__name__)

order_router = APIRouter(prefix="/api", tags=["orders"])

INVALID_BODY_MESSAGE = "Requête invalide"


def generate_correlation_id() -> str:
    """Generate unique correlation ID for request tracing."""
    return f"{datetime.now().strftime('%Y%m%d-%H%M%S')}-{uuid.uuid4().hex[:8]}"


def _describe_validation_error(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{INVALID_BODY_MESSAGE}: {location}" if location else INVALID_BODY_MESSAGE


@order_router.post("/orders")
async def create_order(request: Request):
    """
    Create an order after validating its prices and discounts.

    Request Body (amounts in cents):
        {
            "foodtruck_id": "...",
            "customer_email": "client@example.com",
            "customer_name": "Camille",
            "pickup_time": "2025-06-01T12:30:00+02:00",
            "items": [{"menu_item_id": "...", "quantity": 2, "selected_options": []}],
            "promo_code_id": null, "discount_amount_cents": 0,
            "deal_id": null, "deal_discount_cents": 0,
            "applied_offers": [],
            "total_amount_cents": 2400
        }

    Returns:
        200: {"order_id", "server_total_cents", "status"}
        400: validation failure, {"error": message}
        404: foodtruck not found
        500: order could not be stored
    """
    correlation_id = generate_correlation_id()

    try:
        body = await request.json()
        order_request = CreateOrderRequest.model_validate(body)
    except ValidationError as e:
        logger.warning(f"[{correlation_id}] Body rejected: {e.error_count()} validation error(s)")
        return JSONResponse({"error": _describe_validation_error(e)}, status_code=status.HTTP_400_BAD_REQUEST)
    except ValueError:
        # Malformed JSON or a body that is not UTF-8
        logger.warning(f"[{correlation_id}] Body is not valid JSON")
        return JSONResponse({"error": INVALID_BODY_MESSAGE}, status_code=status.HTTP_400_BAD_REQUEST)

    logger.info(f"[{correlation_id}] Processing order for foodtruck {order_request.foodtruck_id} "
                f"({len(order_request.items)} line(s))")

    async with get_db_session() as session:
        try:
            result = await OrderService.create_order(order_request, session)
        except Exception as e:
            status_code, payload = handle_service_error(e, correlation_id)
            return JSONResponse(payload, status_code=status_code)

    logger.info(f"[{correlation_id}] Order {result.order_id} created ({result.status.value})")
    return result.model_dump(mode="json")
