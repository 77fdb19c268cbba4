"""
Error Handler Utility for the HTTP layer

Turns order-engine exceptions into the single-message error body returned to
clients:
- One human-readable message per rejection, never a stack trace
- Status code taken from the exception class (4xx client, 5xx infrastructure)
- Logging of every handled error

Usage in routes:
    from utils.error_handler import handle_service_error

    try:
        result = await OrderService.create_order(request, session)
    except Exception as e:
        status_code, payload = handle_service_error(e)
        return JSONResponse(payload, status_code=status_code)
"""

import logging

from exceptions import FoodtruckOrderException

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "Une erreur inattendue est survenue. Veuillez réessayer."


def handle_service_error(exception: Exception, correlation_id: str | None = None) -> tuple[int, dict]:
    """
    Convert an exception raised while creating an order into an HTTP answer.

    Args:
        exception: Exception raised by a service
        correlation_id: Request id prefixed to the log line

    Returns:
        (status_code, {"error": message})

    Example:
        >>> handle_service_error(PickupInPastException("2024-01-01T10:00:00"))
        (400, {'error': "L'heure de retrait ne peut pas être dans le passé"})
    """
    prefix = f"[{correlation_id}] " if correlation_id else ""

    if isinstance(exception, FoodtruckOrderException):
        if exception.http_status >= 500:
            logger.error(f"{prefix}{type(exception).__name__}: {exception.message} {exception.details}")
        else:
            logger.warning(f"{prefix}Order rejected: {type(exception).__name__} - {exception.message}")
        return exception.http_status, {"error": exception.message}

    return handle_unexpected_error(exception, correlation_id)


def handle_unexpected_error(exception: Exception, correlation_id: str | None = None) -> tuple[int, dict]:
    """
    Handle unexpected exceptions (non-FoodtruckOrderException).

    Note:
        Logs the full traceback; the client only gets a generic message
    """
    prefix = f"[{correlation_id}] " if correlation_id else ""
    logger.error(f"{prefix}Unexpected error: {type(exception).__name__} - {str(exception)}", exc_info=exception)
    return 500, {"error": UNEXPECTED_ERROR_MESSAGE}
