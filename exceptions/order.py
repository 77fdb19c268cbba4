"""
Order-level exceptions: request shape, scheduling, reconciliation and persistence.
"""

from .base import FoodtruckOrderException
from utils.money import format_euros


class OrderException(FoodtruckOrderException):
    """Base exception for order-related errors."""
    pass


class MissingRequiredFieldException(OrderException):
    """Raised when a mandatory request field is absent or empty."""

    def __init__(self, fields: list[str]):
        super().__init__(
            "Champs obligatoires manquants",
            details={'fields': fields}
        )
        self.fields = fields


class FoodtruckNotFoundException(OrderException):
    """Raised when the foodtruck does not exist or is inactive."""

    http_status = 404

    def __init__(self, foodtruck_id: str):
        super().__init__(
            "Foodtruck introuvable",
            details={'foodtruck_id': foodtruck_id}
        )
        self.foodtruck_id = foodtruck_id


class PickupInPastException(OrderException):
    """Raised when the pickup time lies before now (minus the clock-skew tolerance)."""

    def __init__(self, pickup_time: str):
        super().__init__(
            "L'heure de retrait ne peut pas être dans le passé",
            details={'pickup_time': pickup_time}
        )
        self.pickup_time = pickup_time


class SlotFullException(OrderException):
    """Raised when the pickup slot already holds the foodtruck's maximum order count."""

    def __init__(self, pickup_time: str, max_orders: int, current_orders: int):
        super().__init__(
            "Ce créneau horaire est complet. Veuillez choisir un autre horaire.",
            details={'pickup_time': pickup_time, 'max_orders': max_orders, 'current_orders': current_orders}
        )
        self.max_orders = max_orders
        self.current_orders = current_orders


class TotalMismatchException(OrderException):
    """Raised when the claimed total differs from the server total by more than the tolerance."""

    def __init__(self, server_total_cents: int, client_total_cents: int):
        super().__init__(
            f"Le total calculé ({format_euros(server_total_cents)}€) ne correspond pas au total "
            f"envoyé ({format_euros(client_total_cents)}€). Veuillez rafraîchir la page.",
            details={'server_total_cents': server_total_cents, 'client_total_cents': client_total_cents}
        )
        self.server_total_cents = server_total_cents
        self.client_total_cents = client_total_cents


class OrderPersistenceException(OrderException):
    """Base for fatal storage failures while writing the order itself."""

    http_status = 500


class OrderCreationFailedException(OrderPersistenceException):
    """Raised when the order row cannot be inserted."""

    def __init__(self, reason: str):
        super().__init__(
            "Impossible de créer la commande",
            details={'reason': reason}
        )
        self.reason = reason


class OrderItemsCreationFailedException(OrderPersistenceException):
    """Raised when the order lines cannot be inserted (the order row is deleted)."""

    def __init__(self, order_id: str, reason: str):
        super().__init__(
            "Impossible d'enregistrer les articles de la commande",
            details={'order_id': order_id, 'reason': reason}
        )
        self.order_id = order_id
        self.reason = reason
