"""
Promo code exceptions.
"""

from .base import FoodtruckOrderException
from utils.money import format_euros


class PromoCodeException(FoodtruckOrderException):
    """Base exception for promo-code errors."""
    pass


class PromoCodeInvalidException(PromoCodeException):
    """Raised when the promo code does not exist for this foodtruck."""

    def __init__(self, promo_code_id: str):
        super().__init__(
            "Code promo invalide",
            details={'promo_code_id': promo_code_id}
        )
        self.promo_code_id = promo_code_id


class PromoCodeInactiveException(PromoCodeException):
    def __init__(self, promo_code_id: str):
        super().__init__(
            "Ce code promo n'est plus actif",
            details={'promo_code_id': promo_code_id}
        )
        self.promo_code_id = promo_code_id


class PromoCodeNotYetActiveException(PromoCodeException):
    def __init__(self, promo_code_id: str):
        super().__init__(
            "Ce code promo n'est pas encore actif",
            details={'promo_code_id': promo_code_id}
        )
        self.promo_code_id = promo_code_id


class PromoCodeExpiredException(PromoCodeException):
    def __init__(self, promo_code_id: str):
        super().__init__(
            "Ce code promo a expiré",
            details={'promo_code_id': promo_code_id}
        )
        self.promo_code_id = promo_code_id


class PromoCodeMinimumNotMetException(PromoCodeException):
    """Raised when the order subtotal is below the code's minimum order amount."""

    def __init__(self, promo_code_id: str, min_order_cents: int, subtotal_cents: int):
        super().__init__(
            f"Commande minimum de {format_euros(min_order_cents)}€ requise pour ce code",
            details={'promo_code_id': promo_code_id, 'min_order_cents': min_order_cents,
                     'subtotal_cents': subtotal_cents}
        )
        self.promo_code_id = promo_code_id
        self.min_order_cents = min_order_cents
        self.subtotal_cents = subtotal_cents


class PromoCodeExhaustedException(PromoCodeException):
    """Raised when the code reached its global usage limit."""

    def __init__(self, promo_code_id: str, max_uses: int):
        super().__init__(
            "Ce code promo a atteint sa limite d'utilisation",
            details={'promo_code_id': promo_code_id, 'max_uses': max_uses}
        )
        self.promo_code_id = promo_code_id
        self.max_uses = max_uses


class PromoCodeAlreadyUsedException(PromoCodeException):
    """Raised when the customer reached the per-customer usage limit."""

    def __init__(self, promo_code_id: str, uses: int, max_uses_per_customer: int):
        super().__init__(
            "Vous avez déjà utilisé ce code promo",
            details={'promo_code_id': promo_code_id, 'uses': uses,
                     'max_uses_per_customer': max_uses_per_customer}
        )
        self.promo_code_id = promo_code_id
        self.uses = uses
        self.max_uses_per_customer = max_uses_per_customer


class PromoCodeDiscountMismatchException(PromoCodeException):
    """Raised when the claimed promo discount differs from the recomputed one."""

    def __init__(self, promo_code_id: str, expected_cents: int, claimed_cents: int):
        super().__init__(
            f"La réduction calculée ({format_euros(expected_cents)}€) ne correspond pas. "
            f"Veuillez rafraîchir la page.",
            details={'promo_code_id': promo_code_id, 'expected_cents': expected_cents,
                     'claimed_cents': claimed_cents}
        )
        self.promo_code_id = promo_code_id
        self.expected_cents = expected_cents
        self.claimed_cents = claimed_cents
