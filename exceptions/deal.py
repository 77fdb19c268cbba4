"""
Legacy deal (single offer) exceptions.
"""

from .base import FoodtruckOrderException
from utils.money import format_euros


class DealException(FoodtruckOrderException):
    """Base exception for legacy deal errors."""
    pass


class DealDiscountWithoutDealException(DealException):
    """Raised when a deal discount is claimed without any deal id."""

    def __init__(self, claimed_cents: int):
        super().__init__(
            "Réduction de formule invalide: aucune formule appliquée",
            details={'claimed_cents': claimed_cents}
        )
        self.claimed_cents = claimed_cents


class DealDiscountInvalidException(DealException):
    """Raised when a deal id is given with a missing or non-positive discount."""

    def __init__(self, deal_id: str, claimed_cents: int | None):
        super().__init__(
            "Réduction de formule invalide",
            details={'deal_id': deal_id, 'claimed_cents': claimed_cents}
        )
        self.deal_id = deal_id
        self.claimed_cents = claimed_cents


class DealNotFoundException(DealException):
    """Raised when the id matches neither a deal nor an offer of this foodtruck."""

    def __init__(self, deal_id: str):
        super().__init__(
            "Formule/offre invalide",
            details={'deal_id': deal_id}
        )
        self.deal_id = deal_id


class DealInactiveException(DealException):
    def __init__(self, deal_id: str, is_offer: bool = False):
        super().__init__(
            "Cette offre n'est plus active" if is_offer else "Cette formule n'est plus active",
            details={'deal_id': deal_id, 'is_offer': is_offer}
        )
        self.deal_id = deal_id


class DealConditionNotMetException(DealException):
    """Raised when the cart holds fewer trigger-category items than the deal requires."""

    def __init__(self, deal_id: str, deal_name: str, category_name: str, required: int, actual: int):
        super().__init__(
            f"La formule \"{deal_name}\" nécessite {required} article(s) de {category_name}. "
            f"Vous en avez {actual}.",
            details={'deal_id': deal_id, 'required': required, 'actual': actual}
        )
        self.deal_id = deal_id
        self.required = required
        self.actual = actual


class DealDiscountMismatchException(DealException):
    """Raised when the claimed deal discount differs from the recomputed one."""

    def __init__(self, deal_id: str, expected_cents: int, claimed_cents: int):
        super().__init__(
            f"La réduction de formule calculée ({format_euros(expected_cents)}€) ne correspond pas. "
            f"Veuillez rafraîchir la page.",
            details={'deal_id': deal_id, 'expected_cents': expected_cents, 'claimed_cents': claimed_cents}
        )
        self.deal_id = deal_id
        self.expected_cents = expected_cents
        self.claimed_cents = claimed_cents


class DealDiscountExceedsCartException(DealException):
    """Raised on the offers-table fallback when the claimed discount exceeds the cart."""

    def __init__(self, deal_id: str, claimed_cents: int, cart_total_cents: int):
        super().__init__(
            "La réduction ne peut pas dépasser le total du panier",
            details={'deal_id': deal_id, 'claimed_cents': claimed_cents, 'cart_total_cents': cart_total_cents}
        )
        self.deal_id = deal_id
        self.claimed_cents = claimed_cents
        self.cart_total_cents = cart_total_cents
