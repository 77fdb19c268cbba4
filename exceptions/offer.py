"""
Applied-offer (multi-offer combination) exceptions.
"""

from .base import FoodtruckOrderException


class OfferException(FoodtruckOrderException):
    """Base exception for applied-offer errors."""
    pass


class OfferCountMismatchException(OfferException):
    """Raised when the batch fetch returns fewer offers than were claimed."""

    def __init__(self, requested: int, found: int):
        super().__init__(
            "Une ou plusieurs offres sont invalides",
            details={'requested': requested, 'found': found}
        )
        self.requested = requested
        self.found = found


class OfferNotFoundException(OfferException):
    def __init__(self, offer_id: str):
        super().__init__(
            "Offre non trouvée",
            details={'offer_id': offer_id}
        )
        self.offer_id = offer_id


class OfferInactiveException(OfferException):
    def __init__(self, offer_id: str, name: str):
        super().__init__(
            f"L'offre \"{name}\" n'est plus active",
            details={'offer_id': offer_id}
        )
        self.offer_id = offer_id


class OfferNotYetActiveException(OfferException):
    def __init__(self, offer_id: str, name: str):
        super().__init__(
            f"L'offre \"{name}\" n'est pas encore active",
            details={'offer_id': offer_id}
        )
        self.offer_id = offer_id


class OfferExpiredException(OfferException):
    def __init__(self, offer_id: str, name: str):
        super().__init__(
            f"L'offre \"{name}\" a expiré",
            details={'offer_id': offer_id}
        )
        self.offer_id = offer_id


class OfferExhaustedException(OfferException):
    """Raised when applying the offer would exceed its max_uses."""

    def __init__(self, offer_id: str, name: str, max_uses: int):
        super().__init__(
            f"L'offre \"{name}\" a atteint sa limite d'utilisation",
            details={'offer_id': offer_id, 'max_uses': max_uses}
        )
        self.offer_id = offer_id
        self.max_uses = max_uses


class OfferConditionNotMetException(OfferException):
    """Raised when an offer's eligibility condition (threshold, time window) fails."""

    def __init__(self, offer_id: str, name: str, reason: str):
        super().__init__(
            f"L'offre \"{name}\" ne s'applique pas à cette commande ({reason})",
            details={'offer_id': offer_id, 'reason': reason}
        )
        self.offer_id = offer_id
        self.reason = reason


class ConsumedItemNotInCartException(OfferException):
    """Raised when an offer claims to consume an item absent from the cart."""

    def __init__(self, menu_item_id: str, name: str):
        super().__init__(
            f"L'article \"{name}\" est requis pour une offre mais n'est pas dans le panier",
            details={'menu_item_id': menu_item_id}
        )
        self.menu_item_id = menu_item_id


class ItemOverconsumedException(OfferException):
    """Raised when offers together consume more units of an item than the cart holds."""

    def __init__(self, menu_item_id: str, name: str, consumed: int, in_cart: int):
        super().__init__(
            f"{name}: utilisé {consumed} fois dans les offres mais seulement {in_cart} dans le panier",
            details={'menu_item_id': menu_item_id, 'consumed': consumed, 'in_cart': in_cart}
        )
        self.menu_item_id = menu_item_id
        self.consumed = consumed
        self.in_cart = in_cart


class TotalDiscountExceedsCartException(OfferException):
    """Raised when the summed offer discounts exceed the server subtotal."""

    def __init__(self, total_discount_cents: int, subtotal_cents: int):
        super().__init__(
            "Le total des réductions ne peut pas dépasser le montant du panier",
            details={'total_discount_cents': total_discount_cents, 'subtotal_cents': subtotal_cents}
        )
        self.total_discount_cents = total_discount_cents
        self.subtotal_cents = subtotal_cents
