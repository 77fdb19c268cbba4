"""
Menu item and option exceptions.
"""

from .base import FoodtruckOrderException


class ItemException(FoodtruckOrderException):
    """Base exception for menu-item related errors."""
    pass


class UnknownItemException(ItemException):
    """Raised when a cart line references an item absent from the foodtruck's menu."""

    def __init__(self, menu_item_id: str):
        super().__init__(
            f"L'article avec l'id {menu_item_id} n'existe pas",
            details={'menu_item_id': menu_item_id}
        )
        self.menu_item_id = menu_item_id


class ItemUnavailableException(ItemException):
    """Raised when a referenced item is marked unavailable."""

    def __init__(self, menu_item_id: str, name: str):
        super().__init__(
            f"L'article \"{name}\" n'est plus disponible",
            details={'menu_item_id': menu_item_id, 'name': name}
        )
        self.menu_item_id = menu_item_id
        self.name = name


class OptionException(ItemException):
    """Base exception for selected-option integrity errors."""
    pass


class OptionUnavailableException(OptionException):
    """Raised when a selected option is marked unavailable."""

    def __init__(self, option_id: str, name: str):
        super().__init__(
            f"L'option \"{name}\" n'est plus disponible",
            details={'option_id': option_id, 'name': name}
        )
        self.option_id = option_id
        self.name = name


class OptionPriceNegativeException(OptionException):
    """Raised when a selected option claims a negative price modifier."""

    def __init__(self, option_id: str, name: str, claimed_cents: int):
        super().__init__(
            f"Le prix de l'option \"{name}\" est invalide.",
            details={'option_id': option_id, 'name': name, 'claimed_cents': claimed_cents}
        )
        self.option_id = option_id
        self.claimed_cents = claimed_cents


class OptionPriceAnomalousException(OptionException):
    """Raised when a claimed modifier is far above the category default."""

    def __init__(self, option_id: str, name: str, claimed_cents: int, default_cents: int):
        super().__init__(
            f"Le prix de l'option \"{name}\" est anormalement élevé. Veuillez rafraîchir la page.",
            details={'option_id': option_id, 'name': name,
                     'claimed_cents': claimed_cents, 'default_cents': default_cents}
        )
        self.option_id = option_id
        self.claimed_cents = claimed_cents
        self.default_cents = default_cents


class OptionUnknownException(OptionException):
    """
    Raised for a selected option with no category default.

    Lenient mode (the default) only logs this case: per-item custom options
    do not always map 1:1 onto category options.
    """

    def __init__(self, option_id: str, name: str):
        super().__init__(
            f"L'option \"{name}\" est inconnue",
            details={'option_id': option_id, 'name': name}
        )
        self.option_id = option_id
        self.name = name
