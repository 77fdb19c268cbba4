from enum import Enum


class OfferSelectionType(str, Enum):
    """How a bundle / buy-X-get-Y offer picks its qualifying items."""

    SPECIFIC_ITEMS = "specific_items"
    CATEGORY_CHOICE = "category_choice"


class BuyXGetYRewardType(str, Enum):
    FREE = "free"
    DISCOUNT = "discount"


class HappyHourScope(str, Enum):
    ALL = "all"
    CATEGORY = "category"
