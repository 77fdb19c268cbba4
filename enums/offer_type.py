from enum import Enum


class OfferType(str, Enum):
    """
    Promotional rule kinds stored in the offers table.

    The value is the ``offer_type`` column and selects which
    ``OfferConfig`` variant the ``config`` JSON document holds.
    """

    BUNDLE = "bundle"
    BUY_X_GET_Y = "buy_x_get_y"
    PROMO_CODE = "promo_code"
    THRESHOLD_DISCOUNT = "threshold_discount"
    HAPPY_HOUR = "happy_hour"
