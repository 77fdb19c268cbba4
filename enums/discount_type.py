from enum import Enum


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"  # discount_value is a percent (0-100)
    FIXED = "fixed"            # discount_value is in cents
