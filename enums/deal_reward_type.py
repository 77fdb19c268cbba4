from enum import Enum


class DealRewardType(str, Enum):
    FREE_ITEM = "free_item"    # price of reward_item_id is given back
    PERCENTAGE = "percentage"  # reward_value percent of the cart
    FIXED = "fixed"            # reward_value cents, capped at the cart total
