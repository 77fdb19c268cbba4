from enum import Enum


class LoyaltyTransactionType(str, Enum):
    EARN = "earn"
    REDEEM = "redeem"
