from enum import Enum


class OrderStatus(str, Enum):
    PENDING = "pending"        # Waiting for the merchant to accept
    CONFIRMED = "confirmed"    # Accepted (auto-accept or manual dashboard order)
    PREPARING = "preparing"
    READY = "ready"
    PICKED_UP = "picked_up"
    CANCELLED = "cancelled"
