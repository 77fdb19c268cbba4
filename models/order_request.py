"""
Inbound create-order request and its outbound result.

Field names are the snake_case JSON keys sent by the ordering client and the
dashboard. Amounts are integer cents.
"""
from datetime import datetime

from pydantic import BaseModel, Field

from enums.order_status import OrderStatus


class SelectedOption(BaseModel):
    option_id: str
    option_group_id: str | None = None
    name: str
    group_name: str | None = None
    # Full unit price when is_size_option, add-on amount otherwise
    price_modifier_cents: int = 0
    is_size_option: bool = False


class CartLine(BaseModel):
    menu_item_id: str
    quantity: int = Field(ge=1)
    notes: str | None = None
    selected_options: list[SelectedOption] = Field(default_factory=list)

    # Bundle markers (fixed price only on the anchor line of each bundle instance)
    bundle_id: str | None = None
    bundle_name: str | None = None
    bundle_fixed_price_cents: int | None = None
    bundle_supplement_cents: int | None = None
    bundle_free_options: bool = False


class ConsumedItem(BaseModel):
    menu_item_id: str
    quantity: int = Field(ge=0)


class AppliedOfferClaim(BaseModel):
    offer_id: str
    times_applied: int = Field(default=1, ge=1)
    discount_amount_cents: int = Field(default=0, ge=0)
    items_consumed: list[ConsumedItem] = Field(default_factory=list)
    free_item_name: str | None = None


class BundleUsage(BaseModel):
    bundle_id: str
    quantity: int = Field(default=1, ge=1)


class CreateOrderRequest(BaseModel):
    # Required fields are checked by OrderValidationService so the client gets
    # a single "missing field" message instead of a pydantic error list.
    foodtruck_id: str | None = None
    customer_email: str | None = None
    customer_name: str | None = None
    customer_phone: str | None = None
    pickup_time: datetime | None = None
    is_asap: bool = False
    notes: str | None = None
    items: list[CartLine] = Field(default_factory=list)
    total_amount_cents: int | None = None

    # Consent preferences
    email_opt_in: bool | None = None
    sms_opt_in: bool | None = None
    loyalty_opt_in: bool | None = None

    # Promo code
    promo_code_id: str | None = None
    discount_amount_cents: int = 0

    # Legacy single deal
    deal_id: str | None = None
    deal_discount_cents: int = 0
    deal_free_item_name: str | None = None

    # Offer combination chosen by the client
    applied_offers: list[AppliedOfferClaim] = Field(default_factory=list)
    bundles_used: list[BundleUsage] = Field(default_factory=list)

    # Loyalty reward redemption
    use_loyalty_reward: bool = False
    loyalty_customer_id: str | None = None
    loyalty_reward_count: int = Field(default=0, ge=0)

    # Manual order typed in from the dashboard
    force_slot: bool = False


class CreateOrderResultDTO(BaseModel):
    order_id: str
    server_total_cents: int
    status: OrderStatus
