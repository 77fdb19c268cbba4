"""
Typed view of the ``offers.config`` JSON document.

The document is written by the offer-management UI in camelCase and does not
carry its own tag; the offer's ``offer_type`` column selects the variant.
``parse_offer_config`` injects that tag and validates the document against a
pydantic discriminated union, so consumers can match on the concrete class.
"""
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from enums.discount_type import DiscountType
from enums.offer_selection import OfferSelectionType, BuyXGetYRewardType, HappyHourScope
from enums.offer_type import OfferType

# "HH:MM", seconds tolerated
HHMM_PATTERN = r'^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$'


class _ConfigModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra='ignore')


class BundleCategoryChoice(_ConfigModel):
    category_ids: list[str] = Field(default_factory=list)
    quantity: int = 1
    excluded_items: list[str] = Field(default_factory=list)
    # key: "itemId" or "itemId:sizeId"
    supplements: dict[str, int] = Field(default_factory=dict)
    # key: itemId, value: excluded size option ids
    excluded_sizes: dict[str, list[str]] = Field(default_factory=dict)


class BundleConfig(_ConfigModel):
    kind: Literal['bundle'] = 'bundle'
    selection_type: OfferSelectionType = Field(default=OfferSelectionType.CATEGORY_CHOICE, alias='type')
    fixed_price_cents: int = 0
    bundle_categories: list[BundleCategoryChoice] = Field(default_factory=list)
    free_options: bool = False


class BuyXGetYConfig(_ConfigModel):
    kind: Literal['buy_x_get_y'] = 'buy_x_get_y'
    selection_type: OfferSelectionType = Field(default=OfferSelectionType.SPECIFIC_ITEMS, alias='type')
    trigger_quantity: int
    reward_quantity: int
    reward_type: BuyXGetYRewardType = BuyXGetYRewardType.FREE
    reward_value_cents: int | None = None
    trigger_category_ids: list[str] = Field(default_factory=list)
    reward_category_ids: list[str] = Field(default_factory=list)
    trigger_excluded_items: list[str] = Field(default_factory=list)
    reward_excluded_items: list[str] = Field(default_factory=list)


class PromoCodeOfferConfig(_ConfigModel):
    kind: Literal['promo_code'] = 'promo_code'
    code: str
    discount_type: DiscountType
    discount_value: int
    min_order_amount_cents: int | None = None
    max_discount_cents: int | None = None


class ThresholdDiscountConfig(_ConfigModel):
    kind: Literal['threshold_discount'] = 'threshold_discount'
    min_amount_cents: int
    discount_type: DiscountType
    discount_value: int


class HappyHourConfig(_ConfigModel):
    kind: Literal['happy_hour'] = 'happy_hour'
    time_start: str = Field(pattern=HHMM_PATTERN)
    time_end: str = Field(pattern=HHMM_PATTERN)
    days_of_week: list[int] = Field(default_factory=list)  # 0 = Sunday ... 6 = Saturday
    discount_type: DiscountType
    discount_value: int
    applies_to: HappyHourScope = HappyHourScope.ALL
    category_id: str | None = None


OfferConfig = Annotated[
    Union[BundleConfig, BuyXGetYConfig, PromoCodeOfferConfig, ThresholdDiscountConfig, HappyHourConfig],
    Field(discriminator='kind'),
]

_offer_config_adapter = TypeAdapter(OfferConfig)


def parse_offer_config(offer_type: OfferType, raw: dict[str, Any]) -> OfferConfig:
    """
    Validate a stored config document for the given offer type.

    Raises:
        pydantic.ValidationError: document does not match the variant
    """
    return _offer_config_adapter.validate_python({**raw, 'kind': offer_type.value})
