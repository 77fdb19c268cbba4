"""
OfferService Unit Tests

Tests applied-offer integrity checks: liveness, eligibility, usage limits,
item consumption and the total-discount ceiling.

Run with:
    pytest tests/offer/unit/test_offer_service.py -v
"""

from datetime import datetime, timedelta

import pytest

from enums.offer_type import OfferType
from exceptions.offer import (
    OfferCountMismatchException,
    OfferInactiveException,
    OfferNotYetActiveException,
    OfferExpiredException,
    OfferExhaustedException,
    OfferConditionNotMetException,
    ConsumedItemNotInCartException,
    ItemOverconsumedException,
    TotalDiscountExceedsCartException,
)
from models.menu_item import MenuItemSnapshot
from models.offer import Offer, OfferDTO
from models.offer_config import BundleConfig, HappyHourConfig, BuyXGetYConfig
from models.order_request import AppliedOfferClaim, CartLine, ConsumedItem
from services.offer import OfferService

# Friday 12 June 2026, 12:00 in Paris
NOW = datetime(2026, 6, 12, 10, 0, 0)

MENU_ITEMS = {
    "item-burger": MenuItemSnapshot(id="item-burger", foodtruck_id="ft-le-camion", category_id="cat-burgers",
                                    name="Burger", base_price_cents=1000, is_available=True),
    "item-frites": MenuItemSnapshot(id="item-frites", foodtruck_id="ft-le-camion", category_id="cat-sides",
                                    name="Frites", base_price_cents=350, is_available=True),
}

LINES = [CartLine(menu_item_id="item-burger", quantity=2), CartLine(menu_item_id="item-frites", quantity=1)]


def add_offer(session, offer_id, offer_type=OfferType.BUNDLE, offer_config=None, **kwargs):
    offer = Offer(
        id=offer_id,
        foodtruck_id="ft-le-camion",
        name=kwargs.pop("name", offer_id),
        offer_type=offer_type,
        config=offer_config or {"fixedPriceCents": 1200},
        is_active=kwargs.pop("is_active", True),
        **kwargs
    )
    session.add(offer)
    session.commit()
    return offer


def claim(offer_id, discount, *consumed, times_applied=1):
    return AppliedOfferClaim(
        offer_id=offer_id,
        times_applied=times_applied,
        discount_amount_cents=discount,
        items_consumed=[ConsumedItem(menu_item_id=item_id, quantity=qty) for item_id, qty in consumed]
    )


async def validate(session, claims, subtotal=2350):
    return await OfferService.validate_applied_offers(
        "ft-le-camion", claims, LINES, MENU_ITEMS, subtotal, session, now=NOW
    )


class TestOfferConfigParsing:

    def test_bundle_camel_case(self):
        offer = OfferDTO(id="o", offer_type=OfferType.BUNDLE, config={
            "type": "category_choice",
            "fixedPriceCents": 1500,
            "freeOptions": True,
            "bundleCategories": [{"categoryIds": ["cat-burgers"], "quantity": 1, "supplements": {"item-burger": 200}}]
        })

        parsed = offer.parsed_config()

        assert isinstance(parsed, BundleConfig)
        assert parsed.fixed_price_cents == 1500
        assert parsed.free_options is True
        assert parsed.bundle_categories[0].supplements == {"item-burger": 200}

    def test_buy_x_get_y(self):
        offer = OfferDTO(id="o", offer_type=OfferType.BUY_X_GET_Y,
                         config={"triggerQuantity": 2, "rewardQuantity": 1})
        assert isinstance(offer.parsed_config(), BuyXGetYConfig)

    def test_malformed_config_returns_none(self, caplog):
        offer = OfferDTO(id="o-bad", offer_type=OfferType.THRESHOLD_DISCOUNT, config={"discountValue": 10})

        assert offer.parsed_config() is None
        assert "o-bad" in caplog.text

    def test_malformed_happy_hour_time_returns_none(self, caplog):
        offer = OfferDTO(id="o-17h", offer_type=OfferType.HAPPY_HOUR, config={
            "timeStart": "17h", "timeEnd": "19h", "discountType": "percentage", "discountValue": 10
        })

        assert offer.parsed_config() is None
        assert "o-17h" in caplog.text

    def test_malformed_happy_hour_has_no_extra_condition(self):
        offer = OfferDTO(id="o-17h", offer_type=OfferType.HAPPY_HOUR, config={
            "timeStart": "17h", "timeEnd": "19h", "discountType": "percentage", "discountValue": 10
        })

        OfferService.check_eligibility(offer, 1000, NOW)

    def test_happy_hour_accepts_seconds(self):
        offer = OfferDTO(id="o", offer_type=OfferType.HAPPY_HOUR, config={
            "timeStart": "17:00:00", "timeEnd": "19:30", "discountType": "percentage", "discountValue": 10
        })
        assert isinstance(offer.parsed_config(), HappyHourConfig)


class TestHappyHour:

    def config(self, start, end, days=None):
        return HappyHourConfig(time_start=start, time_end=end, days_of_week=days or [],
                               discount_type="percentage", discount_value=10)

    def test_inside_window_in_merchant_timezone(self):
        assert OfferService.is_within_happy_hour(self.config("11:30", "14:00"), NOW, "Europe/Paris")

    def test_outside_window(self):
        """10:00 UTC is 12:00 in Paris, not in a 10:00-11:00 local window"""
        assert not OfferService.is_within_happy_hour(self.config("10:00", "11:00"), NOW, "Europe/Paris")

    def test_end_is_exclusive(self):
        assert not OfferService.is_within_happy_hour(self.config("11:00", "12:00"), NOW, "Europe/Paris")

    def test_day_filter_sunday_is_zero(self):
        assert OfferService.is_within_happy_hour(self.config("11:00", "13:00", days=[5]), NOW, "Europe/Paris")
        assert not OfferService.is_within_happy_hour(self.config("11:00", "13:00", days=[0, 6]), NOW, "Europe/Paris")

    def test_window_crossing_midnight(self):
        late = datetime(2026, 6, 12, 22, 30)  # 00:30 in Paris
        assert OfferService.is_within_happy_hour(self.config("22:00", "02:00"), late, "Europe/Paris")
        assert not OfferService.is_within_happy_hour(self.config("22:00", "02:00"), NOW, "Europe/Paris")


class TestValidateAppliedOffers:
    """Test OfferService.validate_applied_offers()"""

    @pytest.mark.asyncio
    async def test_no_claims(self, session):
        assert await validate(session, []) == 0

    @pytest.mark.asyncio
    async def test_valid_combination(self, session, foodtruck):
        add_offer(session, "offer-menu")
        add_offer(session, "offer-seuil", OfferType.THRESHOLD_DISCOUNT,
                  {"minAmountCents": 2000, "discountType": "fixed", "discountValue": 200})

        total = await validate(session, [
            claim("offer-menu", 150, ("item-burger", 1), ("item-frites", 1)),
            claim("offer-seuil", 200),
        ])

        assert total == 350

    @pytest.mark.asyncio
    async def test_missing_offer(self, session, foodtruck):
        add_offer(session, "offer-menu")

        with pytest.raises(OfferCountMismatchException) as exc_info:
            await validate(session, [claim("offer-menu", 100), claim("offer-ghost", 100)])

        assert exc_info.value.requested == 2
        assert exc_info.value.found == 1

    @pytest.mark.asyncio
    async def test_same_offer_claimed_twice_counts_once(self, session, foodtruck):
        add_offer(session, "offer-menu")

        total = await validate(session, [claim("offer-menu", 100), claim("offer-menu", 100)])

        assert total == 200

    @pytest.mark.asyncio
    async def test_inactive(self, session, foodtruck):
        add_offer(session, "offer-menu", is_active=False)

        with pytest.raises(OfferInactiveException):
            await validate(session, [claim("offer-menu", 100)])

    @pytest.mark.asyncio
    async def test_not_yet_active(self, session, foodtruck):
        add_offer(session, "offer-menu", start_date=NOW + timedelta(hours=1))

        with pytest.raises(OfferNotYetActiveException):
            await validate(session, [claim("offer-menu", 100)])

    @pytest.mark.asyncio
    async def test_expired(self, session, foodtruck):
        add_offer(session, "offer-menu", end_date=NOW - timedelta(hours=1))

        with pytest.raises(OfferExpiredException):
            await validate(session, [claim("offer-menu", 100)])

    @pytest.mark.asyncio
    async def test_times_applied_counts_against_max_uses(self, session, foodtruck):
        add_offer(session, "offer-menu", max_uses=10, current_uses=9)

        await validate(session, [claim("offer-menu", 100)])
        with pytest.raises(OfferExhaustedException):
            await validate(session, [claim("offer-menu", 200, times_applied=2)])

    @pytest.mark.asyncio
    async def test_threshold_not_met(self, session, foodtruck):
        add_offer(session, "offer-seuil", OfferType.THRESHOLD_DISCOUNT,
                  {"minAmountCents": 3000, "discountType": "fixed", "discountValue": 200},
                  name="Dès 30€")

        with pytest.raises(OfferConditionNotMetException) as exc_info:
            await validate(session, [claim("offer-seuil", 200)])

        assert "30.00" in exc_info.value.message
        assert "Dès 30€" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_happy_hour_outside_window(self, session, foodtruck):
        add_offer(session, "offer-hh", OfferType.HAPPY_HOUR,
                  {"timeStart": "17:00", "timeEnd": "19:00", "discountType": "percentage", "discountValue": 20})

        with pytest.raises(OfferConditionNotMetException) as exc_info:
            await validate(session, [claim("offer-hh", 200)])

        assert "17:00" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_consumed_item_not_in_cart(self, session, foodtruck):
        add_offer(session, "offer-menu")

        with pytest.raises(ConsumedItemNotInCartException):
            await validate(session, [claim("offer-menu", 100, ("item-salade", 1))])

    @pytest.mark.asyncio
    async def test_item_consumed_by_two_offers(self, session, foodtruck):
        """One frites in the cart cannot pay for two offers"""
        add_offer(session, "offer-menu")
        add_offer(session, "offer-menu-2")

        with pytest.raises(ItemOverconsumedException) as exc_info:
            await validate(session, [
                claim("offer-menu", 100, ("item-frites", 1)),
                claim("offer-menu-2", 100, ("item-frites", 1)),
            ])

        assert exc_info.value.consumed == 2
        assert exc_info.value.in_cart == 1

    @pytest.mark.asyncio
    async def test_total_discount_above_subtotal(self, session, foodtruck):
        add_offer(session, "offer-menu")

        with pytest.raises(TotalDiscountExceedsCartException):
            await validate(session, [claim("offer-menu", 2400)], subtotal=2350)

    @pytest.mark.asyncio
    async def test_other_foodtruck_offer_not_found(self, session, foodtruck):
        session.add(Offer(id="offer-etranger", foodtruck_id="ft-other", name="Autre",
                          offer_type=OfferType.BUNDLE, config={}, is_active=True))
        session.commit()

        with pytest.raises(OfferCountMismatchException):
            await validate(session, [claim("offer-etranger", 100)])
