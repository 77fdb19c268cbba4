"""
DealService Unit Tests

Tests the legacy single-deal validation, including the fallback to the
offers table for ids chosen by the client-side optimizer.

Run with:
    pytest tests/deal/unit/test_deal_service.py -v
"""

from datetime import datetime

import pytest
from sqlalchemy import select


from enums.deal_reward_type import DealRewardType
from enums.offer_type import OfferType
from exceptions.deal import (
    DealDiscountWithoutDealException,
    DealDiscountInvalidException,
    DealNotFoundException,
    DealInactiveException,
    DealConditionNotMetException,
    DealDiscountMismatchException,
    DealDiscountExceedsCartException,
)
from models.deal import Deal, DealUse
from models.menu_item import MenuItemSnapshot
from models.offer import Offer
from models.order import Order
from models.order_request import CartLine
from repositories.deal import DealRepository
from services.deal import DealService


@pytest.fixture
def menu_items():
    return {
        "item-burger": MenuItemSnapshot(id="item-burger", foodtruck_id="ft-le-camion", category_id="cat-burgers",
                                        name="Burger", base_price_cents=1000, is_available=True),
        "item-frites": MenuItemSnapshot(id="item-frites", foodtruck_id="ft-le-camion", category_id="cat-sides",
                                        name="Frites", base_price_cents=350, is_available=True),
    }


@pytest.fixture
def deal(session, menu):
    """2 burgers bought, frites offered"""
    deal = Deal(
        id="deal-duo",
        foodtruck_id="ft-le-camion",
        name="Duo burger",
        is_active=True,
        trigger_category_id="cat-burgers",
        trigger_quantity=2,
        reward_type=DealRewardType.FREE_ITEM,
        reward_item_id="item-frites"
    )
    session.add(deal)
    session.commit()
    return deal


def burgers(quantity):
    return [CartLine(menu_item_id="item-burger", quantity=quantity), CartLine(menu_item_id="item-frites", quantity=1)]


class TestValidate:
    """Test DealService.validate()"""

    @pytest.mark.asyncio
    async def test_no_deal(self, session, menu_items):
        assert await DealService.validate("ft-le-camion", None, 0, [], menu_items, 0, session) is None

    @pytest.mark.asyncio
    async def test_discount_without_deal(self, session, menu_items):
        with pytest.raises(DealDiscountWithoutDealException):
            await DealService.validate("ft-le-camion", None, 350, [], menu_items, 2350, session)

    @pytest.mark.asyncio
    async def test_deal_without_discount(self, session, menu_items, deal):
        with pytest.raises(DealDiscountInvalidException):
            await DealService.validate("ft-le-camion", "deal-duo", 0, burgers(2), menu_items, 2350, session)

    @pytest.mark.asyncio
    async def test_free_item_deal(self, session, menu_items, deal):
        result = await DealService.validate("ft-le-camion", "deal-duo", 350, burgers(2), menu_items, 2350, session)

        assert result.deal_id == "deal-duo"
        assert result.discount_cents == 350
        assert result.is_offer is False

    @pytest.mark.asyncio
    async def test_condition_not_met(self, session, menu_items, deal):
        with pytest.raises(DealConditionNotMetException) as exc_info:
            await DealService.validate("ft-le-camion", "deal-duo", 350, burgers(1), menu_items, 1350, session)

        assert exc_info.value.required == 2
        assert exc_info.value.actual == 1
        assert "Burgers" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_discount_mismatch(self, session, menu_items, deal):
        with pytest.raises(DealDiscountMismatchException) as exc_info:
            await DealService.validate("ft-le-camion", "deal-duo", 500, burgers(2), menu_items, 2350, session)

        assert exc_info.value.expected_cents == 350

    @pytest.mark.asyncio
    async def test_inactive_deal(self, session, menu_items, deal):
        deal.is_active = False
        session.commit()

        with pytest.raises(DealInactiveException):
            await DealService.validate("ft-le-camion", "deal-duo", 350, burgers(2), menu_items, 2350, session)

    @pytest.mark.asyncio
    async def test_percentage_deal(self, session, menu_items, deal):
        deal.reward_type = DealRewardType.PERCENTAGE
        deal.reward_value = 10
        session.commit()

        result = await DealService.validate("ft-le-camion", "deal-duo", 235, burgers(2), menu_items, 2350, session)

        assert result.discount_cents == 235

    @pytest.mark.asyncio
    async def test_unknown_id(self, session, menu_items, menu):
        with pytest.raises(DealNotFoundException):
            await DealService.validate("ft-le-camion", "deal-ghost", 350, burgers(2), menu_items, 2350, session)


class TestOfferFallback:
    """Ids absent from the deals table are looked up in the offers table"""

    @pytest.fixture
    def offer(self, session, menu):
        offer = Offer(
            id="offer-menu",
            foodtruck_id="ft-le-camion",
            name="Menu midi",
            offer_type=OfferType.BUNDLE,
            config={"fixedPriceCents": 1500},
            is_active=True
        )
        session.add(offer)
        session.commit()
        return offer

    @pytest.mark.asyncio
    async def test_offer_accepted(self, session, menu_items, offer):
        result = await DealService.validate("ft-le-camion", "offer-menu", 850, burgers(2), menu_items, 2350, session)

        assert result.is_offer is True
        assert result.discount_cents == 850

    @pytest.mark.asyncio
    async def test_inactive_offer(self, session, menu_items, offer):
        offer.is_active = False
        session.commit()

        with pytest.raises(DealInactiveException) as exc_info:
            await DealService.validate("ft-le-camion", "offer-menu", 850, burgers(2), menu_items, 2350, session)

        assert "offre" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_discount_above_cart(self, session, menu_items, offer):
        with pytest.raises(DealDiscountExceedsCartException):
            await DealService.validate("ft-le-camion", "offer-menu", 2400, burgers(2), menu_items, 2350, session)


class TestApply:
    """Test DealRepository.apply()"""

    @pytest.mark.asyncio
    async def test_apply_updates_counters(self, session, deal):
        session.add(Order(id="order-1", foodtruck_id="ft-le-camion", customer_email="client@example.com",
                          customer_name="Client", pickup_time=datetime(2026, 6, 12, 12, 0),
                          subtotal_cents=2350, total_amount_cents=2000))
        session.commit()

        await DealRepository.apply("deal-duo", "order-1", "client@example.com", 350, "Frites", session)
        session.commit()

        session.refresh(deal)
        assert deal.times_used == 1
        assert deal.total_discount_given_cents == 350
        use = session.execute(select(DealUse)).scalar_one()
        assert use.free_item_name == "Frites"
