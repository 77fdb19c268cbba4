import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from enums.deal_reward_type import DealRewardType
from exceptions.deal import (
    DealDiscountWithoutDealException,
    DealDiscountInvalidException,
    DealNotFoundException,
    DealInactiveException,
    DealConditionNotMetException,
    DealDiscountMismatchException,
    DealDiscountExceedsCartException,
)
from models.deal import DealDTO, ValidatedDealDTO
from models.menu_item import MenuItemSnapshot
from models.order_request import CartLine
from repositories.deal import DealRepository
from repositories.menu_item import MenuItemRepository
from repositories.offer import OfferRepository
from utils.money import percentage_of, within_tolerance

logger = logging.getLogger(__name__)


class DealService:
    """Validation of the legacy single deal/offer discount."""

    @staticmethod
    def count_trigger_items(
        deal: DealDTO,
        lines: list[CartLine],
        menu_items: dict[str, MenuItemSnapshot]
    ) -> int:
        count = 0
        for line in lines:
            menu_item = menu_items.get(line.menu_item_id)
            if menu_item is not None and menu_item.category_id == deal.trigger_category_id:
                count += line.quantity
        return count

    @staticmethod
    async def compute_expected_discount(
        deal: DealDTO,
        cart_total_cents: int,
        session: Session | AsyncSession
    ) -> int:
        match deal.reward_type:
            case DealRewardType.FREE_ITEM:
                if not deal.reward_item_id:
                    return 0
                reward_item = await MenuItemRepository.get_by_id(deal.foodtruck_id, deal.reward_item_id, session)
                return reward_item.base_price_cents if reward_item is not None else 0
            case DealRewardType.PERCENTAGE:
                return percentage_of(cart_total_cents, deal.reward_value or 0)
            case DealRewardType.FIXED:
                return min(deal.reward_value or 0, cart_total_cents)
        return 0

    @staticmethod
    async def validate(
        foodtruck_id: str,
        deal_id: str | None,
        claimed_discount_cents: int,
        lines: list[CartLine],
        menu_items: dict[str, MenuItemSnapshot],
        cart_total_cents: int,
        session: Session | AsyncSession
    ) -> ValidatedDealDTO | None:
        """
        Validate the legacy deal discount.

        The id is looked up in the deals table first. A deal must be active,
        its trigger category must be present trigger_quantity times, and the
        claimed discount must match the reward within one cent.

        When the id is not a deal it is looked up in the offers table. Such
        an offer was selected by the client-side optimizer, so only its active
        flag and a discount no larger than the cart are checked.

        Returns:
            None when no deal is used, else the validated deal discount

        Raises:
            DealDiscountWithoutDealException: discount claimed without a deal id
            DealDiscountInvalidException: deal id with no positive discount
            DealNotFoundException
            DealInactiveException
            DealConditionNotMetException
            DealDiscountMismatchException
            DealDiscountExceedsCartException
        """
        if not deal_id:
            if claimed_discount_cents > 0:
                raise DealDiscountWithoutDealException(claimed_cents=claimed_discount_cents)
            return None

        if claimed_discount_cents <= 0:
            raise DealDiscountInvalidException(deal_id=deal_id, claimed_cents=claimed_discount_cents)

        deal = await DealRepository.get_by_id(foodtruck_id, deal_id, session)
        if deal is None:
            offer = await OfferRepository.get_by_id(foodtruck_id, deal_id, session)
            if offer is None:
                raise DealNotFoundException(deal_id=deal_id)
            if not offer.is_active:
                raise DealInactiveException(deal_id=deal_id, is_offer=True)
            if claimed_discount_cents > cart_total_cents:
                raise DealDiscountExceedsCartException(
                    deal_id=deal_id,
                    claimed_cents=claimed_discount_cents,
                    cart_total_cents=cart_total_cents
                )
            return ValidatedDealDTO(deal_id=deal_id, discount_cents=claimed_discount_cents, is_offer=True)

        if not deal.is_active:
            raise DealInactiveException(deal_id=deal_id)

        trigger_count = DealService.count_trigger_items(deal, lines, menu_items)
        if trigger_count < deal.trigger_quantity:
            raise DealConditionNotMetException(
                deal_id=deal_id,
                deal_name=deal.name,
                category_name=deal.trigger_category_name or "la catégorie requise",
                required=deal.trigger_quantity,
                actual=trigger_count
            )

        expected = await DealService.compute_expected_discount(deal, cart_total_cents, session)
        if not within_tolerance(expected, claimed_discount_cents):
            raise DealDiscountMismatchException(
                deal_id=deal_id,
                expected_cents=expected,
                claimed_cents=claimed_discount_cents
            )

        logger.debug(f"[Deal] Deal {deal.name} validated: {claimed_discount_cents} cents")
        return ValidatedDealDTO(deal_id=deal_id, discount_cents=claimed_discount_cents)
