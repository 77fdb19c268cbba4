import logging
from datetime import datetime, time

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

import config
from exceptions.offer import (
    OfferCountMismatchException,
    OfferNotFoundException,
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
from models.offer import OfferDTO
from models.offer_config import (
    BundleConfig,
    BuyXGetYConfig,
    PromoCodeOfferConfig,
    ThresholdDiscountConfig,
    HappyHourConfig,
)
from models.order_request import AppliedOfferClaim, CartLine
from repositories.offer import OfferRepository
from utils.clock import utcnow, to_local
from utils.money import format_euros

logger = logging.getLogger(__name__)


class OfferService:
    """
    Integrity checks for the offer combination chosen by the client.

    Per-offer pricing (bundle price, which item is free) is computed by the
    client-side optimizer and not re-derived here. This service checks what
    can be checked without it: each offer is live and eligible, no cart item
    pays for two offers, and the discounts never exceed the cart.
    """

    @staticmethod
    def _parse_hhmm(value: str) -> time:
        hours, minutes = value.split(':')[:2]
        return time(int(hours), int(minutes))

    @staticmethod
    def is_within_happy_hour(offer_config: HappyHourConfig, moment: datetime, tz_name: str) -> bool:
        """
        Whether moment falls inside the happy-hour window, in the merchant's timezone.

        days_of_week uses 0 = Sunday; an empty list means every day. A window
        whose end is before its start spans midnight.
        """
        local = to_local(moment, tz_name)
        if offer_config.days_of_week and (local.isoweekday() % 7) not in offer_config.days_of_week:
            return False
        start = OfferService._parse_hhmm(offer_config.time_start)
        end = OfferService._parse_hhmm(offer_config.time_end)
        current = local.time().replace(second=0, microsecond=0)
        if start <= end:
            return start <= current < end
        return current >= start or current < end

    @staticmethod
    def check_eligibility(offer: OfferDTO, subtotal_cents: int, now: datetime) -> None:
        """
        Offer-type specific conditions that need no price re-derivation.

        Raises:
            OfferConditionNotMetException
        """
        offer_config = offer.parsed_config()
        match offer_config:
            case ThresholdDiscountConfig():
                if subtotal_cents < offer_config.min_amount_cents:
                    raise OfferConditionNotMetException(
                        offer_id=offer.id,
                        name=offer.name,
                        reason=f"montant minimum de {format_euros(offer_config.min_amount_cents)}€ non atteint"
                    )
            case HappyHourConfig():
                if not OfferService.is_within_happy_hour(offer_config, now, config.MERCHANT_TIMEZONE):
                    raise OfferConditionNotMetException(
                        offer_id=offer.id,
                        name=offer.name,
                        reason=f"valable uniquement de {offer_config.time_start} à {offer_config.time_end}"
                    )
            case BundleConfig() | BuyXGetYConfig() | PromoCodeOfferConfig():
                pass
            case None:
                # Malformed document, already logged by OfferDTO.parsed_config
                pass

    @staticmethod
    def check_consumption(
        claims: list[AppliedOfferClaim],
        lines: list[CartLine],
        menu_items: dict[str, MenuItemSnapshot]
    ) -> None:
        """
        Ensure no menu item is consumed by the offers more times than it is in the cart.

        Raises:
            ConsumedItemNotInCartException
            ItemOverconsumedException
        """
        consumed: dict[str, int] = {}
        for claim in claims:
            for item in claim.items_consumed:
                consumed[item.menu_item_id] = consumed.get(item.menu_item_id, 0) + item.quantity

        in_cart: dict[str, int] = {}
        for line in lines:
            in_cart[line.menu_item_id] = in_cart.get(line.menu_item_id, 0) + line.quantity

        for menu_item_id, consumed_count in consumed.items():
            menu_item = menu_items.get(menu_item_id)
            if menu_item_id not in in_cart:
                raise ConsumedItemNotInCartException(
                    menu_item_id=menu_item_id,
                    name=menu_item.name if menu_item else menu_item_id
                )
            if consumed_count > in_cart[menu_item_id]:
                raise ItemOverconsumedException(
                    menu_item_id=menu_item_id,
                    name=menu_item.name if menu_item else "Article",
                    consumed=consumed_count,
                    in_cart=in_cart[menu_item_id]
                )

    @staticmethod
    async def validate_applied_offers(
        foodtruck_id: str,
        claims: list[AppliedOfferClaim],
        lines: list[CartLine],
        menu_items: dict[str, MenuItemSnapshot],
        subtotal_cents: int,
        session: Session | AsyncSession,
        now: datetime | None = None
    ) -> int:
        """
        Validate the applied-offer claims of an order.

        Args:
            foodtruck_id: Foodtruck the offers must belong to
            claims: Offers claimed by the client, with their consumed items
            lines: Cart lines
            menu_items: Menu snapshot of the cart
            subtotal_cents: Server-computed subtotal
            session: Database session
            now: Reference time as naive UTC

        Returns:
            Sum of the claimed offer discounts in cents (0 without claims)
        """
        if not claims:
            return 0

        now = now or utcnow()
        offer_ids = [claim.offer_id for claim in claims]
        offers = await OfferRepository.get_by_ids(foodtruck_id, offer_ids, session)
        if len(offers) != len(set(offer_ids)):
            raise OfferCountMismatchException(requested=len(set(offer_ids)), found=len(offers))
        offers_by_id = {offer.id: offer for offer in offers}

        for claim in claims:
            offer = offers_by_id.get(claim.offer_id)
            if offer is None:
                raise OfferNotFoundException(offer_id=claim.offer_id)
            if not offer.is_active:
                raise OfferInactiveException(offer_id=offer.id, name=offer.name)
            if offer.start_date is not None and offer.start_date > now:
                raise OfferNotYetActiveException(offer_id=offer.id, name=offer.name)
            if offer.end_date is not None and offer.end_date < now:
                raise OfferExpiredException(offer_id=offer.id, name=offer.name)
            if offer.max_uses is not None and offer.current_uses + claim.times_applied > offer.max_uses:
                raise OfferExhaustedException(offer_id=offer.id, name=offer.name, max_uses=offer.max_uses)
            OfferService.check_eligibility(offer, subtotal_cents, now)

        OfferService.check_consumption(claims, lines, menu_items)

        total_discount = sum(claim.discount_amount_cents for claim in claims)
        if total_discount > subtotal_cents:
            raise TotalDiscountExceedsCartException(total_discount_cents=total_discount, subtotal_cents=subtotal_cents)

        return total_discount
