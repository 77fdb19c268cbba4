import logging
from datetime import datetime
from typing import Awaitable, Callable

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

import config
from db import session_commit, session_rollback
from enums.order_status import OrderStatus
from exceptions.order import FoodtruckNotFoundException, OrderCreationFailedException, OrderItemsCreationFailedException
from models.deal import ValidatedDealDTO
from models.foodtruck import FoodtruckDTO
from models.menu_item import MenuItemSnapshot
from models.order import OrderDTO
from models.order_item import OrderItemDTO, OrderItemOptionDTO
from models.order_request import CreateOrderRequest, CreateOrderResultDTO
from models.pricing import CalculatedOrderDTO, DiscountBreakdownDTO, OrderTotalsDTO
from repositories.customer import CustomerRepository
from repositories.deal import DealRepository
from repositories.foodtruck import FoodtruckRepository
from repositories.offer import OfferRepository
from repositories.order import OrderRepository
from repositories.order_item import OrderItemRepository
from repositories.promo_code import PromoCodeRepository
from services.deal import DealService
from services.loyalty import LoyaltyService
from services.menu import MenuService
from services.notification import NotificationService
from services.offer import OfferService
from services.option_validation import OptionValidationService
from services.order_validation import OrderValidationService
from services.pricing import PricingService
from services.promo_code import PromoCodeService
from utils.clock import utcnow, to_naive_utc

logger = logging.getLogger(__name__)


class OrderService:
    """
    Create-order flow: validate, reconcile, persist, then notify.

    Nothing is written until every validator has passed. The order and its
    lines are the only fatal writes; usage ledgers, loyalty and
    notifications are best effort and never fail an order that is stored.
    """

    @staticmethod
    def is_anonymous(customer_email: str) -> bool:
        return customer_email.strip().lower() == config.ANONYMOUS_CUSTOMER_EMAIL

    @staticmethod
    async def create_order(
        request: CreateOrderRequest,
        session: Session | AsyncSession,
        now: datetime | None = None
    ) -> CreateOrderResultDTO:
        """
        Validate a create-order request against the menu and persist it.

        Validation order:
        1. Required fields, foodtruck, slot capacity
        2. Menu snapshot (unknown / unavailable items), pickup time
        3. Option price integrity
        4. Subtotal from the snapshot
        5. Promo code, legacy deal, applied offers, loyalty reward
        6. Total reconciliation (1 cent tolerance)

        Manual dashboard orders (force_slot) skip the slot and pickup checks.

        Args:
            request: Parsed request body
            session: Database session
            now: Reference time as naive UTC (defaults to the current time)

        Returns:
            CreateOrderResultDTO with the order id, server total and status

        Raises:
            FoodtruckOrderException: the first violated rule
        """
        now = now or utcnow()
        OrderValidationService.validate_required_fields(request)

        foodtruck = await FoodtruckRepository.get_active_by_id(request.foodtruck_id, session)
        if foodtruck is None:
            raise FoodtruckNotFoundException(foodtruck_id=request.foodtruck_id)

        if not request.force_slot:
            await OrderValidationService.check_slot_availability(
                foodtruck.id, request.pickup_time, foodtruck.max_orders_per_slot, session
            )

        menu_items = await MenuService.load_snapshot(foodtruck.id, request.items, session)

        if not request.force_slot:
            OrderValidationService.validate_pickup_time(request.pickup_time, now)

        await OptionValidationService.validate_prices(request.items, session)

        calculated = PricingService.calculate_order(request.items, menu_items)
        subtotal = calculated.subtotal_cents

        promo_discount = await PromoCodeService.validate(
            foodtruck.id, request.promo_code_id, request.customer_email,
            subtotal, request.discount_amount_cents, session, now
        )
        validated_deal = await DealService.validate(
            foodtruck.id, request.deal_id, request.deal_discount_cents,
            request.items, menu_items, subtotal, session
        )
        offers_discount = await OfferService.validate_applied_offers(
            foodtruck.id, request.applied_offers, request.items, menu_items, subtotal, session, now
        )
        loyalty_discount = LoyaltyService.compute_reward_discount(
            foodtruck, request.use_loyalty_reward, request.loyalty_reward_count
        )

        discounts = DiscountBreakdownDTO(
            promo_cents=promo_discount or 0,
            deal_cents=validated_deal.discount_cents if validated_deal else 0,
            offers_cents=offers_discount,
            loyalty_cents=loyalty_discount
        )
        totals = PricingService.reconcile_total(subtotal, discounts, request.total_amount_cents)

        status = OrderStatus.CONFIRMED if (foodtruck.auto_accept_orders or request.force_slot) else OrderStatus.PENDING
        order = await OrderService.persist_order(request, calculated, discounts, totals, status, session)
        logger.info(f"[Order] Created order {order.id} for foodtruck {foodtruck.id}: "
                    f"{totals.server_total_cents} cents, status={status.value}")

        await OrderService.record_ledger(request, order, calculated, validated_deal, foodtruck, session)
        await OrderService.run_side_effects(request, order, calculated, menu_items, foodtruck, session)

        return CreateOrderResultDTO(order_id=order.id, server_total_cents=totals.server_total_cents, status=status)

    @staticmethod
    async def persist_order(
        request: CreateOrderRequest,
        calculated: CalculatedOrderDTO,
        discounts: DiscountBreakdownDTO,
        totals: OrderTotalsDTO,
        status: OrderStatus,
        session: Session | AsyncSession
    ) -> OrderDTO:
        """
        Write the order row, then its lines.

        If the lines cannot be written the order row is deleted again so no
        order is left without lines.

        Raises:
            OrderCreationFailedException
            OrderItemsCreationFailedException
        """
        order_dto = OrderDTO(
            foodtruck_id=request.foodtruck_id,
            status=status,
            customer_email=request.customer_email,
            customer_name=request.customer_name,
            customer_phone=request.customer_phone,
            pickup_time=to_naive_utc(request.pickup_time),
            is_asap=request.is_asap,
            notes=request.notes,
            subtotal_cents=totals.server_subtotal_cents,
            total_amount_cents=totals.server_total_cents,
            discount_amount_cents=totals.total_discount_cents,
            promo_code_id=request.promo_code_id,
            promo_discount_cents=discounts.promo_cents,
            deal_id=request.deal_id,
            deal_discount_cents=discounts.deal_cents,
            offers_discount_cents=discounts.offers_cents,
            loyalty_discount_cents=discounts.loyalty_cents
        )
        try:
            order_dto.id = await OrderRepository.create(order_dto, session)
            await session_commit(session)
        except Exception as e:
            await session_rollback(session)
            logger.error(f"[Order] Order insert failed: {e}")
            raise OrderCreationFailedException(reason=str(e))

        try:
            order_item_ids = await OrderItemRepository.create_many([
                OrderItemDTO(
                    order_id=order_dto.id,
                    menu_item_id=line.menu_item_id,
                    quantity=line.quantity,
                    unit_price_cents=line.unit_price_cents,
                    notes=line.notes
                )
                for line in calculated.lines
            ], session)
            await session_commit(session)
        except Exception as e:
            await session_rollback(session)
            logger.error(f"[Order] Order items insert failed for order {order_dto.id}, deleting order: {e}")
            await OrderRepository.delete_by_id(order_dto.id, session)
            await session_commit(session)
            raise OrderItemsCreationFailedException(order_id=order_dto.id, reason=str(e))

        options = [
            OrderItemOptionDTO(
                order_item_id=order_item_id,
                option_id=option.option_id,
                option_group_id=option.option_group_id,
                option_name=option.name,
                option_group_name=option.group_name,
                price_modifier_cents=option.price_modifier_cents,
                is_size_option=option.is_size_option
            )
            for order_item_id, line in zip(order_item_ids, calculated.lines)
            for option in line.selected_options
        ]
        if options:
            await OrderService._best_effort(
                "option snapshots", order_dto.id, session,
                lambda: OrderItemRepository.create_options(options, session)
            )

        return order_dto

    @staticmethod
    async def _best_effort(
        step: str,
        order_id: str,
        session: Session | AsyncSession,
        action: Callable[[], Awaitable[object]]
    ) -> None:
        """Run and commit one post-order step; failures are logged and rolled back."""
        try:
            await action()
            await session_commit(session)
        except Exception as e:
            await session_rollback(session)
            logger.error(f"[Order] {step} failed for order {order_id}: {e}")

    @staticmethod
    async def record_ledger(
        request: CreateOrderRequest,
        order: OrderDTO,
        calculated: CalculatedOrderDTO,
        validated_deal: ValidatedDealDTO | None,
        foodtruck: FoodtruckDTO,
        session: Session | AsyncSession
    ) -> None:
        """Usage ledgers and counters for every discount the order used."""
        email = request.customer_email

        preferences = OrderService._customer_preferences(request)
        if preferences and not OrderService.is_anonymous(email):
            await OrderService._best_effort(
                "customer preferences", order.id, session,
                lambda: CustomerRepository.update_preferences(foodtruck.id, email, preferences, session)
            )

        if request.promo_code_id and order.promo_discount_cents > 0:
            async def apply_promo_code():
                applied = await PromoCodeRepository.apply(
                    request.promo_code_id, order.id, email, order.promo_discount_cents, session
                )
                if not applied:
                    logger.warning(f"[Order] Promo code {request.promo_code_id} exhausted at write time "
                                   f"(order {order.id})")
            await OrderService._best_effort("promo code ledger", order.id, session, apply_promo_code)

        if validated_deal is not None:
            async def apply_deal():
                if validated_deal.is_offer:
                    await OfferRepository.add_use(
                        validated_deal.deal_id, order.id, email, validated_deal.discount_cents,
                        request.deal_free_item_name, session
                    )
                    await OfferRepository.increment_usage(validated_deal.deal_id, 1, validated_deal.discount_cents, session)
                else:
                    await DealRepository.apply(
                        validated_deal.deal_id, order.id, email, validated_deal.discount_cents,
                        request.deal_free_item_name, session
                    )
            await OrderService._best_effort("deal ledger", order.id, session, apply_deal)

        for claim in request.applied_offers:
            async def apply_offer(claim=claim):
                per_use_discount = claim.discount_amount_cents // claim.times_applied
                for _ in range(claim.times_applied):
                    await OfferRepository.add_use(
                        claim.offer_id, order.id, email, per_use_discount, claim.free_item_name, session
                    )
                await OfferRepository.increment_usage(
                    claim.offer_id, claim.times_applied, claim.discount_amount_cents, session
                )
                logger.info(f"[Order] Tracked offer {claim.offer_id} x{claim.times_applied}, "
                            f"discount {claim.discount_amount_cents} cents")
            await OrderService._best_effort(f"offer {claim.offer_id} ledger", order.id, session, apply_offer)

        if request.use_loyalty_reward and request.loyalty_customer_id:
            await OrderService._best_effort(
                "loyalty redemption", order.id, session,
                lambda: LoyaltyService.redeem_reward(
                    foodtruck, request.loyalty_customer_id, order.id, request.loyalty_reward_count, session
                )
            )

        for bundle in request.bundles_used:
            async def track_bundle(bundle=bundle):
                await OfferRepository.add_use(bundle.bundle_id, order.id, email, 0, None, session)
                await OfferRepository.increment_usage(bundle.bundle_id, bundle.quantity, 0, session)
                logger.info(f"[Order] Tracked bundle {bundle.bundle_id} x{bundle.quantity}")
            await OrderService._best_effort(f"bundle {bundle.bundle_id} ledger", order.id, session, track_bundle)

    @staticmethod
    def _customer_preferences(request: CreateOrderRequest) -> dict:
        values = {}
        if request.email_opt_in is None and request.sms_opt_in is None and request.loyalty_opt_in is None:
            return values
        values['phone'] = request.customer_phone
        if request.email_opt_in is not None:
            values['email_opt_in'] = request.email_opt_in
        if request.sms_opt_in is not None:
            values['sms_opt_in'] = request.sms_opt_in
        if request.email_opt_in or request.sms_opt_in:
            values['opted_in_at'] = utcnow()
        if request.loyalty_opt_in is not None:
            values['loyalty_opt_in'] = request.loyalty_opt_in
            if request.loyalty_opt_in:
                values['loyalty_opted_in_at'] = utcnow()
        return values

    @staticmethod
    async def run_side_effects(
        request: CreateOrderRequest,
        order: OrderDTO,
        calculated: CalculatedOrderDTO,
        menu_items: dict[str, MenuItemSnapshot],
        foodtruck: FoodtruckDTO,
        session: Session | AsyncSession
    ) -> None:
        """Confirmation e-mail, loyalty credit and merchant push, after the order is stored."""
        if OrderService.is_anonymous(request.customer_email):
            return

        if order.status == OrderStatus.CONFIRMED:
            await NotificationService.send_order_confirmation(order.id)
            if foodtruck.loyalty_enabled and foodtruck.loyalty_points_per_euro > 0:
                await OrderService._best_effort(
                    "loyalty credit", order.id, session,
                    lambda: LoyaltyService.credit_points(
                        foodtruck, order.id, request.customer_email, order.total_amount_cents, session
                    )
                )

        await NotificationService.send_push(
            foodtruck.id,
            NotificationService.build_push_title(foodtruck.auto_accept_orders),
            NotificationService.build_push_body(order, calculated.lines, menu_items),
            {"order_id": order.id}
        )
