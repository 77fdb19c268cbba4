import logging

from exceptions.item import UnknownItemException
from exceptions.order import TotalMismatchException
from models.menu_item import MenuItemSnapshot
from models.order_request import CartLine
from models.pricing import ResolvedLineDTO, CalculatedOrderDTO, DiscountBreakdownDTO, OrderTotalsDTO
from utils.money import clamp_non_negative, within_tolerance

logger = logging.getLogger(__name__)


class PricingService:
    """Server-side price computation for cart lines and order totals."""

    @staticmethod
    def resolve_unit_price(line: CartLine, menu_item: MenuItemSnapshot) -> int:
        """
        Compute the true unit price (cents) of one cart line.

        Pricing rules:
        1. Bundle line: bundle fixed price (anchor line only) + bundle supplement,
           plus non-size option modifiers unless the bundle waives options.
           Size options never set the base price of a bundle line.
        2. Line with a size option: the size option carries the full unit price,
           other options are added on top.
        3. Otherwise: menu base price + every option modifier.

        Several size options on one line are added together (no rejection).

        Example:
            size option 1200 + supplement 150 -> 1350, whatever the base price

        Args:
            line: Cart line as sent by the client
            menu_item: Authoritative menu snapshot for line.menu_item_id

        Returns:
            Unit price in cents
        """
        options = line.selected_options
        supplements_total = sum(opt.price_modifier_cents for opt in options if not opt.is_size_option)

        if line.bundle_id is not None:
            unit_price = (line.bundle_fixed_price_cents or 0) + (line.bundle_supplement_cents or 0)
            if not line.bundle_free_options:
                unit_price += supplements_total
            return unit_price

        size_options = [opt for opt in options if opt.is_size_option]
        if size_options:
            return sum(opt.price_modifier_cents for opt in size_options) + supplements_total

        return menu_item.base_price_cents + supplements_total

    @staticmethod
    def calculate_order(
        lines: list[CartLine],
        menu_items: dict[str, MenuItemSnapshot]
    ) -> CalculatedOrderDTO:
        """
        Resolve every line and sum the subtotal.

        Raises:
            UnknownItemException: a line references an item missing from the snapshot
        """
        resolved_lines = []
        subtotal = 0
        for line in lines:
            menu_item = menu_items.get(line.menu_item_id)
            if menu_item is None:
                raise UnknownItemException(menu_item_id=line.menu_item_id)
            unit_price = PricingService.resolve_unit_price(line, menu_item)
            line_total = unit_price * line.quantity
            subtotal += line_total
            resolved_lines.append(ResolvedLineDTO(
                menu_item_id=line.menu_item_id,
                quantity=line.quantity,
                unit_price_cents=unit_price,
                line_total_cents=line_total,
                notes=f"[{line.bundle_name}]" if line.bundle_name else line.notes,
                selected_options=line.selected_options
            ))
        return CalculatedOrderDTO(lines=resolved_lines, subtotal_cents=subtotal)

    @staticmethod
    def reconcile_total(
        subtotal_cents: int,
        discounts: DiscountBreakdownDTO,
        client_total_cents: int
    ) -> OrderTotalsDTO:
        """
        Compare the claimed total with subtotal minus every validated discount.

        The server total is clamped at 0 and may differ from the claimed one
        by at most one cent.

        Raises:
            TotalMismatchException: difference above the tolerance
        """
        total_discount = discounts.total_cents
        server_total = clamp_non_negative(subtotal_cents - total_discount)

        if not within_tolerance(server_total, client_total_cents):
            logger.warning(
                f"[Pricing] Total mismatch: subtotal={subtotal_cents} promo={discounts.promo_cents} "
                f"deal={discounts.deal_cents} offers={discounts.offers_cents} loyalty={discounts.loyalty_cents} "
                f"total_discount={total_discount} server_total={server_total} client_total={client_total_cents} "
                f"difference={server_total - client_total_cents}"
            )
            raise TotalMismatchException(server_total_cents=server_total, client_total_cents=client_total_cents)

        return OrderTotalsDTO(
            server_subtotal_cents=subtotal_cents,
            total_discount_cents=total_discount,
            server_total_cents=server_total
        )
