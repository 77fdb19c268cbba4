"""
PricingService Unit Tests

Tests unit price resolution, subtotal calculation and total reconciliation.
Pure computation, no database required.

Run with:
    pytest tests/pricing/unit/test_pricing_service.py -v
"""

import pytest

from exceptions.item import UnknownItemException
from exceptions.order import TotalMismatchException
from models.menu_item import MenuItemSnapshot
from models.order_request import CartLine, SelectedOption
from models.pricing import DiscountBreakdownDTO
from services.pricing import PricingService


def make_item(item_id="item-burger", price=1000):
    return MenuItemSnapshot(
        id=item_id,
        foodtruck_id="ft-le-camion",
        category_id="cat-burgers",
        name="Burger",
        base_price_cents=price,
        is_available=True
    )


def size(price, name="XL"):
    return SelectedOption(option_id=f"size-{name}", name=name, price_modifier_cents=price, is_size_option=True)


def supplement(price, name="Cheddar"):
    return SelectedOption(option_id=f"opt-{name}", name=name, price_modifier_cents=price)


class TestResolveUnitPrice:
    """Test PricingService.resolve_unit_price()"""

    def test_base_price_only(self):
        line = CartLine(menu_item_id="item-burger", quantity=1)
        assert PricingService.resolve_unit_price(line, make_item()) == 1000

    def test_base_price_plus_supplements(self):
        line = CartLine(menu_item_id="item-burger", quantity=1,
                        selected_options=[supplement(100), supplement(150, "Bacon")])
        assert PricingService.resolve_unit_price(line, make_item()) == 1250

    def test_size_option_replaces_base_price(self):
        """Size 1200 + supplement 150 = 1350 whatever the base price"""
        line = CartLine(menu_item_id="item-burger", quantity=1,
                        selected_options=[size(1200), supplement(150)])
        assert PricingService.resolve_unit_price(line, make_item(price=900)) == 1350
        assert PricingService.resolve_unit_price(line, make_item(price=5000)) == 1350

    def test_multiple_size_options_are_added(self):
        line = CartLine(menu_item_id="item-burger", quantity=1,
                        selected_options=[size(1200, "XL"), size(300, "Double")])
        assert PricingService.resolve_unit_price(line, make_item()) == 1500

    def test_bundle_anchor_line(self):
        """The anchor line carries the fixed price, size options never set it"""
        line = CartLine(menu_item_id="item-burger", quantity=1,
                        bundle_id="menu-midi", bundle_name="Menu midi",
                        bundle_fixed_price_cents=1500, bundle_supplement_cents=200,
                        selected_options=[size(1200)])
        assert PricingService.resolve_unit_price(line, make_item()) == 1700

    def test_bundle_secondary_line_is_free(self):
        line = CartLine(menu_item_id="item-frites", quantity=1,
                        bundle_id="menu-midi", bundle_name="Menu midi")
        assert PricingService.resolve_unit_price(line, make_item("item-frites", 350)) == 0

    def test_bundle_supplements_added_unless_free(self):
        paid = CartLine(menu_item_id="item-burger", quantity=1, bundle_id="menu-midi",
                        bundle_fixed_price_cents=1500, selected_options=[supplement(100)])
        free = CartLine(menu_item_id="item-burger", quantity=1, bundle_id="menu-midi",
                        bundle_fixed_price_cents=1500, bundle_free_options=True,
                        selected_options=[supplement(100)])
        assert PricingService.resolve_unit_price(paid, make_item()) == 1600
        assert PricingService.resolve_unit_price(free, make_item()) == 1500


class TestCalculateOrder:
    """Test PricingService.calculate_order()"""

    def test_subtotal_sums_lines(self):
        menu = {"item-burger": make_item(), "item-frites": make_item("item-frites", 350)}
        lines = [
            CartLine(menu_item_id="item-burger", quantity=2),
            CartLine(menu_item_id="item-frites", quantity=1, notes="bien cuites"),
        ]

        result = PricingService.calculate_order(lines, menu)

        assert result.subtotal_cents == 2350
        assert result.lines[0].unit_price_cents == 1000
        assert result.lines[0].line_total_cents == 2000
        assert result.lines[1].notes == "bien cuites"

    def test_bundle_name_becomes_note(self):
        menu = {"item-burger": make_item()}
        lines = [CartLine(menu_item_id="item-burger", quantity=1, notes="sans oignon",
                          bundle_id="menu-midi", bundle_name="Menu midi", bundle_fixed_price_cents=1500)]

        result = PricingService.calculate_order(lines, menu)

        assert result.lines[0].notes == "[Menu midi]"

    def test_unknown_item(self):
        lines = [CartLine(menu_item_id="item-ghost", quantity=1)]

        with pytest.raises(UnknownItemException) as exc_info:
            PricingService.calculate_order(lines, {"item-burger": make_item()})

        assert exc_info.value.menu_item_id == "item-ghost"


class TestReconcileTotal:
    """Test PricingService.reconcile_total()"""

    def test_exact_match(self):
        totals = PricingService.reconcile_total(2350, DiscountBreakdownDTO(promo_cents=350), 2000)

        assert totals.server_total_cents == 2000
        assert totals.total_discount_cents == 350

    def test_one_cent_tolerance_accepted(self):
        totals = PricingService.reconcile_total(2350, DiscountBreakdownDTO(), 2349)
        assert totals.server_total_cents == 2350

    def test_two_cents_rejected(self):
        with pytest.raises(TotalMismatchException) as exc_info:
            PricingService.reconcile_total(2350, DiscountBreakdownDTO(), 2348)

        assert exc_info.value.server_total_cents == 2350
        assert exc_info.value.client_total_cents == 2348
        assert "23.50" in exc_info.value.message

    def test_total_clamped_at_zero(self):
        discounts = DiscountBreakdownDTO(offers_cents=1000, loyalty_cents=500)
        totals = PricingService.reconcile_total(1200, discounts, 0)

        assert totals.server_total_cents == 0
        assert totals.total_discount_cents == 1500

    def test_mismatch_logs_breakdown(self, caplog):
        with pytest.raises(TotalMismatchException):
            PricingService.reconcile_total(2000, DiscountBreakdownDTO(deal_cents=300), 2000)

        assert "deal=300" in caplog.text
        assert "server_total=1700" in caplog.text
