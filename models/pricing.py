from pydantic import BaseModel, Field

from models.order_request import SelectedOption


class ResolvedLineDTO(BaseModel):
    """One cart line priced against the menu snapshot."""
    menu_item_id: str
    quantity: int
    unit_price_cents: int
    line_total_cents: int
    notes: str | None = None
    selected_options: list[SelectedOption] = Field(default_factory=list)


class CalculatedOrderDTO(BaseModel):
    lines: list[ResolvedLineDTO]
    subtotal_cents: int


class DiscountBreakdownDTO(BaseModel):
    promo_cents: int = 0
    deal_cents: int = 0
    offers_cents: int = 0
    loyalty_cents: int = 0

    @property
    def total_cents(self) -> int:
        return self.promo_cents + self.deal_cents + self.offers_cents + self.loyalty_cents


class OrderTotalsDTO(BaseModel):
    server_subtotal_cents: int
    total_discount_cents: int
    server_total_cents: int
