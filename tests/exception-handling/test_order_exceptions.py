"""
Tests for the exception hierarchy and its conversion to HTTP answers.
"""
import logging

import pytest

from exceptions import (
    FoodtruckOrderException,
    OrderException,
    ItemException,
    OptionException,
    PromoCodeException,
    DealException,
    OfferException,
    MissingRequiredFieldException,
    FoodtruckNotFoundException,
    SlotFullException,
    TotalMismatchException,
    OrderPersistenceException,
    OrderCreationFailedException,
    OrderItemsCreationFailedException,
    OptionPriceAnomalousException,
    PromoCodeExhaustedException,
    DealConditionNotMetException,
    ItemOverconsumedException,
    PickupInPastException,
)
from utils.error_handler import handle_service_error, UNEXPECTED_ERROR_MESSAGE


class TestExceptionHierarchy:
    """Every rejection is catchable through the domain base classes."""

    @pytest.mark.parametrize("exception, base", [
        (MissingRequiredFieldException(fields=["items"]), OrderException),
        (OptionPriceAnomalousException(option_id="o", name="Cheddar", claimed_cents=5000, default_cents=100), OptionException),
        (OptionPriceAnomalousException(option_id="o", name="Cheddar", claimed_cents=5000, default_cents=100), ItemException),
        (PromoCodeExhaustedException(promo_code_id="p", max_uses=10), PromoCodeException),
        (DealConditionNotMetException(deal_id="d", deal_name="Duo", category_name="Burgers", required=2, actual=1), DealException),
        (ItemOverconsumedException(menu_item_id="i", name="Frites", consumed=2, in_cart=1), OfferException),
        (OrderCreationFailedException(reason="locked"), OrderPersistenceException),
    ])
    def test_domain_base(self, exception, base):
        assert isinstance(exception, base)
        assert isinstance(exception, FoodtruckOrderException)

    def test_status_codes(self):
        assert MissingRequiredFieldException(fields=["items"]).http_status == 400
        assert FoodtruckNotFoundException(foodtruck_id="ft").http_status == 404
        assert OrderItemsCreationFailedException(order_id="o", reason="x").http_status == 500

    def test_details_and_repr(self):
        exc = SlotFullException(pickup_time="2026-06-12T12:30:00", max_orders=5, current_orders=5)

        assert exc.details["max_orders"] == 5
        assert "SlotFullException" in repr(exc)
        assert str(exc) == exc.message

    def test_messages_render_euros(self):
        exc = TotalMismatchException(server_total_cents=2350, client_total_cents=2000)

        assert "23.50€" in exc.message
        assert "20.00€" in exc.message

    def test_overconsumption_message(self):
        exc = ItemOverconsumedException(menu_item_id="i", name="Frites", consumed=3, in_cart=2)

        assert exc.message == "Frites: utilisé 3 fois dans les offres mais seulement 2 dans le panier"


class TestHandleServiceError:
    """Test utils.error_handler.handle_service_error()"""

    def test_client_error(self, caplog):
        with caplog.at_level(logging.WARNING):
            status_code, payload = handle_service_error(PickupInPastException(pickup_time="2026-06-12T10:00:00"), "cid-1")

        assert status_code == 400
        assert payload == {"error": "L'heure de retrait ne peut pas être dans le passé"}
        assert "[cid-1]" in caplog.text

    def test_server_error_logged_as_error(self, caplog):
        status_code, payload = handle_service_error(OrderCreationFailedException(reason="database is locked"))

        assert status_code == 500
        assert payload == {"error": "Impossible de créer la commande"}
        assert any(record.levelno == logging.ERROR for record in caplog.records)

    def test_unexpected_error_hides_details(self, caplog):
        status_code, payload = handle_service_error(KeyError("secret internals"))

        assert status_code == 500
        assert payload == {"error": UNEXPECTED_ERROR_MESSAGE}
        assert "KeyError" in caplog.text
