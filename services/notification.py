import logging

import aiohttp

import config
from models.order import OrderDTO
from models.pricing import ResolvedLineDTO
from models.menu_item import MenuItemSnapshot
from utils.clock import to_local
from utils.money import format_euros

logger = logging.getLogger(__name__)


class NotificationService:
    """
    Fire-and-forget calls to the e-mail and push serverless functions.

    Every public method swallows and logs its own failures: an order that is
    already stored must never be reported as failed because of a notification.
    """

    @staticmethod
    def is_configured() -> bool:
        return bool(config.FUNCTIONS_BASE_URL and config.SERVICE_ROLE_KEY)

    @staticmethod
    async def _post_function(function_name: str, payload: dict) -> dict | None:
        url = f"{config.FUNCTIONS_BASE_URL}/functions/v1/{function_name}"
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {config.SERVICE_ROLE_KEY}",
        }
        timeout = aiohttp.ClientTimeout(total=config.NOTIFICATION_TIMEOUT_SECONDS)
        async with aiohttp.ClientSession(timeout=timeout) as http_session:
            async with http_session.post(url, json=payload, headers=headers) as response:
                response.raise_for_status()
                return await response.json(content_type=None)

    @staticmethod
    def build_push_title(auto_accept_orders: bool) -> str:
        return "Nouvelle commande !" if auto_accept_orders else "Nouvelle commande ! A accepter"

    @staticmethod
    def build_push_body(
        order: OrderDTO,
        lines: list[ResolvedLineDTO],
        menu_items: dict[str, MenuItemSnapshot]
    ) -> str:
        """
        Push body shown to the merchant.

        Example:
            "12:30 - 23.50€ - 2x Burger, Frites"
        """
        pickup = to_local(order.pickup_time, config.MERCHANT_TIMEZONE).strftime("%H:%M")
        item_names = []
        for line in lines:
            menu_item = menu_items.get(line.menu_item_id)
            name = menu_item.name if menu_item else line.menu_item_id
            item_names.append(f"{line.quantity}x {name}" if line.quantity > 1 else name)
        return f"{pickup} - {format_euros(order.total_amount_cents)}€ - {', '.join(item_names)}"

    @staticmethod
    async def send_order_confirmation(order_id: str) -> None:
        if not NotificationService.is_configured():
            logger.debug(f"[Notification] Functions endpoint not configured, confirmation for {order_id} skipped")
            return
        try:
            await NotificationService._post_function("send-order-confirmation", {"order_id": order_id})
            logger.info(f"[Notification] Confirmation e-mail requested for order {order_id}")
        except Exception as e:
            logger.error(f"[Notification] Confirmation e-mail failed for order {order_id}: {e}")

    @staticmethod
    async def send_push(foodtruck_id: str, title: str, body: str, data: dict[str, str] | None = None) -> None:
        if not NotificationService.is_configured():
            logger.debug(f"[Notification] Functions endpoint not configured, push to {foodtruck_id} skipped")
            return
        try:
            result = await NotificationService._post_function("send-push-notification", {
                "foodtruck_id": foodtruck_id,
                "title": title,
                "body": body,
                "data": data,
            })
            logger.info(f"[Notification] Push sent to foodtruck {foodtruck_id}: {result}")
        except Exception as e:
            logger.error(f"[Notification] Push to foodtruck {foodtruck_id} failed: {e}")
