import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from exceptions.item import (
    OptionUnknownException,
    OptionUnavailableException,
    OptionPriceNegativeException,
    OptionPriceAnomalousException,
)
from models.order_request import CartLine
from repositories.category_option import CategoryOptionRepository

logger = logging.getLogger(__name__)

# A claimed supplement above this multiple of the category default is treated as tampering
ANOMALY_FACTOR = 10


class OptionValidationService:

    @staticmethod
    async def validate_prices(
        lines: list[CartLine],
        session: Session | AsyncSession,
        strict_unknown: bool = False
    ) -> None:
        """
        Check every selected option against its category default.

        Per-item custom prices are legitimate, so only gross anomalies are
        rejected: unavailable options, negative modifiers, and supplements more
        than ANOMALY_FACTOR times a positive default. Size options carry a full
        price and skip both price checks.

        Options without a category default are logged and skipped, unless
        strict_unknown is set.

        Raises:
            OptionUnavailableException
            OptionPriceNegativeException
            OptionPriceAnomalousException
            OptionUnknownException: only with strict_unknown
        """
        option_ids = [opt.option_id for line in lines for opt in line.selected_options if opt.option_id]
        if not option_ids:
            return

        defaults = await CategoryOptionRepository.get_by_ids(option_ids, session)

        for line in lines:
            for selected in line.selected_options:
                default = defaults.get(selected.option_id)
                if default is None:
                    if strict_unknown:
                        raise OptionUnknownException(option_id=selected.option_id, name=selected.name)
                    logger.warning(f"[Options] Option {selected.option_id} ({selected.name}) not found, skipping validation")
                    continue

                if not default.is_available:
                    raise OptionUnavailableException(option_id=default.id, name=default.name)

                if selected.is_size_option:
                    continue

                if selected.price_modifier_cents < 0:
                    raise OptionPriceNegativeException(
                        option_id=default.id,
                        name=default.name,
                        claimed_cents=selected.price_modifier_cents
                    )

                if default.price_modifier_cents > 0 and \
                        selected.price_modifier_cents > default.price_modifier_cents * ANOMALY_FACTOR:
                    raise OptionPriceAnomalousException(
                        option_id=default.id,
                        name=default.name,
                        claimed_cents=selected.price_modifier_cents,
                        default_cents=default.price_modifier_cents
                    )
