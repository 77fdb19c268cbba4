"""
Custom exceptions for the order pricing & validation engine.

This module provides a hierarchy of custom exceptions for consistent error handling
throughout the application.

Exception Hierarchy:
--------------------
FoodtruckOrderException (base)
├── OrderException
│   ├── MissingRequiredFieldException
│   ├── FoodtruckNotFoundException          (404)
│   ├── PickupInPastException
│   ├── SlotFullException
│   ├── TotalMismatchException
│   └── OrderPersistenceException           (500)
│       ├── OrderCreationFailedException
│       └── OrderItemsCreationFailedException
├── ItemException
│   ├── UnknownItemException
│   ├── ItemUnavailableException
│   └── OptionException
│       ├── OptionUnknownException          (logged only in lenient mode)
│       ├── OptionUnavailableException
│       ├── OptionPriceNegativeException
│       └── OptionPriceAnomalousException
├── PromoCodeException
│   ├── PromoCodeInvalidException
│   ├── PromoCodeInactiveException
│   ├── PromoCodeNotYetActiveException
│   ├── PromoCodeExpiredException
│   ├── PromoCodeMinimumNotMetException
│   ├── PromoCodeExhaustedException
│   ├── PromoCodeAlreadyUsedException
│   └── PromoCodeDiscountMismatchException
├── DealException
│   ├── DealDiscountWithoutDealException
│   ├── DealDiscountInvalidException
│   ├── DealNotFoundException
│   ├── DealInactiveException
│   ├── DealConditionNotMetException
│   ├── DealDiscountMismatchException
│   └── DealDiscountExceedsCartException
└── OfferException
    ├── OfferCountMismatchException
    ├── OfferNotFoundException
    ├── OfferInactiveException
    ├── OfferNotYetActiveException
    ├── OfferExpiredException
    ├── OfferExhaustedException
    ├── OfferConditionNotMetException
    ├── ConsumedItemNotInCartException
    ├── ItemOverconsumedException
    └── TotalDiscountExceedsCartException

Usage:
------
Validators raise specific exceptions and return early on the first violation:
    raise PromoCodeExpiredException(promo_code_id=promo.id)

The HTTP layer turns them into a single error message:
    try:
        result = await OrderService.create_order(request, session)
    except FoodtruckOrderException as e:
        status_code, payload = handle_service_error(e)
"""

from .base import FoodtruckOrderException
from .order import (
    OrderException,
    MissingRequiredFieldException,
    FoodtruckNotFoundException,
    PickupInPastException,
    SlotFullException,
    TotalMismatchException,
    OrderPersistenceException,
    OrderCreationFailedException,
    OrderItemsCreationFailedException,
)
from .item import (
    ItemException,
    UnknownItemException,
    ItemUnavailableException,
    OptionException,
    OptionUnknownException,
    OptionUnavailableException,
    OptionPriceNegativeException,
    OptionPriceAnomalousException,
)
from .promo_code import (
    PromoCodeException,
    PromoCodeInvalidException,
    PromoCodeInactiveException,
    PromoCodeNotYetActiveException,
    PromoCodeExpiredException,
    PromoCodeMinimumNotMetException,
    PromoCodeExhaustedException,
    PromoCodeAlreadyUsedException,
    PromoCodeDiscountMismatchException,
)
from .deal import (
    DealException,
    DealDiscountWithoutDealException,
    DealDiscountInvalidException,
    DealNotFoundException,
    DealInactiveException,
    DealConditionNotMetException,
    DealDiscountMismatchException,
    DealDiscountExceedsCartException,
)
from .offer import (
    OfferException,
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

__all__ = [
    # Base
    'FoodtruckOrderException',

    # Order
    'OrderException',
    'MissingRequiredFieldException',
    'FoodtruckNotFoundException',
    'PickupInPastException',
    'SlotFullException',
    'TotalMismatchException',
    'OrderPersistenceException',
    'OrderCreationFailedException',
    'OrderItemsCreationFailedException',

    # Item / option
    'ItemException',
    'UnknownItemException',
    'ItemUnavailableException',
    'OptionException',
    'OptionUnknownException',
    'OptionUnavailableException',
    'OptionPriceNegativeException',
    'OptionPriceAnomalousException',

    # Promo code
    'PromoCodeException',
    'PromoCodeInvalidException',
    'PromoCodeInactiveException',
    'PromoCodeNotYetActiveException',
    'PromoCodeExpiredException',
    'PromoCodeMinimumNotMetException',
    'PromoCodeExhaustedException',
    'PromoCodeAlreadyUsedException',
    'PromoCodeDiscountMismatchException',

    # Legacy deal
    'DealException',
    'DealDiscountWithoutDealException',
    'DealDiscountInvalidException',
    'DealNotFoundException',
    'DealInactiveException',
    'DealConditionNotMetException',
    'DealDiscountMismatchException',
    'DealDiscountExceedsCartException',

    # Applied offers
    'OfferException',
    'OfferCountMismatchException',
    'OfferNotFoundException',
    'OfferInactiveException',
    'OfferNotYetActiveException',
    'OfferExpiredException',
    'OfferExhaustedException',
    'OfferConditionNotMetException',
    'ConsumedItemNotInCartException',
    'ItemOverconsumedException',
    'TotalDiscountExceedsCartException',
]
