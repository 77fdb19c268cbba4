"""
Models Package

This file ensures all SQLAlchemy models are imported and registered,
which is required for relationships and foreign keys to resolve.
"""

from models.base import Base
from models.foodtruck import Foodtruck
from models.category import Category
from models.menu_item import MenuItem
from models.category_option import CategoryOption
from models.customer import Customer
from models.loyalty_transaction import LoyaltyTransaction
from models.promo_code import PromoCode, PromoCodeUse
from models.deal import Deal, DealUse
from models.offer import Offer, OfferUse
from models.order import Order
from models.order_item import OrderItem, OrderItemOption
