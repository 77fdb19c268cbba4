"""
Pytest configuration and fixtures for tests.

This file is automatically loaded by pytest and provides shared fixtures
and configuration for all tests.
"""

import os
import sys

import pytest

# Add parent directory to Python path so tests can import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Set required environment variables before importing app modules
# These are required for config.py to load properly
os.environ.setdefault('RUNTIME_ENVIRONMENT', 'TEST')
os.environ.setdefault('DB_URL', 'sqlite+aiosqlite:///:memory:')
os.environ.setdefault('FUNCTIONS_BASE_URL', '')
os.environ.setdefault('SERVICE_ROLE_KEY', '')
os.environ.setdefault('MERCHANT_TIMEZONE', 'Europe/Paris')
os.environ.setdefault('LOG_MASK_SECRETS', 'true')

from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from db import Base
from models.category import Category
from models.category_option import CategoryOption
from models.foodtruck import Foodtruck
from models.menu_item import MenuItem

FOODTRUCK_ID = "ft-le-camion"
OTHER_FOODTRUCK_ID = "ft-other"


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture
def engine():
    """Create in-memory SQLite database"""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def session(engine):
    """Create database session"""
    session = Session(engine)
    yield session
    session.rollback()
    session.close()


# ============================================================================
# Menu Fixtures
# ============================================================================

@pytest.fixture
def foodtruck(session):
    """Active foodtruck with manual acceptance and no slot limit"""
    foodtruck = Foodtruck(
        id=FOODTRUCK_ID,
        name="Le Camion",
        is_active=True,
        auto_accept_orders=False,
        loyalty_enabled=True,
        loyalty_points_per_euro=10,
        loyalty_threshold=100,
        loyalty_reward_cents=500
    )
    other = Foodtruck(id=OTHER_FOODTRUCK_ID, name="Autre Camion", is_active=True)
    session.add_all([foodtruck, other])
    session.commit()
    return foodtruck


@pytest.fixture
def menu(session, foodtruck):
    """
    Two categories and a handful of items:

    burger 1000, cheeseburger 1200 (burgers), frites 350, salade 450 (sides),
    epuise 800 (unavailable), etranger 500 (other foodtruck)
    """
    session.add_all([
        Category(id="cat-burgers", foodtruck_id=FOODTRUCK_ID, name="Burgers"),
        Category(id="cat-sides", foodtruck_id=FOODTRUCK_ID, name="Accompagnements"),
    ])
    session.flush()
    items = {
        "burger": MenuItem(id="item-burger", foodtruck_id=FOODTRUCK_ID, category_id="cat-burgers",
                           name="Burger", base_price_cents=1000, is_available=True),
        "cheeseburger": MenuItem(id="item-cheeseburger", foodtruck_id=FOODTRUCK_ID, category_id="cat-burgers",
                                 name="Cheeseburger", base_price_cents=1200, is_available=True),
        "frites": MenuItem(id="item-frites", foodtruck_id=FOODTRUCK_ID, category_id="cat-sides",
                           name="Frites", base_price_cents=350, is_available=True),
        "salade": MenuItem(id="item-salade", foodtruck_id=FOODTRUCK_ID, category_id="cat-sides",
                           name="Salade", base_price_cents=450, is_available=True),
        "epuise": MenuItem(id="item-epuise", foodtruck_id=FOODTRUCK_ID, category_id="cat-burgers",
                           name="Burger du chef", base_price_cents=800, is_available=False),
        "etranger": MenuItem(id="item-etranger", foodtruck_id=OTHER_FOODTRUCK_ID, category_id=None,
                             name="Kebab", base_price_cents=500, is_available=True),
    }
    session.add_all(items.values())
    session.add_all([
        CategoryOption(id="opt-cheddar", category_id="cat-burgers", name="Cheddar",
                       price_modifier_cents=100, is_available=True),
        CategoryOption(id="opt-bacon", category_id="cat-burgers", name="Bacon",
                       price_modifier_cents=150, is_available=False),
        CategoryOption(id="opt-sauce", category_id="cat-sides", name="Sauce maison",
                       price_modifier_cents=0, is_available=True),
        CategoryOption(id="opt-size-xl", category_id="cat-burgers", name="XL",
                       price_modifier_cents=1500, is_available=True),
    ])
    session.commit()
    return {name: item.id for name, item in items.items()}
