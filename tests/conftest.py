"""Shared fixtures: a fixed report date and small cellar frames."""

import sys
from datetime import date
from pathlib import Path

import pandas as pd
import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture
def today():
    """Reports are pinned to mid-March 2026."""
    return date(2026, 3, 15)


@pytest.fixture
def consumed_inventory():
    """Five consumed bottles (one outside the 12-month window, one undated) and one still in the cellar."""
    return pd.DataFrame([
        {"id": "c1", "status": "consumed", "consumed_date": "2026-03-02", "wine_type": "red", "region": "Bordeaux"},
        {"id": "c2", "status": "consumed", "consumed_date": "2026-01-10", "wine_type": "red", "region": "Bordeaux"},
        {"id": "c3", "status": "consumed", "consumed_date": "2025-12-20", "wine_type": "white", "region": "Burgundy"},
        {"id": "c4", "status": "consumed", "consumed_date": "2024-05-01", "wine_type": None, "region": None},
        {"id": "c5", "status": "consumed", "consumed_date": None, "wine_type": "white", "region": "Burgundy"},
        {"id": "i1", "status": "in_cellar", "consumed_date": None, "wine_type": "red", "region": "Rioja"},
    ])


@pytest.fixture
def purchases():
    """Purchased bottles across three years; one row has no price."""
    return pd.DataFrame([
        {
            "id": "p1", "status": "in_cellar", "purchase_price_cents": 2000, "quantity": 2,
            "purchase_date": "2026-03-01", "wine_type": "red", "region": "Bordeaux",
            "wine_name": "Chateau A", "custom_name": None,
        },
        {
            "id": "p2", "status": "in_cellar", "purchase_price_cents": 5000, "quantity": 1,
            "purchase_date": "2025-06-15", "wine_type": "white", "region": "Burgundy",
            "wine_name": None, "custom_name": "Meursault",
        },
        {
            "id": "p3", "status": "in_cellar", "purchase_price_cents": None, "quantity": 6,
            "purchase_date": "2026-03-05", "wine_type": "red", "region": "Bordeaux",
            "wine_name": "Gift", "custom_name": None,
        },
        {
            "id": "p4", "status": "consumed", "purchase_price_cents": 1000, "quantity": 3,
            "purchase_date": "2024-02-01", "wine_type": "red", "region": "Bordeaux",
            "wine_name": "House Red", "custom_name": None,
        },
    ])


@pytest.fixture
def vintage_ratings():
    return pd.DataFrame([
        {"score": 90, "vintage": 2015, "region": "Bordeaux"},
        {"score": 94, "vintage": 2015, "region": "Bordeaux"},
        {"score": 88, "vintage": 2015, "region": "Rioja"},
        {"score": 85, "vintage": 2016, "region": "Bordeaux"},
        {"score": 86, "vintage": 2016, "region": "Rioja"},
        {"score": 80, "vintage": 2018, "region": None},
        {"score": 99, "vintage": None, "region": "Bordeaux"},
    ])


@pytest.fixture
def taste_ratings():
    return pd.DataFrame([
        {"score": 92, "wine_type": "red", "region": "Bordeaux", "producer": "Chateau Margaux", "body": "full"},
        {"score": 94, "wine_type": "red", "region": "Bordeaux", "producer": "Chateau Margaux", "body": "full"},
        {"score": 86, "wine_type": "white", "region": "Burgundy", "producer": "Leflaive", "body": "light"},
        {"score": 84, "wine_type": "white", "region": "Burgundy", "producer": None, "body": "light"},
        {"score": 79, "wine_type": "rose", "region": "Provence", "producer": None, "body": None},
    ])


@pytest.fixture
def valued_inventory():
    """In-cellar bottles with and without market values, plus one consumed bottle."""
    return pd.DataFrame([
        {
            "id": "v1", "status": "in_cellar", "quantity": 2, "purchase_price_cents": 5000,
            "current_market_value_cents": 8000, "wine_type": "red", "region": "Bordeaux",
            "country": "France", "wine_name": "Pauillac", "custom_name": None,
        },
        {
            "id": "v2", "status": "in_cellar", "quantity": 1, "purchase_price_cents": 3000,
            "current_market_value_cents": None, "wine_type": "white", "region": None,
            "country": "France", "wine_name": "Chablis", "custom_name": None,
        },
        {
            "id": "v3", "status": "in_cellar", "quantity": 3, "purchase_price_cents": None,
            "current_market_value_cents": None, "wine_type": None, "region": None,
            "country": None, "wine_name": None, "custom_name": "Mystery",
        },
        {
            "id": "v4", "status": "consumed", "quantity": 1, "purchase_price_cents": 10000,
            "current_market_value_cents": 20000, "wine_type": "red", "region": "Napa",
            "country": "USA", "wine_name": "Gone", "custom_name": None,
        },
        {
            "id": "v5", "status": "in_cellar", "quantity": 1, "purchase_price_cents": 4000,
            "current_market_value_cents": 3000, "wine_type": "red", "region": "Bordeaux",
            "country": "France", "wine_name": "Loser", "custom_name": None,
        },
    ])
