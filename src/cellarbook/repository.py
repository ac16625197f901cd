"""Supabase repository helpers: read the cellar tables into flat DataFrames."""

import logging
from typing import Any, Dict, List, Optional

import pandas as pd
from supabase import Client, create_client

from cellarbook.config import Settings
from cellarbook.constants import ColumnNames as C, Tables
from cellarbook.error_handling import handle_query_error
from cellarbook.schema import (
    InventoryItem,
    Rating,
    ShoppingListItem,
    WineryVisit,
    WineryVisitWine,
    WishlistItem,
    validate_rows,
)

logger = logging.getLogger(__name__)

INVENTORY_COLUMNS = [
    "id", "cellar_id", "wine_reference_id", "custom_name", "custom_producer", "vintage",
    "quantity", "bottle_size_ml", "purchase_date", "purchase_price_cents", "drink_after",
    "drink_before", "status", "consumed_date", "simple_location", "low_stock_threshold",
    "low_stock_alert_enabled", "current_market_value_cents", "market_value_source",
    "is_opened", "opened_date", "glasses_poured", "glasses_per_bottle",
    *C.WINE_REFERENCE_FIELDS,
]

RATING_COLUMNS = [
    "id", "user_id", "inventory_id", "score", "tasting_date",
    "body", "tannins", "acidity", "sweetness", "vintage",
    *C.WINE_REFERENCE_FIELDS,
]

WISHLIST_COLUMNS = ["id", "custom_name", "priority", "status", C.TARGET_PRICE]
SHOPPING_COLUMNS = ["id", "custom_name", "status", "urgency", "quantity_needed", C.TARGET_PRICE]
VISIT_COLUMNS = ["id", "winery_name", "winery_region", "overall_rating", "tasting_fee_cents", "visit_date"]
VISIT_WINE_COLUMNS = ["id", "visit_id", "purchased", "quantity_purchased", "price_per_bottle_cents", "rating"]


def get_supabase_client(settings: Settings) -> Client:
    """
    Create a Supabase client from settings.

    Raises:
        RepositoryError: if the client rejects the URL or key
    """
    try:
        return create_client(settings.supabase_url, settings.supabase_key)
    except Exception as e:
        handle_query_error(e, "create Supabase client")


def flatten_wine_reference(row: Dict[str, Any], reference: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Copy the reference fields the reports group by onto the row itself."""
    reference = reference or {}
    row[C.WINE_NAME] = reference.get("name")
    row[C.PRODUCER] = reference.get("producer")
    row[C.REGION] = reference.get("region")
    row[C.COUNTRY] = reference.get("country")
    row[C.WINE_TYPE] = reference.get("wine_type")
    return row


def _to_frame(rows: List[Dict[str, Any]], columns: List[str]) -> pd.DataFrame:
    """DataFrame from rows; an empty result still has the expected schema."""
    if not rows:
        return pd.DataFrame(columns=columns)
    df = pd.DataFrame(rows)
    for column in columns:
        if column not in df.columns:
            df[column] = None
    return df


def _execute(query, operation: str, model=None) -> List[Dict[str, Any]]:
    """Run a query; with a row model, every returned row is validated against it."""
    try:
        response = query.execute()
    except Exception as e:
        handle_query_error(e, operation)
    rows = response.data or []
    logger.debug(f"{operation}: {len(rows)} row(s)")
    if model is not None:
        validate_rows(model, rows)
    return rows


def fetch_inventory(
    sb: Client,
    cellar_id: Optional[str] = None,
    status: Optional[str] = None,
    validate: bool = False,
) -> pd.DataFrame:
    """
    Inventory rows with their wine_reference flattened in.

    Args:
        sb: Supabase client
        cellar_id: Restrict to one cellar
        status: Restrict to one status (e.g. 'consumed')
        validate: Check each row against InventoryItem first

    Raises:
        RepositoryError: if the query fails
        DataValidationError: if validate is set and a row is invalid
    """
    query = sb.table(Tables.CELLAR_INVENTORY).select("*, wine_reference (*)")
    if cellar_id:
        query = query.eq("cellar_id", cellar_id)
    if status:
        query = query.eq("status", status)

    rows = [
        flatten_wine_reference(dict(row), row.get("wine_reference"))
        for row in _execute(query, "fetch inventory", InventoryItem if validate else None)
    ]
    for row in rows:
        row.pop("wine_reference", None)

    if not rows:
        logger.warning(f"No inventory rows found (cellar_id={cellar_id}, status={status})")
    return _to_frame(rows, INVENTORY_COLUMNS)


def fetch_ratings(sb: Client, validate: bool = False) -> pd.DataFrame:
    """Ratings with the rated bottle's vintage and wine_reference flattened in."""
    query = sb.table(Tables.RATINGS).select(
        "*, inventory:cellar_inventory (vintage, wine_reference (*))"
    )

    rows = []
    for raw in _execute(query, "fetch ratings", Rating if validate else None):
        row = dict(raw)
        inventory = row.pop("inventory", None) or {}
        row[C.VINTAGE] = inventory.get("vintage")
        rows.append(flatten_wine_reference(row, inventory.get("wine_reference")))
    return _to_frame(rows, RATING_COLUMNS)


def fetch_wishlist(sb: Client, validate: bool = False) -> pd.DataFrame:
    query = sb.table(Tables.WISHLIST).select("*")
    rows = _execute(query, "fetch wishlist", WishlistItem if validate else None)
    return _to_frame(rows, WISHLIST_COLUMNS)


def fetch_shopping_list(sb: Client, validate: bool = False) -> pd.DataFrame:
    query = sb.table(Tables.SHOPPING_LIST).select("*")
    rows = _execute(query, "fetch shopping list", ShoppingListItem if validate else None)
    return _to_frame(rows, SHOPPING_COLUMNS)


def fetch_winery_visits(sb: Client, validate: bool = False) -> pd.DataFrame:
    query = sb.table(Tables.WINERY_VISITS).select("*").order("visit_date", desc=True)
    rows = _execute(query, "fetch winery visits", WineryVisit if validate else None)
    return _to_frame(rows, VISIT_COLUMNS)


def fetch_winery_visit_wines(sb: Client, validate: bool = False) -> pd.DataFrame:
    query = sb.table(Tables.WINERY_VISIT_WINES).select("*")
    rows = _execute(query, "fetch winery visit wines", WineryVisitWine if validate else None)
    return _to_frame(rows, VISIT_WINE_COLUMNS)


def fetch_social_rows(sb: Client, user_id: str) -> Dict[str, pd.DataFrame]:
    """
    Rows behind the social dashboard counters for one user.

    Returns:
        Dict with 'friendships', 'shared_tastings' and 'likes' frames
    """
    friendships = _execute(
        sb.table(Tables.FRIENDSHIPS)
        .select("id, requester_id, addressee_id, status")
        .or_(f"requester_id.eq.{user_id},addressee_id.eq.{user_id}"),
        "fetch friendships",
    )
    shared = _execute(
        sb.table(Tables.SHARED_TASTINGS).select("id, user_id").eq("user_id", user_id),
        "fetch shared tastings",
    )

    likes: List[Dict[str, Any]] = []
    tasting_ids = [row["id"] for row in shared if row.get("id")]
    if tasting_ids:
        likes = _execute(
            sb.table(Tables.TASTING_LIKES).select("id, shared_tasting_id").in_("shared_tasting_id", tasting_ids),
            "fetch tasting likes",
        )

    return {
        "friendships": _to_frame(friendships, ["id", "requester_id", "addressee_id", "status"]),
        "shared_tastings": _to_frame(shared, ["id", "user_id"]),
        "likes": _to_frame(likes, ["id", "shared_tasting_id"]),
    }
