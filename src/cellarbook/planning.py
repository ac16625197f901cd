"""
Planning and social summaries: wishlist, shopping list, winery visits
and the social dashboard counters.
"""

import logging
from datetime import date
from typing import List, Optional

import pandas as pd

from cellarbook.constants import (
    ColumnNames as C,
    FriendshipStatus,
    ReportConstants as R,
    ShoppingStatus,
    ShoppingUrgency,
    WishlistPriority,
    WishlistStatus,
)
from cellarbook.schema import RecentWinery, ShoppingListStats, SocialStats, WineryVisitStats, WishlistStats
from cellarbook.utils import as_int, ensure_columns, resolve_today, to_bool, to_dates

logger = logging.getLogger(__name__)


def wishlist_stats(items: pd.DataFrame) -> WishlistStats:
    """Counts by status and by priority of active items, plus their summed target price."""
    df = ensure_columns(items, ["status", "priority", C.TARGET_PRICE])
    active = df[df["status"] == WishlistStatus.ACTIVE.value]
    target = pd.to_numeric(active[C.TARGET_PRICE], errors="coerce").fillna(0)

    return WishlistStats(
        total=len(df),
        active=len(active),
        purchased=int((df["status"] == WishlistStatus.PURCHASED.value).sum()),
        by_priority={
            priority.value: int((active["priority"] == priority.value).sum())
            for priority in WishlistPriority
        },
        estimated_cost=as_int(target.sum()),
    )


def shopping_list_stats(items: pd.DataFrame) -> ShoppingListStats:
    """
    Counts by status and urgency, bottles still needed and estimated cost.

    Estimated cost only includes active items with a target price; an item
    without a quantity is costed as one bottle.
    """
    df = ensure_columns(items, ["status", "urgency", "quantity_needed", C.TARGET_PRICE])
    active = df[df["status"] == ShoppingStatus.ACTIVE.value]
    needed = pd.to_numeric(active["quantity_needed"], errors="coerce")
    target = pd.to_numeric(active[C.TARGET_PRICE], errors="coerce")

    # 0 quantity is costed as one bottle too
    costed_quantity = needed.where(needed.fillna(0) != 0, 1)
    priced = target.notna() & (target != 0)

    return ShoppingListStats(
        total=len(df),
        active=len(active),
        purchased=int((df["status"] == ShoppingStatus.PURCHASED.value).sum()),
        total_bottles_needed=as_int(needed.fillna(0).sum()),
        by_urgency={
            urgency.value: int((active["urgency"] == urgency.value).sum())
            for urgency in ShoppingUrgency
        },
        estimated_cost=as_int((target[priced] * costed_quantity[priced]).sum()),
    )


def winery_visit_stats(
    visits: pd.DataFrame,
    wines: pd.DataFrame,
    today: Optional[date] = None,
) -> WineryVisitStats:
    """
    Summarise winery visits and the wines tasted on them.

    Args:
        visits: winery_visits rows
        wines: winery_visit_wines rows
        today: Reference date for "this year" (default: today)

    Returns:
        WineryVisitStats; average_rating is None when no visit was rated
    """
    today = resolve_today(today)
    visits = ensure_columns(visits, ["winery_name", "overall_rating", "tasting_fee_cents", "visit_date"])
    wines = ensure_columns(wines, ["purchased", "quantity_purchased", "price_per_bottle_cents"])

    fees = pd.to_numeric(visits["tasting_fee_cents"], errors="coerce").fillna(0).sum()

    purchased = wines[to_bool(wines["purchased"]).values]
    quantity = pd.to_numeric(purchased["quantity_purchased"], errors="coerce")
    quantity = quantity.where(quantity.fillna(0) != 0, 1)
    price = pd.to_numeric(purchased["price_per_bottle_cents"], errors="coerce").fillna(0)
    wine_spend = (price * quantity).sum()

    ratings = pd.to_numeric(visits["overall_rating"], errors="coerce")
    # Unrated (and 0-rated) visits are left out of the average
    rated = ratings[ratings.fillna(0) != 0]
    visit_years = to_dates(visits["visit_date"]).dt.year

    return WineryVisitStats(
        total_visits=len(visits),
        unique_wineries=int(visits["winery_name"].dropna().nunique()),
        wines_tasted=len(wines),
        wines_purchased=len(purchased),
        bottles_purchased=as_int(quantity.sum()),
        total_spent_on_tastings=as_int(fees),
        total_spent_on_wines=as_int(wine_spend),
        total_spent=as_int(fees) + as_int(wine_spend),
        average_rating=float(rated.mean()) if not rated.empty else None,
        this_year=int((visit_years == today.year).sum()),
    )


def recent_wineries(visits: pd.DataFrame, limit: int = R.RECENT_WINERIES) -> List[RecentWinery]:
    """
    Distinct wineries among the most recent `limit` visits, newest first.

    A winery visited more than once keeps its newest position but reports
    the region recorded on its oldest visit in the window.
    """
    df = ensure_columns(visits, ["winery_name", "winery_region", "visit_date"])
    df = df.assign(visited_on=to_dates(df["visit_date"]))
    df = df.sort_values("visited_on", ascending=False, kind="stable", na_position="last").head(limit)

    wineries = {}
    for _, row in df.iterrows():
        name = row["winery_name"]
        if not isinstance(name, str) or not name:
            continue
        region = row["winery_region"] if isinstance(row["winery_region"], str) else None
        wineries[name] = RecentWinery(winery_name=name, winery_region=region)
    return list(wineries.values())


def social_stats(
    user_id: str,
    friendships: pd.DataFrame,
    shared_tastings: pd.DataFrame,
    likes: pd.DataFrame,
) -> SocialStats:
    """
    Social dashboard counters for one user.

    Args:
        user_id: The user the dashboard belongs to
        friendships: friendships rows (requester_id, addressee_id, status)
        shared_tastings: shared_tastings rows (id, user_id)
        likes: tasting_likes rows (shared_tasting_id)
    """
    friendships = ensure_columns(friendships, ["requester_id", "addressee_id", "status"])
    shared_tastings = ensure_columns(shared_tastings, ["id", "user_id"])
    likes = ensure_columns(likes, ["shared_tasting_id"])

    involves_user = (friendships["requester_id"] == user_id) | (friendships["addressee_id"] == user_id)
    accepted = involves_user & (friendships["status"] == FriendshipStatus.ACCEPTED.value)
    pending = (friendships["addressee_id"] == user_id) & (friendships["status"] == FriendshipStatus.PENDING.value)

    mine = shared_tastings[shared_tastings["user_id"] == user_id]
    received = likes["shared_tasting_id"].isin(set(mine["id"].dropna()))

    return SocialStats(
        friends_count=int(accepted.sum()),
        pending_requests_count=int(pending.sum()),
        shared_tastings_count=len(mine),
        total_likes_received=int(received.sum()),
    )
