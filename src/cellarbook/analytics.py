"""
Cellar analytics: drinking, spending, vintage and taste-profile reports.

Every report takes an already-fetched, flattened DataFrame (see
cellarbook.repository) and summarises it in a single pass. Ordering
rules shared by all reports:

- groups are collected in first-seen order
- sorts are stable, so ties keep that order
- "last 12 months" means the current month plus the 11 before it
"""

import logging
from datetime import date
from typing import List, Optional

import numpy as np
import pandas as pd

from cellarbook.constants import ColumnNames as C, InventoryStatus, ReportConstants as R
from cellarbook.schema import (
    BottlePrice,
    BucketCount,
    CharacteristicStats,
    DrinkingStats,
    LabelCount,
    LabelRating,
    LabelSpend,
    MonthCount,
    MonthSpend,
    RegionVintages,
    SpendingStats,
    TasteProfile,
    VintageDetail,
    VintageRating,
    VintageRegionRating,
    VintageStats,
    YearSpend,
)
from cellarbook.utils import (
    as_int,
    ensure_columns,
    fill_label,
    label_text,
    resolve_today,
    safe_divide,
    to_cents,
    to_dates,
)

logger = logging.getLogger(__name__)


# =======================
# MONTH HELPERS
# =======================

def month_label(value) -> str:
    """Short month label used on every monthly axis, e.g. 'Mar 2026'."""
    return pd.Timestamp(value).strftime("%b %Y")


def trailing_months(today: Optional[date] = None, months: int = R.TRAILING_MONTHS) -> pd.PeriodIndex:
    """Monthly periods ending with the current month, oldest first."""
    current = pd.Period(resolve_today(today), freq="M")
    return pd.period_range(end=current, periods=months, freq="M")


def last_12_months(today: Optional[date] = None) -> List[str]:
    """Labels for the trailing 12 months, oldest first."""
    return [period.strftime("%b %Y") for period in trailing_months(today)]


def _period_bounds(today: date):
    month_start = pd.Timestamp(today.replace(day=1))
    year_start = pd.Timestamp(today.replace(month=1, day=1))
    return month_start, year_start


# =======================
# GROUPING HELPERS
# =======================

def _ranked_counts(labels: pd.Series) -> pd.Series:
    """Counts per label, highest first, ties in first-seen order."""
    if labels.empty:
        return pd.Series(dtype="int64")
    counts = labels.groupby(labels, sort=False).size()
    return counts.sort_values(ascending=False, kind="stable")


def _rating_groups(df: pd.DataFrame, key: str) -> pd.DataFrame:
    """Average score and count per key, in first-seen order."""
    if df.empty:
        return pd.DataFrame(columns=[key, "avg_rating", "count"])
    return (
        df.groupby(key, sort=False)[C.SCORE]
        .agg(avg_rating="mean", count="size")
        .reset_index()
    )


def _by_avg(groups: pd.DataFrame) -> pd.DataFrame:
    return groups.sort_values("avg_rating", ascending=False, kind="stable")


def _label_ratings(groups: pd.DataFrame, key: str) -> List[LabelRating]:
    return [
        LabelRating(label=label_text(row[key]), avg_rating=float(row["avg_rating"]), count=int(row["count"]))
        for _, row in groups.iterrows()
    ]


def _preferred(df: pd.DataFrame, key: str, limit: Optional[int] = None) -> List[LabelRating]:
    """Groups with enough ratings, best average first."""
    groups = _rating_groups(df, key)
    groups = _by_avg(groups[groups["count"] >= R.MIN_SAMPLES])
    if limit is not None:
        groups = groups.head(limit)
    return _label_ratings(groups, key)


def _present(series: pd.Series) -> pd.Series:
    """Mask of non-missing, non-empty labels."""
    return series.notna() & (series.astype(str) != "")


# =======================
# DRINKING STATS
# =======================

def drinking_stats(inventory: pd.DataFrame, today: Optional[date] = None) -> DrinkingStats:
    """
    Summarise consumed bottles.

    Args:
        inventory: Flattened cellar_inventory rows
        today: Reference date (default: today)

    Returns:
        DrinkingStats; zero counts for an empty cellar
    """
    today = resolve_today(today)
    df = ensure_columns(inventory, [C.STATUS, C.CONSUMED_DATE, C.WINE_TYPE, C.REGION])
    consumed = df[df[C.STATUS] == InventoryStatus.CONSUMED.value]

    dates = to_dates(consumed[C.CONSUMED_DATE])
    month_start, year_start = _period_bounds(today)

    window = trailing_months(today)
    month_counts = dates.dropna().dt.to_period("M").value_counts()
    by_month = [
        MonthCount(month=period.strftime("%b %Y"), count=as_int(month_counts.get(period, 0)))
        for period in window
    ]

    type_counts = _ranked_counts(fill_label(consumed[C.WINE_TYPE], R.UNKNOWN_TYPE))
    region_counts = _ranked_counts(fill_label(consumed[C.REGION], R.UNKNOWN_REGION))

    by_type = [LabelCount(label=label_text(label), count=int(count)) for label, count in type_counts.items()]
    by_region = [LabelCount(label=label_text(label), count=int(count)) for label, count in region_counts.items()]

    return DrinkingStats(
        total_consumed=len(consumed),
        consumed_this_month=int((dates >= month_start).sum()),
        consumed_this_year=int((dates >= year_start).sum()),
        by_month=by_month,
        by_type=by_type,
        by_region=by_region[:R.TOP_REGIONS],
        favorite_type=by_type[0].label if by_type else None,
        favorite_region=by_region[0].label if by_region else None,
    )


# =======================
# SPENDING STATS
# =======================

def _spend_groups(df: pd.DataFrame, key: str) -> pd.DataFrame:
    if df.empty:
        return pd.DataFrame(columns=[key, "amount", "bottles"])
    return (
        df.groupby(key, sort=False)
        .agg(amount=("amount", "sum"), bottles=("bottles", "sum"))
        .reset_index()
    )


def _label_spends(groups: pd.DataFrame, key: str) -> List[LabelSpend]:
    groups = groups.sort_values("amount", ascending=False, kind="stable")
    return [
        LabelSpend(label=label_text(row[key]), amount=as_int(row["amount"]), bottles=as_int(row["bottles"]))
        for _, row in groups.iterrows()
    ]


def _bottle_name(row: pd.Series) -> str:
    for column in (C.WINE_NAME, C.CUSTOM_NAME):
        value = row.get(column)
        if isinstance(value, str) and value:
            return value
    return R.UNKNOWN_NAME


def spending_stats(inventory: pd.DataFrame, today: Optional[date] = None) -> SpendingStats:
    """
    Summarise purchases of every inventory row with a purchase price.

    Line amount is unit price times quantity; all amounts are cents.

    Args:
        inventory: Flattened cellar_inventory rows (any status)
        today: Reference date (default: today)

    Returns:
        SpendingStats
    """
    today = resolve_today(today)
    df = ensure_columns(
        inventory,
        [C.PURCHASE_PRICE, C.QUANTITY, C.PURCHASE_DATE, C.WINE_TYPE, C.REGION, C.WINE_NAME, C.CUSTOM_NAME],
    )
    df[C.PURCHASE_PRICE] = to_cents(df[C.PURCHASE_PRICE])
    df = df[df[C.PURCHASE_PRICE].notna()].reset_index(drop=True)

    df["bottles"] = pd.to_numeric(df[C.QUANTITY], errors="coerce").fillna(1)
    df["amount"] = df[C.PURCHASE_PRICE] * df["bottles"]
    df["purchased_on"] = to_dates(df[C.PURCHASE_DATE])
    df["type_label"] = fill_label(df[C.WINE_TYPE], R.UNKNOWN_TYPE)
    df["region_label"] = fill_label(df[C.REGION], R.UNKNOWN_REGION)

    month_start, year_start = _period_bounds(today)
    total_spent = df["amount"].sum()
    total_bottles = df["bottles"].sum()

    dated = df[df["purchased_on"].notna()].copy()
    dated["period"] = dated["purchased_on"].dt.to_period("M")
    dated["year"] = dated["purchased_on"].dt.year

    monthly = _spend_groups(dated, "period").set_index("period")
    by_month = []
    for period in trailing_months(today):
        amount = monthly["amount"].get(period, 0) if not monthly.empty else 0
        bottles = monthly["bottles"].get(period, 0) if not monthly.empty else 0
        by_month.append(MonthSpend(month=period.strftime("%b %Y"), amount=as_int(amount), bottles=as_int(bottles)))

    yearly = _spend_groups(dated, "year").sort_values("year", kind="stable")
    by_year = [
        YearSpend(year=int(row["year"]), amount=as_int(row["amount"]), bottles=as_int(row["bottles"]))
        for _, row in yearly.iterrows()
    ]

    most_expensive = None
    if not df.empty:
        top = df.loc[df[C.PURCHASE_PRICE].idxmax()]
        most_expensive = BottlePrice(name=_bottle_name(top), price=as_int(top[C.PURCHASE_PRICE]))

    return SpendingStats(
        total_spent=as_int(total_spent),
        spent_this_month=as_int(df.loc[df["purchased_on"] >= month_start, "amount"].sum()),
        spent_this_year=as_int(df.loc[df["purchased_on"] >= year_start, "amount"].sum()),
        average_bottle_price=safe_divide(float(total_spent), float(total_bottles)),
        by_month=by_month,
        by_year=by_year,
        by_type=_label_spends(_spend_groups(df, "type_label"), "type_label"),
        by_region=_label_spends(_spend_groups(df, "region_label"), "region_label")[:R.TOP_REGIONS],
        most_expensive_bottle=most_expensive,
    )


# =======================
# VINTAGE STATS
# =======================

def _rated_vintages(ratings: pd.DataFrame) -> pd.DataFrame:
    df = ensure_columns(ratings, [C.VINTAGE, C.REGION, C.SCORE])
    df[C.VINTAGE] = pd.to_numeric(df[C.VINTAGE], errors="coerce")
    df[C.SCORE] = pd.to_numeric(df[C.SCORE], errors="coerce")
    # A vintage of 0 means "not set"
    df = df[df[C.VINTAGE].notna() & (df[C.VINTAGE] != 0) & df[C.SCORE].notna()].copy()
    df[C.VINTAGE] = df[C.VINTAGE].astype(int)
    df[C.REGION] = fill_label(df[C.REGION], R.UNKNOWN_REGION)
    return df


def _vintage_ratings(groups: pd.DataFrame) -> List[VintageRating]:
    return [
        VintageRating(vintage=int(row[C.VINTAGE]), avg_rating=float(row["avg_rating"]), count=int(row["count"]))
        for _, row in groups.iterrows()
    ]


def vintage_stats(ratings: pd.DataFrame) -> VintageStats:
    """
    Average ratings per vintage, per vintage and region, and per region.

    Only ratings whose inventory row carries a vintage are counted.

    Args:
        ratings: Flattened ratings rows (score, vintage, region)

    Returns:
        VintageStats
    """
    df = _rated_vintages(ratings)
    if df.empty:
        return VintageStats()

    vintages = _rating_groups(df, C.VINTAGE).sort_values(C.VINTAGE, ascending=False, kind="stable")

    by_vintage = []
    for _, row in vintages.iterrows():
        regions = _by_avg(_rating_groups(df[df[C.VINTAGE] == row[C.VINTAGE]], C.REGION))
        by_vintage.append(VintageDetail(
            vintage=int(row[C.VINTAGE]),
            avg_rating=float(row["avg_rating"]),
            count=int(row["count"]),
            regions=[
                VintageRegionRating(region=str(r[C.REGION]), avg_rating=float(r["avg_rating"]), count=int(r["count"]))
                for _, r in regions.iterrows()
            ],
        ))

    best = _by_avg(vintages[vintages["count"] >= R.MIN_SAMPLES]).head(R.BEST_VINTAGES)

    by_region = []
    for region, region_df in df.groupby(C.REGION, sort=False):
        region_vintages = _rating_groups(region_df, C.VINTAGE).sort_values(C.VINTAGE, ascending=False, kind="stable")
        if len(region_vintages) >= R.MIN_SAMPLES:
            by_region.append(RegionVintages(region=str(region), vintages=_vintage_ratings(region_vintages)))
    by_region.sort(key=lambda entry: len(entry.vintages), reverse=True)

    return VintageStats(
        by_vintage=by_vintage,
        best_vintages=_vintage_ratings(best),
        vintages_by_region=by_region[:R.VINTAGES_BY_REGION],
    )


# =======================
# TASTE PROFILE
# =======================

def rating_distribution(scores: pd.Series) -> List[BucketCount]:
    """Non-empty 5-point score buckets, lowest first."""
    scores = pd.to_numeric(scores, errors="coerce").dropna()
    if scores.empty:
        return []
    width = R.RATING_BUCKET_WIDTH
    buckets = (np.floor(scores / width) * width).astype(int)
    counts = buckets.value_counts().sort_index()
    return [BucketCount(score=int(bucket), count=int(count)) for bucket, count in counts.items() if count > 0]


def _characteristic(df: pd.DataFrame, column: str) -> List[LabelRating]:
    present = df[_present(df[column])]
    return _label_ratings(_by_avg(_rating_groups(present, column)), column)


def _insights(
    preferred_types: List[LabelRating],
    preferred_regions: List[LabelRating],
    body: List[LabelRating],
    preferred_producers: List[LabelRating],
) -> List[str]:
    insights = []
    if preferred_types:
        top = preferred_types[0]
        insights.append(f"You tend to rate {top.label} wines highest (avg {top.avg_rating:.1f} pts)")
    if preferred_regions:
        top = preferred_regions[0]
        insights.append(f"{top.label} is your favorite region (avg {top.avg_rating:.1f} pts)")
    if body and body[0].count >= R.MIN_SAMPLES:
        insights.append(f"You prefer {body[0].label} bodied wines")
    if preferred_producers:
        top = preferred_producers[0]
        insights.append(f"{top.label} is a consistent favorite ({top.count} wines rated)")
    return insights


def taste_profile(ratings: pd.DataFrame) -> Optional[TasteProfile]:
    """
    Build the drinker's taste profile from their ratings.

    Args:
        ratings: Flattened ratings rows

    Returns:
        TasteProfile, or None when there are no ratings
    """
    df = ensure_columns(ratings, [C.SCORE, C.WINE_TYPE, C.REGION, C.PRODUCER] + C.characteristic_columns())
    df[C.SCORE] = pd.to_numeric(df[C.SCORE], errors="coerce")
    df = df[df[C.SCORE].notna()].copy()
    if df.empty:
        logger.info("No ratings yet, skipping taste profile")
        return None

    df[C.WINE_TYPE] = fill_label(df[C.WINE_TYPE], R.UNKNOWN_TYPE)
    df[C.REGION] = fill_label(df[C.REGION], R.UNKNOWN_REGION)

    preferred_types = _preferred(df, C.WINE_TYPE)
    preferred_regions = _preferred(df, C.REGION)
    preferred_producers = _preferred(df[_present(df[C.PRODUCER])], C.PRODUCER)

    characteristics = CharacteristicStats(**{
        column: _characteristic(df, column) for column in C.characteristic_columns()
    })

    return TasteProfile(
        average_rating=float(df[C.SCORE].mean()),
        total_ratings=len(df),
        rating_distribution=rating_distribution(df[C.SCORE]),
        preferred_types=preferred_types,
        preferred_regions=preferred_regions[:R.PREFERRED_REGIONS],
        preferred_producers=preferred_producers[:R.PREFERRED_PRODUCERS],
        characteristics=characteristics,
        insights=_insights(preferred_types, preferred_regions, characteristics.body, preferred_producers),
    )
