"""
Portfolio value of the bottles still in the cellar.

Market value falls back to the purchase price when no market value has
been recorded, so an unvalued bottle counts as break-even rather than as
a total loss.
"""

import logging
import math
from typing import Dict, List, Optional

import pandas as pd

from cellarbook.constants import ColumnNames as C, InventoryStatus, ReportConstants as R
from cellarbook.schema import CellarValueSummary, Gainer, GlassPricing, ValueBreakdown
from cellarbook.utils import as_int, ensure_columns, fill_label, label_text, safe_divide, to_cents

logger = logging.getLogger(__name__)

_VALUE_COLUMNS = [
    C.STATUS, C.QUANTITY, C.PURCHASE_PRICE, C.MARKET_VALUE,
    C.WINE_TYPE, C.REGION, C.COUNTRY, C.WINE_NAME, C.CUSTOM_NAME,
]


def in_cellar(inventory: pd.DataFrame) -> pd.DataFrame:
    """Rows still in the cellar, with numeric quantity and money columns."""
    df = ensure_columns(inventory, _VALUE_COLUMNS)
    df = df[df[C.STATUS] == InventoryStatus.IN_CELLAR.value].reset_index(drop=True)
    df[C.QUANTITY] = pd.to_numeric(df[C.QUANTITY], errors="coerce").fillna(0)
    df[C.PURCHASE_PRICE] = to_cents(df[C.PURCHASE_PRICE])
    df[C.MARKET_VALUE] = to_cents(df[C.MARKET_VALUE])
    return df


def _with_values(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df["purchase"] = df[C.PURCHASE_PRICE].fillna(0) * df[C.QUANTITY]
    # Zero market value is treated as unset, same as a missing one
    market_unit = df[C.MARKET_VALUE].where(df[C.MARKET_VALUE].fillna(0) != 0, df[C.PURCHASE_PRICE])
    df["market"] = market_unit.fillna(0) * df[C.QUANTITY]
    return df


def cellar_value(inventory: pd.DataFrame) -> CellarValueSummary:
    """
    Total bottles, cost basis and market value of the cellar.

    Args:
        inventory: Flattened cellar_inventory rows of one cellar

    Returns:
        CellarValueSummary; gain/loss percentage is 0 when nothing was paid
    """
    df = _with_values(in_cellar(inventory))
    purchase = as_int(df["purchase"].sum())
    market = as_int(df["market"].sum())

    return CellarValueSummary(
        total_bottles=as_int(df[C.QUANTITY].sum()),
        total_purchase_cents=purchase,
        total_market_cents=market,
        gain_loss_cents=market - purchase,
        gain_loss_percentage=safe_divide(market - purchase, purchase) * 100,
    )


def _breakdown(df: pd.DataFrame, labels: pd.Series) -> Dict[str, ValueBreakdown]:
    if df.empty:
        return {}
    grouped = (
        df.assign(label=labels.values)
        .groupby("label", sort=False)
        .agg(bottles=(C.QUANTITY, "sum"), purchase=("purchase", "sum"), market=("market", "sum"))
    )
    return {
        label_text(label): ValueBreakdown(
            bottles=as_int(row["bottles"]),
            purchase=as_int(row["purchase"]),
            market=as_int(row["market"]),
        )
        for label, row in grouped.iterrows()
    }


def value_by_type(inventory: pd.DataFrame) -> Dict[str, ValueBreakdown]:
    """Cellar value per wine type."""
    df = _with_values(in_cellar(inventory))
    return _breakdown(df, fill_label(df[C.WINE_TYPE], R.UNKNOWN_TYPE))


def value_by_region(inventory: pd.DataFrame) -> Dict[str, ValueBreakdown]:
    """Cellar value per region, falling back to country when the region is unknown."""
    df = _with_values(in_cellar(inventory))
    regions = fill_label(df[C.REGION], "")
    countries = fill_label(df[C.COUNTRY], R.UNKNOWN_REGION)
    labels = regions.where(regions != "", countries)
    return _breakdown(df, labels)


def _display_name(row: pd.Series) -> str:
    for column in (C.WINE_NAME, C.CUSTOM_NAME):
        value = row.get(column)
        if isinstance(value, str) and value:
            return value
    return R.UNKNOWN_NAME


def top_gainers(inventory: pd.DataFrame, limit: int = R.TOP_GAINERS) -> List[Gainer]:
    """
    Bottles whose market value rose the most, by percentage.

    Rows need both a purchase price and a market value; a zero purchase
    price has no meaningful percentage and is skipped.
    """
    df = in_cellar(inventory)
    df = df[df[C.PURCHASE_PRICE].notna() & df[C.MARKET_VALUE].notna() & (df[C.PURCHASE_PRICE] > 0)].copy()
    if df.empty:
        return []

    df["gain_cents"] = df[C.MARKET_VALUE] - df[C.PURCHASE_PRICE]
    df["gain_percentage"] = df["gain_cents"] / df[C.PURCHASE_PRICE] * 100
    df = df[df["gain_percentage"] > 0].sort_values("gain_percentage", ascending=False, kind="stable")

    gainers = []
    for _, row in df.head(limit).iterrows():
        gainers.append(Gainer(
            id=row.get(C.ID) if isinstance(row.get(C.ID), str) else None,
            name=_display_name(row),
            purchase_price_cents=as_int(row[C.PURCHASE_PRICE]),
            current_market_value_cents=as_int(row[C.MARKET_VALUE]),
            gain_cents=as_int(row["gain_cents"]),
            gain_percentage=float(row["gain_percentage"]),
        ))
    return gainers


def wines_without_value(inventory: pd.DataFrame) -> pd.DataFrame:
    """In-cellar rows with no market value recorded yet."""
    df = in_cellar(inventory)
    return df[df[C.MARKET_VALUE].isna()].reset_index(drop=True)


def glass_pricing(
    bottle_price_cents: Optional[int],
    bottle_size_ml: int,
    glasses_poured: int,
    glasses_per_bottle: int,
) -> GlassPricing:
    """
    Price-per-glass economics for an opened bottle.

    Args:
        bottle_price_cents: What the bottle cost (None if unknown)
        bottle_size_ml: Bottle volume
        glasses_poured: Glasses poured so far
        glasses_per_bottle: Glasses the drinker gets from a bottle

    Returns:
        GlassPricing; money fields are None without a price
    """
    calculated = math.floor(bottle_size_ml / R.STANDARD_POUR_ML) if bottle_size_ml > 0 else 0

    price_per_glass = None
    if bottle_price_cents and glasses_per_bottle > 0:
        price_per_glass = bottle_price_cents / glasses_per_bottle

    cost_poured = price_per_glass * glasses_poured if price_per_glass else None
    remaining = bottle_price_cents - price_per_glass * glasses_poured if price_per_glass else None

    return GlassPricing(
        calculated_glasses=calculated,
        price_per_glass=price_per_glass,
        cost_poured=cost_poured,
        remaining_value=remaining,
        percent_consumed=safe_divide(glasses_poured, glasses_per_bottle) * 100,
    )
