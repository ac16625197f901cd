"""Cellar alerts: low stock, ready to drink, and nearing the end of the drinking window."""

import logging
from datetime import date, timedelta
from typing import Optional

import pandas as pd

from cellarbook.constants import ColumnNames as C, InventoryStatus, ReportConstants as R
from cellarbook.utils import ensure_columns, resolve_today, to_bool, to_dates

logger = logging.getLogger(__name__)


def _open_rows(inventory: pd.DataFrame) -> pd.DataFrame:
    df = ensure_columns(
        inventory,
        [C.STATUS, C.QUANTITY, C.LOW_STOCK_THRESHOLD, C.LOW_STOCK_ALERT_ENABLED, C.DRINK_AFTER, C.DRINK_BEFORE],
    )
    return df[df[C.STATUS] == InventoryStatus.IN_CELLAR.value].reset_index(drop=True)


def low_stock_wines(inventory: pd.DataFrame) -> pd.DataFrame:
    """
    In-cellar rows with a low-stock alert that has tripped.

    A row trips when its quantity is at or below its threshold; a missing
    threshold counts as 0, so the alert only fires once the wine runs out.
    """
    df = _open_rows(inventory)
    enabled = to_bool(df[C.LOW_STOCK_ALERT_ENABLED])
    threshold = pd.to_numeric(df[C.LOW_STOCK_THRESHOLD], errors="coerce").fillna(0)
    quantity = pd.to_numeric(df[C.QUANTITY], errors="coerce").fillna(0)
    return df[enabled & (quantity <= threshold)].reset_index(drop=True)


def drinking_window_wines(inventory: pd.DataFrame, today: Optional[date] = None) -> pd.DataFrame:
    """In-cellar rows whose drinking window (either end may be open) contains today."""
    now = pd.Timestamp(resolve_today(today))
    df = _open_rows(inventory)
    after = to_dates(df[C.DRINK_AFTER])
    before = to_dates(df[C.DRINK_BEFORE])

    has_window = after.notna() | before.notna()
    started = after.isna() | (after <= now)
    not_ended = before.isna() | (before >= now)
    return df[has_window & started & not_ended].reset_index(drop=True)


def approaching_peak_wines(
    inventory: pd.DataFrame,
    today: Optional[date] = None,
    horizon_days: int = R.APPROACHING_PEAK_DAYS,
) -> pd.DataFrame:
    """In-cellar rows whose drink-before date falls within the next `horizon_days` days."""
    today = resolve_today(today)
    now = pd.Timestamp(today)
    horizon = pd.Timestamp(today + timedelta(days=horizon_days))

    df = _open_rows(inventory)
    before = to_dates(df[C.DRINK_BEFORE])
    approaching = df[(before > now) & (before <= horizon)].reset_index(drop=True)
    if not approaching.empty:
        logger.info(f"{len(approaching)} wine(s) should be opened within {horizon_days} days")
    return approaching
