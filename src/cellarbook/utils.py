"""
Utility functions for Cellarbook.

Logging setup plus the small frame helpers every report relies on.
"""

import logging
from datetime import date, datetime
from enum import Enum
from typing import Iterable, Optional

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: str = "INFO") -> None:
    """Install the standard Cellarbook log format on the root logger."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


def resolve_today(today: Optional[date] = None) -> date:
    """Return `today` or the current date; datetimes are truncated."""
    if today is None:
        return date.today()
    if isinstance(today, datetime):
        return today.date()
    return today


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """
    Safely divide two numbers, handling zero division.

    Args:
        numerator: Number to divide
        denominator: Number to divide by
        default: Value to return if division by zero

    Returns:
        Result of division or default
    """
    if denominator == 0:
        return default
    return numerator / denominator


def ensure_columns(df: Optional[pd.DataFrame], columns: Iterable[str]) -> pd.DataFrame:
    """
    Return a copy of df that has every requested column.

    Missing columns are added filled with None so callers can group and
    filter without checking for them first.
    """
    if df is None:
        df = pd.DataFrame()
    df = df.copy()
    for column in columns:
        if column not in df.columns:
            df[column] = None
    return df


def is_missing(value) -> bool:
    """True for None, NaN, NaT and pd.NA."""
    if value is None or value is pd.NaT or value is pd.NA:
        return True
    return isinstance(value, float) and np.isnan(value)


def _parse_day(value):
    if is_missing(value):
        return pd.NaT
    try:
        stamp = pd.Timestamp(value)
    except (ValueError, TypeError):
        logger.debug(f"Unparseable date ignored: {value!r}")
        return pd.NaT
    if stamp is pd.NaT:
        return pd.NaT
    if stamp.tzinfo is not None:
        stamp = stamp.tz_convert(None)
    return stamp.normalize()


def to_dates(series: pd.Series) -> pd.Series:
    """
    Parse a column of ISO strings / dates / datetimes to day Timestamps.

    Parsed element by element because Supabase returns dates and
    timestamps in different formats in the same table. Missing or
    unparseable values become NaT.
    """
    return pd.to_datetime(series.map(_parse_day))


def to_cents(series: pd.Series) -> pd.Series:
    """Numeric money column with missing values as NaN."""
    return pd.to_numeric(series, errors="coerce")


def fill_label(series: pd.Series, fallback: str) -> pd.Series:
    """Replace missing or empty labels with the fallback label."""
    labels = series.astype(object).where(series.notna(), None)
    return labels.map(lambda value: value if value else fallback)


def to_bool(series: pd.Series) -> pd.Series:
    """Boolean column with missing values as False."""
    return series.map(lambda value: False if is_missing(value) else bool(value)).astype(bool)


def as_int(value) -> int:
    """Convert numpy/pandas scalars to a plain int."""
    if is_missing(value):
        return 0
    return int(round(float(value)))


def label_text(value) -> str:
    """Display text for a group label; enum members render as their value."""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)
