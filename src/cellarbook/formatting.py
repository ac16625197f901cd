"""Display formatting for money, percentages, dates and cellar locations."""

from datetime import date, datetime
from typing import Optional, Union

import pandas as pd

from cellarbook.constants import DisplayConstants, LocationMode
from cellarbook.schema import CellarLocation
from cellarbook.utils import is_missing, label_text


def format_currency(cents: Optional[float], currency: str = "USD", whole: bool = False) -> str:
    """
    Format an amount in cents, e.g. 123450 -> '$1,234.50'.

    Args:
        cents: Amount in cents (None or NaN is shown as zero)
        currency: ISO currency code; unknown codes are appended instead of a symbol
        whole: Round to whole units ('$1,235')
    """
    amount = 0.0 if is_missing(cents) else cents / 100
    sign = "-" if amount < 0 else ""
    number = f"{abs(amount):,.0f}" if whole else f"{abs(amount):,.2f}"

    symbol = DisplayConstants.CURRENCY_SYMBOLS.get(currency.upper())
    if symbol is None:
        return f"{sign}{number} {currency.upper()}"
    return f"{sign}{symbol}{number}"


def format_percentage(value: Optional[float]) -> str:
    """Signed percentage with one decimal, e.g. '+12.5%'."""
    value = value or 0.0
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:.1f}%"


def format_date(value: Union[str, date, datetime, None]) -> Optional[str]:
    """'Mar 5, 2026' for a date, datetime or ISO string; None when missing."""
    if value is None or value == "":
        return None
    try:
        stamp = pd.Timestamp(value)
    except (ValueError, TypeError):
        return None
    if stamp is pd.NaT:
        return None
    return f"{stamp.strftime('%b')} {stamp.day}, {stamp.year}"


def location_display(
    simple_location: Optional[str],
    location: Optional[CellarLocation],
    mode: Union[LocationMode, str] = LocationMode.SIMPLE,
) -> Optional[str]:
    """
    Describe where a bottle is stored, according to the cellar's location mode.

    simple:     the free-text location
    structured: 'zone → rack → shelf → position' (only the parts that are set)
    grid:       the slot name, else 'rack-shelf'
    """
    mode = label_text(mode)

    if mode == LocationMode.SIMPLE.value:
        return simple_location or None

    if location is None:
        return None

    if mode == LocationMode.STRUCTURED.value:
        parts = [part for part in (location.zone, location.rack, location.shelf, location.position) if part]
        if parts:
            return DisplayConstants.LOCATION_SEPARATOR.join(parts)
        return location.name or None

    if mode == LocationMode.GRID.value:
        return location.name or f"{location.rack}-{location.shelf}"

    return None
