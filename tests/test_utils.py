"""
Tests for utility functions.
"""

from datetime import date, datetime

import numpy as np
import pandas as pd

from cellarbook.constants import WineType
from cellarbook.utils import (
    as_int,
    ensure_columns,
    fill_label,
    label_text,
    resolve_today,
    safe_divide,
    to_bool,
    to_dates,
)


class TestSafeDivide:
    def test_normal(self):
        assert safe_divide(10, 4) == 2.5

    def test_zero_denominator(self):
        assert safe_divide(10, 0) == 0.0
        assert safe_divide(10, 0, default=-1.0) == -1.0


class TestResolveToday:
    def test_datetime_truncated(self):
        assert resolve_today(datetime(2026, 3, 15, 22, 0)) == date(2026, 3, 15)

    def test_default_is_today(self):
        assert resolve_today() == date.today()


class TestFrameHelpers:
    """Test column and label helpers."""

    def test_ensure_columns_copies(self):
        df = pd.DataFrame({"a": [1]})
        result = ensure_columns(df, ["a", "b"])
        assert "b" in result.columns
        assert "b" not in df.columns

    def test_ensure_columns_none(self):
        assert list(ensure_columns(None, ["a"]).columns) == ["a"]

    def test_fill_label(self):
        labels = fill_label(pd.Series(["red", None, "", np.nan]), "unknown")
        assert list(labels) == ["red", "unknown", "unknown", "unknown"]

    def test_to_bool(self):
        assert list(to_bool(pd.Series([True, False, None, np.nan]))) == [True, False, False, False]

    def test_as_int(self):
        assert as_int(np.float64(2.6)) == 3
        assert as_int(np.nan) == 0
        assert as_int(None) == 0

    def test_label_text(self):
        assert label_text(WineType.RED) == "red"
        assert label_text(2015) == "2015"


class TestToDates:
    """Test day parsing of mixed date columns."""

    def test_mixed_formats(self):
        """Dates, timestamps and date objects in one column."""
        parsed = to_dates(pd.Series(["2026-03-01", "2026-03-02T10:15:00+00:00", date(2026, 3, 3), None]))
        assert list(parsed[:3]) == [
            pd.Timestamp("2026-03-01"), pd.Timestamp("2026-03-02"), pd.Timestamp("2026-03-03")
        ]
        assert pd.isna(parsed[3])

    def test_unparseable_becomes_nat(self):
        parsed = to_dates(pd.Series(["soon", "2026-01-01"]))
        assert pd.isna(parsed[0])
        assert parsed[1] == pd.Timestamp("2026-01-01")
