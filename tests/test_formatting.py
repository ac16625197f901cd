"""
Tests for display formatting.
"""

from datetime import date

from cellarbook.constants import LocationMode
from cellarbook.formatting import format_currency, format_date, format_percentage, location_display
from cellarbook.schema import CellarLocation


class TestFormatCurrency:
    """Test cents-to-currency formatting."""

    def test_usd(self):
        assert format_currency(123450) == "$1,234.50"

    def test_whole_units(self):
        assert format_currency(123460, whole=True) == "$1,235"

    def test_negative(self):
        """The sign goes before the symbol."""
        assert format_currency(-500) == "-$5.00"

    def test_other_symbols(self):
        assert format_currency(1200, "EUR") == "€12.00"
        assert format_currency(1200, "gbp") == "£12.00"

    def test_unknown_currency_code(self):
        """Codes without a known symbol are appended."""
        assert format_currency(1200, "CHF") == "12.00 CHF"

    def test_missing_amount(self):
        assert format_currency(None) == "$0.00"

    def test_nan_amount(self):
        """NaN from a pandas sum is shown as zero."""
        assert format_currency(float("nan")) == "$0.00"
        assert format_currency(float("nan"), "EUR", whole=True) == "€0"


class TestFormatPercentage:
    """Test signed percentages."""

    def test_positive_gets_plus(self):
        assert format_percentage(12.34) == "+12.3%"

    def test_negative(self):
        assert format_percentage(-3) == "-3.0%"

    def test_zero_and_missing(self):
        assert format_percentage(0) == "+0.0%"
        assert format_percentage(None) == "+0.0%"


class TestFormatDate:
    """Test display dates."""

    def test_iso_string(self):
        assert format_date("2026-03-05") == "Mar 5, 2026"

    def test_date(self):
        assert format_date(date(2025, 12, 25)) == "Dec 25, 2025"

    def test_missing_or_invalid(self):
        """Missing or unparseable values give None."""
        assert format_date(None) is None
        assert format_date("") is None
        assert format_date("not a date") is None


class TestLocationDisplay:
    """Test location text for each cellar mode."""

    def test_simple_mode(self):
        assert location_display("Rack A", None, LocationMode.SIMPLE) == "Rack A"
        assert location_display("", None, "simple") is None

    def test_structured_mode(self):
        """Only the parts that are set are joined."""
        location = CellarLocation(zone="Cellar", rack="A", shelf="3")
        assert location_display(None, location, LocationMode.STRUCTURED) == "Cellar → A → 3"

    def test_structured_falls_back_to_name(self):
        location = CellarLocation(name="Door")
        assert location_display(None, location, "structured") == "Door"

    def test_grid_mode(self):
        """Grid slots use their name, else rack-shelf."""
        assert location_display(None, CellarLocation(name="B2"), LocationMode.GRID) == "B2"
        assert location_display(None, CellarLocation(rack="B", shelf="2"), LocationMode.GRID) == "B-2"

    def test_missing_location(self):
        assert location_display("Rack A", None, LocationMode.STRUCTURED) is None

