"""
Tests for the Supabase repository helpers.

The client is mocked; each query builder method returns the builder so
chained calls work the way supabase-py's do.
"""

from unittest.mock import MagicMock

import pandas as pd
import pytest

from cellarbook.config import Settings
from cellarbook.error_handling import DataValidationError, RepositoryError
from cellarbook.repository import (
    INVENTORY_COLUMNS,
    fetch_inventory,
    fetch_ratings,
    fetch_social_rows,
    fetch_winery_visits,
    fetch_wishlist,
    flatten_wine_reference,
    get_supabase_client,
)


def _query(rows):
    query = MagicMock()
    for method in ("select", "eq", "order", "or_", "in_"):
        getattr(query, method).return_value = query
    query.execute.return_value = MagicMock(data=rows)
    return query


def _client(**tables):
    """Client whose table(name) returns the query registered under that name."""
    queries = {name: _query(rows) for name, rows in tables.items()}
    sb = MagicMock()
    sb.table.side_effect = lambda name: queries[name]
    return sb, queries


class TestFlattenWineReference:
    """Test copying reference fields onto a row."""

    def test_fields_copied(self):
        row = flatten_wine_reference({"id": "1"}, {"name": "Barolo", "region": "Piedmont", "wine_type": "red"})
        assert row["wine_name"] == "Barolo"
        assert row["region"] == "Piedmont"
        assert row["wine_type"] == "red"
        assert row["producer"] is None

    def test_missing_reference(self):
        row = flatten_wine_reference({"id": "1"}, None)
        assert row["wine_name"] is None
        assert row["country"] is None


class TestFetchInventory:
    """Test inventory reads."""

    def test_reference_flattened(self):
        sb, _ = _client(cellar_inventory=[
            {"id": "1", "status": "in_cellar", "quantity": 2,
             "wine_reference": {"name": "Pauillac", "region": "Bordeaux", "wine_type": "red"}},
            {"id": "2", "status": "in_cellar", "quantity": 1, "custom_name": "Table red", "wine_reference": None},
        ])
        df = fetch_inventory(sb)

        assert "wine_reference" not in df.columns
        assert df.loc[0, "wine_name"] == "Pauillac"
        assert df.loc[0, "region"] == "Bordeaux"
        assert pd.isna(df.loc[1, "wine_name"])
        assert set(INVENTORY_COLUMNS) <= set(df.columns)

    def test_filters_applied(self):
        sb, queries = _client(cellar_inventory=[])
        fetch_inventory(sb, cellar_id="c1", status="consumed")

        query = queries["cellar_inventory"]
        query.select.assert_called_once_with("*, wine_reference (*)")
        query.eq.assert_any_call("cellar_id", "c1")
        query.eq.assert_any_call("status", "consumed")

    def test_empty_result_keeps_schema(self):
        sb, _ = _client(cellar_inventory=[])
        df = fetch_inventory(sb)
        assert df.empty
        assert list(df.columns) == INVENTORY_COLUMNS

    def test_query_error_wrapped(self):
        sb, queries = _client(cellar_inventory=[])
        queries["cellar_inventory"].execute.side_effect = Exception("connection reset")

        with pytest.raises(RepositoryError) as exc_info:
            fetch_inventory(sb)
        assert "fetch inventory" in str(exc_info.value)
        assert "connection reset" in str(exc_info.value.__cause__)


class TestFetchRatings:
    """Test rating reads."""

    def test_vintage_and_reference_flattened(self):
        sb, _ = _client(ratings=[
            {"id": "r1", "score": 92,
             "inventory": {"vintage": 2015, "wine_reference": {"name": "Rioja Reserva", "region": "Rioja"}}},
            {"id": "r2", "score": 85, "inventory": None},
        ])
        df = fetch_ratings(sb)

        assert "inventory" not in df.columns
        assert df.loc[0, "vintage"] == 2015
        assert df.loc[0, "region"] == "Rioja"
        assert pd.isna(df.loc[1, "vintage"])


class TestOtherReads:
    """Test the planning table reads."""

    def test_wishlist(self):
        sb, _ = _client(wishlist=[{"id": "w1", "status": "active", "priority": "high"}])
        df = fetch_wishlist(sb)
        assert len(df) == 1
        assert "target_price_cents" in df.columns

    def test_winery_visits_newest_first(self):
        sb, queries = _client(winery_visits=[])
        fetch_winery_visits(sb)
        queries["winery_visits"].order.assert_called_once_with("visit_date", desc=True)


class TestFetchSocialRows:
    """Test the social dashboard reads."""

    def test_rows_returned(self):
        sb, queries = _client(
            friendships=[{"id": "f1", "requester_id": "u1", "addressee_id": "u2", "status": "accepted"}],
            shared_tastings=[{"id": "t1", "user_id": "u1"}, {"id": "t2", "user_id": "u1"}],
            tasting_likes=[{"id": "l1", "shared_tasting_id": "t1"}],
        )
        rows = fetch_social_rows(sb, "u1")

        assert set(rows) == {"friendships", "shared_tastings", "likes"}
        assert len(rows["friendships"]) == 1
        assert len(rows["shared_tastings"]) == 2
        queries["tasting_likes"].in_.assert_called_once_with("shared_tasting_id", ["t1", "t2"])

    def test_likes_skipped_without_tastings(self):
        """No shared tastings means no likes query."""
        sb, queries = _client(friendships=[], shared_tastings=[], tasting_likes=[])
        rows = fetch_social_rows(sb, "u1")

        assert rows["likes"].empty
        queries["tasting_likes"].execute.assert_not_called()


class TestGetSupabaseClient:
    """Test client creation."""

    def test_invalid_url_wrapped(self):
        """A URL without a scheme is rejected by supabase and surfaces as a RepositoryError."""
        settings = Settings(supabase_url="localhost:54321", supabase_key="key")
        with pytest.raises(RepositoryError) as exc_info:
            get_supabase_client(settings)
        assert "create Supabase client" in str(exc_info.value)

    def test_client_error_chained(self, monkeypatch):
        original = ValueError("bad key")

        def failing_create_client(url, key):
            raise original

        monkeypatch.setattr("cellarbook.repository.create_client", failing_create_client)
        with pytest.raises(RepositoryError) as exc_info:
            get_supabase_client(Settings(supabase_url="https://example.supabase.co", supabase_key="key"))
        assert exc_info.value.__cause__ is original


class TestValidatedFetches:
    """Test the opt-in row validation on reads."""

    def test_valid_rows_pass(self):
        sb, _ = _client(wishlist=[{"id": "w1", "status": "active", "priority": "high", "target_price_cents": 2500}])
        df = fetch_wishlist(sb, validate=True)
        assert df.loc[0, "target_price_cents"] == 2500

    def test_invalid_row_raises(self):
        """The error names the model and the index of the bad row."""
        sb, _ = _client(wishlist=[
            {"id": "w1", "status": "active", "priority": "high"},
            {"id": "w2", "status": "active", "priority": "someday"},
        ])
        with pytest.raises(DataValidationError) as exc_info:
            fetch_wishlist(sb, validate=True)
        assert "WishlistItem row 1" in str(exc_info.value)

    def test_unvalidated_by_default(self):
        sb, _ = _client(wishlist=[{"id": "w2", "status": "active", "priority": "someday"}])
        assert len(fetch_wishlist(sb)) == 1

    def test_ratings_validated_before_flattening(self):
        """Scores outside the 100-point scale are rejected."""
        sb, _ = _client(ratings=[{"id": "r1", "score": 120, "inventory": None}])
        with pytest.raises(DataValidationError):
            fetch_ratings(sb, validate=True)
