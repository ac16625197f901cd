"""
Tests for settings loading.
"""

import pytest
from pydantic import ValidationError

from cellarbook.config import load_settings, normalize_secret_string
from cellarbook.error_handling import ConfigurationError

ENV_VARS = ["SUPABASE_URL", "SUPABASE_KEY", "CELLAR_ID", "CELLARBOOK_CURRENCY", "CELLARBOOK_LOG_LEVEL"]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """No cellarbook variables set and a .env path that does not exist."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return str(tmp_path / "missing.env")


class TestNormalizeSecretString:
    """Test secret cleanup."""

    def test_plain_value(self):
        assert normalize_secret_string("  abc  ", "KEY") == "abc"

    def test_copied_quotes_removed(self):
        assert normalize_secret_string('"abc"', "KEY") == "abc"
        assert normalize_secret_string("'abc'", "KEY") == "abc"
        assert normalize_secret_string("“abc”", "KEY") == "abc"

    def test_missing_raises(self):
        with pytest.raises(ConfigurationError) as exc_info:
            normalize_secret_string(None, "SUPABASE_KEY")
        assert "SUPABASE_KEY" in str(exc_info.value)

    def test_empty_raises(self):
        with pytest.raises(ConfigurationError):
            normalize_secret_string('  ""  ', "SUPABASE_KEY")


class TestLoadSettings:
    """Test building Settings from the environment."""

    def test_required_values(self, monkeypatch, clean_env):
        monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
        monkeypatch.setenv("SUPABASE_KEY", "'secret'")

        settings = load_settings(clean_env)
        assert settings.supabase_url == "https://example.supabase.co"
        assert settings.supabase_key == "secret"
        assert settings.cellar_id is None
        assert settings.currency == "USD"
        assert settings.log_level == "INFO"

    def test_optional_values(self, monkeypatch, clean_env):
        monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
        monkeypatch.setenv("SUPABASE_KEY", "secret")
        monkeypatch.setenv("CELLAR_ID", "cellar-1")
        monkeypatch.setenv("CELLARBOOK_CURRENCY", "eur")
        monkeypatch.setenv("CELLARBOOK_LOG_LEVEL", "debug")

        settings = load_settings(clean_env)
        assert settings.cellar_id == "cellar-1"
        assert settings.currency == "EUR"
        assert settings.log_level == "DEBUG"

    def test_missing_url_raises(self, monkeypatch, clean_env):
        monkeypatch.setenv("SUPABASE_KEY", "secret")
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(clean_env)
        assert "SUPABASE_URL" in str(exc_info.value)

    def test_env_file_is_read(self, monkeypatch, clean_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("SUPABASE_URL=https://file.supabase.co\nSUPABASE_KEY=from-file\n")

        settings = load_settings(str(env_file))
        assert settings.supabase_url == "https://file.supabase.co"
        assert settings.supabase_key == "from-file"

        # load_dotenv wrote to os.environ; let monkeypatch undo it
        monkeypatch.delenv("SUPABASE_URL")
        monkeypatch.delenv("SUPABASE_KEY")

    def test_malformed_currency_raises(self, monkeypatch, clean_env):
        """A currency code that is not 3 letters is a configuration error."""
        monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
        monkeypatch.setenv("SUPABASE_KEY", "secret")
        monkeypatch.setenv("CELLARBOOK_CURRENCY", "EURO")

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(clean_env)
        assert "currency" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, ValidationError)
