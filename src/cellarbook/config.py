"""
Cellarbook Configuration
Centralized settings for the application
"""

import os
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from cellarbook.error_handling import ConfigurationError

DEFAULT_CURRENCY = "USD"
DEFAULT_LOG_LEVEL = "INFO"


class Settings(BaseModel):
    """Runtime settings resolved from the environment."""

    supabase_url: str = Field(..., description="Supabase project URL")
    supabase_key: str = Field(..., description="Supabase API key")
    cellar_id: Optional[str] = Field(None, description="Default cellar to report on")
    currency: str = Field(DEFAULT_CURRENCY, min_length=3, max_length=3)
    log_level: str = Field(DEFAULT_LOG_LEVEL)


def normalize_secret_string(raw_value: Any, secret_name: str) -> str:
    """Normalize a string secret value and guard against common formatting issues."""
    if raw_value is None:
        raise ConfigurationError(f"{secret_name} is missing")

    value = str(raw_value).strip()

    # Handle accidental copied quotes around the value
    quote_pairs = [
        ('"', '"'),
        ("'", "'"),
        ("“", "”"),
        ("‘", "’"),
    ]
    for left_quote, right_quote in quote_pairs:
        if value.startswith(left_quote) and value.endswith(right_quote) and len(value) >= 2:
            value = value[1:-1].strip()
            break

    if not value:
        raise ConfigurationError(f"{secret_name} is empty")
    return value


def _optional_env(name: str) -> Optional[str]:
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return None
    return normalize_secret_string(raw_value, name)


def load_settings(env_file: Optional[str] = None) -> Settings:
    """
    Build Settings from the environment.

    Values already set in the environment win over the .env file.

    Args:
        env_file: Optional path to a .env file (default: search from cwd)

    Returns:
        Settings

    Raises:
        ConfigurationError: if SUPABASE_URL or SUPABASE_KEY is missing, or a
            setting is malformed (e.g. a currency code that is not 3 letters)
    """
    load_dotenv(env_file)

    try:
        return Settings(
            supabase_url=normalize_secret_string(os.getenv("SUPABASE_URL"), "SUPABASE_URL"),
            supabase_key=normalize_secret_string(os.getenv("SUPABASE_KEY"), "SUPABASE_KEY"),
            cellar_id=_optional_env("CELLAR_ID"),
            currency=(_optional_env("CELLARBOOK_CURRENCY") or DEFAULT_CURRENCY).upper(),
            log_level=(_optional_env("CELLARBOOK_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e
