"""Configuration loading for MarketLens.

Settings live in a TOML file at ``~/.config/marketlens/config.toml``
(override the location with ``MARKETLENS_CONFIG``). Every key is optional;
a missing or unreadable file yields the defaults below.

Example::

    [provider]
    base_url = "https://query1.finance.yahoo.com"
    timeout = 10
    cache_ttl = 60

    [markets]
    watchlist = ["SPY", "QQQ", "GLD"]

    [server]
    port = 8000
    allowed_origins = ["http://localhost:3000"]
"""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

import toml
from pydantic import BaseModel, Field, ValidationError

from marketlens.watchlist import DEFAULT_WATCHLIST

log = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "marketlens" / "config.toml"


class ProviderSettings(BaseModel):
    """Chart provider connection settings."""

    base_url: str = "https://query1.finance.yahoo.com"
    timeout: float = Field(10.0, gt=0)
    user_agent: str = "Mozilla/5.0"
    # Seconds a chart response is reused; 0 disables caching
    cache_ttl: float = Field(60.0, ge=0)

    model_config = {"frozen": True}


class MarketsSettings(BaseModel):
    """Symbols shown by the overview."""

    watchlist: list[str] = Field(default_factory=lambda: list(DEFAULT_WATCHLIST))

    model_config = {"frozen": True}


class ServerSettings(BaseModel):
    """HTTP server settings."""

    host: str = "127.0.0.1"
    port: int = Field(8000, ge=1, le=65535)
    allowed_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://localhost:8080"]
    )

    model_config = {"frozen": True}


class Settings(BaseModel):
    """Top level MarketLens configuration."""

    provider: ProviderSettings = Field(default_factory=ProviderSettings)
    markets: MarketsSettings = Field(default_factory=MarketsSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    model_config = {"frozen": True}


def get_config_path() -> Path:
    """Location of the configuration file."""
    override = os.getenv("MARKETLENS_CONFIG")
    return Path(override) if override else DEFAULT_CONFIG_PATH


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from a TOML file, falling back to defaults.

    Args:
        path: Config file to read. Defaults to ``get_config_path()``.

    Returns:
        Parsed Settings.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        return Settings()

    try:
        raw = toml.load(config_path)
        return Settings.model_validate(raw)
    except (toml.TomlDecodeError, OSError, ValidationError) as e:
        log.warning("Ignoring invalid config file %s: %s", config_path, e)
        return Settings()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings."""
    return load_settings()
