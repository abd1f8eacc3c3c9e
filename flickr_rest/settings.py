"""Client configuration sourced from environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

DEFAULT_REST_ENDPOINT = "https://api.flickr.com/services/rest/"


@dataclass(slots=True)
class Settings:
    """Runtime configuration sourced from environment variables."""

    api_key: Optional[str] = field(default_factory=lambda: os.getenv("FLICKR_API_KEY"))
    api_secret: Optional[str] = field(
        default_factory=lambda: os.getenv("FLICKR_API_SECRET")
    )
    rest_endpoint: str = field(
        default_factory=lambda: os.getenv("FLICKR_REST_ENDPOINT", DEFAULT_REST_ENDPOINT)
    )
    http_timeout: float = field(
        default_factory=lambda: float(os.getenv("FLICKR_HTTP_TIMEOUT", "30"))
    )
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    def __post_init__(self) -> None:
        self.log_level = self.log_level.upper()

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key) and bool(self.api_secret)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings, reading a ``.env`` file first if one exists."""

    load_dotenv()
    return Settings()
