"""
Runtime configuration.

Environment Variables:
  GITHUB_TOKEN                      : Bearer token for the GraphQL API (required upstream).
  PORT                              : Listening port. Default 3000.
  CACHE_MAX_CAPACITY_MB             : Weighted capacity of each response cache. Default 32.
  CACHE_USER_STATS_TTL_SECONDS      : Stats cache TTL. Default 900.
  CACHE_USER_LANGUAGES_TTL_SECONDS  : Languages cache TTL. Default 3600.
  LOG_LEVEL                         : Root log level. Default INFO.
  DEBUG                             : '1' => force DEBUG logging.
  DOCS_URL                          : Link rendered into error cards.
"""

from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

GITHUB_GRAPHQL_URL = "https://api.github.com/graphql"
USER_AGENT = "github-statcard"
CONNECT_TIMEOUT = 5
READ_TIMEOUT = 20

DEFAULT_PORT = 3000
DEFAULT_CACHE_MAX_CAPACITY_MB = 32
DEFAULT_USER_STATS_TTL = 900
DEFAULT_USER_LANGUAGES_TTL = 3600
DEFAULT_DOCS_URL = "https://github.com/samgozman/github-statcrab#readme"

ASSETS_DIR = Path(__file__).resolve().parent / "assets"
THEMES_DIR = ASSETS_DIR / "themes"
BASE_CSS_PATH = ASSETS_DIR / "card.css"
LANGUAGE_COLORS_PATH = ASSETS_DIR / "language-colors.json"


def env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logging.getLogger(__name__).warning("Invalid %s=%r; using default %s", name, raw, default)
        return default


def github_token() -> Optional[str]:
    token = os.environ.get("GITHUB_TOKEN", "").strip()
    return token or None


def port() -> int:
    return env_int("PORT", DEFAULT_PORT)


def docs_url() -> str:
    return os.environ.get("DOCS_URL") or DEFAULT_DOCS_URL


@dataclass(frozen=True)
class CacheConfig:
    max_capacity_mb: int = DEFAULT_CACHE_MAX_CAPACITY_MB
    user_stats_ttl: float = DEFAULT_USER_STATS_TTL
    user_languages_ttl: float = DEFAULT_USER_LANGUAGES_TTL

    @property
    def max_capacity_bytes(self) -> int:
        return self.max_capacity_mb * 1024 * 1024

    @classmethod
    def from_env(cls) -> "CacheConfig":
        return cls(
            max_capacity_mb=env_int("CACHE_MAX_CAPACITY_MB", DEFAULT_CACHE_MAX_CAPACITY_MB),
            user_stats_ttl=env_int("CACHE_USER_STATS_TTL_SECONDS", DEFAULT_USER_STATS_TTL),
            user_languages_ttl=env_int("CACHE_USER_LANGUAGES_TTL_SECONDS", DEFAULT_USER_LANGUAGES_TTL),
        )


def configure_logging() -> None:
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    if os.environ.get("DEBUG", "0") == "1":
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
