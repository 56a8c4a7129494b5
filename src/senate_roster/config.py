"""Centralized configuration for the Senate roster service.

All settings live here so they can be overridden by environment variables or a
``.env`` file without touching source code.

**Profile system:** Set ``SENATE_PROFILE=dev`` (default) or ``SENATE_PROFILE=prod``
to get sensible defaults for each environment.  Any individual ``SENATE_*`` var
still overrides the profile value.

Usage::

    from senate_roster.config import load_settings

    settings = load_settings()
    settings.cache_ttl_seconds  # 3600.0
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime

from dotenv import load_dotenv

# Load .env from current working directory (project root when running uvicorn)
load_dotenv()

LOGGER = logging.getLogger(__name__)

# ── Profile: one knob for the whole environment ──────────────────────────────

PROFILE: str = os.getenv("SENATE_PROFILE", "dev").lower().strip()

_PROFILE_DEFAULTS: dict[str, dict[str, str]] = {
    "dev": {
        "SENATE_CORS_ORIGINS": "*",
        "SENATE_LOG_LEVEL": "INFO",
        "SENATE_PREFETCH": "0",
    },
    "prod": {
        "SENATE_CORS_ORIGINS": "",  # empty → must be explicitly set
        "SENATE_LOG_LEVEL": "WARNING",
        "SENATE_PREFETCH": "1",
    },
}

if PROFILE not in _PROFILE_DEFAULTS:
    LOGGER.warning("Unknown SENATE_PROFILE=%r, falling back to 'dev'.", PROFILE)
    PROFILE = "dev"

_defaults = _PROFILE_DEFAULTS[PROFILE]


def _env(key: str, fallback: str = "") -> str:
    """Read an env var, falling back to profile default then *fallback*."""
    return os.getenv(key, _defaults.get(key, fallback))


# ── Defaults ─────────────────────────────────────────────────────────────────

DEFAULT_SOURCE_URL = "https://en.wikipedia.org/wiki/List_of_current_United_States_senators"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)
DEFAULT_CACHE_TTL_SECONDS = 3600.0
DEFAULT_MIN_PLAUSIBLE_RECORDS = 50
DEFAULT_OFFICE_DATE = "2021-01-03"
DEFAULT_TABLE_MARKER = "wikitable sortable"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _office_date(raw: str) -> str:
    """*raw* if it is a ``YYYY-MM-DD`` date, else :data:`DEFAULT_OFFICE_DATE`."""
    try:
        return datetime.strptime(raw, "%Y-%m-%d").date().isoformat()
    except ValueError:
        LOGGER.warning(
            "SENATE_DEFAULT_OFFICE_DATE=%r is not YYYY-MM-DD; using %s.",
            raw,
            DEFAULT_OFFICE_DATE,
        )
        return DEFAULT_OFFICE_DATE


def _log_level(raw: str) -> str:
    """Canonical level name for *raw* (``warn`` → ``WARNING``), else ``INFO``."""
    level = logging.getLevelName(logging.getLevelName(raw.upper()))
    if level not in _LOG_LEVELS:
        LOGGER.warning("Unknown SENATE_LOG_LEVEL=%r, falling back to INFO.", raw)
        return "INFO"
    return level


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings.

    Construct directly in tests; use :func:`load_settings` everywhere else.
    """

    source_url: str = DEFAULT_SOURCE_URL
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout: float = 20.0
    cache_ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS
    # Below this many table rows the link-scan recovery pass runs.
    min_plausible_records: int = DEFAULT_MIN_PLAUSIBLE_RECORDS
    default_office_date: str = DEFAULT_OFFICE_DATE
    table_marker: str = DEFAULT_TABLE_MARKER
    cors_origins: str = "*"
    log_level: str = "INFO"
    prefetch: bool = False
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    @property
    def table_marker_classes(self) -> list[str]:
        return self.table_marker.split()

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


def load_settings() -> Settings:
    """Build :class:`Settings` from the environment (and ``.env``)."""
    settings = Settings(
        source_url=_env("SENATE_SOURCE_URL", DEFAULT_SOURCE_URL).strip(),
        user_agent=_env("SENATE_USER_AGENT", DEFAULT_USER_AGENT).strip(),
        request_timeout=float(_env("SENATE_REQUEST_TIMEOUT", "20")),
        cache_ttl_seconds=float(
            _env("SENATE_CACHE_TTL_SECONDS", str(DEFAULT_CACHE_TTL_SECONDS))
        ),
        min_plausible_records=int(
            _env("SENATE_MIN_PLAUSIBLE_RECORDS", str(DEFAULT_MIN_PLAUSIBLE_RECORDS))
        ),
        default_office_date=_office_date(
            _env("SENATE_DEFAULT_OFFICE_DATE", DEFAULT_OFFICE_DATE).strip()
        ),
        table_marker=_env("SENATE_TABLE_MARKER", DEFAULT_TABLE_MARKER).strip()
        or DEFAULT_TABLE_MARKER,
        cors_origins=_env("SENATE_CORS_ORIGINS").strip(),
        log_level=_log_level(_env("SENATE_LOG_LEVEL", "INFO").strip() or "INFO"),
        prefetch=_env("SENATE_PREFETCH") == "1",
        host=_env("SENATE_HOST", DEFAULT_HOST).strip() or DEFAULT_HOST,
        port=int(_env("SENATE_PORT", str(DEFAULT_PORT))),
    )

    # ── Production guard: warn if CORS is wide-open ──
    if PROFILE == "prod" and settings.cors_origins in ("*", ""):
        LOGGER.warning(
            "SENATE_PROFILE=prod but SENATE_CORS_ORIGINS=%r. "
            "Set it to your front-end origin(s) for security.",
            settings.cors_origins,
        )
    return settings
