"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files
from db.repositories.types import RankingStoreLayout
from ranking.models import COUNT_SOURCES, SORT_DIRECTIONS, CountSource, SortDirection

_ALLOWED_APP_MODES = {"cloud", "local"}


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _require_app_mode() -> str:
    """
    Read and validate APP_MODE from the environment.

    APP_MODE must be explicitly set to 'cloud' or 'local'. Any other value, or
    the absence of the variable, raises RuntimeError.
    """

    _load_env_once()
    raw = os.getenv("APP_MODE")
    if raw is None:
        raise RuntimeError("APP_MODE must be explicitly set to 'cloud' or 'local'.")
    mode = raw.strip().lower()
    if mode not in _ALLOWED_APP_MODES:
        raise RuntimeError(
            f"APP_MODE '{raw.strip()}' is not valid. "
            f"Allowed values: {sorted(_ALLOWED_APP_MODES)}."
        )
    return mode


@dataclass(frozen=True)
class AppSettings:
    """
    Top-level application mode settings.
    """

    mode: str


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    """
    Return cached application settings.

    Raises RuntimeError if APP_MODE is missing or invalid.
    """

    return AppSettings(mode=_require_app_mode())


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_optional_str_env(name: str) -> str | None:
    """
    Read an optional string value from environment variables.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _get_choice_env(name: str, default: str, allowed: frozenset[str]) -> str:
    """
    Read a string restricted to *allowed*.

    Unlike the other readers, an unrecognised value is an error rather than a
    silent fallback, since these select behaviour callers can observe.
    """

    value = _get_str_env(name, default).lower()
    if value not in allowed:
        raise RuntimeError(
            f"{name}='{value}' is not valid. Allowed values: {sorted(allowed)}."
        )
    return value


@dataclass(frozen=True)
class RankingSettings:
    """
    Runtime settings for ranking aggregation.
    """

    api_key: str | None = None
    source_document_path: str = "develop/ZVP3ieLUu9RTLQN8vkIe"
    source_field: str = "characters"
    shard_root_collection: str = "ratings"
    shard_subcollection: str = "shards"
    ranking_collection: str = "ranking"
    timestamp_field: str = "createdAt"
    count_source: CountSource = "fixed"
    fixed_entity_count: int = 89
    sort_direction: SortDirection = "desc"
    include_timestamp: bool = True
    fetch_concurrency: int = 8
    aggregation_timeout_seconds: float = 60.0

    def store_layout(self) -> RankingStoreLayout:
        return RankingStoreLayout(
            source_document_path=self.source_document_path,
            source_field=self.source_field,
            shard_root_collection=self.shard_root_collection,
            shard_subcollection=self.shard_subcollection,
            ranking_collection=self.ranking_collection,
            timestamp_field=self.timestamp_field,
        )


@dataclass(frozen=True)
class SchedulerSettings:
    """
    Periodic ranking aggregation settings.
    """

    enabled: bool = False
    cron_hour: str = "*"
    cron_minute: str = "0"


@dataclass(frozen=True)
class CORSSettings:
    """
    Cross-origin settings for the HTTP trigger.
    """

    allow_origins: tuple[str, ...] = ("*",)


@lru_cache(maxsize=1)
def get_ranking_settings() -> RankingSettings:
    """
    Return cached ranking settings from environment variables.

    Raises RuntimeError for an unrecognised count source or sort direction.
    """

    return RankingSettings(
        api_key=_get_optional_str_env("RANKING_API_KEY"),
        source_document_path=_get_str_env(
            "RANKING_SOURCE_DOCUMENT_PATH", "develop/ZVP3ieLUu9RTLQN8vkIe"
        ),
        source_field=_get_str_env("RANKING_SOURCE_FIELD", "characters"),
        shard_root_collection=_get_str_env("RANKING_SHARD_ROOT_COLLECTION", "ratings"),
        shard_subcollection=_get_str_env("RANKING_SHARD_SUBCOLLECTION", "shards"),
        ranking_collection=_get_str_env("RANKING_COLLECTION", "ranking"),
        timestamp_field=_get_str_env("RANKING_TIMESTAMP_FIELD", "createdAt"),
        count_source=_get_choice_env("RANKING_COUNT_SOURCE", "fixed", COUNT_SOURCES),  # type: ignore[arg-type]
        fixed_entity_count=max(0, _get_int_env("RANKING_FIXED_ENTITY_COUNT", 89)),
        sort_direction=_get_choice_env("RANKING_SORT_DIRECTION", "desc", SORT_DIRECTIONS),  # type: ignore[arg-type]
        include_timestamp=_get_bool_env("RANKING_INCLUDE_TIMESTAMP", True),
        fetch_concurrency=max(1, _get_int_env("RANKING_FETCH_CONCURRENCY", 8)),
        aggregation_timeout_seconds=max(
            1.0, _get_float_env("RANKING_AGGREGATION_TIMEOUT_SECONDS", 60.0)
        ),
    )


@lru_cache(maxsize=1)
def get_scheduler_settings() -> SchedulerSettings:
    """
    Return scheduler settings from environment variables.
    """

    return SchedulerSettings(
        enabled=_get_bool_env("RANKING_SCHEDULE_ENABLED", False),
        cron_hour=_get_str_env("RANKING_SCHEDULE_CRON_HOUR", "*"),
        cron_minute=_get_str_env("RANKING_SCHEDULE_CRON_MINUTE", "0"),
    )


@lru_cache(maxsize=1)
def get_cors_settings() -> CORSSettings:
    """
    Return CORS settings; CORS_ALLOW_ORIGINS is a comma-separated list.
    """

    raw = _get_str_env("CORS_ALLOW_ORIGINS", "*")
    origins = tuple(origin.strip() for origin in raw.split(",") if origin.strip())
    return CORSSettings(allow_origins=origins or ("*",))
