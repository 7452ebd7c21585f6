"""
Runtime configuration for palidict.

Settings come from environment variables with hardcoded fallbacks:

    PALIDICT_DATA_PATH      root of the dictionary data (contains en/ped, en/dppn)
    PALIDICT_CACHE_TTL      seconds a cached volume or result stays valid
    PALIDICT_MIN_CONTAINS   minimum query length for substring matches
    PALIDICT_MAX_WORKERS    thread pool size for lookup_many / lookup_async
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

# Hardcoded fallback defaults
DEFAULT_CACHE_TTL = 3600.0
DEFAULT_MIN_CONTAINS_LENGTH = 3
DEFAULT_MAX_WORKERS = 4


def get_default_data_path() -> Path:
    """Get the default data directory bundled with the package."""
    return Path(__file__).parent / "data"


@dataclass(frozen=True)
class Settings:
    """
    Engine settings.

    Attributes:
        data_path: Directory holding en/ped/<n>/ped.xml and en/dppn/<n>.xml
        cache_ttl: Time-to-live for cached volumes and search results, seconds
        min_contains_length: Shortest query allowed to match inside a headword
        max_workers: Upper bound on concurrent lookups for the batch/async API
    """
    data_path: Path
    cache_ttl: float = DEFAULT_CACHE_TTL
    min_contains_length: int = DEFAULT_MIN_CONTAINS_LENGTH
    max_workers: int = DEFAULT_MAX_WORKERS

    def with_data_path(self, path) -> "Settings":
        return replace(self, data_path=Path(path))


def _read_number(env: Mapping[str, str], name: str, default, cast):
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {raw!r}")
    return value


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build settings from the environment.

    Args:
        env: Mapping to read instead of ``os.environ`` (used by tests)

    Returns:
        A Settings instance

    Raises:
        ValueError: If a numeric variable is malformed or out of range
    """
    if env is None:
        env = os.environ

    data_path = env.get("PALIDICT_DATA_PATH")

    settings = Settings(
        data_path=Path(data_path) if data_path else get_default_data_path(),
        cache_ttl=_read_number(env, "PALIDICT_CACHE_TTL", DEFAULT_CACHE_TTL, float),
        min_contains_length=_read_number(
            env, "PALIDICT_MIN_CONTAINS", DEFAULT_MIN_CONTAINS_LENGTH, int
        ),
        max_workers=_read_number(env, "PALIDICT_MAX_WORKERS", DEFAULT_MAX_WORKERS, int),
    )
    if settings.cache_ttl <= 0:
        raise ValueError("PALIDICT_CACHE_TTL must be > 0")
    if settings.max_workers < 1:
        raise ValueError("PALIDICT_MAX_WORKERS must be >= 1")
    return settings
