"""Configuration from environment variables.

Environment variables:
    GEOPEAKS_REDIS_HOST: Store host (default: localhost)
    GEOPEAKS_REDIS_PORT: Store port (default: 6379)
    GEOPEAKS_REDIS_DB: Logical database index (default: 1)
    GEOPEAKS_RADIUS: Default search radius for `find` (default: 200)
    GEOPEAKS_UNIT: Default search unit for `find` (default: km)
"""

import logging
import os
from dataclasses import dataclass

from geopeaks.core.exceptions import ConfigError

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 6379
DEFAULT_DB = 1
DEFAULT_RADIUS = 200.0
DEFAULT_UNIT = "km"

VALID_UNITS = ("m", "km", "mi", "ft")

# ----------------------------------------------------------------
# Logging
# ----------------------------------------------------------------

logger = logging.getLogger("geopeaks")

if not logger.handlers:
    _handler = logging.StreamHandler()
    _handler.setFormatter(
        logging.Formatter("%(levelname)s | %(name)s | %(message)s")
    )
    _handler.setLevel(logging.INFO)
    logger.addHandler(_handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False


def set_log_level(verbose: bool) -> None:
    """Switch the package logger (and its handlers) between INFO and DEBUG."""
    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


# ----------------------------------------------------------------
# Store connection
# ----------------------------------------------------------------


@dataclass(frozen=True)
class StoreConfig:
    """Immutable store connection config."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    db: int = DEFAULT_DB

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}/{self.db}"


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}", name) from e


def get_config(
    host: str | None = None, port: int | None = None, db: int | None = None
) -> StoreConfig:
    """Read store config from environment; explicit arguments take priority."""
    return StoreConfig(
        host=host or (os.getenv("GEOPEAKS_REDIS_HOST") or "").strip() or DEFAULT_HOST,
        port=port if port is not None else _env_int("GEOPEAKS_REDIS_PORT", DEFAULT_PORT),
        db=db if db is not None else _env_int("GEOPEAKS_REDIS_DB", DEFAULT_DB),
    )


# ----------------------------------------------------------------
# Search defaults
# ----------------------------------------------------------------


def get_default_radius() -> float:
    """Default search radius from GEOPEAKS_RADIUS, or DEFAULT_RADIUS.

    Raises:
        ConfigError: If GEOPEAKS_RADIUS is not a number.
    """
    raw_radius = (os.getenv("GEOPEAKS_RADIUS") or "").strip()
    if not raw_radius:
        return DEFAULT_RADIUS
    try:
        return float(raw_radius)
    except ValueError as e:
        raise ConfigError(
            f"GEOPEAKS_RADIUS must be a number, got {raw_radius!r}",
            "GEOPEAKS_RADIUS",
        ) from e


def get_default_unit() -> str:
    """Default search unit from GEOPEAKS_UNIT, or DEFAULT_UNIT.

    Raises:
        ConfigError: If GEOPEAKS_UNIT is not one of VALID_UNITS.
    """
    unit = (os.getenv("GEOPEAKS_UNIT") or DEFAULT_UNIT).strip().lower()
    if unit not in VALID_UNITS:
        raise ConfigError(
            f"GEOPEAKS_UNIT must be one of {', '.join(VALID_UNITS)}, got {unit!r}",
            "GEOPEAKS_UNIT",
        )
    return unit


def get_search_defaults() -> tuple[float, str]:
    """Return the default (radius, unit) for proximity searches."""
    return get_default_radius(), get_default_unit()
