"""geopeaks Python API.

The five operations behind the CLI, usable directly from Python. Each one
takes an optional GeoStore; when omitted, a cached connection built from
the environment (see geopeaks.config) is used.

Unlike the CLI, this API returns native Python types:
- seed() returns a dict of newly added member counts per geo-set
- lookup() returns a Location
- find_nearby() returns a list of NearbyResult, nearest first
- load_locations() returns a pd.DataFrame
- export() returns the number of rows written

Example:
    from geopeaks import seed, find_nearby

    seed()
    for peak in find_nearby("Zurich"):
        print(peak.name, round(peak.distance))
"""

import logging
from pathlib import Path

import pandas as pd

from geopeaks.config import VALID_UNITS, get_default_radius, get_default_unit
from geopeaks.core.exceptions import (
    ExportError,
    GeoPeaksError,
    LocationNotFoundError,
    SearchError,
    StoreError,
)
from geopeaks.core.locations import CITIES_KEY, PEAKS_KEY, GeoSetRegistry, Location
from geopeaks.core.store import GeoStore, NearbyResult, get_store

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = ["name", "lat", "lon", "marker-color"]

__all__ = [
    "ExportError",
    "GeoPeaksError",
    "LocationNotFoundError",
    "SearchError",
    "StoreError",
    "export",
    "find_nearby",
    "flush",
    "load_locations",
    "lookup",
    "resolve_search",
    "seed",
]


def _store(store: GeoStore | None) -> GeoStore:
    return store if store is not None else get_store()


# =============================================================================
# Seeding
# =============================================================================


def seed(store: GeoStore | None = None) -> dict[str, int]:
    """Load the built-in cities and peaks into their geo-sets.

    Re-running is safe: existing members keep their name and are
    counted as not new.

    Returns:
        Mapping of geo-set name to the number of newly added members.

    Example:
        >>> seed()
        {'cities': 6, 'peaks': 6}
    """
    store = _store(store)
    added = {}
    for geo_set in GeoSetRegistry.list_all():
        added[geo_set.name] = store.add(geo_set.name, geo_set.seed)
        logger.info(
            f"Seeded '{geo_set.name}': {len(geo_set.seed)} records, "
            f"{added[geo_set.name]} new"
        )
    return added


# =============================================================================
# Queries
# =============================================================================


def lookup(name: str, store: GeoStore | None = None) -> Location:
    """Look up the stored coordinates of a city.

    Raises:
        LocationNotFoundError: If the city is not in the `cities` geo-set.
    """
    store = _store(store)
    pos = store.position(CITIES_KEY, name)
    if pos is None:
        raise LocationNotFoundError(CITIES_KEY, name)
    lon, lat = pos
    return Location(name=name, latitude=lat, longitude=lon)


def resolve_search(
    radius: float | None = None, unit: str | None = None
) -> tuple[float, str]:
    """Fill in missing search parameters from the environment and validate them.

    Environment defaults are only read for arguments left as None.

    Raises:
        SearchError: If radius is not positive or unit is unknown.
        ConfigError: If a needed environment default is malformed.
    """
    if radius is None:
        radius = get_default_radius()
    unit = unit.lower() if unit else get_default_unit()

    if radius <= 0:
        raise SearchError(f"Radius must be positive, got {radius}")
    if unit not in VALID_UNITS:
        raise SearchError(
            f"Unknown unit '{unit}'. Supported units: {', '.join(VALID_UNITS)}"
        )
    return radius, unit


def find_nearby(
    name: str,
    radius: float | None = None,
    unit: str | None = None,
    store: GeoStore | None = None,
) -> list[NearbyResult]:
    """Find the peaks within radius of a city, nearest first.

    Args:
        name: City in the `cities` geo-set to search around.
        radius: Search radius; defaults to GEOPEAKS_RADIUS or 200.
        unit: One of m, km, mi, ft; defaults to GEOPEAKS_UNIT or km.

    Raises:
        SearchError: If radius is not positive or unit is unknown.
        LocationNotFoundError: If the city is not in the `cities` geo-set.
    """
    radius, unit = resolve_search(radius, unit)

    center = lookup(name, store=store)
    results = _store(store).search_radius(
        PEAKS_KEY, center.longitude, center.latitude, radius, unit
    )
    logger.debug(f"{len(results)} peaks within {radius:g} {unit} of '{name}'")
    return results


def load_locations(key: str, store: GeoStore | None = None) -> pd.DataFrame:
    """All members of a geo-set with their stored coordinates.

    Members removed between listing and lookup are skipped with a warning.

    Returns:
        DataFrame with columns name, lat, lon in the store's index order.
    """
    store = _store(store)
    rows = []
    for member in store.members(key):
        pos = store.position(key, member)
        if pos is None:
            logger.warning(f"'{member}' vanished from '{key}' during export, skipped")
            continue
        lon, lat = pos
        rows.append({"name": member, "lat": lat, "lon": lon})
    return pd.DataFrame(rows, columns=["name", "lat", "lon"])


# =============================================================================
# Export / maintenance
# =============================================================================


def export(path: str | Path, store: GeoStore | None = None) -> int:
    """Write every geo-set to a CSV file that geojson.io can import.

    Columns are name, lat, lon, marker-color. Cities come first, then
    peaks, each in the store's index order.

    Returns:
        Number of data rows written.

    Raises:
        ExportError: If the file cannot be written.
    """
    store = _store(store)
    frames = []
    for geo_set in GeoSetRegistry.list_all():
        df = load_locations(geo_set.name, store=store)
        if df.empty:
            continue
        df["marker-color"] = geo_set.marker_color
        frames.append(df)

    if frames:
        table = pd.concat(frames, ignore_index=True)[EXPORT_COLUMNS]
    else:
        table = pd.DataFrame(columns=EXPORT_COLUMNS)

    target = Path(path)
    try:
        table.to_csv(target, index=False, float_format="%.6f")
    except OSError as e:
        raise ExportError(f"Could not write {target}: {e}", str(target)) from e

    logger.info(f"Exported {len(table)} locations to {target}")
    return len(table)


def flush(store: GeoStore | None = None) -> None:
    """Delete every key in the configured database."""
    _store(store).flush()
    logger.info("Database flushed")
