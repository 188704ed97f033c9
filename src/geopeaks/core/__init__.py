"""geopeaks core - locations, geo-set registry and the store client.

The core has no terminal output so it can be reused from the Python API
and tested without a CLI. The store client lives in geopeaks.core.store
and is imported from there directly.
"""

from geopeaks.core.locations import (
    CITIES,
    PEAKS,
    GeoSetDefinition,
    GeoSetRegistry,
    Location,
)

__all__ = [
    "CITIES",
    "PEAKS",
    "GeoSetDefinition",
    "GeoSetRegistry",
    "Location",
]
