"""Location records and geo-set definitions.

This module provides:
- Location: A named point (latitude/longitude in degrees)
- GeoSetDefinition: A named geo-set with its seed records and export colour
- GeoSetRegistry: Registry of the geo-sets this tool knows about
"""

from dataclasses import dataclass, field
from typing import ClassVar

# Latitude bounds accepted by the store's geo index (EPSG:3857 limits)
MAX_LATITUDE = 85.05112878
MAX_LONGITUDE = 180.0

CITIES_KEY = "cities"
PEAKS_KEY = "peaks"


@dataclass(frozen=True)
class Location:
    """A named point on the map.

    Attributes:
        name: Member name used as the key inside a geo-set
        latitude: Degrees north, within +/- MAX_LATITUDE
        longitude: Degrees east, within +/- MAX_LONGITUDE
    """

    name: str
    latitude: float
    longitude: float

    def __post_init__(self):
        if not self.name:
            raise ValueError("Location name must not be empty")
        if not -MAX_LATITUDE <= self.latitude <= MAX_LATITUDE:
            raise ValueError(
                f"Latitude {self.latitude} for '{self.name}' is outside "
                f"[-{MAX_LATITUDE}, {MAX_LATITUDE}]"
            )
        if not -MAX_LONGITUDE <= self.longitude <= MAX_LONGITUDE:
            raise ValueError(
                f"Longitude {self.longitude} for '{self.name}' is outside "
                f"[-{MAX_LONGITUDE}, {MAX_LONGITUDE}]"
            )


@dataclass
class GeoSetDefinition:
    """A geo-set stored in the external index.

    Attributes:
        name: Key of the geo-set in the store
        marker_color: Hex colour written to the export's marker-color column
        seed: Built-in records loaded by the `add` command
    """

    name: str
    marker_color: str
    seed: tuple[Location, ...] = field(default_factory=tuple)


# =============================================================================
# BUILT-IN RECORDS
# =============================================================================

CITIES: tuple[Location, ...] = (
    Location("Zurich", 47.3775499, 8.4666755),
    Location("Milan", 45.462889, 9.0376498),
    Location("Geneva", 46.2050836, 6.1090692),
    Location("Salzburg", 47.802904, 12.9863905),
    Location("Nice", 43.7032932, 7.1827775),
    Location("Innsbruck", 47.2692124, 11.4041024),
)

PEAKS: tuple[Location, ...] = (
    Location("Mont Blanc", 45.8326504, 6.8476653),
    Location("Monte Rosa", 45.9370551, 7.8501157),
    Location("Matterhorn", 45.9766029, 7.6409423),
    Location("Grossglockner", 47.0741846, 12.6946761),
    Location("Wildspitze", 46.8854563, 10.8497499),
    Location("Eiger", 46.5775872, 8.0053408),
)


class GeoSetRegistry:
    """Registry of known geo-sets, kept in registration order."""

    _registry: ClassVar[dict[str, GeoSetDefinition]] = {}

    @classmethod
    def register(cls, geo_set: GeoSetDefinition):
        cls._registry[geo_set.name.lower()] = geo_set

    @classmethod
    def get(cls, name: str) -> GeoSetDefinition | None:
        """Get a geo-set by name (case-insensitive), or None."""
        return cls._registry.get(name.lower())

    @classmethod
    def list_all(cls) -> list[GeoSetDefinition]:
        return list(cls._registry.values())

    @classmethod
    def reset(cls):
        """Restore the built-in geo-sets, dropping any others."""
        cls._registry.clear()
        cls._register_builtins()

    @classmethod
    def _register_builtins(cls):
        cls.register(GeoSetDefinition(CITIES_KEY, "#CD0000", CITIES))
        cls.register(GeoSetDefinition(PEAKS_KEY, "#0000CD", PEAKS))


GeoSetRegistry._register_builtins()
