"""Thin client for the key-value store's geospatial commands.

GeoStore wraps a redis-py client and exposes the handful of GEO and
sorted-set commands this tool needs. Distance math and indexing live
inside the store; nothing here computes geometry.

- GeoStore: add, position, search_radius, members, flush
- connect(): Build a client from StoreConfig and PING it
- get_store(): Cached factory keyed by connection address
"""

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass

import redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from geopeaks.config import StoreConfig, get_config
from geopeaks.core.exceptions import StoreConnectionError, StoreError
from geopeaks.core.locations import Location

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NearbyResult:
    """A member returned by a radius query, with its distance from the centre."""

    name: str
    distance: float


class GeoStore:
    """Geo-set operations against a single logical database."""

    def __init__(self, client: redis.Redis, address: str = "unknown"):
        self.client = client
        self.address = address

    def _run(self, command: str, fn, *args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except (RedisConnectionError, RedisTimeoutError) as e:
            raise StoreConnectionError(
                f"{command} failed, store at {self.address} unreachable: {e}",
                command,
            ) from e
        except RedisError as e:
            raise StoreError(f"{command} failed: {e}", command) from e

    def ping(self) -> None:
        self._run("PING", self.client.ping)

    def add(self, key: str, locations: Iterable[Location]) -> int:
        """GEOADD locations into a geo-set.

        Returns:
            Number of members that were newly added (existing members are
            updated in place and not counted).
        """
        values: list = []
        for loc in locations:
            values.extend((loc.longitude, loc.latitude, loc.name))
        if not values:
            return 0
        logger.debug(f"GEOADD {key} ({len(values) // 3} members)")
        return int(self._run("GEOADD", self.client.geoadd, key, values))

    def position(self, key: str, name: str) -> tuple[float, float] | None:
        """Return (longitude, latitude) of a member, or None if it is absent."""
        positions = self._run("GEOPOS", self.client.geopos, key, name)
        if not positions or positions[0] is None:
            return None
        lon, lat = positions[0]
        return float(lon), float(lat)

    def search_radius(
        self,
        key: str,
        longitude: float,
        latitude: float,
        radius: float,
        unit: str = "km",
    ) -> list[NearbyResult]:
        """Members within radius of a point, nearest first, with distances."""
        logger.debug(
            f"GEOSEARCH {key} FROMLONLAT {longitude} {latitude} "
            f"BYRADIUS {radius} {unit} ASC WITHDIST"
        )
        rows = self._run(
            "GEOSEARCH",
            self.client.geosearch,
            key,
            longitude=longitude,
            latitude=latitude,
            radius=radius,
            unit=unit,
            sort="ASC",
            withdist=True,
        )
        return [NearbyResult(name=name, distance=float(dist)) for name, dist in rows]

    def members(self, key: str) -> list[str]:
        """All members of a geo-set in the store's index order."""
        return list(self._run("ZRANGE", self.client.zrange, key, 0, -1))

    def flush(self) -> None:
        """Delete every key in the selected database."""
        logger.debug(f"FLUSHDB on {self.address}")
        self._run("FLUSHDB", self.client.flushdb)


def connect(config: StoreConfig | None = None) -> GeoStore:
    """Create a client for config and verify it answers PING.

    Raises:
        StoreConnectionError: If the store cannot be reached
    """
    if config is None:
        config = get_config()

    client = redis.Redis(
        host=config.host,
        port=config.port,
        db=config.db,
        decode_responses=True,
        socket_connect_timeout=5,
        socket_timeout=5,
    )
    store = GeoStore(client, address=config.address)
    store.ping()
    logger.debug(f"Connected to store at {config.address}")
    return store


# Cache for store instances with thread safety
_store_lock = threading.Lock()
_store_cache: dict[StoreConfig, GeoStore] = {}


def get_store(config: StoreConfig | None = None) -> GeoStore:
    """Get a connected store for config, reusing an earlier connection."""
    if config is None:
        config = get_config()

    with _store_lock:
        if config in _store_cache:
            return _store_cache[config]
        store = connect(config)
        _store_cache[config] = store
        return store


def reset_store_cache() -> None:
    """Clear the store cache."""
    with _store_lock:
        _store_cache.clear()
