"""geopeaks: store and query cities and mountain peaks in a Redis geo index.

geopeaks seeds a small set of Alpine cities and peaks into the geo index
of a Redis database, looks them up, finds the peaks nearest to a city and
exports everything to CSV for geojson.io.

Quick Start:
    from geopeaks import seed, lookup, find_nearby

    seed()
    print(lookup("Geneva"))
    print(find_nearby("Geneva", radius=150))

For command-line usage, run: geopeaks --help
"""

__version__ = "0.1.0"

# Expose API functions at package level for easy imports
from geopeaks.api import (
    # Exceptions
    ExportError,
    GeoPeaksError,
    LocationNotFoundError,
    SearchError,
    StoreError,
    # Operations
    export,
    find_nearby,
    flush,
    load_locations,
    lookup,
    seed,
)

__all__ = [
    "ExportError",
    "GeoPeaksError",
    "LocationNotFoundError",
    "SearchError",
    "StoreError",
    "__version__",
    "export",
    "find_nearby",
    "flush",
    "load_locations",
    "lookup",
    "seed",
]
