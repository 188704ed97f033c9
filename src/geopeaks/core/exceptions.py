"""Exception hierarchy for geopeaks.

This module defines all geopeaks exceptions in a single location. The store
client and the API raise these exceptions directly; the CLI catches and
formats them for users.

Exception Hierarchy:
    GeoPeaksError (base)
    |-- ConfigError - Invalid environment configuration
    |-- LocationNotFoundError - Member missing from a geo-set
    |-- SearchError - Invalid radius query parameters
    |-- ExportError - CSV export failures
    +-- StoreError - Key-value store command failures
        +-- StoreConnectionError - Store unreachable
"""


class GeoPeaksError(Exception):
    """Base exception for all geopeaks errors.

    Example:
        try:
            lookup("Zurich")
        except GeoPeaksError as e:
            print(f"error: {e}")
    """

    pass


class ConfigError(GeoPeaksError):
    """Raised when an environment setting cannot be parsed.

    Attributes:
        variable: Name of the offending environment variable
    """

    def __init__(self, message: str, variable: str | None = None):
        self.variable = variable
        super().__init__(message)


class LocationNotFoundError(GeoPeaksError):
    """Raised when a named member is not present in a geo-set.

    Attributes:
        set_name: The geo-set that was queried
        name: The member that was not found
    """

    def __init__(self, set_name: str, name: str):
        self.set_name = set_name
        self.name = name
        super().__init__(f"'{name}' not found in geo-set '{set_name}'")


class SearchError(GeoPeaksError, ValueError):
    """Raised when radius query parameters are invalid."""

    pass


class ExportError(GeoPeaksError):
    """Raised when the CSV export cannot be written.

    Attributes:
        path: Target file path
    """

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)


class StoreError(GeoPeaksError):
    """Base exception for store command failures.

    Attributes:
        message: Human-readable error description
        command: Store command that failed (e.g. GEOADD)
        recoverable: Whether the error might be resolved by retrying
    """

    def __init__(
        self, message: str, command: str = "unknown", recoverable: bool = False
    ):
        self.message = message
        self.command = command
        self.recoverable = recoverable
        super().__init__(message)


class StoreConnectionError(StoreError):
    """Raised when the store cannot be reached."""

    def __init__(self, message: str, command: str = "PING"):
        super().__init__(message, command, recoverable=True)
