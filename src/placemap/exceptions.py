"""Custom exception hierarchy for placemap.

All placemap exceptions inherit from :class:`PlaceMapError`, making it easy
to catch any library error with a single ``except`` clause while still allowing
callers to handle specific failure modes.
"""

from __future__ import annotations


class PlaceMapError(Exception):
    """Base exception for all placemap errors."""


class ConfigError(PlaceMapError):
    """Raised when configuration cannot be read or is invalid."""


class BackendError(PlaceMapError):
    """Raised when a call against the remote places backend fails."""


class BackendTransportError(BackendError):
    """Raised on network failures, error statuses, or undecodable responses."""


class BackendRejectedError(BackendError):
    """Raised when the backend answers with ``success: false``.

    Attributes:
        message: Message reported by the backend, if any.
    """

    def __init__(self, message: str | None = None) -> None:
        self.message = message
        super().__init__(f"Backend rejected the request: {message or 'no message'}")


class FallbackCacheError(PlaceMapError):
    """Raised when the durable fallback cache cannot be read or written."""


class GeocodingError(PlaceMapError):
    """Raised when an external geocoding provider call fails."""


class PlaceValidationError(PlaceMapError):
    """Raised when user input fails local validation before any I/O.

    Attributes:
        errors: Individual validation error messages.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        joined = "\n".join(f"  - {e}" for e in errors)
        super().__init__(f"Place validation failed:\n{joined}")


class OperationCancelledError(PlaceMapError):
    """Raised when the user declines a confirmation."""


class PlaceNotFoundError(PlaceMapError):
    """Raised when an identity does not match any place in the collection."""

    def __init__(self, place_id: str) -> None:
        self.place_id = place_id
        super().__init__(f"Place not found: {place_id!r}")
