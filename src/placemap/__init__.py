"""Public API surface for placemap."""

__version__ = "0.1.0"

from placemap.activity import ActivityKind, ActivityTracker, BusyIndicator, NullBusyIndicator
from placemap.backend import HttpPlaceBackend, InMemoryPlaceBackend, PlaceBackend
from placemap.config import PlaceMapConfig, load_config
from placemap.exceptions import (
    BackendError,
    BackendRejectedError,
    BackendTransportError,
    ConfigError,
    FallbackCacheError,
    GeocodingError,
    OperationCancelledError,
    PlaceMapError,
    PlaceNotFoundError,
    PlaceValidationError,
)
from placemap.forms import DraftForm
from placemap.geocoding import GeocodingResolver, NominatimGeocoder, PlaceDirectory, load_bundled_directory
from placemap.lifecycle import PlaceLifecycle, new_draft, validate_draft
from placemap.mapview import MapReconciler, MapSurface, SceneMapSurface
from placemap.models import Place, PlaceDraft, PlaceStats, PlaceStatus, PlaceUpdate
from placemap.persistence import FallbackCache
from placemap.store import PlaceStore

__all__ = [
    "ActivityKind",
    "ActivityTracker",
    "BackendError",
    "BackendRejectedError",
    "BackendTransportError",
    "BusyIndicator",
    "ConfigError",
    "DraftForm",
    "FallbackCache",
    "FallbackCacheError",
    "GeocodingError",
    "GeocodingResolver",
    "HttpPlaceBackend",
    "InMemoryPlaceBackend",
    "MapReconciler",
    "MapSurface",
    "NominatimGeocoder",
    "NullBusyIndicator",
    "OperationCancelledError",
    "Place",
    "PlaceBackend",
    "PlaceDirectory",
    "PlaceDraft",
    "PlaceLifecycle",
    "PlaceMapConfig",
    "PlaceMapError",
    "PlaceNotFoundError",
    "PlaceStats",
    "PlaceStatus",
    "PlaceStore",
    "PlaceUpdate",
    "PlaceValidationError",
    "SceneMapSurface",
    "load_bundled_directory",
    "load_config",
    "new_draft",
    "validate_draft",
]
