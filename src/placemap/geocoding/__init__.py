"""Geocoding: bundled directory, external providers and the resolver."""

from placemap.geocoding.base import GeocodingProvider
from placemap.geocoding.descriptions import suggest_description
from placemap.geocoding.directory import PlaceDirectory, load_bundled_directory
from placemap.geocoding.models import GeocodeHit, ResolvedLocation, ReverseAddress
from placemap.geocoding.nominatim import NominatimGeocoder
from placemap.geocoding.normalize import normalize_text, strip_diacritics
from placemap.geocoding.resolver import NOT_FOUND_MESSAGE, UNKNOWN_PLACE_LABEL, GeocodingResolver, address_label

__all__ = [
    "NOT_FOUND_MESSAGE",
    "UNKNOWN_PLACE_LABEL",
    "GeocodeHit",
    "GeocodingProvider",
    "GeocodingResolver",
    "NominatimGeocoder",
    "PlaceDirectory",
    "ResolvedLocation",
    "ReverseAddress",
    "address_label",
    "load_bundled_directory",
    "normalize_text",
    "strip_diacritics",
    "suggest_description",
]
