"""Application-level configuration.

:class:`PlaceMapConfig` carries every setting the store, backend, geocoder and
map reconciler need. It is loaded from a JSON file with :func:`load_config` or
built from environment overrides with :meth:`PlaceMapConfig.from_env`.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, model_validator

from placemap.exceptions import ConfigError
from placemap.models.place import DEFAULT_CENTER, Coordinates

_ENV_OVERRIDES = {
    "PLACEMAP_API_URL": "api_url",
    "PLACEMAP_CACHE_PATH": "fallback_cache_path",
    "PLACEMAP_GEOCODER_URL": "geocoder_url",
}


class PlaceMapConfig(BaseModel):
    """Top-level configuration.

    Attributes:
        api_url: Base URL of the places backend.
        request_timeout: Per-request timeout in seconds for every HTTP call.
        fallback_cache_path: JSON file holding the legacy place collection.
        geocoder_url: Base URL of the Nominatim-compatible geocoder.
        geocoder_user_agent: User-Agent sent to the geocoder.
        default_center: Map center before any place is known.
        default_zoom: Map zoom before any place is known.
        focus_zoom: Zoom used when focusing a single place.
        fit_padding: Ratio added around the bounds of all markers.
        pan_duration: Duration of the animated pan, in seconds.
        popup_delay: Delay before opening a focused popup; must exceed *pan_duration*.
        suggestion_limit: Maximum number of directory suggestions.
        min_query_length: Normalized characters required before suggesting.
        date_format: strftime pattern for dates shown in popups.
    """

    api_url: str = "http://localhost:3000"
    request_timeout: float = Field(default=15.0, gt=0)
    fallback_cache_path: Path = Path("places-cache.json")
    geocoder_url: str = "https://nominatim.openstreetmap.org"
    geocoder_user_agent: str = "placemap/0.1"
    default_center: Coordinates = DEFAULT_CENTER
    default_zoom: int = Field(default=5, ge=0, le=19)
    focus_zoom: int = Field(default=10, ge=0, le=19)
    fit_padding: float = Field(default=0.1, ge=0)
    pan_duration: float = Field(default=0.5, ge=0)
    popup_delay: float = Field(default=0.6, ge=0)
    suggestion_limit: int = Field(default=10, ge=1)
    min_query_length: int = Field(default=2, ge=1)
    date_format: str = "%d/%m/%Y"

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_popup_delay(self) -> PlaceMapConfig:
        if self.popup_delay <= self.pan_duration:
            raise ValueError("popup_delay must be greater than pan_duration")
        return self

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> PlaceMapConfig:
        """Build a config from defaults, ``PLACEMAP_*`` variables and *overrides*."""
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for variable, field in _ENV_OVERRIDES.items():
            raw = env.get(variable, "").strip()
            if raw:
                values[field] = raw
        values.update(overrides)
        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            raise ConfigError(f"invalid config: {exc}") from exc


def _resolve_path(value: Path, *, base_dir: Path) -> Path:
    if value.is_absolute():
        return value
    return (base_dir / value).resolve()


def load_config(path: str | Path) -> PlaceMapConfig:
    config_path = Path(path).expanduser().resolve()

    try:
        raw_payload: Any = json.loads(config_path.read_text(encoding="utf-8"))
        parsed = PlaceMapConfig.model_validate(raw_payload)
    except OSError as exc:
        raise ConfigError(f"failed reading config file: {config_path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON in config file: {config_path}") from exc
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc

    return parsed.model_copy(
        update={"fallback_cache_path": _resolve_path(parsed.fallback_cache_path, base_dir=config_path.parent)}
    )
