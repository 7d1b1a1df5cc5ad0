"""Place entity and the partial/derived models built around it.

Field names are snake_case in Python and camelCase on the wire (the backend
and the fallback cache both speak camelCase). The backend identifier is
serialized as ``_id`` and the legacy local identifier as ``id``.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from placemap.models.enums import PlaceStatus

Latitude = Annotated[float, Field(ge=-90, le=90)]
Longitude = Annotated[float, Field(ge=-180, le=180)]
Coordinates = tuple[Latitude, Longitude]
"""A ``(latitude, longitude)`` pair in decimal degrees."""

DEFAULT_CENTER: Coordinates = (-14.235, -51.9253)
"""Centroid used before a place has been given real coordinates."""

_CALENDAR_DATE_RE = re.compile(r"^\s*(\d{4})-(\d{2})-(\d{2})")


def parse_calendar_date(value: Any) -> date | None:
    """Coerce *value* into a calendar date without any timezone conversion.

    Strings are read by their leading ``YYYY-MM-DD`` components, so a legacy
    timestamp such as ``2023-12-15T23:30:00.000Z`` stays on the 15th no
    matter which offset the process runs under.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        match = _CALENDAR_DATE_RE.match(value)
        if match is None:
            raise ValueError(f"not a calendar date: {value!r}")
        year, month, day = (int(part) for part in match.groups())
        return date(year, month, day)
    raise ValueError(f"not a calendar date: {value!r}")


CalendarDate = Annotated[date | None, BeforeValidator(parse_calendar_date)]


_PLANNED_ONLY = frozenset({"planned_date", "plannedDate"})
_VISITED_ONLY = frozenset({"visit_date", "visitDate", "visit_description", "visitDescription"})


def format_calendar_date(value: date) -> str:
    """Render *value* as ``YYYY-MM-DD`` from its own components."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


class _PlaceBody(BaseModel):
    """Fields shared by stored places and drafts, with the status invariant."""

    name: str
    description: str = ""
    image: str | None = None
    coordinates: Coordinates = DEFAULT_CENTER
    status: PlaceStatus = PlaceStatus.PLANNED
    planned_date: CalendarDate = None
    visit_date: CalendarDate = None
    visit_description: str | None = None

    @model_validator(mode="after")
    def check_status_fields(self) -> _PlaceBody:
        if self.status is PlaceStatus.PLANNED:
            if self.visit_date is not None or self.visit_description is not None:
                raise ValueError("a planned place cannot carry visit fields")
        elif self.planned_date is not None:
            raise ValueError("a visited place cannot carry a planned date")
        return self

    @property
    def narrative(self) -> str:
        """Text shown for the place: the visit narrative, else the description."""
        return self.visit_description or self.description

    @property
    def relevant_date(self) -> date | None:
        if self.status is PlaceStatus.VISITED:
            return self.visit_date
        return self.planned_date


class Place(_PlaceBody):
    """A named geographic point with a planned-or-visited status."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    backend_id: str | None = Field(default=None, alias="_id")
    local_id: str | None = Field(default=None, alias="id")
    created_at: str | None = None
    updated_at: str | None = None

    @model_validator(mode="before")
    @classmethod
    def drop_other_status_fields(cls, data: Any) -> Any:
        """Discard leftovers of the previous status.

        The backend keeps a stale ``plannedDate`` after a visit and stale visit
        fields after a return to planned; stored records are normalized on read
        instead of being rejected.
        """
        if not isinstance(data, dict):
            return data
        stale = _PLANNED_ONLY if data.get("status") == PlaceStatus.VISITED else _VISITED_ONLY
        return {key: value for key, value in data.items() if key not in stale}

    @property
    def identity(self) -> str | None:
        """Preferred identifier: the backend id, falling back to the legacy local id."""
        return self.backend_id or self.local_id

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class PlaceDraft(_PlaceBody):
    """A place that has not been persisted yet (no identity).

    Drafts are edited field by field by the add-place form, so assignment is
    validated instead of the model being frozen.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, validate_assignment=True)

    name: str = ""

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class PlaceUpdate(BaseModel):
    """Partial update for ``PUT /places/{id}``.

    Only fields that were explicitly set are sent; setting a field to
    ``None`` sends ``null`` so the backend clears it.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str | None = None
    description: str | None = None
    image: str | None = None
    coordinates: Coordinates | None = None
    status: PlaceStatus | None = None
    planned_date: CalendarDate = None
    visit_date: CalendarDate = None
    visit_description: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)

    def is_empty(self) -> bool:
        return not self.model_fields_set


class PlaceStats(BaseModel):
    """Collection statistics."""

    total: int = 0
    visited: int = 0
    planned: int = 0
    percentage: int = 0
