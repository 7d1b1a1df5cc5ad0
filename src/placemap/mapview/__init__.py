"""Map reconciliation: surfaces, rendering and the reconciler."""

from placemap.mapview.reconciler import MapReconciler
from placemap.mapview.render import (
    PLANNED_ICON,
    PLANNED_ROUTE_STYLE,
    VISITED_ICON,
    VISITED_ROUTE_STYLE,
    build_marker,
    format_popup_date,
    icon_for_status,
    render_popup,
    route_style_for_status,
)
from placemap.mapview.scene import SceneMapSurface
from placemap.mapview.scheduler import AsyncioScheduler, ScheduledCall, Scheduler
from placemap.mapview.surface import ClickHandler, MapSurface

__all__ = [
    "PLANNED_ICON",
    "PLANNED_ROUTE_STYLE",
    "VISITED_ICON",
    "VISITED_ROUTE_STYLE",
    "AsyncioScheduler",
    "ClickHandler",
    "MapReconciler",
    "MapSurface",
    "SceneMapSurface",
    "ScheduledCall",
    "Scheduler",
    "build_marker",
    "format_popup_date",
    "icon_for_status",
    "render_popup",
    "route_style_for_status",
]
