from __future__ import annotations

from fastapi import APIRouter, Depends

from ..dependencies import get_settings_service
from ..models import UserSettings, WindowGeometry
from ..schemas import WindowPlacementOut
from ..services import SettingsService
from ..windows import resolve_placement

router = APIRouter(
    prefix="/api/v1/settings",
    tags=["settings"],
)


# PUBLIC_INTERFACE
@router.get("", response_model=UserSettings, summary="Get Settings")
def get_user_settings(service: SettingsService = Depends(get_settings_service)) -> UserSettings:
    return service.get()


# PUBLIC_INTERFACE
@router.put(
    "",
    response_model=UserSettings,
    summary="Save Settings",
    responses={
        200: {"description": "Settings saved"},
        422: {"description": "Validation error"},
    },
)
def save_user_settings(
    settings: UserSettings, service: SettingsService = Depends(get_settings_service)
) -> UserSettings:
    return service.save(settings)


# PUBLIC_INTERFACE
@router.put(
    "/window-state/{label}",
    response_model=UserSettings,
    summary="Record Window Geometry",
    description="Store the geometry of the 'main' or 'floating' window.",
    responses={
        200: {"description": "Geometry recorded"},
        422: {"description": "Unknown window label"},
    },
)
def record_window_state(
    label: str, geometry: WindowGeometry, service: SettingsService = Depends(get_settings_service)
) -> UserSettings:
    return service.record_window_state(label, geometry)


# PUBLIC_INTERFACE
@router.get(
    "/window-state/{label}/placement",
    response_model=WindowPlacementOut,
    summary="Window Placement",
    description="Where to restore a window; out-of-range saved geometry falls back to centering.",
)
def window_placement(label: str, service: SettingsService = Depends(get_settings_service)) -> WindowPlacementOut:
    """
    Resolve the saved geometry of a window into a safe placement.
    """
    placement = resolve_placement(service.window_geometry(label))
    x, y = placement.position if placement.position else (None, None)
    width, height = placement.size if placement.size else (None, None)
    return WindowPlacementOut(center=placement.center, x=x, y=y, width=width, height=height)
