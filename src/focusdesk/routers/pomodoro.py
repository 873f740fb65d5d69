from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from ..dependencies import get_pomodoro_service
from ..models import PomodoroConfig, PomodoroSession
from ..schemas import PomodoroSessionDraft
from ..services import PomodoroService

router = APIRouter(
    prefix="/api/v1/pomodoro",
    tags=["pomodoro"],
)


# PUBLIC_INTERFACE
@router.get("/config", response_model=PomodoroConfig, summary="Get Pomodoro Config")
def get_config(service: PomodoroService = Depends(get_pomodoro_service)) -> PomodoroConfig:
    return service.get_config()


# PUBLIC_INTERFACE
@router.put(
    "/config",
    response_model=PomodoroConfig,
    summary="Save Pomodoro Config",
    description="Durations must be positive; focus duration is capped at 180 minutes.",
    responses={
        200: {"description": "Config saved"},
        422: {"description": "Validation error"},
    },
)
def save_config(config: PomodoroConfig, service: PomodoroService = Depends(get_pomodoro_service)) -> PomodoroConfig:
    return service.save_config(config)


# PUBLIC_INTERFACE
@router.post(
    "/sessions",
    response_model=PomodoroSession,
    status_code=status.HTTP_201_CREATED,
    summary="Append Session",
    description=(
        "Record a timer session. When endAt is given without a positive durationMinutes, "
        "the duration is inferred in whole minutes from startAt and endAt."
    ),
    responses={
        201: {"description": "Session recorded"},
        422: {"description": "Validation error"},
    },
)
def append_session(
    draft: PomodoroSessionDraft, service: PomodoroService = Depends(get_pomodoro_service)
) -> PomodoroSession:
    """
    Append a session to the session history.
    """
    return service.append_session(draft)


# PUBLIC_INTERFACE
@router.get(
    "/sessions",
    response_model=List[PomodoroSession],
    summary="List Sessions",
    description="List session history, optionally only sessions started on a calendar date.",
)
def list_sessions(
    date: Optional[str] = Query(None, description="Calendar date filter, YYYY-MM-DD"),
    service: PomodoroService = Depends(get_pomodoro_service),
) -> List[PomodoroSession]:
    return service.list_sessions(date)
