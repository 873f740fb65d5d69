"""
Command layer.

Each service validates its input, then performs a whole-document
load/mutate/save cycle against the DocumentStore. Business-rule violations
raise ValidationError before the store is touched; missing entities raise
NotFoundError.
"""
from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Callable, List, Optional

from .errors import NotFoundError, ValidationError
from .models import (
    PomodoroConfig,
    PomodoroSession,
    TodoItem,
    UserSettings,
    WindowGeometry,
)
from .schemas import PomodoroSessionDraft, TodoDraft
from .store import DocumentStore
from .utils import parse_calendar_date, parse_rfc3339, to_rfc3339, try_parse_rfc3339, utc_now

MAX_FOCUS_MINUTES = 180
MIN_FLOATING_OPACITY = 0.1
MAX_FLOATING_OPACITY = 1.0
WINDOW_LABELS = ("main", "floating")


def _new_id() -> str:
    return str(uuid.uuid4())


# PUBLIC_INTERFACE
class TodoService:
    """list/create/update/delete/toggle commands over the todo list document."""

    def __init__(
        self,
        store: DocumentStore,
        now: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self._store = store
        self._now = now
        self._id_factory = id_factory

    def _timestamp(self) -> str:
        return to_rfc3339(self._now())

    def list(self) -> List[TodoItem]:
        return self._store.load_todos()

    def create(self, draft: TodoDraft) -> TodoItem:
        title = draft.title.strip()
        if not title:
            raise ValidationError("todo title must not be empty")

        now = self._timestamp()
        todo = TodoItem(
            id=self._id_factory(),
            title=title,
            detail=draft.detail,
            priority=draft.priority,
            tags=list(draft.tags),
            planned_at=draft.planned_at,
            due_at=draft.due_at,
            completed=False,
            completed_at=None,
            created_at=now,
            updated_at=now,
        )
        with self._store.transaction() as store:
            todos = store.load_todos()
            todos.append(todo)
            store.save_todos(todos)
        return todo

    def update(self, updated: TodoItem) -> TodoItem:
        """
        Replace the stored item carrying the same id.

        createdAt is kept from the stored item and updatedAt is refreshed.
        completedAt is filled in or cleared to match the completed flag.
        """
        if not updated.title.strip():
            raise ValidationError("todo title must not be empty")

        with self._store.transaction() as store:
            todos = store.load_todos()
            for index, existing in enumerate(todos):
                if existing.id != updated.id:
                    continue
                now = self._timestamp()
                completed_at = None
                if updated.completed:
                    completed_at = updated.completed_at or existing.completed_at or now
                replacement = updated.model_copy(
                    update={
                        "title": updated.title.strip(),
                        "completed_at": completed_at,
                        "created_at": existing.created_at,
                        "updated_at": now,
                    }
                )
                todos[index] = replacement
                store.save_todos(todos)
                return replacement
        raise NotFoundError("todo", updated.id)

    def delete(self, todo_id: str) -> None:
        with self._store.transaction() as store:
            todos = store.load_todos()
            remaining = [t for t in todos if t.id != todo_id]
            if len(remaining) == len(todos):
                raise NotFoundError("todo", todo_id)
            store.save_todos(remaining)

    def toggle_complete(self, todo_id: str, completed: bool) -> TodoItem:
        with self._store.transaction() as store:
            todos = store.load_todos()
            for index, existing in enumerate(todos):
                if existing.id != todo_id:
                    continue
                now = self._timestamp()
                toggled = existing.model_copy(
                    update={
                        "completed": completed,
                        "completed_at": now if completed else None,
                        "updated_at": now,
                    }
                )
                todos[index] = toggled
                store.save_todos(todos)
                return toggled
        raise NotFoundError("todo", todo_id)


def validate_pomodoro_config(config: PomodoroConfig) -> None:
    """Raise ValidationError unless every duration is positive and focus stays within bounds."""
    if (
        config.focus_minutes <= 0
        or config.short_break_minutes <= 0
        or config.long_break_minutes <= 0
        or config.long_break_interval <= 0
    ):
        raise ValidationError("pomodoro durations and interval must be greater than 0")
    if config.focus_minutes > MAX_FOCUS_MINUTES:
        raise ValidationError(f"focus duration must not exceed {MAX_FOCUS_MINUTES} minutes")


def _whole_minutes(start: datetime, end: datetime) -> int:
    seconds = (end - start).total_seconds()
    if seconds <= 0:
        return 0
    return int(seconds // 60)


# PUBLIC_INTERFACE
class PomodoroService:
    """Config get/save and session append/list commands."""

    def __init__(self, store: DocumentStore, id_factory: Callable[[], str] = _new_id) -> None:
        self._store = store
        self._id_factory = id_factory

    def get_config(self) -> PomodoroConfig:
        return self._store.load_pomodoro_config()

    def save_config(self, config: PomodoroConfig) -> PomodoroConfig:
        validate_pomodoro_config(config)
        self._store.save_pomodoro_config(config)
        return config

    def build_session(self, draft: PomodoroSessionDraft) -> PomodoroSession:
        try:
            start = parse_rfc3339(draft.start_at)
        except ValueError as exc:
            raise ValidationError(f"invalid session start time: {draft.start_at!r}") from exc

        duration = draft.duration_minutes
        if draft.end_at is not None:
            try:
                end = parse_rfc3339(draft.end_at)
            except ValueError as exc:
                raise ValidationError(f"invalid session end time: {draft.end_at!r}") from exc
            if not (draft.duration_minutes is not None and draft.duration_minutes > 0):
                duration = _whole_minutes(start, end)

        return PomodoroSession(
            id=self._id_factory(),
            todo_id=draft.todo_id,
            start_at=draft.start_at,
            end_at=draft.end_at,
            duration_minutes=duration,
            kind=draft.kind,
            completed=draft.completed,
        )

    def append_session(self, draft: PomodoroSessionDraft) -> PomodoroSession:
        session = self.build_session(draft)
        with self._store.transaction() as store:
            sessions = store.load_sessions()
            sessions.append(session)
            store.save_sessions(sessions)
        return session

    def list_sessions(self, day: Optional[str] = None) -> List[PomodoroSession]:
        """
        Return every session, or only those whose start falls on `day` ('YYYY-MM-DD').

        The calendar date is taken in the start timestamp's own UTC offset.
        Sessions whose start cannot be parsed never match a date filter.
        """
        if day is None:
            return self._store.load_sessions()
        try:
            target: date = parse_calendar_date(day)
        except ValueError as exc:
            raise ValidationError(f"invalid date filter: {day!r}, expected YYYY-MM-DD") from exc

        sessions = self._store.load_sessions()
        result = []
        for session in sessions:
            started = try_parse_rfc3339(session.start_at)
            if started is not None and started.date() == target:
                result.append(session)
        return result


# PUBLIC_INTERFACE
class SettingsService:
    """Settings get/save and window-geometry recording."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def get(self) -> UserSettings:
        return self._store.load_settings()

    def save(self, settings: UserSettings) -> UserSettings:
        if not (MIN_FLOATING_OPACITY <= settings.floating_opacity <= MAX_FLOATING_OPACITY):
            raise ValidationError(
                f"floating opacity must be between {MIN_FLOATING_OPACITY} and {MAX_FLOATING_OPACITY}"
            )
        self._store.save_settings(settings)
        return settings

    def window_geometry(self, label: str) -> WindowGeometry:
        if label not in WINDOW_LABELS:
            raise ValidationError(f"unknown window label: {label}")
        return getattr(self._store.load_settings().window_state, label)

    def record_window_state(self, label: str, geometry: WindowGeometry) -> UserSettings:
        if label not in WINDOW_LABELS:
            raise ValidationError(f"unknown window label: {label}")
        with self._store.transaction() as store:
            settings = store.load_settings()
            window_state = settings.window_state.model_copy(update={label: geometry})
            updated = settings.model_copy(update={"window_state": window_state})
            store.save_settings(updated)
        return updated
