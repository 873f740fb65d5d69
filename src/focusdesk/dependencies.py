from __future__ import annotations

from fastapi import Depends, Request

from .services import PomodoroService, SettingsService, TodoService
from .store import DocumentStore


# PUBLIC_INTERFACE
def get_store(request: Request) -> DocumentStore:
    """
    Return the DocumentStore owned by the running application.

    The store is created once by the app factory and attached to app.state.
    """
    return request.app.state.store


def get_todo_service(store: DocumentStore = Depends(get_store)) -> TodoService:
    return TodoService(store)


def get_pomodoro_service(store: DocumentStore = Depends(get_store)) -> PomodoroService:
    return PomodoroService(store)


def get_settings_service(store: DocumentStore = Depends(get_store)) -> SettingsService:
    return SettingsService(store)
