from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .models import PomodoroSessionKind, TodoPriority

REQUEST_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# PUBLIC_INTERFACE
class TodoDraft(BaseModel):
    """
    Schema for creating a new Todo item.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "title": "Buy groceries",
                "detail": "Milk, eggs, bread",
                "priority": "medium",
                "tags": ["home"],
                "dueAt": "2025-02-01T18:00:00+00:00",
            }
        },
    )

    title: str = Field(..., description="Short title for the todo item", max_length=200)
    detail: Optional[str] = Field(default=None, description="Optional detailed description")
    priority: TodoPriority = Field(default=TodoPriority.MEDIUM, description="low, medium or high")
    tags: List[str] = Field(default_factory=list, description="Free-form labels")
    planned_at: Optional[str] = Field(default=None, description="Planned start as an RFC 3339 timestamp")
    due_at: Optional[str] = Field(default=None, description="Due time as an RFC 3339 timestamp")

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        """
        Strip surrounding whitespace; emptiness is rejected by the todo commands.
        """
        return v.strip()


# PUBLIC_INTERFACE
class ToggleRequest(BaseModel):
    """Body of the toggle-complete command."""

    completed: bool = Field(..., description="New completion status")


# PUBLIC_INTERFACE
class PomodoroSessionDraft(BaseModel):
    """
    Schema for appending a finished or running timer session.
    The duration is inferred from startAt/endAt when not given explicitly.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "todoId": None,
                "startAt": "2024-01-01T10:00:00Z",
                "endAt": "2024-01-01T10:25:00Z",
                "type": "focus",
                "completed": True,
            }
        },
    )

    todo_id: Optional[str] = Field(default=None, description="Todo item the session was spent on")
    start_at: str = Field(..., description="Start as an RFC 3339 timestamp")
    end_at: Optional[str] = Field(default=None, description="End as an RFC 3339 timestamp")
    duration_minutes: Optional[int] = Field(default=None, ge=0, description="Explicit duration in minutes")
    kind: PomodoroSessionKind = Field(..., alias="type", description="focus, shortBreak or longBreak")
    completed: bool = Field(..., description="Whether the session ran to completion")


# PUBLIC_INTERFACE
class WindowPlacementOut(BaseModel):
    """How a window should be placed when it is restored."""

    model_config = REQUEST_CONFIG

    center: bool = Field(..., description="True when the saved position is unusable and the window should be centered")
    x: Optional[int] = Field(default=None, description="Saved horizontal position, if usable")
    y: Optional[int] = Field(default=None, description="Saved vertical position, if usable")
    width: Optional[int] = Field(default=None, description="Saved width, if usable")
    height: Optional[int] = Field(default=None, description="Saved height, if usable")
