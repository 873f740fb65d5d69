from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# On-disk field names are camelCase; this mapping is a durable file-format contract.
DOCUMENT_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
)


class TodoPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class PomodoroSessionKind(str, Enum):
    FOCUS = "focus"
    SHORT_BREAK = "shortBreak"
    LONG_BREAK = "longBreak"


class ThemeMode(str, Enum):
    SYSTEM = "system"
    LIGHT = "light"
    DARK = "dark"
    MAC = "mac"


# PUBLIC_INTERFACE
class TodoItem(BaseModel):
    """
    A single entry of the todo list document (todos.json).

    Fields:
    - id: globally unique identifier (uuid4 string)
    - title: short title
    - detail: optional free text
    - priority: low / medium (default) / high
    - tags: free-form labels
    - planned_at / due_at: optional RFC 3339 timestamps
    - completed / completed_at: completed_at is set if and only if completed is true
    - created_at / updated_at: RFC 3339 timestamps
    """

    model_config = DOCUMENT_CONFIG

    id: str
    title: str
    detail: Optional[str] = None
    priority: TodoPriority = TodoPriority.MEDIUM
    tags: List[str] = Field(default_factory=list)
    planned_at: Optional[str] = None
    due_at: Optional[str] = None
    completed: bool = False
    completed_at: Optional[str] = None
    created_at: str
    updated_at: str


# PUBLIC_INTERFACE
class PomodoroConfig(BaseModel):
    """Timer durations in minutes (pomodoro.json)."""

    model_config = DOCUMENT_CONFIG

    focus_minutes: int = 25
    short_break_minutes: int = 5
    long_break_minutes: int = 15
    long_break_interval: int = 4
    auto_start_next: bool = False


# PUBLIC_INTERFACE
class PomodoroSession(BaseModel):
    """One recorded timer run (an entry of sessions.json)."""

    model_config = DOCUMENT_CONFIG

    id: str
    todo_id: Optional[str] = None
    start_at: str
    end_at: Optional[str] = None
    duration_minutes: Optional[int] = None
    kind: PomodoroSessionKind = Field(alias="type")
    completed: bool


class HotkeySetting(BaseModel):
    model_config = DOCUMENT_CONFIG

    toggle_floating: Optional[str] = None
    start_or_pause_timer: Optional[str] = None


# PUBLIC_INTERFACE
class WindowGeometry(BaseModel):
    """Last known position/size of a window; every field is independently optional."""

    model_config = DOCUMENT_CONFIG

    x: Optional[int] = None
    y: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None


class WindowState(BaseModel):
    model_config = DOCUMENT_CONFIG

    main: WindowGeometry = Field(default_factory=WindowGeometry)
    floating: WindowGeometry = Field(default_factory=WindowGeometry)


# PUBLIC_INTERFACE
class UserSettings(BaseModel):
    """User preferences and window geometry (settings.json)."""

    model_config = DOCUMENT_CONFIG

    theme: ThemeMode = ThemeMode.MAC
    follow_system_theme: bool = True
    always_on_top: bool = True
    snap_edge: bool = True
    floating_opacity: float = 0.95
    show_completed_in_floating: bool = False
    hotkeys: HotkeySetting = Field(default_factory=HotkeySetting)
    window_state: WindowState = Field(default_factory=WindowState)
