"""
Document codec.

Every persisted document is described by a `Document`: its logical name, the
file it lives in, a pydantic TypeAdapter for its shape and a factory for its
default value. `encode`/`decode` convert between in-memory values and the
pretty-printed camelCase JSON kept on disk.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, List, Tuple, TypeVar

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticSerializationError

from .errors import CodecError
from .models import PomodoroConfig, PomodoroSession, TodoItem, UserSettings

T = TypeVar("T")


@dataclass(frozen=True)
class Document(Generic[T]):
    """Descriptor of one named, independently loadable/saveable document."""

    name: str
    filename: str
    adapter: TypeAdapter
    default_factory: Callable[[], T]

    def default(self) -> T:
        return self.default_factory()


TODOS: Document[List[TodoItem]] = Document(
    name="todos",
    filename="todos.json",
    adapter=TypeAdapter(List[TodoItem]),
    default_factory=list,
)
POMODORO_CONFIG: Document[PomodoroConfig] = Document(
    name="pomodoro",
    filename="pomodoro.json",
    adapter=TypeAdapter(PomodoroConfig),
    default_factory=PomodoroConfig,
)
SESSIONS: Document[List[PomodoroSession]] = Document(
    name="sessions",
    filename="sessions.json",
    adapter=TypeAdapter(List[PomodoroSession]),
    default_factory=list,
)
SETTINGS: Document[UserSettings] = Document(
    name="settings",
    filename="settings.json",
    adapter=TypeAdapter(UserSettings),
    default_factory=UserSettings,
)

# Bootstrap order
DOCUMENTS: Tuple[Document[Any], ...] = (TODOS, SESSIONS, POMODORO_CONFIG, SETTINGS)
DOCUMENTS_BY_NAME: Dict[str, Document[Any]] = {doc.name: doc for doc in DOCUMENTS}


# PUBLIC_INTERFACE
def encode(document: Document[T], value: T) -> bytes:
    """Serialize `value` to UTF-8 JSON (2-space indent, camelCase keys)."""
    try:
        return document.adapter.dump_json(value, by_alias=True, indent=2)
    except (PydanticSerializationError, PydanticValidationError, TypeError, ValueError) as exc:
        raise CodecError(document.name, f"cannot serialize document: {exc}") from exc


# PUBLIC_INTERFACE
def decode(document: Document[T], content: str) -> T:
    """
    Parse on-disk JSON into the document's shape.

    Missing optional fields take their declared defaults; unknown fields are ignored.

    Raises:
        CodecError: content is not valid JSON or does not match the document shape.
    """
    try:
        return document.adapter.validate_json(content)
    except PydanticValidationError as exc:
        raise CodecError(document.name, f"malformed content: {exc}") from exc
