"""
Focusdesk persistence package.

Durable JSON document storage (todo list, pomodoro config, pomodoro sessions,
user settings) with atomic writes and daily backups, plus the FastAPI command
layer in front of it. The ASGI app lives in `focusdesk.main`.
"""

from .codec import POMODORO_CONFIG, SESSIONS, SETTINGS, TODOS, Document  # noqa: F401
from .errors import (  # noqa: F401
    CodecError,
    DirectoryResolutionError,
    IoError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from .paths import DataPaths, resolve_data_paths  # noqa: F401
from .store import DocumentStore  # noqa: F401

__version__ = "0.1.0"
