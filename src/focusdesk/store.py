from __future__ import annotations

import logging
import os
import shutil
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from threading import RLock
from typing import Any, Callable, Iterator, List

from .codec import (
    DOCUMENTS,
    POMODORO_CONFIG,
    SESSIONS,
    SETTINGS,
    TODOS,
    Document,
    T,
    decode,
    encode,
)
from .errors import CodecError, IoError
from .models import PomodoroConfig, PomodoroSession, TodoItem, UserSettings
from .paths import DataPaths

logger = logging.getLogger(__name__)

BACKUP_DATE_FORMAT = "%Y%m%d"


# PUBLIC_INTERFACE
class DocumentStore:
    """
    JSON document store rooted at a data directory.

    All loads and saves are serialized through one process-wide lock. Saves back
    up the previous file once per calendar day and then replace the target
    atomically through a temporary sibling file.
    """

    def __init__(self, paths: DataPaths, today: Callable[[], date] = date.today) -> None:
        self._paths = paths
        self._today = today
        self._lock = RLock()

    # PUBLIC_INTERFACE
    @classmethod
    def initialize(cls, paths: DataPaths, today: Callable[[], date] = date.today) -> "DocumentStore":
        """Build a store over `paths` and write defaults for any missing document."""
        store = cls(paths, today=today)
        store.bootstrap()
        return store

    @property
    def data_dir(self) -> Path:
        return self._paths.data_dir

    @property
    def backup_dir(self) -> Path:
        return self._paths.backup_dir

    def path_for(self, document: Document[Any]) -> Path:
        return self._paths.data_dir / document.filename

    def backup_path_for(self, document: Document[Any], day: date) -> Path:
        return self._paths.backup_dir / f"{day.strftime(BACKUP_DATE_FORMAT)}_{document.filename}"

    # PUBLIC_INTERFACE
    @contextmanager
    def transaction(self) -> Iterator["DocumentStore"]:
        """
        Hold the store lock across several loads and saves.

        Commands wrap their load, mutate, save sequence in this so that concurrent
        commands cannot overwrite each other's changes.
        """
        with self._lock:
            yield self

    def bootstrap(self) -> None:
        """Write the default value of every document whose file does not exist yet."""
        with self._lock:
            for document in DOCUMENTS:
                if not self.path_for(document).exists():
                    logger.info("Creating default %s document", document.name)
                    self.save(document, document.default())

    # PUBLIC_INTERFACE
    def load(self, document: Document[T]) -> T:
        """
        Read a document.

        A missing file or one holding only whitespace yields the document's default.

        Raises:
            IoError: the file exists but could not be read.
            CodecError: the file holds malformed content.
        """
        with self._lock:
            path = self.path_for(document)
            if not path.exists():
                return document.default()
            try:
                content = path.read_text(encoding="utf-8")
            except OSError as exc:
                raise IoError(f"cannot read {path}: {exc}", document.name) from exc
            except UnicodeDecodeError as exc:
                raise CodecError(document.name, f"content is not valid UTF-8: {exc}") from exc
            if not content.strip():
                return document.default()
            return decode(document, content)

    # PUBLIC_INTERFACE
    def save(self, document: Document[T], value: T) -> None:
        """
        Replace a document with `value`.

        Raises:
            IoError: any filesystem step failed; the previous file is left intact.
            CodecError: `value` could not be serialized.
        """
        with self._lock:
            path = self.path_for(document)
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                self._maybe_backup(document, path)
            except OSError as exc:
                raise IoError(f"cannot back up {path}: {exc}", document.name) from exc

            payload = encode(document, value)
            try:
                self._atomic_write(path, payload)
            except OSError as exc:
                logger.error("Failed to write %s: %s", path, exc)
                raise IoError(f"cannot write {path}: {exc}", document.name) from exc

    def _maybe_backup(self, document: Document[Any], path: Path) -> None:
        if not path.exists():
            return
        backup_path = self.backup_path_for(document, self._today())
        if backup_path.exists():
            return
        backup_path.parent.mkdir(parents=True, exist_ok=True)
        # A dated backup only appears once its content is complete.
        temp_path = backup_path.with_suffix(".tmp")
        try:
            shutil.copyfile(path, temp_path)
            os.replace(temp_path, backup_path)
        except OSError:
            temp_path.unlink(missing_ok=True)
            raise
        logger.info("Backed up %s to %s", path.name, backup_path)

    def _atomic_write(self, path: Path, payload: bytes) -> None:
        temp_path = path.with_suffix(".tmp")
        try:
            with open(temp_path, "wb") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(temp_path, path)
        except OSError:
            temp_path.unlink(missing_ok=True)
            raise

    # Typed accessors, one pair per document.

    def load_todos(self) -> List[TodoItem]:
        return self.load(TODOS)

    def save_todos(self, todos: List[TodoItem]) -> None:
        self.save(TODOS, todos)

    def load_pomodoro_config(self) -> PomodoroConfig:
        return self.load(POMODORO_CONFIG)

    def save_pomodoro_config(self, config: PomodoroConfig) -> None:
        self.save(POMODORO_CONFIG, config)

    def load_sessions(self) -> List[PomodoroSession]:
        return self.load(SESSIONS)

    def save_sessions(self, sessions: List[PomodoroSession]) -> None:
        self.save(SESSIONS, sessions)

    def load_settings(self) -> UserSettings:
        return self.load(SETTINGS)

    def save_settings(self, settings: UserSettings) -> None:
        self.save(SETTINGS, settings)
