from datetime import date

import pytest

from focusdesk.paths import resolve_data_paths
from focusdesk.store import DocumentStore


class FakeCalendar:
    """Settable stand-in for date.today()."""

    def __init__(self, day: date) -> None:
        self.day = day

    def __call__(self) -> date:
        return self.day


@pytest.fixture
def calendar():
    return FakeCalendar(date(2024, 1, 1))


@pytest.fixture
def paths(tmp_path):
    return resolve_data_paths(tmp_path / "appdata")


@pytest.fixture
def store(paths, calendar):
    return DocumentStore.initialize(paths, today=calendar)
