import pytest

from focusdesk import paths as paths_module
from focusdesk.errors import DirectoryResolutionError, IoError
from focusdesk.main import open_store
from focusdesk.paths import resolve_data_paths
from focusdesk.settings import get_settings


def test_explicit_root_creates_data_and_backup_dirs(tmp_path):
    resolved = resolve_data_paths(tmp_path / "nested" / "root")
    assert resolved.data_dir == tmp_path / "nested" / "root" / "data"
    assert resolved.backup_dir == tmp_path / "nested" / "root" / "data" / "backups"
    assert resolved.data_dir.is_dir()
    assert resolved.backup_dir.is_dir()


def test_resolving_twice_is_harmless(tmp_path):
    first = resolve_data_paths(tmp_path)
    second = resolve_data_paths(tmp_path)
    assert first == second


def test_platform_root_is_used_without_override(tmp_path, monkeypatch):
    calls = []

    def fake_user_data_dir(app_name, appauthor=None):
        calls.append((app_name, appauthor))
        return str(tmp_path / "platform")

    monkeypatch.setattr(paths_module.platformdirs, "user_data_dir", fake_user_data_dir)
    resolved = resolve_data_paths(app_name="focusdesk-test")
    assert calls == [("focusdesk-test", False)]
    assert resolved.data_dir == tmp_path / "platform" / "data"


def test_platform_failure_is_a_directory_resolution_error(monkeypatch):
    def denied(app_name, appauthor=None):
        raise OSError("sandbox denied access to the home directory")

    monkeypatch.setattr(paths_module.platformdirs, "user_data_dir", denied)
    with pytest.raises(DirectoryResolutionError):
        resolve_data_paths()


def test_empty_platform_root_is_a_directory_resolution_error(monkeypatch):
    monkeypatch.setattr(paths_module.platformdirs, "user_data_dir", lambda app_name, appauthor=None: "")
    with pytest.raises(DirectoryResolutionError):
        resolve_data_paths()


def test_uncreatable_directory_is_an_io_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory", encoding="utf-8")
    with pytest.raises(IoError):
        resolve_data_paths(blocker)


def test_open_store_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("FOCUSDESK_DATA_ROOT", str(tmp_path / "env-root"))
    store = open_store(get_settings())
    assert store.data_dir == tmp_path / "env-root" / "data"
    assert (store.data_dir / "todos.json").exists()
    assert (store.data_dir / "settings.json").exists()


def test_open_store_aborts_when_root_cannot_be_resolved(monkeypatch):
    monkeypatch.delenv("FOCUSDESK_DATA_ROOT", raising=False)

    def denied(app_name, appauthor=None):
        raise OSError("denied")

    monkeypatch.setattr(paths_module.platformdirs, "user_data_dir", denied)
    with pytest.raises(DirectoryResolutionError):
        open_store(get_settings())


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("FOCUSDESK_DATA_ROOT", "FOCUSDESK_APP_NAME", "LOG_LEVEL", "CORS_ALLOW_ORIGINS"):
            monkeypatch.delenv(name, raising=False)
        settings = get_settings()
        assert settings.data_root is None
        assert settings.app_name == "focusdesk"
        assert settings.log_level == "INFO"
        assert settings.cors_allow_origins == ["*"]

    def test_invalid_log_level_falls_back_to_info(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        assert get_settings().log_level == "INFO"

    def test_origins_are_split_on_commas(self, monkeypatch):
        monkeypatch.setenv("CORS_ALLOW_ORIGINS", "tauri://localhost, http://localhost:1420 ,")
        assert get_settings().cors_allow_origins == ["tauri://localhost", "http://localhost:1420"]
