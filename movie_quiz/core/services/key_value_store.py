"""Durable key-value backends used by the statistics store."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from PySide6.QtCore import QSettings

from movie_quiz.constants.about import APP_NAME, APP_ORGANIZATION
from movie_quiz.core.errors import PersistenceError


class KeyValueStore(Protocol):
    """Minimal string-keyed storage contract."""

    def get(self, key: str, default: object | None = None) -> object | None: ...

    def set(self, key: str, value: object) -> None: ...

    def has(self, key: str) -> bool: ...

    def remove(self, key: str) -> None: ...


class InMemoryKeyValueStore:
    """Dictionary-backed store for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, object] | None = None) -> None:
        self._values: dict[str, object] = dict(initial or {})

    def get(self, key: str, default: object | None = None) -> object | None:
        return self._values.get(key, default)

    def set(self, key: str, value: object) -> None:
        self._values[key] = value

    def has(self, key: str) -> bool:
        return key in self._values

    def remove(self, key: str) -> None:
        self._values.pop(key, None)


class QSettingsKeyValueStore:
    """Store backed by Qt's per-user settings.

    Values written through an INI file come back as strings, so callers are
    expected to convert what they read.
    """

    def __init__(self, settings: QSettings) -> None:
        self._settings = settings

    @classmethod
    def from_defaults(cls) -> QSettingsKeyValueStore:
        return cls(QSettings(APP_ORGANIZATION, APP_NAME))

    @classmethod
    def from_ini_file(cls, file_path: Path) -> QSettingsKeyValueStore:
        return cls(QSettings(str(file_path), QSettings.Format.IniFormat))

    def get(self, key: str, default: object | None = None) -> object | None:
        if not self._settings.contains(key):
            return default
        return self._settings.value(key, default)

    def set(self, key: str, value: object) -> None:
        self._settings.setValue(key, value)
        self._sync(key)

    def has(self, key: str) -> bool:
        return self._settings.contains(key)

    def remove(self, key: str) -> None:
        self._settings.remove(key)
        self._sync(key)

    def _sync(self, key: str) -> None:
        self._settings.sync()
        status = self._settings.status()
        if status != QSettings.Status.NoError:
            raise PersistenceError(f"Settings backend reported {status.name} while writing '{key}'.")
