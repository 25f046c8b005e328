"""
services.settings_manager
-------------------------
Qt-side owner of one JsonSettings document.

Preference pages and style code read values through the manager and listen to
its signals instead of touching the file:

  - valueChanged(str, object): a key was set to a different value
  - settingsChanged(): the document was saved successfully
  - saveFailed(str): saving failed; the message is meant for the user
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, Union

from PySide6.QtCore import QObject, Signal

from data.json_settings import JsonSettings, SaveError
from models.rectangle import Rectangle
from utils.geometry import decode_rectangle, format_rectangle

log = logging.getLogger(__name__)

_MISSING = object()


class SettingsManager(QObject):
    valueChanged = Signal(str, object)
    settingsChanged = Signal()
    saveFailed = Signal(str)

    def __init__(self, path: Union[str, Path], parent: Optional[QObject] = None):
        super().__init__(parent)
        self._path = str(path)
        self._settings = JsonSettings(self._path)
        log.info("SettingsManager using %s (exists=%s)", self._path, Path(self._path).exists())

    # --------- Document ---------
    @property
    def path(self) -> str:
        return self._path

    @property
    def document(self) -> JsonSettings:
        return self._settings

    @property
    def comment(self) -> Optional[str]:
        return self._settings.comment

    @comment.setter
    def comment(self, text: Optional[str]) -> None:
        self._settings.comment = text

    @property
    def has_error(self) -> bool:
        return self._settings.has_error

    def reload(self) -> None:
        self._settings = JsonSettings(self._path)

    # --------- Values ---------
    def contains(self, key: str) -> bool:
        return self._settings.is_object() and key in self._settings.value

    def value(self, key: str, default: Any = None) -> Any:
        if not self._settings.is_object():
            return default
        return self._settings.value.get(key, default)

    def set_value(self, key: str, value: Any) -> None:
        data = self._object()
        old = data.get(key, _MISSING)
        # 1, 1.0 and True compare equal in Python but are distinct JSON values
        if type(old) is type(value) and old == value:
            return
        data[key] = value
        self.valueChanged.emit(key, value)

    def remove(self, key: str) -> None:
        data = self._object()
        if key in data:
            del data[key]
            self.valueChanged.emit(key, None)

    def geometry(self, key: str) -> Rectangle:
        return decode_rectangle(self.value(key))

    def set_geometry(self, key: str, rect: Rectangle) -> None:
        self.set_value(key, format_rectangle(rect))

    def _object(self) -> dict:
        if not self._settings.is_object():
            raise TypeError(f"{self._path} holds a JSON array; key access needs an object")
        return self._settings.value

    # --------- Persistence ---------
    def save(self, atomic: bool = True) -> bool:
        try:
            self._settings.save(atomic=atomic)
        except SaveError as e:
            log.warning("Saving settings failed: %s", e)
            self.saveFailed.emit(f"Could not save settings to {self._path}: {e}")
            return False
        self.settingsChanged.emit()
        return True
