"""Commented JSON settings document with crash-safe saving.

- Loads an optional `//` comment header plus a JSON object/array (see
  data.document_parser); loading never raises
- Saves with tab indentation (utils.indentation.spaces_to_tabs)
- Atomic saves stage into a temp file next to the destination and publish it
  with a single os.replace()
- Save failures raise a SaveError subclass AND set the sticky has_error flag
"""
from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, BinaryIO, Optional, Union

from data.document_parser import JsonContainer, parse_document
from models.rectangle import Rectangle
from utils.geometry import decode_rectangle
from utils.indentation import spaces_to_tabs

log = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def _as_path(path: Optional[PathLike]) -> Optional[str]:
    """None, "" and Path("") (which renders as ".") all mean "no path"."""
    if path is None:
        return None
    text = os.fspath(path)
    return None if text in ("", ".") else text


def _current_umask() -> int:
    # os.umask can only be read by setting it
    mask = os.umask(0)
    os.umask(mask)
    return mask


class SaveError(Exception):
    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class NoPathError(SaveError):
    """Neither an explicit nor a stored destination path was available."""


class OpenFailedError(SaveError):
    """The destination (or its staging file) could not be opened for writing."""


class CommitFailedError(SaveError):
    """Writing or publishing the new content failed after a successful open."""


class JsonSettings:
    def __init__(self, path: Optional[PathLike] = None) -> None:
        self._path: Optional[str] = _as_path(path)
        self._comment: Optional[str] = None
        self._value: JsonContainer = {}
        self._has_error = False

        if self._path:
            self._load(self._path)

    def _load(self, path: str) -> None:
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            log.debug("Settings file not loaded (%s); starting empty. file=%s", e, path)
            return
        self._comment, self._value = parse_document(data, source=path)

    # ----------------- document state -----------------
    @property
    def path(self) -> Optional[str]:
        return self._path

    @property
    def comment(self) -> Optional[str]:
        return self._comment

    @comment.setter
    def comment(self, text: Optional[str]) -> None:
        self.set_comment(text)

    def set_comment(self, text: Optional[str]) -> None:
        # "" and None both mean "no header"
        self._comment = text or None

    @property
    def value(self) -> JsonContainer:
        return self._value

    @value.setter
    def value(self, value: JsonContainer) -> None:
        if not isinstance(value, (dict, list)):
            raise TypeError(f"settings root must be a dict or list, got {type(value).__name__}")
        self._value = value

    def is_object(self) -> bool:
        return isinstance(self._value, dict)

    def is_array(self) -> bool:
        return isinstance(self._value, list)

    @property
    def has_error(self) -> bool:
        return self._has_error

    @staticmethod
    def read_rectangle(value: Any) -> Rectangle:
        return decode_rectangle(value)

    # ----------------- serialization -----------------
    def to_bytes(self) -> bytes:
        """Exact file content that save() writes."""
        parts = []
        if self._comment:
            for line in self._comment.split("\n"):
                parts.append(f"// {line}\n")
            parts.append("\n")
        header = "".join(parts).encode("utf-8")
        body = (json.dumps(self._value, indent=4, ensure_ascii=False) + "\n").encode("utf-8")
        return header + spaces_to_tabs(body)

    # ----------------- saving -----------------
    def save(self, path: Optional[PathLike] = None, atomic: bool = True) -> bool:
        target = _as_path(path) or self._path
        if not target:
            self._has_error = True
            raise NoPathError("no path to save settings to")

        # serialize before touching the filesystem
        try:
            payload = self.to_bytes()
        except (TypeError, ValueError) as e:
            self._has_error = True
            raise CommitFailedError(f"settings are not JSON serializable: {e}", target) from e

        if atomic:
            self._save_atomic(target, payload)
        else:
            self._save_direct(target, payload)
        log.info("Settings saved (%d bytes, atomic=%s) file=%s", len(payload), atomic, target)
        return True

    def _open_failed(self, target: str, e: OSError) -> OpenFailedError:
        self._has_error = True
        log.warning("Opening settings for writing failed: %s (file=%s)", e, target)
        return OpenFailedError(f"cannot open {target} for writing: {e}", target)

    def _commit_failed(self, target: str, e: OSError) -> CommitFailedError:
        self._has_error = True
        log.warning("Writing settings failed: %s (file=%s)", e, target)
        return CommitFailedError(f"cannot write {target}: {e}", target)

    def _save_direct(self, target: str, payload: bytes) -> None:
        try:
            f = open(target, "wb")
        except OSError as e:
            raise self._open_failed(target, e) from e
        self._has_error = False
        try:
            with f:
                f.write(payload)
        except OSError as e:
            raise self._commit_failed(target, e) from e

    def _save_atomic(self, target: str, payload: bytes) -> None:
        dest = Path(target)
        try:
            tf: BinaryIO = tempfile.NamedTemporaryFile(
                "wb", dir=dest.parent, prefix=f".{dest.name}.", suffix=".tmp", delete=False
            )
        except OSError as e:
            raise self._open_failed(target, e) from e
        self._has_error = False
        tmp_name = tf.name
        try:
            with tf:
                tf.write(payload)
                tf.flush()
                os.fsync(tf.fileno())
            if dest.exists():
                shutil.copymode(dest, tmp_name)
            else:
                os.chmod(tmp_name, 0o666 & ~_current_umask())
            os.replace(tmp_name, dest)
        except OSError as e:
            try:
                os.remove(tmp_name)
            except OSError as cleanup_error:
                log.debug("Removing staging file %s failed: %s", tmp_name, cleanup_error)
            raise self._commit_failed(target, e) from e


def load_settings(path: PathLike) -> JsonSettings:
    return JsonSettings(path)
