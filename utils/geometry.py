"""Rectangle helpers for geometry-shaped settings ("x, y, w, h" or {"x": ..})."""
from __future__ import annotations

from typing import Any

from models.rectangle import Rectangle

_FIELDS = ("x", "y", "width", "height")


def _parse_int(text: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        return 0


def _number_to_int(value: Any) -> int:
    # bool is an int subclass but not a JSON number
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return 0


def decode_rectangle(value: Any) -> Rectangle:
    """Decode a rectangle from a string or an object; zero rectangle otherwise."""
    if isinstance(value, str):
        parts = value.split(",")
        if len(parts) != 4:
            return Rectangle()
        return Rectangle(**dict(zip(_FIELDS, (_parse_int(p) for p in parts))))
    if isinstance(value, dict):
        return Rectangle(**{name: _number_to_int(value.get(name)) for name in _FIELDS})
    return Rectangle()


def format_rectangle(rect: Rectangle) -> str:
    return f"{rect.x}, {rect.y}, {rect.width}, {rect.height}"
