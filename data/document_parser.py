"""Split a settings file into its `//` comment header and its JSON body.

File layout:

    // first comment line
    // second comment line

    {"json": "body"}

The header is only looked for when the file starts with ``//``. Body parse
problems never raise: anything that is not a JSON object or array becomes an
empty object, so a hand-edited or truncated file still loads.
"""
from __future__ import annotations

import json
import logging
from typing import Any, List, Optional, Tuple, Union

log = logging.getLogger(__name__)

JsonContainer = Union[dict, list]

COMMENT_PREFIX = b"//"


def has_comment_header(data: bytes) -> bool:
    """File sniffing: does the whole input open with a comment header?"""
    return len(data) >= 2 and data[:2] == COMMENT_PREFIX


def is_comment_line(line: bytes) -> bool:
    """Per-line check used while reading the header."""
    return line.startswith(COMMENT_PREFIX)


def _decode_comment_line(line: bytes) -> str:
    # drop "//" plus one separator character
    text = line[3:].decode("utf-8", errors="replace")
    return text[:-1] if text.endswith("\r") else text


def split_header(data: bytes) -> Tuple[Optional[str], bytes]:
    """Return (comment, body bytes). The terminating line belongs to the body."""
    if not has_comment_header(data):
        return None, data

    lines: List[str] = []
    offset = 0
    while offset < len(data):
        end = data.find(b"\n", offset)
        line_end = len(data) if end == -1 else end
        line = data[offset:line_end]
        if not is_comment_line(line):
            break
        lines.append(_decode_comment_line(line))
        offset = line_end + 1
    return "\n".join(lines), data[offset:]


def parse_body(body: bytes, source: Optional[str] = None) -> JsonContainer:
    if not body.strip():
        return {}
    try:
        parsed: Any = json.loads(body.decode("utf-8-sig"))
    except UnicodeDecodeError as e:
        log.warning("Settings body is not valid UTF-8 (%s); using empty object. file=%s", e, source)
        return {}
    except (ValueError, RecursionError) as e:
        log.warning("Settings body is not valid JSON (%s); using empty object. file=%s", e, source)
        return {}
    if isinstance(parsed, (dict, list)):
        return parsed
    log.warning("Settings root is %s, not an object or array; using empty object. file=%s",
                type(parsed).__name__, source)
    return {}


def parse_document(data: bytes, source: Optional[str] = None) -> Tuple[Optional[str], JsonContainer]:
    comment, body = split_header(data)
    # a header of bare "//" lines is indistinguishable from no header once saved
    return comment or None, parse_body(body, source)
