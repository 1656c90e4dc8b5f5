"""Poem Parser — structured parse of the jinrishici sentence payload.

Invariants:
    - Returns a fully populated PoemRecord or raises PoemParseError, nothing in between
    - PoemParseError names the dotted path of the first offending field
    - Pure: no IO, no logging

Expected shape:
    {"data": {"content": str, "origin": {"title": str, "dynasty": str, "author": str}}}
"""

from typing import Any

from shici.core.domain_types import PoemRecord
from shici.core.errors import PoemParseError

_ORIGIN_FIELDS = ("title", "dynasty", "author")


def _require_object(parent: Any, key: str, path: str) -> dict:
    value = parent.get(key) if isinstance(parent, dict) else None
    if not isinstance(value, dict):
        raise PoemParseError(path, "an object")
    return value


def _require_string(parent: dict, key: str, path: str) -> str:
    value = parent.get(key)
    if not isinstance(value, str):
        raise PoemParseError(path, "a string")
    return value


def parse_poem(payload: Any) -> PoemRecord:
    """Extract content and origin from a decoded sentence response."""
    data = _require_object(payload, "data", "data")
    content = _require_string(data, "content", "data.content")
    origin = _require_object(data, "origin", "data.origin")
    title, dynasty, author = (
        _require_string(origin, name, f"data.origin.{name}")
        for name in _ORIGIN_FIELDS
    )
    return PoemRecord(
        content=content, title=title, dynasty=dynasty, author=author,
    )
