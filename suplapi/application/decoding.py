"""Turn raw response text into domain entities.

Decoding is strict: every field must be present with the expected JSON type.
Anything else becomes a JSONError naming the offending field.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Optional, Tuple

from suplapi.domain.entities import Playlist, Track
from suplapi.domain.errors import JSONError

I32 = (-2 ** 31, 2 ** 31 - 1)
I64 = (-2 ** 63, 2 ** 63 - 1)


def parse_json(text: str) -> Any:
    """Parse response text into a generic JSON value."""
    try:
        return json.loads(text)
    except (TypeError, ValueError, RecursionError) as e:
        raise JSONError(str(e), e) from e


def _require_object(value: Any, what: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise JSONError(f"invalid type: expected {what} to be an object, got {_type_name(value)}")
    return value


def _require_field(obj: Dict[str, Any], name: str, expected: type, what: str,
                   bounds: Optional[Tuple[int, int]] = None) -> Any:
    if name not in obj:
        raise JSONError(f"missing field `{name}` in {what}")
    value = obj[name]
    # bool is an int subclass but never a valid integer field
    if isinstance(value, bool) or not isinstance(value, expected):
        raise JSONError(
            f"invalid type for `{name}` in {what}: expected {expected.__name__}, got {_type_name(value)}"
        )
    if bounds is not None and not bounds[0] <= value <= bounds[1]:
        raise JSONError(f"invalid value for `{name}` in {what}: {value} is out of range")
    return value


def _type_name(value: Any) -> str:
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, dict):
        return 'object'
    if isinstance(value, list):
        return 'array'
    if isinstance(value, str):
        return 'string'
    return type(value).__name__


def decode_track(value: Any, index: int = 0) -> Track:
    what = f"items[{index}]"
    obj = _require_object(value, what)
    return Track(
        timestamp=_require_field(obj, 'timestamp', int, what, I64),
        date=_require_field(obj, 'date', str, what),
        channel=_require_field(obj, 'channel', int, what, I32),
        artist=_require_field(obj, 'artist', str, what),
        song=_require_field(obj, 'song', str, what),
    )


def decode_playlist(value: Any) -> Playlist:
    """Coerce a generic JSON value into a Playlist."""
    obj = _require_object(value, 'playlist')
    items = _require_field(obj, 'items', list, 'playlist')
    next_token = _require_field(obj, 'next_token', int, 'playlist', I64)
    return Playlist(
        items=tuple(decode_track(item, i) for i, item in enumerate(items)),
        next_token=next_token,
    )
