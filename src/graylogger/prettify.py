"""
Value prettification.

Every logged key and value is rendered twice:
- human: a single line, JSON minified, other text with whitespace collapsed
- json: indented JSON when the value is (or parses as) JSON

Both renderings use orjson and never raise for unsupported types.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping, Sequence, Set
from typing import Any, NamedTuple

import orjson
from pydantic import BaseModel

from .errors import KeyValueError

KEY_VALUE_SEPARATOR = " :: "

_PRETTY = orjson.OPT_INDENT_2 | orjson.OPT_NON_STR_KEYS
_TEXT_TYPES = (str, bytes, bytearray)


class Rendered(NamedTuple):
    human: str
    json: str


def _default(obj: Any) -> Any:
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    if isinstance(obj, Mapping):
        return dict(obj)
    if isinstance(obj, (Set, Sequence)) and not isinstance(obj, _TEXT_TYPES):
        return list(obj)
    return str(obj)


def is_structured(value: Any) -> bool:
    """Objects, sequences and mappings are serialized as JSON directly."""
    if isinstance(value, _TEXT_TYPES):
        return False
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return True
    return isinstance(value, (BaseModel, Mapping, Sequence, Set))


def _loads(text: str) -> tuple[bool, Any]:
    try:
        return True, orjson.loads(text)
    except orjson.JSONDecodeError:
        return False, None


def collapse_whitespace(text: str) -> str:
    return " ".join(text.split())


def clean_string(text: str) -> str:
    """Minify JSON text, or collapse every whitespace run to a single space."""
    ok, obj = _loads(text)
    if ok:
        return orjson.dumps(obj).decode()
    return collapse_whitespace(text)


def make_pretty_json(obj: Any) -> str:
    """Create an indented JSON string; degrades to str() when encoding fails."""
    try:
        return orjson.dumps(obj, default=_default, option=_PRETTY).decode()
    except orjson.JSONEncodeError:
        return str(obj)


def make_pretty_json_if_possible(obj: Any) -> str:
    text = obj if isinstance(obj, str) else str(obj)
    ok, parsed = _loads(text)
    if ok:
        return orjson.dumps(parsed, option=_PRETTY).decode()
    return collapse_whitespace(text)


def prettify_object(obj: Any) -> str:
    """Render ``obj`` as indented JSON where possible, to keep structures readable in Graylog."""
    try:
        if is_structured(obj):
            return make_pretty_json(obj)
        return make_pretty_json_if_possible(obj)
    except Exception:
        # A broken __str__ must not break logging.
        return object.__repr__(obj)


def render(value: Any) -> Rendered:
    json_form = prettify_object(value)
    return Rendered(human=clean_string(json_form), json=json_form)


def prettify_key_val(parts: Sequence[str]) -> str:
    """Join rendered parts, e.g. ["Debug", "information"] -> "Debug :: information"."""
    return KEY_VALUE_SEPARATOR.join(parts)


def key_value_pairs(keys_and_values: Sequence[Any]) -> list[tuple[Any, Any]]:
    """Split a flat argument list into ordered (key, value) pairs."""
    if len(keys_and_values) % 2:
        raise KeyValueError(len(keys_and_values))
    return list(zip(keys_and_values[::2], keys_and_values[1::2]))
