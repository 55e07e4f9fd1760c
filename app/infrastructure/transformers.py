"""
Key casing transforms between the database (snake_case) and the API (camelCase).
"""

import re
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any
from uuid import UUID


# Values that are returned as-is, never descended into
ATOMIC_TYPES = (str, bytes, bytearray, datetime, date, time, timedelta, Decimal, UUID, re.Pattern)

_SNAKE_SEGMENT = re.compile(r"_([a-z0-9])")
_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")


def to_camel_key(key: str) -> str:
    """user_id -> userId"""
    return _SNAKE_SEGMENT.sub(lambda match: match.group(1).upper(), key)


def to_snake_key(key: str) -> str:
    """userId -> user_id, URLPath -> url_path"""
    key = _ACRONYM_BOUNDARY.sub(r"\1_\2", key)
    key = _WORD_BOUNDARY.sub(r"\1_\2", key)
    return key.lower()


def _transform(value: Any, convert_key) -> Any:
    if value is None or isinstance(value, ATOMIC_TYPES):
        return value
    if isinstance(value, dict):
        return {
            convert_key(key) if isinstance(key, str) else key: _transform(item, convert_key)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [_transform(item, convert_key) for item in value]
    return value


def snake_to_camel(value: Any) -> Any:
    """
    Recursively convert dict keys from snake_case to camelCase.
    Lists and tuples are mapped element-wise; other values are returned unchanged.
    """
    return _transform(value, to_camel_key)


def camel_to_snake(value: Any) -> Any:
    """
    Recursively convert dict keys from camelCase to snake_case.
    """
    return _transform(value, to_snake_key)
