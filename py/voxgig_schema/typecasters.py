# Copyright (c) 2025 Voxgig Ltd. MIT LICENSE.
#
# Default typecasters, keyed by type name. A typecaster converts a value to
# its type where it can, and returns the value unchanged where it cannot, so
# that the `type` rule reports the mismatch. Values already of the target
# type are returned as they are.


from typing import *
from collections.abc import Mapping
from datetime import date, datetime, timezone
import re

from .utils import (
    ismap,
    islist,
)


R_INTEGER = re.compile(r'^[-+]?\d+$')

FALSY_STRINGS = ('', '0', 'false', 'no', 'off')


def cast_string(val: Any) -> Any:
    if isinstance(val, str):
        return val
    if isinstance(val, bool):
        return 'true' if val else 'false'
    if isinstance(val, (date, datetime)):
        return val.isoformat()
    if isinstance(val, (int, float)):
        return str(val)
    return val


def cast_number(val: Any) -> Any:
    if isinstance(val, bool):
        return int(val)
    if isinstance(val, (int, float)):
        return val
    if isinstance(val, str):
        s = val.strip()
        if R_INTEGER.match(s):
            return int(s)
        try:
            return float(s)
        except ValueError:
            return val
    return val


def cast_int(val: Any) -> Any:
    out = cast_number(val)
    if isinstance(out, float) and out.is_integer():
        return int(out)
    if isinstance(out, int):
        return out
    return val


def cast_float(val: Any) -> Any:
    out = cast_number(val)
    if isinstance(out, (int, float)) and not isinstance(out, bool):
        return float(out)
    return val


def cast_boolean(val: Any) -> Any:
    if isinstance(val, bool):
        return val
    if isinstance(val, str):
        return val.strip().lower() not in FALSY_STRINGS
    if isinstance(val, (int, float)):
        return 0 != val
    return bool(val)


def cast_array(val: Any) -> Any:
    if islist(val):
        return val
    if isinstance(val, (tuple, set, frozenset)):
        return list(val)
    if isinstance(val, str):
        return [s for s in val.split(',')]
    return [val]


def cast_object(val: Any) -> Any:
    if ismap(val):
        return val
    if isinstance(val, Mapping):
        return dict(val)
    return val


def cast_datetime(val: Any) -> Any:
    if isinstance(val, datetime):
        return val
    if isinstance(val, date):
        return datetime(val.year, val.month, val.day)
    if isinstance(val, (int, float)) and not isinstance(val, bool):
        try:
            return datetime.fromtimestamp(val, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return val
    if isinstance(val, str):
        try:
            return datetime.fromisoformat(val.strip())
        except ValueError:
            return val
    return val


def cast_date(val: Any) -> Any:
    if isinstance(val, date) and not isinstance(val, datetime):
        return val
    # The time of day is dropped.
    out = cast_datetime(val)
    if isinstance(out, datetime):
        return out.date()
    return out


TYPECASTERS: Dict[str, Callable[[Any], Any]] = {
    'string': cast_string,
    'str': cast_string,
    'number': cast_number,
    'int': cast_int,
    'float': cast_float,
    'boolean': cast_boolean,
    'bool': cast_boolean,
    'array': cast_array,
    'list': cast_array,
    'object': cast_object,
    'dict': cast_object,
    'date': cast_date,
    'datetime': cast_datetime,
}


__all__ = [
    'TYPECASTERS',
]
