# Copyright (c) 2025 Voxgig Ltd. MIT LICENSE.
#
# Default validators. Each is called as `fn(value, ctx, *args, path)` and
# returns a truthy value when the value is valid. Absent values pass every
# rule except `required`.


from typing import *
from abc import ABCMeta
import re

from .utils import (
    UNDEF,
    isempty,
    ismap,
    typify,
)


def validate_required(value, ctx, required=True, path=UNDEF) -> bool:
    "Validates presence."
    if required is False:
        return True
    return not isempty(value)


def validate_type(value, ctx, name, path=UNDEF) -> bool:
    """
    Validates type. Concrete classes match the exact class of the value, and
    abstract classes such as `numbers.Number` match by instance. `bool` only
    matches `bool`. Names match the structural type of the value.
    """
    if UNDEF is value:
        return True

    if isinstance(name, type):
        if isinstance(value, bool) and name is not bool:
            return False
        if isinstance(name, ABCMeta):
            return isinstance(value, name)
        return type(value) is name

    return typify(value) == str(name).lower()


def _bounds(rules):
    if ismap(rules):
        return rules.get('min'), rules.get('max')
    return getattr(rules, 'min', UNDEF), getattr(rules, 'max', UNDEF)


def validate_length(value, ctx, rules, path=UNDEF) -> bool:
    "Validates length, exact or within inclusive `min` and `max`."
    if UNDEF is value:
        return True

    try:
        vlen = len(value)
    except TypeError:
        return False

    if isinstance(rules, int) and not isinstance(rules, bool):
        return vlen == rules

    vmin, vmax = _bounds(rules)
    if UNDEF is not vmin and vlen < vmin:
        return False
    if UNDEF is not vmax and vlen > vmax:
        return False
    return True


def validate_size(value, ctx, rules, path=UNDEF) -> bool:
    "Validates numeric size, exact or within inclusive `min` and `max`."
    if UNDEF is value:
        return True

    if isinstance(rules, (int, float)) and not isinstance(rules, bool):
        return value == rules

    vmin, vmax = _bounds(rules)
    try:
        if UNDEF is not vmin and value < vmin:
            return False
        if UNDEF is not vmax and value > vmax:
            return False
    except TypeError:
        return False
    return True


def validate_enum(value, ctx, enums, path=UNDEF) -> bool:
    "Validates membership of a list of allowed values."
    if UNDEF is value:
        return True
    return value in enums


def validate_match(value, ctx, regexp, path=UNDEF) -> bool:
    "Validates a regular expression match anywhere in the value."
    if UNDEF is value:
        return True
    return re.search(regexp, str(value)) is not None


VALIDATORS: Dict[str, Callable[..., Any]] = {
    'required': validate_required,
    'type': validate_type,
    'length': validate_length,
    'size': validate_size,
    'enum': validate_enum,
    'match': validate_match,
}


__all__ = [
    'VALIDATORS',
    'validate_enum',
    'validate_length',
    'validate_match',
    'validate_required',
    'validate_size',
    'validate_type',
]
