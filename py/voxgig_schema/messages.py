# Copyright (c) 2025 Voxgig Ltd. MIT LICENSE.
#
# Default error messages. Each is called as `fn(path, ctx, *args)`.


from typing import *

from .utils import (
    UNDEF,
    ismap,
    stringify,
    typename,
)


def _bounds(rules):
    if ismap(rules):
        return rules.get('min'), rules.get('max')
    return getattr(rules, 'min', UNDEF), getattr(rules, 'max', UNDEF)


def message_type(path, ctx, typ=UNDEF) -> str:
    return f'{path} must be of type {typename(typ)}.'


def message_required(path, ctx=UNDEF, required=True) -> str:
    return f'{path} is required.'


def message_match(path, ctx, regexp) -> str:
    return f'{path} must match {stringify(regexp)}.'


def message_length(path, ctx, rules) -> str:
    if not ismap(rules) and not hasattr(rules, 'min'):
        return f'{path} must have a length of {rules}.'

    vmin, vmax = _bounds(rules)

    if UNDEF is not vmin and UNDEF is not vmax:
        return f'{path} must have a length between {vmin} and {vmax}.'
    if UNDEF is not vmax:
        return f'{path} must have a maximum length of {vmax}.'
    return f'{path} must have a minimum length of {vmin}.'


def message_size(path, ctx, rules) -> str:
    if not ismap(rules) and not hasattr(rules, 'min'):
        return f'{path} must have a size of {rules}.'

    vmin, vmax = _bounds(rules)

    if UNDEF is not vmin and UNDEF is not vmax:
        return f'{path} must be between {vmin} and {vmax}.'
    if UNDEF is not vmax:
        return f'{path} must be less than {vmax}.'
    return f'{path} must be greater than {vmin}.'


def message_enum(path, ctx, enums) -> str:
    names = [stringify(e) for e in enums]
    if len(names) < 2:
        return f'{path} must be {"".join(names)}.'
    return f'{path} must be either {", ".join(names[:-1])} or {names[-1]}.'


def message_illegal(path, ctx=UNDEF) -> str:
    return f'{path} is not allowed.'


def message_default(path, ctx=UNDEF, *args) -> str:
    return f'Validation failed for {path}.'


MESSAGES: Dict[str, Union[str, Callable[..., str]]] = {
    'type': message_type,
    'required': message_required,
    'match': message_match,
    'length': message_length,
    'size': message_size,
    'enum': message_enum,
    'illegal': message_illegal,
    'default': message_default,
}


__all__ = [
    'MESSAGES',
]
