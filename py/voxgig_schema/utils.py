# Copyright (c) 2025 Voxgig Ltd. MIT LICENSE.
#
# Voxgig Schema: path utilities
# =============================
#
# Functions for dotted paths over in-memory JSON-like data structures.
#
# Path algebra
# - join: join a path segment onto a prefix.
# - enumpath: expand `$` wildcard segments against a concrete object.
# - walk: walk an object, calling back with each concrete path and its
#   wildcard form.
#
# Data helpers
# - islist, ismap, iskey, isempty: identify value kinds.
# - typify: structural type name of a value.
# - typename: canonical name of a declared type.
# - getprop, setprop, delprop: safely access a property by key.
# - getpath, setpath, delpath: safely access a value by dotted path.
# - stringify: human-friendly string version of a value.


from typing import *
from datetime import date, datetime
import json
import re


# Wildcard boundaries: a `.$` segment followed by another segment or the end.
R_WILDCARD = re.compile(r'\.\$(?=\.|$)')

# General strings.
S_array = 'array'
S_boolean = 'boolean'
S_date = 'date'
S_function = 'function'
S_number = 'number'
S_object = 'object'
S_string = 'string'
S_null = 'null'
S_MT = ''
S_DS = '$'
S_DT = '.'


# The standard undefined value for this language.
UNDEF = None


def ismap(val: Any = UNDEF) -> bool:
    "Value is a defined map (hash) with string keys."
    return isinstance(val, dict)


def islist(val: Any = UNDEF) -> bool:
    "Value is a defined list (array) with integer keys (indexes)."
    return isinstance(val, list)


def iskey(key: Any = UNDEF) -> bool:
    "Value is a defined string (non-empty) or integer key."
    if isinstance(key, str):
        return len(key) > 0
    # Exclude bool (which is a subclass of int)
    if isinstance(key, bool):
        return False
    if isinstance(key, int):
        return True
    return False


def isempty(val: Any = UNDEF) -> bool:
    "Check for an 'empty' value - None or empty string."
    return UNDEF is val or S_MT == val


def typify(value: Any = UNDEF) -> str:
    "Structural type name of a runtime value."
    if value is UNDEF:
        return S_null
    if isinstance(value, bool):
        return S_boolean
    if isinstance(value, (int, float)):
        return S_number
    if isinstance(value, str):
        return S_string
    if isinstance(value, (date, datetime)):
        return S_date
    if isinstance(value, list):
        return S_array
    if isinstance(value, dict):
        return S_object
    if callable(value):
        return S_function
    return S_object


def typename(typ: Any) -> str:
    "Canonical name of a declared type: class name, or the name given."
    if isinstance(typ, type):
        return typ.__name__
    return str(typ)


def getprop(val: Any = UNDEF, key: Any = UNDEF, alt: Any = UNDEF) -> Any:
    """
    Safely get a property of a node. Undefined arguments return undefined.
    If the key is not found, return the alternative value.
    """
    if UNDEF is val or UNDEF is key:
        return alt

    out = alt

    if ismap(val):
        out = val.get(str(key), alt)

    elif islist(val):
        try:
            key = int(key)
        except (TypeError, ValueError):
            return alt

        if 0 <= key < len(val):
            out = val[key]

    if UNDEF is out:
        return alt

    return out


def setprop(parent: Any, key: Any, val: Any):
    """
    Safely set a property on a dictionary or list.
    For lists, key == len(list) appends, other out of range keys are ignored.
    """
    if not iskey(key):
        return parent

    if ismap(parent):
        parent[str(key)] = val

    elif islist(parent):
        try:
            key_i = int(key)
        except ValueError:
            return parent

        if 0 <= key_i < len(parent):
            parent[key_i] = val
        elif key_i == len(parent):
            parent.append(val)

    return parent


def delprop(parent: Any, key: Any):
    """
    Delete a property from a dictionary or list.
    For lists, the element at the index is removed and remaining elements
    are shifted down.
    """
    if not iskey(key):
        return parent

    if ismap(parent):
        parent.pop(str(key), UNDEF)

    elif islist(parent):
        try:
            key_i = int(key)
        except ValueError:
            return parent

        if 0 <= key_i < len(parent):
            parent.pop(key_i)

    return parent


def getpath(store: Any, path: Any) -> Any:
    "Get the value at a dotted path. Missing values are undefined."
    if UNDEF is path:
        return UNDEF

    path = str(path)
    if S_MT == path:
        return store

    val = store
    for part in path.split(S_DT):
        val = getprop(val, part)
        if UNDEF is val:
            break

    return val


def setpath(store: Any, path: str, val: Any):
    "Set the value at a dotted path, if the parent node exists."
    parts = str(path).split(S_DT)
    parent = getpath(store, S_DT.join(parts[:-1]))
    setprop(parent, parts[-1], val)
    return store


def delpath(store: Any, path: str):
    "Delete the value at a dotted path, if the parent node exists."
    parts = str(path).split(S_DT)
    parent = getpath(store, S_DT.join(parts[:-1]))
    delprop(parent, parts[-1])
    return store


def stringify(val: Any, maxlen: int = UNDEF) -> str:
    "Safely stringify a value for printing (NOT JSON!)."
    valstr = S_MT

    if UNDEF is val:
        return valstr

    if isinstance(val, str):
        valstr = val
    elif isinstance(val, re.Pattern):
        valstr = '/' + val.pattern + '/'
    elif isinstance(val, type):
        valstr = val.__name__
    else:
        try:
            valstr = json.dumps(val, sort_keys=True, separators=(',', ':'))
            valstr = valstr.replace('"', '')
        except (TypeError, ValueError):
            valstr = str(val)

    if maxlen is not UNDEF:
        json_len = len(valstr)
        valstr = valstr[:maxlen]

        if 3 < maxlen < json_len:
            valstr = valstr[:maxlen - 3] + '...'

    return valstr


def join(segment: Any, prefix: Any = UNDEF) -> str:
    "Join `segment` onto `prefix` with a dot, if there is a prefix."
    if prefix:
        return str(prefix) + S_DT + str(segment)
    return str(segment)


def enumpath(path: str, obj: Any, callback: Callable[[str, Any], Any]) -> None:
    """
    Enumerate all concrete permutations of `path` against `obj`, replacing
    each `$` segment with the indexes of the list found at that position.

    The callback receives the concrete path and the value found there, which
    may be undefined. A wildcard over something that is not a list produces
    no callbacks.
    """
    parts = R_WILDCARD.split(path)
    first = parts[0]
    rest = parts[1:]
    val = getpath(obj, first)

    if 0 == len(rest):
        callback(first, val)
        return

    if not islist(val):
        return

    for i in range(len(val)):
        current = join(i, first)
        enumpath(current + '.$'.join(rest), obj, callback)


def walk(
        # These arguments are the public interface.
        obj: Any,
        callback: Callable[[str, str], bool],

        # These arguments are used for recursive state.
        path: str = UNDEF,
        prop: str = UNDEF
) -> None:
    """
    Walk a data structure depth-first, calling `callback(path, prop)` for
    each map key. `path` is the concrete path, `prop` the same path with list
    indexes replaced by `$`. Return true from the callback to descend into
    the value, false to skip it.
    """
    if islist(obj):
        # List elements are not called back, only walked.
        for i in range(len(obj)):
            walk(obj[i], callback, join(i, path), join(S_DS, prop))
        return

    if not ismap(obj):
        return

    # Callbacks may delete keys.
    for key, val in list(obj.items()):
        newpath = join(key, path)
        newprop = join(key, prop)
        if callback(newpath, newprop):
            walk(val, callback, newpath, newprop)


def matchpath(defpath: str, path: str) -> bool:
    "Concrete `path` matches definition path `defpath` (`$` matches indexes)."
    defparts = defpath.split(S_DT)
    parts = path.split(S_DT)

    if len(defparts) != len(parts):
        return False

    for defpart, part in zip(defparts, parts):
        if defpart == part:
            continue
        if S_DS == defpart and part.isdigit():
            continue
        return False

    return True


__all__ = [
    'UNDEF',
    'delpath',
    'delprop',
    'enumpath',
    'getpath',
    'getprop',
    'isempty',
    'iskey',
    'islist',
    'ismap',
    'join',
    'matchpath',
    'setpath',
    'setprop',
    'stringify',
    'typename',
    'typify',
    'walk',
]
