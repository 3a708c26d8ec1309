# Copyright (c) 2025 Voxgig Ltd. MIT LICENSE.
#
# Voxgig Schema: Property
# =======================
#
# A Property is returned by each call to `Schema.path()`, and is also
# created internally when a definition is passed to the Schema
# constructor. It holds the ordered rule registry of one definition path.


from typing import *
from datetime import date
import inspect
import numbers

from .error import SchemaError, TypeCastError, ValidationError
from .utils import (
    UNDEF,
    S_DS,
    islist,
    join,
    typename,
)


# Property methods that may appear as keys of a rules definition.
DIRECTIVES = frozenset([
    'each',
    'elements',
    'enum',
    'length',
    'match',
    'message',
    'properties',
    'required',
    'schema',
    'size',
    'type',
    'use',
])


def invoke(fn: Callable[..., Any], *args: Any) -> Any:
    """
    Call `fn` with as many of the leading `args` as it accepts, so that
    validators and message generators may ignore trailing arguments.
    """
    try:
        params = list(inspect.signature(fn).parameters.values())
    except (ValueError, TypeError):
        return fn(*args)

    if any(p.kind == p.VAR_POSITIONAL for p in params):
        return fn(*args)

    positional = [p for p in params
                  if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)]
    return fn(*args[:len(positional)])


class Property:
    """
    Rules for one path of a Schema.

    Rules run in the order they were first registered. Registering a rule
    name again replaces its arguments but keeps its position.
    """

    def __init__(
            self,
            name: str,            # Full definition path.
            schema: Any,          # Owning schema.
            origin: Any = UNDEF   # Schema providing validators, messages and typecasters.
    ) -> None:
        self.name = name
        self.registry: Dict[str, Dict[str, Any]] = {}
        self.messages: Dict[str, Any] = {}
        self._schema = schema
        self._origin = schema if origin is UNDEF else origin
        self._type = UNDEF

    def message(self, messages):
        """
        Register messages. A string sets the default message.

            prop.message('something is wrong')
            prop.message({'required': 'thing is required.'})
        """
        if isinstance(messages, str):
            messages = {'default': messages}

        for key, val in messages.items():
            self.messages[key] = val

        return self

    def schema(self, schema):
        "Mount the given schema at the current path."
        self._schema.path(self.name, schema)
        return self

    def use(self, fns):
        """
        Validate using named functions. Each entry is either a function, or a
        list of a function followed by static arguments:

            prop.use({
                'binary': lambda val, ctx: re.match(r'^[01]+$', val),
                'bits': [lambda val, ctx, bits: len(val) == bits, 32],
            })

        Messages are looked up by the same names.
        """
        for name, entry in fns.items():
            if isinstance(entry, (list, tuple)):
                if 0 == len(entry) or not callable(entry[0]):
                    raise SchemaError(f'Invalid validator for {self.name}: {name}')
                fn, args = entry[0], list(entry[1:])
            elif callable(entry):
                fn, args = entry, []
            else:
                raise SchemaError(f'Invalid validator for {self.name}: {name}')
            self._register(name, args, fn)

        return self

    def required(self, required=True):
        return self._register('required', [required])

    def type(self, typ):
        "Validate the type: a class such as `str`, or a name such as 'string'."
        self._type = typ
        return self._register('type', [typ])

    def string(self):
        return self.type(str)

    def number(self):
        return self.type(numbers.Number)

    def array(self):
        return self.type(list)

    def date(self):
        return self.type(date)

    def length(self, rules):
        "Validate length, either exact, or with a `min` and/or `max` mapping."
        return self._register('length', [rules])

    def size(self, rules):
        "Validate numeric size, either exact, or with a `min` and/or `max` mapping."
        return self._register('size', [rules])

    def enum(self, enums):
        return self._register('enum', [list(enums)])

    def match(self, regexp):
        return self._register('match', [regexp])

    def each(self, rules):
        "Validate every element of the list at this path against `rules`."
        self._schema.path(join(S_DS, self.name), rules)
        return self

    def elements(self, arr):
        "Validate each list element against the rules at the same position."
        if not islist(arr) and not isinstance(arr, tuple):
            raise SchemaError(f'Elements of {self.name} must be a list of rules.')
        for i in range(len(arr)):
            self._schema.path(join(i, self.name), arr[i])
        return self

    def properties(self, props):
        "Register each entry of `props` as a nested path, whatever its name."
        for key, rules in props.items():
            self._schema.path(join(key, self.name), rules)
        return self

    def path(self, *args):
        "Proxy for `Schema.path`, for chaining."
        return self._schema.path(*args)

    def typecast(self, value):
        "Cast `value` to the declared type, if there is one."
        typ = self._type
        if UNDEF is typ:
            return value

        name = typename(typ)
        casters = self._origin.typecasters
        cast = casters.get(name, casters.get(name.lower()))

        if not callable(cast):
            raise TypeCastError(f'Unable to typecast {self.name}: unknown type {name}.')

        return cast(value)

    def validate(self, value, ctx, path=UNDEF):
        """
        Validate `value`, where `ctx` is the top level object and `path` the
        concrete path of the value. Returns the error of the first failing
        rule, or None.
        """
        if UNDEF is path:
            path = self.name

        for rule in list(self.registry):
            err = self._run(rule, value, ctx, path)
            if UNDEF is not err:
                return err

        return UNDEF

    def clone(self, name, schema):
        "Copy to `name` in `schema`, keeping validators and messages of the origin."
        prop = Property(name, schema, self._origin)
        prop.registry = {rule: {'args': list(entry['args']), 'fn': entry['fn']}
                         for rule, entry in self.registry.items()}
        prop.messages = dict(self.messages)
        prop._type = self._type
        return prop

    def _run(self, rule, value, ctx, path):
        entry = self.registry.get(rule)
        if UNDEF is entry:
            return UNDEF

        args = entry['args']
        validator = entry['fn'] or self._origin.validators.get(rule)

        if not callable(validator):
            raise SchemaError(f'Unknown validator for {self.name}: {rule}')

        if not invoke(validator, value, ctx, *args, path):
            return self._error(rule, ctx, args, path)

        return UNDEF

    def _register(self, rule, args, fn=UNDEF):
        self.registry[rule] = {'args': args, 'fn': fn}
        return self

    def _error(self, rule, ctx, args, path):
        origin = self._origin

        message = (self.messages.get(rule) or
                   self.messages.get('default') or
                   origin.messages.get(rule) or
                   origin.messages.get('default'))

        if callable(message):
            message = invoke(message, path, ctx, *args)

        return ValidationError(message, path)

    def __repr__(self):
        return f'Property({self.name!r}, rules={list(self.registry)})'
