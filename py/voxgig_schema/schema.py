# Copyright (c) 2025 Voxgig Ltd. MIT LICENSE.
#
# Voxgig Schema: Schema
# =====================
#
# A Schema maps definition paths to Properties, and validates objects
# against them. Definitions are nested dicts, where each value is either
# a rules dict, a type shorthand, a list shorthand, a nested definition,
# another Schema, or a Property:
#
#     user = Schema({
#         'username': {'type': str, 'required': True, 'length': {'min': 3}},
#         'pets': [{'name': str}],
#         'address': {'street': str, 'city': str},
#     })
#     errors = user.validate(obj)
#
# A dict is a rules dict when every key is a rule name. Use the
# `properties` rule for nested fields that collide with rule names.


from typing import *
import logging

from .error import SchemaError, ValidationError
from .messages import MESSAGES
from .property import DIRECTIVES, Property, invoke
from .typecasters import TYPECASTERS
from .utils import (
    UNDEF,
    S_DS,
    S_DT,
    S_MT,
    delpath,
    enumpath,
    iskey,
    islist,
    ismap,
    join,
    matchpath,
    setpath,
    stringify,
    walk,
)
from .validators import VALIDATORS


logger = logging.getLogger(__name__)


DEFAULT_OPTS = {
    'typecast': False,  # Cast values to their declared types, in place.
    'strip': True,      # Delete undeclared paths, in place.
    'strict': False,    # Report undeclared paths as errors instead of deleting them.
}


def _assign(key, val, registry):
    if isinstance(key, str):
        registry[key] = val
    else:
        registry.update(key)


class Schema:
    """
    A set of Properties keyed by definition path, with its own validator,
    typecaster and message registries (copies of the defaults).
    """

    def __init__(self, definition: Any = UNDEF, opts: Dict[str, Any] = UNDEF) -> None:
        self.opts: Dict[str, Any] = dict(opts or {})
        self.properties: Dict[str, Property] = {}
        self.messages: Dict[str, Any] = dict(MESSAGES)
        self.validators: Dict[str, Callable[..., Any]] = dict(VALIDATORS)
        self.typecasters: Dict[str, Callable[[Any], Any]] = dict(TYPECASTERS)

        if UNDEF is definition:
            return

        if not ismap(definition):
            raise SchemaError(f'Schema definition must be a dict: {stringify(definition, 44)}')

        for key, rules in definition.items():
            self.path(key, rules)

    def path(self, path: Any, rules: Any = UNDEF) -> Property:
        """
        Get or create the Property at `path`, applying `rules` if given.
        Parent paths are created as needed, and a `$` segment declares its
        parent as a list.
        """
        path = self._canonical(path)
        parts = path.split(S_DT)
        suffix = parts[-1]
        prefix = S_DT.join(parts[:-1])

        if prefix:
            parent = self.path(prefix)
            if S_DS == suffix and UNDEF is parent._type:
                parent.type(list)

        if isinstance(rules, Schema):
            return self._mount(path, rules)

        if isinstance(rules, Property):
            if rules._schema is not self or rules.name != path:
                rules = rules.clone(path, self)
            self.properties[path] = rules
            return rules

        prop = self.properties.get(path)
        if UNDEF is prop:
            prop = Property(path, self)
            self.properties[path] = prop

        if UNDEF is rules:
            return prop

        # Type shorthand: `{'name': str}` or `{'name': 'string'}`.
        if isinstance(rules, (str, type)):
            return prop.type(rules)

        # List shorthand: `{'tags': [str]}` or `{'pair': [str, int]}`.
        if islist(rules) or isinstance(rules, tuple):
            prop.type(list)
            if 1 == len(rules):
                prop.each(rules[0])
            else:
                prop.elements(rules)
            return prop

        if not ismap(rules):
            raise SchemaError(f'Invalid rules for {path}: {stringify(rules, 44)}')

        if self._isrules(rules):
            for key, rule in rules.items():
                if key in DIRECTIVES:
                    getattr(prop, key)(rule)
                else:
                    prop._register(key, [rule])
            return prop

        # Nested definition.
        prop.type(dict)
        for key, rule in rules.items():
            self.path(join(key, path), rule)

        return prop

    def validate(self, obj: Any, opts: Dict[str, Any] = UNDEF) -> List[ValidationError]:
        """
        Validate `obj`, returning the list of errors, in definition order,
        followed by undeclared paths if `strict`. An empty list means `obj`
        is valid. Typecasting and stripping modify `obj` in place.
        """
        opts = self._options(opts)
        errors: List[ValidationError] = []

        for name, prop in list(self.properties.items()):
            enumpath(name, obj, self._checker(prop, obj, opts, errors))

        if opts['strict']:
            errors.extend(self.enforce(obj))
        elif opts['strip']:
            self.strip(obj)

        return errors

    def assert_(self, obj: Any, opts: Dict[str, Any] = UNDEF) -> None:
        "Validate `obj`, raising the first error if there are any."
        errors = self.validate(obj, opts)
        if 0 < len(errors):
            raise errors[0]

    def typecast(self, obj: Any) -> Any:
        "Cast every declared value of `obj` to its type, in place."
        for name, prop in list(self.properties.items()):
            enumpath(name, obj, lambda key, value, prop=prop: self._cast(prop, obj, key, value))
        return obj

    def strip(self, obj: Any) -> Any:
        "Delete every undeclared path of `obj`, in place."
        def stripper(path, prop):
            if self._declared(path, prop):
                return True
            logger.debug('Stripping undeclared path %s', path)
            delpath(obj, path)
            return False

        walk(obj, stripper)
        return obj

    def enforce(self, obj: Any) -> List[ValidationError]:
        "Return an `illegal` error for every undeclared path of `obj`."
        errors: List[ValidationError] = []

        def enforcer(path, prop):
            if self._declared(path, prop):
                return True
            logger.debug('Undeclared path %s', path)
            errors.append(self._illegal(path, obj))
            return False

        walk(obj, enforcer)
        return errors

    def message(self, name: Any, message: Any = UNDEF) -> 'Schema':
        """
        Override default messages, by name or with a dict. A message is a
        string, or a function called with `(path, ctx, *args)`.
        """
        _assign(name, message, self.messages)
        return self

    def validator(self, name: Any, fn: Any = UNDEF) -> 'Schema':
        """
        Override or add validators, by name or with a dict. A validator is
        called with `(value, ctx, *args, path)`.
        """
        _assign(name, fn, self.validators)
        return self

    def typecaster(self, name: Any, fn: Any = UNDEF) -> 'Schema':
        "Override or add typecasters, keyed by type name."
        _assign(name, fn, self.typecasters)
        return self

    def _mount(self, path: str, schema: 'Schema') -> Property:
        prop = self.path(path)

        # A declared type is kept.
        if 0 < len(schema.properties) and UNDEF is prop._type:
            prop.type(dict)

        logger.debug('Mounting %d paths at %s', len(schema.properties), path)

        for name, sub in list(schema.properties.items()):
            key = join(name, path)
            self.path(key, sub.clone(key, self))

        return prop

    def _checker(self, prop, obj, opts, errors):
        def check(key, value):
            if opts['typecast']:
                value = self._cast(prop, obj, key, value)

            err = prop.validate(value, obj, key)
            if UNDEF is not err:
                errors.append(err)

        return check

    def _cast(self, prop, obj, key, value):
        if UNDEF is value:
            return value

        cast = prop.typecast(value)
        if cast is not value:
            logger.debug('Typecast %s: %r -> %r', key, value, cast)
            setpath(obj, key, cast)

        return cast

    def _illegal(self, path, obj):
        message = self.messages.get('illegal') or self.messages.get('default')
        if callable(message):
            message = invoke(message, path, obj)
        return ValidationError(message, path)

    def _declared(self, path, prop):
        if prop in self.properties:
            return True
        for name in self.properties:
            if matchpath(name, path):
                return True
        return False

    def _isrules(self, rules):
        for key in rules:
            if key not in DIRECTIVES and key not in self.validators:
                return False
        return True

    def _options(self, opts):
        out = dict(DEFAULT_OPTS)
        out.update(self.opts)
        out.update(opts or {})
        return out

    def _canonical(self, path):
        if not iskey(path):
            raise SchemaError(f'Invalid path: {stringify(path, 44)}')

        path = str(path)
        if S_MT in path.split(S_DT):
            raise SchemaError(f'Invalid path, empty segment: {path}')

        return path
