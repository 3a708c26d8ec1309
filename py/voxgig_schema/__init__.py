# voxgig_schema init

import logging

from .error import (
    SchemaError,
    TypeCastError,
    ValidationError,
)
from .messages import MESSAGES
from .property import Property
from .schema import DEFAULT_OPTS, Schema
from .typecasters import TYPECASTERS
from .utils import (
    enumpath,
    getpath,
    join,
    typify,
    walk,
)
from .validators import VALIDATORS


logging.getLogger(__name__).addHandler(logging.NullHandler())


__all__ = [
    'DEFAULT_OPTS',
    'MESSAGES',
    'Property',
    'Schema',
    'SchemaError',
    'TYPECASTERS',
    'TypeCastError',
    'VALIDATORS',
    'ValidationError',
    'enumpath',
    'getpath',
    'join',
    'typify',
    'walk',
]
