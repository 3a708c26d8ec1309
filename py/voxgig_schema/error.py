# Copyright (c) 2025 Voxgig Ltd. MIT LICENSE.

from typing import *


class ValidationError(ValueError):
    """
    A failed rule for one concrete path. Produced by validation, collected
    in order, and raised by `Schema.assert_`.
    """

    status = 400

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self._message = message
        self._path = path

    @property
    def message(self) -> str:
        return self._message

    @property
    def path(self) -> str:
        return self._path

    def to_json(self) -> Dict[str, str]:
        return {'path': self._path, 'message': self._message}

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return (self._message, self._path) == (other._message, other._path)

    def __hash__(self) -> int:
        return hash((self._message, self._path))

    def __repr__(self) -> str:
        return f'ValidationError({self._message!r}, {self._path!r})'


class SchemaError(ValueError):
    "Malformed schema definition or rule registration."


class TypeCastError(TypeError):
    "No typecaster is registered for a declared type."
