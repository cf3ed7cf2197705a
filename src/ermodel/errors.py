"""Exceptions raised by schema, database and value-conversion operations.

Validation failures are never raised; they are collected in a
ValidationReport (see ermodel.reporting).
"""


class ERModelError(Exception):
    """Base exception for all ermodel errors."""


class DuplicateDefinitionError(ERModelError, ValueError):
    """Raised when an entity, relationship, field or database key already exists."""


class UnknownKeyError(ERModelError, KeyError):
    """Raised when addressing an entity, relationship, field or database that does not exist."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ""


class ProtectedResourceError(ERModelError, RuntimeError):
    """Raised when deleting a resource that must always exist."""


class ConversionError(ERModelError, ValueError):
    """Raised when a field value cannot be read as its declared type."""

    def __init__(self, value: str, target: str):
        self.value = value
        self.target = target
        super().__init__(f"Cannot convert {value!r} to {target}")
