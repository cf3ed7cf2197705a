"""Ordered, name-keyed set of field definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, Iterator, List

from ermodel.errors import DuplicateDefinitionError, UnknownKeyError
from .field_type import FieldType

if TYPE_CHECKING:
    from .field import Field


class DefinedFields:
    """Fields of an entity or of a nested OBJECT field, in definition order."""

    def __init__(self, fields: Iterable[Field] = ()):
        self._fields: Dict[str, Field] = {}
        self.add_fields(*fields)

    def add_field(self, field: Field) -> Field:
        self.add_fields(field)
        return field

    def add_fields(self, *fields: Field) -> None:
        """
        Add fields, all or none.

        Raises:
            DuplicateDefinitionError: If a name is already defined or repeated
        """
        seen = set(self._fields)
        for field in fields:
            if field.name in seen:
                raise DuplicateDefinitionError(f"Field '{field.name}' is already defined")
            seen.add(field.name)
        for field in fields:
            self._fields[field.name] = field

    def get_field(self, name: str) -> Field:
        if name not in self._fields:
            raise UnknownKeyError(f"Field '{name}' is not defined")
        return self._fields[name]

    def has_field_named(self, name: str) -> bool:
        return name in self._fields

    def field_names(self) -> List[str]:
        return list(self._fields.keys())

    def fields(self) -> List[Field]:
        return list(self._fields.values())

    def fields_of_type(self, *types: FieldType) -> List[Field]:
        return [f for f in self._fields.values() if f.type in types]

    def __iter__(self) -> Iterator[Field]:
        return iter(list(self._fields.values()))

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __repr__(self) -> str:
        return f"DefinedFields({self.field_names()!r})"
