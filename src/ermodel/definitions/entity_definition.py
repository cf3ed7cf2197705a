"""Entity type definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Union

from ermodel.errors import DuplicateDefinitionError, UnknownKeyError
from .defined_fields import DefinedFields
from .field import Field, FieldBuilder
from .field_type import FieldType

if TYPE_CHECKING:
    from .relationship import RelationshipDefinition, RelationshipVector


class EntityDefinition:
    """
    One entity type: its names, fields and the relationships it takes part in.

    Relationship vectors are derived on each call from the definitions the
    entity participates in, so reversed views always match their definition.
    """

    def __init__(self, name: str, plural_name: str):
        if not name or not plural_name:
            raise ValueError("Entity name and plural name must not be empty")
        self.name = name
        self.plural_name = plural_name
        self.fields = DefinedFields()
        self._relationships: List[RelationshipDefinition] = []

    def add_field(self, field: Union[Field, FieldBuilder]) -> Field:
        if isinstance(field, FieldBuilder):
            field = field.build()
        return self.fields.add_field(field)

    def add_fields(self, *fields: Union[Field, FieldBuilder]) -> "EntityDefinition":
        self.fields.add_fields(*[f.build() if isinstance(f, FieldBuilder) else f for f in fields])
        return self

    def get_field(self, name: str) -> Field:
        return self.fields.get_field(name)

    def has_field_named(self, name: str) -> bool:
        return self.fields.has_field_named(name)

    def field_names(self) -> List[str]:
        return self.fields.field_names()

    def generated_id_fields(self) -> List[Field]:
        return self.fields.fields_of_type(FieldType.AUTO_INCREMENT, FieldType.AUTO_GUID)

    def unique_fields(self) -> List[Field]:
        return [f for f in self.fields if f.must_be_unique]

    def participate_in(self, relationship: RelationshipDefinition) -> None:
        """Record a relationship this entity is at either end of."""
        if not relationship.involves(self):
            raise ValueError(f"Relationship '{relationship.name}' does not involve {self.name}")
        if any(r.name == relationship.name for r in self._relationships):
            raise DuplicateDefinitionError(
                f"Entity {self.name} already has a relationship named '{relationship.name}'"
            )
        self._relationships.append(relationship)

    def relationships(self) -> List[RelationshipVector]:
        """Vectors usable from this entity: forward ones plus reversed two-way ones."""
        vectors: List[RelationshipVector] = []
        for relationship in self._relationships:
            vectors.extend(relationship.vectors_from(self))
        return vectors

    def relationship_definitions(self) -> List[RelationshipDefinition]:
        return list(self._relationships)

    def has_relationship_named(self, name: str) -> bool:
        return any(v.name == name for v in self.relationships())

    def get_relationship(self, name: str) -> RelationshipVector:
        for vector in self.relationships():
            if vector.name == name:
                return vector
        raise UnknownKeyError(f"Entity {self.name} has no relationship named '{name}'")

    def __repr__(self) -> str:
        return f"EntityDefinition({self.name!r}, {self.plural_name!r})"
