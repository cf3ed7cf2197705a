"""Registry of entity and relationship definitions."""

from __future__ import annotations

from typing import Dict, List, Optional, Union

from ermodel.config.logging import get_logger
from ermodel.errors import DuplicateDefinitionError, UnknownKeyError
from .entity_definition import EntityDefinition
from .relationship import Cardinality, RelationshipDefinition

logger = get_logger(__name__)

EntityRef = Union[EntityDefinition, str]


class ERSchema:
    """
    The structural definition shared by every instance database.

    Entities are addressable by singular and plural name, relationships by
    name. Definitions are append-only: duplicates are rejected when defined
    and nothing is ever removed.
    """

    def __init__(self):
        self._entities: Dict[str, EntityDefinition] = {}
        self._entities_by_plural: Dict[str, EntityDefinition] = {}
        self._relationships: Dict[str, RelationshipDefinition] = {}

    def define_entity(self, name: str, plural_name: Optional[str] = None) -> EntityDefinition:
        """
        Define a new entity type.

        Args:
            name: Singular name, unique within the schema
            plural_name: Plural name, unique within the schema (default: name + "s")

        Returns:
            The new EntityDefinition

        Raises:
            DuplicateDefinitionError: If either name is already used by an entity
        """
        plural_name = plural_name or f"{name}s"
        taken = set(self._entities) | set(self._entities_by_plural)
        for candidate in {name, plural_name}:
            if candidate in taken:
                raise DuplicateDefinitionError(
                    f"An entity named or pluralised '{candidate}' is already defined"
                )

        definition = EntityDefinition(name, plural_name)
        self._entities[name] = definition
        self._entities_by_plural[plural_name] = definition
        logger.info(f"Defined entity {name} ({plural_name})")
        return definition

    def define_relationship(
        self,
        from_entity: EntityRef,
        to_entity: EntityRef,
        name: str,
        cardinality: Union[Cardinality, str] = Cardinality.ONE_TO_MANY,
        two_way: bool = False,
    ) -> RelationshipDefinition:
        """
        Define a named relationship between two entities of this schema.

        Args:
            from_entity: Definition or name of the 'from' entity
            to_entity: Definition or name of the 'to' entity
            name: Relationship name, unique within the schema
            cardinality: Multiplicity read from 'from' to 'to'
            two_way: Whether a reversed vector is available from the 'to' side

        Raises:
            UnknownKeyError: If an entity is not part of this schema
            DuplicateDefinitionError: If the relationship name is already used
        """
        source = self._resolve(from_entity)
        target = self._resolve(to_entity)
        if not name:
            raise ValueError("Relationship name must not be empty")
        if name in self._relationships:
            raise DuplicateDefinitionError(f"Relationship '{name}' is already defined")

        relationship = RelationshipDefinition(
            from_entity=source,
            to_entity=target,
            name=name,
            cardinality=Cardinality(cardinality),
            two_way=two_way,
        )
        source.participate_in(relationship)
        if target is not source:
            target.participate_in(relationship)
        self._relationships[name] = relationship
        logger.info(f"Defined relationship {relationship!r}")
        return relationship

    def has_entity_named(self, name: str) -> bool:
        return name in self._entities

    def has_entity_with_plural_named(self, plural_name: str) -> bool:
        return plural_name in self._entities_by_plural

    def get_entity_definition_named(self, name: str) -> EntityDefinition:
        if name not in self._entities:
            raise UnknownKeyError(f"Entity '{name}' is not defined")
        return self._entities[name]

    def get_entity_definition_with_plural_named(self, plural_name: str) -> EntityDefinition:
        if plural_name not in self._entities_by_plural:
            raise UnknownKeyError(f"No entity has the plural name '{plural_name}'")
        return self._entities_by_plural[plural_name]

    def entity_names(self) -> List[str]:
        return list(self._entities.keys())

    def entity_definitions(self) -> List[EntityDefinition]:
        return list(self._entities.values())

    def has_relationship_named(self, name: str) -> bool:
        return name in self._relationships

    def get_relationship_named(self, name: str) -> RelationshipDefinition:
        if name not in self._relationships:
            raise UnknownKeyError(f"Relationship '{name}' is not defined")
        return self._relationships[name]

    def relationships(self) -> List[RelationshipDefinition]:
        return list(self._relationships.values())

    def owns(self, definition: EntityDefinition) -> bool:
        return self._entities.get(definition.name) is definition

    def _resolve(self, entity: EntityRef) -> EntityDefinition:
        if isinstance(entity, EntityDefinition):
            if not self.owns(entity):
                raise UnknownKeyError(f"Entity '{entity.name}' is not part of this schema")
            return entity
        return self.get_entity_definition_named(entity)
