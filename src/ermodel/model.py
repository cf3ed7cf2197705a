"""EntityRelModel: one schema bound to many named instance databases."""

from __future__ import annotations

import threading
from typing import Dict, Iterable, List, Optional, Union

from ermodel.config.logging import get_logger
from ermodel.definitions.entity_definition import EntityDefinition
from ermodel.definitions.relationship import Cardinality, RelationshipDefinition
from ermodel.definitions.schema import ERSchema
from ermodel.errors import DuplicateDefinitionError, ProtectedResourceError, UnknownKeyError
from ermodel.instances.entity_instance import EntityInstance
from ermodel.instances.instance_data import ERInstanceData

logger = get_logger(__name__)

DEFAULT_DATABASE_NAME = "__default"


class EntityRelModel:
    """
    The schema (definitions) plus the instances, kept separately.

    Several databases can live in memory at once, all built from the same
    schema, e.g. one per session key alongside the default one. Every
    database holds a bucket for every entity in the schema: defining an
    entity adds an empty bucket to each existing database.

    Schema changes and the database registry share one lock, so a database
    created or deleted concurrently never sees a partial fan-out.
    """

    def __init__(
        self,
        schema: Optional[ERSchema] = None,
        instance_data: Optional[ERInstanceData] = None,
    ):
        """
        Initialize the model.

        Args:
            schema: Schema to use (default: a new empty schema)
            instance_data: Default database (default: empty, mirroring the schema)
        """
        self._lock = threading.RLock()
        self._schema = schema if schema is not None else ERSchema()
        if instance_data is None:
            instance_data = ERInstanceData()
        instance_data.create_instance_collection_from(self._schema)
        self._databases: Dict[str, ERInstanceData] = {DEFAULT_DATABASE_NAME: instance_data}

    @property
    def schema(self) -> ERSchema:
        return self._schema

    def get_schema(self) -> ERSchema:
        return self._schema

    # Schema

    def create_entity_definition(self, name: str, plural_name: Optional[str] = None) -> EntityDefinition:
        """
        Define an entity and add an empty bucket for it to every database.

        Raises:
            DuplicateDefinitionError: If the name or plural name is taken
        """
        with self._lock:
            definition = self._schema.define_entity(name, plural_name)
            for database in self._databases.values():
                database.create_instance_collection_for(definition)
        return definition

    def create_relationship_definition(
        self,
        from_entity: Union[EntityDefinition, str],
        to_entity: Union[EntityDefinition, str],
        name: str,
        cardinality: Union[Cardinality, str] = Cardinality.ONE_TO_MANY,
        two_way: bool = False,
    ) -> RelationshipDefinition:
        """Define a relationship; instance data is not touched."""
        with self._lock:
            return self._schema.define_relationship(from_entity, to_entity, name, cardinality, two_way)

    def has_entity_named(self, name: str) -> bool:
        return self._schema.has_entity_named(name)

    def has_entity_with_plural_named(self, plural_name: str) -> bool:
        return self._schema.has_entity_with_plural_named(plural_name)

    def get_entity_definition_named(self, name: str) -> EntityDefinition:
        return self._schema.get_entity_definition_named(name)

    def get_entity_definition_with_plural_named(self, plural_name: str) -> EntityDefinition:
        return self._schema.get_entity_definition_with_plural_named(plural_name)

    def entity_names(self) -> List[str]:
        return self._schema.entity_names()

    def has_relationship_named(self, name: str) -> bool:
        return self._schema.has_relationship_named(name)

    def relationship_definitions(self) -> List[RelationshipDefinition]:
        return self._schema.relationships()

    # Databases

    def get_instance_data(self, database_key: str = DEFAULT_DATABASE_NAME) -> Optional[ERInstanceData]:
        """The addressed database, or None if no database has that key."""
        with self._lock:
            return self._databases.get(database_key)

    def has_instance_database(self, database_key: str) -> bool:
        with self._lock:
            return database_key in self._databases

    def database_names(self) -> List[str]:
        with self._lock:
            return list(self._databases.keys())

    def create_instance_database(self, database_key: str) -> ERInstanceData:
        """
        Create an empty database with a bucket per schema entity.

        Raises:
            DuplicateDefinitionError: If the key is already registered
        """
        with self._lock:
            if database_key in self._databases:
                raise DuplicateDefinitionError(f"Database already exists with name {database_key}")
            return self.create_instance_database_if_not_existing(database_key)

    def create_instance_database_if_not_existing(self, database_key: str) -> ERInstanceData:
        if not database_key:
            raise ValueError("Database key must not be empty")
        with self._lock:
            database = self._databases.get(database_key)
            if database is None:
                database = ERInstanceData()
                database.create_instance_collection_from(self._schema)
                self._databases[database_key] = database
                logger.info(f"Created instance database {database_key}")
            return database

    def delete_instance_database(self, database_key: str) -> None:
        """
        Remove a database.

        Raises:
            ProtectedResourceError: For the default database
            UnknownKeyError: If no database has that key
        """
        if database_key == DEFAULT_DATABASE_NAME:
            raise ProtectedResourceError("Cannot delete default database")
        with self._lock:
            if database_key not in self._databases:
                raise UnknownKeyError(f"No database named {database_key}")
            del self._databases[database_key]
        logger.info(f"Deleted instance database {database_key}")

    def clone_with_different_data(self, instances: Iterable[EntityInstance]) -> "EntityRelModel":
        """
        A model sharing this schema whose only database holds exactly the given instances.

        The instances are shared, not copied, and are left as they are: no
        generated ids are assigned to them.

        Raises:
            UnknownKeyError: If an instance's entity is not part of this schema
        """
        instances = list(instances)
        for instance in instances:
            if not self._schema.owns(instance.definition):
                raise UnknownKeyError(
                    f"Entity '{instance.entity_name}' is not part of this schema"
                )
        return EntityRelModel(self._schema, ERInstanceData(instances))
