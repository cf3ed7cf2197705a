"""One instance population ("database") built from a schema."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Union

from ermodel.config.logging import get_logger
from ermodel.definitions.entity_definition import EntityDefinition
from ermodel.definitions.schema import ERSchema
from ermodel.errors import UnknownKeyError
from .collection import EntityInstanceCollection
from .entity_instance import EntityInstance

logger = get_logger(__name__)


class ERInstanceData:
    """
    Buckets of instances, one per entity type.

    A database created from a schema holds exactly one bucket per entity
    defined at that time; EntityRelModel adds buckets as the schema grows.
    """

    def __init__(self, instances: Optional[Iterable[EntityInstance]] = None):
        """
        Initialize the database.

        Args:
            instances: Optional instances to seed; a bucket is created for
                each instance's entity type. Seeded instances are stored as
                they are, without generated ids being assigned to them.
        """
        self._collections: Dict[str, EntityInstanceCollection] = {}
        for instance in instances or ():
            collection = self.create_instance_collection_for(instance.definition)
            collection.add(instance, assign_generated_ids=False)

    def create_instance_collection_for(self, definition: EntityDefinition) -> EntityInstanceCollection:
        """Bucket for the entity, created empty if it does not exist yet."""
        collection = self._collections.get(definition.name)
        if collection is None:
            collection = EntityInstanceCollection(definition)
            self._collections[definition.name] = collection
            logger.debug(f"Created instance collection for {definition.name}")
        return collection

    def create_instance_collection_from(self, schema: ERSchema) -> None:
        for definition in schema.entity_definitions():
            self.create_instance_collection_for(definition)

    def get_instance_collection_for(
        self, entity: Union[EntityDefinition, str]
    ) -> EntityInstanceCollection:
        name = entity.name if isinstance(entity, EntityDefinition) else entity
        if name not in self._collections:
            raise UnknownKeyError(f"No instance collection for entity '{name}'")
        return self._collections[name]

    def has_instance_collection_for(self, entity: Union[EntityDefinition, str]) -> bool:
        name = entity.name if isinstance(entity, EntityDefinition) else entity
        return name in self._collections

    def entity_names(self) -> List[str]:
        return list(self._collections.keys())

    def collections(self) -> List[EntityInstanceCollection]:
        return list(self._collections.values())

    def all_instances(self) -> List[EntityInstance]:
        instances: List[EntityInstance] = []
        for collection in self._collections.values():
            instances.extend(collection.instances())
        return instances

    def clear_all_data(self) -> None:
        """Empty every bucket, keeping the buckets themselves."""
        for collection in self._collections.values():
            collection.clear()
