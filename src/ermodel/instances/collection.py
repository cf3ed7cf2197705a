"""The bucket of instances for one entity type within a database."""

from __future__ import annotations

import uuid
from typing import Any, Dict, Iterator, List, Mapping, Optional

from ermodel.config.logging import get_logger
from ermodel.definitions.entity_definition import EntityDefinition
from ermodel.definitions.field_type import FieldType
from ermodel.errors import ConversionError, DuplicateDefinitionError, UnknownKeyError
from .entity_instance import EntityInstance

logger = get_logger(__name__)


class EntityInstanceCollection:
    """
    Instances of one entity type, keyed by internal id.

    Assigns AUTO_GUID and AUTO_INCREMENT values to instances that arrive
    without them, and keeps each AUTO_INCREMENT counter ahead of any value
    that was restored explicitly.
    """

    def __init__(self, definition: EntityDefinition):
        self.definition = definition
        self._instances: Dict[str, EntityInstance] = {}
        # AUTO_INCREMENT field name -> next value to hand out
        self._next_ids: Dict[str, int] = {}

    def add(self, instance: EntityInstance, assign_generated_ids: bool = True) -> EntityInstance:
        """
        Add an instance, assigning generated ids it does not have.

        With assign_generated_ids False the instance is stored untouched and
        only the counters move past the ids it already holds.

        Raises:
            ValueError: If the instance is of another entity type
            DuplicateDefinitionError: If the instance is already in the bucket
        """
        if instance.definition is not self.definition:
            raise ValueError(
                f"Cannot add {instance.entity_name} instance to {self.definition.name} collection"
            )
        if instance.internal_id in self._instances:
            raise DuplicateDefinitionError(
                f"{self.definition.name} instance {instance.internal_id} is already stored"
            )
        self._assign_generated_ids(instance, assign_generated_ids)
        self._instances[instance.internal_id] = instance
        return instance

    def create_instance(self, values: Optional[Mapping[str, Any]] = None) -> EntityInstance:
        """
        Create, populate and add a new instance.

        Raises:
            ValueError: If values do not validate; the bucket is left unchanged
        """
        instance = EntityInstance(self.definition)
        if values:
            report = instance.set_values(values)
            if not report.valid:
                raise ValueError(
                    f"Invalid {self.definition.name}: {report.combined_message()}"
                )
        generated = [f.name for f in self.definition.generated_id_fields()]
        report = instance.fields.validate_fields(ignore=generated)
        if not report.valid:
            raise ValueError(f"Invalid {self.definition.name}: {report.combined_message()}")
        return self.add(instance)

    def get(self, internal_id: str) -> EntityInstance:
        if internal_id not in self._instances:
            raise UnknownKeyError(f"No {self.definition.name} instance with id {internal_id}")
        return self._instances[internal_id]

    def find_by_identifier(self, identifier: str) -> Optional[EntityInstance]:
        for instance in self._instances.values():
            if instance.identifier == identifier:
                return instance
        return None

    def find_by_field_value(self, field_name: str, value: Any) -> List[EntityInstance]:
        """
        Instances whose stored value equals value after the field's uniqueness transform.

        Used by callers enforcing must-be-unique fields.
        """
        field = self.definition.get_field(field_name)
        try:
            # compare in stored form: 3 and "3.0" are the same FLOAT
            text = field.normalised_value(value).as_string()
        except ConversionError:
            text = field.truncated(value)
        wanted = field.unique_after_transform(text)
        matches = []
        for instance in self._instances.values():
            stored = instance.fields.get(field_name)
            if stored is not None and field.unique_after_transform(stored.as_string()) == wanted:
                matches.append(instance)
        return matches

    def remove(self, instance: EntityInstance) -> None:
        if self._instances.pop(instance.internal_id, None) is None:
            raise UnknownKeyError(
                f"{self.definition.name} instance {instance.internal_id} is not stored"
            )

    def instances(self) -> List[EntityInstance]:
        return list(self._instances.values())

    def count(self) -> int:
        return len(self._instances)

    def clear(self) -> None:
        self._instances.clear()
        self._next_ids.clear()

    def __iter__(self) -> Iterator[EntityInstance]:
        return iter(self.instances())

    def __len__(self) -> int:
        return len(self._instances)

    def _assign_generated_ids(self, instance: EntityInstance, assign: bool = True) -> None:
        for field in self.definition.generated_id_fields():
            current = instance.fields.get(field.name)
            if field.type == FieldType.AUTO_GUID:
                if current is None and assign:
                    instance.set_value(field.name, str(uuid.uuid4()))
                continue

            next_id = self._next_ids.get(field.name, 1)
            if current is None:
                if assign:
                    instance.set_value(field.name, next_id)
                    self._next_ids[field.name] = next_id + 1
                continue
            try:
                restored = current.as_integer()
            except ConversionError:
                logger.warning(
                    f"{self.definition.name}.{field.name} holds non-integer id {current.as_string()!r}"
                )
                continue
            self._next_ids[field.name] = max(next_id, restored + 1)
