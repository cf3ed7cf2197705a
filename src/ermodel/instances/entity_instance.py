"""Live records conforming to an EntityDefinition."""

from __future__ import annotations

import uuid
from typing import Any, Dict, List, Mapping, Optional

from ermodel.config.logging import get_logger
from ermodel.definitions.entity_definition import EntityDefinition
from ermodel.definitions.field_value import FieldValue, InstanceFields
from ermodel.errors import ConversionError, UnknownKeyError
from ermodel.reporting import ValidationReport

logger = get_logger(__name__)


class EntityInstance:
    """
    One record of an entity type.

    Holds field values keyed by name and links to related instances keyed by
    relationship name. Cardinality and uniqueness across instances are
    enforced by the caller; this class only enforces field contracts.
    """

    def __init__(self, definition: EntityDefinition):
        self.definition = definition
        self.internal_id = str(uuid.uuid4())
        self.fields = InstanceFields(definition.fields)
        self._links: Dict[str, List[EntityInstance]] = {}

    @property
    def entity_name(self) -> str:
        return self.definition.name

    def set_value(self, name: str, value: Any) -> Optional[FieldValue]:
        """
        Store a value without validating it; None clears the field.

        The value is normalised first (numbers canonicalised, strings
        truncated when the field truncates).

        Raises:
            UnknownKeyError: If the field is not defined
        """
        field = self.definition.get_field(name)
        if value is None:
            self.fields.remove(name)
            return None
        try:
            stored = field.normalised_value(value)
        except ConversionError:
            # keep the raw value; validate_fields() will report it
            stored = field.value_for(value)
        return self.fields.put(name, stored)

    def set_values(
        self, values: Mapping[str, Any], allow_setting_generated_ids: bool = False
    ) -> ValidationReport:
        """
        Validate and store several values, all or none.

        Args:
            values: Field name -> JSON-style value
            allow_setting_generated_ids: Allow AUTO_INCREMENT values (restore/seed)

        Returns:
            Report for the values; nothing is stored unless it is valid
        """
        report = ValidationReport()
        for name, value in values.items():
            if not self.definition.has_field_named(name):
                report.add_error_message(f"{name} : field is not defined")
                continue
            field = self.definition.get_field(name)
            report.combine(field.validate(value, allow_setting_generated_ids))

        if not report.valid:
            logger.debug(f"Rejected values for {self.entity_name}: {report.combined_message()}")
            return report

        for name, value in values.items():
            self.set_value(name, value)
        return report

    def get_value(self, name: str) -> FieldValue:
        """The stored value, or the field default when nothing is stored."""
        field = self.definition.get_field(name)
        stored = self.fields.get(name)
        return stored if stored is not None else field.default_value

    def has_value(self, name: str) -> bool:
        return self.fields.has(name)

    def clear_value(self, name: str) -> None:
        self.definition.get_field(name)
        self.fields.remove(name)

    def validate_fields(self, allow_setting_generated_ids: bool = True) -> ValidationReport:
        """Check every stored value (and every mandatory field) against the definition."""
        return self.fields.validate_fields(allow_setting_generated_ids)

    @property
    def identifier(self) -> str:
        """First generated id value present, falling back to the internal id."""
        for field in self.definition.generated_id_fields():
            value = self.fields.get(field.name)
            if value is not None:
                return value.as_string()
        return self.internal_id

    def link(self, relationship_name: str, other: EntityInstance) -> None:
        """
        Link to another instance over one of this entity's relationships.

        Raises:
            UnknownKeyError: If the entity has no such relationship
            ValueError: If other is not of the relationship's target entity
        """
        vector = self.definition.get_relationship(relationship_name)
        if other.definition is not vector.to_entity:
            raise ValueError(
                f"Relationship '{relationship_name}' links {self.entity_name} to "
                f"{vector.to_entity.name}, not {other.entity_name}"
            )
        linked = self._links.setdefault(relationship_name, [])
        if other not in linked:
            linked.append(other)

    def unlink(self, relationship_name: str, other: EntityInstance) -> None:
        linked = self._links.get(relationship_name, [])
        if other in linked:
            linked.remove(other)

    def linked(self, relationship_name: str) -> List[EntityInstance]:
        if not self.definition.has_relationship_named(relationship_name):
            raise UnknownKeyError(
                f"Entity {self.entity_name} has no relationship named '{relationship_name}'"
            )
        return list(self._links.get(relationship_name, []))

    def to_dict(self) -> Dict[str, Any]:
        return self.fields.to_dict()

    def __repr__(self) -> str:
        return f"EntityInstance({self.entity_name}, {self.identifier})"
