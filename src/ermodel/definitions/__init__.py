"""Schema definitions: field types, fields, entities and relationships."""

from .field_type import FieldType
from .validation import (
    ValidationRule,
    MaximumLengthRule,
    MinimumLengthRule,
    MatchesRegexRule,
    NotEmptyRule,
    ValidationRuleSpec,
)
from .field_value import FieldValue, InstanceFields
from .defined_fields import DefinedFields
from .field import Field, FieldBuilder, field_is
from .relationship import Cardinality, RelationshipDefinition, RelationshipVector
from .entity_definition import EntityDefinition
from .schema import ERSchema

__all__ = [
    "FieldType",
    "ValidationRule",
    "MaximumLengthRule",
    "MinimumLengthRule",
    "MatchesRegexRule",
    "NotEmptyRule",
    "ValidationRuleSpec",
    "FieldValue",
    "InstanceFields",
    "DefinedFields",
    "Field",
    "FieldBuilder",
    "field_is",
    "Cardinality",
    "RelationshipDefinition",
    "RelationshipVector",
    "EntityDefinition",
    "ERSchema",
]
