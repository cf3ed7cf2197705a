"""
ermodel - in-memory entity-relationship model.

A reusable schema of typed entities, fields and relationships, a field
validation engine, and any number of named instance databases built from
the schema.

Usage:
    from ermodel import EntityRelModel, FieldType, field_is

    model = EntityRelModel()
    todo = model.create_entity_definition("todo", "todos")
    todo.add_fields(
        field_is("id", FieldType.AUTO_INCREMENT),
        field_is("title", FieldType.STRING).make_mandatory(),
    )
    model.create_instance_database("session-1")
"""

from .definitions import (
    Cardinality,
    DefinedFields,
    EntityDefinition,
    ERSchema,
    Field,
    FieldBuilder,
    FieldType,
    FieldValue,
    InstanceFields,
    MatchesRegexRule,
    MaximumLengthRule,
    MinimumLengthRule,
    NotEmptyRule,
    RelationshipDefinition,
    RelationshipVector,
    ValidationRule,
    field_is,
)
from .errors import (
    ConversionError,
    DuplicateDefinitionError,
    ERModelError,
    ProtectedResourceError,
    UnknownKeyError,
)
from .instances import EntityInstance, EntityInstanceCollection, ERInstanceData
from .model import DEFAULT_DATABASE_NAME, EntityRelModel
from .randomdata import RandomValueSource
from .reporting import ValidationReport

__version__ = "0.1.0"

__all__ = [
    "Cardinality",
    "DefinedFields",
    "EntityDefinition",
    "ERSchema",
    "Field",
    "FieldBuilder",
    "FieldType",
    "FieldValue",
    "InstanceFields",
    "MatchesRegexRule",
    "MaximumLengthRule",
    "MinimumLengthRule",
    "NotEmptyRule",
    "RelationshipDefinition",
    "RelationshipVector",
    "ValidationRule",
    "field_is",
    "ConversionError",
    "DuplicateDefinitionError",
    "ERModelError",
    "ProtectedResourceError",
    "UnknownKeyError",
    "EntityInstance",
    "EntityInstanceCollection",
    "ERInstanceData",
    "DEFAULT_DATABASE_NAME",
    "EntityRelModel",
    "RandomValueSource",
    "ValidationReport",
]
