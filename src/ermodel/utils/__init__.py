"""Utility helpers."""

from .schema_io import (
    EntitySpec,
    FieldSpec,
    RelationshipSpec,
    SchemaDocument,
    build_model,
    build_schema,
    load_document_from_json,
    load_model_from_json,
    load_schema_from_json,
    populate_model,
    save_schema_to_json,
    schema_to_document,
)

__all__ = [
    "EntitySpec",
    "FieldSpec",
    "RelationshipSpec",
    "SchemaDocument",
    "build_model",
    "build_schema",
    "load_document_from_json",
    "load_model_from_json",
    "load_schema_from_json",
    "populate_model",
    "save_schema_to_json",
    "schema_to_document",
]
