"""Schema documents: describing an ERSchema as JSON and building one from it."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field as PydanticField, TypeAdapter, model_validator

from ermodel.definitions.entity_definition import EntityDefinition
from ermodel.definitions.field import Field, FieldBuilder, DEFAULT_RANGES, identity_transform
from ermodel.definitions.field_type import FieldType
from ermodel.definitions.relationship import Cardinality
from ermodel.definitions.schema import ERSchema
from ermodel.definitions.validation import ValidationRuleSpec
from ermodel.config.logging import get_logger
from ermodel.model import EntityRelModel

logger = get_logger(__name__)

UniqueTransformName = Literal["none", "lower", "casefold", "strip"]

UNIQUE_TRANSFORMS: Dict[str, Callable[[str], str]] = {
    "lower": str.lower,
    "casefold": str.casefold,
    "strip": str.strip,
}


class FieldSpec(BaseModel):
    """A field as written in a schema document."""

    name: str
    type: FieldType
    optional: Optional[bool] = None  # None: the type's default
    default: Optional[str] = None
    examples: List[str] = PydanticField(default_factory=list)
    minimum: Optional[Union[int, float]] = None
    maximum: Optional[Union[int, float]] = None
    unique: bool = False
    unique_transform: UniqueTransformName = "none"
    truncate_to: Optional[int] = None
    rules: List[ValidationRuleSpec] = PydanticField(default_factory=list)
    fields: List["FieldSpec"] = PydanticField(default_factory=list)  # OBJECT only

    @model_validator(mode="before")
    @classmethod
    def convert_scalars_to_strings(cls, data: Any) -> Any:
        """Accept JSON numbers and booleans for default and examples."""
        if isinstance(data, dict):
            data = dict(data)
            value = data.get("default")
            if isinstance(value, bool):
                data["default"] = "true" if value else "false"
            elif isinstance(value, (int, float)):
                data["default"] = str(value)
            if isinstance(data.get("examples"), list):
                data["examples"] = [
                    ("true" if v else "false") if isinstance(v, bool) else str(v)
                    for v in data["examples"]
                    if v is not None
                ]
        return data

    @model_validator(mode="after")
    def check_type_specific_options(self) -> "FieldSpec":
        numeric = self.type in (FieldType.INTEGER, FieldType.AUTO_INCREMENT, FieldType.FLOAT)
        if not numeric and (self.minimum is not None or self.maximum is not None):
            raise ValueError(f"{self.name}: minimum/maximum only apply to numeric fields")
        if self.fields and self.type != FieldType.OBJECT:
            raise ValueError(f"{self.name}: nested fields only apply to OBJECT fields")
        if self.type == FieldType.ENUM and not self.examples:
            raise ValueError(f"{self.name}: ENUM fields need their allowed values as examples")
        if self.unique_transform != "none" and not self.unique:
            raise ValueError(f"{self.name}: unique_transform requires unique")
        return self

    def to_builder(self) -> FieldBuilder:
        builder = FieldBuilder(self.name, self.type)
        if self.optional is True:
            builder.make_optional()
        elif self.optional is False:
            builder.make_mandatory()
        builder.with_examples(*self.examples)
        if self.default is not None:
            builder.with_default_value(self.default)
        if self.minimum is not None:
            builder.with_minimum_value(self.minimum)
        if self.maximum is not None:
            builder.with_maximum_value(self.maximum)
        if self.unique_transform != "none":
            builder.set_unique_after_transform(UNIQUE_TRANSFORMS[self.unique_transform])
        elif self.unique:
            builder.set_must_be_unique(True)
        if self.truncate_to is not None:
            builder.truncate_string_to(self.truncate_to)
        builder.with_validation(*self.rules)
        for child in self.fields:
            builder.with_field(child.to_builder())
        return builder

    @classmethod
    def from_field(cls, field: Field) -> "FieldSpec":
        default_range = DEFAULT_RANGES.get(field.type, (None, None))
        transform = next(
            (name for name, fn in UNIQUE_TRANSFORMS.items() if fn is field.unique_transform),
            "none",
        )
        if transform == "none" and field.must_be_unique and field.unique_transform is not identity_transform:
            logger.warning(f"Field '{field.name}' uses a custom uniqueness transform that is not written out")
        return cls(
            name=field.name,
            type=field.type,
            optional=field.optional,
            default=field.default,
            # the default is re-added as an example by the builder
            examples=[e for e in field.examples if e != field.default],
            minimum=field.minimum if field.minimum != default_range[0] else None,
            maximum=field.maximum if field.maximum != default_range[1] else None,
            unique=field.must_be_unique,
            unique_transform=transform,
            truncate_to=field.truncate_to,
            rules=[r for r in field.validation_rules if _is_builtin_rule(r)],
            fields=[cls.from_field(f) for f in field.object_definition] if field.object_definition else [],
        )


class EntitySpec(BaseModel):
    """An entity as written in a schema document."""

    name: str
    plural: Optional[str] = None
    fields: List[FieldSpec] = PydanticField(default_factory=list)

    @model_validator(mode="after")
    def check_unique_field_names(self) -> "EntitySpec":
        names = [f.name for f in self.fields]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"{self.name}: duplicate field names {duplicates}")
        return self


class RelationshipSpec(BaseModel):
    """A relationship as written in a schema document."""

    name: str
    from_entity: str = PydanticField(alias="from")
    to_entity: str = PydanticField(alias="to")
    cardinality: Cardinality = Cardinality.ONE_TO_MANY
    two_way: bool = False

    model_config = ConfigDict(populate_by_name=True)


class SchemaDocument(BaseModel):
    """Complete schema: entities then the relationships between them."""

    entities: List[EntitySpec] = PydanticField(default_factory=list)
    relationships: List[RelationshipSpec] = PydanticField(default_factory=list)

    @model_validator(mode="after")
    def check_relationship_ends(self) -> "SchemaDocument":
        names = {e.name for e in self.entities}
        for rel in self.relationships:
            for end in (rel.from_entity, rel.to_entity):
                if end not in names:
                    raise ValueError(f"Relationship '{rel.name}' refers to unknown entity '{end}'")
        return self


def _is_builtin_rule(rule: Any) -> bool:
    try:
        TypeAdapter(ValidationRuleSpec).validate_python(rule.model_dump())
    except ValueError:
        logger.warning(f"Custom validation rule {type(rule).__name__} is not written out")
        return False
    return True


def populate_model(doc: SchemaDocument, model: EntityRelModel) -> EntityRelModel:
    """
    Define every entity and relationship of a document on a model.

    Fields are built before the entity is defined, so a bad field leaves the
    model without that entity.
    """
    for entity_spec in doc.entities:
        fields = [f.to_builder().build() for f in entity_spec.fields]
        definition = model.create_entity_definition(entity_spec.name, entity_spec.plural)
        definition.add_fields(*fields)
    for rel in doc.relationships:
        model.create_relationship_definition(
            rel.from_entity, rel.to_entity, rel.name, rel.cardinality, rel.two_way
        )
    logger.info(
        f"Loaded schema with {len(doc.entities)} entities and {len(doc.relationships)} relationships"
    )
    return model


def build_model(doc: SchemaDocument) -> EntityRelModel:
    return populate_model(doc, EntityRelModel())


def build_schema(doc: SchemaDocument) -> ERSchema:
    return build_model(doc).schema


def entity_to_spec(definition: EntityDefinition) -> EntitySpec:
    return EntitySpec(
        name=definition.name,
        plural=definition.plural_name,
        fields=[FieldSpec.from_field(f) for f in definition.fields],
    )


def schema_to_document(schema: ERSchema) -> SchemaDocument:
    return SchemaDocument(
        entities=[entity_to_spec(e) for e in schema.entity_definitions()],
        relationships=[
            RelationshipSpec(
                name=r.name,
                from_entity=r.from_entity.name,
                to_entity=r.to_entity.name,
                cardinality=r.cardinality,
                two_way=r.two_way,
            )
            for r in schema.relationships()
        ],
    )


def load_document_from_json(path: Path) -> SchemaDocument:
    """
    Load a SchemaDocument from a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or not a valid schema document
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Schema file not found: {path}")

    content = path.read_text(encoding="utf-8").strip()
    if not content:
        raise ValueError(f"Schema file is empty: {path}")

    try:
        return SchemaDocument.model_validate_json(content)
    except ValueError as e:
        raise ValueError(f"Failed to load schema from {path}: {e}") from e


def load_model_from_json(path: Path) -> EntityRelModel:
    return build_model(load_document_from_json(path))


def load_schema_from_json(path: Path) -> ERSchema:
    return load_model_from_json(path).schema


def save_schema_to_json(schema: ERSchema, path: Path) -> None:
    """
    Save a schema as a JSON document, creating parent directories.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    document = schema_to_document(schema)
    path.write_text(document.model_dump_json(indent=2, by_alias=True), encoding="utf-8")
