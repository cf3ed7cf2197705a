"""Typer CLI application."""

import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import typer

from ermodel.config.logging import setup_logging
from ermodel.definitions.defined_fields import DefinedFields
from ermodel.definitions.entity_definition import EntityDefinition
from ermodel.definitions.field_type import FieldType
from ermodel.errors import ERModelError
from ermodel.instances.entity_instance import EntityInstance
from ermodel.model import EntityRelModel
from ermodel.randomdata import RandomValueSource
from ermodel.utils.schema_io import load_model_from_json

app = typer.Typer(help="ermodel: entity-relationship schemas and field validation")


def example_values(fields: DefinedFields, source: RandomValueSource) -> Dict[str, Any]:
    """One example value per field, recursing into OBJECT fields."""
    values: Dict[str, Any] = {}
    for field in fields:
        if field.type == FieldType.OBJECT and field.object_definition is not None:
            values[field.name] = example_values(field.object_definition, source)
        else:
            values[field.name] = field.get_random_example_value(source)
    return values


def resolve_entity(model: EntityRelModel, entity: str) -> EntityDefinition:
    """Entity by plural name, falling back to the singular name."""
    if model.has_entity_with_plural_named(entity):
        return model.get_entity_definition_with_plural_named(entity)
    return model.get_entity_definition_named(entity)


@app.command()
def describe(schema_json: Path):
    """
    Print the entities, fields and relationships of a schema.

    Args:
        schema_json: Path to a schema document
    """
    setup_logging(level="WARNING", stream=sys.stderr)
    model = load_model_from_json(schema_json)

    for definition in model.schema.entity_definitions():
        typer.echo(f"{definition.name} ({definition.plural_name})")
        for field in definition.fields:
            flags = ["mandatory" if field.is_mandatory else "optional"]
            if field.must_be_unique:
                flags.append("unique")
            typer.echo(f"  - {field.name}: {field.type} [{', '.join(flags)}]")
        for vector in definition.relationships():
            typer.echo(
                f"  > {vector.name} -> {vector.to_entity.name} ({vector.cardinality})"
            )


@app.command()
def validate(
    schema_json: Path,
    entity: str,
    payload_json: Path,
    allow_ids: bool = typer.Option(False, "--allow-ids", help="Allow setting AUTO_INCREMENT ids"),
):
    """
    Validate a JSON payload against an entity of a schema.

    Args:
        schema_json: Path to a schema document
        entity: Entity name (singular or plural)
        payload_json: Path to a JSON object of field values
    """
    setup_logging(level="WARNING", stream=sys.stderr)
    model = load_model_from_json(schema_json)

    try:
        definition = resolve_entity(model, entity)
    except ERModelError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2)

    payload = json.loads(payload_json.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        typer.echo("Error: payload must be a JSON object", err=True)
        raise typer.Exit(2)

    instance = EntityInstance(definition)
    report = instance.set_values(payload, allow_setting_generated_ids=allow_ids)
    if report.valid:
        generated = [f.name for f in definition.generated_id_fields()]
        report = instance.fields.validate_fields(allow_ids, ignore=generated)

    if report.valid:
        typer.echo(f"✓ Valid {definition.name}")
        return

    for message in report.error_messages:
        typer.echo(f"✗ {message}")
    raise typer.Exit(1)


@app.command()
def example(
    schema_json: Path,
    entity: str,
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for repeatable output"),
):
    """
    Print an example instance of an entity as JSON.

    Args:
        schema_json: Path to a schema document
        entity: Entity name (singular or plural)
    """
    setup_logging(level="WARNING", stream=sys.stderr)
    model = load_model_from_json(schema_json)

    try:
        definition = resolve_entity(model, entity)
    except ERModelError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2)

    source = RandomValueSource(seed=seed)
    typer.echo(json.dumps(example_values(definition.fields, source), indent=2))


if __name__ == "__main__":
    app()
