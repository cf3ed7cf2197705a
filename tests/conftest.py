"""Shared fixtures."""

import numpy as np
import pytest

from ermodel import Cardinality, EntityRelModel, FieldType, RandomValueSource, field_is
from ermodel.definitions import MaximumLengthRule


@pytest.fixture
def source():
    """Seeded example source so generated values repeat between runs."""
    return RandomValueSource(rng=np.random.default_rng(1234), locale="en_US")


@pytest.fixture
def todo_model():
    """Model with todo and project entities linked by a two-way relationship."""
    model = EntityRelModel()
    todo = model.create_entity_definition("todo", "todos")
    todo.add_fields(
        field_is("id", FieldType.AUTO_INCREMENT),
        field_is("title", FieldType.STRING)
        .make_mandatory()
        .with_validation(MaximumLengthRule(length=50)),
        field_is("doneStatus", FieldType.BOOLEAN).with_default_value("false"),
        field_is("description", FieldType.STRING),
    )
    project = model.create_entity_definition("project", "projects")
    project.add_fields(
        field_is("guid", FieldType.AUTO_GUID),
        field_is("title", FieldType.STRING),
    )
    model.create_relationship_definition(
        project, todo, "tasks", Cardinality.ONE_TO_MANY, two_way=True
    )
    return model
