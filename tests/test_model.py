"""Tests for EntityRelModel: the schema plus its instance databases."""

import pytest

from ermodel import (
    DEFAULT_DATABASE_NAME,
    DuplicateDefinitionError,
    EntityInstance,
    EntityRelModel,
    FieldType,
    ProtectedResourceError,
    UnknownKeyError,
    field_is,
)


def test_default_database_always_exists():
    model = EntityRelModel()
    assert model.database_names() == [DEFAULT_DATABASE_NAME]
    assert model.get_instance_data() is model.get_instance_data("__default")
    assert model.get_instance_data("unknown") is None


def test_new_entity_is_added_to_every_database():
    model = EntityRelModel()
    model.create_instance_database("tenantA")
    model.create_entity_definition("todo", "todos")

    for key in (DEFAULT_DATABASE_NAME, "tenantA"):
        assert model.get_instance_data(key).has_instance_collection_for("todo")


def test_new_database_mirrors_current_schema(todo_model):
    database = todo_model.create_instance_database("session-1")
    assert database.entity_names() == ["todo", "project"]
    assert todo_model.has_instance_database("session-1")


def test_databases_are_independent(todo_model):
    todo_model.create_instance_database("tenantA")
    todo_model.get_instance_data("tenantA").get_instance_collection_for("todo").create_instance(
        {"title": "only in tenantA"}
    )
    assert todo_model.get_instance_data("tenantA").get_instance_collection_for("todo").count() == 1
    assert todo_model.get_instance_data().get_instance_collection_for("todo").count() == 0


def test_duplicate_database_key_leaves_existing_untouched(todo_model):
    database = todo_model.create_instance_database("tenantA")
    database.get_instance_collection_for("todo").create_instance({"title": "keep me"})

    with pytest.raises(DuplicateDefinitionError):
        todo_model.create_instance_database("tenantA")

    assert todo_model.get_instance_data("tenantA") is database
    assert database.get_instance_collection_for("todo").count() == 1


def test_create_database_if_not_existing_is_idempotent(todo_model):
    first = todo_model.create_instance_database_if_not_existing("tenantB")
    second = todo_model.create_instance_database_if_not_existing("tenantB")
    assert first is second
    assert todo_model.create_instance_database_if_not_existing(DEFAULT_DATABASE_NAME) is (
        todo_model.get_instance_data()
    )


def test_default_database_cannot_be_deleted(todo_model):
    with pytest.raises(ProtectedResourceError):
        todo_model.delete_instance_database(DEFAULT_DATABASE_NAME)
    assert todo_model.get_instance_data() is not None


def test_delete_database(todo_model):
    todo_model.create_instance_database("tenantA")
    todo_model.delete_instance_database("tenantA")
    assert todo_model.get_instance_data("tenantA") is None
    with pytest.raises(UnknownKeyError):
        todo_model.delete_instance_database("tenantA")


def test_duplicate_entity_does_not_touch_databases(todo_model):
    todo_model.create_instance_database("tenantA")
    with pytest.raises(DuplicateDefinitionError):
        todo_model.create_entity_definition("todo", "todoitems")
    assert todo_model.get_instance_data("tenantA").entity_names() == ["todo", "project"]


def test_relationship_definitions_leave_instance_data_alone(todo_model):
    before = todo_model.get_instance_data().entity_names()
    todo_model.create_relationship_definition("todo", "project", "belongs-to")
    assert todo_model.get_instance_data().entity_names() == before
    assert todo_model.has_relationship_named("belongs-to")
    assert [r.name for r in todo_model.relationship_definitions()] == ["tasks", "belongs-to"]


def test_schema_pass_throughs(todo_model):
    assert todo_model.has_entity_named("todo")
    assert todo_model.has_entity_with_plural_named("projects")
    assert todo_model.get_entity_definition_with_plural_named("todos").name == "todo"
    assert todo_model.entity_names() == ["todo", "project"]
    assert todo_model.get_schema() is todo_model.schema


def test_clone_with_different_data(todo_model):
    todos = todo_model.get_instance_data().get_instance_collection_for("todo")
    kept = todos.create_instance({"title": "kept"})
    todos.create_instance({"title": "left behind"})

    clone = todo_model.clone_with_different_data([kept])

    assert clone.schema is todo_model.schema
    assert clone.database_names() == [DEFAULT_DATABASE_NAME]
    assert clone.get_instance_data().all_instances() == [kept]
    assert clone.get_instance_data().entity_names() == ["todo", "project"]


def test_clone_rejects_instances_from_other_schemas(todo_model):
    other = EntityRelModel()
    stranger = other.create_entity_definition("todo", "todos")
    stranger.add_field(field_is("title", FieldType.STRING))
    with pytest.raises(UnknownKeyError):
        todo_model.clone_with_different_data([EntityInstance(stranger)])


def test_model_from_existing_schema(todo_model):
    model = EntityRelModel(todo_model.schema)
    assert model.get_instance_data().entity_names() == ["todo", "project"]


def test_clone_leaves_shared_instances_untouched(todo_model):
    unsaved = EntityInstance(todo_model.get_entity_definition_named("todo"))
    unsaved.set_values({"title": "draft"})

    clone = todo_model.clone_with_different_data([unsaved])

    assert clone.get_instance_data().all_instances() == [unsaved]
    assert not unsaved.has_value("id")
