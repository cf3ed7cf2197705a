"""Tests for FieldValue conversions and InstanceFields."""

from decimal import Decimal

import pytest

from ermodel import ConversionError, DefinedFields, FieldType, FieldValue, InstanceFields, UnknownKeyError, field_is
from ermodel.definitions.field_value import to_raw_string


@pytest.fixture
def text_field():
    return field_is("text", FieldType.STRING).build()


def test_json_values_become_raw_strings(text_field):
    assert FieldValue.of(text_field, True).as_string() == "true"
    assert FieldValue.of(text_field, 3).as_string() == "3"
    assert FieldValue.of(text_field, 3.0).as_string() == "3.0"
    assert FieldValue.of(text_field, "abc").as_string() == "abc"
    assert FieldValue.of(text_field, [1, 2]).as_string() == "[1, 2]"


def test_boolean_conversion(text_field):
    assert FieldValue.of(text_field, " True ").as_boolean() is True
    assert FieldValue.of(text_field, "false").as_boolean() is False
    with pytest.raises(ConversionError):
        FieldValue.of(text_field, "1").as_boolean()


def test_integer_conversion(text_field):
    assert FieldValue.of(text_field, "42").as_integer() == 42
    assert FieldValue.of(text_field, "-3.0").as_integer() == -3
    assert FieldValue.of(text_field, "1e2").as_integer() == 100
    for bad in ("3.5", "abc", "", "NaN", "Infinity"):
        with pytest.raises(ConversionError):
            FieldValue.of(text_field, bad).as_integer()


def test_integer_conversion_refuses_huge_numbers(text_field):
    assert FieldValue.of(text_field, "1e100000000").as_integral() == Decimal("1e100000000")
    with pytest.raises(ConversionError):
        FieldValue.of(text_field, "1e100000000").as_integer()


def test_none_has_no_raw_form(text_field):
    with pytest.raises(ValueError):
        to_raw_string(None)
    with pytest.raises(ValueError):
        FieldValue.of(text_field, None)


def test_float_conversion(text_field):
    assert FieldValue.of(text_field, "0.25").as_float() == 0.25
    assert FieldValue.of(text_field, 2).as_float() == 2.0
    for bad in ("abc", "nan", "inf"):
        with pytest.raises(ConversionError):
            FieldValue.of(text_field, bad).as_float()


def test_conversion_error_is_value_error(text_field):
    with pytest.raises(ValueError):
        FieldValue.of(text_field, "abc").as_float()


def test_object_conversion():
    address = (
        field_is("address", FieldType.OBJECT)
        .with_field(field_is("street", FieldType.STRING))
        .with_field(field_is("number", FieldType.INTEGER))
        .build()
    )
    value = FieldValue.of(address, {"street": "Main", "number": 4})
    nested = value.as_object()
    assert nested.get("street").as_string() == "Main"
    assert nested.get("number").as_integer() == 4
    assert value.to_native() == {"street": "Main", "number": "4"}
    assert '"street": "Main"' in value.as_string()


def test_non_object_field_cannot_be_read_as_object(text_field):
    with pytest.raises(ConversionError):
        FieldValue.of(text_field, "{}").as_object()


def test_instance_fields_put_and_validate():
    definition = DefinedFields(
        [
            field_is("title", FieldType.STRING).make_mandatory().build(),
            field_is("count", FieldType.INTEGER).build(),
        ]
    )
    fields = InstanceFields(definition)
    with pytest.raises(UnknownKeyError):
        fields.put("missing", "x")

    report = fields.validate_fields()
    assert report.error_messages == ["title : field is mandatory"]

    fields.put("title", "hello")
    fields.put("count", "abc")
    report = fields.validate_fields()
    assert report.error_messages == ["count : abc does not match type INTEGER"]

    assert fields.validate_fields(ignore=["count"]).valid
    assert fields.to_dict() == {"title": "hello", "count": "abc"}
    fields.remove("count")
    assert fields.names() == ["title"]


def test_instance_fields_from_mapping_keeps_undefined_names():
    definition = DefinedFields([field_is("title", FieldType.STRING).build()])
    fields = InstanceFields.from_mapping(definition, {"title": "a", "extra": 1})
    assert fields.undefined_names() == ["extra"]
    assert not fields.validate_fields().valid


def test_null_values_are_absent():
    definition = DefinedFields(
        [
            field_is("title", FieldType.STRING).build(),
            field_is("count", FieldType.INTEGER).build(),
        ]
    )
    fields = InstanceFields.from_mapping(definition, {"title": None, "count": 2, "extra": None})
    assert fields.names() == ["count"]
    assert fields.undefined_names() == ["extra"]

    assert fields.put("count", None) is None
    assert not fields.has("count")
