"""Field definitions and their validation."""

from __future__ import annotations

import sys
from decimal import Decimal
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from ermodel.config.logging import get_logger
from ermodel.config.settings import get_settings
from ermodel.errors import ConversionError
from ermodel.randomdata import RandomValueSource
from ermodel.reporting import ValidationReport
from .defined_fields import DefinedFields
from .field_type import FieldType
from .field_value import FieldValue, InstanceFields, to_raw_string
from .validation import ValidationRule

logger = get_logger(__name__)

Number = Union[int, float]

INTEGER_MIN = -(2**31)
INTEGER_MAX = 2**31 - 1
FLOAT_MIN = -sys.float_info.max
FLOAT_MAX = sys.float_info.max


def identity_transform(value: str) -> str:
    return value


@dataclass(frozen=True, eq=False)
class Field:
    """
    Immutable contract for one attribute of an entity or nested object.

    Build with FieldBuilder (or field_is):

        age = field_is("age", FieldType.INTEGER).with_minimum_value(0).build()
    """

    name: str
    type: FieldType
    optional: bool
    default: Optional[str] = None
    examples: Tuple[str, ...] = ()
    validation_rules: Tuple[ValidationRule, ...] = ()
    minimum: Optional[Number] = None
    maximum: Optional[Number] = None
    must_be_unique: bool = False
    unique_transform: Callable[[str], str] = identity_transform
    truncate_to: Optional[int] = None
    object_definition: Optional[DefinedFields] = None

    @property
    def is_mandatory(self) -> bool:
        return not self.optional

    @property
    def has_default_value(self) -> bool:
        return self.default is not None

    @property
    def default_value(self) -> FieldValue:
        """The configured default, or the type default when none is configured."""
        if self.default is not None:
            return self.value_for(self.default)
        if self.type == FieldType.OBJECT:
            return FieldValue(self, None, InstanceFields(self.object_definition or DefinedFields()))
        return self.value_for(self.type.default_value)

    @property
    def should_truncate(self) -> bool:
        return self.truncate_to is not None

    def value_for(self, value: Any) -> FieldValue:
        return FieldValue.of(self, value)

    def validate(
        self, value: Any, allow_setting_generated_ids: bool = False
    ) -> ValidationReport:
        """
        Validate a candidate value.

        Args:
            value: FieldValue, JSON-style value, or None when absent
            allow_setting_generated_ids: True only when the system itself is
                restoring or seeding AUTO_INCREMENT identifiers

        Returns:
            ValidationReport with every failure found
        """
        report = ValidationReport()

        if value is None:
            if not self.optional:
                report.add_error_message(f"{self.name} : field is mandatory")
            return report

        if self.type == FieldType.AUTO_INCREMENT and not allow_setting_generated_ids:
            return report.add_error_message(f"{self.name} : field is an ID, you can't set it")

        field_value = value if isinstance(value, FieldValue) else self.value_for(value)

        _TYPE_VALIDATORS[self.type](self, field_value, report)

        for rule in self.validation_rules:
            if not rule.validates(field_value):
                report.add_error_message(rule.error_message(field_value))

        if not report.valid:
            logger.debug(f"Field '{self.name}' rejected value: {report.combined_message()}")
        return report

    def within_allowed_range(self, number: Union[Number, Decimal]) -> bool:
        if self.minimum is not None and number < self.minimum:
            return False
        if self.maximum is not None and number > self.maximum:
            return False
        return True

    def get_examples(self, source: Optional[RandomValueSource] = None) -> List[str]:
        """
        Example values for documentation.

        Configured examples are returned when present; otherwise one sample is
        synthesized for the field's type. The configured examples are never
        changed by synthesis.
        """
        if self.examples:
            return list(self.examples)

        if self.type == FieldType.BOOLEAN:
            return ["true", "false"]

        if self.type not in _SYNTHESIZED_TYPES:
            return []

        source = source or RandomValueSource()
        settings = get_settings()

        if self.type == FieldType.INTEGER:
            return [str(source.integer(int(self.minimum), int(self.maximum)))]
        if self.type == FieldType.AUTO_INCREMENT:
            return [str(source.integer(1, settings.auto_increment_example_max - 1))]
        if self.type == FieldType.AUTO_GUID:
            return [source.guid()]
        if self.type == FieldType.FLOAT:
            return [repr(source.uniform(float(self.minimum), float(self.maximum)))]
        # STRING
        return [self.truncated(source.string(settings.example_string_length))]

    def get_random_example_value(self, source: Optional[RandomValueSource] = None) -> str:
        source = source or RandomValueSource()
        examples = self.get_examples(source)
        if not examples:
            return ""
        return source.choice(examples)

    def truncated(self, value: Any) -> str:
        """String form of value, cut to the configured length when truncation is on."""
        text = value.as_string() if isinstance(value, FieldValue) else to_raw_string(value)
        if self.truncate_to is not None and len(text) > self.truncate_to:
            return text[: self.truncate_to]
        return text

    def normalised_value(self, value: Any) -> FieldValue:
        """
        The value as it should be stored.

        Raises:
            ConversionError: If the value does not convert to the field type
        """
        field_value = value if isinstance(value, FieldValue) else self.value_for(value)
        if self.type == FieldType.BOOLEAN:
            return self.value_for(field_value.as_boolean())
        if self.type == FieldType.FLOAT:
            return self.value_for(field_value.as_float())
        if self.type.is_integral:
            return self.value_for(field_value.as_integer())
        if self.type == FieldType.STRING and self.should_truncate:
            return self.value_for(self.truncated(field_value))
        return field_value

    def unique_after_transform(self, value: str) -> str:
        """Value used when comparing this field for uniqueness."""
        try:
            return self.unique_transform(value)
        except Exception as e:
            logger.warning(f"Uniqueness transform failed for field '{self.name}': {e}")
            return f"ERROR: {value} {e}"


def _report_type_mismatch(
    field: Field, value: FieldValue, report: ValidationReport, detail: str = ""
) -> None:
    report.add_error_message(
        f"{field.name} : {value.as_string()} does not match type {field.type}{detail}"
    )


def _validate_boolean(field: Field, value: FieldValue, report: ValidationReport) -> None:
    try:
        value.as_boolean()
    except ConversionError:
        _report_type_mismatch(field, value, report, " (true, false)")


def _validate_integer(field: Field, value: FieldValue, report: ValidationReport) -> None:
    try:
        # compared as a Decimal so huge exponents never become Python ints
        number = value.as_integral()
    except ConversionError:
        _report_type_mismatch(field, value, report)
        return
    if not field.within_allowed_range(number):
        report.add_error_message(
            f"{field.name} : {value.as_string()} is not within range for type {field.type} "
            f"({field.minimum} to {field.maximum})"
        )


def _validate_float(field: Field, value: FieldValue, report: ValidationReport) -> None:
    try:
        number = value.as_float()
    except ConversionError:
        _report_type_mismatch(field, value, report, f" ({field.minimum} to {field.maximum})")
        return
    if not field.within_allowed_range(number):
        report.add_error_message(
            f"{field.name} : {value.as_string()} is not within range for type {field.type} "
            f"({field.minimum} to {field.maximum})"
        )


def _validate_enum(field: Field, value: FieldValue, report: ValidationReport) -> None:
    allowed = list(field.examples)
    if value.as_string() not in allowed:
        detail = f" - valid values are [{','.join(allowed)}]" if allowed else ""
        _report_type_mismatch(field, value, report, detail)


def _validate_object(field: Field, value: FieldValue, report: ValidationReport) -> None:
    try:
        nested = value.as_object()
    except ConversionError:
        _report_type_mismatch(field, value, report)
        return
    # nested objects may carry their own generated ids
    report.combine(nested.validate_fields(allow_setting_generated_ids=True))


def _no_type_check(field: Field, value: FieldValue, report: ValidationReport) -> None:
    # STRING, DATE and AUTO_GUID are only checked by validation rules
    pass


_TYPE_VALIDATORS: Dict[FieldType, Callable[[Field, FieldValue, ValidationReport], None]] = {
    FieldType.BOOLEAN: _validate_boolean,
    FieldType.INTEGER: _validate_integer,
    FieldType.AUTO_INCREMENT: _validate_integer,
    FieldType.FLOAT: _validate_float,
    FieldType.ENUM: _validate_enum,
    FieldType.OBJECT: _validate_object,
    FieldType.STRING: _no_type_check,
    FieldType.DATE: _no_type_check,
    FieldType.AUTO_GUID: _no_type_check,
}

_SYNTHESIZED_TYPES = (
    FieldType.INTEGER,
    FieldType.AUTO_INCREMENT,
    FieldType.AUTO_GUID,
    FieldType.FLOAT,
    FieldType.STRING,
)

DEFAULT_RANGES: Dict[FieldType, Tuple[Number, Number]] = {
    FieldType.INTEGER: (INTEGER_MIN, INTEGER_MAX),
    FieldType.AUTO_INCREMENT: (INTEGER_MIN, INTEGER_MAX),
    FieldType.FLOAT: (FLOAT_MIN, FLOAT_MAX),
}


class FieldBuilder:
    """
    Mutable configuration for a Field.

    Every with_* method returns the builder so calls can be chained;
    build() produces the immutable Field.
    """

    def __init__(self, name: str, type: Union[FieldType, str]):
        if not name:
            raise ValueError("Field name must not be empty")
        self.name = name
        self.type = FieldType(type)
        # generated identifiers are mandatory unless made optional explicitly
        self.optional = not self.type.is_generated
        self.default: Optional[str] = None
        self.examples: List[str] = []
        self.validation_rules: List[ValidationRule] = []
        self.minimum, self.maximum = DEFAULT_RANGES.get(self.type, (None, None))
        self.must_be_unique = False
        self.unique_transform: Callable[[str], str] = identity_transform
        self.truncate_to: Optional[int] = None
        self.child_fields: List[Field] = []

    def with_default_value(self, value: Any) -> "FieldBuilder":
        self.default = to_raw_string(value)
        return self.with_example(self.default)

    def with_example(self, example: Any) -> "FieldBuilder":
        text = to_raw_string(example)
        if text not in self.examples:
            self.examples.append(text)
        return self

    def with_examples(self, *examples: Any) -> "FieldBuilder":
        for example in examples:
            self.with_example(example)
        return self

    def with_validation(self, *rules: ValidationRule) -> "FieldBuilder":
        self.validation_rules.extend(rules)
        return self

    def make_mandatory(self) -> "FieldBuilder":
        self.optional = False
        return self

    def make_optional(self) -> "FieldBuilder":
        self.optional = True
        return self

    def with_minimum_value(self, minimum: Number) -> "FieldBuilder":
        self.minimum = self._range_value(minimum, "minimum")
        return self

    def with_maximum_value(self, maximum: Number) -> "FieldBuilder":
        self.maximum = self._range_value(maximum, "maximum")
        return self

    def truncate_string_to(self, length: int) -> "FieldBuilder":
        if length < 0:
            raise ValueError(f"Truncation length must not be negative, got {length}")
        self.truncate_to = length
        return self

    def set_must_be_unique(self, unique: bool = True) -> "FieldBuilder":
        self.must_be_unique = unique
        return self

    def set_unique_after_transform(self, transform: Callable[[str], str]) -> "FieldBuilder":
        self.must_be_unique = True
        self.unique_transform = transform
        return self

    def with_field(self, child: Union[Field, "FieldBuilder"]) -> "FieldBuilder":
        """Add a nested field; only OBJECT fields have nested fields."""
        if self.type != FieldType.OBJECT:
            raise ValueError(f"Field '{self.name}' is {self.type}, only OBJECT fields have nested fields")
        if isinstance(child, FieldBuilder):
            child = child.build()
        self.child_fields.append(child)
        return self

    def with_fields(self, *children: Union[Field, "FieldBuilder"]) -> "FieldBuilder":
        for child in children:
            self.with_field(child)
        return self

    def build(self) -> Field:
        """
        Finalize into an immutable Field.

        Raises:
            ValueError: If the numeric range is inverted
            DuplicateDefinitionError: If nested field names repeat
        """
        if self.minimum is not None and self.maximum is not None and self.minimum > self.maximum:
            raise ValueError(
                f"Field '{self.name}': minimum {self.minimum} is greater than maximum {self.maximum}"
            )
        object_definition = None
        if self.type == FieldType.OBJECT:
            object_definition = DefinedFields(self.child_fields)
        return Field(
            name=self.name,
            type=self.type,
            optional=self.optional,
            default=self.default,
            examples=tuple(self.examples),
            validation_rules=tuple(self.validation_rules),
            minimum=self.minimum,
            maximum=self.maximum,
            must_be_unique=self.must_be_unique,
            unique_transform=self.unique_transform,
            truncate_to=self.truncate_to,
            object_definition=object_definition,
        )

    def _range_value(self, value: Number, which: str) -> Number:
        if self.type.is_integral:
            if isinstance(value, float) and not value.is_integer():
                raise ValueError(f"Field '{self.name}': {which} for {self.type} must be whole, got {value}")
            return int(value)
        if self.type == FieldType.FLOAT:
            return float(value)
        raise ValueError(f"Field '{self.name}' is {self.type}, only numeric fields have a {which}")


def field_is(name: str, type: Union[FieldType, str]) -> FieldBuilder:
    """Start configuring a field: field_is("title", FieldType.STRING).build()."""
    return FieldBuilder(name, type)
