"""Values bound to the Field that owns them."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional

from ermodel.errors import ConversionError, UnknownKeyError
from ermodel.reporting import ValidationReport

# integers with more digits are refused rather than materialised
MAX_INTEGER_DIGITS = 4000

if TYPE_CHECKING:
    from .defined_fields import DefinedFields
    from .field import Field


def to_raw_string(value: Any) -> str:
    """
    Render a JSON-style Python value as the string payload a FieldValue stores.

    Booleans become "true"/"false", floats keep their literal form (3.0 stays
    "3.0") and containers are written as JSON. None is an absent value, not
    a payload, and is refused.
    """
    if value is None:
        raise ValueError("None is an absent value and has no raw form")
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, Decimal)):
        return str(value)
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


@dataclass(frozen=True)
class FieldValue:
    """
    A candidate or stored value paired with its Field.

    Scalars are held as a raw string. OBJECT values are held as an
    InstanceFields, or as raw JSON text that is parsed on demand.
    """

    field: Field
    raw: Optional[str] = None
    object_value: Optional[InstanceFields] = None

    @classmethod
    def of(cls, field: Field, value: Any) -> FieldValue:
        """
        Bind a JSON-style value to a field.

        Args:
            field: Owning field
            value: str, bool, int, float, dict, InstanceFields or FieldValue

        Returns:
            FieldValue for the field

        Raises:
            ValueError: If value is None; absent values are not bound
        """
        if isinstance(value, FieldValue):
            return cls(field, value.raw, value.object_value)
        if isinstance(value, InstanceFields):
            return cls(field, None, value)
        if isinstance(value, Mapping) and field.object_definition is not None:
            return cls(field, None, InstanceFields.from_mapping(field.object_definition, value))
        return cls(field, to_raw_string(value))

    @property
    def field_name(self) -> str:
        return self.field.name

    def as_string(self) -> str:
        if self.raw is not None:
            return self.raw
        if self.object_value is not None:
            return json.dumps(self.object_value.to_dict())
        return ""

    def as_boolean(self) -> bool:
        text = self.as_string().strip().lower()
        if text == "true":
            return True
        if text == "false":
            return False
        raise ConversionError(self.as_string(), "BOOLEAN")

    def as_decimal(self) -> Decimal:
        try:
            number = Decimal(self.as_string().strip())
        except InvalidOperation as e:
            raise ConversionError(self.as_string(), "number") from e
        if not number.is_finite():
            raise ConversionError(self.as_string(), "number")
        return number

    def as_integral(self) -> Decimal:
        """
        Read the value as a whole number, without building a Python int.

        JSON numbers may arrive as float literals, so "3.0" is accepted;
        any non-zero fractional part is a conversion failure.
        """
        number = self.as_decimal()
        if number != number.to_integral_value():
            raise ConversionError(self.as_string(), "INTEGER")
        return number

    def as_integer(self) -> int:
        number = self.as_integral()
        if number.adjusted() >= MAX_INTEGER_DIGITS:
            raise ConversionError(self.as_string(), "INTEGER")
        return int(number)

    def as_float(self) -> float:
        try:
            number = float(self.as_string().strip())
        except ValueError as e:
            raise ConversionError(self.as_string(), "FLOAT") from e
        if not math.isfinite(number):
            raise ConversionError(self.as_string(), "FLOAT")
        return number

    def as_object(self) -> InstanceFields:
        if self.object_value is not None:
            return self.object_value
        definition = self.field.object_definition
        if definition is None:
            raise ConversionError(self.as_string(), "OBJECT")
        try:
            data = json.loads(self.as_string())
        except ValueError as e:
            raise ConversionError(self.as_string(), "OBJECT") from e
        if not isinstance(data, dict):
            raise ConversionError(self.as_string(), "OBJECT")
        return InstanceFields.from_mapping(definition, data)

    def to_native(self) -> Any:
        """Value for JSON output: nested dict for objects, raw string otherwise."""
        if self.object_value is not None:
            return self.object_value.to_dict()
        return self.raw


class InstanceFields:
    """Field values of one entity instance or one nested object."""

    def __init__(self, definition: DefinedFields):
        self.definition = definition
        self._values: Dict[str, FieldValue] = {}
        # names supplied in a payload that the definition does not know
        self._undefined: Dict[str, Any] = {}

    @classmethod
    def from_mapping(cls, definition: DefinedFields, data: Mapping[str, Any]) -> InstanceFields:
        """
        Build from a JSON-style mapping.

        Undefined names are kept aside and reported by validate_fields().
        A null value leaves the field absent.
        """
        fields = cls(definition)
        for name, value in data.items():
            if not definition.has_field_named(name):
                fields._undefined[name] = value
            elif value is not None:
                fields._values[name] = FieldValue.of(definition.get_field(name), value)
        return fields

    def get(self, name: str) -> Optional[FieldValue]:
        return self._values.get(name)

    def has(self, name: str) -> bool:
        return name in self._values

    def put(self, name: str, value: Any) -> Optional[FieldValue]:
        """
        Store a value for a defined field; None clears it.

        Raises:
            UnknownKeyError: If the field is not defined
        """
        if not self.definition.has_field_named(name):
            raise UnknownKeyError(f"Field '{name}' is not defined")
        if value is None:
            self.remove(name)
            return None
        field_value = FieldValue.of(self.definition.get_field(name), value)
        self._values[name] = field_value
        return field_value

    def remove(self, name: str) -> None:
        self._values.pop(name, None)

    def names(self) -> List[str]:
        return list(self._values.keys())

    def undefined_names(self) -> List[str]:
        return list(self._undefined.keys())

    def validate_fields(
        self,
        allow_setting_generated_ids: bool = False,
        ignore: Iterable[str] = (),
    ) -> ValidationReport:
        """
        Validate every defined field against its stored value.

        Args:
            allow_setting_generated_ids: Passed through to Field.validate
            ignore: Field names to skip

        Returns:
            Combined report for all fields
        """
        skipped = set(ignore)
        report = ValidationReport()
        for name in self._undefined:
            report.add_error_message(f"{name} : field is not defined")
        for field in self.definition:
            if field.name in skipped:
                continue
            report.combine(field.validate(self.get(field.name), allow_setting_generated_ids))
        return report

    def to_dict(self) -> Dict[str, Any]:
        return {name: value.to_native() for name, value in self._values.items()}

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"InstanceFields({self.to_dict()!r})"
