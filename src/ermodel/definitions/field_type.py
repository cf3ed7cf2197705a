"""Closed set of field kinds."""

from enum import Enum


class FieldType(str, Enum):
    """Kind of value a Field holds."""

    BOOLEAN = "BOOLEAN"
    INTEGER = "INTEGER"
    FLOAT = "FLOAT"
    STRING = "STRING"
    ENUM = "ENUM"
    DATE = "DATE"
    OBJECT = "OBJECT"
    AUTO_INCREMENT = "AUTO_INCREMENT"
    AUTO_GUID = "AUTO_GUID"

    def __str__(self) -> str:
        return self.value

    @property
    def default_value(self) -> str:
        """Value used when a field has no configured default."""
        return _TYPE_DEFAULTS[self]

    @property
    def is_generated(self) -> bool:
        """True for identifiers assigned by the system rather than by clients."""
        return self in (FieldType.AUTO_INCREMENT, FieldType.AUTO_GUID)

    @property
    def is_integral(self) -> bool:
        return self in (FieldType.INTEGER, FieldType.AUTO_INCREMENT)


_TYPE_DEFAULTS = {
    FieldType.BOOLEAN: "false",
    FieldType.INTEGER: "0",
    FieldType.FLOAT: "0.0",
    FieldType.STRING: "",
    FieldType.ENUM: "",
    FieldType.DATE: "",
    FieldType.OBJECT: "",
    FieldType.AUTO_INCREMENT: "0",
    FieldType.AUTO_GUID: "",
}
