"""Validation rules attached to fields."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Annotated, Literal, Union
from pydantic import BaseModel, ConfigDict, Discriminator, field_validator

if TYPE_CHECKING:
    from ermodel.definitions.field_value import FieldValue


class ValidationRule(BaseModel):
    """
    Base class for rules run after a field's type check.

    Rules only ever see present values; mandatory checks happen before them.
    Subclasses implement validates() and error_message().
    """

    model_config = ConfigDict(frozen=True)

    def validates(self, value: FieldValue) -> bool:
        raise NotImplementedError

    def error_message(self, value: FieldValue) -> str:
        raise NotImplementedError


class MaximumLengthRule(ValidationRule):
    """String form of the value must not exceed a length."""

    kind: Literal["maximum_length"] = "maximum_length"
    length: int

    def validates(self, value: FieldValue) -> bool:
        return len(value.as_string()) <= self.length

    def error_message(self, value: FieldValue) -> str:
        return (
            f"{value.field_name} : Maximum allowable length exceeded for "
            f"{value.field_name} - maximum length is {self.length}"
        )


class MinimumLengthRule(ValidationRule):
    """String form of the value must be at least a length."""

    kind: Literal["minimum_length"] = "minimum_length"
    length: int

    def validates(self, value: FieldValue) -> bool:
        return len(value.as_string()) >= self.length

    def error_message(self, value: FieldValue) -> str:
        return (
            f"{value.field_name} : Minimum length not met for "
            f"{value.field_name} - minimum length is {self.length}"
        )


class MatchesRegexRule(ValidationRule):
    """String form of the value must match a regular expression."""

    kind: Literal["matches_regex"] = "matches_regex"
    pattern: str

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        """Reject patterns that do not compile."""
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"invalid regular expression {v!r}: {e}") from e
        return v

    def validates(self, value: FieldValue) -> bool:
        return re.fullmatch(self.pattern, value.as_string()) is not None

    def error_message(self, value: FieldValue) -> str:
        return f"{value.field_name} : {value.as_string()} does not match pattern {self.pattern}"


class NotEmptyRule(ValidationRule):
    """Value must not be blank."""

    kind: Literal["not_empty"] = "not_empty"

    def validates(self, value: FieldValue) -> bool:
        return value.as_string().strip() != ""

    def error_message(self, value: FieldValue) -> str:
        return f"{value.field_name} : can not be empty"


# Built-in rules that can be written to and read from a schema document
ValidationRuleSpec = Annotated[
    Union[MaximumLengthRule, MinimumLengthRule, MatchesRegexRule, NotEmptyRule],
    Discriminator("kind"),
]
