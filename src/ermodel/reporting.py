"""Aggregated validation outcome."""

from dataclasses import dataclass, field
from typing import List


@dataclass
class ValidationReport:
    """
    Verdict of validating one or more values.

    A report starts valid. Every error message added marks it invalid, and
    messages accumulate rather than short-circuiting.
    """

    valid: bool = True
    error_messages: List[str] = field(default_factory=list)

    def is_valid(self) -> bool:
        return self.valid

    def set_valid(self, valid: bool) -> "ValidationReport":
        self.valid = valid
        return self

    def add_error_message(self, message: str) -> "ValidationReport":
        """Record a failure message and mark the report invalid."""
        self.valid = False
        self.error_messages.append(message)
        return self

    def combine(self, other: "ValidationReport") -> "ValidationReport":
        """
        Merge another report into this one.

        Args:
            other: Report whose messages are appended to this one

        Returns:
            This report, invalid if either report was invalid
        """
        self.valid = self.valid and other.valid
        self.error_messages.extend(other.error_messages)
        return self

    def combined_message(self, separator: str = "; ") -> str:
        return separator.join(self.error_messages)
