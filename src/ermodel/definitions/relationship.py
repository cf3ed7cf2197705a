"""Relationship definitions and the directed vectors derived from them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from .entity_definition import EntityDefinition


class Cardinality(str, Enum):
    """Multiplicity of a relationship, read from the 'from' side to the 'to' side."""

    ONE_TO_ONE = "ONE_TO_ONE"
    ONE_TO_MANY = "ONE_TO_MANY"
    MANY_TO_ONE = "MANY_TO_ONE"
    MANY_TO_MANY = "MANY_TO_MANY"

    def __str__(self) -> str:
        return self.value

    def reversed(self) -> "Cardinality":
        """The same multiplicity read from the 'to' side."""
        return _REVERSED[self]

    @property
    def max_links(self) -> Optional[int]:
        """How many 'to' instances one 'from' instance may link to; None means unbounded."""
        if self in (Cardinality.ONE_TO_ONE, Cardinality.MANY_TO_ONE):
            return 1
        return None


_REVERSED = {
    Cardinality.ONE_TO_ONE: Cardinality.ONE_TO_ONE,
    Cardinality.ONE_TO_MANY: Cardinality.MANY_TO_ONE,
    Cardinality.MANY_TO_ONE: Cardinality.ONE_TO_MANY,
    Cardinality.MANY_TO_MANY: Cardinality.MANY_TO_MANY,
}


@dataclass(frozen=True, eq=False)
class RelationshipVector:
    """
    A relationship seen from one entity's side.

    Vectors are views computed from a RelationshipDefinition and have no
    state of their own.
    """

    from_entity: EntityDefinition
    to_entity: EntityDefinition
    name: str
    cardinality: Cardinality
    definition: RelationshipDefinition
    is_reversed: bool = False

    def allows_another_link(self, current_count: int) -> bool:
        """True if an instance holding current_count links may add one more."""
        limit = self.cardinality.max_links
        return limit is None or current_count < limit

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RelationshipVector):
            return NotImplemented
        return (
            self.definition is other.definition
            and self.is_reversed == other.is_reversed
        )

    def __hash__(self) -> int:
        return hash((id(self.definition), self.is_reversed))

    def __repr__(self) -> str:
        return (
            f"RelationshipVector({self.from_entity.name} -{self.name}-> "
            f"{self.to_entity.name}, {self.cardinality})"
        )


@dataclass(frozen=True, eq=False)
class RelationshipDefinition:
    """Named, cardinality-typed link from one entity type to another."""

    from_entity: EntityDefinition
    to_entity: EntityDefinition
    name: str
    cardinality: Cardinality = Cardinality.ONE_TO_MANY
    two_way: bool = False

    def forward_vector(self) -> RelationshipVector:
        return RelationshipVector(
            from_entity=self.from_entity,
            to_entity=self.to_entity,
            name=self.name,
            cardinality=self.cardinality,
            definition=self,
        )

    def reversed_vector(self) -> Optional[RelationshipVector]:
        """The 'to' side's view of a two-way relationship; None for one-way ones."""
        if not self.two_way:
            return None
        return RelationshipVector(
            from_entity=self.to_entity,
            to_entity=self.from_entity,
            name=self.name,
            cardinality=self.cardinality.reversed(),
            definition=self,
            is_reversed=True,
        )

    def vectors(self) -> List[RelationshipVector]:
        reverse = self.reversed_vector()
        return [self.forward_vector()] if reverse is None else [self.forward_vector(), reverse]

    def vectors_from(self, entity: EntityDefinition) -> List[RelationshipVector]:
        return [v for v in self.vectors() if v.from_entity is entity]

    def involves(self, entity: EntityDefinition) -> bool:
        return self.from_entity is entity or self.to_entity is entity

    def __repr__(self) -> str:
        arrow = "<->" if self.two_way else "->"
        return (
            f"RelationshipDefinition({self.from_entity.name} {arrow} "
            f"{self.to_entity.name}, {self.name!r}, {self.cardinality})"
        )
