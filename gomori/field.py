"""Card stacks on a single board coordinate."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .cards import Card, CardsSet
from .rules import DEFAULT_RULES, PlacementRule

__all__ = ["Field", "CompactField"]


@dataclass(frozen=True, slots=True)
class Field:
    """Flat, hand-off representation of one occupied coordinate."""

    i: int
    j: int
    top_card: Card | None = None
    hidden_cards: frozenset[Card] = field(default_factory=frozenset)

    @classmethod
    def of(cls, i: int, j: int, top_card: Card | None, hidden_cards: Iterable[Card] = ()) -> "Field":
        return cls(i=i, j=j, top_card=top_card, hidden_cards=frozenset(hidden_cards))


@dataclass(frozen=True, slots=True)
class CompactField:
    """The visible top card of a coordinate plus the cards covered by it.

    A card that is turned face down joins the hidden cards, so a field with
    no top card but hidden cards is a face-down stack.
    """

    top: Card | None = None
    hidden: CardsSet = field(default_factory=CardsSet)

    @classmethod
    def new(cls) -> "CompactField":
        return cls()

    @classmethod
    def from_field(cls, flat: Field) -> "CompactField":
        return cls(top=flat.top_card, hidden=CardsSet.of(flat.hidden_cards))

    def to_field(self, i: int, j: int) -> Field:
        return Field(i=i, j=j, top_card=self.top, hidden_cards=frozenset(self.hidden))

    def top_card(self) -> Card | None:
        return self.top

    def hidden_cards(self) -> CardsSet:
        return self.hidden

    def place_card(self, card: Card) -> "CompactField":
        """Return this field with ``card`` on top; legality is the caller's job."""

        hidden = self.hidden if self.top is None else self.hidden.insert(self.top)
        return CompactField(top=card, hidden=hidden)

    def turn_face_down(self) -> "CompactField":
        if self.top is None:
            return self
        return CompactField(top=None, hidden=self.hidden.insert(self.top))

    def can_place_card(self, card: Card, rule: PlacementRule = DEFAULT_RULES.placement_rule) -> bool:
        return self.top is None or rule(card, self.top)

    def all_cards(self) -> CardsSet:
        if self.top is None:
            return self.hidden
        return self.hidden.insert(self.top)

    def is_empty(self) -> bool:
        return self.top is None and self.hidden.is_empty()
