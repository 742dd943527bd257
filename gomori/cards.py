"""Card abstractions and helpers for gomori."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator

from . import encoding


class Suit(str, Enum):
    """Enumeration of the four suits, in bitboard order."""

    DIAMOND = "D"
    HEART = "H"
    SPADE = "S"
    CLUB = "C"

    @property
    def index(self) -> int:
        return encoding.SUIT_TO_IDX[self.value]

    @property
    def symbol(self) -> str:
        return encoding.SUIT_SYMBOLS[self.index]


class Rank(str, Enum):
    """Enumeration of ranks, lowest first. Aces rank highest."""

    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    @property
    def index(self) -> int:
        return encoding.RANK_TO_IDX[self.value]

    @property
    def is_face(self) -> bool:
        """Return ``True`` for the ranks that carry a special ability."""

        return self in (Rank.JACK, Rank.QUEEN, Rank.KING)


@dataclass(frozen=True, slots=True)
class Card:
    """Value object describing a single playing card."""

    rank: Rank
    suit: Suit

    @classmethod
    def from_id(cls, card_identifier: int) -> "Card":
        suit_idx, rank_idx = encoding.decode_id(card_identifier)
        return cls(rank=Rank(encoding.RANKS[rank_idx]), suit=Suit(encoding.SUITS[suit_idx]))

    @classmethod
    def parse(cls, label: str) -> "Card":
        """Parse labels such as ``"A♦"``, ``"10♣"`` or ``"QH"``."""

        label = label.strip()
        if len(label) < 2:
            raise ValueError(f"invalid card label '{label}'")
        rank, suit = label[:-1].upper(), label[-1]
        if suit in encoding.SYMBOL_TO_IDX:
            suit_idx = encoding.SYMBOL_TO_IDX[suit]
        elif suit.upper() in encoding.SUIT_TO_IDX:
            suit_idx = encoding.SUIT_TO_IDX[suit.upper()]
        else:
            raise ValueError(f"invalid suit in card label '{label}'")
        if rank not in encoding.RANK_TO_IDX:
            raise ValueError(f"invalid rank in card label '{label}'")
        return cls(rank=Rank(rank), suit=Suit(encoding.SUITS[suit_idx]))

    @property
    def id(self) -> int:
        return encoding.card_id(self.suit.index, self.rank.index)

    def can_be_placed_on(self, other: "Card") -> bool:
        return can_be_placed_on(self, other)

    def label(self) -> str:
        return f"{self.rank.value}{self.suit.symbol}"

    def __str__(self) -> str:
        return self.label()


def can_be_placed_on(card: Card, other: Card) -> bool:
    """Default placement rule: may ``card`` be stacked on top of ``other``?

    Face cards can go on any number card. Number cards (Aces included, ranked
    highest) can go on number cards of equal or lower rank. Nothing can be
    placed on a face card.
    """

    if other.rank.is_face:
        return False
    if card.rank.is_face:
        return True
    return card.rank.index >= other.rank.index


def full_deck() -> list[Card]:
    """Return a deterministic ordering of all 52 cards."""

    return [Card.from_id(card_identifier) for card_identifier in range(encoding.DECK_CARD_COUNT)]


@dataclass(frozen=True, slots=True)
class CardsSet:
    """Immutable set of cards packed into a 52-bit mask."""

    mask: int = 0

    @classmethod
    def of(cls, cards: Iterable[Card]) -> "CardsSet":
        return cls(encoding.mask_from_cards(card.id for card in cards))

    def insert(self, card: Card) -> "CardsSet":
        return CardsSet(encoding.add_card(self.mask, card.id))

    def remove(self, card: Card) -> "CardsSet":
        return CardsSet(encoding.remove_card(self.mask, card.id))

    def contains(self, card: Card) -> bool:
        return encoding.has_card(self.mask, card.id)

    def is_empty(self) -> bool:
        return self.mask == 0

    def union(self, other: "CardsSet") -> "CardsSet":
        return CardsSet(self.mask | other.mask)

    def __or__(self, other: "CardsSet") -> "CardsSet":
        return self.union(other)

    def __contains__(self, card: object) -> bool:
        return isinstance(card, Card) and self.contains(card)

    def __iter__(self) -> Iterator[Card]:
        for card_identifier in encoding.iter_cards(self.mask):
            yield Card.from_id(card_identifier)

    def __len__(self) -> int:
        return bin(self.mask).count("1")

    def __bool__(self) -> bool:
        return self.mask != 0

    def __str__(self) -> str:
        return "{" + ", ".join(card.label() for card in self) + "}"
