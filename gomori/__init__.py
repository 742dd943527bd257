"""Top-level package for the gomori board rules engine."""

from . import bbox, bitboard, board, cards, encoding, field, history, rules
from .bbox import BoundingBox
from .bitboard import BitBoard
from .board import Board, CalculatedEffects
from .cards import Card, CardsSet, Rank, Suit
from .field import CompactField, Field
from .rules import BOARD_SIZE, DEFAULT_RULES, CardToPlay, IllegalCardPlayed, InvalidBoard, RulesConfig

__all__ = [
    "bbox",
    "bitboard",
    "board",
    "cards",
    "encoding",
    "field",
    "history",
    "rules",
    "BOARD_SIZE",
    "DEFAULT_RULES",
    "BitBoard",
    "Board",
    "BoundingBox",
    "CalculatedEffects",
    "Card",
    "CardToPlay",
    "CardsSet",
    "CompactField",
    "Field",
    "IllegalCardPlayed",
    "InvalidBoard",
    "Rank",
    "RulesConfig",
    "Suit",
]
