"""Card identifier encoding utilities for gomori."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final, Iterable, Iterator

import numpy as np

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from numpy.typing import NDArray

    from .board import Board

RANKS: Final[list[str]] = ["2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K", "A"]
SUITS: Final[list[str]] = ["D", "H", "S", "C"]
SUIT_SYMBOLS: Final[list[str]] = ["♦", "♥", "♠", "♣"]
RANK_TO_IDX: Final[dict[str, int]] = {rank: idx for idx, rank in enumerate(RANKS)}
SUIT_TO_IDX: Final[dict[str, int]] = {suit: idx for idx, suit in enumerate(SUITS)}
SYMBOL_TO_IDX: Final[dict[str, int]] = {symbol: idx for idx, symbol in enumerate(SUIT_SYMBOLS)}
DECK_CARD_COUNT: Final[int] = len(RANKS) * len(SUITS)
FULL_MASK: Final[int] = (1 << DECK_CARD_COUNT) - 1

# Plane layout used by ``board_planes``: one plane per suit, then face-down
# stacks, then the number of hidden cards.
FACE_DOWN_PLANE: Final[int] = len(SUITS)
HIDDEN_COUNT_PLANE: Final[int] = len(SUITS) + 1
PLANE_COUNT: Final[int] = len(SUITS) + 2


def card_id(suit_idx: int, rank_idx: int) -> int:
    """Encode a suit and rank index into a card identifier."""

    if not 0 <= suit_idx < len(SUITS):
        raise ValueError("suit_idx out of range")
    if not 0 <= rank_idx < len(RANKS):
        raise ValueError("rank_idx out of range")
    return suit_idx * len(RANKS) + rank_idx


def decode_id(card_identifier: int) -> tuple[int, int]:
    """Decode a card identifier into ``(suit_idx, rank_idx)``."""

    _validate_card_identifier(card_identifier)
    return divmod(card_identifier, len(RANKS))


def _validate_card_identifier(card_identifier: int) -> None:
    if card_identifier < 0 or card_identifier >= DECK_CARD_COUNT:
        raise ValueError(f"card identifier {card_identifier} out of range")


def mask_from_cards(cards: Iterable[int]) -> int:
    """Return a bit-mask representing the provided card identifiers."""

    mask = 0
    for card_identifier in cards:
        _validate_card_identifier(card_identifier)
        mask |= 1 << card_identifier
    return mask


def add_card(mask: int, card_identifier: int) -> int:
    """Return ``mask`` updated to include ``card_identifier``."""

    _validate_card_identifier(card_identifier)
    return mask | (1 << card_identifier)


def remove_card(mask: int, card_identifier: int) -> int:
    """Return ``mask`` without ``card_identifier`` (missing cards are ignored)."""

    _validate_card_identifier(card_identifier)
    return mask & ~(1 << card_identifier)


def has_card(mask: int, card_identifier: int) -> bool:
    """Return ``True`` if ``mask`` already includes ``card_identifier``."""

    if card_identifier < 0:
        return False
    return (mask >> card_identifier) & 1 == 1


def iter_cards(mask: int) -> Iterator[int]:
    """Yield all card identifiers present in ``mask`` in ascending order."""

    while mask:
        low_bit = mask & -mask
        yield low_bit.bit_length() - 1
        mask ^= low_bit


def cards_from_mask(mask: int) -> list[int]:
    """Return a list of card identifiers contained in ``mask``."""

    return list(iter_cards(mask))


def board_planes(board: "Board") -> "NDArray[np.uint8]":
    """Return a ``(PLANE_COUNT, 4, 4)`` feature tensor for ``board``.

    The grid is anchored at the top-left corner of the board's bounding box so
    that translated boards encode identically.
    """

    from .rules import BOARD_SIZE

    planes = np.zeros((PLANE_COUNT, BOARD_SIZE, BOARD_SIZE), dtype=np.uint8)
    bbox = board.bbox()
    for i, j, field in board:
        row = i - bbox.i_min
        col = j - bbox.j_min
        top = field.top_card()
        if top is None:
            planes[FACE_DOWN_PLANE, row, col] = 1
        else:
            planes[top.suit.index, row, col] = 1
        planes[HIDDEN_COUNT_PLANE, row, col] = len(field.hidden_cards())
    return planes
