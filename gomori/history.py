"""Helpers for keeping a log of board generations."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator

from .board import Board
from .cards import CardsSet
from .rules import CardToPlay, IllegalCardPlayed

__all__ = ["PlayRecord", "BoardHistory"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PlayRecord:
    """Summary of a single successful play."""

    card_to_play: CardToPlay
    cards_won: CardsSet
    combo: bool


@dataclass(slots=True)
class BoardHistory:
    """Mutable tracker holding every board generation since ``initial``.

    Boards are immutable, so earlier generations stay valid and undoing a
    play only drops the newest one.
    """

    initial: Board
    records: list[PlayRecord] = field(default_factory=list)
    _boards: list[Board] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.records:
            raise ValueError("a history starts without any recorded plays")
        self._boards = [self.initial]

    @property
    def current(self) -> Board:
        return self._boards[-1]

    def play(self, card_to_play: CardToPlay) -> PlayRecord | IllegalCardPlayed:
        """Play on the current board, recording the new generation on success."""

        effects = self.current.calculate(card_to_play)
        if isinstance(effects, IllegalCardPlayed):
            return effects
        record = PlayRecord(card_to_play=card_to_play, cards_won=effects.cards_won, combo=effects.combo)
        self._boards.append(effects.execute())
        self.records.append(record)
        return record

    def undo(self) -> Board:
        """Drop the newest generation and return the board before it."""

        if not self.records:
            raise ValueError("nothing to undo")
        self._boards.pop()
        record = self.records.pop()
        play = record.card_to_play
        logger.debug("undid %s at (%d, %d)", play.card, play.i, play.j)
        return self.current

    def cards_won(self) -> CardsSet:
        """All cards won across the recorded plays."""

        total = CardsSet()
        for record in self.records:
            total |= record.cards_won
        return total

    def __iter__(self) -> Iterator[Board]:
        return iter(self._boards)

    def __len__(self) -> int:
        return len(self._boards)
