"""Rule constants, configuration and play rejections for gomori."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Final

from .cards import Card, can_be_placed_on

__all__ = [
    "BOARD_SIZE",
    "MAX_FIELDS",
    "PlacementRule",
    "RulesConfig",
    "DEFAULT_RULES",
    "CardToPlay",
    "InvalidBoard",
    "IllegalCardPlayed",
    "OutOfBounds",
    "IncompatibleCard",
    "NoTargetForKingAbility",
    "TargetForKingAbilityDoesNotExist",
    "TargetForKingAbilityIsFaceDown",
]

BOARD_SIZE: Final[int] = 4
MAX_FIELDS: Final[int] = BOARD_SIZE * BOARD_SIZE

PlacementRule = Callable[[Card, Card], bool]


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Rule switches shared by every generation of a board."""

    placement_rule: PlacementRule = field(default=can_be_placed_on)
    abilities_require_combo: bool = True


DEFAULT_RULES: Final[RulesConfig] = RulesConfig()


@dataclass(frozen=True, slots=True)
class CardToPlay:
    """A request to place ``card`` at ``(i, j)``."""

    card: Card
    i: int
    j: int
    target_field_for_king_ability: tuple[int, int] | None = None


class InvalidBoard(ValueError):
    """Raised when a board is built from an obviously malformed cell list."""


@dataclass(frozen=True, slots=True)
class IllegalCardPlayed:
    """Base class of every reason a play can be refused."""

    @property
    def message(self) -> str:
        return "illegal card played"

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class OutOfBounds(IllegalCardPlayed):
    @property
    def message(self) -> str:
        return f"the board would grow beyond {BOARD_SIZE}x{BOARD_SIZE}"


@dataclass(frozen=True, slots=True)
class IncompatibleCard(IllegalCardPlayed):
    existing_card: Card

    @property
    def message(self) -> str:
        return f"the card cannot be placed on {self.existing_card}"


@dataclass(frozen=True, slots=True)
class NoTargetForKingAbility(IllegalCardPlayed):
    @property
    def message(self) -> str:
        return "a king played as a combo needs a target field"


@dataclass(frozen=True, slots=True)
class TargetForKingAbilityDoesNotExist(IllegalCardPlayed):
    tgt_i: int
    tgt_j: int

    @property
    def message(self) -> str:
        return f"there is no field at ({self.tgt_i}, {self.tgt_j}) to flip"


@dataclass(frozen=True, slots=True)
class TargetForKingAbilityIsFaceDown(IllegalCardPlayed):
    tgt_i: int
    tgt_j: int

    @property
    def message(self) -> str:
        return f"the field at ({self.tgt_i}, {self.tgt_j}) is already face down"

