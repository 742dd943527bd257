"""Bit-packed coordinate sets anchored at a shared center.

A :class:`BitBoard` stores membership for the square window of coordinates
within ``BOARD_SIZE - 1`` rows and columns of its center. A board always uses
one of its occupied coordinates as the center, so both the occupied area and
every coordinate a card could legally be played on fit in the window.

Binary operations are only meaningful between bitboards with the same center;
mixing centers raises ``ValueError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, Iterator

import numpy as np

from .rules import BOARD_SIZE

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from numpy.typing import NDArray

__all__ = ["BitBoard", "WINDOW_RADIUS", "WINDOW_WIDTH", "LINE_LENGTH"]

WINDOW_RADIUS: Final[int] = BOARD_SIZE - 1
WINDOW_WIDTH: Final[int] = 2 * WINDOW_RADIUS + 1
LINE_LENGTH: Final[int] = BOARD_SIZE

# Row, column, diagonal, anti-diagonal.
_DIRECTIONS: Final[tuple[tuple[int, int], ...]] = ((0, 1), (1, 0), (1, 1), (1, -1))


@dataclass(frozen=True, slots=True)
class BitBoard:
    """Immutable set of coordinates around ``center``."""

    center: tuple[int, int]
    bits: int = 0

    @classmethod
    def empty_board_centered_at(cls, center: tuple[int, int]) -> "BitBoard":
        return cls(center=(center[0], center[1]))

    def _bit_index(self, i: int, j: int) -> int | None:
        row = i - self.center[0] + WINDOW_RADIUS
        col = j - self.center[1] + WINDOW_RADIUS
        if 0 <= row < WINDOW_WIDTH and 0 <= col < WINDOW_WIDTH:
            return row * WINDOW_WIDTH + col
        return None

    def _coords_of(self, bit_index: int) -> tuple[int, int]:
        row, col = divmod(bit_index, WINDOW_WIDTH)
        return (row + self.center[0] - WINDOW_RADIUS, col + self.center[1] - WINDOW_RADIUS)

    def _check_center(self, other: "BitBoard") -> None:
        if other.center != self.center:
            raise ValueError(
                f"cannot combine bitboards centered at {self.center} and {other.center}"
            )

    def _with_bits(self, bits: int) -> "BitBoard":
        return BitBoard(center=self.center, bits=bits)

    def insert(self, i: int, j: int) -> "BitBoard":
        bit_index = self._bit_index(i, j)
        if bit_index is None:
            raise ValueError(f"coordinate ({i}, {j}) outside the window around {self.center}")
        return self._with_bits(self.bits | (1 << bit_index))

    def remove(self, i: int, j: int) -> "BitBoard":
        bit_index = self._bit_index(i, j)
        if bit_index is None:
            return self
        return self._with_bits(self.bits & ~(1 << bit_index))

    def contains(self, i: int, j: int) -> bool:
        bit_index = self._bit_index(i, j)
        return bit_index is not None and (self.bits >> bit_index) & 1 == 1

    def insert_area(self, i_min: int, j_min: int, i_max: int, j_max: int) -> "BitBoard":
        """Insert every coordinate of the inclusive rectangle that fits the window."""

        ci, cj = self.center
        i_lo, i_hi = max(i_min, ci - WINDOW_RADIUS), min(i_max, ci + WINDOW_RADIUS)
        j_lo, j_hi = max(j_min, cj - WINDOW_RADIUS), min(j_max, cj + WINDOW_RADIUS)
        if i_lo > i_hi or j_lo > j_hi:
            return self
        row_mask = (1 << (j_hi - j_lo + 1)) - 1
        bits = self.bits
        for i in range(i_lo, i_hi + 1):
            bits |= row_mask << self._bit_index(i, j_lo)
        return self._with_bits(bits)

    def union(self, other: "BitBoard") -> "BitBoard":
        self._check_center(other)
        return self._with_bits(self.bits | other.bits)

    def difference(self, other: "BitBoard") -> "BitBoard":
        self._check_center(other)
        return self._with_bits(self.bits & ~other.bits)

    def intersection(self, other: "BitBoard") -> "BitBoard":
        self._check_center(other)
        return self._with_bits(self.bits & other.bits)

    def lines_going_through_point(self, i: int, j: int) -> "BitBoard":
        """Return all complete lines of ``LINE_LENGTH`` members through ``(i, j)``.

        Rows, columns, diagonals and anti-diagonals are checked. A line only
        counts if every one of its coordinates is a member.
        """

        if not self.contains(i, j):
            return self._with_bits(0)
        found = 0
        for di, dj in _DIRECTIONS:
            for start in range(1 - LINE_LENGTH, 1):
                segment = 0
                for step in range(start, start + LINE_LENGTH):
                    bit_index = self._bit_index(i + step * di, j + step * dj)
                    if bit_index is None:
                        segment = 0
                        break
                    segment |= 1 << bit_index
                if segment and self.bits & segment == segment:
                    found |= segment
        return self._with_bits(found)

    def is_empty(self) -> bool:
        return self.bits == 0

    def to_array(self) -> "NDArray[np.bool_]":
        """Return the window as a boolean grid, row 0 being ``center[0] - WINDOW_RADIUS``."""

        grid = np.zeros((WINDOW_WIDTH, WINDOW_WIDTH), dtype=np.bool_)
        for i, j in self:
            grid[i - self.center[0] + WINDOW_RADIUS, j - self.center[1] + WINDOW_RADIUS] = True
        return grid

    def __or__(self, other: "BitBoard") -> "BitBoard":
        return self.union(other)

    def __sub__(self, other: "BitBoard") -> "BitBoard":
        return self.difference(other)

    def __and__(self, other: "BitBoard") -> "BitBoard":
        return self.intersection(other)

    def __contains__(self, coord: object) -> bool:
        if not isinstance(coord, tuple) or len(coord) != 2:
            return False
        return self.contains(coord[0], coord[1])

    def __iter__(self) -> Iterator[tuple[int, int]]:
        bits = self.bits
        while bits:
            low_bit = bits & -bits
            yield self._coords_of(low_bit.bit_length() - 1)
            bits ^= low_bit

    def __len__(self) -> int:
        return bin(self.bits).count("1")

    def __bool__(self) -> bool:
        return self.bits != 0
