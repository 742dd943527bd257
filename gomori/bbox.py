"""Axis-aligned bounding boxes over board coordinates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

__all__ = ["BoundingBox"]


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Inclusive rectangle ``[i_min, i_max] x [j_min, j_max]``."""

    i_min: int
    j_min: int
    i_max: int
    j_max: int

    @classmethod
    def singleton(cls, i: int, j: int) -> "BoundingBox":
        """Return the box containing only ``(i, j)``."""

        return cls(i_min=i, j_min=j, i_max=i, j_max=j)

    def update(self, i: int, j: int) -> "BoundingBox":
        """Return the smallest box containing this box and ``(i, j)``."""

        return BoundingBox(
            i_min=min(self.i_min, i),
            j_min=min(self.j_min, j),
            i_max=max(self.i_max, i),
            j_max=max(self.j_max, j),
        )

    def size_i(self) -> int:
        return self.i_max - self.i_min + 1

    def size_j(self) -> int:
        return self.j_max - self.j_min + 1

    def contains(self, i: int, j: int) -> bool:
        return self.i_min <= i <= self.i_max and self.j_min <= j <= self.j_max

    def __iter__(self) -> Iterator[tuple[int, int]]:
        for i in range(self.i_min, self.i_max + 1):
            for j in range(self.j_min, self.j_max + 1):
                yield (i, j)
