from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Tuple


@dataclass(frozen=True)
class Pos:
    x: int
    y: int

    def __add__(self, other: "Pos") -> "Pos":
        return Pos(self.x + other.x, self.y + other.y)


@dataclass(frozen=True)
class Shape:
    """Four cell offsets of a piece letter at rotation 0."""

    offsets: Tuple[Pos, Pos, Pos, Pos]

    def at(self, origin: Pos) -> Tuple[Pos, ...]:
        return tuple(origin + off for off in self.offsets)

    def rotated_once(self) -> "Shape":
        # clockwise on a y-down board
        return Shape(tuple(Pos(-off.y, off.x) for off in self.offsets))  # type: ignore[arg-type]

    def rotated(self, times: int) -> "Shape":
        shape = self
        for _ in range(times):
            shape = shape.rotated_once()
        return shape


LETTERS: Tuple[str, ...] = ("I", "J", "L", "O", "S", "T", "Z")

BASE_OFFSETS: Dict[str, Tuple[Tuple[int, int], ...]] = {
    "O": ((0, -1), (0, 0), (1, 0), (1, -1)),
    "I": ((0, -1), (0, 0), (0, 1), (0, 2)),
    "J": ((1, -1), (1, 0), (1, 1), (0, 1)),
    "L": ((0, -1), (0, 0), (0, 1), (1, 1)),
    "Z": ((1, -1), (1, 0), (0, 0), (0, 1)),
    "S": ((0, -1), (0, 0), (1, 0), (1, 1)),
    "T": ((0, -1), (0, 0), (0, 1), (1, 0)),
}

ShapeTable = Mapping[str, Shape]


def build_shape_table() -> ShapeTable:
    table = {
        letter: Shape(tuple(Pos(x, y) for x, y in BASE_OFFSETS[letter]))  # type: ignore[arg-type]
        for letter in LETTERS
    }
    return MappingProxyType(table)
