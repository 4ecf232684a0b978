from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple

from .geometry import Pos, ShapeTable


@dataclass(frozen=True)
class Piece:
    letter: str
    rotation: int = 0  # 0..3
    origin: Pos = Pos(0, 0)

    def moved(self, delta: Pos) -> "Piece":
        return replace(self, origin=self.origin + delta)

    def rotated_cw(self) -> "Piece":
        return replace(self, rotation=(self.rotation + 1) % 4)

    def tiles(self, shapes: ShapeTable) -> Tuple[Pos, ...]:
        """Absolute board cells occupied by this piece."""
        return shapes[self.letter].rotated(self.rotation % 4).at(self.origin)
