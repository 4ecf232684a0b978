from __future__ import annotations

import logging
from typing import Iterable, List, Optional

import numpy as np

from .geometry import Pos


logger = logging.getLogger(__name__)

EMPTY_TILE = ""


class Board:
    """Fixed-size grid of locked tiles.

    Each cell holds either the empty marker or the letter of the piece that
    was locked there. Row 0 is the top of the board.
    """

    def __init__(self, width: int = 10, height: int = 20) -> None:
        self.width = int(width)
        self.height = int(height)
        self.tiles = np.full((self.height, self.width), EMPTY_TILE, dtype="<U1")

    def reset(self) -> None:
        self.tiles.fill(EMPTY_TILE)

    def contains(self, pos: Pos) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def _check(self, pos: Pos) -> None:
        # numpy wraps negative indices, so out-of-range access must be refused here
        if not self.contains(pos):
            raise IndexError(f"tile {pos} outside {self.width}x{self.height} board")

    def get_tile(self, pos: Pos) -> Optional[str]:
        self._check(pos)
        tile = str(self.tiles[pos.y, pos.x])
        return tile if tile != EMPTY_TILE else None

    def set_tile(self, pos: Pos, tile: str) -> None:
        self._check(pos)
        if not isinstance(tile, str) or len(tile) != 1:
            raise ValueError(f"tile label must be a single character, got {tile!r}")
        self.tiles[pos.y, pos.x] = tile

    def clear_tile(self, pos: Pos) -> None:
        self._check(pos)
        self.tiles[pos.y, pos.x] = EMPTY_TILE

    def is_free(self, cells: Iterable[Pos]) -> bool:
        for pos in cells:
            if not self.contains(pos):
                return False
            if self.tiles[pos.y, pos.x] != EMPTY_TILE:
                return False
        return True

    def remove_full_rows(self) -> int:
        """Clear full rows and let the rows above fall into the gaps.

        Sweeps bottom to top. Every non-full row is copied down by the number
        of full rows found beneath it so far.
        """
        removed = 0
        for y in range(self.height - 1, -1, -1):
            row = self.tiles[y].copy()
            full = bool(np.all(row != EMPTY_TILE))
            if full:
                removed += 1
            if removed > 0:
                self.tiles[y].fill(EMPTY_TILE)
                if not full:
                    self.tiles[y + removed] = row
        if removed:
            logger.debug("removed %d full rows", removed)
        return removed

    def is_empty(self) -> bool:
        return bool(np.all(self.tiles == EMPTY_TILE))

    def rows(self) -> List[List[Optional[str]]]:
        return [[str(t) or None for t in row] for row in self.tiles]
