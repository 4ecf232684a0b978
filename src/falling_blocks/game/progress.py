from __future__ import annotations

import logging


logger = logging.getLogger(__name__)


class Progress:
    """Level bookkeeping driven by cleared rows."""

    def __init__(self, levels_to_win: int = 60, rows_per_level: int = 10) -> None:
        if rows_per_level <= 0:
            raise ValueError("rows_per_level must be positive")
        if levels_to_win <= 0:
            raise ValueError("levels_to_win must be positive")
        self.levels_to_win = levels_to_win
        self.rows_per_level = rows_per_level
        self.level = 0
        self.level_progress = 0

    def add_rows(self, count: int) -> None:
        self.level_progress += count
        while self.level_progress >= self.rows_per_level:
            self.level_progress -= self.rows_per_level
            self.level += 1
            logger.info("reached level %d", self.level)

    @property
    def has_won(self) -> bool:
        return self.level >= self.levels_to_win
