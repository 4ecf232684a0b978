from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (10, 25, 50, 85)
    extra_row_score: int = 35

    def score_for_rows(self, rows: int, combo: int) -> int:
        """Score of one row-clear batch; `combo` counts this batch."""
        if rows <= 0:
            return 0
        if rows <= 4:
            base = self.line_clear_scores[rows - 1]
        else:
            base = self.line_clear_scores[-1] + (rows - 4) * self.extra_row_score
        return base * max(1, combo)
