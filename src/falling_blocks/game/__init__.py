"""Game module for Falling Blocks.

Exports the core game engine and supporting classes:
- Pos, Shape: Cell offsets and piece geometry with rotation
- Board: Tile grid and full-row clearing
- Piece: Falling piece value with movement and rotation
- Progress: Level bookkeeping driven by cleared rows
- Timer, Clock: Elapsed time accumulation for drop ticks
- ScoringRules: Combo-based row clear scoring
- Game: Main state machine, key handling and update step
"""

from .geometry import LETTERS, Pos, Shape, build_shape_table
from .board import Board
from .pieces import Piece
from .progress import Progress
from .timing import Timer, Clock
from .rules import ScoringRules
from .core import Game, GameConfig, GameState, Key

__all__ = [
    "LETTERS",
    "Pos",
    "Shape",
    "build_shape_table",
    "Board",
    "Piece",
    "Progress",
    "Timer",
    "Clock",
    "ScoringRules",
    "Game",
    "GameConfig",
    "GameState",
    "Key",
]
