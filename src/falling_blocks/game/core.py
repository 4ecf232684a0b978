from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Optional, Tuple

import numpy as np

from .board import Board
from .geometry import LETTERS, Pos, build_shape_table
from .pieces import Piece
from .progress import Progress
from .rules import ScoringRules
from .timing import Millis, Timer


logger = logging.getLogger(__name__)


class GameState(Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class Key(IntEnum):
    ESCAPE = 0
    P = 1
    SPACE = 2
    UP = 3
    LEFT = 4
    DOWN = 5
    RIGHT = 6
    D = 7


MOVE_DELTAS = {
    Key.LEFT: Pos(-1, 0),
    Key.RIGHT: Pos(1, 0),
    Key.DOWN: Pos(0, 1),
}


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    levels_to_win: int = 60
    rows_per_level: int = 10
    base_interval_ms: int = 800
    spawn_x: int = 4
    spawn_y: int = 1
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"board must be non-empty, got {self.width}x{self.height}")
        if self.rows_per_level <= 0:
            raise ValueError("rows_per_level must be positive")
        if self.levels_to_win <= 0:
            raise ValueError("levels_to_win must be positive")


class Game:
    """Falling-block game state machine.

    The caller drives it with wall-clock deltas through `update` and with key
    edges through `handle_key`. Everything else is read-only state for a
    renderer: `board`, `falling_piece`, `next_letter`, `state`, `level`, `score`.

    `rng` is any object with a `choice(seq)` method; it defaults to a
    `random.Random` seeded from the config.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[Any] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)
        self.shapes = build_shape_table()
        self.board = Board(self.config.width, self.config.height)
        self.timer = Timer()
        self.reset()

    def reset(self) -> None:
        self.board.reset()
        self.timer.reset()
        self.progress = Progress(self.config.levels_to_win, self.config.rows_per_level)
        self.state = GameState.NOT_STARTED
        self.falling_piece: Optional[Piece] = None
        self.next_letter: Optional[str] = None
        self.score = 0
        self.combo = 0
        self.rows_cleared = 0

    # Read access

    @property
    def level(self) -> int:
        return self.progress.level

    @property
    def has_won(self) -> bool:
        return self.progress.has_won

    def falling_tiles(self) -> Tuple[Pos, ...]:
        if self.falling_piece is None:
            return ()
        return self.falling_piece.tiles(self.shapes)

    def piece_collides(self, piece: Piece) -> bool:
        return not self.board.is_free(piece.tiles(self.shapes))

    def time_between_moves(self) -> int:
        """Drop interval in ms, easing from the base interval down to 0."""
        progress = min(self.progress.level / self.progress.levels_to_win, 1.0)
        speedup = math.sin(progress * math.pi / 2)
        return int((1.0 - speedup) * self.config.base_interval_ms)

    def get_state(self) -> np.ndarray:
        """Board as letter indices (1..7), with the falling piece negated."""
        state = np.zeros((self.board.height, self.board.width), dtype=np.int8)
        for i, letter in enumerate(LETTERS, start=1):
            state[self.board.tiles == letter] = i
        if self.falling_piece is not None:
            value = LETTERS.index(self.falling_piece.letter) + 1
            for pos in self.falling_tiles():
                if self.board.contains(pos):
                    state[pos.y, pos.x] = -value
        return state

    # Input

    def handle_key(self, code: int, pressed: bool) -> None:
        if not pressed:
            return
        if code in (Key.ESCAPE, Key.P):
            if self.state == GameState.RUNNING:
                self._set_state(GameState.PAUSED)
            elif self.state == GameState.PAUSED:
                self._set_state(GameState.RUNNING)
        elif code == Key.SPACE:
            if self.state == GameState.NOT_STARTED:
                self._set_state(GameState.RUNNING)
        elif code == Key.UP:
            if self._controllable():
                self._try_replace(self.falling_piece.rotated_cw())
        elif code in MOVE_DELTAS:
            if self._controllable():
                self._try_replace(self.falling_piece.moved(MOVE_DELTAS[Key(code)]))
        elif code == Key.D:
            if self._controllable():
                self.hard_drop()

    def on_focus_changed(self, focused: bool) -> None:
        if not focused and self.state == GameState.RUNNING:
            self._set_state(GameState.PAUSED)

    # Simulation

    def update(self, elapsed: Millis) -> None:
        if self.state != GameState.RUNNING:
            return
        self.timer.advance(elapsed)

        while self.falling_piece is not None and self.timer.tick(self.time_between_moves()):
            if not self._try_replace(self.falling_piece.moved(Pos(0, 1))):
                self._lock_piece()

        if self.falling_piece is None and self.next_letter is not None:
            self._spawn_piece(self.next_letter)
            self.next_letter = None

        if self.next_letter is None:
            self.next_letter = self.rng.choice(LETTERS)

    def hard_drop(self) -> None:
        if self.falling_piece is None:
            return
        while self._try_replace(self.falling_piece.moved(Pos(0, 1))):
            pass
        self._lock_piece()

    def _controllable(self) -> bool:
        return self.state == GameState.RUNNING and self.falling_piece is not None

    def _try_replace(self, piece: Piece) -> bool:
        if self.piece_collides(piece):
            return False
        self.falling_piece = piece
        return True

    def _spawn_piece(self, letter: str) -> None:
        piece = Piece(letter, 0, Pos(self.config.spawn_x, self.config.spawn_y))
        self.falling_piece = piece
        self.timer.reset()
        if self.piece_collides(piece):
            self._set_state(GameState.GAME_OVER)

    def _lock_piece(self) -> None:
        assert self.falling_piece is not None
        piece = self.falling_piece
        for pos in piece.tiles(self.shapes):
            self.board.set_tile(pos, piece.letter)
        rows = self.board.remove_full_rows()
        self.progress.add_rows(rows)
        self.rows_cleared += rows
        self.combo = self.combo + 1 if rows > 0 else 0
        self.score += self.rules.score_for_rows(rows, self.combo)
        self.falling_piece = None

    def _set_state(self, state: GameState) -> None:
        logger.debug("game state %s -> %s", self.state.value, state.value)
        if state == GameState.GAME_OVER:
            logger.info("game over at level %d with score %d", self.level, self.score)
        self.state = state
