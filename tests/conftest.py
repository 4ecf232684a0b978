from __future__ import annotations

import os
from typing import Iterable, Sequence

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

from falling_blocks.game import Game, GameConfig, Key  # noqa: E402


class ScriptedRng:
    """Hands out letters from a fixed script, cycling when it runs out."""

    def __init__(self, letters: Iterable[str]) -> None:
        self.letters = list(letters)
        self.calls = 0

    def choice(self, seq: Sequence[str]) -> str:
        letter = self.letters[self.calls % len(self.letters)]
        self.calls += 1
        assert letter in seq
        return letter


def make_game(letters: Iterable[str] = "O", **config) -> Game:
    return Game(GameConfig(**config), rng=ScriptedRng(letters))


def start_game(game: Game) -> Game:
    """Press SPACE and run until the first piece has spawned."""
    game.handle_key(Key.SPACE, True)
    game.update(0)
    game.update(0)
    assert game.falling_piece is not None
    return game


@pytest.fixture
def game() -> Game:
    return make_game()


@pytest.fixture
def running_game() -> Game:
    return start_game(make_game())
