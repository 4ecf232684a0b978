from __future__ import annotations

import numpy as np
import pygame
import pytest

from falling_blocks.game import GameState, Key, Pos
from falling_blocks.visualization.renderer import (
    BACKGROUND,
    BANNERS,
    GHOST_COLOR,
    PALETTE,
    Renderer,
    color_for_letter,
    landing_piece,
    letter_palette,
    panel_lines,
)

from .conftest import make_game, start_game


def pixel(surf: pygame.Surface, renderer: Renderer, x: int, y: int):
    px = renderer.margin + x * renderer.cell_size + 2
    py = renderer.margin + y * renderer.cell_size + 2
    return tuple(surf.get_at((px, py)))[:3]


def test_landing_piece_on_empty_board(running_game):
    ghost = landing_piece(running_game)
    assert ghost.origin == Pos(4, 19)
    # the game itself is untouched
    assert running_game.falling_piece.origin == Pos(4, 1)
    assert running_game.board.is_empty()


def test_landing_piece_matches_hard_drop(running_game):
    running_game.board.set_tile(Pos(5, 12), "J")
    ghost = landing_piece(running_game)
    running_game.handle_key(Key.D, True)
    for pos in ghost.tiles(running_game.shapes):
        assert running_game.board.get_tile(pos) == "O"


def test_landing_piece_without_falling_piece(game):
    assert landing_piece(game) is None


def test_color_for_letter():
    assert color_for_letter("T") == PALETTE["T"]
    assert color_for_letter(None) != PALETTE["T"]
    assert len(letter_palette()) == 8


def test_draw_board_piece_and_ghost(running_game):
    renderer = Renderer(cell_size=10, margin=4)
    running_game.board.set_tile(Pos(0, 19), "I")
    surf = pygame.Surface(renderer.window_size(running_game))
    renderer.draw(surf, running_game)

    assert pixel(surf, renderer, 0, 19) == PALETTE["I"]
    assert pixel(surf, renderer, 4, 1) == PALETTE["O"]
    assert pixel(surf, renderer, 4, 19) == GHOST_COLOR
    assert tuple(surf.get_at((0, 0)))[:3] == BACKGROUND


def test_paused_game_hides_falling_piece(running_game):
    renderer = Renderer(cell_size=10, margin=4)
    running_game.handle_key(Key.P, True)
    assert running_game.state == GameState.PAUSED
    surf = pygame.Surface(renderer.window_size(running_game))
    renderer.draw(surf, running_game)
    assert pixel(surf, renderer, 4, 1) == color_for_letter(None)


@pytest.fixture
def font():
    pygame.font.init()
    yield pygame.font.Font(None, 20)
    pygame.font.quit()


def banner_band(renderer: Renderer, game, font):
    """Pixels of the board-side strip where the status banner is centred."""
    surf = pygame.Surface(renderer.window_size(game))
    renderer.draw(surf, game, font)
    panel_x = renderer.margin * 2 + game.board.width * renderer.cell_size
    cy = surf.get_height() // 3
    return pygame.surfarray.array3d(surf)[:panel_x, cy - 8 : cy + 8].copy()


def game_in_state(state: GameState):
    game = make_game("T")
    if state == GameState.NOT_STARTED:
        return game
    start_game(game)
    if state == GameState.PAUSED:
        game.handle_key(Key.P, True)
    elif state == GameState.GAME_OVER:
        while game.state != GameState.GAME_OVER:
            game.handle_key(Key.D, True)
            game.update(0)
    assert game.state == state
    return game


def test_panel_lines():
    game = start_game(make_game("TI"))
    assert panel_lines(game) == ["Score: 0", "Rows: 0", "Level: 0", "Next: I"]


def test_next_piece_preview_is_drawn():
    game = start_game(make_game("TL"))
    renderer = Renderer(cell_size=10, margin=4)
    surf = pygame.Surface(renderer.window_size(game))
    renderer.draw(surf, game)
    panel_x = renderer.margin * 2 + game.board.width * renderer.cell_size
    # the preview origin cell is part of every shape
    px = panel_x + 2 * renderer.cell_size + 2
    py = renderer.margin + 2 * renderer.cell_size + 2
    assert tuple(surf.get_at((px, py)))[:3] == PALETTE["L"]


@pytest.mark.parametrize("state", [GameState.NOT_STARTED, GameState.PAUSED, GameState.GAME_OVER])
def test_banner_drawn_for_state(font, state):
    renderer = Renderer(cell_size=10, margin=4)
    game = game_in_state(state)
    with_text = banner_band(renderer, game, font)
    without_text = banner_band(renderer, game, None)
    assert not np.array_equal(with_text, without_text)


def test_no_banner_while_running(font, running_game):
    renderer = Renderer(cell_size=10, margin=4)
    assert np.array_equal(banner_band(renderer, running_game, font), banner_band(renderer, running_game, None))


def test_banners_differ_between_states(font):
    renderer = Renderer(cell_size=10, margin=4)
    not_started = banner_band(renderer, game_in_state(GameState.NOT_STARTED), font)
    paused = banner_band(renderer, game_in_state(GameState.PAUSED), font)
    assert not np.array_equal(not_started, paused)
    assert "Press R" in BANNERS[GameState.GAME_OVER][0]
