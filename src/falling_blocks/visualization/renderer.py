from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

import pygame

from falling_blocks.game import Game, GameState, Piece, Pos
from falling_blocks.game.geometry import LETTERS


Color = Tuple[int, int, int]

PALETTE = {
    "I": (0, 240, 240),
    "J": (0, 0, 240),
    "L": (240, 160, 0),
    "O": (240, 240, 0),
    "S": (0, 240, 0),
    "T": (160, 0, 240),
    "Z": (240, 0, 0),
}
GHOST_COLOR: Color = (0, 0, 80)
BACKGROUND: Color = (0, 0, 20)
EMPTY_COLOR: Color = (20, 20, 26)
TEXT_COLOR: Color = (230, 230, 230)
BANNER_COLOR: Color = (0, 150, 150)
GAME_OVER_COLOR: Color = (150, 0, 0)

BANNERS = {
    GameState.NOT_STARTED: ("Press SPACE", BANNER_COLOR),
    GameState.PAUSED: ("Press P", BANNER_COLOR),
    GameState.GAME_OVER: ("Game Over - Press R", GAME_OVER_COLOR),
}


def color_for_letter(letter: Optional[str]) -> Color:
    if letter is None:
        return EMPTY_COLOR
    return PALETTE.get(letter, (200, 200, 200))


def landing_piece(game: Game) -> Optional[Piece]:
    """Where the falling piece would lock after a hard drop, without moving it."""
    piece = game.falling_piece
    if piece is None:
        return None
    while True:
        lower = piece.moved(Pos(0, 1))
        if game.piece_collides(lower):
            return piece
        piece = lower


def panel_lines(game: Game) -> List[str]:
    return [
        f"Score: {game.score}",
        f"Rows: {game.rows_cleared}",
        f"Level: {game.level}",
        f"Next: {game.next_letter or '-'}",
    ]


class Renderer:
    def __init__(self, cell_size: int = 32, margin: int = 16, panel_cells: int = 6) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_cells = panel_cells

    def window_size(self, game: Game) -> Tuple[int, int]:
        board_w = game.board.width * self.cell_size
        board_h = game.board.height * self.cell_size
        panel_w = self.panel_cells * self.cell_size
        return self.margin * 3 + board_w + panel_w, self.margin * 2 + board_h

    def _cell_rect(self, x: int, y: int, x0: int = 0, y0: int = 0) -> pygame.Rect:
        return pygame.Rect(
            x0 + x * self.cell_size,
            y0 + y * self.cell_size,
            self.cell_size - 1,
            self.cell_size - 1,
        )

    def _draw_cells(self, surf: pygame.Surface, cells: Iterable[Pos], color: Color, width: int = 0) -> None:
        for pos in cells:
            pygame.draw.rect(surf, color, self._cell_rect(pos.x, pos.y, self.margin, self.margin), width)

    def draw_board(self, surf: pygame.Surface, game: Game) -> None:
        board = game.board
        for y in range(board.height):
            for x in range(board.width):
                color = color_for_letter(board.get_tile(Pos(x, y)))
                pygame.draw.rect(surf, color, self._cell_rect(x, y, self.margin, self.margin))

    def draw_pieces(self, surf: pygame.Surface, game: Game) -> None:
        piece = game.falling_piece
        if piece is None or game.state == GameState.PAUSED:
            return
        ghost = landing_piece(game)
        if ghost is not None and ghost != piece:
            self._draw_cells(surf, ghost.tiles(game.shapes), GHOST_COLOR)
        cells = [pos for pos in game.falling_tiles() if game.board.contains(pos)]
        self._draw_cells(surf, cells, color_for_letter(piece.letter))

    def draw_panel(self, surf: pygame.Surface, game: Game, font: Optional[pygame.font.Font]) -> None:
        x0 = self.margin * 2 + game.board.width * self.cell_size
        y0 = self.margin
        if game.next_letter is not None:
            preview = game.shapes[game.next_letter].at(Pos(2, 2))
            for pos in preview:
                pygame.draw.rect(surf, color_for_letter(game.next_letter), self._cell_rect(pos.x, pos.y, x0, y0))
        if font is None:
            return
        y_text = y0 + 5 * self.cell_size
        for i, txt in enumerate(panel_lines(game)):
            img = font.render(txt, True, TEXT_COLOR)
            surf.blit(img, (x0, y_text + i * 24))
        banner = BANNERS.get(game.state)
        if banner is not None:
            text, color = banner
            img = font.render(text, True, color)
            board_w = game.board.width * self.cell_size
            rect = img.get_rect(center=(self.margin + board_w // 2, surf.get_height() // 3))
            surf.blit(img, rect)

    def draw(self, surf: pygame.Surface, game: Game, font: Optional[pygame.font.Font] = None) -> None:
        surf.fill(BACKGROUND)
        self.draw_board(surf, game)
        self.draw_pieces(surf, game)
        self.draw_panel(surf, game, font)


def letter_palette() -> Tuple[Color, ...]:
    """Colors indexed like `Game.get_state()` values (0 = empty)."""
    return (EMPTY_COLOR,) + tuple(PALETTE[letter] for letter in LETTERS)
