from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, Optional, Set, Tuple

import pygame

from number_pair.game.grid import Coordinate
from number_pair.game.presenter import HighlightKind, Presenter

if TYPE_CHECKING:
    from number_pair.game.core import NumberPairGame


MATCH_FLASH_MS = 300

BACKGROUND = (10, 10, 14)
EMPTY_CELL = (20, 20, 26)
TILE = (52, 58, 72)
TEXT = (230, 230, 230)

HIGHLIGHT_COLORS: Dict[HighlightKind, Tuple[int, int, int]] = {
    HighlightKind.SELECTED: (240, 200, 40),
    HighlightKind.HINT: (70, 200, 120),
    HighlightKind.MATCHED: (240, 110, 90),
}


def _color_for_value(v: int) -> Tuple[int, int, int]:
    return EMPTY_CELL if v == 0 else TILE


class Renderer(Presenter):
    """pygame presentation layer. Tracks highlights pushed by the engine."""

    def __init__(self, cell_size: int = 48, margin: int = 20, side_panel: int = 220) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.side_panel = side_panel
        self.highlights: Dict[HighlightKind, Set[Coordinate]] = {kind: set() for kind in HighlightKind}
        self.flash_until = 0
        self.win_message: Optional[str] = None
        self._fonts: Dict[int, pygame.font.Font] = {}

    # Presenter interface

    def render(self, game: "NumberPairGame") -> None:
        if game.board.remaining() > 0:
            self.win_message = None

    def highlight(self, coords: Iterable[Coordinate], kind: HighlightKind) -> None:
        cells = self.highlights[kind]
        if kind != HighlightKind.MATCHED:
            cells.clear()
        cells.update(coords)
        if kind == HighlightKind.MATCHED:
            self.flash_until = pygame.time.get_ticks() + MATCH_FLASH_MS

    def clear_highlight(self, kind: HighlightKind) -> None:
        self.highlights[kind].clear()

    def announce_win(self, game: "NumberPairGame") -> None:
        self.win_message = f"You cleared the board in {game.format_elapsed()}!"

    # Geometry

    def window_size(self, board_size: int) -> Tuple[int, int]:
        board_px = board_size * self.cell_size
        return (self.margin * 3 + board_px + self.side_panel, self.margin * 2 + board_px)

    def cell_at(self, x: int, y: int, board_size: int) -> Optional[Coordinate]:
        col = (x - self.margin) // self.cell_size
        row = (y - self.margin) // self.cell_size
        if x < self.margin or y < self.margin:
            return None
        if 0 <= row < board_size and 0 <= col < board_size:
            return int(row), int(col)
        return None

    # Drawing

    def _get_font(self, size: Optional[int] = None) -> pygame.font.Font:
        size = size or int(self.cell_size * 0.7)
        if size not in self._fonts:
            self._fonts[size] = pygame.font.SysFont(None, size)
        return self._fonts[size]

    def _expire_flash(self) -> None:
        if self.highlights[HighlightKind.MATCHED] and pygame.time.get_ticks() >= self.flash_until:
            self.highlights[HighlightKind.MATCHED].clear()

    def _cell_outline(self, coord: Coordinate) -> Optional[Tuple[int, int, int]]:
        # Matched flash wins over selection, selection over hint
        for kind in (HighlightKind.MATCHED, HighlightKind.SELECTED, HighlightKind.HINT):
            if coord in self.highlights[kind]:
                return HIGHLIGHT_COLORS[kind]
        return None

    def draw_board(self, screen: pygame.Surface, game: "NumberPairGame") -> None:
        font = self._get_font()
        size = game.board.size
        for row in range(size):
            for col in range(size):
                v = game.board.get(row, col)
                rect = pygame.Rect(
                    self.margin + col * self.cell_size,
                    self.margin + row * self.cell_size,
                    self.cell_size - 2,
                    self.cell_size - 2,
                )
                pygame.draw.rect(screen, _color_for_value(v), rect)
                outline = self._cell_outline((row, col))
                if outline is not None:
                    pygame.draw.rect(screen, outline, rect, 3)
                if v:
                    img = font.render(str(v), True, TEXT)
                    screen.blit(img, img.get_rect(center=rect.center))

    def draw_panel(self, screen: pygame.Surface, game: "NumberPairGame") -> None:
        font = self._get_font(24)
        x = self.margin * 2 + game.board.size * self.cell_size
        y = self.margin
        on_off = {True: "on", False: "off"}
        lines = [
            f"Score: {game.score}",
            f"Moves: {game.moves}",
            f"Time: {game.format_elapsed()}",
            "",
            f"[1] Sum to ten: {on_off[game.rules.sum_enabled]}",
            f"[2] Equal values: {on_off[game.rules.equal_enabled]}",
            "",
            "N: new game",
            "U: undo",
            "H: hint",
            "S: shuffle",
            "Click: select / match",
        ]
        if game.is_stuck():
            lines += ["", "No moves left - shuffle!"]
        for i, txt in enumerate(lines):
            img = font.render(txt, True, TEXT)
            screen.blit(img, (x, y + i * 22))

    def draw(self, screen: pygame.Surface, game: "NumberPairGame") -> None:
        self._expire_flash()
        screen.fill(BACKGROUND)
        self.draw_board(screen, game)
        self.draw_panel(screen, game)
        if self.win_message:
            font = self._get_font(36)
            text = font.render(self.win_message, True, (255, 255, 255))
            screen.blit(text, text.get_rect(center=(screen.get_width() // 2, screen.get_height() // 2)))
        pygame.display.flip()
