from __future__ import annotations

from typing import Optional, Tuple

import pygame

from stackfall.game import BoardSnapshot, GameState, color_for_value


BORDER_COLOR = (255, 255, 255)
SCREEN_COLOR = (77, 77, 77)
TEXT_COLOR = (255, 255, 255)
BORDER = 3


class Renderer:
    def __init__(self, cell_size: int = 16, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self._font: Optional[pygame.font.Font] = None

    def board_size(self, snapshot: BoardSnapshot) -> Tuple[int, int]:
        h, w = snapshot.cells.shape
        return w * self.cell_size, h * self.cell_size

    def window_size(self, snapshot: BoardSnapshot) -> Tuple[int, int]:
        bw, bh = self.board_size(snapshot)
        side_panel_w = 8 * self.cell_size
        return bw + side_panel_w + self.margin * 3, bh + self.margin * 2

    def _block_rect(self, x: int, y: int) -> pygame.Rect:
        return pygame.Rect(x * self.cell_size, y * self.cell_size, self.cell_size - 1, self.cell_size - 1)

    def _grid_surface(self, snapshot: BoardSnapshot) -> pygame.Surface:
        bw, bh = self.board_size(snapshot)
        surf = pygame.Surface((bw + BORDER * 2, bh + BORDER * 2))
        surf.fill(BORDER_COLOR)
        board = surf.subsurface(pygame.Rect(BORDER, BORDER, bw, bh))
        board.fill(color_for_value(0))

        piece = snapshot.active_piece
        if piece is not None:
            px, py = piece.position
            for dx, dy in piece.blocks:
                pygame.draw.rect(board, color_for_value(piece.color), self._block_rect(px + dx, py + dy))

        h, w = snapshot.cells.shape
        for y in range(h):
            for x in range(w):
                v = int(snapshot.cells[y, x])
                if v:
                    pygame.draw.rect(board, color_for_value(v), self._block_rect(x, y))
        return surf

    def _draw_panel(self, screen: pygame.Surface, snapshot: BoardSnapshot, left: int) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 24)
        lines = [
            f"Score: {snapshot.score}",
            f"Level: {snapshot.level}",
            f"Lines: {snapshot.lines_cleared_total}",
        ]
        if snapshot.state is GameState.EMPTY:
            lines.append("Enter: new piece")
        elif snapshot.state is GameState.GAME_OVER:
            lines.append("Game over, R to restart")
        for i, text in enumerate(lines):
            screen.blit(self._font.render(text, True, TEXT_COLOR), (left, self.margin + i * 28))

    def draw(self, screen: pygame.Surface, snapshot: BoardSnapshot) -> None:
        grid_surf = self._grid_surface(snapshot)
        screen.fill(SCREEN_COLOR)
        screen.blit(grid_surf, (self.margin - BORDER, self.margin - BORDER))
        self._draw_panel(screen, snapshot, self.margin * 2 + self.board_size(snapshot)[0])
        pygame.display.flip()
