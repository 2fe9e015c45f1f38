"""
Pygame renderer for a game session.

Draws the board grid (locked cells plus the active piece), the ghost piece,
a next-piece preview, a sidebar with score / level / lines, and the pause
and game-over overlays. It only reads GameSession.view(); it never changes
game state.
"""

from __future__ import annotations

try:
    import pygame
except ImportError:
    pygame = None  # type: ignore[assignment]

from tetris_core.game.pieces import PIECE_COLORS, get_piece
from tetris_core.game.session import GameSession, GameView


# ── Color constants ───────────────────────────────────────────────────────
BACKGROUND_COLOR = (30, 30, 30)
GRID_LINE_COLOR = (60, 60, 60)
BORDER_COLOR = (200, 200, 200)
TEXT_COLOR = (255, 255, 255)
GHOST_ALPHA = 80  # transparency for ghost piece (0-255)
SIDEBAR_BG_COLOR = (20, 20, 20)
EMPTY_CELL_COLOR = (40, 40, 40)


class TetrisRenderer:
    """Pygame-based renderer for a GameSession.

    The window is divided into:
      - Left: board area (cell_size * cols) x (cell_size * rows)
      - Right: sidebar with next piece, score, level, lines

    Attributes:
        session: The GameSession being rendered.
        cell_size: Pixel size of each grid cell.
        board_pixel_width: Pixel width of the board area.
        board_pixel_height: Pixel height of the board area.
        sidebar_width: Pixel width of the sidebar.
        screen: Pygame display surface (created on first render).
    """

    SIDEBAR_WIDTH_CELLS: int = 7  # sidebar width in cell units

    def __init__(self, session: GameSession, cell_size: int = 30) -> None:
        """Initialize the renderer.

        Does NOT create the Pygame window yet; that happens on the first
        call to render().

        Args:
            session: The GameSession to render.
            cell_size: Size of each grid cell in pixels.
        """
        if pygame is None:
            raise ImportError("pygame is required for rendering. Install it: pip install pygame")

        self.session = session
        self.cell_size = cell_size

        self.board_pixel_width = cell_size * session.cols
        self.board_pixel_height = cell_size * session.rows
        self.sidebar_width = cell_size * self.SIDEBAR_WIDTH_CELLS
        self.window_width = self.board_pixel_width + self.sidebar_width
        self.window_height = self.board_pixel_height

        self.screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._initialized: bool = False

    def render(self, fps: int = 60) -> None:
        """Draw the current view to the screen.

        Args:
            fps: Target frames per second for the display clock.
        """
        if not self._initialized:
            self._init_pygame()

        view = self.session.view()
        self.screen.fill(BACKGROUND_COLOR)
        self._draw_board(view)
        self._draw_ghost_piece(view)
        self._draw_sidebar(view)

        pygame.draw.rect(
            self.screen,
            BORDER_COLOR,
            (0, 0, self.board_pixel_width, self.board_pixel_height),
            2,
        )

        if view.game_over:
            self._draw_overlay("GAME OVER", ["Press R to restart", "Press ESC to quit"], (255, 50, 50))
        elif view.paused:
            self._draw_overlay("PAUSED", ["Press P to resume"], TEXT_COLOR)

        pygame.display.flip()
        self._clock.tick(fps)

    def _init_pygame(self) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        pygame.display.set_caption("Tetris")
        self._clock = pygame.time.Clock()
        self._font = pygame.font.SysFont("monospace", 20)
        self._large_font = pygame.font.SysFont("monospace", 36, bold=True)
        self._small_font = pygame.font.SysFont("monospace", 18)
        self._initialized = True

    def _draw_cell(self, row: int, col: int, color: tuple[int, int, int]) -> None:
        x = col * self.cell_size
        y = row * self.cell_size
        pygame.draw.rect(self.screen, color, (x, y, self.cell_size, self.cell_size))
        # Slightly darker border for a 3D effect
        darker = tuple(max(0, c - 40) for c in color)
        pygame.draw.rect(self.screen, darker, (x, y, self.cell_size, self.cell_size), 1)

    def _draw_board(self, view: GameView) -> None:
        """Draw every cell of the merged grid plus grid lines."""
        rows, cols = view.grid.shape
        for row in range(rows):
            for col in range(cols):
                cell_value = int(view.grid[row, col])
                if cell_value != 0:
                    self._draw_cell(row, col, PIECE_COLORS.get(cell_value, (128, 128, 128)))
                else:
                    pygame.draw.rect(
                        self.screen,
                        EMPTY_CELL_COLOR,
                        (col * self.cell_size, row * self.cell_size, self.cell_size, self.cell_size),
                    )
                pygame.draw.rect(
                    self.screen,
                    GRID_LINE_COLOR,
                    (col * self.cell_size, row * self.cell_size, self.cell_size, self.cell_size),
                    1,
                )

    def _draw_ghost_piece(self, view: GameView) -> None:
        """Draw the landing preview with transparency."""
        if not view.ghost_cells or not view.active_cells:
            return

        row, col = view.active_cells[0]
        color = PIECE_COLORS[int(view.grid[row, col])]
        ghost_surface = pygame.Surface((self.cell_size, self.cell_size), pygame.SRCALPHA)
        ghost_surface.fill((*color, GHOST_ALPHA))

        for row, col in view.ghost_cells:
            if (row, col) in view.active_cells:
                continue
            x = col * self.cell_size
            y = row * self.cell_size
            self.screen.blit(ghost_surface, (x, y))
            pygame.draw.rect(self.screen, color, (x, y, self.cell_size, self.cell_size), 1)

    def _draw_sidebar(self, view: GameView) -> None:
        """Draw the sidebar with next piece, score, level, and lines."""
        sidebar_x = self.board_pixel_width
        pygame.draw.rect(
            self.screen,
            SIDEBAR_BG_COLOR,
            (sidebar_x, 0, self.sidebar_width, self.window_height),
        )
        pygame.draw.line(
            self.screen,
            BORDER_COLOR,
            (sidebar_x, 0),
            (sidebar_x, self.window_height),
            2,
        )

        x_left = sidebar_x + 15
        self._draw_piece_preview(view.next_kind, x_left, 20, "NEXT")

        text_y = 170
        for label, value in (("SCORE", view.score), ("LEVEL", view.level), ("LINES", view.lines)):
            self._draw_text(label, x_left, text_y)
            self._draw_text(str(value), x_left, text_y + 25)
            text_y += 65

    def _draw_piece_preview(self, kind: str, x_offset: int, y_offset: int, label: str) -> None:
        """Draw a small piece preview box.

        Args:
            kind: Piece kind to preview.
            x_offset: Pixel X position for the preview box.
            y_offset: Pixel Y position for the label.
            label: Text label drawn above the box.
        """
        preview_cell = self.cell_size * 2 // 3
        box_size = preview_cell * 5

        self._draw_text(label, x_offset, y_offset)

        box_y = y_offset + 25
        pygame.draw.rect(self.screen, EMPTY_CELL_COLOR, (x_offset, box_y, box_size, box_size))
        pygame.draw.rect(self.screen, BORDER_COLOR, (x_offset, box_y, box_size, box_size), 1)

        piece = get_piece(kind)
        shape = piece["shape"]
        color = piece["color"]
        rows, cols = shape.shape

        offset_x = x_offset + (box_size - cols * preview_cell) // 2
        offset_y = box_y + (box_size - rows * preview_cell) // 2

        for r in range(rows):
            for c in range(cols):
                if shape[r, c] != 0:
                    px = offset_x + c * preview_cell
                    py = offset_y + r * preview_cell
                    pygame.draw.rect(self.screen, color, (px, py, preview_cell, preview_cell))
                    darker = tuple(max(0, cv - 40) for cv in color)
                    pygame.draw.rect(self.screen, darker, (px, py, preview_cell, preview_cell), 1)

    def _draw_overlay(self, title: str, hints: list[str], title_color: tuple[int, int, int]) -> None:
        """Dim the board and print a title with hint lines under it."""
        overlay = pygame.Surface(
            (self.board_pixel_width, self.board_pixel_height), pygame.SRCALPHA
        )
        overlay.fill((0, 0, 0, 150))
        self.screen.blit(overlay, (0, 0))

        cx = self.board_pixel_width // 2
        cy = self.board_pixel_height // 2

        text_title = self._large_font.render(title, True, title_color)
        self.screen.blit(text_title, (cx - text_title.get_width() // 2, cy - 40))
        for i, hint in enumerate(hints):
            text = self._small_font.render(hint, True, TEXT_COLOR)
            self.screen.blit(text, (cx - text.get_width() // 2, cy + 10 + 30 * i))

    def _draw_text(self, text: str, x: int, y: int, color: tuple[int, int, int] = TEXT_COLOR) -> None:
        surface = self._font.render(text, True, color)
        self.screen.blit(surface, (x, y))

    def close(self) -> None:
        """Shut down Pygame and close the window."""
        if self._initialized:
            pygame.quit()
            self._initialized = False
