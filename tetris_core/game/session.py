"""
Game session: the state machine driven by the input dispatcher and the
gravity timer.

The session state is a frozen GameState. Every transition is a plain
function that takes the current state and returns a new one (or the very
same object when nothing changes), so a renderer reading the state never
sees a half-applied update.

Phases:

    SPAWNING -> FALLING <-> PAUSED
    FALLING  -> LOCKING -> SPAWNING | GAME_OVER (via spawn)
    GAME_OVER is terminal until restart.

Lock and spawn are separate reactions. GameSession applies them once each
after a command's own transition, in _settle().
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import Callable

import numpy as np

from tetris_core.game.board import Board
from tetris_core.game.controller import (
    ActivePiece,
    hard_drop_offset,
    piece_cells,
    spawn,
    try_move,
    try_rotate,
)
from tetris_core.game.randomizer import PieceSource


class Phase(enum.Enum):
    """Explicit lifecycle phase of a session."""
    SPAWNING = "spawning"
    FALLING = "falling"
    LOCKING = "locking"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class Command(enum.IntEnum):
    """Discrete input commands accepted from the UI dispatcher."""
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    SOFT_DROP = 2
    ROTATE = 3
    HARD_DROP = 4
    TOGGLE_PAUSE = 5
    RESTART = 6


# Points per lock, indexed by lines cleared (0-4), multiplied by level.
SCORE_TABLE: list[int] = [0, 40, 100, 300, 1200]

LINES_PER_LEVEL = 10

# Commands that act on the active piece, mapped to GameSession method names.
_PIECE_COMMANDS: dict[Command, str] = {
    Command.MOVE_LEFT: "move_left",
    Command.MOVE_RIGHT: "move_right",
    Command.SOFT_DROP: "soft_drop",
    Command.ROTATE: "rotate",
    Command.HARD_DROP: "hard_drop",
}


def score_for_lines(lines_cleared: int, level: int) -> int:
    """Points for clearing `lines_cleared` rows in one lock at `level`."""
    return SCORE_TABLE[lines_cleared] * level


def level_for_lines(total_lines: int) -> int:
    """Level reached after clearing `total_lines` rows (starts at 1)."""
    return total_lines // LINES_PER_LEVEL + 1


def gravity_period(level: int, initial_period: float, speed_increment: float) -> float:
    """Milliseconds between gravity ticks at `level`."""
    return initial_period * speed_increment ** (level - 1)


@dataclass(frozen=True, eq=False)
class GameState:
    """Complete session state. Replaced as a whole by every transition.

    Attributes:
        board: Locked cells. Never mutated once published in a state.
        active: The falling piece, or None while spawning / after game over.
        next_kind: Kind that the next spawn will use.
        score: Accumulated points.
        level: Current level (starts at 1).
        lines: Total rows cleared.
        phase: Current lifecycle phase.
        spawned: Number of pieces spawned so far (serial of the last one).
    """
    board: Board
    active: ActivePiece | None
    next_kind: str
    score: int = 0
    level: int = 1
    lines: int = 0
    phase: Phase = Phase.SPAWNING
    spawned: int = 0

    @property
    def paused(self) -> bool:
        return self.phase is Phase.PAUSED

    @property
    def game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER


# =============================================================================
# Transitions
# =============================================================================

def new_game(cols: int, rows: int, next_kind: str) -> GameState:
    """Fresh state: empty board, no active piece, waiting for a spawn."""
    return GameState(board=Board(cols, rows), active=None, next_kind=next_kind)


def spawn_next(state: GameState, draw: Callable[[], str]) -> GameState:
    """SPAWNING -> FALLING with the held next kind, or GAME_OVER if blocked.

    Args:
        state: Current state.
        draw: Piece source; called once, only when the spawn fits, and its
            result becomes the new next_kind.
    """
    if state.phase is not Phase.SPAWNING:
        return state
    serial = state.spawned + 1
    piece = spawn(state.next_kind, state.board, serial)
    if piece is None:
        return replace(state, active=None, phase=Phase.GAME_OVER)
    return replace(
        state,
        active=piece,
        next_kind=draw(),
        phase=Phase.FALLING,
        spawned=serial,
    )


def gravity(state: GameState) -> GameState:
    """One gravity tick: fall one row, or start locking if blocked."""
    if state.phase is not Phase.FALLING:
        return state
    moved = try_move(state.active, state.board, 0, 1)
    if moved is None:
        return replace(state, phase=Phase.LOCKING)
    return replace(state, active=moved)


def shift(state: GameState, dx: int) -> GameState:
    """Move the active piece horizontally by dx columns."""
    if state.phase is not Phase.FALLING:
        return state
    moved = try_move(state.active, state.board, dx, 0)
    if moved is None:
        return state
    return replace(state, active=moved)


def soft_drop(state: GameState) -> GameState:
    """Move the active piece down one row. Never locks."""
    if state.phase is not Phase.FALLING:
        return state
    moved = try_move(state.active, state.board, 0, 1)
    if moved is None:
        return state
    return replace(state, active=moved)


def rotate(state: GameState) -> GameState:
    """Rotate the active piece clockwise if the rotated shape fits."""
    if state.phase is not Phase.FALLING:
        return state
    rotated = try_rotate(state.active, state.board)
    if rotated is None:
        return state
    return replace(state, active=rotated)


def hard_drop(state: GameState) -> GameState:
    """Move the active piece to its resting row and start locking."""
    if state.phase is not Phase.FALLING:
        return state
    offset = hard_drop_offset(state.active, state.board)
    dropped = replace(state.active, y=state.active.y + offset)
    return replace(state, active=dropped, phase=Phase.LOCKING)


def lock(state: GameState) -> GameState:
    """LOCKING -> SPAWNING: write the piece, clear rows, score and level up.

    The level is recomputed from the new line total first, and the clear is
    scored at that level.
    """
    if state.phase is not Phase.LOCKING or state.active is None:
        return state
    piece = state.active
    board = state.board.copy()
    board.lock(piece.shape, piece.origin, piece.kind_id)
    cleared = board.clear_full_rows()
    lines = state.lines + cleared
    level = level_for_lines(lines)
    return replace(
        state,
        board=board,
        active=None,
        score=state.score + score_for_lines(cleared, level),
        lines=lines,
        level=level,
        phase=Phase.SPAWNING,
    )


def toggle_pause(state: GameState) -> GameState:
    """FALLING <-> PAUSED. Ignored in every other phase."""
    if state.phase is Phase.FALLING:
        return replace(state, phase=Phase.PAUSED)
    if state.phase is Phase.PAUSED:
        return replace(state, phase=Phase.FALLING)
    return state


# =============================================================================
# Read-only view for the presentation layer
# =============================================================================

@dataclass(frozen=True, eq=False)
class GameView:
    """Snapshot the renderer draws from.

    Attributes:
        grid: Board cells with the active piece merged in (read-only copy).
        active_cells: (row, col) cells of the active piece inside the board.
        ghost_cells: (row, col) cells where a hard drop would land, empty when
            the piece is already resting or absent.
        next_kind: Kind shown in the preview box.
        period: Current gravity period in milliseconds.
    """
    grid: np.ndarray
    active_cells: tuple[tuple[int, int], ...]
    ghost_cells: tuple[tuple[int, int], ...]
    score: int
    level: int
    lines: int
    next_kind: str
    paused: bool
    game_over: bool
    phase: Phase
    period: float


def build_view(state: GameState, period: float) -> GameView:
    """Merge the active piece into a copy of the board grid."""
    board = state.board
    grid = board.get_grid()
    active_cells: tuple[tuple[int, int], ...] = ()
    ghost_cells: tuple[tuple[int, int], ...] = ()

    piece = state.active
    if piece is not None:
        active_cells = tuple(
            (r, c) for r, c in piece_cells(piece)
            if 0 <= r < board.height and 0 <= c < board.width
        )
        offset = hard_drop_offset(piece, board)
        if offset > 0:
            ghost_cells = tuple(
                (r, c) for r, c in piece_cells(piece, offset)
                if 0 <= r < board.height
            )
        for r, c in active_cells:
            grid[r, c] = piece.kind_id

    grid.setflags(write=False)
    return GameView(
        grid=grid,
        active_cells=active_cells,
        ghost_cells=ghost_cells,
        score=state.score,
        level=state.level,
        lines=state.lines,
        next_kind=state.next_kind,
        paused=state.paused,
        game_over=state.game_over,
        phase=state.phase,
        period=period,
    )


# =============================================================================
# Stateful facade
# =============================================================================

class GameSession:
    """Holds the current GameState and applies commands and ticks to it.

    Attributes:
        cols: Board width.
        rows: Board height.
        initial_period: Gravity period at level 1, in milliseconds.
        speed_increment: Factor applied to the period per level.
        source: Piece kind generator.
    """

    def __init__(
        self,
        cols: int = 10,
        rows: int = 20,
        initial_period: float = 1000.0,
        speed_increment: float = 0.9,
        seed: int | None = None,
        randomizer: str = "uniform",
    ) -> None:
        """Create a session and spawn its first piece.

        Raises:
            ValueError: If the board is smaller than 4x4, the period is not
                positive, the speed increment is not positive, or the
                randomizer name is unknown.
        """
        if cols < 4 or rows < 4:
            raise ValueError(f"Board must be at least 4x4, got {cols}x{rows}")
        if initial_period <= 0:
            raise ValueError(f"initial_period must be positive, got {initial_period}")
        if speed_increment <= 0:
            raise ValueError(f"speed_increment must be positive, got {speed_increment}")

        self.cols = cols
        self.rows = rows
        self.initial_period = float(initial_period)
        self.speed_increment = float(speed_increment)
        self.source = PieceSource(seed, randomizer)

        self._state = new_game(cols, rows, self.source.next())
        self._settle()

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def period(self) -> float:
        """Gravity period for the current level, in milliseconds."""
        return gravity_period(self._state.level, self.initial_period, self.speed_increment)

    def view(self) -> GameView:
        return build_view(self._state, self.period)

    def commit(self, base: GameState, new: GameState) -> bool:
        """Replace the state with `new` only if `base` is still current.

        Returns:
            True if the state was replaced, False if `base` is stale.
        """
        if base is not self._state:
            return False
        self._state = new
        return True

    # ── Commands ─────────────────────────────────────────────────────────

    def tick(self, serial: int | None = None) -> bool:
        """Gravity signal from the external timer."""
        return self._apply(gravity, serial=serial)

    def move_left(self, serial: int | None = None) -> bool:
        return self._apply(shift, -1, serial=serial)

    def move_right(self, serial: int | None = None) -> bool:
        return self._apply(shift, 1, serial=serial)

    def soft_drop(self, serial: int | None = None) -> bool:
        return self._apply(soft_drop, serial=serial)

    def rotate(self, serial: int | None = None) -> bool:
        return self._apply(rotate, serial=serial)

    def hard_drop(self, serial: int | None = None) -> bool:
        """Drop and lock in one command; the next piece spawns before return."""
        return self._apply(hard_drop, serial=serial)

    def toggle_pause(self) -> bool:
        return self._apply(toggle_pause)

    def restart(self) -> bool:
        """Reset to the state of a freshly constructed session."""
        self._state = new_game(self.cols, self.rows, self.source.next())
        self._settle()
        return True

    def dispatch(self, command: Command, serial: int | None = None) -> bool:
        """Route an input command to its operation.

        Args:
            command: The Command to apply.
            serial: If given, the command is ignored unless it matches the
                serial of the current active piece.

        Returns:
            True if the state changed.
        """
        if command == Command.TOGGLE_PAUSE:
            return self.toggle_pause()
        if command == Command.RESTART:
            return self.restart()
        handler = getattr(self, _PIECE_COMMANDS[command])
        return handler(serial=serial)

    # ── Internals ────────────────────────────────────────────────────────

    def _apply(
        self,
        transition: Callable[..., GameState],
        *args: int,
        serial: int | None = None,
    ) -> bool:
        base = self._state
        if serial is not None and (base.active is None or base.active.serial != serial):
            return False
        new = transition(base, *args)
        if new is base:
            return False
        self.commit(base, new)
        self._settle()
        return True

    def _settle(self) -> None:
        """Run the lock and spawn reactions, each at most once."""
        if self._state.phase is Phase.LOCKING:
            base = self._state
            self.commit(base, lock(base))
        if self._state.phase is Phase.SPAWNING:
            base = self._state
            self.commit(base, spawn_next(base, self.source.next))
