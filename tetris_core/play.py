"""
Manual play mode.

Wires the keyboard and a pygame gravity timer to a GameSession and draws it
with TetrisRenderer. This module is the input dispatcher and the timer for
the engine; all rules live in tetris_core.game.
"""

from __future__ import annotations

from typing import Any, Callable

try:
    import pygame
except ImportError:
    pygame = None  # type: ignore[assignment]

from tetris_core.game.session import Command, GameSession
from tetris_core.renderer import TetrisRenderer


# ── Keyboard mapping ─────────────────────────────────────────────────────
# Arrows / WASD / numpad-style digits for movement, Space or 5 for hard drop
KEY_MAP: dict[int, Command] = {}
if pygame is not None:
    KEY_MAP = {
        pygame.K_LEFT: Command.MOVE_LEFT,
        pygame.K_a: Command.MOVE_LEFT,
        pygame.K_7: Command.MOVE_LEFT,
        pygame.K_RIGHT: Command.MOVE_RIGHT,
        pygame.K_d: Command.MOVE_RIGHT,
        pygame.K_9: Command.MOVE_RIGHT,
        pygame.K_DOWN: Command.SOFT_DROP,
        pygame.K_s: Command.SOFT_DROP,
        pygame.K_UP: Command.ROTATE,
        pygame.K_w: Command.ROTATE,
        pygame.K_8: Command.ROTATE,
        pygame.K_SPACE: Command.HARD_DROP,
        pygame.K_5: Command.HARD_DROP,
        pygame.K_p: Command.TOGGLE_PAUSE,
        pygame.K_r: Command.RESTART,
    }


class GravityTimer:
    """Keeps exactly one periodic gravity event scheduled.

    The period comes from GameSession.period. Whenever it changes (level up
    or restart) the old timer is cancelled before the new one is started, so
    two timers never overlap.

    Attributes:
        event_type: Event id posted on every tick.
        period_ms: Currently scheduled period, or None when stopped.
    """

    def __init__(self, event_type: int, set_timer: Callable[[int, int], Any] | None = None) -> None:
        if set_timer is None:
            if pygame is None:
                raise ImportError("pygame is required for the gravity timer. Install it: pip install pygame")
            set_timer = pygame.time.set_timer
        self.event_type = event_type
        self.period_ms: int | None = None
        self._set_timer = set_timer

    def sync(self, period: float) -> bool:
        """Reschedule if `period` differs from the running one.

        Returns:
            True if the timer was (re)started.
        """
        period_ms = max(1, int(round(period)))
        if period_ms == self.period_ms:
            return False
        self.stop()
        self._set_timer(self.event_type, period_ms)
        self.period_ms = period_ms
        return True

    def stop(self) -> None:
        if self.period_ms is not None:
            self._set_timer(self.event_type, 0)
            self.period_ms = None


def play_manual(config: dict[str, Any]) -> None:
    """Run the game in manual (human) play mode.

    Controls:
      - Left/Right (A/D, 7/9): move piece
      - Down (S): soft drop
      - Up (W, 8): rotate clockwise
      - Space (5): hard drop
      - P: pause / resume
      - R: restart
      - Escape / close window: quit

    Each KEYDOWN event is dispatched exactly once; key repeat is left off so
    holding Space cannot hard-drop more than one piece.

    Args:
        config: Config dict loaded from game.yaml.
    """
    if pygame is None:
        raise ImportError("pygame is required for play mode. Install it: pip install pygame")

    session = GameSession(
        cols=config.get("cols", 10),
        rows=config.get("rows", 20),
        initial_period=config.get("initial_period_ms", 1000.0),
        speed_increment=config.get("speed_increment", 0.9),
        seed=config.get("seed"),
        randomizer=config.get("randomizer", "uniform"),
    )
    fps = config.get("fps", 60)
    renderer = TetrisRenderer(session, cell_size=config.get("cell_size", 30))
    # Force renderer init before the event loop (pygame must be initialized)
    renderer.render(fps)

    gravity_event = pygame.USEREVENT + 1
    timer = GravityTimer(gravity_event)
    timer.sync(session.period)

    level = session.state.level
    reported_game_over = False
    running = True

    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
                break
            if event.type == gravity_event:
                session.tick()
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                    break
                command = KEY_MAP.get(event.key)
                if command is None:
                    continue
                if session.state.game_over and command != Command.RESTART:
                    continue
                session.dispatch(command)

        if not running:
            break

        state = session.state
        if state.level != level:
            if state.level > level:
                print(f"Level {state.level} | Lines: {state.lines} | Period: {session.period:.0f} ms")
            level = state.level
        timer.sync(session.period)

        if state.game_over and not reported_game_over:
            print(f"Game over | Score: {state.score} | Lines: {state.lines} | Level: {state.level}")
        reported_game_over = state.game_over

        renderer.render(fps)

    timer.stop()
    renderer.close()
