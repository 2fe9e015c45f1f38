"""Game logic: piece catalog, board, piece controller, and session."""

from tetris_core.game.pieces import PIECE_TYPES, PIECE_KINDS
from tetris_core.game.board import Board, Position
from tetris_core.game.controller import ActivePiece
from tetris_core.game.session import Command, GameSession, GameState, GameView, Phase

__all__ = [
    "PIECE_TYPES",
    "PIECE_KINDS",
    "Board",
    "Position",
    "ActivePiece",
    "Command",
    "GameSession",
    "GameState",
    "GameView",
    "Phase",
]
