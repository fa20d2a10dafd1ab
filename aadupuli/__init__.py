# Rules engine for Aadu Puli Aattam (tigers and goats)

from aadupuli.game import (
    Game,
    GameResult,
    LastMove,
    MoveResult,
    Phase,
    apply_move,
    evaluate,
    place_goat,
    play_move,
)
from aadupuli.moves import Move, capture_targets, find_capture, generate_moves, legal_targets
from aadupuli.state import BoardState, initial_state
from aadupuli.types import MoveKind, Piece, Role

__all__ = [
    "BoardState",
    "Game",
    "GameResult",
    "LastMove",
    "Move",
    "MoveKind",
    "MoveResult",
    "Phase",
    "Piece",
    "Role",
    "apply_move",
    "capture_targets",
    "evaluate",
    "find_capture",
    "generate_moves",
    "initial_state",
    "legal_targets",
    "place_goat",
    "play_move",
]
