from __future__ import annotations

from dataclasses import dataclass

from aadupuli.board import Node, neighbors
from aadupuli.state import BoardState
from aadupuli.types import Piece, Role


@dataclass(frozen=True)
class Move:
    """
    Represents an action by one side.

    A move is either:
    - Goat placement: from_node is None, a new goat enters at to_node
    - Board move: from_node is the moving piece's node

    Captures are not spelled out; they follow from the position (see find_capture).
    """

    role: Role
    to_node: Node
    from_node: Node | None = None  # None means placement

    @property
    def is_placement(self) -> bool:
        """True if this move places a new goat."""
        return self.from_node is None

    def __repr__(self) -> str:
        if self.is_placement:
            return f"Place goat -> {self.to_node}"
        return f"Move {self.role.value} {self.from_node} -> {self.to_node}"


def placement_targets(state: BoardState) -> frozenset[Node]:
    """Every empty node; placement is not restricted to any neighborhood."""
    return frozenset(state.empty_nodes())


def simple_targets(piece: Piece, state: BoardState) -> frozenset[Node]:
    """Empty neighbors of the piece's node."""
    occupied = state.occupied()
    return frozenset(n for n in neighbors(piece.position) if n not in occupied)


def capture_targets(piece: Piece, state: BoardState) -> dict[Node, Node]:
    """
    Capturing jumps available to a tiger, as landing node -> jumped node.

    The tiger jumps from its node over an adjacent goat at N to a node L, with
    both hops following graph edges, L empty and L not the tiger's own node.
    If two goats lead to the same landing, the first in adjacency order is kept.
    """
    if piece.role != Role.TIGER:
        return {}

    occupied = state.occupied()
    jumps: dict[Node, Node] = {}
    for over in neighbors(piece.position):
        target = state.piece_at(over)
        if target is None or target.role != Role.GOAT:
            continue
        for landing in neighbors(over):
            if landing == piece.position or landing in occupied:
                continue
            jumps.setdefault(landing, over)
    return jumps


def legal_targets(piece: Piece, state: BoardState, goats_to_place: int = 0) -> frozenset[Node]:
    """
    Nodes the piece may go to.

    Args:
        piece: The piece to move. During placement any goat (or a goat that is
               not yet on the board) stands for the goat about to be placed.
        state: Current board
        goats_to_place: Goats the goat side still has in hand. While positive,
                        goats place instead of moving.
    """
    if piece.role == Role.GOAT:
        if goats_to_place > 0:
            return placement_targets(state)
        return simple_targets(piece, state)
    return simple_targets(piece, state) | frozenset(capture_targets(piece, state))


def find_capture(piece: Piece, destination: Node, state: BoardState) -> Piece | None:
    """
    The goat captured if ``piece`` moves to ``destination``, or None.

    A move is a capture exactly when the destination is a capture landing for
    the piece, even if the destination is also a direct neighbor.
    """
    jumped = capture_targets(piece, state).get(destination)
    if jumped is None:
        return None
    return state.piece_at(jumped)


def generate_moves(state: BoardState, role: Role, goats_to_place: int = 0) -> list[Move]:
    """
    Generate all legal moves for one side.

    While the goat side still has goats in hand it can only place, so its
    moves are one placement per empty node.
    """
    if role == Role.GOAT and goats_to_place > 0:
        return [Move(role=role, to_node=n) for n in sorted(placement_targets(state))]

    moves: list[Move] = []
    for piece in state.pieces_of(role):
        for target in sorted(legal_targets(piece, state, goats_to_place)):
            moves.append(Move(role=role, to_node=target, from_node=piece.position))
    return moves


def is_legal(move: Move, state: BoardState, goats_to_place: int = 0) -> bool:
    """Check a single move against the current position."""
    return move in generate_moves(state, move.role, goats_to_place)

