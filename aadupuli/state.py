from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from aadupuli.board import Node, all_nodes
from aadupuli.types import FIRST_GOAT_ID, TIGER_START_NODES, Piece, Role


@dataclass(frozen=True)
class BoardState:
    """
    All pieces on the board at one point in time.

    The state is an immutable value: every modification returns a new
    BoardState and leaves the original untouched. Pieces keep the order in
    which they entered the board (tigers first, then goats by placement).
    At most one piece may occupy a node.
    """

    pieces: tuple[Piece, ...] = ()
    next_piece_id: int = FIRST_GOAT_ID

    def __post_init__(self) -> None:
        positions = [p.position for p in self.pieces]
        assert len(positions) == len(set(positions)), f"Two pieces on one node: {positions}"

    @classmethod
    def from_pieces(cls, pieces: Iterable[Piece]) -> BoardState:
        """Build a state from explicit pieces; the next id follows the highest one in use."""
        pieces = tuple(pieces)
        next_id = max([FIRST_GOAT_ID - 1, *(p.id for p in pieces)]) + 1
        return cls(pieces=pieces, next_piece_id=next_id)

    # --- Board access ---

    def occupied(self) -> frozenset[Node]:
        """Nodes that hold a piece."""
        return frozenset(p.position for p in self.pieces)

    def is_empty(self, node: Node) -> bool:
        return node not in self.occupied()

    def empty_nodes(self) -> list[Node]:
        """Unoccupied nodes, ascending."""
        occupied = self.occupied()
        return [n for n in all_nodes() if n not in occupied]

    def piece_at(self, node: Node) -> Piece | None:
        """The piece on a node, or None if empty."""
        for piece in self.pieces:
            if piece.position == node:
                return piece
        return None

    def get_piece(self, piece_id: int) -> Piece | None:
        for piece in self.pieces:
            if piece.id == piece_id:
                return piece
        return None

    def pieces_of(self, role: Role) -> list[Piece]:
        return [p for p in self.pieces if p.role == role]

    def tigers(self) -> list[Piece]:
        return self.pieces_of(Role.TIGER)

    def goats(self) -> list[Piece]:
        return self.pieces_of(Role.GOAT)

    def goat_count(self) -> int:
        return len(self.goats())

    # --- Board modification (each returns a new state) ---

    def with_piece_moved(self, piece_id: int, node: Node) -> BoardState:
        """Relocate one piece."""
        pieces = tuple(p.moved_to(node) if p.id == piece_id else p for p in self.pieces)
        return BoardState(pieces=pieces, next_piece_id=self.next_piece_id)

    def without_piece(self, piece_id: int) -> BoardState:
        """Remove one piece permanently."""
        pieces = tuple(p for p in self.pieces if p.id != piece_id)
        return BoardState(pieces=pieces, next_piece_id=self.next_piece_id)

    def with_new_piece(self, role: Role, node: Node) -> BoardState:
        """Add a piece with the next unused id."""
        piece = Piece(self.next_piece_id, role, node)
        return BoardState(pieces=self.pieces + (piece,), next_piece_id=self.next_piece_id + 1)

    # --- Display ---

    def __repr__(self) -> str:
        """Text listing of the board, one row per node that has a piece."""
        lines = [f"Goats on board: {self.goat_count()}"]
        for piece in sorted(self.pieces, key=lambda p: p.position):
            lines.append(f"  {piece.position:>2}: {piece!r}")
        return "\n".join(lines)


def initial_state() -> BoardState:
    """Three tigers on their starting nodes, no goats."""
    tigers = tuple(
        Piece(i, Role.TIGER, node) for i, node in enumerate(TIGER_START_NODES, start=1)
    )
    return BoardState(pieces=tigers, next_piece_id=FIRST_GOAT_ID)
