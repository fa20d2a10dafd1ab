from enum import Enum
from typing import NamedTuple

from aadupuli.board import Node, coord


class Role(Enum):
    """The two sides in the game."""

    TIGER = "tiger"
    GOAT = "goat"

    def opponent(self) -> "Role":
        """Return the opposing role."""
        return Role.GOAT if self == Role.TIGER else Role.TIGER


class MoveKind(Enum):
    """Whether a board move was a plain step or a capturing jump."""

    MOVE = "move"
    CAPTURE = "capture"


class Piece(NamedTuple):
    """A tiger or goat on the board."""

    id: int
    role: Role
    position: Node

    @property
    def coord(self) -> tuple[int, int]:
        """Display coordinate, always derived from the current position."""
        return coord(self.position)

    def moved_to(self, node: Node) -> "Piece":
        return self._replace(position=node)

    def __repr__(self) -> str:
        r = "T" if self.role == Role.TIGER else "G"
        return f"{r}{self.id}@{self.position}"


# Goats available to the goat side, placed one per turn
TOTAL_GOATS = 15

# Tigers start on these nodes, with ids 1, 2, 3
TIGER_START_NODES: tuple[Node, ...] = (2, 3, 5)

# Tigers win as soon as fewer goats than this remain on the board
MIN_GOATS_ON_BOARD = 4

# Goat ids are handed out from here upward and never reused
FIRST_GOAT_ID = len(TIGER_START_NODES) + 1
