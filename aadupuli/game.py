from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable

from aadupuli.board import Node, is_valid_node
from aadupuli.moves import Move, find_capture, generate_moves, is_legal, legal_targets
from aadupuli.state import BoardState, initial_state
from aadupuli.types import MIN_GOATS_ON_BOARD, TOTAL_GOATS, MoveKind, Piece, Role

logger = logging.getLogger(__name__)


class GameResult(Enum):
    """Possible game outcomes."""

    ONGOING = "ongoing"
    TIGER_WINS = "tiger_wins"
    GOAT_WINS = "goat_wins"

    @property
    def winning_role(self) -> Role | None:
        if self == GameResult.TIGER_WINS:
            return Role.TIGER
        if self == GameResult.GOAT_WINS:
            return Role.GOAT
        return None


@dataclass(frozen=True)
class LastMove:
    """The most recent board move, kept for highlighting only."""

    from_node: Node
    to_node: Node
    kind: MoveKind
    role: Role
    timestamp: float


@dataclass(frozen=True)
class Phase:
    """Turn bookkeeping: goats placed so far, side to play, and the outcome."""

    goats_placed: int = 0
    turn: Role = Role.GOAT
    result: GameResult = GameResult.ONGOING

    @property
    def goats_to_place(self) -> int:
        return TOTAL_GOATS - self.goats_placed

    @property
    def is_placing(self) -> bool:
        """True while the goat side must place instead of moving."""
        return self.turn == Role.GOAT and self.goats_to_place > 0

    @property
    def is_over(self) -> bool:
        return self.result != GameResult.ONGOING


@dataclass
class MoveResult:
    """Result of a placement or move."""

    new_state: BoardState
    game_result: GameResult
    last_move: LastMove | None = None  # None for placements
    captured: Piece | None = None


# --- Rules ---


def apply_move(
    piece: Piece,
    destination: Node,
    state: BoardState,
    clock: Callable[[], float] = time.time,
) -> tuple[BoardState, LastMove]:
    """
    Move a piece and resolve a capture.

    The destination must come from legal_targets for this piece; legality is
    not checked again here beyond the board invariants.

    Returns the new state and the record of the move.
    """
    assert is_valid_node(destination), f"Unknown node: {destination}"
    assert state.is_empty(destination), f"Node {destination} is occupied"
    assert state.get_piece(piece.id) == piece, f"{piece!r} is not on the board"

    captured = find_capture(piece, destination, state)

    new_state = state.with_piece_moved(piece.id, destination)
    if captured is not None:
        new_state = new_state.without_piece(captured.id)

    record = LastMove(
        from_node=piece.position,
        to_node=destination,
        kind=MoveKind.CAPTURE if captured is not None else MoveKind.MOVE,
        role=piece.role,
        timestamp=clock(),
    )
    return new_state, record


def place_goat(node: Node, state: BoardState) -> BoardState:
    """Put a new goat on an empty node."""
    assert is_valid_node(node), f"Unknown node: {node}"
    assert state.is_empty(node), f"Node {node} is occupied"
    return state.with_new_piece(Role.GOAT, node)


def tigers_blocked(state: BoardState, goats_to_place: int = 0) -> bool:
    """True if no tiger on the board has anywhere to go."""
    return all(not legal_targets(t, state, goats_to_place) for t in state.tigers())


def evaluate(state: BoardState, goats_placed: int) -> GameResult:
    """
    Decide whether the game has ended.

    Tigers win once fewer than four goats remain on the board, whatever the
    tigers' mobility. Otherwise goats win when every tiger is immobilized.
    """
    if state.goat_count() < MIN_GOATS_ON_BOARD:
        return GameResult.TIGER_WINS
    if tigers_blocked(state, TOTAL_GOATS - goats_placed):
        return GameResult.GOAT_WINS
    return GameResult.ONGOING


# --- Turn controller ---


Chooser = Callable[[list[Move]], "Move | None"]


@dataclass
class Game:
    """
    Manages a game of Aadu Puli Aattam.

    Owns the current board and phase, replaces them after every accepted
    action, and rejects anything out of turn or illegal as a no-op (the
    action methods return None and nothing changes).

    ``ai_role`` names the side played by an automated player: input for that
    side through place/move/click is ignored and only play_automated acts
    for it.
    """

    state: BoardState = field(default_factory=initial_state)
    phase: Phase = field(default_factory=Phase)
    ai_role: Role | None = None
    clock: Callable[[], float] = time.time
    last_move: LastMove | None = None
    selected: int | None = None  # id of the piece picked by click()
    valid_targets: frozenset[Node] = frozenset()

    @property
    def result(self) -> GameResult:
        return self.phase.result

    @property
    def turn(self) -> Role:
        return self.phase.turn

    @property
    def goats_placed(self) -> int:
        return self.phase.goats_placed

    @property
    def goats_to_place(self) -> int:
        return self.phase.goats_to_place

    def is_over(self) -> bool:
        """Check if the game is over."""
        return self.phase.is_over

    # --- Queries ---

    def targets_for(self, node: Node) -> frozenset[Node]:
        """Legal targets of the piece on a node (empty if there is none)."""
        if not is_valid_node(node):
            return frozenset()
        piece = self.state.piece_at(node)
        if piece is None:
            return frozenset()
        return legal_targets(piece, self.state, self.goats_to_place)

    def get_legal_moves(self) -> list[Move]:
        """Get all legal moves for the side to play."""
        if self.is_over():
            return []
        return generate_moves(self.state, self.turn, self.goats_to_place)

    def status_text(self) -> str:
        winner = self.result.winning_role
        if winner is not None:
            return f"{'Goats' if winner == Role.GOAT else 'Tigers'} win!"
        if self.phase.is_placing:
            return f"Place goat ({self.goats_placed + 1}/{TOTAL_GOATS})"
        return f"Turn: {self.turn.value}"

    # --- Actions ---

    def place(self, node: Node) -> MoveResult | None:
        """Place a goat for the human side."""
        if not self._accepts_input(Role.GOAT):
            return None
        return self._place(node)

    def move(self, from_node: Node, to_node: Node) -> MoveResult | None:
        """Move the piece on ``from_node`` for the human side."""
        if not self._accepts_input(self.turn):
            return None
        return self._move(from_node, to_node)

    def select(self, node: Node) -> bool:
        """
        Pick the piece on a node and remember its legal targets.

        Only pieces of the side to play can be picked, and goats cannot be
        picked while they are still being placed.
        """
        if not self._accepts_input(self.turn) or self.phase.is_placing:
            return False
        piece = self.state.piece_at(node) if is_valid_node(node) else None
        if piece is None or piece.role != self.turn:
            logger.debug("Ignoring selection of node %s for %s", node, self.turn.value)
            return False
        self.selected = piece.id
        self.valid_targets = legal_targets(piece, self.state, self.goats_to_place)
        return True

    def clear_selection(self) -> None:
        self.selected = None
        self.valid_targets = frozenset()

    def click(self, node: Node) -> MoveResult | None:
        """
        Handle a click on a node.

        During goat placement a click on an empty node places a goat. Otherwise
        the first click picks one of the mover's pieces and the second click
        moves it, if the node is one of its legal targets. Any other second
        click drops the selection.
        """
        if not self._accepts_input(self.turn):
            return None

        if self.phase.is_placing:
            return self._place(node)

        if self.selected is None:
            self.select(node)
            return None

        if node not in self.valid_targets:
            logger.debug("Node %s is not a legal target, dropping selection", node)
            self.clear_selection()
            return None

        piece = self.state.get_piece(self.selected)
        assert piece is not None
        return self._move(piece.position, node)

    def play_automated(self, choose: Chooser) -> MoveResult | None:
        """
        Let a move-selection callback act for the side to play.

        ``choose`` gets the legal moves and returns one of them, or None to
        pass on the decision. A choice that is not legal for the side to play
        is ignored.
        """
        moves = self.get_legal_moves()
        if not moves:
            return None
        move = choose(moves)
        if move is None or move.role != self.turn or not is_legal(move, self.state, self.goats_to_place):
            logger.debug("Automated player chose %r, ignoring", move)
            return None
        if move.is_placement:
            return self._place(move.to_node)
        assert move.from_node is not None
        return self._move(move.from_node, move.to_node)

    def restart(self) -> None:
        """Discard the game and set up the initial board. The automated role is kept."""
        self.state = initial_state()
        self.phase = Phase()
        self.last_move = None
        self.clear_selection()
        logger.info("Game restarted")

    # --- Internals ---

    def _accepts_input(self, role: Role) -> bool:
        if self.is_over():
            logger.debug("Game is already over, ignoring input")
            return False
        if role != self.turn:
            logger.debug("Not %s's turn", role.value)
            return False
        if role == self.ai_role:
            logger.debug("%s is played automatically, ignoring input", role.value)
            return False
        return True

    def _place(self, node: Node) -> MoveResult | None:
        if self.is_over() or not self.phase.is_placing:
            return None
        if not is_valid_node(node) or not self.state.is_empty(node):
            logger.debug("Cannot place a goat on node %s", node)
            return None

        new_state = place_goat(node, self.state)
        phase = replace(self.phase, goats_placed=self.goats_placed + 1, turn=Role.TIGER)

        # A placement can shut in the last free tiger
        if tigers_blocked(new_state, phase.goats_to_place):
            phase = replace(phase, result=GameResult.GOAT_WINS)

        return self._commit(new_state, phase, None, None)

    def _move(self, from_node: Node, to_node: Node) -> MoveResult | None:
        if self.is_over() or self.phase.is_placing:
            return None
        piece = self.state.piece_at(from_node) if is_valid_node(from_node) else None
        if piece is None or piece.role != self.turn:
            logger.debug("No %s on node %s", self.turn.value, from_node)
            return None
        if to_node not in legal_targets(piece, self.state, self.goats_to_place):
            logger.debug("Illegal move %s -> %s", from_node, to_node)
            return None

        captured = find_capture(piece, to_node, self.state)
        new_state, record = apply_move(piece, to_node, self.state, self.clock)

        result = evaluate(new_state, self.goats_placed)
        if result == GameResult.ONGOING:
            phase = replace(self.phase, turn=self.turn.opponent())
        else:
            phase = replace(self.phase, result=result)

        return self._commit(new_state, phase, record, captured)

    def _commit(
        self,
        new_state: BoardState,
        phase: Phase,
        record: LastMove | None,
        captured: Piece | None,
    ) -> MoveResult:
        self.state = new_state
        self.phase = phase
        if record is not None:
            self.last_move = record
        self.clear_selection()
        if phase.is_over:
            logger.info("Game over: %s", phase.result.value)
        return MoveResult(
            new_state=new_state,
            game_result=phase.result,
            last_move=record,
            captured=captured,
        )

    def __repr__(self) -> str:
        return f"Game(result={self.result.value}, turn={self.turn.value})\n{self.state!r}"


def play_move(state: BoardState, phase: Phase, move: Move) -> tuple[BoardState, Phase]:
    """
    Functional interface: apply a move to a state and phase and return both updated.

    Illegal moves leave them unchanged.
    """
    game = Game(state=state, phase=phase)
    game.play_automated(lambda moves: move)
    return game.state, game.phase
