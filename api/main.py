"""FastAPI backend for Aadu Puli Aattam."""

import logging
from typing import Annotated, Literal

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from aadupuli import Game, GameResult, LastMove, Piece, Role
from aadupuli.board import NODE_COORDS, edges
from aadupuli.types import TOTAL_GOATS

logger = logging.getLogger(__name__)

CORS_ORIGINS = ["http://localhost:5173"]  # Vite dev server

app = FastAPI(title="Aadu Puli Aattam API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Game state ---

game = Game()


# --- Pydantic models for API ---

NodeId = Annotated[int, Field(ge=1, le=len(NODE_COORDS))]


class NodeModel(BaseModel):
    node: int
    x: int
    y: int


class BoardModel(BaseModel):
    nodes: list[NodeModel]
    edges: list[tuple[int, int]]  # directed (from, to)


class PieceModel(BaseModel):
    id: int
    role: str  # "tiger" or "goat"
    node: int
    x: int
    y: int


class LastMoveModel(BaseModel):
    from_node: int
    to_node: int
    kind: str  # "move" or "capture"
    role: str
    timestamp: float


class GameStateModel(BaseModel):
    pieces: list[PieceModel]
    turn: str
    goats_placed: int
    goats_to_place: int
    total_goats: int
    result: str  # "ongoing", "tiger_wins", "goat_wins"
    selected_node: int | None
    valid_targets: list[int]
    last_move: LastMoveModel | None
    ai_role: str | None
    status: str


class ClickModel(BaseModel):
    node: NodeId


class PlaceModel(BaseModel):
    node: NodeId


class MoveModel(BaseModel):
    from_node: NodeId
    to_node: NodeId


class AIRoleModel(BaseModel):
    role: Literal["tiger", "goat"] | None = None


class TargetsModel(BaseModel):
    node: int
    targets: list[int]


# --- Helper functions ---


def piece_to_model(piece: Piece) -> PieceModel:
    x, y = piece.coord
    return PieceModel(id=piece.id, role=piece.role.value, node=piece.position, x=x, y=y)


def last_move_to_model(last_move: LastMove | None) -> LastMoveModel | None:
    if last_move is None:
        return None
    return LastMoveModel(
        from_node=last_move.from_node,
        to_node=last_move.to_node,
        kind=last_move.kind.value,
        role=last_move.role.value,
        timestamp=last_move.timestamp,
    )


def game_to_model(current: Game) -> GameStateModel:
    """Convert the controller's state to the API model."""
    selected = current.state.get_piece(current.selected) if current.selected is not None else None
    return GameStateModel(
        pieces=[piece_to_model(p) for p in current.state.pieces],
        turn=current.turn.value,
        goats_placed=current.goats_placed,
        goats_to_place=current.goats_to_place,
        total_goats=TOTAL_GOATS,
        result=current.result.value,
        selected_node=selected.position if selected is not None else None,
        valid_targets=sorted(current.valid_targets),
        last_move=last_move_to_model(current.last_move),
        ai_role=current.ai_role.value if current.ai_role is not None else None,
        status=current.status_text(),
    )


def _rejection_detail() -> str:
    """Explain why the controller ignored an action."""
    if game.result != GameResult.ONGOING:
        return "Game is already over"
    if game.turn == game.ai_role:
        return f"The {game.turn.value} side is played automatically"
    return "Illegal move"


# --- API endpoints ---


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/board", response_model=BoardModel)
def get_board():
    """Node coordinates and edges for drawing the board."""
    return BoardModel(
        nodes=[NodeModel(node=n, x=x, y=y) for n, (x, y) in NODE_COORDS.items()],
        edges=list(edges()),
    )


@app.get("/game", response_model=GameStateModel)
def get_game():
    """Get current game state."""
    return game_to_model(game)


@app.get("/targets/{node}", response_model=TargetsModel)
def get_targets(node: int):
    """Legal targets of the piece on a node."""
    return TargetsModel(node=node, targets=sorted(game.targets_for(node)))


@app.post("/click", response_model=GameStateModel)
def click(data: ClickModel):
    """
    Click on a node, as on the board UI.

    Ignored clicks are not errors: the unchanged game is returned.
    """
    game.click(data.node)
    return game_to_model(game)


@app.post("/place", response_model=GameStateModel)
def place(data: PlaceModel):
    """Place a goat."""
    if game.place(data.node) is None:
        logger.debug("Rejected placement on %s", data.node)
        raise HTTPException(status_code=409, detail=_rejection_detail())
    return game_to_model(game)


@app.post("/move", response_model=GameStateModel)
def make_move(data: MoveModel):
    """Make a move."""
    if game.move(data.from_node, data.to_node) is None:
        logger.debug("Rejected move %s -> %s", data.from_node, data.to_node)
        raise HTTPException(status_code=409, detail=_rejection_detail())
    return game_to_model(game)


@app.post("/reset", response_model=GameStateModel)
def reset_game():
    """Reset to a new game."""
    game.restart()
    return game_to_model(game)


@app.post("/ai-role", response_model=GameStateModel)
def set_ai_role(data: AIRoleModel):
    """Choose which side, if any, is played automatically."""
    game.ai_role = Role(data.role) if data.role is not None else None
    game.clear_selection()
    return game_to_model(game)


@app.post("/ai-move", response_model=GameStateModel)
def ai_move():
    """
    Let the automated side play.

    There is no move-selection strategy: the first legal move is taken.
    """
    if game.is_over():
        raise HTTPException(status_code=409, detail="Game is already over")
    if game.ai_role is None or game.turn != game.ai_role:
        raise HTTPException(status_code=409, detail="It is not the automated side's turn")
    if game.play_automated(lambda moves: moves[0]) is None:
        logger.debug("Automated %s side has no move", game.turn.value)
        raise HTTPException(status_code=409, detail=f"The {game.turn.value} side has no legal move")
    return game_to_model(game)
