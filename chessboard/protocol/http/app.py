from __future__ import annotations

import logging
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException, Response
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field

from .error import (
    exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from ...engine.game import Game
from ...engine.move import algebraic_to_square, format_square, parse_move
from .session import InMemorySessionStore


logger = logging.getLogger(__name__)


class CreateGameResponse(BaseModel):
    game_id: str
    fen: str


class SetPositionRequest(BaseModel):
    fen: str = Field(..., description="FEN string; only placement and side to move are used")


class MoveRequest(BaseModel):
    move: str = Field(..., description="Origin and destination squares, e.g. e2e4")


class SelectRequest(BaseModel):
    square: str = Field(..., description="Clicked square, e.g. e2")


class SquareMoves(BaseModel):
    square: str
    moves: List[str]


class GameState(BaseModel):
    game_id: str
    fen: str
    turn: str
    board: List[List[str]]
    flipped: bool
    selected: Optional[str]
    highlighted: List[str]
    legal_moves: Dict[str, List[str]]
    in_check: bool
    checkmate: bool
    winner: Optional[str]
    status: str
    last_move: Optional[str]
    move_history: List[str]


def create_app() -> FastAPI:
    app = FastAPI(title="Chessboard API", version="0.1.0")

    logging.basicConfig(level=logging.INFO)

    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, exception_handler)

    store = InMemorySessionStore()

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/games", response_model=CreateGameResponse)
    async def create_game() -> CreateGameResponse:
        game_id = store.create(Game.new())
        game = _require_game(store, game_id)
        logger.info("game created", extra={"game_id": game_id})
        return CreateGameResponse(game_id=game_id, fen=game.to_fen())

    @app.get("/api/games/{game_id}/state", response_model=GameState)
    async def get_state(game_id: str) -> GameState:
        return _state(game_id, _require_game(store, game_id))

    @app.post("/api/games/{game_id}/position", response_model=GameState)
    async def set_position(game_id: str, req: SetPositionRequest) -> GameState:
        _require_game(store, game_id)
        try:
            store.set(game_id, Game.from_fen(req.fen))
        except ValueError as e:
            raise HTTPException(status_code=400, detail=f"invalid FEN: {e}")
        return _state(game_id, _require_game(store, game_id))

    @app.get("/api/games/{game_id}/moves/{square}", response_model=SquareMoves)
    async def square_moves(game_id: str, square: str) -> SquareMoves:
        game = _require_game(store, game_id)
        try:
            sq = algebraic_to_square(square)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return SquareMoves(square=square, moves=[m.to_algebraic() for m in game.legal_moves(sq)])

    @app.post("/api/games/{game_id}/select", response_model=GameState)
    async def select(game_id: str, req: SelectRequest) -> GameState:
        game = _require_game(store, game_id)
        try:
            sq = algebraic_to_square(req.square)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        played = game.select(sq)
        if played is not None:
            _log_move(game_id, game, played)
        return _state(game_id, game)

    @app.post("/api/games/{game_id}/move", response_model=GameState)
    async def make_move(game_id: str, req: MoveRequest) -> GameState:
        game = _require_game(store, game_id)
        try:
            from_sq, to_sq = parse_move(req.move)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        try:
            played = game.apply_move(from_sq, to_sq)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        _log_move(game_id, game, played)
        return _state(game_id, game)

    @app.post("/api/games/{game_id}/undo", response_model=GameState)
    async def undo(game_id: str) -> GameState:
        game = _require_game(store, game_id)
        try:
            game.undo_move()
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return _state(game_id, game)

    @app.post("/api/games/{game_id}/reset", response_model=GameState)
    async def reset(game_id: str) -> GameState:
        game = _require_game(store, game_id)
        game.reset()
        logger.info("game reset", extra={"game_id": game_id})
        return _state(game_id, game)

    @app.post("/api/games/{game_id}/flip", response_model=GameState)
    async def flip(game_id: str) -> GameState:
        game = _require_game(store, game_id)
        game.flip()
        return _state(game_id, game)

    @app.delete("/api/games/{game_id}", status_code=204)
    async def delete_game(game_id: str) -> Response:
        if not store.delete(game_id):
            raise HTTPException(status_code=404, detail="game not found")
        return Response(status_code=204)

    return app


def _require_game(store: InMemorySessionStore, game_id: str) -> Game:
    game = store.get(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail="game not found")
    return game


def _log_move(game_id: str, game: Game, notation: str) -> None:
    logger.info("move applied", extra={"game_id": game_id, "move": notation})
    if game.checkmate():
        logger.info("checkmate", extra={"game_id": game_id, "winner": game.turn.opposite.value})


def _state(game_id: str, game: Game) -> GameState:
    winner = game.winner()
    return GameState(
        game_id=game_id,
        fen=game.to_fen(),
        turn=game.turn.value,
        board=game.view(),
        flipped=game.flipped,
        selected=format_square(game.selected) if game.selected is not None else None,
        highlighted=[m.to_algebraic() for m in game.highlighted],
        legal_moves={
            format_square(origin): [m.to_algebraic() for m in moves]
            for origin, moves in game.all_legal_moves().items()
        },
        in_check=game.in_check(),
        checkmate=game.checkmate(),
        winner=winner.value if winner is not None else None,
        status=game.status(),
        last_move=game.last_move(),
        move_history=list(game.history),
    )


# Default app for non-factory servers
app = create_app()
