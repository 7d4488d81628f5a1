from __future__ import annotations

import logging
from typing import Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from .error import (
    exception_handler,
    http_exception_handler,
    illegal_move_handler,
    request_validation_exception_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from .session import InMemorySessionStore
from ...engine.game import Game, IllegalMoveError
from ...engine.move import Move
from ...engine.square import Square


logger = logging.getLogger(__name__)


class CreateGameRequest(BaseModel):
    fen: Optional[str] = Field(default=None, description="FEN string; start position if omitted")


class CreateGameResponse(BaseModel):
    game_id: str
    fen: str


class SetPositionRequest(BaseModel):
    fen: str = Field(..., description="FEN string")


class MoveRequest(BaseModel):
    move: str = Field(..., description="Origin and target squares, e.g., e2e4")


class MoveOut(BaseModel):
    uci: str
    piece: str
    origin: str
    target: str
    kind: str
    captured: Optional[str] = None
    rook_origin: Optional[str] = None
    rook_target: Optional[str] = None


class SquareMoves(BaseModel):
    game_id: str
    square: str
    piece: Optional[str]
    moves: list[MoveOut]


class GameState(BaseModel):
    game_id: str
    fen: str
    active: str
    castling: str
    en_passant: Optional[str]
    halfmove_clock: int
    fullmove_number: int
    captures: Dict[str, Dict[str, int]]
    captures_text: str
    legal_moves: list[str]
    last_move: Optional[str]
    move_history: list[str]


def create_app() -> FastAPI:
    app = FastAPI(title="Schach Board API", version="0.1.0")

    # Basic logging setup; no-op once the CLI has configured logging
    logging.basicConfig(level=logging.INFO)

    # Middleware & error handling
    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(IllegalMoveError, illegal_move_handler)
    app.add_exception_handler(Exception, exception_handler)

    store = InMemorySessionStore()
    app.state.store = store

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/games", response_model=CreateGameResponse)
    async def create_game(req: Optional[CreateGameRequest] = None) -> CreateGameResponse:
        game = Game.new() if req is None or req.fen is None else _game_from_fen(req.fen)
        game_id = store.create(game)
        logger.info("created game %s", game_id)
        return CreateGameResponse(game_id=game_id, fen=game.to_fen())

    @app.get("/api/games/{game_id}/state", response_model=GameState)
    async def get_state(game_id: str) -> GameState:
        with store.locked(game_id) as game:
            return _state(game_id, _require_game(game))

    @app.get("/api/games/{game_id}/moves/{square}", response_model=SquareMoves)
    async def get_moves(game_id: str, square: str) -> SquareMoves:
        sq = Square.from_an(square)
        with store.locked(game_id) as game:
            game = _require_game(game)
            if sq is None:
                raise HTTPException(status_code=400, detail=f"invalid square: {square!r}")
            piece = game.board[sq]
            return SquareMoves(
                game_id=game_id,
                square=str(sq),
                piece=piece.to_char() if piece is not None else None,
                moves=[_move_out(m) for m in game.legal_moves(sq)],
            )

    @app.post("/api/games/{game_id}/move", response_model=GameState)
    async def make_move(game_id: str, req: MoveRequest) -> GameState:
        with store.locked(game_id) as game:
            game = _require_game(game)
            move = game.play(req.move)
            logger.info("game %s: %s played %s", game_id, move.piece.color, move.to_uci())
            return _state(game_id, game)

    @app.post("/api/games/{game_id}/position", response_model=GameState)
    async def set_position(game_id: str, req: SetPositionRequest) -> GameState:
        with store.locked(game_id) as game:
            _require_game(game)
            new_game = _game_from_fen(req.fen)
            store.set(game_id, new_game)
            return _state(game_id, new_game)

    @app.post("/api/games/{game_id}/undo", response_model=GameState)
    async def undo(game_id: str) -> GameState:
        with store.locked(game_id) as game:
            game = _require_game(game)
            game.undo()
            return _state(game_id, game)

    @app.post("/api/games/{game_id}/reset", response_model=GameState)
    async def reset(game_id: str) -> GameState:
        with store.locked(game_id) as game:
            game = _require_game(game)
            game.reset()
            return _state(game_id, game)

    @app.delete("/api/games/{game_id}")
    async def delete_game(game_id: str) -> Dict[str, str]:
        if not store.delete(game_id):
            raise HTTPException(status_code=404, detail="game not found")
        return {"status": "deleted"}

    return app


def _require_game(game: Optional[Game]) -> Game:
    if game is None:
        raise HTTPException(status_code=404, detail="game not found")
    return game


def _game_from_fen(fen: str) -> Game:
    game = Game.from_fen(fen)
    if game is None:
        raise HTTPException(status_code=400, detail="invalid FEN")
    return game


def _move_out(m: Move) -> MoveOut:
    return MoveOut(
        uci=m.to_uci(),
        piece=m.piece.to_char(),
        origin=str(m.origin),
        target=str(m.target),
        kind=m.kind.value,
        captured=m.captured.name.lower() if m.captured is not None else None,
        rook_origin=str(m.rook_origin) if m.rook_origin is not None else None,
        rook_target=str(m.rook_target) if m.rook_target is not None else None,
    )


def _state(game_id: str, game: Game) -> GameState:
    board = game.board
    history = game.move_history_uci()
    return GameState(
        game_id=game_id,
        fen=board.to_fen(),
        active=str(board.active),
        castling=board.castling.to_fen(),
        en_passant=str(board.en_passant) if board.en_passant is not None else None,
        halfmove_clock=board.halfmove_clock,
        fullmove_number=board.fullmove_number,
        captures=board.captures.as_dict(),
        captures_text=str(board.captures),
        legal_moves=[m.to_uci() for m in game.all_moves()],
        last_move=history[-1] if history else None,
        move_history=history,
    )


# Default app for non-factory servers
app = create_app()
