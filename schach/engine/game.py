from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .board import Board
from .move import Move, parse_uci
from .square import Square


logger = logging.getLogger(__name__)


class IllegalMoveError(ValueError):
    """A submitted move was not generated for the current position."""


@dataclass
class Game:
    """Game wrapper around a board for presentation consumers.

    Responsibility: hand out board snapshots and candidate moves, accept
    moves that were generated for the current position, keep undo history.
    """

    board: Board
    # (move played, board before the move)
    history: List[Tuple[Move, Board]] = field(default_factory=list)
    initial: Board = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.initial = self.board.copy()

    @classmethod
    def new(cls) -> "Game":
        return cls(board=Board.default())

    @classmethod
    def from_fen(cls, fen: str) -> Optional["Game"]:
        board = Board.from_fen(fen)
        if board is None:
            return None
        return cls(board=board)

    def to_fen(self) -> str:
        return self.board.to_fen()

    def snapshot(self) -> Board:
        return self.board.copy()

    def legal_moves(self, square: Square) -> List[Move]:
        """Candidate moves for the piece on ``square`` if it belongs to the side to move."""
        piece = self.board[square]
        if piece is None or piece.color is not self.board.active:
            return []
        return self.board.get_valid_moves(square)

    def all_moves(self) -> List[Move]:
        moves: List[Move] = []
        for square, _ in self.board.pieces(self.board.active):
            moves.extend(self.board.get_valid_moves(square))
        return moves

    def find_move(self, origin: Square, target: Square) -> Optional[Move]:
        for m in self.legal_moves(origin):
            if m.target == target:
                return m
        return None

    def submit(self, move: Move) -> None:
        """Apply ``move`` after checking it was generated for this position.

        Raises:
            IllegalMoveError: If ``move`` is not among the candidates of its
                origin square, including moves with off-board squares.
        """
        if not (move.origin.valid() and move.target.valid()):
            raise IllegalMoveError("illegal move")
        if move not in self.legal_moves(move.origin):
            raise IllegalMoveError("illegal move")
        before = self.board.copy()
        self.board.apply(move)
        self.history.append((move, before))
        logger.debug("played %s, now %s", move.to_uci(), self.board.to_fen())

    def play(self, uci: str) -> Move:
        """Resolve a long algebraic move like ``"e2e4"`` and submit it."""
        squares = parse_uci(uci)
        if squares is None:
            raise IllegalMoveError(f"invalid move: {uci!r}")
        move = self.find_move(*squares)
        if move is None:
            raise IllegalMoveError("illegal move")
        self.submit(move)
        return move

    def undo(self) -> Move:
        if not self.history:
            raise IllegalMoveError("no moves to undo")
        move, before = self.history.pop()
        self.board = before
        return move

    def reset(self) -> None:
        self.board = self.initial.copy()
        self.history.clear()

    def move_history_uci(self) -> List[str]:
        return [m.to_uci() for m, _ in self.history]
