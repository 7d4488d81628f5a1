from __future__ import annotations

from schach.engine.board import Board
from schach.engine.move import MoveKind
from schach.engine.piece import Kind
from schach.engine.square import Square


def sq(an: str) -> Square:
    s = Square.from_an(an)
    assert s is not None
    return s


def load(fen: str) -> Board:
    b = Board.from_fen(fen)
    assert b is not None
    return b


def test_knight_from_start_position() -> None:
    moves = Board.default().get_valid_moves(sq("b1"))
    assert [m.to_uci() for m in moves] == ["b1a3", "b1c3"]


def test_knight_takes_opponent_and_skips_own() -> None:
    b = load("4k3/8/8/8/8/2p5/3P4/1N2K3 w -")
    moves = {m.to_uci(): m for m in b.get_valid_moves(sq("b1"))}
    assert set(moves) == {"b1a3", "b1c3"}
    assert moves["b1c3"].kind is MoveKind.TAKE
    assert moves["b1c3"].captured is Kind.PAWN
    assert moves["b1a3"].kind is MoveKind.MOVE


def test_knight_in_the_middle_has_eight_leaps() -> None:
    b = load("4k3/8/8/8/3N4/8/8/4K3 w -")
    assert len(b.get_valid_moves(sq("d4"))) == 8


def test_king_single_steps() -> None:
    b = load("8/8/8/3K4/8/8/8/7k w -")
    moves = b.get_valid_moves(sq("d5"))
    assert {str(m.target) for m in moves} == {"c4", "c5", "c6", "d4", "d6", "e4", "e5", "e6"}
    assert all(m.kind is MoveKind.MOVE for m in moves)


def test_king_in_corner() -> None:
    b = load("k7/8/8/8/8/8/8/7K w -")
    assert {str(m.target) for m in b.get_valid_moves(sq("h1"))} == {"g1", "g2", "h2"}


def test_king_blocked_in_start_position() -> None:
    assert Board.default().get_valid_moves(sq("e1")) == []
    assert Board.default().get_valid_moves(sq("e8")) == []
