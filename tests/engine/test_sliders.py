from __future__ import annotations

from typing import List

import pytest

from schach.engine.board import Board
from schach.engine.move import Move, MoveKind
from schach.engine.piece import Kind
from schach.engine.square import Dir, Square


def sq(an: str) -> Square:
    s = Square.from_an(an)
    assert s is not None
    return s


def load(fen: str) -> Board:
    b = Board.from_fen(fen)
    assert b is not None
    return b


def targets(moves: List[Move]) -> set[str]:
    return {str(m.target) for m in moves}


def test_rook_basic_moves() -> None:
    b = load("4k3/8/8/8/8/8/8/R3K3 w -")
    moves = b.get_valid_moves(sq("a1"))
    assert targets(moves) == {"b1", "c1", "d1", "a2", "a3", "a4", "a5", "a6", "a7", "a8"}
    assert all(m.kind is MoveKind.MOVE for m in moves)


def test_rook_ray_stops_at_opponent_with_take() -> None:
    b = load("4k3/8/8/8/p7/8/8/R3K3 w -")
    moves = b.get_valid_moves(sq("a1"))
    assert targets(moves) == {"b1", "c1", "d1", "a2", "a3", "a4"}
    takes = [m for m in moves if m.kind is MoveKind.TAKE]
    assert len(takes) == 1
    assert str(takes[0].target) == "a4"
    assert takes[0].captured is Kind.PAWN


def test_bishop_basic_moves() -> None:
    b = load("4k3/8/8/8/8/8/8/2B1K3 w -")
    assert targets(b.get_valid_moves(sq("c1"))) == {"d2", "e3", "f4", "g5", "h6", "b2", "a3"}


def test_queen_is_union_of_rook_and_bishop() -> None:
    b = load("4k3/8/8/8/8/8/8/3QK3 w -")
    moves = b.get_valid_moves(sq("d1"))
    assert len(moves) == 17
    assert {"c1", "a1", "d2", "d8", "e2", "h5", "c2", "a4"}.issubset(targets(moves))
    assert "e1" not in targets(moves)


def test_sliders_blocked_in_start_position() -> None:
    b = Board.default()
    for an in ("a1", "c1", "d1", "f8", "h8"):
        assert b.get_valid_moves(sq(an)) == []


@pytest.mark.parametrize(
    "fen",
    [
        "r1bqkbnr/pppp1ppp/2n5/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4",
        "4k3/2p5/8/1P1Q1r2/8/3b4/8/4K3 w - - 0 1",
        "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR b KQkq - 1 3",
    ],
)
def test_rays_never_pass_an_occupied_square(fen: str) -> None:
    b = load(fen)
    for origin, piece in b.pieces():
        if piece.kind not in (Kind.ROOK, Kind.BISHOP, Kind.QUEEN):
            continue
        for m in b.get_valid_moves(origin):
            df = (m.target.file > origin.file) - (m.target.file < origin.file)
            dr = (m.target.rank > origin.rank) - (m.target.rank < origin.rank)
            step = origin + Dir(df, dr)
            while step != m.target:
                assert b[step] is None, f"{m} jumps over {step}"
                step = step + Dir(df, dr)
            occupant = b[m.target]
            if occupant is None:
                assert m.kind is MoveKind.MOVE
            else:
                assert occupant.color is piece.color.opponent
                assert m.kind is MoveKind.TAKE and m.captured is occupant.kind


def test_generation_is_deterministic() -> None:
    b = load("4k3/2p5/8/1P1Q1r2/8/3b4/8/4K3 w -")
    first = b.get_valid_moves(sq("d5"))
    assert first == b.get_valid_moves(sq("d5"))
    assert first == b.copy().get_valid_moves(sq("d5"))


def test_empty_square_has_no_moves() -> None:
    assert Board.default().get_valid_moves(sq("e4")) == []
