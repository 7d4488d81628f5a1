from __future__ import annotations

import pytest

from schach.engine.square import Dir, Square


def test_algebraic_notation_maps_rank_eight_to_row_zero() -> None:
    assert Square.from_an("a8") == Square(0, 0)
    assert Square.from_an("h1") == Square(7, 7)
    assert Square.from_an("e4") == Square(4, 4)
    assert str(Square(4, 4)) == "e4"
    assert str(Square(0, 0)) == "a8"


@pytest.mark.parametrize("an", ["", "e", "e44", "i1", "a0", "a9", "E4", "4e", None])
def test_malformed_square_is_absent(an) -> None:  # type: ignore[no-untyped-def]
    assert Square.from_an(an) is None


def test_arithmetic_and_validity() -> None:
    sq = Square(6, 1)
    assert sq + Dir(1, 0) == Square(7, 1)
    assert not (sq + Dir(2, 0)).valid()
    assert Square(1, 1) + Dir(1, -1) * 2 == Square(3, -1)
    assert Square(0, 0).index == 0
    assert Square(7, 7).index == 63
    assert Square.from_index(Square(3, 5).index) == Square(3, 5)


def test_offset_by_filters_off_board_squares() -> None:
    corner = Square(0, 7)  # a1
    targets = list(corner.offset_by([Dir(1, 0), Dir(-1, 0), Dir(0, -1), Dir(0, 1)]))
    assert [str(t) for t in targets] == ["b1", "a2"]


def test_in_direction_stops_at_edge() -> None:
    rays = [str(t) for t in Square.from_an("f1").in_direction(Dir(1, -1), 7)]  # type: ignore[union-attr]
    assert rays == ["g2", "h3"]
