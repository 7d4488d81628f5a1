"""Per-kind pseudo-legal move generators.

Every generator is a pure function of ``(board, origin, piece)`` returning a
list of :class:`~schach.engine.move.Move`. Output order is fixed by the
direction tables below so repeated calls on the same position agree.
Moves that would leave the mover's own king in check are not filtered.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Dict, Iterable, List, Optional

from .castling import Side
from .move import Move
from .piece import Color, Kind, Piece
from .square import Dir, Square

if TYPE_CHECKING:
    from .board import Board


logger = logging.getLogger(__name__)


DIRECTION_RECT = (Dir(1, 0), Dir(-1, 0), Dir(0, 1), Dir(0, -1))
DIRECTION_DIAG = (Dir(1, 1), Dir(-1, 1), Dir(1, -1), Dir(-1, -1))
DIRECTION_BOTH = DIRECTION_RECT + DIRECTION_DIAG
DIRECTION_KNIGHT = (
    Dir(2, 1),
    Dir(1, 2),
    Dir(-1, 2),
    Dir(-2, 1),
    Dir(-2, -1),
    Dir(-1, -2),
    Dir(1, -2),
    Dir(2, -1),
)

MAX_RAY = 7
KING_SRC_FILE = 4
HOME_RANK = {Color.WHITE: 7, Color.BLACK: 0}
PAWN_START_RANK = {Color.WHITE: 6, Color.BLACK: 1}
PAWN_FORWARD = {Color.WHITE: -1, Color.BLACK: 1}

# (king destination file, rook source file, rook destination file)
CASTLE_FILES = {
    Side.KING: (6, 7, 5),
    Side.QUEEN: (2, 0, 3),
}


def slide(board: "Board", origin: Square, piece: Piece, directions: Iterable[Dir], n: int) -> List[Move]:
    """Walk rays of up to ``n`` steps from ``origin``.

    A ray ends at the board edge or at the first occupied square; that square
    is emitted as a take only when it holds an opponent piece.
    """
    opponent = piece.color.opponent
    result: List[Move] = []
    for d in directions:
        for target in origin.in_direction(d, n):
            occupant = board[target]
            if occupant is None:
                result.append(Move.quiet(piece, origin, target))
                continue
            if occupant.color is opponent:
                result.append(Move.take(piece, origin, target, occupant.kind))
            break
    return result


def leap(board: "Board", origin: Square, piece: Piece, offsets: Iterable[Dir]) -> List[Move]:
    """Fixed-offset jumps: empty targets are moves, opponent targets are takes."""
    opponent = piece.color.opponent
    result: List[Move] = []
    for target in origin.offset_by(offsets):
        occupant = board[target]
        if occupant is None:
            result.append(Move.quiet(piece, origin, target))
        elif occupant.color is opponent:
            result.append(Move.take(piece, origin, target, occupant.kind))
    return result


def rook_moves(board: "Board", origin: Square, piece: Piece) -> List[Move]:
    return slide(board, origin, piece, DIRECTION_RECT, MAX_RAY)


def bishop_moves(board: "Board", origin: Square, piece: Piece) -> List[Move]:
    return slide(board, origin, piece, DIRECTION_DIAG, MAX_RAY)


def queen_moves(board: "Board", origin: Square, piece: Piece) -> List[Move]:
    return slide(board, origin, piece, DIRECTION_BOTH, MAX_RAY)


def knight_moves(board: "Board", origin: Square, piece: Piece) -> List[Move]:
    return leap(board, origin, piece, DIRECTION_KNIGHT)


def king_moves(board: "Board", origin: Square, piece: Piece) -> List[Move]:
    """Single steps in all eight directions plus available castles."""
    result = slide(board, origin, piece, DIRECTION_BOTH, 1)
    for side in (Side.KING, Side.QUEEN):
        if not board.castling[(board.active, side)]:
            continue
        mv = castle(board, origin, piece, side)
        if mv is not None:
            result.append(mv)
    return result


def castle(board: "Board", origin: Square, piece: Piece, side: Side) -> Optional[Move]:
    """Build the castle move for ``side`` if the position allows it.

    Requires the king on its home square, an own rook on the rook's home
    square and empty squares between them. The king's source, transit and
    destination squares must not be attacked according to
    :meth:`Board.is_under_attack`.
    """
    active = board.active
    rank = HOME_RANK[active]
    king_dst_file, rook_src_file, rook_dst_file = CASTLE_FILES[side]

    k_src = Square(KING_SRC_FILE, rank)
    k_thr = Square((KING_SRC_FILE + king_dst_file) // 2, rank)
    k_dst = Square(king_dst_file, rank)
    r_src = Square(rook_src_file, rank)
    r_dst = Square(rook_dst_file, rank)

    if origin != k_src or board[k_src] != Piece(active, Kind.KING):
        return None
    if board[r_src] != Piece(active, Kind.ROOK):
        return None
    lo, hi = sorted((KING_SRC_FILE, rook_src_file))
    if any(board[Square(f, rank)] is not None for f in range(lo + 1, hi)):
        return None

    opponent = active.opponent
    if any(board.is_under_attack(sq, opponent) for sq in (k_src, k_thr, k_dst)):
        return None

    mv = Move.castle(piece, k_src, k_dst, r_src, r_dst)
    logger.debug("castling %s possible for %s", mv, active)
    return mv


def pawn_moves(board: "Board", origin: Square, piece: Piece) -> List[Move]:
    """Diagonal takes and en passant first, then the double and single pushes.

    Promotion is not generated.
    """
    opponent = piece.color.opponent
    fwd = PAWN_FORWARD[piece.color]
    result: List[Move] = []

    for dest in origin.offset_by((Dir(1, fwd), Dir(-1, fwd))):
        occupant = board[dest]
        if occupant is not None:
            if occupant.color is opponent:
                result.append(Move.take(piece, origin, dest, occupant.kind))
        elif board.en_passant == dest:
            passed = Square(dest.file, origin.rank)
            if board[passed] == Piece(opponent, Kind.PAWN):
                result.append(Move.en_passant(piece, origin, dest))

    one = origin + Dir(0, fwd)
    one_free = one.valid() and board[one] is None
    if origin.rank == PAWN_START_RANK[piece.color] and one_free:
        two = origin + Dir(0, 2 * fwd)
        if two.valid() and board[two] is None:
            result.append(Move.quiet(piece, origin, two))
    if one_free:
        result.append(Move.quiet(piece, origin, one))
    return result


Generator = Callable[["Board", Square, Piece], List[Move]]

GENERATORS: Dict[Kind, Generator] = {
    Kind.KING: king_moves,
    Kind.QUEEN: queen_moves,
    Kind.ROOK: rook_moves,
    Kind.BISHOP: bishop_moves,
    Kind.KNIGHT: knight_moves,
    Kind.PAWN: pawn_moves,
}
