from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .piece import Kind, Piece
from .square import Square


class MoveKind(Enum):
    MOVE = "move"
    TAKE = "take"
    EN_PASSANT = "en_passant"
    CASTLE = "castle"


@dataclass(frozen=True)
class Move:
    """Candidate state transition produced by move generation.

    Attributes:
        piece (Piece): The moving piece (the king for castles).
        origin (Square): Square the piece leaves.
        target (Square): Square the piece lands on.
        kind (MoveKind): Which transition this is.
        captured (Optional[Kind]): Kind of the taken piece for ``TAKE`` moves.
        rook_origin (Optional[Square]): Rook source square for ``CASTLE`` moves.
        rook_target (Optional[Square]): Rook destination square for ``CASTLE`` moves.

    Notes:
        A move is a proposal; it is only as valid as the board it was
        generated from. Use the named constructors rather than filling the
        payload fields by hand.
    """

    piece: Piece
    origin: Square
    target: Square
    kind: MoveKind = MoveKind.MOVE
    captured: Optional[Kind] = None
    rook_origin: Optional[Square] = None
    rook_target: Optional[Square] = None

    @classmethod
    def quiet(cls, piece: Piece, origin: Square, target: Square) -> "Move":
        return cls(piece, origin, target)

    @classmethod
    def take(cls, piece: Piece, origin: Square, target: Square, captured: Kind) -> "Move":
        return cls(piece, origin, target, MoveKind.TAKE, captured=captured)

    @classmethod
    def en_passant(cls, piece: Piece, origin: Square, target: Square) -> "Move":
        return cls(piece, origin, target, MoveKind.EN_PASSANT)

    @classmethod
    def castle(
        cls,
        piece: Piece,
        origin: Square,
        target: Square,
        rook_origin: Square,
        rook_target: Square,
    ) -> "Move":
        return cls(
            piece,
            origin,
            target,
            MoveKind.CASTLE,
            rook_origin=rook_origin,
            rook_target=rook_target,
        )

    def to_uci(self) -> str:
        """Serialize the move into long algebraic form.

        Returns:
            str: Move encoded like ``"e2e4"``; castles are encoded by the
                king's transition (``"e1g1"``).
        """
        return f"{self.origin}{self.target}"

    def __str__(self) -> str:
        return self.to_uci()


def parse_uci(uci: str) -> Optional[Tuple[Square, Square]]:
    """Parse a long algebraic move string into its origin and target squares.

    Args:
        uci (str): Move encoded like ``"e2e4"``.

    Returns:
        Optional[Tuple[Square, Square]]: ``(origin, target)``, or ``None``
            if the string is not exactly two valid square names.
    """
    if not isinstance(uci, str) or len(uci) != 4:
        return None
    origin = Square.from_an(uci[0:2])
    target = Square.from_an(uci[2:4])
    if origin is None or target is None:
        return None
    return origin, target
