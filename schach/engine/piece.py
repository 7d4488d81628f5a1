from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class Color(Enum):
    """Side color."""

    WHITE = "w"
    BLACK = "b"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def fen(self) -> str:
        return self.value

    @classmethod
    def from_fen(cls, text: str) -> Optional["Color"]:
        """Parse the FEN active-color field; only ``"w"`` and ``"b"`` are accepted."""
        if text == "w":
            return cls.WHITE
        if text == "b":
            return cls.BLACK
        return None

    def __str__(self) -> str:
        return self.name.lower()


class Kind(Enum):
    KING = "k"
    QUEEN = "q"
    ROOK = "r"
    BISHOP = "b"
    KNIGHT = "n"
    PAWN = "p"

    def __str__(self) -> str:
        return self.name.capitalize()


_CHAR_TO_COLOR_KIND: Dict[str, tuple[Color, Kind]] = {
    "P": (Color.WHITE, Kind.PAWN),
    "N": (Color.WHITE, Kind.KNIGHT),
    "B": (Color.WHITE, Kind.BISHOP),
    "R": (Color.WHITE, Kind.ROOK),
    "Q": (Color.WHITE, Kind.QUEEN),
    "K": (Color.WHITE, Kind.KING),
    "p": (Color.BLACK, Kind.PAWN),
    "n": (Color.BLACK, Kind.KNIGHT),
    "b": (Color.BLACK, Kind.BISHOP),
    "r": (Color.BLACK, Kind.ROOK),
    "q": (Color.BLACK, Kind.QUEEN),
    "k": (Color.BLACK, Kind.KING),
}


@dataclass(frozen=True)
class Piece:
    """A chess piece identified by its color and kind."""

    color: Color
    kind: Kind

    @classmethod
    def from_char(cls, ch: str) -> Optional["Piece"]:
        """Decode a FEN piece letter.

        Args:
            ch (str): One of ``PNBRQK`` (white) or ``pnbrqk`` (black).

        Returns:
            Optional[Piece]: Decoded piece, or ``None`` for any other character.
        """
        if not isinstance(ch, str):
            return None
        entry = _CHAR_TO_COLOR_KIND.get(ch)
        if entry is None:
            return None
        return cls(*entry)

    def to_char(self) -> str:
        ch = self.kind.value
        return ch.upper() if self.color is Color.WHITE else ch

    def __str__(self) -> str:
        return self.to_char()
