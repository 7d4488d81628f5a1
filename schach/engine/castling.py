from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

from .piece import Color


class Side(Enum):
    KING = "king"
    QUEEN = "queen"


# FEN letter for each flag, in export order
_FEN_FLAGS: Tuple[Tuple[str, Color, Side], ...] = (
    ("K", Color.WHITE, Side.KING),
    ("Q", Color.WHITE, Side.QUEEN),
    ("k", Color.BLACK, Side.KING),
    ("q", Color.BLACK, Side.QUEEN),
)


def _flags(value: bool) -> Dict[Tuple[Color, Side], bool]:
    return {(color, side): value for _, color, side in _FEN_FLAGS}


@dataclass
class CastlingRights:
    """Four independent castling flags keyed by ``(Color, Side)``.

    Gameplay only ever clears flags (see :meth:`revoke`); setting a flag
    happens through construction or FEN import.
    """

    flags: Dict[Tuple[Color, Side], bool] = field(default_factory=lambda: _flags(True))

    @classmethod
    def all(cls) -> "CastlingRights":
        return cls(_flags(True))

    @classmethod
    def none(cls) -> "CastlingRights":
        return cls(_flags(False))

    @classmethod
    def from_fen(cls, text: str) -> Optional["CastlingRights"]:
        """Parse the FEN castling field.

        Args:
            text (str): ``"-"`` or any combination of the letters ``KQkq``.

        Returns:
            Optional[CastlingRights]: Parsed rights, or ``None`` if ``text``
                contains any other character.
        """
        rights = cls.none()
        if text == "-":
            return rights
        letters = {ch: (color, side) for ch, color, side in _FEN_FLAGS}
        for ch in text:
            if ch not in letters:
                return None
            rights.flags[letters[ch]] = True
        return rights

    def to_fen(self) -> str:
        out = "".join(ch for ch, color, side in _FEN_FLAGS if self.flags[(color, side)])
        return out or "-"

    def __getitem__(self, key: Tuple[Color, Side]) -> bool:
        return self.flags[key]

    def __setitem__(self, key: Tuple[Color, Side], value: bool) -> None:
        self.flags[key] = value

    def revoke(self, color: Color, side: Optional[Side] = None) -> None:
        """Clear one flag of ``color``, or both when ``side`` is omitted."""
        sides = (Side.KING, Side.QUEEN) if side is None else (side,)
        for s in sides:
            self.flags[(color, s)] = False

    def any(self) -> bool:
        return any(self.flags.values())

    def copy(self) -> "CastlingRights":
        return CastlingRights(dict(self.flags))

    def __str__(self) -> str:
        return self.to_fen()
