from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional


FILES = "abcdefgh"


@dataclass(frozen=True)
class Dir:
    """Direction vector in (file, rank) deltas."""

    file: int
    rank: int

    def __mul__(self, n: int) -> "Dir":
        return Dir(self.file * n, self.rank * n)


@dataclass(frozen=True)
class Square:
    """A board coordinate.

    Attributes:
        file (int): Column, 0..7 translates to a..h.
        rank (int): Row, 0..7 translates to rank 8 down to rank 1.

    Notes:
        Arithmetic may produce squares outside the board; callers filter
        them with :meth:`valid` before they reach any collection.
    """

    file: int
    rank: int

    def valid(self) -> bool:
        return 0 <= self.file < 8 and 0 <= self.rank < 8

    @property
    def index(self) -> int:
        """Flat cell index ``rank * 8 + file`` (a8=0 .. h1=63)."""
        return self.rank * 8 + self.file

    @classmethod
    def from_index(cls, idx: int) -> "Square":
        return cls(idx % 8, idx // 8)

    @classmethod
    def from_an(cls, an: str) -> Optional["Square"]:
        """Parse algebraic notation.

        Args:
            an (str): Square name such as ``"e4"``.

        Returns:
            Optional[Square]: Parsed square, or ``None`` if ``an`` is not a
                file letter ``a``-``h`` followed by a rank digit ``1``-``8``.
        """
        if not isinstance(an, str) or len(an) != 2:
            return None
        file_ch, rank_ch = an[0], an[1]
        if file_ch not in FILES or rank_ch not in "12345678":
            return None
        return cls(FILES.index(file_ch), 8 - int(rank_ch))

    def __add__(self, other: Dir) -> "Square":
        if not isinstance(other, Dir):
            return NotImplemented
        return Square(self.file + other.file, self.rank + other.rank)

    def __str__(self) -> str:
        return f"{FILES[self.file]}{8 - self.rank}"

    def offset_by(self, directions: Iterable[Dir]) -> Iterator["Square"]:
        """Yield the on-board squares one step away along each direction."""
        for d in directions:
            target = self + d
            if target.valid():
                yield target

    def in_direction(self, d: Dir, n: int) -> Iterator["Square"]:
        """Yield the on-board squares 1..n steps away along ``d``."""
        for dist in range(1, n + 1):
            target = self + d * dist
            if target.valid():
                yield target
