from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from .piece import Color, Kind


# Display order; kings are never captured
DISPLAY_ORDER = (Kind.PAWN, Kind.BISHOP, Kind.KNIGHT, Kind.ROOK, Kind.QUEEN)


def _zeroes() -> Dict[Color, Dict[Kind, int]]:
    return {color: {kind: 0 for kind in Kind} for color in Color}


@dataclass
class CaptureTally:
    """Counts of pieces removed from play, keyed by the removed piece's color and kind.

    Counters only ever grow.
    """

    counts: Dict[Color, Dict[Kind, int]] = field(default_factory=_zeroes)

    def record(self, color: Color, kind: Kind) -> None:
        self.counts[color][kind] += 1

    def count(self, color: Color, kind: Kind) -> int:
        return self.counts[color][kind]

    def total(self, color: Color) -> int:
        return sum(self.counts[color].values())

    def as_dict(self) -> Dict[str, Dict[str, int]]:
        return {
            str(color): {kind.name.lower(): n for kind, n in per_kind.items()}
            for color, per_kind in self.counts.items()
        }

    def copy(self) -> "CaptureTally":
        return CaptureTally({color: dict(per_kind) for color, per_kind in self.counts.items()})

    def _describe(self, color: Color) -> str:
        parts = [f"{kind}: {self.counts[color][kind]}" for kind in DISPLAY_ORDER if self.counts[color][kind]]
        return ", ".join(parts) if parts else "-"

    def __str__(self) -> str:
        return f"white: {self._describe(Color.WHITE)}; black: {self._describe(Color.BLACK)}"
