from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from .captures import CaptureTally
from .castling import CastlingRights, Side
from .move import Move, MoveKind
from .movegen import GENERATORS, HOME_RANK
from .piece import Color, Kind, Piece
from .square import Square


logger = logging.getLogger(__name__)


STARTPOS_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
STARTPOS_PLACEMENT = STARTPOS_FEN.split()[0]

_PLACEMENT_CHARS = set("prnbqkPRNBQK12345678/")


class ContractViolation(AssertionError):
    """Raised when ``Board.apply`` receives a move its preconditions reject.

    This signals that move generation and application have fallen out of
    sync; it is a programming error, not a recoverable condition.
    """


def _empty_squares() -> List[Optional[Piece]]:
    return [None] * 64


@dataclass
class Board:
    """Mutable chess position with FEN I/O, move application and generation.

    Notes:
    - Cells are a flat list indexed by ``Square.index`` (a8=0 .. h1=63).
    - :meth:`apply` is the only mutator used by gameplay; all derived
      state (en passant, castling rights, captures, clocks, side to move)
      is recomputed there.
    - No internal locking. Callers serialize ``apply`` against readers or
      work on a :meth:`copy`.
    """

    squares: List[Optional[Piece]] = field(default_factory=_empty_squares)
    active: Color = Color.WHITE
    castling: CastlingRights = field(default_factory=CastlingRights.all)
    en_passant: Optional[Square] = None
    halfmove_clock: int = 0
    fullmove_number: int = 1
    captures: CaptureTally = field(default_factory=CaptureTally)

    @classmethod
    def default(cls) -> "Board":
        """Create a board initialized to the standard chess starting position.

        Returns:
            Board: Board with White to move and all castling rights set.
        """
        squares = _parse_placement(STARTPOS_PLACEMENT)
        if squares is None:
            raise RuntimeError("syntax error in initial board")
        return cls(squares=squares)

    @classmethod
    def from_fen(cls, fen: str) -> Optional["Board"]:
        """Create a board from a Forsyth–Edwards Notation (FEN) string.

        Args:
            fen (str): ``<placement> <active> <castling> [<ep> <halfmove> <fullmove>]``.

        Returns:
            Optional[Board]: Board initialized from ``fen``, or ``None`` if a
                field is malformed.

        Notes:
            Placement parsing is lenient about rank length: a rank that does
            not cover exactly eight files only logs a warning. Missing move
            counters default to halfmove 0 and fullmove 1.
        """
        if not fen or not isinstance(fen, str):
            logger.debug("FEN must be a non-empty string")
            return None
        parts = fen.split()
        if len(parts) < 3:
            logger.debug("FEN needs at least 3 fields, got %d", len(parts))
            return None

        squares = _parse_placement(parts[0])
        if squares is None:
            return None
        active = Color.from_fen(parts[1])
        if active is None:
            logger.debug("invalid active color in FEN: %r", parts[1])
            return None
        castling = CastlingRights.from_fen(parts[2])
        if castling is None:
            logger.debug("invalid castling rights in FEN: %r", parts[2])
            return None

        en_passant: Optional[Square] = None
        if len(parts) > 3 and parts[3] != "-":
            en_passant = Square.from_an(parts[3])
            if en_passant is None:
                logger.debug("invalid en passant square in FEN: %r", parts[3])
                return None

        halfmove_clock = _parse_counter(parts[4]) if len(parts) > 4 else 0
        fullmove_number = _parse_counter(parts[5]) if len(parts) > 5 else 1
        if halfmove_clock is None or fullmove_number is None:
            logger.debug("invalid move counters in FEN: %r", parts[4:6])
            return None

        return cls(
            squares=squares,
            active=active,
            castling=castling,
            en_passant=en_passant,
            halfmove_clock=halfmove_clock,
            fullmove_number=fullmove_number,
        )

    def to_fen(self) -> str:
        """Serialize the current position into a FEN string.

        Returns:
            str: All six FEN fields; castling rights in ``KQkq`` order.
        """
        ranks_str: List[str] = []
        for rank in range(8):
            run = 0
            row = []
            for file in range(8):
                piece = self.squares[rank * 8 + file]
                if piece is None:
                    run += 1
                    continue
                if run > 0:
                    row.append(str(run))
                    run = 0
                row.append(piece.to_char())
            if run > 0:
                row.append(str(run))
            ranks_str.append("".join(row))
        placement = "/".join(ranks_str)

        ep = str(self.en_passant) if self.en_passant is not None else "-"
        return (
            f"{placement} {self.active.fen} {self.castling.to_fen()} {ep} "
            f"{self.halfmove_clock} {self.fullmove_number}"
        )

    def __getitem__(self, square: Square) -> Optional[Piece]:
        if not square.valid():
            raise IndexError(f"square off the board: {square!r}")
        return self.squares[square.index]

    def __setitem__(self, square: Square, piece: Optional[Piece]) -> None:
        if not square.valid():
            raise IndexError(f"square off the board: {square!r}")
        self.squares[square.index] = piece

    def piece_at(self, file: int, rank: int) -> Optional[Piece]:
        return self[Square(file, rank)]

    def pieces(self, color: Optional[Color] = None) -> Iterator[Tuple[Square, Piece]]:
        """Yield ``(square, piece)`` for occupied cells from a8 to h1."""
        for idx, piece in enumerate(self.squares):
            if piece is None:
                continue
            if color is not None and piece.color is not color:
                continue
            yield Square.from_index(idx), piece

    def copy(self) -> "Board":
        """Return an independent snapshot of this board."""
        return type(self)(
            squares=list(self.squares),
            active=self.active,
            castling=self.castling.copy(),
            en_passant=self.en_passant,
            halfmove_clock=self.halfmove_clock,
            fullmove_number=self.fullmove_number,
            captures=self.captures.copy(),
        )

    # --- Move generation ---
    def get_valid_moves(self, square: Square) -> List[Move]:
        """Return the pseudo-legal moves of the piece on ``square``.

        Args:
            square (Square): Square to inspect.

        Returns:
            List[Move]: Candidate moves in generator order; empty when the
                square is empty. Moves leaving the own king in check are
                not filtered out.
        """
        piece = self[square]
        if piece is None:
            return []
        return GENERATORS[piece.kind](self, square, piece)

    def is_under_attack(self, square: Square, by: Color) -> bool:
        """Attack-detection hook consulted by castle generation.

        Always reports ``False``: castling out of, through or into check is
        therefore generated. Subclasses may supply real attack detection.
        """
        return False

    # --- State transition ---
    def apply(self, move: Move) -> None:
        """Apply ``move`` to this board in place.

        Args:
            move (Move): A move generated for the current position.

        Raises:
            ContractViolation: If the move's color is not the side to move or
                the board does not match the move's occupancy preconditions.
        """
        if move.piece.color is not self.active:
            raise ContractViolation(f"{move} moves a {move.piece.color} piece but {self.active} is to move")
        if self[move.origin] != move.piece:
            raise ContractViolation(f"{move}: origin does not hold {move.piece}")

        opponent = self.active.opponent
        piece, origin, target = move.piece, move.origin, move.target

        if move.kind is MoveKind.MOVE:
            if self[target] is not None:
                raise ContractViolation(f"{move}: target {target} is occupied")
            self[origin] = None
            self[target] = piece
        elif move.kind is MoveKind.TAKE:
            if move.captured is None or self[target] != Piece(opponent, move.captured):
                raise ContractViolation(f"{move}: target does not hold {opponent} {move.captured}")
            logger.info("captured %s on %s", self[target], target)
            self[origin] = None
            self[target] = piece
            self.captures.record(opponent, move.captured)
        elif move.kind is MoveKind.EN_PASSANT:
            passed = Square(target.file, origin.rank)
            if self[passed] != Piece(opponent, Kind.PAWN):
                raise ContractViolation(f"{move}: no {opponent} pawn on {passed}")
            logger.info("captured en passant %s on %s", self[passed], passed)
            self[passed] = None
            self[origin] = None
            self[target] = piece
            self.captures.record(opponent, Kind.PAWN)
        elif move.kind is MoveKind.CASTLE:
            rook_origin, rook_target = move.rook_origin, move.rook_target
            if rook_origin is None or rook_target is None:
                raise ContractViolation(f"{move}: castle without rook squares")
            if piece.kind is not Kind.KING:
                raise ContractViolation(f"{move}: castling piece is not a king")
            if self[rook_origin] != Piece(self.active, Kind.ROOK):
                raise ContractViolation(f"{move}: no {self.active} rook on {rook_origin}")
            self[rook_target] = self[rook_origin]
            self[rook_origin] = None
            self[origin] = None
            self[target] = piece
        else:  # pragma: no cover
            raise ContractViolation(f"unknown move kind {move.kind!r}")

        self._update_en_passant_eligibility(move)
        self._update_castling_eligibility(move)

        self.halfmove_clock += 1
        if move.piece.color is Color.BLACK:
            self.fullmove_number += 1
        self.active = opponent

    def _update_en_passant_eligibility(self, move: Move) -> None:
        """Remember the square a pawn skipped on a double step, else clear it."""
        ep: Optional[Square] = None
        if move.piece.kind is Kind.PAWN and move.kind in (MoveKind.MOVE, MoveKind.TAKE):
            if abs(move.origin.rank - move.target.rank) == 2:
                ep = Square(move.origin.file, (move.origin.rank + move.target.rank) // 2)
        logger.debug("en passant eligibility %s", ep if ep is not None else "-")
        self.en_passant = ep

    def _update_castling_eligibility(self, move: Move) -> None:
        """Revoke castling rights after king moves and rook moves off the back rank.

        The rook's side is inferred from its origin file only.
        """
        color = move.piece.color
        if move.piece.kind is Kind.KING:
            if self.castling[(color, Side.KING)] or self.castling[(color, Side.QUEEN)]:
                logger.info("disabling castling for %s", color)
            self.castling.revoke(color)
        elif move.piece.kind is Kind.ROOK and move.origin.rank == HOME_RANK[color]:
            side = Side.QUEEN if move.origin.file < 4 else Side.KING
            if self.castling[(color, side)]:
                logger.info("disabling castling for %s on %s side", color, side.value)
            self.castling.revoke(color, side)


def _parse_counter(text: str) -> Optional[int]:
    # Plain ASCII digits only: int() would also take "+2", "1_0" and other scripts' digits
    if not (text.isascii() and text.isdigit()):
        return None
    return int(text)


def _parse_placement(text: str) -> Optional[List[Optional[Piece]]]:
    """Parse the FEN piece-placement field.

    Returns ``None`` on any character outside ``[prnbqkPRNBQK1-8/]``. Ranks
    that do not span exactly eight files are tolerated with a warning; pieces
    falling outside the board are dropped.
    """
    squares = _empty_squares()
    file, rank = 0, 0
    for ch in text:
        if ch not in _PLACEMENT_CHARS:
            logger.debug("invalid character %r in FEN placement %r", ch, text)
            return None
        if ch == "/":
            if file != 8:
                logger.warning("syntax error in %s: expected '/' at %d/%d", text, rank, file)
            rank += 1
            file = 0
        elif ch.isdigit():
            file += int(ch)
        else:
            if file < 8 and rank < 8:
                squares[rank * 8 + file] = Piece.from_char(ch)
            else:
                logger.warning("dropping %r outside the board at %d/%d in %s", ch, rank, file, text)
            file += 1
    return squares
