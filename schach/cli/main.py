from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

import uvicorn

from ..engine.board import STARTPOS_FEN, Board
from ..engine.square import Square


logger = logging.getLogger(__name__)


def _serve(args: argparse.Namespace) -> int:
    logger.info("serving on %s:%d", args.host, args.port)
    uvicorn.run(
        "schach.protocol.http.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        log_level=args.log_level.lower(),
    )
    return 0


def _moves(args: argparse.Namespace) -> int:
    board = Board.from_fen(args.fen)
    if board is None:
        print(f"invalid FEN: {args.fen}", file=sys.stderr)
        return 1
    square = Square.from_an(args.square)
    if square is None:
        print(f"invalid square: {args.square}", file=sys.stderr)
        return 1
    for m in board.get_valid_moves(square):
        print(f"{m.to_uci()} {m.kind.value}")
    return 0


def _fen(args: argparse.Namespace) -> int:
    board = Board.from_fen(args.fen)
    if board is None:
        print(f"invalid FEN: {args.fen}", file=sys.stderr)
        return 1
    print(board.to_fen())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="schach", description="Chess board and move generation")
    parser.add_argument(
        "--log-level", type=str, default="INFO", help="Logging level (default: INFO)"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", type=str, default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    serve.add_argument("--port", type=int, default=8000, help="Port (default: 8000)")
    serve.set_defaults(func=_serve)

    moves = sub.add_parser("moves", help="List candidate moves of the piece on a square")
    moves.add_argument("--fen", type=str, default=STARTPOS_FEN, help="FEN string (default: startpos)")
    moves.add_argument("--square", type=str, required=True, help="Square in algebraic notation, e.g. e2")
    moves.set_defaults(func=_moves)

    fen = sub.add_parser("fen", help="Parse and print a normalized FEN")
    fen.add_argument("--fen", type=str, required=True, help="FEN string")
    fen.set_defaults(func=_fen)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
