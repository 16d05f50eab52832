"""Command-line entry point: replay moves on a board and print each FEN."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from typing import TextIO

from chessgrid.core import (
    STARTING_FEN,
    Chessboard,
    InvariantViolation,
    Move,
)

_LOGGER = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chessgrid",
        description="Replay long-algebraic moves on a (possibly non-8x8) board.",
    )
    parser.add_argument("moves", nargs="*", help="Moves such as e2e4 or e7e8n")
    parser.add_argument("--fen", default=STARTING_FEN, help="Start position FEN")
    parser.add_argument(
        "--verbose", action="store_true", help="Log board internals at DEBUG level"
    )
    return parser


def replay(board: Chessboard, moves: Sequence[str], out: TextIO) -> None:
    """Apply *moves* in order, writing the FEN (and any check) after each."""
    for text in moves:
        board.apply_move(Move.from_uci(text))
        out.write(f"{text}: {board.to_fen()}\n")
        if board.is_king_checked():
            out.write("Check!\n")


def main(argv: list[str] | None = None) -> int:
    """Run the replay CLI and return the process exit status."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        board = Chessboard(args.fen)
        sys.stdout.write(f"start: {board.to_fen()}\n")
        replay(board, args.moves, sys.stdout)
    except (InvariantViolation, ValueError) as exc:
        # MalformedPositionError is a ValueError.
        _LOGGER.debug("Replay aborted", exc_info=True)
        sys.stderr.write(f"error: {exc}\n")
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
