"""Core domain layer — pure chess position logic with zero external dependencies.

Quick start::

    from chessgrid.core import Chessboard, Move

    board = Chessboard()  # standard 8x8 start; any rectangular FEN works
    board.apply_move(Move.from_uci("e2e4"))
    print(board.to_fen())
    print(board.is_king_checked())
"""

from chessgrid.core.castling import CastlingTracker
from chessgrid.core.check_tracker import CheckTracker
from chessgrid.core.chessboard import Chessboard, InvariantViolation
from chessgrid.core.coord import Coord
from chessgrid.core.enums import Color, PieceType, SightKind
from chessgrid.core.line_of_sight import LineOfSight
from chessgrid.core.move import Move
from chessgrid.core.notation import (
    STARTING_FEN,
    MalformedPositionError,
    board_to_fen,
    parse_fen,
)
from chessgrid.core.piece import DEFAULT_PROMOTION, Piece

__all__ = [
    # Enums
    "Color",
    "PieceType",
    "SightKind",
    # Value objects
    "Coord",
    "Move",
    "Piece",
    "DEFAULT_PROMOTION",
    # Board and trackers
    "Chessboard",
    "CastlingTracker",
    "CheckTracker",
    "LineOfSight",
    # Errors
    "InvariantViolation",
    "MalformedPositionError",
    # Notation
    "STARTING_FEN",
    "board_to_fen",
    "parse_fen",
]
