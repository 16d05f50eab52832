"""Notation package: FEN parsing and serialization."""

from chessgrid.core.notation.fen import (
    STARTING_FEN,
    FenFields,
    MalformedPositionError,
    board_size,
    board_to_fen,
    parse_fen,
    placement_to_fen,
    row_width,
)

__all__ = [
    "STARTING_FEN",
    "FenFields",
    "MalformedPositionError",
    "board_size",
    "board_to_fen",
    "parse_fen",
    "placement_to_fen",
    "row_width",
]
