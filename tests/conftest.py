"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from chessgrid.core import STARTING_FEN, Chessboard

CASTLING_FEN = "rnbqk2r/pppppppp/8/8/8/8/PPPPPPPP/RNBQK2R w KQkq - 0 1"
OPEN_CORNERS_FEN = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"


@pytest.fixture
def start_board() -> Chessboard:
    """A fresh standard starting position."""
    return Chessboard(STARTING_FEN)


@pytest.fixture
def castling_board() -> Chessboard:
    """Both sides may castle kingside; queenside is still blocked."""
    return Chessboard(CASTLING_FEN)


@pytest.fixture
def open_corners_board() -> Chessboard:
    """Kings and rooks only, every castling right intact."""
    return Chessboard(OPEN_CORNERS_FEN)
