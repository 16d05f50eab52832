"""Tests for FEN parsing and serialization."""

import pytest

from chessgrid.core import Chessboard
from chessgrid.core.coord import Coord
from chessgrid.core.enums import Color, PieceType
from chessgrid.core.notation import (
    STARTING_FEN,
    MalformedPositionError,
    board_size,
    parse_fen,
    row_width,
)
from chessgrid.core.piece import Piece


class TestFenParsing:
    def test_starting_fields(self) -> None:
        fields = parse_fen(STARTING_FEN)
        assert (fields.width, fields.height) == (8, 8)
        assert fields.turn == Color.WHITE
        assert fields.castling == "KQkq"
        assert fields.en_passant is None
        assert fields.halfmove_clock == 0
        assert fields.fullmove_number == 1

    def test_first_row_is_top_rank(self) -> None:
        fields = parse_fen(STARTING_FEN)
        assert fields.pieces[Coord(4, 7)] == Piece(Color.BLACK, PieceType.KING)
        assert fields.pieces[Coord(4, 0)] == Piece(Color.WHITE, PieceType.KING)

    def test_pieces_know_their_coord(self) -> None:
        fields = parse_fen(STARTING_FEN)
        assert all(coord == piece.coord for coord, piece in fields.pieces.items())

    def test_en_passant_square(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        assert parse_fen(fen).en_passant == Coord(4, 2)

    def test_clocks_optional(self) -> None:
        fields = parse_fen("4k3/8/8/8/8/8/8/4K3 b - -")
        assert fields.halfmove_clock == 0
        assert fields.fullmove_number == 1

    def test_non_square_board(self) -> None:
        fields = parse_fen("4k/5/5/K4 w - - 0 1")
        assert (fields.width, fields.height) == (5, 4)
        assert fields.pieces[Coord(0, 0)] == Piece(Color.WHITE, PieceType.KING)

    def test_digits_are_read_one_at_a_time(self) -> None:
        assert row_width("12") == 3
        assert row_width("k92") == 12


class TestFenErrors:
    def test_unequal_rows(self) -> None:
        with pytest.raises(MalformedPositionError, match="not rectangular"):
            parse_fen("8/7/8/8/8/8/8/8 w - - 0 1")

    def test_overlong_row(self) -> None:
        with pytest.raises(MalformedPositionError, match="not rectangular"):
            parse_fen("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNRR w KQkq - 0 1")

    def test_board_size_helper(self) -> None:
        assert board_size(["3", "12"]) == (3, 2)
        with pytest.raises(MalformedPositionError):
            board_size(["3", "4"])

    def test_too_many_files(self) -> None:
        assert board_size(["998"]) == (26, 1)
        with pytest.raises(MalformedPositionError, match="at most 26"):
            parse_fen("k9992/99993 w - - 0 1")

    def test_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_fen("invalid")

    @pytest.mark.parametrize(
        "fen, message",
        [
            ("8/8 w", "need 4-6 fields"),
            ("8/8/8/8/8/8/8/8 x - - 0 1", "side-to-move"),
            ("8/8/8/8/8/8/8/8 w KX - 0 1", "castling"),
            ("8/8/8/8/8/8/8/8 w KK - 0 1", "castling"),
            ("8/8/8/8/8/8/8/8 w - z9 0 1", "off the board"),
            ("8/8/8/8/8/8/8/8 w - e 0 1", "Invalid square name"),
            ("8/8/8/8/8/8/8/8 w - - -1 1", "halfmove"),
            ("8/8/8/8/8/8/8/8 w - - 0 0", "fullmove"),
            ("8/8/8/8/8/8/8/8 w - - x 1", "halfmove"),
            ("7x/8/8/8/8/8/8/8 w - - 0 1", "piece character"),
            ("7*/8/8/8/8/8/8/8 w - - 0 1", "placement character"),
            ("0/0 w - - 0 1", "no squares"),
        ],
    )
    def test_malformed(self, fen: str, message: str) -> None:
        with pytest.raises(MalformedPositionError, match=message):
            parse_fen(fen)


class TestFenRoundTrip:
    @pytest.mark.parametrize(
        "fen",
        [
            STARTING_FEN,
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1",
            "rnbqkbnr/ppp1p1pp/8/3pPp2/8/8/PPPP1PPP/RNBQKBNR w KQkq f6 0 3",
            "r3k2r/8/8/8/8/8/8/R3K2R b Kq - 12 40",
            "4k/5/5/K4 w - - 0 1",
            "k92/93/K92 w - - 3 9",
        ],
    )
    def test_serialize_reproduces_fen(self, fen: str) -> None:
        assert Chessboard(fen).to_fen() == fen

    def test_castling_field_written_in_canonical_order(self) -> None:
        board = Chessboard("r3k2r/8/8/8/8/8/8/R3K2R w qkQ - 0 1")
        assert board.to_fen().split()[2] == "Qkq"

    def test_castling_field_reflects_current_rights(self) -> None:
        # No king on e1, so White's letters cannot survive.
        board = Chessboard("r3k2r/8/8/8/8/8/4K3/R6R w KQkq - 0 1")
        assert board.to_fen().split()[2] == "kq"

    def test_castling_letters_without_rooks_are_dropped(self) -> None:
        board = Chessboard("4k3/8/8/8/8/8/8/4K3 w KQ - 0 1")
        assert board.to_fen().split()[2] == "-"
        king = board.piece_at(Coord.parse("e1"))
        assert king is not None
        assert board.castling_rights(king) == set()

    def test_long_empty_run_is_split(self) -> None:
        board = Chessboard("k92/93/K92 w - - 0 1")
        board.remove_piece(Coord(0, 2))
        assert board.to_fen().split()[0] == "93/93/K92"
