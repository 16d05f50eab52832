"""Piece-specific move execution.

The board hands every (pre-validated) move to :func:`execute_move`, which
relocates the piece and applies the side effects particular to its type:
the rook hop of a castling king, removal of a pawn captured en passant, and
promotion of a pawn reaching the far rank.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessgrid.core.coord import Coord
from chessgrid.core.enums import Color, PieceType
from chessgrid.core.piece import DEFAULT_PROMOTION

if TYPE_CHECKING:
    from chessgrid.core.chessboard import Chessboard
    from chessgrid.core.move import Move
    from chessgrid.core.piece import Piece


def execute_move(board: Chessboard, move: Move) -> bool:
    """Play *move* on *board*; return whether it captured en passant."""
    piece = board.piece_at(move.source)
    assert piece is not None

    en_passant = False
    match piece.piece_type:
        case PieceType.KING if abs(move.moved_by.x) == 2 and move.moved_by.y == 0:
            _hop_castling_rook(board, move)
        case PieceType.PAWN if _is_en_passant_capture(board, move):
            board.remove_piece(Coord(move.target.x, move.source.y))
            en_passant = True
        case _:
            pass

    relocate(board, piece, move.target)

    if piece.piece_type == PieceType.PAWN and _on_last_rank(board, piece):
        board.promote_pawn(piece, move.promotion or DEFAULT_PROMOTION)
    return en_passant


def relocate(board: Chessboard, piece: Piece, target: Coord) -> None:
    """Move *piece* to *target*, discarding whatever stood there."""
    if piece.coord is not None:
        board.remove_piece(piece.coord)
    board.remove_piece(target)
    board.place_piece(target, piece)


def _hop_castling_rook(board: Chessboard, move: Move) -> None:
    rook_from, rook_to = board.castling.rook_squares(move.source, move.target)
    rook = board.piece_at(rook_from)
    if rook is not None and rook.piece_type == PieceType.ROOK:
        relocate(board, rook, rook_to)


def _is_en_passant_capture(board: Chessboard, move: Move) -> bool:
    return (
        move.moved_by.x != 0
        and not board.has_piece_at(move.target)
        and board.is_en_passant_square(move.target)
    )


def _on_last_rank(board: Chessboard, pawn: Piece) -> bool:
    assert pawn.coord is not None
    last_rank = board.height - 1 if pawn.color == Color.WHITE else 0
    return pawn.coord.y == last_rank
