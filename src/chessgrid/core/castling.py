"""Castling rights bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessgrid.core.coord import Coord
from chessgrid.core.enums import Color, PieceType

if TYPE_CHECKING:
    from chessgrid.core.chessboard import Chessboard
    from chessgrid.core.piece import Piece

# Squares the king travels toward its rook when castling.
_CASTLE_STEPS = 2


@dataclass(slots=True)
class _SideRights:
    """Moved-flags for one color; once set, a flag is never cleared."""

    king_home: Coord | None
    kingside_corner: Coord
    queenside_corner: Coord
    king_moved: bool = False
    kingside_rook_moved: bool = False
    queenside_rook_moved: bool = False

    def can_castle(self, kingside: bool) -> bool:
        if self.king_moved:
            return False
        return not (self.kingside_rook_moved if kingside else self.queenside_rook_moved)


class CastlingTracker:
    """Tracks which king and corner rooks have left their home squares.

    Home squares are fixed at construction: each king's square on its back
    rank (``y = 0`` for White, the top rank for Black) and the two corners
    of that rank.  The corner with the higher ``x`` is the kingside one.
    """

    __slots__ = ("_board", "_sides")

    def __init__(self, board: Chessboard, fen_field: str = "-") -> None:
        self._board = board
        self._sides: dict[Color, _SideRights] = {}
        for color, letters in ((Color.WHITE, "KQ"), (Color.BLACK, "kq")):
            rank = 0 if color == Color.WHITE else board.height - 1
            king = board.king_coord(color)
            king_home = king if king is not None and king.y == rank else None
            self._sides[color] = _SideRights(
                king_home=king_home,
                kingside_corner=Coord(board.width - 1, rank),
                queenside_corner=Coord(0, rank),
                king_moved=king_home is None,
                kingside_rook_moved=letters[0] not in fen_field,
                queenside_rook_moved=letters[1] not in fen_field,
            )
        # FEN letters without their rook on the corner grant nothing.
        self.update()

    # -- Updates ------------------------------------------------------------

    def update(self) -> None:
        """Flag every king or corner rook no longer on its home square."""
        for color, side in self._sides.items():
            if not side.king_moved and not self._holds(
                side.king_home, color, PieceType.KING
            ):
                side.king_moved = True
            if not side.kingside_rook_moved and not self._holds(
                side.kingside_corner, color, PieceType.ROOK
            ):
                side.kingside_rook_moved = True
            if not side.queenside_rook_moved and not self._holds(
                side.queenside_corner, color, PieceType.ROOK
            ):
                side.queenside_rook_moved = True

    def _holds(self, coord: Coord | None, color: Color, piece_type: PieceType) -> bool:
        if coord is None:
            return False
        piece = self._board.piece_at(coord)
        return piece is not None and piece.color == color and piece.piece_type == piece_type

    # -- Queries ------------------------------------------------------------

    def has_right(self, color: Color, kingside: bool) -> bool:
        return self._sides[color].can_castle(kingside)

    def valid_castle_coords(self, king: Piece) -> set[Coord]:
        """Destinations *king* may castle to right now.

        The right must still exist, the king must not be in check, the
        squares the king crosses (destination included) must not be
        attacked, and every square between king and rook must be empty.
        """
        side = self._sides[king.color]
        if king.coord is None or side.king_moved or king.coord != side.king_home:
            return set()

        board = self._board
        tracker = board.tracker(king.color)
        if tracker.is_coord_attacked(king.coord):
            return set()

        destinations: set[Coord] = set()
        for kingside, corner in (
            (True, side.kingside_corner),
            (False, side.queenside_corner),
        ):
            if not side.can_castle(kingside):
                continue
            if not self._holds(corner, king.color, PieceType.ROOK):
                continue
            distance = abs(corner.x - king.coord.x)
            if distance <= _CASTLE_STEPS:
                continue
            step = Coord(1 if corner.x > king.coord.x else -1, 0)
            between = [king.coord + step * i for i in range(1, distance)]
            if any(board.has_piece_at(sq) for sq in between):
                continue
            transit = [king.coord + step * i for i in range(1, _CASTLE_STEPS + 1)]
            if any(tracker.is_coord_attacked(sq) for sq in transit):
                continue
            destinations.add(transit[-1])
        return destinations

    def rook_squares(self, king_from: Coord, king_to: Coord) -> tuple[Coord, Coord]:
        """``(rook_from, rook_to)`` for a castling king move."""
        step = Coord(1 if king_to.x > king_from.x else -1, 0)
        rook_from = Coord(0 if step.x < 0 else self._board.width - 1, king_from.y)
        return rook_from, king_to - step

    def fen_field(self) -> str:
        """Current rights in ``KQkq`` order, ``-`` when none remain."""
        field = ""
        for color, letters in ((Color.WHITE, "KQ"), (Color.BLACK, "kq")):
            side = self._sides[color]
            if side.can_castle(kingside=True):
                field += letters[0]
            if side.can_castle(kingside=False):
                field += letters[1]
        return field or "-"

    def __str__(self) -> str:
        return self.fen_field()
