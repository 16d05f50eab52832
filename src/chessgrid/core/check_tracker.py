"""Per-color check and pin detection."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

from chessgrid.core.coord import Coord
from chessgrid.core.enums import Color, PieceType
from chessgrid.core.line_of_sight import LineOfSight
from chessgrid.core.piece import KNIGHT_OFFSETS, QUEEN_DIRS, pawn_attacks

if TYPE_CHECKING:
    from chessgrid.core.chessboard import Chessboard
    from chessgrid.core.move import Move

_LOGGER = logging.getLogger(__name__)


class CheckTracker:
    """Tracks the checks against, and the pins on, one color's king.

    The tracker is created once per color and lives as long as the board.
    :meth:`update` recomputes :attr:`checks` and :attr:`pins`; the board
    calls it only for the side about to move, so between its own turns a
    tracker still describes the position it last saw.
    :meth:`is_coord_attacked` always looks at the live board.
    """

    __slots__ = ("_board", "color", "checks", "pins", "last_move", "last_en_passant")

    def __init__(self, board: Chessboard, color: Color) -> None:
        self._board = board
        self.color = color
        self.checks: list[LineOfSight] = []
        self.pins: list[LineOfSight] = []
        self.last_move: Move | None = None
        self.last_en_passant = False
        self.rescan()

    # -- Updates ------------------------------------------------------------

    def update(self, move: Move, en_passant: bool = False) -> None:
        """Refresh checks and pins after *move* was played."""
        self.last_move = move
        self.last_en_passant = en_passant
        self.rescan()
        if self.checks:
            _LOGGER.debug(
                "%s king in check after %s%s: %s",
                self.color,
                move,
                " (en passant)" if en_passant else "",
                ", ".join(str(line) for line in self.checks),
            )

    def rescan(self) -> None:
        """Recompute checks and pins from the current board."""
        king = self._board.king_coord(self.color)
        if king is None:
            self.checks = []
            self.pins = []
            return

        checks: list[LineOfSight] = []
        pins: list[LineOfSight] = []
        for line in self._lines_from(king):
            if line.is_check:
                checks.append(line)
            elif line.is_pin:
                pins.append(line)
        self.checks = checks
        self.pins = pins

    # -- Queries ------------------------------------------------------------

    def pins_and_checks(self) -> tuple[list[LineOfSight], list[LineOfSight]]:
        return list(self.pins), list(self.checks)

    def is_checked(self) -> bool:
        return bool(self.checks)

    def pin_on(self, coord: Coord) -> LineOfSight | None:
        """The pin holding the piece on *coord*, if any."""
        for line in self.pins:
            if line.blocker == coord:
                return line
        return None

    def is_coord_attacked(self, coord: Coord) -> bool:
        """Is *coord* attacked by the opposing color right now?"""
        return any(line.is_check for line in self._lines_from(coord))

    # -- Scanning -----------------------------------------------------------

    def _lines_from(self, origin: Coord) -> Iterator[LineOfSight]:
        board = self._board
        for direction in QUEEN_DIRS:
            yield LineOfSight.cast(board, origin, direction, self.color)
        yield from self._jump_attacks(origin)

    def _jump_attacks(self, origin: Coord) -> Iterator[LineOfSight]:
        enemy = self.color.opposite
        board = self._board
        jumpers: tuple[tuple[PieceType, tuple[Coord, ...]], ...] = (
            (PieceType.KNIGHT, KNIGHT_OFFSETS),
            (PieceType.PAWN, pawn_attacks(enemy)),
            (PieceType.KING, QUEEN_DIRS),
        )
        for piece_type, offsets in jumpers:
            for offset in offsets:
                source = origin - offset
                if not board.coord_in_board(source):
                    continue
                piece = board.piece_at(source)
                if (
                    piece is not None
                    and piece.color == enemy
                    and piece.piece_type == piece_type
                ):
                    yield LineOfSight.jump(origin, source)
