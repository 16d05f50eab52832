"""Position state machine for rectangular chessboards of any size."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from chessgrid.core.castling import CastlingTracker
from chessgrid.core.check_tracker import CheckTracker
from chessgrid.core.coord import Coord
from chessgrid.core.enums import Color, PieceType
from chessgrid.core.line_of_sight import LineOfSight
from chessgrid.core.move import Move
from chessgrid.core.movement import execute_move
from chessgrid.core.notation.fen import STARTING_FEN, board_to_fen, parse_fen
from chessgrid.core.piece import DEFAULT_PROMOTION, Piece

_LOGGER = logging.getLogger(__name__)


class InvariantViolation(RuntimeError):
    """Raised when a caller breaks the move-application contract."""


class Chessboard:
    """Piece placement plus side to move, castling, en passant and clocks.

    The board is built once per game from a FEN string and mutated in
    place by :meth:`apply_move`.  Moves are assumed legal; the board only
    checks that the source holds a piece of the side to move and that both
    squares are on the board.  After every move the tracker of the side
    about to move recomputes the checks against and pins on its king.
    """

    __slots__ = (
        "width",
        "height",
        "_pieces",
        "_turn",
        "_en_passant",
        "_halfmove_clock",
        "_fullmove_number",
        "castling",
        "_trackers",
        "current_pins",
        "current_checks",
    )

    def __init__(self, fen: str = STARTING_FEN) -> None:
        fields = parse_fen(fen)
        self.width = fields.width
        self.height = fields.height
        self._pieces: dict[Coord, Piece] = dict(fields.pieces)
        self._turn = fields.turn
        self._en_passant = fields.en_passant
        self._halfmove_clock = fields.halfmove_clock
        self._fullmove_number = fields.fullmove_number

        self.castling = CastlingTracker(self, fields.castling)
        # Both trackers are built up front, without touching the turn or the
        # full-move number read from the FEN.
        self._trackers: dict[Color, CheckTracker] = {
            color: CheckTracker(self, color) for color in Color
        }
        self.current_pins: list[LineOfSight] = []
        self.current_checks: list[LineOfSight] = []
        self._refresh_pins_and_checks()

    # ── Element access ───────────────────────────────────────────────────

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def piece_at(self, coord: Coord) -> Piece | None:
        return self._pieces.get(coord)

    def has_piece_at(self, coord: Coord) -> bool:
        return coord in self._pieces

    def coord_in_board(self, coord: Coord) -> bool:
        return 0 <= coord.x < self.width and 0 <= coord.y < self.height

    def pieces(self, color: Color | None = None) -> Iterator[Piece]:
        """Pieces on the board, optionally only those of *color*."""
        for piece in self._pieces.values():
            if color is None or piece.color == color:
                yield piece

    def king_coord(self, color: Color) -> Coord | None:
        """Square of *color*'s king, ``None`` if it has none."""
        for coord, piece in self._pieces.items():
            if piece.color == color and piece.piece_type == PieceType.KING:
                return coord
        return None

    def is_allied_piece(self, coord: Coord) -> bool:
        """Whether *coord* holds a piece of the side to move."""
        piece = self._pieces.get(coord)
        return piece is not None and piece.color == self._turn

    def is_enemy_piece(self, coord: Coord) -> bool:
        """Whether *coord* holds a piece of the side not to move."""
        piece = self._pieces.get(coord)
        return piece is not None and piece.color != self._turn

    # ── Game state ───────────────────────────────────────────────────────

    @property
    def turn(self) -> Color:
        return self._turn

    @property
    def halfmove_clock(self) -> int:
        return self._halfmove_clock

    @property
    def fullmove_number(self) -> int:
        return self._fullmove_number

    @property
    def en_passant(self) -> Coord | None:
        return self._en_passant

    def is_en_passant_square(self, coord: Coord) -> bool:
        return self._en_passant is not None and self._en_passant == coord

    def tracker(self, color: Color) -> CheckTracker:
        return self._trackers[color]

    def is_king_checked(self) -> bool:
        """Whether the side to move is in check."""
        return bool(self.current_checks)

    def is_coord_attacked(self, coord: Coord) -> bool:
        """Whether the side not to move attacks *coord*."""
        return self._trackers[self._turn].is_coord_attacked(coord)

    def pin_line(self, coord: Coord) -> LineOfSight | None:
        """The pin restricting the side to move's piece on *coord*, if any."""
        for line in self.current_pins:
            if line.blocker == coord:
                return line
        return None

    def castling_rights(self, king: Piece) -> set[Coord]:
        """Squares *king* may castle to right now."""
        return self.castling.valid_castle_coords(king)

    # ── Mutation ─────────────────────────────────────────────────────────

    def apply_move(self, move: Move) -> None:
        """Apply a pre-validated *move* for the side to move.

        Raises :class:`InvariantViolation` before touching any state when
        the source is empty, holds the wrong color, or either square is off
        the board.
        """
        piece = self._pieces.get(move.source)
        if (
            piece is None
            or not self.coord_in_board(move.source)
            or not self.coord_in_board(move.target)
        ):
            raise InvariantViolation(
                f"Move {move} is on an empty square or not in the board"
            )
        if piece.color != self._turn:
            raise InvariantViolation(
                f"Move {move} moves a {piece.color!s} piece on {self._turn!s}'s turn"
            )

        self._update_halfmove_clock(move, piece)
        en_passant = execute_move(self, move)
        self.castling.update()
        self._update_en_passant_square(move)
        self._switch_turns()

        _LOGGER.debug("Applied %s; %s to move", move, self._turn)

        self._trackers[self._turn].update(move, en_passant)
        self._refresh_pins_and_checks()

    def promote_pawn(
        self, pawn: Piece, promotion: PieceType = DEFAULT_PROMOTION
    ) -> Piece:
        """Replace *pawn* with a new *promotion* piece of the same color."""
        coord = pawn.coord
        if coord is None or self._pieces.get(coord) is not pawn:
            raise InvariantViolation(f"{pawn!r} is not on the board")
        self.remove_piece(coord)
        promoted = Piece(pawn.color, promotion)
        self.place_piece(coord, promoted)
        return promoted

    def place_piece(self, coord: Coord, piece: Piece) -> None:
        piece.coord = coord
        self._pieces[coord] = piece

    def remove_piece(self, coord: Coord) -> Piece | None:
        return self._pieces.pop(coord, None)

    def _update_halfmove_clock(self, move: Move, piece: Piece) -> None:
        if self.has_piece_at(move.target) or piece.piece_type == PieceType.PAWN:
            self._halfmove_clock = 0
        else:
            self._halfmove_clock += 1

    def _update_en_passant_square(self, move: Move) -> None:
        # Runs before the turn flips, so "enemy" is relative to the mover.
        piece = self._pieces.get(move.target)
        self._en_passant = None
        if piece is None or piece.piece_type != PieceType.PAWN:
            return
        if move.moved_by == piece.forward * 2 and self._has_neighboring_enemy_pawn(
            move.target
        ):
            self._en_passant = move.source + piece.forward

    def _has_neighboring_enemy_pawn(self, coord: Coord) -> bool:
        for neighbor in (coord.offset(1, 0), coord.offset(-1, 0)):
            piece = self._pieces.get(neighbor)
            if (
                piece is not None
                and piece.color != self._turn
                and piece.piece_type == PieceType.PAWN
            ):
                return True
        return False

    def _switch_turns(self) -> None:
        if self._turn == Color.WHITE:
            self._turn = Color.BLACK
        else:
            self._turn = Color.WHITE
            self._fullmove_number += 1

    def _refresh_pins_and_checks(self) -> None:
        self.current_pins, self.current_checks = self._trackers[
            self._turn
        ].pins_and_checks()

    # ── Snapshots / serialisation ────────────────────────────────────────

    def snapshot(self) -> dict[Coord, Piece]:
        """Deep copy of the placement; mutating it never affects the board."""
        return {coord: piece.copy() for coord, piece in self._pieces.items()}

    def to_fen(self) -> str:
        return board_to_fen(self)

    def __str__(self) -> str:
        return self.to_fen()

    def __repr__(self) -> str:
        rows: list[str] = []
        for y in range(self.height - 1, -1, -1):
            row = []
            for x in range(self.width):
                p = self._pieces.get(Coord(x, y))
                row.append(str(p) if p else ".")
            rows.append(f"{y + 1:>2} {' '.join(row)}")
        files = " ".join(chr(ord("a") + x) for x in range(self.width))
        rows.append(f"   {files}")
        return "\n".join(rows)
