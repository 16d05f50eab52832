"""FEN parsing and serialization for rectangular boards of any size."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessgrid.core.coord import MAX_FILES, Coord
from chessgrid.core.enums import Color
from chessgrid.core.piece import Piece

if TYPE_CHECKING:
    from chessgrid.core.chessboard import Chessboard

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_LETTERS = "KQkq"
_DIGITS = "0123456789"


class MalformedPositionError(ValueError):
    """Raised when a FEN string cannot describe a board."""


@dataclass(frozen=True, slots=True)
class FenFields:
    """The six FEN fields, decoded."""

    rows: tuple[str, ...]
    width: int
    height: int
    pieces: dict[Coord, Piece]
    turn: Color
    castling: str
    en_passant: Coord | None
    halfmove_clock: int
    fullmove_number: int


def row_width(row: str) -> int:
    """Number of squares a placement row covers.

    Each digit counts as that many empty squares (digits are read one at a
    time), each letter as one occupied square.
    """
    width = 0
    for ch in row:
        if ch in _DIGITS:
            width += int(ch)
        elif ch.isalpha():
            width += 1
        else:
            raise MalformedPositionError(f"Invalid FEN placement character: {ch!r}")
    return width


def board_size(rows: list[str] | tuple[str, ...]) -> tuple[int, int]:
    """``(width, height)`` of the placement, which must be rectangular."""
    widths = [row_width(row) for row in rows]
    if any(width != widths[0] for width in widths):
        raise MalformedPositionError(
            f"Board shape is not rectangular (row widths {widths})"
        )
    if widths[0] == 0:
        raise MalformedPositionError("Board has no squares")
    if widths[0] > MAX_FILES:
        raise MalformedPositionError(
            f"Board is {widths[0]} files wide (at most {MAX_FILES})"
        )
    return widths[0], len(rows)


def parse_fen(fen: str) -> FenFields:
    """Decode a FEN string.  Fields 5–6 (the clocks) are optional."""
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise MalformedPositionError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    # 1. Piece placement, first row = top rank
    rows = tuple(placement.split("/"))
    width, height = board_size(rows)
    pieces: dict[Coord, Piece] = {}
    for row_idx, row in enumerate(rows):
        y = height - 1 - row_idx
        x = 0
        for ch in row:
            if ch in _DIGITS:
                x += int(ch)
                continue
            coord = Coord(x, y)
            try:
                pieces[coord] = Piece.from_char(ch, coord)
            except ValueError as exc:
                raise MalformedPositionError(str(exc)) from exc
            x += 1

    # 2. Side to move
    if side_part == "w":
        turn = Color.WHITE
    elif side_part == "b":
        turn = Color.BLACK
    else:
        raise MalformedPositionError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling
    if castling_part != "-":
        if any(ch not in _CASTLING_LETTERS for ch in castling_part) or len(
            set(castling_part)
        ) != len(castling_part):
            raise MalformedPositionError(
                f"Invalid FEN castling field: {castling_part!r}"
            )

    # 4. En passant
    ep: Coord | None = None
    if ep_part != "-":
        try:
            ep = Coord.parse(ep_part)
        except ValueError as exc:
            raise MalformedPositionError(str(exc)) from exc
        if ep.x >= width or ep.y >= height:
            raise MalformedPositionError(
                f"En-passant square off the board: {ep_part!r}"
            )

    # 5–6. Clocks
    halfmove = _parse_counter(parts[4], "halfmove clock", 0) if len(parts) > 4 else 0
    fullmove = _parse_counter(parts[5], "fullmove number", 1) if len(parts) > 5 else 1

    return FenFields(
        rows=rows,
        width=width,
        height=height,
        pieces=pieces,
        turn=turn,
        castling=castling_part,
        en_passant=ep,
        halfmove_clock=halfmove,
        fullmove_number=fullmove,
    )


def _parse_counter(text: str, label: str, minimum: int) -> int:
    try:
        value = int(text)
    except ValueError:
        raise MalformedPositionError(f"Invalid FEN {label}: {text!r}") from None
    if value < minimum:
        raise MalformedPositionError(f"Invalid FEN {label}: {text!r}")
    return value


def _empty_run(count: int) -> str:
    # Digits are read one at a time, so long runs are split: 12 → "93".
    return "9" * (count // 9) + (str(count % 9) if count % 9 else "")


def placement_to_fen(board: Chessboard) -> str:
    """Serialise only the piece-placement field."""
    rows: list[str] = []
    for y in range(board.height - 1, -1, -1):
        empty = 0
        row = ""
        for x in range(board.width):
            piece = board.piece_at(Coord(x, y))
            if piece is None:
                empty += 1
                continue
            if empty:
                row += _empty_run(empty)
                empty = 0
            row += str(piece)
        if empty:
            row += _empty_run(empty)
        rows.append(row)
    return "/".join(rows)


def board_to_fen(board: Chessboard) -> str:
    """Serialise a :class:`Chessboard` to FEN."""
    side_str = "w" if board.turn == Color.WHITE else "b"
    ep = board.en_passant
    ep_str = ep.name if ep is not None else "-"
    return (
        f"{placement_to_fen(board)} {side_str} {board.castling.fen_field()} "
        f"{ep_str} {board.halfmove_clock} {board.fullmove_number}"
    )
