"""Piece model and attack-direction tables."""

from __future__ import annotations

from dataclasses import dataclass, field

from chessgrid.core.coord import Coord
from chessgrid.core.enums import Color, PieceType

BISHOP_DIRS: tuple[Coord, ...] = (
    Coord(-1, -1),
    Coord(-1, 1),
    Coord(1, -1),
    Coord(1, 1),
)
ROOK_DIRS: tuple[Coord, ...] = (Coord(-1, 0), Coord(1, 0), Coord(0, -1), Coord(0, 1))
QUEEN_DIRS: tuple[Coord, ...] = BISHOP_DIRS + ROOK_DIRS

KNIGHT_OFFSETS: tuple[Coord, ...] = (
    Coord(-2, -1),
    Coord(-2, 1),
    Coord(-1, -2),
    Coord(-1, 2),
    Coord(1, -2),
    Coord(1, 2),
    Coord(2, -1),
    Coord(2, 1),
)

_FORWARD: dict[Color, Coord] = {
    Color.WHITE: Coord(0, 1),
    Color.BLACK: Coord(0, -1),
}

# Pawns attack along the two forward diagonals of their color.
_PAWN_ATTACKS: dict[Color, tuple[Coord, ...]] = {
    color: (forward.offset(-1, 0), forward.offset(1, 0))
    for color, forward in _FORWARD.items()
}

_ATTACK_DIRECTIONS: dict[PieceType, tuple[Coord, ...]] = {
    PieceType.KNIGHT: KNIGHT_OFFSETS,
    PieceType.BISHOP: BISHOP_DIRS,
    PieceType.ROOK: ROOK_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
    PieceType.KING: QUEEN_DIRS,
}

_SLIDERS = frozenset((PieceType.BISHOP, PieceType.ROOK, PieceType.QUEEN))

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)
DEFAULT_PROMOTION = PieceType.QUEEN

# FEN character ↔ PieceType (uppercase = white, lowercase = black)
_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}
_TYPES_BY_LETTER: dict[str, PieceType] = {v: k for k, v in _LETTERS.items()}


def pawn_attacks(color: Color) -> tuple[Coord, ...]:
    """The two capture offsets of a *color* pawn."""
    return _PAWN_ATTACKS[color]


def piece_type_from_letter(letter: str) -> PieceType:
    """Case-insensitive FEN letter → piece type."""
    try:
        return _TYPES_BY_LETTER[letter.lower()]
    except KeyError:
        raise ValueError(f"Invalid piece character: {letter!r}") from None


@dataclass(slots=True)
class Piece:
    """A piece standing on the board.

    ``coord`` follows the piece as it moves and takes no part in equality,
    so ``Piece(Color.WHITE, PieceType.KING)`` compares equal to a white king
    wherever it stands.  Pieces are never shared: snapshots copy them.
    """

    color: Color
    piece_type: PieceType
    coord: Coord | None = field(default=None, compare=False)

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        letter = _LETTERS[self.piece_type]
        return letter.upper() if self.color == Color.WHITE else letter

    @classmethod
    def from_char(cls, char: str, coord: Coord | None = None) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        if len(char) != 1 or not char.isalpha():
            raise ValueError(f"Invalid piece character: {char!r}")
        color = Color.WHITE if char.isupper() else Color.BLACK
        return cls(color, piece_type_from_letter(char), coord)

    # ── Movement traits ──────────────────────────────────────────────────

    @property
    def attack_directions(self) -> tuple[Coord, ...]:
        """Offsets along which this piece attacks."""
        if self.piece_type == PieceType.PAWN:
            return _PAWN_ATTACKS[self.color]
        return _ATTACK_DIRECTIONS[self.piece_type]

    @property
    def slides(self) -> bool:
        """Whether the attack repeats along its direction until blocked."""
        return self.piece_type in _SLIDERS

    @property
    def forward(self) -> Coord:
        return _FORWARD[self.color]

    def attacks_along(self, direction: Coord) -> bool:
        """Whether a slider attacks along *direction* (from itself outward)."""
        return self.slides and direction in self.attack_directions

    def copy(self) -> Piece:
        return Piece(self.color, self.piece_type, self.coord)
