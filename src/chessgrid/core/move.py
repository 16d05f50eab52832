"""Move value object (long algebraic representation)."""

from __future__ import annotations

import re
from dataclasses import dataclass

from chessgrid.core.coord import Coord
from chessgrid.core.enums import PieceType
from chessgrid.core.piece import PROMOTION_TYPES, piece_type_from_letter

_UCI_RE = re.compile(r"([a-z][1-9][0-9]*)([a-z][1-9][0-9]*)([nbrq])?")

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single move request.

    ``promotion`` names the piece a pawn turns into when it reaches the far
    rank; ``None`` means the default (queen).
    """

    source: Coord
    target: Coord
    promotion: PieceType | None = None

    def __post_init__(self) -> None:
        if self.promotion is not None and self.promotion not in PROMOTION_TYPES:
            raise ValueError(f"Cannot promote to {self.promotion.name}")

    @property
    def moved_by(self) -> Coord:
        """Displacement from source to target."""
        return self.target - self.source

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{self.source}{self.target}"
        if self.promotion is not None:
            base += _PROMO_CHARS[self.promotion]
        return base

    @property
    def uci(self) -> str:
        """Long algebraic notation, e.g. 'e7e8q'."""
        return str(self)

    @classmethod
    def from_uci(cls, text: str) -> Move:
        """Parse long algebraic notation such as 'e2e4' or 'a10a11q'."""
        match = _UCI_RE.fullmatch(text.strip().lower())
        if match is None:
            raise ValueError(f"Invalid move text: {text!r}")
        source, target, promo = match.groups()
        promotion = piece_type_from_letter(promo) if promo else None
        return cls(Coord.parse(source), Coord.parse(target), promotion)
