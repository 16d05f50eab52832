"""Lines of sight cast outward from a square."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessgrid.core.coord import Coord
from chessgrid.core.enums import Color, SightKind

if TYPE_CHECKING:
    from chessgrid.core.chessboard import Chessboard


@dataclass(frozen=True, slots=True)
class LineOfSight:
    """Squares seen from *origin* along *direction*, with their verdict.

    ``squares`` runs from the first step up to and including the stopping
    square.  For a pin these are exactly the squares the pinned piece may
    still occupy (attacker included); for a check they are the squares on
    which the check can be blocked or captured.
    """

    origin: Coord
    direction: Coord
    squares: tuple[Coord, ...]
    kind: SightKind
    attacker: Coord | None = None
    blocker: Coord | None = None

    @classmethod
    def cast(
        cls, board: Chessboard, origin: Coord, direction: Coord, color: Color
    ) -> LineOfSight:
        """Walk from *origin* until an enemy piece, a second ally or the edge.

        *color* is the side the origin belongs to.  An enemy slider that
        attacks back along the ray is a check when no ally stands in between
        and a pin when exactly one does.
        """
        squares: list[Coord] = []
        blocker: Coord | None = None
        back = -direction
        coord = origin + direction
        while board.coord_in_board(coord):
            squares.append(coord)
            piece = board.piece_at(coord)
            if piece is None:
                coord = coord + direction
                continue
            if piece.color == color:
                if blocker is not None:
                    break
                blocker = coord
                coord = coord + direction
                continue
            if piece.attacks_along(back):
                kind = SightKind.CHECK if blocker is None else SightKind.PIN
                return cls(origin, direction, tuple(squares), kind, coord, blocker)
            break
        return cls(origin, direction, tuple(squares), SightKind.CLEAR, None, blocker)

    @classmethod
    def jump(cls, origin: Coord, attacker: Coord) -> LineOfSight:
        """Single-hop attack (knight, pawn, king) reaching *origin*."""
        return cls(
            origin, attacker - origin, (attacker,), SightKind.CHECK, attacker, None
        )

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def is_check(self) -> bool:
        return self.kind == SightKind.CHECK

    @property
    def is_pin(self) -> bool:
        return self.kind == SightKind.PIN

    def allows(self, coord: Coord) -> bool:
        """Whether *coord* lies on this line (for a pin: stays pinned-legal)."""
        return coord in self.squares

    def __str__(self) -> str:
        path = " ".join(str(sq) for sq in self.squares)
        return f"{self.kind.value} {self.origin}→[{path}]"
