"""Board coordinates.

Coordinates are zero-based ``(x, y)`` pairs: ``x`` grows to the right
(file a, b, c, ...) and ``y`` grows upward (rank 1, 2, 3, ...).  The first
row of a FEN placement is the topmost rank, ``y = height - 1``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_NAME_RE = re.compile(r"([a-z])([1-9][0-9]*)")

# Files are named a..z, so no board is wider than this.
MAX_FILES = 26


@dataclass(frozen=True, slots=True)
class Coord:
    """Immutable 2D integer coordinate."""

    x: int
    y: int

    # ── Arithmetic ───────────────────────────────────────────────────────

    def __add__(self, other: Coord) -> Coord:
        if not isinstance(other, Coord):
            return NotImplemented
        return Coord(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Coord) -> Coord:
        if not isinstance(other, Coord):
            return NotImplemented
        return Coord(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: int) -> Coord:
        if not isinstance(factor, int):
            return NotImplemented
        return Coord(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __neg__(self) -> Coord:
        return Coord(-self.x, -self.y)

    def offset(self, dx: int, dy: int) -> Coord:
        """Coordinate shifted by ``(dx, dy)``."""
        return Coord(self.x + dx, self.y + dy)

    # ── Notation ─────────────────────────────────────────────────────────

    @classmethod
    def parse(cls, name: str) -> Coord:
        """Parse algebraic square name, e.g. 'e4' → Coord(4, 3)."""
        match = _NAME_RE.fullmatch(name.strip().lower())
        if match is None:
            raise ValueError(f"Invalid square name: {name!r}")
        return cls(ord(match.group(1)) - ord("a"), int(match.group(2)) - 1)

    @property
    def name(self) -> str:
        """Algebraic name, e.g. Coord(4, 3) → 'e4'."""
        if not (0 <= self.x < MAX_FILES) or self.y < 0:
            raise ValueError(f"{self!r} has no algebraic name")
        return chr(ord("a") + self.x) + str(self.y + 1)

    def __str__(self) -> str:
        # Directions and off-board steps have no square name.
        if 0 <= self.x < MAX_FILES and self.y >= 0:
            return self.name
        return f"({self.x}, {self.y})"
