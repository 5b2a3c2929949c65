"""Board coordinates and compass navigation.

Positions are labelled with a file letter (``i`` to ``l``, the ``x`` axis
running left to right) followed by a rank digit (``1`` to ``4``, the ``y``
axis running bottom to top)::

    4 | i4 j4 k4 l4
    3 | i3 j3 k3 l3
    2 | i2 j2 k2 l2
    1 | i1 j1 k1 l1
        -----------
         i  j  k  l

Stepping off the grid never wraps: the navigation helpers return ``None``
instead.  Only :meth:`Position.from_coords` raises
:class:`~stackgrid.errors.OutOfBoundsError`.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Tuple

from .errors import NotationError, OutOfBoundsError


# Dimensions of the square board.
SIZE = 4
FILES = "ijkl"
RANKS = "1234"

Coords = Tuple[int, int]


class Direction(Enum):
    """The eight compass steps as ``(dx, dy)`` offsets."""

    UP = (0, 1)
    DOWN = (0, -1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)
    UPLEFT = (-1, 1)
    UPRIGHT = (1, 1)
    DOWNLEFT = (-1, -1)
    DOWNRIGHT = (1, -1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


# Clockwise starting from ``UP``.
COMPASS: Tuple[Direction, ...] = (
    Direction.UP,
    Direction.UPRIGHT,
    Direction.RIGHT,
    Direction.DOWNRIGHT,
    Direction.DOWN,
    Direction.DOWNLEFT,
    Direction.LEFT,
    Direction.UPLEFT,
)


class Position(str, Enum):
    """One of the sixteen board cells, valued by its notation label."""

    I1 = "i1"
    I2 = "i2"
    I3 = "i3"
    I4 = "i4"
    J1 = "j1"
    J2 = "j2"
    J3 = "j3"
    J4 = "j4"
    K1 = "k1"
    K2 = "k2"
    K3 = "k3"
    K4 = "k4"
    L1 = "l1"
    L2 = "l2"
    L3 = "l3"
    L4 = "l4"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def decode(cls, notation: str) -> "Position":
        """Return the position labelled ``notation`` (e.g. ``"k3"``).

        Raises:
            NotationError: If ``notation`` is not one of the sixteen labels.
                Labels are lowercase only.
        """

        if not isinstance(notation, str):
            raise NotationError(notation, "position label must be a string")
        try:
            return cls(notation)
        except ValueError:
            raise NotationError(notation, "unknown position") from None

    @classmethod
    def from_coords(cls, x: int, y: int) -> "Position":
        """Return the position at ``(x, y)`` with both axes in ``1..SIZE``.

        Raises:
            OutOfBoundsError: If the coordinates are outside the board.
        """

        try:
            return _BY_COORDS[(x, y)]
        except KeyError:
            raise OutOfBoundsError(x, y) from None

    @property
    def notation(self) -> str:
        return self.value

    @property
    def coords(self) -> Coords:
        return _COORDS[self]

    @property
    def x(self) -> int:
        return _COORDS[self][0]

    @property
    def y(self) -> int:
        return _COORDS[self][1]

    @property
    def ordinal(self) -> int:
        """Rank of the position in canonical order (``i1`` is ``0``, ``l4`` is ``15``)."""

        x, y = _COORDS[self]
        return (x - 1) * SIZE + (y - 1)

    def offset(self, dx: int, dy: int) -> Optional["Position"]:
        """Return the position ``dx`` files and ``dy`` ranks away, or ``None`` off the board."""

        x, y = _COORDS[self]
        try:
            return Position.from_coords(x + dx, y + dy)
        except OutOfBoundsError:
            return None

    def neighbor(self, direction: Direction) -> Optional["Position"]:
        """Return the adjacent position in ``direction`` or ``None`` at the edge."""

        return self.offset(direction.dx, direction.dy)

    def neighbors(self) -> List["Position"]:
        """Return every on-board neighbour, clockwise from ``up``."""

        found = (self.neighbor(direction) for direction in COMPASS)
        return [position for position in found if position is not None]

    def up(self) -> Optional["Position"]:
        return self.neighbor(Direction.UP)

    def down(self) -> Optional["Position"]:
        return self.neighbor(Direction.DOWN)

    def left(self) -> Optional["Position"]:
        return self.neighbor(Direction.LEFT)

    def right(self) -> Optional["Position"]:
        return self.neighbor(Direction.RIGHT)

    def upleft(self) -> Optional["Position"]:
        return self.neighbor(Direction.UPLEFT)

    def upright(self) -> Optional["Position"]:
        return self.neighbor(Direction.UPRIGHT)

    def downleft(self) -> Optional["Position"]:
        return self.neighbor(Direction.DOWNLEFT)

    def downright(self) -> Optional["Position"]:
        return self.neighbor(Direction.DOWNRIGHT)


_COORDS: Dict[Position, Coords] = {
    position: (FILES.index(position.value[0]) + 1, RANKS.index(position.value[1]) + 1)
    for position in Position
}
_BY_COORDS: Dict[Coords, Position] = {coords: position for position, coords in _COORDS.items()}


__all__ = ["SIZE", "FILES", "RANKS", "COMPASS", "Coords", "Direction", "Position"]
