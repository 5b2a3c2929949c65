"""Board representation holding the stacks placed on each cell."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .errors import IllegalMoveError, NotationError
from .pieces import Color, Stack, Tier
from .position import SIZE, Position


LOGGER = logging.getLogger(__name__)

Grid = NDArray[np.uint8]

Placement = Tuple[Position, Stack]

# Mapping from ``Color`` to the integer stored in the color grid.  ``0`` marks
# an empty cell, so the tier grid doubles as the occupancy grid.
COLOR_VALUES = {color: i + 1 for i, color in enumerate(Color)}
_COLORS_BY_VALUE = {value: color for color, value in COLOR_VALUES.items()}

# ``Position`` iterates in ordinal order, matching the flattened grids.
_POSITIONS: Tuple[Position, ...] = tuple(Position)


def create_empty_grid(size: int = SIZE) -> Grid:
    """Return a new ``size x size`` grid filled with zeros.

    Grids are indexed ``[x - 1, y - 1]`` so that the flattened array follows
    position ordinals.
    """

    return np.zeros((size, size), dtype=np.uint8)


class Board:
    """Sparse mapping from positions to the stack on top of each cell.

    Stacks are only ever added: :meth:`place` puts a stack exactly one tier
    above the current occupant and there is no removal.  The board has no
    internal locking; callers sharing one instance between threads must not
    run :meth:`place` concurrently with pattern queries.  Take a
    :meth:`copy` to hand readers a stable snapshot.
    """

    size: int = SIZE

    def __init__(self) -> None:
        self.colors: Grid = create_empty_grid(self.size)
        self.tiers: Grid = create_empty_grid(self.size)

    # Construction -----------------------------------------------------
    @staticmethod
    def interpret(notation: str) -> Placement:
        """Decode ``<stack><position>`` move notation such as ``"r3i1"``."""

        if not isinstance(notation, str) or len(notation) != 4:
            raise NotationError(notation, "move must be four characters")
        stack = Stack.decode(notation[:2])
        position = Position.decode(notation[2:])
        return position, stack

    @classmethod
    def from_batch(cls, placements: Iterable[Placement]) -> "Board":
        """Load raw board state from ``(position, stack)`` pairs.

        Unlike :meth:`place` no stacking rule is applied: this describes what
        is on the board, not a sequence of moves.  Each position may appear
        only once.

        Raises:
            NotationError: If a position is targeted twice.
        """

        board = cls()
        count = 0
        for position, stack in placements:
            if position in board:
                raise NotationError(position.notation, "position occupied twice in batch")
            board._set(position, stack)
            count += 1
        LOGGER.debug("Loaded %d stacks from batch", count)
        return board

    @classmethod
    def from_notation(cls, notations: str) -> "Board":
        """Load a board from space separated moves, e.g. ``"r1j3 g1k4"``."""

        if not isinstance(notations, str):
            raise NotationError(notations, "batch must be a string")
        return cls.from_batch(cls.interpret(token) for token in notations.split(" "))

    # Queries ----------------------------------------------------------
    def get(self, position: Position) -> Optional[Stack]:
        """Return the stack on ``position`` or ``None`` if the cell is empty."""

        x, y = position.coords
        level = int(self.tiers[x - 1, y - 1])
        if level == 0:
            return None
        return Stack(_COLORS_BY_VALUE[int(self.colors[x - 1, y - 1])], Tier(level))

    def occupied(self) -> List[Position]:
        """Return the occupied positions in canonical order."""

        return [_POSITIONS[i] for i in np.flatnonzero(self.tiers)]

    def stacks(self) -> Iterator[Placement]:
        """Yield ``(position, stack)`` for every occupied cell."""

        colors = self.colors.ravel()
        tiers = self.tiers.ravel()
        for i in np.flatnonzero(tiers):
            stack = Stack(_COLORS_BY_VALUE[int(colors[i])], Tier(int(tiers[i])))
            yield _POSITIONS[i], stack

    def highest(self, color: Color) -> List[Position]:
        """Return the positions holding the highest-tier stacks of ``color``.

        Ties keep every tied position.  An empty list means no stack of that
        color is on the board.
        """

        of_color = self.colors == COLOR_VALUES[color]
        if not of_color.any():
            return []
        top = self.tiers[of_color].max()
        hits = np.flatnonzero(of_color & (self.tiers == top))
        return [_POSITIONS[i] for i in hits]

    def copy(self) -> "Board":
        """Return an independent snapshot of the board."""

        clone = Board()
        clone.colors = self.colors.copy()
        clone.tiers = self.tiers.copy()
        return clone

    def __contains__(self, position: object) -> bool:
        if not isinstance(position, Position):
            return False
        x, y = position.coords
        return bool(self.tiers[x - 1, y - 1])

    def __len__(self) -> int:
        return int(np.count_nonzero(self.tiers))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(
            np.array_equal(self.tiers, other.tiers) and np.array_equal(self.colors, other.colors)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Board({len(self)} stacks)"

    # Moves ------------------------------------------------------------
    def place(self, position: Position, stack: Stack) -> None:
        """Place ``stack`` on ``position``.

        Raises:
            IllegalMoveError: If ``stack`` is not exactly one tier above the
                current occupant (or tier one on an empty cell).  The board is
                left unchanged.
        """

        current = self.get(position)
        if not stack.is_on_top_of(current):
            LOGGER.debug(
                "Rejected %s on %s: current tier %s",
                stack.notation,
                position.notation,
                current.tier.level if current else 0,
            )
            raise IllegalMoveError(position, stack)
        self._set(position, stack)
        LOGGER.debug("Placed %s on %s", stack.notation, position.notation)

    def play(self, notation: str) -> None:
        """Decode move notation and :meth:`place` it."""

        position, stack = self.interpret(notation)
        self.place(position, stack)

    # Internal helpers -------------------------------------------------
    def _set(self, position: Position, stack: Stack) -> None:
        x, y = position.coords
        self.colors[x - 1, y - 1] = np.uint8(COLOR_VALUES[stack.color])
        self.tiers[x - 1, y - 1] = np.uint8(stack.tier.level)


__all__ = ["Board", "COLOR_VALUES", "Grid", "Placement", "create_empty_grid"]
