"""Exceptions raised by the board and notation helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .pieces import Stack
    from .position import Position


class StackGridError(Exception):
    """Base class for every error raised by :mod:`stackgrid`."""


class NotationError(StackGridError, ValueError):
    """Raised when textual notation cannot be decoded.

    Covers positions, colors, tiers, stacks, moves and batches.  A batch
    that targets the same position twice is reported the same way.
    """

    def __init__(self, notation: object, reason: Optional[str] = None) -> None:
        self.notation = notation
        self.reason = reason
        message = f"Invalid notation: {notation!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class IllegalMoveError(StackGridError, ValueError):
    """Raised when a stack is not exactly one tier above the cell's occupant."""

    def __init__(self, position: "Position", stack: "Stack") -> None:
        self.position = position
        self.stack = stack
        super().__init__(f"Illegal move: {stack.notation} on {position.notation}")


class OutOfBoundsError(StackGridError, IndexError):
    """Raised when grid coordinates fall outside the board."""

    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y
        super().__init__(f"Coordinates out of bounds: ({x}, {y})")


__all__ = ["StackGridError", "NotationError", "IllegalMoveError", "OutOfBoundsError"]
