"""Colors, tiers and the stacks built from them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Union

from .errors import NotationError


class Color(str, Enum):
    """The four piece colors, valued by their notation symbol."""

    RED = "r"
    GREEN = "g"
    BLUE = "b"
    YELLOW = "y"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def decode(cls, notation: str) -> "Color":
        """Return the color for a single lowercase symbol.

        Raises:
            NotationError: For anything other than ``r``, ``g``, ``b`` or
                ``y``.  Uppercase symbols are rejected.
        """

        if not isinstance(notation, str) or len(notation) != 1:
            raise NotationError(notation, "color must be a single character")
        try:
            return cls(notation)
        except ValueError:
            raise NotationError(notation, "unknown color") from None

    @property
    def symbol(self) -> str:
        return self.value


class Tier(IntEnum):
    """Height of a stack.  Tiers compare by level."""

    FIRST = 1
    SECOND = 2
    THIRD = 3
    FOURTH = 4

    @classmethod
    def decode(cls, notation: str) -> "Tier":
        """Return the tier for a single digit ``1`` to ``4``.

        Raises:
            NotationError: For any other input.
        """

        if not isinstance(notation, str) or notation not in _TIER_DIGITS:
            raise NotationError(notation, "tier must be one of 1, 2, 3, 4")
        return cls(_TIER_DIGITS[notation])

    @property
    def level(self) -> int:
        return int(self)

    @property
    def digit(self) -> str:
        return str(int(self))

    def is_on_top_of(self, previous: "Stackable") -> bool:
        """Return ``True`` if this tier sits exactly one level above ``previous``.

        ``previous`` may be a :class:`Tier`, a :class:`Stack` or ``None`` for
        an empty cell, which counts as level zero.
        """

        return self.level == level_of(previous) + 1


_TIER_DIGITS = {"1": 1, "2": 2, "3": 3, "4": 4}


@dataclass(frozen=True)
class Stack:
    """Occupant of a board cell."""

    color: Color
    tier: Tier

    @classmethod
    def decode(cls, notation: str) -> "Stack":
        """Decode ``<color><tier>`` notation such as ``"r3"``."""

        if not isinstance(notation, str) or len(notation) != 2:
            raise NotationError(notation, "stack must be two characters")
        return cls(Color.decode(notation[0]), Tier.decode(notation[1]))

    @property
    def notation(self) -> str:
        return f"{self.color.symbol}{self.tier.digit}"

    @property
    def level(self) -> int:
        return self.tier.level

    def is_on_top_of(self, previous: "Stackable") -> bool:
        return self.tier.is_on_top_of(previous)

    def __str__(self) -> str:
        return self.notation


Stackable = Union[Tier, Stack, None]


def level_of(item: Optional[Union[Tier, Stack]]) -> int:
    """Return the tier level of ``item``; an empty cell (``None``) is level ``0``."""

    if item is None:
        return 0
    return item.level


__all__ = ["Color", "Tier", "Stack", "Stackable", "level_of"]
