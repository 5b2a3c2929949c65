"""Board model and pattern detection for a tiered stacking game."""

from .errors import IllegalMoveError, NotationError, OutOfBoundsError, StackGridError
from .position import COMPASS, Direction, Position
from .pieces import Color, Stack, Tier
from .board import Board
from .mask import Mask, MaskSet
from .pattern import (
    AdjacentColors,
    AdjacentT2,
    ColorMatch,
    Corner,
    Diagonal,
    DiagonalStacks,
    Line,
    Square,
    StackMatch,
    Surround,
    TierMatch,
    fit,
    fit_at,
)

__all__ = [
    "Board",
    "Color",
    "Tier",
    "Stack",
    "Position",
    "Direction",
    "COMPASS",
    "Mask",
    "MaskSet",
    "ColorMatch",
    "TierMatch",
    "StackMatch",
    "AdjacentColors",
    "AdjacentT2",
    "DiagonalStacks",
    "Diagonal",
    "Line",
    "Corner",
    "Square",
    "Surround",
    "fit",
    "fit_at",
    "StackGridError",
    "NotationError",
    "IllegalMoveError",
    "OutOfBoundsError",
]
