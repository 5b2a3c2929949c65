"""Pattern detection over board state.

Every shape is a small frozen dataclass holding its parameters.  The set of
shapes is closed: :func:`template_for` maps each shape type to a
:class:`Template` made of orientation offsets and a predicate over the
stacks found on those cells, and :func:`fit` runs the shared scan.

The scan treats each of the sixteen positions as an anchor and probes every
orientation of the template.  An orientation is a tuple of ``(dx, dy)``
offsets relative to the anchor; a probe yields a :class:`~stackgrid.mask.Mask`
only if every offset lands on the board, every cell is occupied and the
predicate accepts the stacks.  Most additional orientations are generated
from a base orientation by rotating it 90 degrees counter-clockwise, so e.g.
the base ``Line`` runs right and its second orientation runs up.  The
diagonal shapes declare theirs directly: up-right, then down-right.  Matches
are collected in a :class:`~stackgrid.mask.MaskSet`, so a cell set reached
from several anchors is reported once.

The single cell shapes (:class:`ColorMatch`, :class:`TierMatch`,
:class:`StackMatch`) double as predicates: the multi-cell shapes accept a
probe when each of their cells is accepted by the matching single cell
shape.

:class:`Surround` does not follow the template.  Its anchors are the
highest-tier stacks of one color and its masks vary in size, so
:func:`fit` scans it separately.

Example
-------

>>> from stackgrid import Board, Color, Line, fit
>>> board = Board.from_notation("r1i2 r2j2 r1k2 g1l2")
>>> [str(mask) for mask in Line(Color.RED).fit(board)]
['{i2 j2 k2}']
>>> len(fit(Color.GREEN, board))
1
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Type, Union

from .board import Board
from .mask import Mask, MaskSet
from .pieces import Color, Stack, Tier
from .position import Position


LOGGER = logging.getLogger(__name__)

Offset = Tuple[int, int]
Orientation = Tuple[Offset, ...]


def _rotate(orientation: Orientation) -> Orientation:
    """Return ``orientation`` rotated 90 degrees counter-clockwise about the anchor.

    Offsets are not normalised: ``(0, 0)`` stays the anchor.
    """

    return tuple((-dy, dx) for dx, dy in orientation)


def _generate_rotations(base: Orientation, count: int) -> Tuple[Orientation, ...]:
    """Return ``count`` orientations starting from ``base``."""

    rotations = [base]
    for _ in range(count - 1):
        rotations.append(_rotate(rotations[-1]))
    return tuple(rotations)


class _Shape:
    """Convenience methods shared by every shape."""

    def fit(self, board: Board) -> MaskSet:
        return fit(self, board)

    def fit_at(self, anchor: Position, board: Board, orientation: int = 0) -> Optional[Mask]:
        return fit_at(self, anchor, board, orientation)


# Single cell shapes --------------------------------------------------------
@dataclass(frozen=True)
class ColorMatch(_Shape):
    """One stack of ``color``."""

    color: Color

    def accepts(self, stack: Stack) -> bool:
        return stack.color == self.color


@dataclass(frozen=True)
class TierMatch(_Shape):
    """One stack of exactly ``tier``."""

    tier: Tier

    def accepts(self, stack: Stack) -> bool:
        return stack.tier == self.tier


@dataclass(frozen=True)
class StackMatch(_Shape):
    """One stack equal to ``stack``."""

    stack: Stack

    def accepts(self, stack: Stack) -> bool:
        return stack == self.stack


# Pairs ---------------------------------------------------------------------
@dataclass(frozen=True)
class AdjacentColors(_Shape):
    """Two orthogonally adjacent stacks colored ``first`` and ``second`` in either order."""

    first: Color
    second: Color


@dataclass(frozen=True)
class AdjacentT2(_Shape):
    """Two orthogonally adjacent second-tier stacks of ``color``."""

    color: Color


@dataclass(frozen=True)
class DiagonalStacks(_Shape):
    """Two diagonally adjacent stacks of tier two or more, colored ``first`` and ``second``."""

    first: Color
    second: Color


# Single color shapes -------------------------------------------------------
@dataclass(frozen=True)
class Diagonal(_Shape):
    """Three stacks of ``color`` on a diagonal."""

    color: Color


@dataclass(frozen=True)
class Line(_Shape):
    """Three stacks of ``color`` in a row or column."""

    color: Color


@dataclass(frozen=True)
class Corner(_Shape):
    """Three stacks of ``color`` forming an L."""

    color: Color


@dataclass(frozen=True)
class Square(_Shape):
    """Four stacks of ``color`` forming a 2x2 block."""

    color: Color


@dataclass(frozen=True)
class Surround(_Shape):
    """Stacks of ``neighbor`` color around the highest ``base`` stacks.

    Each highest-tier stack of ``base`` (ties keep all of them) yields one
    mask holding its ``neighbor`` colored neighbours in all eight
    directions.  Anchors without such neighbours yield nothing.
    """

    base: Color
    neighbor: Color


Shape = Union[
    ColorMatch,
    TierMatch,
    StackMatch,
    AdjacentColors,
    AdjacentT2,
    DiagonalStacks,
    Diagonal,
    Line,
    Corner,
    Square,
    Surround,
]
ShapeLike = Union[Shape, Color, Tier, Stack]

SHAPES: Tuple[Type[_Shape], ...] = (
    ColorMatch,
    TierMatch,
    StackMatch,
    AdjacentColors,
    AdjacentT2,
    DiagonalStacks,
    Diagonal,
    Line,
    Corner,
    Square,
    Surround,
)


# Templates -----------------------------------------------------------------
Predicate = Callable[[Shape, Sequence[Stack]], bool]


@dataclass(frozen=True)
class Template:
    """Orientation offsets and the predicate a probe must satisfy."""

    orientations: Tuple[Orientation, ...]
    predicate: Predicate


def _either_order(first: Color, second: Color, stacks: Sequence[Stack]) -> bool:
    a, b = stacks[0].color, stacks[1].color
    return (a == first and b == second) or (a == second and b == first)


def _single(shape: Shape, stacks: Sequence[Stack]) -> bool:
    return shape.accepts(stacks[0])  # type: ignore[union-attr]


def _adjacent_colors(shape: Shape, stacks: Sequence[Stack]) -> bool:
    return _either_order(shape.first, shape.second, stacks)  # type: ignore[union-attr]


def _adjacent_t2(shape: Shape, stacks: Sequence[Stack]) -> bool:
    cell = StackMatch(Stack(shape.color, Tier.SECOND))  # type: ignore[union-attr]
    return all(cell.accepts(stack) for stack in stacks)


def _diagonal_stacks(shape: Shape, stacks: Sequence[Stack]) -> bool:
    if any(stack.tier < Tier.SECOND for stack in stacks):
        return False
    return _either_order(shape.first, shape.second, stacks)  # type: ignore[union-attr]


def _single_color(shape: Shape, stacks: Sequence[Stack]) -> bool:
    cell = ColorMatch(shape.color)  # type: ignore[union-attr]
    return all(cell.accepts(stack) for stack in stacks)


# Base orientations for each shape.  Further orientations are derived with
# ``_generate_rotations``; the count is how many distinct ones the scan needs.
_CELL: Orientation = ((0, 0),)
_PAIR: Orientation = ((0, 0), (1, 0))
_LINE: Orientation = ((0, 0), (1, 0), (2, 0))
_CORNER: Orientation = ((0, 0), (0, 1), (1, 1))
_SQUARE: Orientation = ((0, 0), (0, 1), (1, 1), (1, 0))

# Diagonals run up-right then down-right from the anchor.
_DIAGONAL_PAIRS: Tuple[Orientation, ...] = (((0, 0), (1, 1)), ((0, 0), (1, -1)))
_DIAGONALS: Tuple[Orientation, ...] = (
    ((0, 0), (1, 1), (2, 2)),
    ((0, 0), (1, -1), (2, -2)),
)

_TEMPLATES: Dict[type, Template] = {
    ColorMatch: Template(_generate_rotations(_CELL, 1), _single),
    TierMatch: Template(_generate_rotations(_CELL, 1), _single),
    StackMatch: Template(_generate_rotations(_CELL, 1), _single),
    AdjacentColors: Template(_generate_rotations(_PAIR, 2), _adjacent_colors),
    AdjacentT2: Template(_generate_rotations(_PAIR, 2), _adjacent_t2),
    DiagonalStacks: Template(_DIAGONAL_PAIRS, _diagonal_stacks),
    Diagonal: Template(_DIAGONALS, _single_color),
    Line: Template(_generate_rotations(_LINE, 2), _single_color),
    Corner: Template(_generate_rotations(_CORNER, 4), _single_color),
    Square: Template(_generate_rotations(_SQUARE, 1), _single_color),
}


def as_shape(value: ShapeLike) -> Shape:
    """Return ``value`` as a shape, wrapping bare colors, tiers and stacks.

    Raises:
        TypeError: If ``value`` is not a known shape.
    """

    if isinstance(value, _Shape):
        if type(value) not in SHAPES:
            raise TypeError(f"Unknown shape: {type(value).__name__}")
        return value  # type: ignore[return-value]
    if isinstance(value, Color):
        return ColorMatch(value)
    if isinstance(value, Tier):
        return TierMatch(value)
    if isinstance(value, Stack):
        return StackMatch(value)
    raise TypeError(f"Not a shape: {value!r}")


def template_for(shape: ShapeLike) -> Template:
    """Return the orientation template used to scan ``shape``.

    Raises:
        TypeError: For :class:`Surround`, which has no fixed template, or for
            values that are not shapes.
    """

    shape = as_shape(shape)
    try:
        return _TEMPLATES[type(shape)]
    except KeyError:
        raise TypeError(f"{type(shape).__name__} has no orientation template") from None


# Probes --------------------------------------------------------------------
def _resolve(anchor: Position, orientation: Orientation) -> Optional[List[Position]]:
    cells: List[Position] = []
    for dx, dy in orientation:
        cell = anchor.offset(dx, dy)
        if cell is None:
            return None
        cells.append(cell)
    return cells


def _probe(shape: Shape, template: Template, anchor: Position, orientation: Orientation, board: Board) -> Optional[Mask]:
    cells = _resolve(anchor, orientation)
    if cells is None:
        return None
    stacks: List[Stack] = []
    for cell in cells:
        stack = board.get(cell)
        if stack is None:
            return None
        stacks.append(stack)
    if not template.predicate(shape, stacks):
        return None
    return Mask(tuple(cells))


def _surround_at(shape: Surround, anchor: Position, board: Board) -> Optional[Mask]:
    stack = board.get(anchor)
    if stack is None or stack.color != shape.base:
        return None
    around = ColorMatch(shape.neighbor)
    hits = []
    for position in anchor.neighbors():
        occupant = board.get(position)
        if occupant is not None and around.accepts(occupant):
            hits.append(position)
    if not hits:
        return None
    return Mask(tuple(hits))


def fit_at(shape: ShapeLike, anchor: Position, board: Board, orientation: int = 0) -> Optional[Mask]:
    """Probe one orientation of ``shape`` at ``anchor``.

    Returns the matching mask or ``None``.  Orientations past the last one
    the shape defines never match.  :class:`Surround` only has orientation
    ``0`` and ignores the highest-tier rule: any ``base`` stack is probed.
    """

    shape = as_shape(shape)
    if isinstance(shape, Surround):
        return _surround_at(shape, anchor, board) if orientation == 0 else None
    template = template_for(shape)
    if not 0 <= orientation < len(template.orientations):
        return None
    return _probe(shape, template, anchor, template.orientations[orientation], board)


def _fit_surround(shape: Surround, board: Board) -> Tuple[MaskSet, int]:
    anchors = board.highest(shape.base)
    fits = MaskSet()
    for anchor in anchors:
        mask = _surround_at(shape, anchor, board)
        if mask is not None:
            fits.add(mask)
    return fits, len(anchors)


def fit(shape: ShapeLike, board: Board) -> MaskSet:
    """Return every distinct occurrence of ``shape`` on ``board``.

    ``shape`` may be any shape instance or a bare :class:`Color`,
    :class:`Tier` or :class:`Stack`, which match single cells.  The board is
    only read.
    """

    shape = as_shape(shape)
    if isinstance(shape, Surround):
        fits, anchors = _fit_surround(shape, board)
    else:
        template = template_for(shape)
        fits = MaskSet()
        anchors = 0
        for anchor in Position:
            anchors += 1
            for orientation in template.orientations:
                mask = _probe(shape, template, anchor, orientation, board)
                if mask is not None:
                    fits.add(mask)
    LOGGER.debug("%s: %d masks from %d anchors", shape, len(fits), anchors)
    return fits


__all__ = [
    "AdjacentColors",
    "AdjacentT2",
    "ColorMatch",
    "Corner",
    "Diagonal",
    "DiagonalStacks",
    "Line",
    "Orientation",
    "SHAPES",
    "Shape",
    "ShapeLike",
    "Square",
    "StackMatch",
    "Surround",
    "Template",
    "TierMatch",
    "as_shape",
    "fit",
    "fit_at",
    "template_for",
]
