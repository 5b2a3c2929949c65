"""Canonical containers for pattern matches.

A :class:`Mask` is the set of cells taking part in one pattern occurrence.
Its positions are kept sorted in canonical board order, so two masks built
from the same cells compare and hash equal regardless of discovery order.
A :class:`MaskSet` collects distinct masks and iterates them sorted, which
collapses a shape found again from another anchor or orientation into the
single result already recorded.

Masks also expose a 16-bit bitboard view (bit ``n`` set for the position
with ordinal ``n``) for callers that prefer integer set arithmetic.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Iterator, List, Set, Tuple, Union

from .position import SIZE, Position

FULL_BOARD_BITS = (1 << (SIZE * SIZE)) - 1

PositionLike = Union[Position, str]


def _coerce(position: PositionLike) -> Position:
    if isinstance(position, Position):
        return position
    return Position.decode(position)


@dataclass(frozen=True, order=True)
class Mask:
    """Ordered, duplicate-free set of positions.

    Ordering is lexicographic over the sorted positions.  Position labels
    sort in the same order as their ordinals, so comparing the tuples
    directly gives canonical board order.
    """

    positions: Tuple[Position, ...] = ()

    def __post_init__(self) -> None:
        unique = {_coerce(position) for position in self.positions}
        object.__setattr__(self, "positions", tuple(sorted(unique, key=lambda p: p.ordinal)))

    @classmethod
    def of(cls, *positions: PositionLike) -> "Mask":
        return cls(tuple(positions))

    @classmethod
    def from_bits(cls, bits: int) -> "Mask":
        """Build a mask from a bitboard produced by :attr:`bits`."""

        if bits < 0 or bits > FULL_BOARD_BITS:
            raise ValueError(f"Bitboard out of range: {bits:#x}")
        return cls(tuple(p for p in Position if bits & (1 << p.ordinal)))

    @property
    def bits(self) -> int:
        value = 0
        for position in self.positions:
            value |= 1 << position.ordinal
        return value

    def union(self, other: "Mask") -> "Mask":
        return Mask(self.positions + other.positions)

    def __or__(self, other: "Mask") -> "Mask":
        if not isinstance(other, Mask):
            return NotImplemented
        return self.union(other)

    def __contains__(self, position: object) -> bool:
        return position in self.positions

    def __iter__(self) -> Iterator[Position]:
        return iter(self.positions)

    def __len__(self) -> int:
        return len(self.positions)

    def __str__(self) -> str:
        return "{" + " ".join(p.notation for p in self.positions) + "}"


MaskLike = Union[Mask, Iterable[PositionLike]]


def _as_mask(item: MaskLike) -> Mask:
    if isinstance(item, Mask):
        return item
    if isinstance(item, str):
        # A bare label is one position, not a sequence of characters.
        return Mask.of(item)
    return Mask(tuple(item))


class MaskSet:
    """Ordered, duplicate-free collection of :class:`Mask` objects."""

    __slots__ = ("_masks",)

    def __init__(self, masks: Iterable[MaskLike] = ()) -> None:
        self._masks: Set[Mask] = set()
        self.update(masks)

    def add(self, mask: MaskLike) -> bool:
        """Insert ``mask``; return ``False`` if an equal mask was already present."""

        mask = _as_mask(mask)
        if mask in self._masks:
            return False
        self._masks.add(mask)
        return True

    def update(self, masks: Iterable[MaskLike]) -> None:
        for mask in masks:
            self.add(mask)

    def union(self, other: Iterable[MaskLike]) -> "MaskSet":
        merged = MaskSet(self._masks)
        merged.update(other)
        return merged

    def __or__(self, other: "MaskSet") -> "MaskSet":
        if not isinstance(other, MaskSet):
            return NotImplemented
        return self.union(other)

    def masks(self) -> List[Mask]:
        return sorted(self._masks)

    def positions(self) -> Mask:
        """Return every position covered by at least one mask."""

        covered: List[Position] = []
        for mask in self._masks:
            covered.extend(mask.positions)
        return Mask(tuple(covered))

    def frozen(self) -> FrozenSet[Mask]:
        return frozenset(self._masks)

    def __contains__(self, mask: object) -> bool:
        if isinstance(mask, Mask):
            return mask in self._masks
        try:
            return _as_mask(mask) in self._masks  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return False

    def __iter__(self) -> Iterator[Mask]:
        return iter(self.masks())

    def __len__(self) -> int:
        return len(self._masks)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, MaskSet):
            return self._masks == other._masks
        if isinstance(other, (set, frozenset)):
            return self._masks == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return "MaskSet([" + ", ".join(str(mask) for mask in self.masks()) + "])"


__all__ = ["FULL_BOARD_BITS", "Mask", "MaskLike", "MaskSet", "PositionLike"]
