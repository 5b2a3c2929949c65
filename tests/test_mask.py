import pytest

from stackgrid.mask import FULL_BOARD_BITS, Mask, MaskSet
from stackgrid.position import Position


def test_mask_is_order_independent() -> None:
    assert Mask.of("j2", "i2") == Mask.of(Position.I2, Position.J2)
    assert hash(Mask.of("k1", "i1")) == hash(Mask.of("i1", "k1"))
    assert Mask.of("j2", "i2", "j2").positions == (Position.I2, Position.J2)


def test_mask_ordering_is_lexicographic() -> None:
    masks = [Mask.of("j1"), Mask.of("i2", "k1"), Mask.of("i2"), Mask.of("i1", "l4")]
    assert sorted(masks) == [
        Mask.of("i1", "l4"),
        Mask.of("i2"),
        Mask.of("i2", "k1"),
        Mask.of("j1"),
    ]


def test_mask_union_and_membership() -> None:
    mask = Mask.of("i1", "j1") | Mask.of("j1", "k1")
    assert mask == Mask.of("i1", "j1", "k1")
    assert Position.J1 in mask
    assert "k1" in mask
    assert Position.L1 not in mask
    assert len(mask) == 3
    assert str(mask) == "{i1 j1 k1}"


def test_mask_rejects_bad_labels() -> None:
    with pytest.raises(ValueError):
        Mask.of("z9")


def test_mask_bits() -> None:
    mask = Mask.of("i1", "j1", "l4")
    assert mask.bits == (1 << 0) | (1 << 4) | (1 << 15)
    assert Mask.from_bits(mask.bits) == mask
    assert Mask.from_bits(FULL_BOARD_BITS) == Mask(tuple(Position))
    with pytest.raises(ValueError):
        Mask.from_bits(FULL_BOARD_BITS + 1)


def test_mask_set_deduplicates() -> None:
    masks = MaskSet()
    assert masks.add(Mask.of("i2", "j2"))
    assert not masks.add(Mask.of("j2", "i2"))
    assert not masks.add(["j2", "i2"])
    assert len(masks) == 1


def test_mask_set_iterates_sorted_and_compares_structurally() -> None:
    first = MaskSet([["k1"], ["i2"], ["i3"]])
    second = MaskSet([Mask.of("i3"), Mask.of("k1"), Mask.of("i2")])
    assert first == second
    assert list(first) == [Mask.of("i2"), Mask.of("i3"), Mask.of("k1")]
    assert first == {Mask.of("i2"), Mask.of("i3"), Mask.of("k1")}
    assert first != MaskSet([["i2"]])


def test_mask_set_union_and_contains() -> None:
    left = MaskSet([["i1", "j1"]])
    right = MaskSet([["j1", "i1"], ["l4"]])
    merged = left | right
    assert len(merged) == 2
    assert len(left) == 1
    assert ["l4"] in merged
    assert Mask.of("i1", "j1") in merged
    assert ["q7"] not in merged
    assert merged.positions() == Mask.of("i1", "j1", "l4")


def test_mask_set_repr() -> None:
    assert repr(MaskSet([["j2", "i2"], ["k1"]])) == "MaskSet([{i2 j2}, {k1}])"
