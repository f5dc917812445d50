"""Tests for the possibility set type."""

import pytest

from model.bitset import Bitset


class TestBitsetConstruction:
    """Test the constructors and their bounds."""

    def test_full(self):
        assert list(Bitset.full(4)) == [0, 1, 2, 3]
        assert len(Bitset.full(128)) == 128

    def test_full_zero_is_empty(self):
        assert Bitset.full(0).is_empty()
        assert not Bitset.full(0)

    def test_singleton(self):
        assert list(Bitset.singleton(7)) == [7]
        assert Bitset.singleton(127).value == 1 << 127

    def test_from_indices(self):
        assert Bitset.from_indices([5, 1, 5]) == Bitset(0b100010)

    def test_rejects_negative_value(self):
        with pytest.raises(ValueError):
            Bitset(-1)

    def test_rejects_values_wider_than_128_bits(self):
        with pytest.raises(ValueError):
            Bitset(1 << 128)
        with pytest.raises(ValueError):
            Bitset.singleton(128)


class TestBitsetOperations:
    """Test the set operations used by collapse and propagation."""

    def test_len_counts_set_bits(self):
        assert len(Bitset(0b1011)) == 3
        assert len(Bitset()) == 0

    def test_membership(self):
        bits = Bitset.from_indices([0, 2])
        assert 0 in bits
        assert 1 not in bits
        assert 2 in bits
        assert -1 not in bits
        assert "0" not in bits

    def test_iteration_is_ascending(self):
        assert list(Bitset.from_indices([9, 3, 64, 0])) == [0, 3, 9, 64]

    def test_intersection_and_union(self):
        left = Bitset.from_indices([0, 1, 2])
        right = Bitset.from_indices([1, 2, 3])
        assert left & right == Bitset.from_indices([1, 2])
        assert left | right == Bitset.from_indices([0, 1, 2, 3])

    def test_issubset(self):
        assert Bitset.from_indices([1]).issubset(Bitset.from_indices([0, 1]))
        assert Bitset().issubset(Bitset.from_indices([0]))
        assert not Bitset.from_indices([0, 2]).issubset(Bitset.from_indices([0, 1]))

    def test_nth(self):
        bits = Bitset.from_indices([1, 3, 5])
        assert [bits.nth(k) for k in range(3)] == [1, 3, 5]

    def test_nth_out_of_range(self):
        bits = Bitset.from_indices([1, 3])
        with pytest.raises(IndexError):
            bits.nth(2)
        with pytest.raises(IndexError):
            bits.nth(-1)
        with pytest.raises(IndexError):
            Bitset().nth(0)

    def test_equality_and_hash(self):
        assert Bitset(0b101) == Bitset.from_indices([0, 2])
        assert hash(Bitset(0b101)) == hash(Bitset.from_indices([0, 2]))
        assert Bitset(0b101) != Bitset(0b100)
        assert len({Bitset(1), Bitset(1), Bitset(2)}) == 2

    def test_repr(self):
        assert repr(Bitset.from_indices([0, 1])) == "Bitset({0, 1})"
        assert repr(Bitset()) == "Bitset({})"
