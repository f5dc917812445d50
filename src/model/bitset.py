"""Contains the fixed-width bitset used to store sets of possible tile type indices."""

from __future__ import annotations

from typing import Iterable, Iterator

from constants import MAX_TILE_TYPES


class Bitset:
    """Immutable set of small non-negative integers, stored as the bits of a single int.

    A cell's wave (the tile type indices still possible for it) and a tile type's neighbor mask are both bitsets. The
    width is capped at constants.MAX_TILE_TYPES bits, so every index must lie in [0, MAX_TILE_TYPES).
    """

    __slots__ = ("_bits",)

    # Bit i is set exactly if index i is part of the set.
    _bits: int

    def __init__(self, bits: int = 0) -> None:
        if bits < 0 or bits.bit_length() > MAX_TILE_TYPES:
            raise ValueError(f"Bitset value must fit into {MAX_TILE_TYPES} bits, got {bits:#x}")
        self._bits = bits

    @classmethod
    def full(cls, count: int) -> Bitset:
        """Returns the set containing every index in [0, count)."""
        return cls((1 << count) - 1)

    @classmethod
    def singleton(cls, index: int) -> Bitset:
        """Returns the set containing only 'index'."""
        return cls(1 << index)

    @classmethod
    def from_indices(cls, indices: Iterable[int]) -> Bitset:
        """Returns the set containing all given indices."""
        bits = 0
        for index in indices:
            bits |= 1 << index
        return cls(bits)

    @property
    def value(self) -> int:
        """The raw integer representation."""
        return self._bits

    def is_empty(self) -> bool:
        return self._bits == 0

    def issubset(self, other: Bitset) -> bool:
        return self._bits & ~other._bits == 0

    def nth(self, k: int) -> int:
        """Returns the k-th smallest index contained in the set.

        Raises:
            IndexError: If the set has k or fewer elements.
        """
        if k < 0:
            raise IndexError(f"Bitset index out of range: {k}")
        bits = self._bits
        for _ in range(k):
            # Clear the lowest set bit.
            bits &= bits - 1
        if bits == 0:
            raise IndexError(f"Bitset index out of range: {k}")
        return (bits & -bits).bit_length() - 1

    def __len__(self) -> int:
        return self._bits.bit_count()

    def __bool__(self) -> bool:
        return self._bits != 0

    def __contains__(self, index: object) -> bool:
        return isinstance(index, int) and index >= 0 and bool(self._bits >> index & 1)

    def __iter__(self) -> Iterator[int]:
        bits = self._bits
        while bits:
            lowest = bits & -bits
            yield lowest.bit_length() - 1
            bits ^= lowest

    def __and__(self, other: Bitset) -> Bitset:
        return Bitset(self._bits & other._bits)

    def __or__(self, other: Bitset) -> Bitset:
        return Bitset(self._bits | other._bits)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bitset):
            return NotImplemented
        return self._bits == other._bits

    def __hash__(self) -> int:
        return hash(self._bits)

    def __repr__(self) -> str:
        return f"Bitset({{{', '.join(str(index) for index in self)}}})"
