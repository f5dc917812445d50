"""Contains the WFC grid state: the cells with their waves and the open set of collapsible cells."""

from __future__ import annotations

from typing import Iterator, TYPE_CHECKING

import numpy as np

import constants
from enums import Direction, SeedPattern
from exceptions import ConfigurationError, ContradictionError
from model.bitset import Bitset

if TYPE_CHECKING:
    from random import Random

    from numpy.typing import NDArray

    from model.tile_types import TileTypeRegistry


class Cell:
    """Represents a single cell in the WFC grid state.

    Attributes:
        possibilities: The wave of the cell, i.e. the set of tile type indices that are still possible.
        collapsed: True once a final tile type has been chosen. The wave is then a singleton.
    """

    possibilities: Bitset
    collapsed: bool

    def __init__(self, tile_type_count: int) -> None:
        self.possibilities = Bitset.full(tile_type_count)
        self.collapsed = False

    @property
    def tile_index(self) -> int:
        """The chosen tile type index, or -1 if the cell is not collapsed yet."""
        if not self.collapsed:
            return -1
        return self.possibilities.nth(0)

    def collapse(self, rng: Random) -> int:
        """Picks one of the possible tile types uniformly at random and fixes the cell to it.

        The possible indices are enumerated in ascending order and the k-th one is picked, k being drawn uniformly from
        [0, number of possibilities). Calling this on an already collapsed cell returns the chosen index again without
        drawing a random number.

        Args:
            rng: The random number generator of the generation run.

        Returns:
            The chosen tile type index.

        Raises:
            ContradictionError: If no tile type is possible anymore.
        """
        if self.collapsed:
            return self.possibilities.nth(0)
        if self.possibilities.is_empty():
            raise ContradictionError("Cannot collapse a cell without any possible tile type")

        chosen_index = self.possibilities.nth(rng.randrange(len(self.possibilities)))
        self.possibilities = Bitset.singleton(chosen_index)
        self.collapsed = True
        return chosen_index


class Grid:
    """Fixed-size 2D array of cells plus the open set of cells that may be collapsed next.

    Coordinates are (row, col) tuples everywhere. The open set is a plain list from which random entries are removed by
    swapping them with the last entry. A boolean mask tracks its members, so a position is never queued twice.

    Attributes:
        width: The number of columns.
        height: The number of rows.
        tile_types: The tile types every cell chooses from.
        cells: Object array of shape (height, width) holding the 'Cell' instances.
    """

    width: int
    height: int
    tile_types: TileTypeRegistry
    cells: NDArray[np.object_]

    # Positions eligible for collapse, in no particular order.
    _open_coords: list[tuple[int, int]]
    # True for each position that is currently part of '_open_coords'.
    _is_open: NDArray[np.bool_]

    def __init__(
        self, width: int, height: int, tile_types: TileTypeRegistry, seed_coords: list[tuple[int, int]]
    ) -> None:
        """Creates a fully uncollapsed grid and opens the seed positions.

        Args:
            width: The number of columns.
            height: The number of rows.
            tile_types: The tile types every cell chooses from.
            seed_coords: The (row, col) positions that are open initially.

        Raises:
            ConfigurationError: If the number of tile types is outside [1, 128], the size is not positive or a seed
                position lies outside the grid.
        """
        tile_type_count = tile_types.count()
        check_tile_type_count(tile_type_count)
        if width < 1 or height < 1:
            raise ConfigurationError(f"Grid size must be positive, got {width}x{height}")

        self.width = width
        self.height = height
        self.tile_types = tile_types

        self.cells = np.empty((height, width), dtype=object)
        for row in range(height):
            for col in range(width):
                self.cells[row, col] = Cell(tile_type_count)

        self._open_coords = []
        self._is_open = np.full((height, width), False, dtype=bool)
        for coords in seed_coords:
            if not self.in_bounds(coords):
                raise ConfigurationError(f"Seed position {coords} lies outside the {width}x{height} grid")
            self.add_open(coords)

    def in_bounds(self, coords: tuple[int, int]) -> bool:
        return 0 <= coords[0] < self.height and 0 <= coords[1] < self.width

    def neighbors(self, coords: tuple[int, int]) -> Iterator[tuple[int, int]]:
        """Yields the in-bounds orthogonal neighbors of a position."""
        for direction in Direction:
            row_offset, col_offset = direction.to_vector()
            neighbor_coords = (coords[0] + row_offset, coords[1] + col_offset)
            if self.in_bounds(neighbor_coords):
                yield neighbor_coords

    def add_open(self, coords: tuple[int, int]) -> None:
        """Adds a position to the open set unless it is collapsed or already open."""
        if self._is_open[coords] or self.cells[coords].collapsed:
            return
        self._is_open[coords] = True
        self._open_coords.append(coords)

    def pop_random_open(self, rng: Random) -> tuple[int, int]:
        """Removes a uniformly chosen position from the open set and returns it."""
        i = rng.randrange(len(self._open_coords))
        self._open_coords[i], self._open_coords[-1] = self._open_coords[-1], self._open_coords[i]
        coords = self._open_coords.pop()
        self._is_open[coords] = False
        return coords

    def has_open(self) -> bool:
        return bool(self._open_coords)

    def open_count(self) -> int:
        return len(self._open_coords)

    def collapsed_count(self) -> int:
        return sum(1 for cell in self.cells.flat if cell.collapsed)

    def tilemap(self) -> NDArray[np.int_]:
        """Returns the chosen tile type index of every cell, -1 for cells that are not collapsed yet."""
        tilemap = np.full((self.height, self.width), -1, dtype=np.int_)
        for row in range(self.height):
            for col in range(self.width):
                tilemap[row, col] = self.cells[row, col].tile_index
        return tilemap

    def waves(self) -> list[list[Bitset]]:
        """Returns a snapshot of the wave of every cell, indexed [row][col]."""
        return [[self.cells[row, col].possibilities for col in range(self.width)] for row in range(self.height)]


def seed_coords(
    pattern: SeedPattern, width: int, height: int, stride: int = constants.SEED_STRIDE_DEFAULT
) -> list[tuple[int, int]]:
    """Returns the initially open positions for a grid of the given size.

    Args:
        pattern: Where to place the seeds.
        width: The number of columns of the grid.
        height: The number of rows of the grid.
        stride: The distance between neighboring seeds (only used by SeedPattern.LATTICE).

    Returns:
        The distinct (row, col) seed positions.

    Raises:
        ConfigurationError: If the stride is smaller than 1.
    """
    match pattern:
        case SeedPattern.LATTICE:
            if stride < 1:
                raise ConfigurationError(f"Seed stride must be at least 1, got {stride}")
            coords = [(row, col) for row in range(0, height, stride) for col in range(0, width, stride)]
        case SeedPattern.CENTER:
            coords = [(height // 2, width // 2)]
        case SeedPattern.CORNERS:
            coords = [(0, 0), (0, width - 1), (height - 1, 0), (height - 1, width - 1)]
    # Corners coincide on grids that are a single row or column wide.
    return list(dict.fromkeys(coords))


def check_tile_type_count(tile_type_count: int) -> None:
    """Raises a ConfigurationError unless the number of tile types fits into a possibility set."""
    if not constants.MIN_TILE_TYPES <= tile_type_count <= constants.MAX_TILE_TYPES:
        raise ConfigurationError(
            f"Must provide between {constants.MIN_TILE_TYPES} and {constants.MAX_TILE_TYPES} tile types, "
            f"found {tile_type_count}"
        )
