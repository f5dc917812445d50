"""Manages the tile type definitions (colors and adjacency rules) for the WFC algorithm."""

from __future__ import annotations

import csv
from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence, TYPE_CHECKING

import numpy as np
import structlog

from exceptions import ConfigurationError
from model.bitset import Bitset

if TYPE_CHECKING:
    from numpy.typing import NDArray


logger = structlog.get_logger()

# Columns a tile type CSV file has to provide.
_CSV_COLUMNS: tuple[str, ...] = ("red", "green", "blue", "neighbors")


@dataclass(frozen=True)
class TileType:
    """A single kind of tile, defined by its color and the tile types allowed next to it.

    Adjacency is direction-agnostic: the same neighbor mask applies to all four cardinal sides.

    Attributes:
        color: The (red, green, blue) color used when rendering the tile.
        neighbor_mask: The set of tile type indices that may be placed next to this tile type.
    """

    color: tuple[int, int, int]
    neighbor_mask: Bitset

    def __post_init__(self) -> None:
        if len(self.color) != 3 or not all(0 <= channel <= 255 for channel in self.color):
            raise ConfigurationError(f"Tile type color must be three values in [0, 255], got {self.color}")


class TileTypeRegistry:
    """Ordered, read-only collection of tile types.

    The position of a tile type in the registry is its index, which is also its bit in every possibility set. The
    registry itself accepts any number of tile types; the supported range is enforced when a grid is built from it.
    """

    # The tile types, indexed by their tile type index.
    _tile_types: tuple[TileType, ...]

    def __init__(self, tile_types: Iterable[TileType]) -> None:
        self._tile_types = tuple(tile_types)

    @classmethod
    def from_definitions(cls, definitions: Iterable[tuple[Sequence[int], int]]) -> TileTypeRegistry:
        """Builds a registry from (color, neighbor mask) pairs, where the mask is a plain integer.

        Args:
            definitions: The (color, neighbor mask) pairs, in tile type index order.

        Returns:
            The registry containing one tile type per pair.
        """
        tile_types = []
        for color, mask in definitions:
            try:
                neighbor_mask = Bitset(mask)
            except ValueError as err:
                raise ConfigurationError(str(err)) from err
            tile_types.append(TileType((int(color[0]), int(color[1]), int(color[2])), neighbor_mask))
        return cls(tile_types)

    def count(self) -> int:
        """Returns the number of tile types."""
        return len(self._tile_types)

    def color(self, index: int) -> tuple[int, int, int]:
        return self._tile_types[index].color

    def neighbor_mask(self, index: int) -> Bitset:
        return self._tile_types[index].neighbor_mask

    def allowed_neighbors(self, possibilities: Bitset) -> Bitset:
        """Returns the union of the neighbor masks of all tile types in 'possibilities'.

        This is the set of tile types that can still be placed next to a cell whose wave is 'possibilities'.
        """
        allowed = 0
        for index in possibilities:
            allowed |= self._tile_types[index].neighbor_mask.value
        return Bitset(allowed)

    def palette(self) -> NDArray[np.uint8]:
        """Returns the (count, 3) color table of all tile types."""
        return np.array([tile_type.color for tile_type in self._tile_types], dtype=np.uint8).reshape(-1, 3)

    def __len__(self) -> int:
        return len(self._tile_types)

    def __iter__(self) -> Iterator[TileType]:
        return iter(self._tile_types)


def load_tile_types(file_path: str) -> TileTypeRegistry:
    """Loads tile type definitions from a CSV file.

    The file needs the header 'red,green,blue,neighbors'. Each following row defines one tile type, the row order
    defines the tile type indices. The 'neighbors' column holds the neighbor mask as an integer literal in any base
    Python understands (e.g. '0b0111', '0x7' or '7').

    Args:
        file_path: The path of the CSV file.

    Returns:
        The registry containing the loaded tile types.

    Raises:
        ConfigurationError: If the file cannot be read or contains malformed rows.
    """
    definitions = []
    try:
        with open(file_path, newline="", encoding="utf-8") as csv_file:
            reader = csv.DictReader(csv_file, skipinitialspace=True)
            missing_columns = [column for column in _CSV_COLUMNS if column not in (reader.fieldnames or [])]
            if missing_columns:
                raise ConfigurationError(f"{file_path}: missing columns {', '.join(missing_columns)}")

            # Row numbers start at 2 because the header occupies the first line.
            for row_number, row in enumerate(reader, start=2):
                try:
                    color = (int(row["red"]), int(row["green"]), int(row["blue"]))
                    mask = int(row["neighbors"], 0)
                except (TypeError, ValueError) as err:
                    raise ConfigurationError(f"{file_path}, row {row_number}: {err}") from err
                definitions.append((color, mask))
    except OSError as err:
        raise ConfigurationError(f"Cannot read tile types from {file_path}: {err}") from err

    registry = TileTypeRegistry.from_definitions(definitions)
    logger.info("Loaded tile types", path=file_path, count=registry.count())
    return registry
