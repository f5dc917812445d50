"""Manages the generation settings shared by the viewer widgets."""

from __future__ import annotations

import random

from PyQt6 import QtCore as qtc

import constants
from enums import SeedPattern
from model.tile_types import TileTypeRegistry


class BaseModel(qtc.QObject):
    """
    Manages the state for tilemap size, seeding and tile types.

    It inherits from QObject to facilitate communication via signals.

    Signals:
        tile_types_changed: Emitted after a new set of tile types has been loaded.

    Attributes:
        tilemap_width: The width of the tilemap (in cells).
        tilemap_height: The height of the tilemap (in cells).
        random_seed: The seed of the random number generator used for the next generation run.
        seed_pattern: Where the initially open cells are placed.
        seed_stride: The distance between neighboring seeds of the lattice seed pattern.
        tile_types: The tile types the tilemap is generated from.
    """

    tile_types_changed = qtc.pyqtSignal(object)

    tilemap_width: int
    tilemap_height: int

    random_seed: int

    seed_pattern: SeedPattern
    seed_stride: int

    tile_types: TileTypeRegistry

    def __init__(self) -> None:
        """Initializes the model with the default tilemap size, seeding and the built-in tile types."""
        super().__init__()

        self.tilemap_width = constants.TILEMAP_SIZE_DEFAULT
        self.tilemap_height = constants.TILEMAP_SIZE_DEFAULT

        self.randomize_seed()

        self.seed_pattern = constants.SEED_PATTERN_DEFAULT
        self.seed_stride = constants.SEED_STRIDE_DEFAULT

        self.tile_types = TileTypeRegistry.from_definitions(constants.DEFAULT_TILE_TYPES)

    def randomize_seed(self) -> int:
        """Picks a new random seed and returns it."""
        self.random_seed = random.randint(0, constants.RANDOM_SEED_MAX)
        return self.random_seed

    def set_tilemap_size(self, tilemap_width: int, tilemap_height: int) -> None:
        """Sets the tilemap size.

        Args:
            tilemap_width: The new width of the tilemap (in cells).
            tilemap_height: The new height of the tilemap (in cells).
        """
        self.tilemap_width = tilemap_width
        self.tilemap_height = tilemap_height

    def set_tile_types(self, tile_types: TileTypeRegistry) -> None:
        """Replaces the tile types and notifies the listeners."""
        self.tile_types = tile_types
        self.tile_types_changed.emit(tile_types)
