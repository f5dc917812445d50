"""Shared fixtures for the tilemap generator tests."""

from pathlib import Path

import pytest

import constants
from model.tile_types import TileTypeRegistry


ASSETS_DIR = Path(__file__).resolve().parents[1] / "assets"


@pytest.fixture
def terrain_csv_path():
    """Path of the terrain tile types shipped with the viewer."""
    return ASSETS_DIR / "tile_types" / "terrain.csv"


@pytest.fixture
def single_tile_types():
    """A single red tile type that may border itself."""
    return TileTypeRegistry.from_definitions([((255, 0, 0), 0b1)])


@pytest.fixture
def abc_tile_types():
    """A and B may border each other and themselves, C only borders itself."""
    return TileTypeRegistry.from_definitions(
        [
            ((255, 0, 0), 0b011),
            ((0, 255, 0), 0b011),
            ((0, 0, 255), 0b100),
        ]
    )


@pytest.fixture
def terrain_tile_types():
    """The built-in 15 tile type terrain palette."""
    return TileTypeRegistry.from_definitions(constants.DEFAULT_TILE_TYPES)


@pytest.fixture
def lonely_tile_types():
    """A tile type that cannot border anything, so any two adjacent cells contradict."""
    return TileTypeRegistry.from_definitions([((10, 20, 30), 0)])
