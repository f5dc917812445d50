"""Tests for tile type definitions and loading them from CSV files."""

import numpy as np
import pytest

import constants
from exceptions import ConfigurationError
from model.bitset import Bitset
from model.tile_types import load_tile_types, TileType, TileTypeRegistry


def write_csv(tmp_path, content, name="tile_types.csv"):
    file_path = tmp_path / name
    file_path.write_text(content, encoding="utf-8")
    return str(file_path)


class TestTileTypeRegistry:
    """Test the registry built from (color, mask) pairs."""

    def test_from_definitions(self, abc_tile_types):
        assert abc_tile_types.count() == 3
        assert len(abc_tile_types) == 3
        assert abc_tile_types.color(2) == (0, 0, 255)
        assert abc_tile_types.neighbor_mask(0) == Bitset.from_indices([0, 1])
        assert abc_tile_types.neighbor_mask(2) == Bitset.singleton(2)

    def test_iteration_keeps_order(self, abc_tile_types):
        assert [tile_type.color for tile_type in abc_tile_types] == [(255, 0, 0), (0, 255, 0), (0, 0, 255)]

    def test_allowed_neighbors_is_union_of_masks(self, abc_tile_types):
        assert abc_tile_types.allowed_neighbors(Bitset.singleton(0)) == Bitset.from_indices([0, 1])
        assert abc_tile_types.allowed_neighbors(Bitset.from_indices([1, 2])) == Bitset.from_indices([0, 1, 2])
        assert abc_tile_types.allowed_neighbors(Bitset()).is_empty()

    def test_palette(self, abc_tile_types):
        palette = abc_tile_types.palette()
        assert palette.shape == (3, 3)
        assert palette.dtype == np.uint8
        assert palette[1].tolist() == [0, 255, 0]

    def test_empty_registry_palette_has_three_columns(self):
        assert TileTypeRegistry([]).palette().shape == (0, 3)

    def test_mask_wider_than_128_bits_is_rejected(self):
        with pytest.raises(ConfigurationError):
            TileTypeRegistry.from_definitions([((0, 0, 0), 1 << 128)])

    def test_color_out_of_range_is_rejected(self):
        with pytest.raises(ConfigurationError):
            TileType((0, 256, 0), Bitset(1))
        with pytest.raises(ConfigurationError):
            TileType((0, 0), Bitset(1))

    def test_default_terrain_rules_are_symmetric(self, terrain_tile_types):
        assert terrain_tile_types.count() == 15
        for i in range(terrain_tile_types.count()):
            assert i in terrain_tile_types.neighbor_mask(i)
            for j in terrain_tile_types.neighbor_mask(i):
                assert i in terrain_tile_types.neighbor_mask(j)


class TestLoadTileTypes:
    """Test reading tile types from CSV files."""

    def test_load_shipped_terrain_file(self, terrain_csv_path):
        tile_types = load_tile_types(str(terrain_csv_path))
        expected = TileTypeRegistry.from_definitions(constants.DEFAULT_TILE_TYPES)
        assert list(tile_types) == list(expected)

    def test_mask_bases(self, tmp_path):
        file_path = write_csv(tmp_path, "red,green,blue,neighbors\n1,2,3,0b011\n4,5,6,0x3\n7,8,9,4\n")
        tile_types = load_tile_types(file_path)
        assert tile_types.count() == 3
        assert tile_types.color(1) == (4, 5, 6)
        assert tile_types.neighbor_mask(0) == tile_types.neighbor_mask(1) == Bitset.from_indices([0, 1])
        assert tile_types.neighbor_mask(2) == Bitset.singleton(2)

    def test_spaces_after_commas(self, tmp_path):
        file_path = write_csv(tmp_path, "red, green, blue, neighbors\n1, 2, 3, 0b1\n")
        assert load_tile_types(file_path).color(0) == (1, 2, 3)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Cannot read tile types"):
            load_tile_types(str(tmp_path / "missing.csv"))

    def test_missing_column(self, tmp_path):
        file_path = write_csv(tmp_path, "red,green,blue\n1,2,3\n")
        with pytest.raises(ConfigurationError, match="neighbors"):
            load_tile_types(file_path)

    def test_malformed_value_names_row(self, tmp_path):
        file_path = write_csv(tmp_path, "red,green,blue,neighbors\n1,2,3,0b1\n1,2,x,0b1\n")
        with pytest.raises(ConfigurationError, match="row 3"):
            load_tile_types(file_path)

    def test_short_row(self, tmp_path):
        file_path = write_csv(tmp_path, "red,green,blue,neighbors\n1,2,3\n")
        with pytest.raises(ConfigurationError, match="row 2"):
            load_tile_types(file_path)

    def test_color_out_of_range(self, tmp_path):
        file_path = write_csv(tmp_path, "red,green,blue,neighbors\n1,2,300,0b1\n")
        with pytest.raises(ConfigurationError):
            load_tile_types(file_path)
