"""Tests for rendering tilemaps to images and saving them."""

import numpy as np
from PIL import Image
import pytest

import constants
from exceptions import ConfigurationError, TilemapSaveError
from model.tilemap_renderer import TilemapRenderer


class TestTilemapImage:
    """Test converting tilemaps into images."""

    def test_uniform_tilemap_gives_uniform_image(self, single_tile_types):
        renderer = TilemapRenderer(single_tile_types)
        img = renderer.get_tilemap_img(np.zeros((4, 4), dtype=int))

        assert img.mode == "RGB"
        assert img.size == (4, 4)
        assert img.getcolors() == [(16, (255, 0, 0))]

    def test_uncollapsed_cells_are_black(self, abc_tile_types):
        renderer = TilemapRenderer(abc_tile_types)
        img = renderer.get_tilemap_img(np.array([[-1, 1, 2]]))

        assert img.size == (3, 1)
        assert img.getpixel((0, 0)) == constants.UNCOLLAPSED_COLOR
        assert img.getpixel((1, 0)) == (0, 255, 0)
        assert img.getpixel((2, 0)) == (0, 0, 255)

    def test_cell_size_scales_image(self, abc_tile_types):
        renderer = TilemapRenderer(abc_tile_types, cell_size=3)
        img = renderer.get_tilemap_img(np.array([[0, 1], [2, 0], [1, 1]]))

        assert img.size == (6, 9)
        assert img.getpixel((5, 2)) == (0, 255, 0)
        assert img.getpixel((0, 3)) == (0, 0, 255)

    def test_invalid_cell_size(self, abc_tile_types):
        with pytest.raises(ConfigurationError):
            TilemapRenderer(abc_tile_types, cell_size=0)

    def test_initial_image_is_uncollapsed(self, abc_tile_types):
        img = TilemapRenderer(abc_tile_types).get_initial_tilemap_img((2, 3))

        assert img.size == (3, 2)
        assert img.getcolors() == [(6, constants.UNCOLLAPSED_COLOR)]

    def test_set_tile_types_replaces_colors(self, abc_tile_types, single_tile_types):
        renderer = TilemapRenderer(abc_tile_types)
        renderer.set_tile_types(single_tile_types)

        assert renderer.get_tilemap_img(np.array([[0, -1]])).getpixel((0, 0)) == (255, 0, 0)
        assert renderer.get_tilemap_img(np.array([[0, -1]])).getpixel((1, 0)) == constants.UNCOLLAPSED_COLOR

    def test_palette_image(self, abc_tile_types):
        img = TilemapRenderer(abc_tile_types).get_palette_img(swatch_size=4)

        assert img.size == (12, 4)
        assert img.getpixel((1, 1)) == (255, 0, 0)
        assert img.getpixel((11, 3)) == (0, 0, 255)


class TestSaving:
    """Test writing tilemaps and images to disk."""

    def test_save_image(self, tmp_path, single_tile_types):
        renderer = TilemapRenderer(single_tile_types)
        file_path = tmp_path / "tilemap.png"

        renderer.save_tilemap_img(renderer.get_tilemap_img(np.zeros((3, 5), dtype=int)), str(file_path))

        with Image.open(file_path) as img:
            assert img.size == (5, 3)

    def test_save_image_to_missing_directory(self, tmp_path, single_tile_types):
        renderer = TilemapRenderer(single_tile_types)
        img = renderer.get_tilemap_img(np.zeros((2, 2), dtype=int))

        with pytest.raises(TilemapSaveError) as exc_info:
            renderer.save_tilemap_img(img, str(tmp_path / "missing" / "tilemap.png"))

        assert exc_info.value.path == str(tmp_path / "missing" / "tilemap.png")

    def test_save_image_with_unknown_extension(self, tmp_path, single_tile_types):
        renderer = TilemapRenderer(single_tile_types)
        img = renderer.get_tilemap_img(np.zeros((2, 2), dtype=int))

        with pytest.raises(TilemapSaveError):
            renderer.save_tilemap_img(img, str(tmp_path / "tilemap.unknown"))

    def test_save_tilemap_csv(self, tmp_path, abc_tile_types):
        tilemap = np.array([[0, 1, -1], [2, 2, 0]])
        file_path = tmp_path / "tilemap.csv"

        TilemapRenderer(abc_tile_types).save_tilemap(tilemap, str(file_path))

        assert file_path.read_text().splitlines() == ["0,1,-1", "2,2,0"]

    def test_save_tilemap_to_missing_directory(self, tmp_path, abc_tile_types):
        with pytest.raises(TilemapSaveError):
            TilemapRenderer(abc_tile_types).save_tilemap(np.zeros((1, 1), dtype=int), str(tmp_path / "a" / "b.csv"))
