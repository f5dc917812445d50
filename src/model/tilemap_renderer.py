"""Manages the visual representation of tile types and tilemaps."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from PIL import Image
import structlog

import constants
from exceptions import ConfigurationError, TilemapSaveError

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from model.tile_types import TileTypeRegistry


logger = structlog.get_logger()


class TilemapRenderer:
    """Converts tilemaps (grids of tile type indices) into images and writes them to disk.

    Every cell becomes a square of 'cell_size' pixels filled with the color of its tile type. Uncollapsed cells (tile
    index -1) are filled with constants.UNCOLLAPSED_COLOR, so partially generated tilemaps can be rendered as well.
    """

    # The width and height of a single cell in pixels.
    _cell_size: int
    # Color table with one row per tile type plus a last row for uncollapsed cells (addressed by index -1).
    _palette: NDArray[np.uint8]
    # The tile types whose colors are rendered.
    _tile_types: TileTypeRegistry

    def __init__(self, tile_types: TileTypeRegistry, cell_size: int = constants.CELL_SIZE_DEFAULT) -> None:
        """Initializes the renderer by setting the initial tile types.

        Args:
            tile_types: The tile types whose colors are rendered.
            cell_size: The width and height of a single cell in pixels.

        Raises:
            ConfigurationError: If 'cell_size' is smaller than 1.
        """
        if cell_size < 1:
            raise ConfigurationError(f"Cell size must be at least 1 pixel, got {cell_size}")
        self._cell_size = cell_size
        self.set_tile_types(tile_types)

    def set_tile_types(self, tile_types: TileTypeRegistry) -> None:
        """Replaces the tile types and rebuilds the color table."""
        self._tile_types = tile_types
        self._palette = np.vstack(
            [tile_types.palette(), np.array([constants.UNCOLLAPSED_COLOR], dtype=np.uint8)]
        ).astype(np.uint8)

    def get_tilemap_img(self, tilemap_array: NDArray[np.int_]) -> Image.Image:
        """Renders a tilemap array into a complete PIL Image object.

        Args:
            tilemap_array: A 2D array containing tile type indices, -1 for uncollapsed cells.

        Returns:
            A PIL Image representing the visual tilemap.
        """
        # Index -1 selects the last palette row, which holds the uncollapsed color.
        pixels = self._palette[tilemap_array]
        tilemap_img = Image.fromarray(pixels)
        if self._cell_size != 1:
            # Image size is (width, height) while tilemap_array.shape is (rows, cols), so the indices are swapped.
            tilemap_img = tilemap_img.resize(
                (tilemap_array.shape[1] * self._cell_size, tilemap_array.shape[0] * self._cell_size),
                Image.Resampling.NEAREST,
            )
        return tilemap_img

    def get_initial_tilemap_img(self, tilemap_size: tuple[int, int]) -> Image.Image:
        """Creates an image of a tilemap of the given (rows, columns) size with no collapsed cells."""
        img_size = (tilemap_size[1] * self._cell_size, tilemap_size[0] * self._cell_size)
        return Image.new("RGB", img_size, constants.UNCOLLAPSED_COLOR)

    def get_palette_img(self, swatch_size: int = constants.PALETTE_SWATCH_SIZE) -> Image.Image:
        """Renders one square swatch per tile type, left to right in index order."""
        palette_img = Image.new("RGB", (max(self._tile_types.count(), 1) * swatch_size, swatch_size))
        for index in range(self._tile_types.count()):
            box = (index * swatch_size, 0, (index + 1) * swatch_size, swatch_size)
            palette_img.paste(self._tile_types.color(index), box)
        return palette_img

    def save_tilemap_img(self, tilemap_img: Image.Image, file_path: str) -> None:
        """Saves a generated tilemap image to the specified file path.

        The image format is derived from the file extension.

        Raises:
            TilemapSaveError: If the image cannot be written.
        """
        try:
            tilemap_img.save(file_path)
        except (OSError, ValueError) as err:
            logger.error("Failed to save tilemap image", path=file_path, error=str(err))
            raise TilemapSaveError(f"Cannot save tilemap image to {file_path}: {err}", path=file_path) from err
        logger.info("Saved tilemap image", path=file_path, size=tilemap_img.size)

    def save_tilemap(self, tilemap_array: NDArray[np.int_], file_path: str) -> None:
        """Saves the raw tile type indices as a .csv file, -1 marking uncollapsed cells.

        Raises:
            TilemapSaveError: If the file cannot be written.
        """
        try:
            np.savetxt(file_path, tilemap_array, fmt="%i", delimiter=",")
        except OSError as err:
            logger.error("Failed to save tilemap", path=file_path, error=str(err))
            raise TilemapSaveError(f"Cannot save tilemap to {file_path}: {err}", path=file_path) from err
        logger.info("Saved tilemap", path=file_path)
