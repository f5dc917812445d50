"""Contains the widget class for general configuration options."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PIL.ImageQt import ImageQt
from PyQt6 import QtCore as qtc
from PyQt6 import QtGui as qtg
from PyQt6 import QtWidgets as qtw
import structlog

import constants
from enums import SeedPattern
from exceptions import ConfigurationError
from model.grid import check_tile_type_count
from model.tile_types import load_tile_types
from view.int_spin_box import IntSpinBox

if TYPE_CHECKING:
    from model.base_model import BaseModel
    from model.tile_types import TileTypeRegistry
    from model.tilemap_renderer import TilemapRenderer


logger = structlog.get_logger()


class GeneralSettingsWidget(qtw.QWidget):
    """The widget class for general configuration options.

    This widget contains the tilemap size, the random seed, the placement of the initially open cells and the tile
    types (loaded from a CSV file), together with a preview of the tile type colors.
    """

    # The model holding the generation settings.
    _model: BaseModel
    # The renderer used for the tile type color preview.
    _renderer: TilemapRenderer

    # Input for the width of the output tilemap (in cells).
    _tilemap_width_input: IntSpinBox
    # Input for the height of the output tilemap (in cells).
    _tilemap_height_input: IntSpinBox

    # Input for the random seed of the next generation run.
    _random_seed_input: IntSpinBox
    # Button that picks a new random seed.
    _randomize_seed_button: qtw.QPushButton
    # Selection for the placement of the initially open cells.
    _seed_pattern_combobox: qtw.QComboBox
    # Input for the distance between neighboring lattice seeds.
    _seed_stride_input: IntSpinBox

    # Button to trigger the file dialog for loading tile types.
    _load_tile_types_file_button: qtw.QPushButton
    # Label showing the number of loaded tile types.
    _tile_type_count_label: qtw.QLabel
    # Label used to display one color swatch per tile type.
    _palette_img_label: qtw.QLabel

    def __init__(self, model: BaseModel, renderer: TilemapRenderer) -> None:
        """Initializes the widget and sets up the GUI elements and connections.

        Args:
            model: The model holding the generation settings.
            renderer: The renderer used for the tile type color preview.
        """
        super().__init__()

        self._model = model
        self._renderer = renderer

        # === LEFT SIDE - WIDGETS ===

        self._tilemap_width_input = IntSpinBox(
            self._model.tilemap_width, constants.TILEMAP_SIZE_MIN_LIMIT, constants.TILEMAP_SIZE_MAX_LIMIT, 10
        )
        self._tilemap_width_input.value_committed.connect(self.on_tilemap_size_input_changed)
        self._tilemap_height_input = IntSpinBox(
            self._model.tilemap_height, constants.TILEMAP_SIZE_MIN_LIMIT, constants.TILEMAP_SIZE_MAX_LIMIT, 10
        )
        self._tilemap_height_input.value_committed.connect(self.on_tilemap_size_input_changed)

        self._random_seed_input = IntSpinBox(self._model.random_seed, 0, constants.RANDOM_SEED_MAX, 1)
        self._random_seed_input.value_committed.connect(self.on_random_seed_input_changed)
        self._randomize_seed_button = qtw.QPushButton("Randomize")
        self._randomize_seed_button.clicked.connect(self.on_randomize_seed_button_clicked)

        self._seed_pattern_combobox = qtw.QComboBox()
        self._seed_pattern_combobox.addItems([option.value for option in SeedPattern])
        self._seed_pattern_combobox.setCurrentText(self._model.seed_pattern.value)
        self._seed_pattern_combobox.currentTextChanged.connect(self.on_seed_pattern_combobox_changed)

        self._seed_stride_input = IntSpinBox(
            self._model.seed_stride, constants.SEED_STRIDE_MIN_LIMIT, constants.SEED_STRIDE_MAX_LIMIT, 1
        )
        self._seed_stride_input.value_committed.connect(self.on_seed_stride_input_changed)
        self._seed_stride_input.setEnabled(self._model.seed_pattern == SeedPattern.LATTICE)

        self._load_tile_types_file_button = qtw.QPushButton("Load Tile Types (from CSV File)")
        self._load_tile_types_file_button.clicked.connect(self.load_tile_types_file)

        self._tile_type_count_label = qtw.QLabel()

        # === LEFT SIDE - LAYOUT ===

        container_tilemap = qtw.QGroupBox("Tilemap")
        container_tilemap_layout = qtw.QGridLayout()
        container_tilemap.setLayout(container_tilemap_layout)
        container_tilemap_layout.setColumnStretch(0, 1)
        container_tilemap_layout.setColumnMinimumWidth(1, constants.LAYOUT_GRID_MIDDLE_COLUMN_MIN_WIDTH)
        container_tilemap_layout.setColumnMinimumWidth(2, constants.LAYOUT_GRID_RIGHT_COLUMN_MIN_WIDTH)
        container_tilemap_layout.addWidget(qtw.QLabel("Width"), 0, 0)
        container_tilemap_layout.addWidget(self._tilemap_width_input, 0, 2)
        container_tilemap_layout.addWidget(qtw.QLabel("Height"), 1, 0)
        container_tilemap_layout.addWidget(self._tilemap_height_input, 1, 2)

        container_seeding = qtw.QGroupBox("Seeding")
        container_seeding_layout = qtw.QGridLayout()
        container_seeding.setLayout(container_seeding_layout)
        container_seeding_layout.setColumnStretch(0, 1)
        container_seeding_layout.setColumnMinimumWidth(1, constants.LAYOUT_GRID_MIDDLE_COLUMN_MIN_WIDTH)
        container_seeding_layout.setColumnMinimumWidth(2, constants.LAYOUT_GRID_RIGHT_COLUMN_MIN_WIDTH)
        container_seeding_layout.addWidget(qtw.QLabel("Random Seed"), 0, 0)
        container_seeding_layout.addWidget(self._random_seed_input, 0, 2)
        container_seeding_layout.addWidget(self._randomize_seed_button, 1, 2)
        container_seeding_layout.addWidget(qtw.QLabel("Seed Pattern"), 2, 0)
        container_seeding_layout.addWidget(self._seed_pattern_combobox, 2, 2)
        container_seeding_layout.addWidget(qtw.QLabel("Seed Stride"), 3, 0)
        container_seeding_layout.addWidget(self._seed_stride_input, 3, 2)

        container_tile_types = qtw.QGroupBox("Tile Types")
        container_tile_types_layout = qtw.QVBoxLayout()
        container_tile_types.setLayout(container_tile_types_layout)
        container_tile_types_layout.addWidget(self._load_tile_types_file_button)
        container_tile_types_layout.addWidget(self._tile_type_count_label)

        container_left = qtw.QWidget()
        container_left.setMaximumWidth(constants.LAYOUT_LEFT_SIDE_MAX_WIDTH)
        container_left_layout = qtw.QVBoxLayout()
        container_left.setLayout(container_left_layout)
        container_left_layout.setSpacing(constants.LAYOUT_LEFT_SIDE_VBOX_SPACING)
        container_left_layout.addWidget(container_tilemap)
        container_left_layout.addWidget(container_seeding)
        container_left_layout.addWidget(container_tile_types)
        container_left_layout.addStretch()

        # === RIGHT SIDE ===

        self._palette_img_label = qtw.QLabel()
        self._palette_img_label.setAlignment(qtc.Qt.AlignmentFlag.AlignCenter)

        container_right = qtw.QWidget()
        container_right_layout = qtw.QVBoxLayout()
        container_right.setLayout(container_right_layout)
        container_right_layout.addWidget(self._palette_img_label)

        # === COMBINE SIDES ===

        layout = qtw.QHBoxLayout()
        self.setLayout(layout)
        layout.addWidget(container_left)
        layout.addWidget(container_right)

        self._model.tile_types_changed.connect(self.on_tile_types_changed)
        self.on_tile_types_changed(self._model.tile_types)

    def load_tile_types_file(self) -> None:
        """Opens a file dialog and loads the tile types from the selected .csv file."""
        file_path, _ = qtw.QFileDialog.getOpenFileName(
            self, "Load Tile Types from...", constants.EXAMPLE_TILE_TYPES_PATH, "CSV Files (*.csv)"
        )
        if not file_path:
            return

        try:
            tile_types = load_tile_types(file_path)
            check_tile_type_count(tile_types.count())
        except ConfigurationError as err:
            logger.warning("Rejected tile types file", path=file_path, error=str(err))
            qtw.QMessageBox.warning(self, "Invalid Tile Types", str(err))
            return

        self._model.set_tile_types(tile_types)

    def on_tilemap_size_input_changed(self) -> None:
        self._model.set_tilemap_size(self._tilemap_width_input.value(), self._tilemap_height_input.value())

    def on_random_seed_input_changed(self, random_seed: int) -> None:
        self._model.random_seed = random_seed

    def on_randomize_seed_button_clicked(self) -> None:
        self._random_seed_input.set_committed_value(self._model.randomize_seed())

    def on_seed_pattern_combobox_changed(self, seed_pattern_str: str) -> None:
        self._model.seed_pattern = SeedPattern(seed_pattern_str)
        self._seed_stride_input.setEnabled(self._model.seed_pattern == SeedPattern.LATTICE)

    def on_seed_stride_input_changed(self, seed_stride: int) -> None:
        self._model.seed_stride = seed_stride

    def on_tile_types_changed(self, tile_types: TileTypeRegistry) -> None:
        """Updates the tile type count and redraws the color preview."""
        self._renderer.set_tile_types(tile_types)
        self._tile_type_count_label.setText(f"{tile_types.count()} tile types loaded")
        palette_img_pixmap = qtg.QPixmap.fromImage(ImageQt(self._renderer.get_palette_img()).copy())
        self._palette_img_label.setPixmap(palette_img_pixmap)
