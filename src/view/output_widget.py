"""Contains the widget class for generating/displaying the output tilemap."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from PIL.ImageQt import ImageQt
from PyQt6 import QtCore as qtc
from PyQt6 import QtGui as qtg
from PyQt6 import QtWidgets as qtw

import constants
from enums import WFCUpdateMode
from exceptions import TilemapSaveError
from view.int_spin_box import IntSpinBox

if TYPE_CHECKING:
    from numpy.typing import NDArray
    from PIL import Image

    from model.base_model import BaseModel
    from model.tilemap_renderer import TilemapRenderer
    from model.wfc_manager import WFCManager


class OutputWidget(qtw.QWidget):
    """The widget class for generating/displaying the output tilemap.

    This widget starts and aborts generation runs, shows the (partial) tilemap while it is generated and provides
    options for saving the tilemap data (.csv format) and its visual representation (.png format).
    """

    # The model holding the generation settings.
    _model: BaseModel
    # The WFC manager running the algorithm on a worker thread.
    _wfc_manager: WFCManager
    # The renderer responsible for saving tilemaps and their images.
    _renderer: TilemapRenderer

    # Selection for how often the shown tilemap image is updated.
    _tilemap_image_update_mode_combobox: qtw.QComboBox
    # Input for the number of steps between two image updates.
    _update_interval_input: IntSpinBox
    # Button to start generating the output tilemap via WFC.
    _generate_tilemap_button: qtw.QPushButton
    # Button to stop the ongoing generation.
    _abort_tilemap_generation_button: qtw.QPushButton
    # Label showing the number of steps of the last run.
    _steps_label: qtw.QLabel

    # Button to save the raw tilemap data (.csv format).
    _save_tilemap_button: qtw.QPushButton
    # Button to save the tilemap image (.png format).
    _save_tilemap_image_button: qtw.QPushButton

    # Label to display the tilemap image.
    _tilemap_img_label: qtw.QLabel

    def __init__(self, model: BaseModel, wfc_manager: WFCManager, renderer: TilemapRenderer) -> None:
        """Initializes the widget and sets up the GUI elements and connections.

        Args:
            model: The model holding the generation settings.
            wfc_manager: The WFC manager running the algorithm on a worker thread.
            renderer: The renderer responsible for saving tilemaps and their images.
        """
        super().__init__()

        self._model = model
        self._wfc_manager = wfc_manager
        self._renderer = renderer

        self.tilemap: NDArray[np.int_] = np.full(
            (self._model.tilemap_height, self._model.tilemap_width), -1, dtype=np.int_
        )
        self.tilemap_img: Image.Image | None = None

        # === LEFT SIDE - WIDGETS ===

        tilemap_image_update_mode_label = qtw.QLabel("Tilemap Image Update Mode")
        tilemap_image_update_mode_label.setWordWrap(True)
        tilemap_image_update_mode_label.setMinimumHeight(32)

        self._tilemap_image_update_mode_combobox = qtw.QComboBox()
        self._tilemap_image_update_mode_combobox.addItems([option.value for option in WFCUpdateMode])
        self._tilemap_image_update_mode_combobox.setCurrentText(constants.UPDATE_MODE_DEFAULT.value)
        self._tilemap_image_update_mode_combobox.currentTextChanged.connect(self.on_update_mode_combobox_changed)

        self._update_interval_input = IntSpinBox(
            constants.UPDATE_INTERVAL_DEFAULT,
            constants.UPDATE_INTERVAL_MIN_LIMIT,
            constants.UPDATE_INTERVAL_MAX_LIMIT,
            100,
        )

        self._generate_tilemap_button = qtw.QPushButton("Generate Tilemap")
        self._generate_tilemap_button.clicked.connect(self.on_generate_tilemap_button_clicked)

        self._abort_tilemap_generation_button = qtw.QPushButton("Abort")
        self._abort_tilemap_generation_button.setEnabled(False)
        self._abort_tilemap_generation_button.clicked.connect(self.on_abort_tilemap_generation_button_clicked)

        self._steps_label = qtw.QLabel()

        self._save_tilemap_button = qtw.QPushButton("Save Tilemap (to CSV File)")
        self._save_tilemap_button.clicked.connect(self.save_tilemap)

        self._save_tilemap_image_button = qtw.QPushButton("Save Tilemap Image")
        self._save_tilemap_image_button.clicked.connect(self.save_tilemap_image)

        # === LEFT SIDE - LAYOUT ===

        container_tilemap_generation = qtw.QGroupBox("Tilemap Generation")
        container_tilemap_generation_layout = qtw.QGridLayout()
        container_tilemap_generation.setLayout(container_tilemap_generation_layout)
        container_tilemap_generation_layout.setColumnStretch(0, 1)
        container_tilemap_generation_layout.setColumnMinimumWidth(1, constants.LAYOUT_GRID_MIDDLE_COLUMN_MIN_WIDTH)
        container_tilemap_generation_layout.setColumnMinimumWidth(2, constants.LAYOUT_GRID_RIGHT_COLUMN_MIN_WIDTH)
        container_tilemap_generation_layout.addWidget(tilemap_image_update_mode_label, 0, 0)
        container_tilemap_generation_layout.addWidget(self._tilemap_image_update_mode_combobox, 0, 2)
        container_tilemap_generation_layout.addWidget(qtw.QLabel("Steps Between Updates"), 1, 0)
        container_tilemap_generation_layout.addWidget(self._update_interval_input, 1, 2)
        container_tilemap_generation_layout.addWidget(self._generate_tilemap_button, 2, 0)
        container_tilemap_generation_layout.addWidget(self._abort_tilemap_generation_button, 2, 2)
        container_tilemap_generation_layout.addWidget(self._steps_label, 3, 0, 1, -1)

        container_tilemap_storage = qtw.QGroupBox("Tilemap Storage")
        container_tilemap_storage_layout = qtw.QGridLayout()
        container_tilemap_storage.setLayout(container_tilemap_storage_layout)
        container_tilemap_storage_layout.addWidget(self._save_tilemap_button, 0, 0, 1, -1)
        container_tilemap_storage_layout.addWidget(self._save_tilemap_image_button, 1, 0, 1, -1)

        container_left = qtw.QWidget()
        container_left.setMaximumWidth(constants.LAYOUT_LEFT_SIDE_MAX_WIDTH)
        container_left_layout = qtw.QVBoxLayout()
        container_left.setLayout(container_left_layout)
        container_left_layout.setSpacing(constants.LAYOUT_LEFT_SIDE_VBOX_SPACING)
        container_left_layout.addWidget(container_tilemap_generation)
        container_left_layout.addWidget(container_tilemap_storage)
        container_left_layout.addStretch()

        # === RIGHT SIDE ===

        self._tilemap_img_label = qtw.QLabel()
        self._tilemap_img_label.setAlignment(qtc.Qt.AlignmentFlag.AlignCenter)

        container_right = qtw.QWidget()
        container_right_layout = qtw.QVBoxLayout()
        container_right.setLayout(container_right_layout)
        container_right_layout.addWidget(self._tilemap_img_label)

        # === COMBINE SIDES ===

        layout = qtw.QHBoxLayout()
        self.setLayout(layout)
        layout.addWidget(container_left)
        layout.addWidget(container_right)

        self._wfc_manager.tilemap_img_updated.connect(self.on_wfc_manager_tilemap_img_updated)
        self._wfc_manager.finished.connect(self.on_wfc_manager_finished)
        self._wfc_manager.failed.connect(self.on_wfc_manager_failed)
        self._wfc_manager.steps_changed.connect(self.on_wfc_manager_steps_changed)

    def on_generate_tilemap_button_clicked(self) -> None:
        """Orders the WFC manager to start the tilemap generation process.

        Disables the 'Generate' button and enables the 'Abort' button.
        """
        self._generate_tilemap_button.setEnabled(False)
        self._abort_tilemap_generation_button.setEnabled(True)
        self._steps_label.setText("Generating...")

        self._wfc_manager.generate_tilemap(
            WFCUpdateMode(self._tilemap_image_update_mode_combobox.currentText()),
            self._update_interval_input.value(),
        )

    def on_abort_tilemap_generation_button_clicked(self) -> None:
        """Aborts the running generation. The partial tilemap is delivered through the 'finished' signal."""
        self._wfc_manager.abort_tilemap_generation()
        self._abort_tilemap_generation_button.setEnabled(False)

    def on_update_mode_combobox_changed(self, update_mode_str: str) -> None:
        self._update_interval_input.setEnabled(WFCUpdateMode(update_mode_str) == WFCUpdateMode.ON_EVERY_N_STEPS)

    def on_wfc_manager_tilemap_img_updated(self, tilemap_img: Image.Image) -> None:
        self._draw_tilemap_img(tilemap_img)

    def on_wfc_manager_finished(self, tilemap: NDArray[np.int_], tilemap_img: Image.Image) -> None:
        """Stores the final tilemap and its image and re-enables the 'Generate' button."""
        self.tilemap = tilemap
        self.tilemap_img = tilemap_img
        self._draw_tilemap_img(tilemap_img)

        self._generate_tilemap_button.setEnabled(True)
        self._abort_tilemap_generation_button.setEnabled(False)

    def on_wfc_manager_failed(self, message: str) -> None:
        """Reports a failed run and re-enables the 'Generate' button."""
        self._steps_label.setText("Generation failed")
        qtw.QMessageBox.critical(self, "Generation Failed", message)

        self._generate_tilemap_button.setEnabled(True)
        self._abort_tilemap_generation_button.setEnabled(False)

    def on_wfc_manager_steps_changed(self, steps: int) -> None:
        self._steps_label.setText(f"Generated with {steps} iterations")

    def save_tilemap(self) -> None:
        """Opens a file dialog and saves the tilemap data as a .csv file."""
        file_path, _ = qtw.QFileDialog.getSaveFileName(self, "Save Tilemap to...", "tilemap", "CSV Files (*.csv)")
        if not file_path:
            return
        try:
            self._renderer.save_tilemap(self.tilemap, file_path)
        except TilemapSaveError as err:
            qtw.QMessageBox.critical(self, "Saving Failed", str(err))

    def save_tilemap_image(self) -> None:
        """Opens a file dialog and saves the tilemap image as a .png file."""
        if self.tilemap_img is None:
            return
        file_path, _ = qtw.QFileDialog.getSaveFileName(self, "Save Tilemap Image to...", "tilemap", "PNG Files (*.png)")
        if not file_path:
            return
        try:
            self._renderer.save_tilemap_img(self.tilemap_img, file_path)
        except TilemapSaveError as err:
            qtw.QMessageBox.critical(self, "Saving Failed", str(err))

    def _draw_tilemap_img(self, tilemap_img: Image.Image) -> None:
        """Converts the PIL Image to a QPixmap and displays it in the label, scaled to fit."""
        tilemap_img_pixmap = qtg.QPixmap.fromImage(ImageQt(tilemap_img).copy())
        # One pixel per cell is tiny on screen, so the image is always scaled to the label size. Subtracting one pixel
        # from the label height keeps the label from growing by one pixel per draw step.
        tilemap_img_pixmap = tilemap_img_pixmap.scaled(
            self._tilemap_img_label.width(),
            self._tilemap_img_label.height() - 1,
            qtc.Qt.AspectRatioMode.KeepAspectRatio,
            qtc.Qt.TransformationMode.FastTransformation,
        )
        self._tilemap_img_label.setPixmap(tilemap_img_pixmap)
