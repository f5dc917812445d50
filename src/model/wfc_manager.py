"""Contains the classes that run the WFC algorithm in the background for the viewer."""

from __future__ import annotations

import random
import threading
from typing import TYPE_CHECKING

import numpy as np
from PyQt6 import QtCore as qtc
import structlog

from enums import WFCUpdateMode
from exceptions import ConfigurationError, ContradictionError
from model.grid import Grid, seed_coords
from model.tilemap_renderer import TilemapRenderer
from model.wfc import WFC

if TYPE_CHECKING:
    from numpy.typing import NDArray
    from PIL import Image

    from enums import SeedPattern
    from model.base_model import BaseModel
    from model.tile_types import TileTypeRegistry


logger = structlog.get_logger()


class WFCWorker(qtc.QObject):
    """Executes one complete generation run, meant to be moved to a worker QThread.

    Signals:
        tilemap_updated: Emitted with a copy of the partial tilemap, as often as the update mode demands.
        finished: Emitted with the tilemap and the number of steps once the run ends (also after an abort, in which case
            the tilemap is incomplete).
        failed: Emitted with an error message if the run cannot be started or runs into a contradiction.
    """

    tilemap_updated = qtc.pyqtSignal(np.ndarray)
    finished = qtc.pyqtSignal(np.ndarray, int)
    failed = qtc.pyqtSignal(str)

    # The tile types to place.
    _tile_types: TileTypeRegistry
    # (height, width) of the tilemap (in cells).
    _tilemap_size: tuple[int, int]
    # Seed of the run's random number generator.
    _random_seed: int
    # Where the initially open cells are placed.
    _seed_pattern: SeedPattern
    # Distance between neighboring lattice seeds.
    _seed_stride: int
    # Checked between steps, stops the run when set.
    _abort_event: threading.Event
    # Defines how often 'tilemap_updated' is emitted.
    _update_mode: WFCUpdateMode
    # Number of steps between two updates in WFCUpdateMode.ON_EVERY_N_STEPS.
    _update_interval: int

    def __init__(
        self,
        tile_types: TileTypeRegistry,
        tilemap_size: tuple[int, int],
        random_seed: int,
        seed_pattern: SeedPattern,
        seed_stride: int,
        abort_event: threading.Event,
        update_mode: WFCUpdateMode,
        update_interval: int,
    ) -> None:
        super().__init__()

        self._tile_types = tile_types
        self._tilemap_size = tilemap_size
        self._random_seed = random_seed
        self._seed_pattern = seed_pattern
        self._seed_stride = seed_stride
        self._abort_event = abort_event
        self._update_mode = update_mode
        self._update_interval = max(update_interval, 1)

    def run(self) -> None:
        """Builds the grid and steps the algorithm until the open set is empty or the run is aborted."""
        height, width = self._tilemap_size
        try:
            grid = Grid(
                width, height, self._tile_types, seed_coords(self._seed_pattern, width, height, self._seed_stride)
            )
        except ConfigurationError as err:
            logger.error("Invalid generation settings", error=str(err))
            self.failed.emit(str(err))
            return

        wfc = WFC(grid, random.Random(self._random_seed))
        logger.info("Starting generation", width=width, height=height, random_seed=self._random_seed)

        more_work = grid.has_open()
        try:
            while more_work and not self._abort_event.is_set():
                more_work = wfc.step()
                if (
                    self._update_mode == WFCUpdateMode.ON_EVERY_N_STEPS
                    and wfc.step_count % self._update_interval == 0
                ):
                    self.tilemap_updated.emit(grid.tilemap())
        except ContradictionError as err:
            self.failed.emit(str(err))
            return

        if more_work:
            logger.info("Generation aborted", steps=wfc.step_count)
        else:
            logger.info("Generation finished", steps=wfc.step_count)
        self.finished.emit(grid.tilemap(), wfc.step_count)


class WFCManager(qtc.QObject):
    """Manages the worker thread running the WFC algorithm and renders its results.

    Signals:
        tilemap_img_updated: Emitted when the tilemap image has been updated.
        finished: Emitted with the tilemap and its image when a run has ended.
        failed: Emitted with an error message when a run has failed.
        steps_changed: Emitted with the number of steps once a run has ended.
    """

    tilemap_img_updated = qtc.pyqtSignal(object)
    finished = qtc.pyqtSignal(np.ndarray, object)
    failed = qtc.pyqtSignal(str)
    steps_changed = qtc.pyqtSignal(int)

    # The model holding the generation settings.
    _model: BaseModel
    # Renders the tilemaps of the current run, built from the tile types the run was started with.
    _renderer: TilemapRenderer

    # Event used to signal the worker to stop.
    _abort_event: threading.Event

    # The thread of the currently running worker, None while idle.
    _worker_thread: qtc.QThread | None
    # The currently running worker, None while idle.
    _worker: WFCWorker | None

    def __init__(self, model: BaseModel) -> None:
        """Initializes the WFC Manager.

        Args:
            model: The model holding the generation settings.
        """
        super().__init__()

        self._model = model
        self._renderer = TilemapRenderer(self._model.tile_types)

        self._abort_event = threading.Event()

        self._worker_thread = None
        self._worker = None

    def generate_tilemap(
        self,
        update_mode: WFCUpdateMode = WFCUpdateMode.ON_EVERY_N_STEPS,
        update_interval: int = 1,
    ) -> None:
        """Starts a generation run on a new worker thread with the current settings of the model.

        Args:
            update_mode: Defines how often the tilemap image is updated during the run.
            update_interval: Number of steps between two updates in WFCUpdateMode.ON_EVERY_N_STEPS.
        """
        self._abort_event.clear()

        # Each run is drawn with the tile types it was started with.
        self._renderer = TilemapRenderer(self._model.tile_types)
        self.tilemap_img_updated.emit(
            self._renderer.get_initial_tilemap_img((self._model.tilemap_height, self._model.tilemap_width))
        )

        self._worker_thread = qtc.QThread(self)
        self._worker = WFCWorker(
            self._model.tile_types,
            (self._model.tilemap_height, self._model.tilemap_width),
            self._model.random_seed,
            self._model.seed_pattern,
            self._model.seed_stride,
            self._abort_event,
            update_mode,
            update_interval,
        )

        # Move the worker object to the QThread and set up execution and cleanup logic.
        self._worker.moveToThread(self._worker_thread)
        self._worker_thread.started.connect(self._worker.run)
        self._worker.finished.connect(self._worker_thread.quit)
        self._worker.failed.connect(self._worker_thread.quit)
        self._worker_thread.finished.connect(self._worker.deleteLater)
        self._worker_thread.finished.connect(self._worker_thread.deleteLater)
        self._worker_thread.finished.connect(self.on_worker_thread_finished)

        self._worker.tilemap_updated.connect(self.on_worker_tilemap_updated)
        self._worker.finished.connect(self.on_worker_finished)
        self._worker.failed.connect(self.failed)

        self._worker_thread.start()

    def abort_tilemap_generation(self) -> None:
        """Sets the abort event, signaling the worker to stop after its current step."""
        self._abort_event.set()

    def on_main_app_about_to_quit(self) -> None:
        """Stops a running worker and waits for its thread before the application shuts down."""
        self._abort_event.set()
        if self._worker_thread is not None:
            self._worker_thread.quit()
            self._worker_thread.wait()

    def on_worker_thread_finished(self) -> None:
        self._worker_thread = None
        self._worker = None

    def on_worker_tilemap_updated(self, tilemap: NDArray[np.int_]) -> None:
        """Renders a partial tilemap and passes the image on."""
        self.tilemap_img_updated.emit(self._renderer.get_tilemap_img(tilemap))

    def on_worker_finished(self, tilemap: NDArray[np.int_], steps: int) -> None:
        """Renders the final tilemap and passes it on together with its image."""
        tilemap_img: Image.Image = self._renderer.get_tilemap_img(tilemap)
        self.tilemap_img_updated.emit(tilemap_img)
        self.steps_changed.emit(steps)
        self.finished.emit(tilemap, tilemap_img)
