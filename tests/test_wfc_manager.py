"""Tests for the background generation worker and the viewer settings model."""

import threading

import numpy as np
import pytest

pytest.importorskip("PyQt6.QtCore")

import constants  # noqa: E402
from enums import SeedPattern, WFCUpdateMode  # noqa: E402
from model.base_model import BaseModel  # noqa: E402
from model.wfc_manager import WFCManager, WFCWorker  # noqa: E402
from PyQt6 import QtCore as qtc  # noqa: E402


def make_worker(tile_types, abort_event=None, update_mode=WFCUpdateMode.ONLY_WHEN_DONE, update_interval=1, size=(3, 4)):
    return WFCWorker(
        tile_types,
        size,
        7,
        SeedPattern.CENTER,
        16,
        abort_event or threading.Event(),
        update_mode,
        update_interval,
    )


class TestWFCWorker:
    """Test running the worker synchronously on the calling thread."""

    def test_finished_with_complete_tilemap(self, terrain_tile_types):
        worker = make_worker(terrain_tile_types)
        results = []
        updates = []
        worker.finished.connect(lambda tilemap, steps: results.append((tilemap, steps)))
        worker.tilemap_updated.connect(updates.append)

        worker.run()

        tilemap, steps = results[0]
        assert tilemap.shape == (3, 4)
        assert (tilemap >= 0).all()
        assert steps == 12
        assert updates == []

    def test_updates_every_n_steps(self, single_tile_types):
        worker = make_worker(single_tile_types, update_mode=WFCUpdateMode.ON_EVERY_N_STEPS, update_interval=4)
        updates = []
        worker.tilemap_updated.connect(updates.append)

        worker.run()

        assert [int((tilemap >= 0).sum()) for tilemap in updates] == [4, 8, 12]

    def test_abort_returns_partial_tilemap(self, single_tile_types):
        abort_event = threading.Event()
        abort_event.set()
        worker = make_worker(single_tile_types, abort_event=abort_event)
        results = []
        worker.finished.connect(lambda tilemap, steps: results.append((tilemap, steps)))

        worker.run()

        tilemap, steps = results[0]
        assert steps == 0
        assert np.array_equal(tilemap, np.full((3, 4), -1))

    def test_contradiction_fails(self, lonely_tile_types):
        worker = make_worker(lonely_tile_types)
        messages = []
        results = []
        worker.failed.connect(messages.append)
        worker.finished.connect(lambda tilemap, steps: results.append(steps))

        worker.run()

        assert len(messages) == 1
        assert results == []

    def test_invalid_size_fails(self, single_tile_types):
        worker = make_worker(single_tile_types, size=(0, 4))
        messages = []
        worker.failed.connect(messages.append)

        worker.run()

        assert "positive" in messages[0]


class TestWFCManager:
    """Test that a run keeps drawing with the tile types it was started with."""

    @pytest.fixture
    def app(self):
        return qtc.QCoreApplication.instance() or qtc.QCoreApplication([])

    def test_loading_tile_types_keeps_colors_of_current_manager(self, single_tile_types):
        model = BaseModel()
        manager = WFCManager(model)
        images = []
        manager.tilemap_img_updated.connect(images.append)

        model.set_tile_types(single_tile_types)
        manager.on_worker_tilemap_updated(np.array([[5, -1], [14, 0]]))

        assert images[0].getpixel((0, 0)) == (255, 255, 0)
        assert images[0].getpixel((0, 1)) == (255, 255, 255)
        assert images[0].getpixel((1, 1)) == (0, 0, 200)

    def test_tile_types_swapped_during_run(self, app, single_tile_types):
        model = BaseModel()
        model.set_tilemap_size(2, 2)
        manager = WFCManager(model)
        images = []
        manager.tilemap_img_updated.connect(images.append)

        manager.generate_tilemap(WFCUpdateMode.ONLY_WHEN_DONE)
        model.set_tile_types(single_tile_types)
        manager.on_worker_tilemap_updated(np.array([[5, -1], [14, 0]]))
        manager.on_main_app_about_to_quit()

        assert images[0].size == (2, 2)
        assert images[-1].getpixel((0, 0)) == (255, 255, 0)
        assert images[-1].getpixel((1, 0)) == constants.UNCOLLAPSED_COLOR

    def test_next_run_uses_loaded_tile_types(self, app, single_tile_types):
        model = BaseModel()
        model.set_tilemap_size(2, 2)
        manager = WFCManager(model)
        images = []
        manager.tilemap_img_updated.connect(images.append)

        model.set_tile_types(single_tile_types)
        manager.generate_tilemap(WFCUpdateMode.ONLY_WHEN_DONE)
        manager.on_worker_tilemap_updated(np.zeros((2, 2), dtype=int))
        manager.on_main_app_about_to_quit()

        assert images[-1].getcolors() == [(4, (255, 0, 0))]


class TestBaseModel:
    """Test the settings shared by the viewer widgets."""

    def test_defaults(self):
        model = BaseModel()

        assert (model.tilemap_width, model.tilemap_height) == (255, 255)
        assert model.seed_pattern == SeedPattern.LATTICE
        assert model.seed_stride == 16
        assert model.tile_types.count() == 15

    def test_set_tile_types_notifies(self, abc_tile_types):
        model = BaseModel()
        received = []
        model.tile_types_changed.connect(received.append)

        model.set_tile_types(abc_tile_types)

        assert model.tile_types is abc_tile_types
        assert received == [abc_tile_types]

    def test_randomize_seed(self):
        model = BaseModel()
        assert model.randomize_seed() == model.random_seed
