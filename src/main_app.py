"""Serves as the entry point and initializer for the tilemap generator viewer."""

import sys

from PyQt6 import QtWidgets as qtw

from logging_config import setup_logging
from model.base_model import BaseModel
from model.tilemap_renderer import TilemapRenderer
from model.wfc_manager import WFCManager
from view.general_settings_widget import GeneralSettingsWidget
from view.main_window import MainWindow
from view.output_widget import OutputWidget


class MainApp(qtw.QApplication):
    """The application initializer and integrator for the tilemap generator viewer.

    Inherits from PyQt's QApplication. It creates the model and view components and the signal/slot connections
    between them before the application starts.
    """

    # The top-level window of the application, which holds all widgets.
    _main_window: MainWindow

    def __init__(self, argv: list[str]) -> None:
        """Initializes the PyQt application and all application components.

        Args:
            argv: Command line arguments passed to the application (sys.argv).
        """
        super().__init__(argv)

        model = BaseModel()
        renderer = TilemapRenderer(model.tile_types)
        wfc_manager = WFCManager(model)

        general_settings_widget = GeneralSettingsWidget(model, renderer)
        output_widget = OutputWidget(model, wfc_manager, renderer)

        self.aboutToQuit.connect(wfc_manager.on_main_app_about_to_quit)

        self._main_window = MainWindow(general_settings_widget, output_widget)
        self._main_window.show()


def main() -> int:
    setup_logging()
    app = MainApp(sys.argv)
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
