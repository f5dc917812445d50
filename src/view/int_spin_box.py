"""Contains a specialized PyQt widget class for integer input."""

from PyQt6 import QtCore as qtc
from PyQt6 import QtWidgets as qtw


class IntSpinBox(qtw.QSpinBox):
    """A QSpinBox that signals only when the user commits a new value.

    'valueChanged' fires on every keystroke and arrow click. This spin box instead emits 'value_committed' when editing
    is finished, and only if the value differs from the one committed before.

    Signals:
        value_committed: Emitted with the new value when the user finishes editing and the value has changed.
    """

    value_committed = qtc.pyqtSignal(int)

    # The last committed value.
    _last_value: int

    def __init__(self, default_value: int, min_value: int, max_value: int, step_size: int) -> None:
        """Initializes the spin box.

        Args:
            default_value: The initial value.
            min_value: The lowest value allowed.
            max_value: The highest value allowed.
            step_size: The amount the arrow buttons add or subtract.
        """
        super().__init__()

        self._last_value = default_value

        self.setRange(min_value, max_value)
        self.setValue(default_value)
        self.setSingleStep(step_size)
        self.setCorrectionMode(qtw.QAbstractSpinBox.CorrectionMode.CorrectToNearestValue)
        self.editingFinished.connect(self.on_editing_finished)

    def set_committed_value(self, value: int) -> None:
        """Sets the value programmatically without emitting 'value_committed'."""
        self._last_value = value
        self.setValue(value)

    def on_editing_finished(self) -> None:
        if self._last_value != self.value():
            self._last_value = self.value()
            self.value_committed.emit(self.value())
