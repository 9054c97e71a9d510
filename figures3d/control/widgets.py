from typing import Callable, Optional

from PyQt5 import QtWidgets, QtCore, QtGui


def open_color_dialog(parent, initial: QtGui.QColor, title: str) -> QtGui.QColor:
    dlg = QtWidgets.QColorDialog(initial, parent)
    dlg.setWindowTitle(title)
    dlg.setOption(QtWidgets.QColorDialog.ShowAlphaChannel, False)
    if dlg.exec_() == QtWidgets.QDialog.Accepted:
        return dlg.selectedColor()
    return QtGui.QColor()


def mk_info(text: str) -> QtWidgets.QToolButton:
    b = QtWidgets.QToolButton(); b.setText("i"); b.setCursor(QtCore.Qt.PointingHandCursor)
    b.setToolTipDuration(0); b.setToolTip(text); b.setFixedSize(20,20)
    b.setStyleSheet("QToolButton{border:1px solid #7aa7c7;border-radius:10px;font-weight:bold;padding:0;color:#2b6ea8;background:#e6f2fb;}QToolButton:hover{background:#d8ecfa;}")
    return b


def row(layout: QtWidgets.QBoxLayout, widget: QtWidgets.QWidget, tip: str) -> QtWidgets.QWidget:
    """Add ``widget`` followed by its info button to a horizontal control strip."""
    h = QtWidgets.QHBoxLayout(); h.setContentsMargins(0,0,0,0); h.setSpacing(4)
    h.addWidget(widget, 1)
    h.addWidget(mk_info(tip), 0)
    w = QtWidgets.QWidget(); w.setLayout(h)
    layout.addWidget(w)
    return w


class LabeledSlider(QtWidgets.QWidget):
    """Integer slider with a caption rendering the mapped value.

    ``fmt`` turns the raw slider position into the caption text, e.g.
    ``lambda v: f"Speed: {v / 10:.1f}"``.
    """

    valueChanged = QtCore.pyqtSignal(int)

    def __init__(
        self,
        minimum: int,
        maximum: int,
        value: int,
        fmt: Callable[[int], str],
        tick_spacing: Optional[int] = None,
        parent: Optional[QtWidgets.QWidget] = None,
    ):
        super().__init__(parent)
        self._fmt = fmt

        self.label = QtWidgets.QLabel()
        self.label.setObjectName("SliderValueLabel")
        self.label.setMinimumWidth(90)

        self.slider = QtWidgets.QSlider(QtCore.Qt.Horizontal)
        self.slider.setRange(int(minimum), int(maximum))
        self.slider.setTracking(True)
        if tick_spacing:
            self.slider.setTickInterval(int(tick_spacing))
            self.slider.setTickPosition(QtWidgets.QSlider.TicksBelow)
        self.slider.setValue(int(value))

        layout = QtWidgets.QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(6)
        layout.addWidget(self.label)
        layout.addWidget(self.slider, 1)

        self._refresh_label(self.slider.value())
        self.slider.valueChanged.connect(self._on_slider_changed)

    def _on_slider_changed(self, raw: int):
        self._refresh_label(raw)
        self.valueChanged.emit(raw)

    def _refresh_label(self, raw: int):
        self.label.setText(self._fmt(raw))

    def setValue(self, value: int):
        """Move the slider without emitting :attr:`valueChanged`."""
        with QtCore.QSignalBlocker(self.slider):
            self.slider.setValue(int(value))
        self._refresh_label(self.slider.value())

    def value(self) -> int:
        return int(self.slider.value())

    def text(self) -> str:
        return self.label.text()
