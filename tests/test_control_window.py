import pytest

from figures3d.control.config import RenderConfig
from figures3d.control.control_window import ControlWindow
from figures3d.control.widgets import LabeledSlider
from figures3d.figures import BridgeFigure, CubeFigure

pytestmark = pytest.mark.usefixtures("qapp")


@pytest.fixture
def window():
    win = ControlWindow(RenderConfig(), "Cube", autostart=False)
    yield win
    win.view.stop()
    win.close()
    win.deleteLater()


def test_labeled_slider_caption_and_blocking():
    seen = []
    slider = LabeledSlider(0, 100, 10, lambda v: f"Speed: {v / 10:.1f}")
    slider.valueChanged.connect(seen.append)
    assert slider.text() == "Speed: 1.0"
    slider.slider.setValue(25)
    assert seen == [25]
    assert slider.text() == "Speed: 2.5"
    slider.setValue(40)
    assert seen == [25]
    assert slider.value() == 40
    assert slider.text() == "Speed: 4.0"


def test_initial_state(window):
    assert isinstance(window.figure, CubeFigure)
    assert window.cb_figure.currentText() == "Cube"
    assert window.sl_speed.value() == 10
    assert window.sl_trail.value() == 1
    assert window.sl_gamma.value() == 90
    assert window.sl_zoom.value() == 100
    assert window.figure.trail_length == 1


def test_unknown_start_figure():
    with pytest.raises(KeyError):
        ControlWindow(RenderConfig(), "Hexagon", autostart=False)


def test_sliders_drive_config_and_figure(window):
    window.sl_speed.slider.setValue(25)
    window.sl_trail.slider.setValue(7)
    window.sl_gamma.slider.setValue(40)
    window.sl_rotX.slider.setValue(30)
    window.sl_rotZ.slider.setValue(0)
    figure = window.figure
    assert window.config.speed == 2.5
    assert figure.speed == 2.5
    assert figure.trail_length == 7
    assert figure.gamma == pytest.approx(0.4)
    rotator = figure.bodies[0].rotator
    assert rotator.speed_x == pytest.approx(0.3)
    assert rotator.speed_z == 0.0
    assert window.config.rotate_x == pytest.approx(0.3)


def test_figure_selector_swaps_and_reapplies(window):
    window.sl_trail.slider.setValue(4)
    window.cb_figure.setCurrentText("Strange Bridge")
    assert isinstance(window.figure, BridgeFigure)
    assert window.figure.trail_length == 4
    assert window.view.figure is window.figures["Strange Bridge"]


def test_selecting_unregistered_name_keeps_figure(window, caplog):
    before = window.figure
    window.on_figure_selected("Hexagon")
    assert window.figure is before
    assert "Hexagon" in caplog.text


def test_zoom_slider_drives_view(window):
    seen = []
    window.view.zoomChanged.connect(seen.append)
    window.sl_zoom.slider.setValue(250)
    assert window.figure.zoom == 2.5
    assert window.config.zoom == 2.5
    assert seen == []


def test_wheel_moves_zoom_slider(window):
    window.view.apply_wheel(-1)
    assert window.sl_zoom.value() == 110
    assert window.figure.zoom == pytest.approx(1.1)
    window.config.zoom = 50.0
    window.view.apply_wheel(0)
    assert window.sl_zoom.value() == 4500


def test_fps_checkbox(window):
    window.chk_fps.setChecked(True)
    assert window.config.show_fps


def test_colour_application(window):
    from PyQt5 import QtGui

    window.apply_figure_color(QtGui.QColor("#ff0000"))
    window.apply_background_color(QtGui.QColor())
    assert window.figure.figure_color == QtGui.QColor("#ff0000")
    assert window.config.background_color == QtGui.QColor("#000000")
