import pytest
from PyQt5 import QtCore, QtGui

from figures3d.figures import (
    FIGURES,
    BridgeFigure,
    CompositeFigure,
    CubeFigure,
    DonutFigure,
    PyramidFigure,
    coerce_color,
    create_figure,
    figure_names,
)
from figures3d.geometry import CloudParams
from figures3d.projection import CloudProjector, DepthBuffer, rotate_xyz, rotate_zyx
from figures3d.rotation import RotationState
from figures3d.render import render_image

pytestmark = pytest.mark.usefixtures("qapp")

WIREFRAMES = [CubeFigure, PyramidFigure, BridgeFigure, CompositeFigure]


def small_donut():
    return DonutFigure(params=CloudParams(theta_step=0.3, phi_step=0.2))


def blank(width, height, color):
    image = QtGui.QImage(width, height, QtGui.QImage.Format_ARGB32)
    image.fill(QtGui.QColor(color))
    return image


def pixels_matching(image, color):
    target = QtGui.QColor(color).rgba()
    return sum(
        1
        for y in range(image.height())
        for x in range(image.width())
        if image.pixel(x, y) == target
    )


def test_registry_order():
    assert figure_names() == [
        "Donut",
        "Cube",
        "Pyramid",
        "Strange Bridge",
        "Composition of Donut and Cube",
    ]
    assert isinstance(create_figure("Cube"), CubeFigure)


def test_unknown_figure_name():
    with pytest.raises(KeyError, match="Hexagon"):
        create_figure("Hexagon")


def test_defaults_per_figure():
    assert CubeFigure().trail_length == 8
    assert PyramidFigure().trail_length == 8
    assert BridgeFigure().trail_length == 10
    assert CompositeFigure().trail_length == 10
    assert DonutFigure().trail_length == 3
    assert BridgeFigure().figure_color == QtGui.QColor(QtCore.Qt.red)
    assert CubeFigure().figure_color == QtGui.QColor(QtCore.Qt.white)
    assert DonutFigure().background_color == QtGui.QColor(QtCore.Qt.black)


def test_cube_trail_records_every_pose():
    cube = CubeFigure()
    for _ in range(8):
        cube.update()
    assert len(cube.trail) == 8
    for i, pose in enumerate(cube.trail):
        assert pose[0].ax == pytest.approx(0.1 * (i + 1))


@pytest.mark.parametrize("cls", WIREFRAMES)
@pytest.mark.parametrize("ticks", [0, 1, 3, 6])
def test_wireframe_trail_size_after_updates(cls, ticks):
    figure = cls()
    figure.set_trail_length(3)
    for _ in range(ticks):
        figure.update()
    assert len(figure.trail) == min(ticks, 3)


def test_lowering_trail_length_trims_at_once():
    cube = CubeFigure()
    for _ in range(8):
        cube.update()
    cube.set_trail_length(2)
    assert len(cube.trail) == 2
    assert cube.trail[-1][0].ax == pytest.approx(0.8)
    cube.update()
    assert len(cube.trail) == 2
    assert cube.trail[-1][0].ax == pytest.approx(0.9)


@pytest.mark.parametrize("cls", WIREFRAMES)
def test_pause_freezes_angles(cls):
    figure = cls()
    figure.update()
    figure.toggle_pause()
    assert figure.paused
    frozen = figure.angles
    figure.update()
    figure.update()
    assert figure.angles == frozen
    assert figure.trail[-1] == figure.trail[-2] == frozen
    figure.toggle_pause()
    figure.update()
    assert figure.angles != frozen


def test_speed_multiplies_axis_speeds():
    cube = CubeFigure()
    cube.set_speed(2.0)
    cube.set_rotate_y(0.25)
    cube.update()
    state = cube.angles[0]
    assert state.ax == pytest.approx(0.2)
    assert state.ay == pytest.approx(0.5)


def test_composite_axis_setters_drive_both_bodies():
    figure = CompositeFigure()
    assert figure.torus.rotator.speed_x == 0.05
    assert figure.cube.rotator.speed_x == 0.01
    figure.set_rotate_x(0.2)
    figure.set_rotate_y(0.3)
    figure.set_rotate_z(0.4)
    for body in (figure.torus, figure.cube):
        assert (body.rotator.speed_x, body.rotator.speed_y, body.rotator.speed_z) == (0.2, 0.3, 0.4)
    assert figure.torus.offset_x == -3.0
    assert figure.cube.offset_x == 3.0


def test_composite_pose_has_one_state_per_body():
    figure = CompositeFigure()
    figure.update()
    torus, cube = figure.trail[0]
    assert torus.az == pytest.approx(0.02)
    assert cube.az == pytest.approx(0.06)


@pytest.mark.parametrize("cls", WIREFRAMES)
def test_trail_zero_renders_background_only(cls):
    figure = cls()
    figure.set_trail_length(0)
    for _ in range(3):
        figure.update()
    assert len(figure.trail) == 0
    image = render_image(figure, 80, 60)
    assert image == blank(80, 60, QtCore.Qt.black)


def test_donut_trail_zero_renders_background_only():
    donut = small_donut()
    donut.set_trail_length(0)
    for _ in range(3):
        donut.update()
        image = render_image(donut, 80, 60)
    assert image == blank(80, 60, QtCore.Qt.black)
    assert len(donut.trail) == 0


@pytest.mark.parametrize("trail", [1, 2, 3])
def test_donut_stores_one_more_frame_than_trail(trail):
    donut = small_donut()
    donut.set_trail_length(trail)
    for n in range(1, 6):
        donut.update()
        render_image(donut, 120, 120)
        assert len(donut.trail) == min(n, trail + 1)


def test_donut_update_does_not_store_frames():
    donut = small_donut()
    for _ in range(4):
        donut.update()
    assert len(donut.trail) == 0
    assert donut.angles[0].ax == pytest.approx(0.4)


def test_donut_draws_points():
    donut = small_donut()
    image = render_image(donut, 120, 120)
    assert pixels_matching(image, QtCore.Qt.white) > 0
    frame = donut.trail[-1]
    assert len(frame) > 0
    assert frame.pose == donut.angles[0]


def test_cube_draws_figure_color():
    cube = CubeFigure()
    cube.update()
    image = render_image(cube, 200, 200)
    assert pixels_matching(image, QtCore.Qt.white) > 0


def test_colour_change_applies_to_next_render():
    cube = CubeFigure()
    cube.set_trail_length(1)
    cube.update()
    cube.set_figure_color("#00ff00")
    cube.set_background_color((0, 0, 255))
    image = render_image(cube, 200, 200)
    assert pixels_matching(image, "#00ff00") > 0
    assert pixels_matching(image, QtCore.Qt.white) == 0
    assert QtGui.QColor(image.pixel(0, 0)) == QtGui.QColor(0, 0, 255)


def test_invalid_colour_is_ignored(caplog):
    cube = CubeFigure()
    cube.set_figure_color("definitely-not-a-colour")
    cube.set_background_color(None)
    assert cube.figure_color == QtGui.QColor(QtCore.Qt.white)
    assert cube.background_color == QtGui.QColor(QtCore.Qt.black)
    assert "invalid colour" in caplog.text


def test_coerce_color_forces_opaque():
    color = coerce_color(QtGui.QColor(10, 20, 30, 40), QtGui.QColor(QtCore.Qt.black))
    assert color.alpha() == 255
    assert (color.red(), color.green(), color.blue()) == (10, 20, 30)


@pytest.mark.parametrize("name", list(FIGURES))
def test_zero_viewport_renders_without_error(name):
    figure = create_figure(name)
    figure.update()
    image = render_image(figure, 0, 0)
    assert image.width() == 1
    assert len(figure.trail) <= figure.trail_length + 1


@pytest.mark.parametrize("name", list(FIGURES))
def test_render_without_exception(name):
    figure = create_figure(name)
    if isinstance(figure, DonutFigure):
        figure = small_donut()
    for _ in range(3):
        figure.update()
        render_image(figure, 160, 120)


def test_setters_sanitise_values():
    cube = CubeFigure()
    cube.set_zoom(2.0)
    assert cube.zoom == 2.0
    cube.set_zoom(100)
    assert cube.zoom == 45.0
    cube.set_speed(1.5)
    assert cube.speed == 1.5
    cube.set_speed("fast")
    assert cube.speed == 1.5
    cube.set_gamma(0.5)
    assert cube.gamma == 0.5
    cube.set_trail_length(-4)
    assert cube.trail_length == 0
    cube.set_trail_length("long")
    assert cube.trail_length == 0


def test_clear_trail():
    for figure in (CubeFigure(), small_donut()):
        figure.update()
        render_image(figure, 60, 60)
        figure.update()
        assert len(figure.trail) > 0
        figure.clear_trail()
        assert len(figure.trail) == 0


@pytest.mark.parametrize("cls", WIREFRAMES)
def test_trail_zero_set_between_ticks_renders_background_only(cls):
    figure = cls()
    for _ in range(5):
        figure.update()
    figure.set_trail_length(0)
    assert len(figure.trail) == 0
    assert render_image(figure, 80, 60) == blank(80, 60, QtCore.Qt.black)


def test_donut_trail_zero_set_between_renders_drops_frames():
    donut = small_donut()
    for _ in range(3):
        donut.update()
        render_image(donut, 80, 60)
    donut.set_trail_length(0)
    assert len(donut.trail) == 0
    assert render_image(donut, 80, 60) == blank(80, 60, QtCore.Qt.black)


def test_donut_lowering_trail_keeps_one_extra_frame():
    donut = small_donut()
    for _ in range(5):
        donut.update()
        render_image(donut, 80, 60)
    assert len(donut.trail) == 4
    donut.set_trail_length(1)
    assert len(donut.trail) == 2


@pytest.mark.parametrize(
    "cls,rotate,other",
    [
        (CubeFigure, rotate_xyz, rotate_zyx),
        (PyramidFigure, rotate_xyz, rotate_zyx),
        (CompositeFigure, rotate_xyz, rotate_zyx),
        (BridgeFigure, rotate_zyx, rotate_xyz),
    ],
)
def test_figure_rotation_order(cls, rotate, other):
    figure = cls()
    state = RotationState(0.7, 1.1, 0.4)
    projector = figure.projector
    differs = False
    for body in figure.bodies:
        for vertex in body.shape.vertices:
            got = projector.project(vertex, state, 800, 600, 1.0, body.offset_x)
            assert got == projector.project_rotated(rotate(vertex, state), 800, 600, 1.0, body.offset_x)
            if got != projector.project_rotated(other(vertex, state), 800, 600, 1.0, body.offset_x):
                differs = True
    assert differs


def test_composite_bodies_sit_side_by_side():
    figure = CompositeFigure()
    figure.set_trail_length(1)
    figure.update()
    image = render_image(figure, 300, 300)
    white = QtGui.QColor(QtCore.Qt.white).rgba()

    def hits(x_from, x_to):
        return sum(
            1
            for y in range(image.height())
            for x in range(x_from, x_to)
            if image.pixel(x, y) == white
        )

    assert hits(0, 100) > 0
    assert hits(200, 300) > 0


def test_donut_samples_with_z_then_y_then_x():
    # one sample: theta = phi = 0, i.e. the outer rim point (300, 0, 0)
    params = CloudParams(theta_step=7.0, phi_step=7.0)
    projector = CloudProjector()
    state = RotationState(0.7, 1.1, 0.4)
    points = projector.sample(params, state, 800, 800, 1.0, DepthBuffer())

    def expected(rotate):
        x, y, z = rotate((300.0, 0.0, 0.0), state)
        ooz = 1.0 / (z + 1500.0)
        return (int(400 + 500.0 * x * ooz), int(400 - 500.0 * y * ooz))

    assert points == (expected(rotate_zyx),)
    assert expected(rotate_xyz) not in points
