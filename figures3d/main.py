# -*- coding: utf-8 -*-
"""Entry point: open the animation window, or tick a figure offscreen."""

import argparse
import logging
import sys
from typing import List, NoReturn, Optional, Sequence


def _handle_qt_import_error(exc: ImportError) -> NoReturn:
    """Exit with a helpful message when the Qt bindings cannot be imported."""

    details = str(exc)
    message_lines = [
        "Unable to start figures3d: importing PyQt5 failed.",
        "Check that PyQt5 is installed and that the required OpenGL libraries are available.",
    ]
    if "libGL.so.1" in details:
        message_lines.append(
            "Hint: the system library libGL.so.1 is missing. Install the appropriate Mesa/OpenGL packages."
        )
    message_lines.append(f"Original error: {details}")
    raise SystemExit("\n".join(message_lines)) from exc


try:
    from PyQt5 import QtCore, QtWidgets
except ImportError as exc:  # pragma: no cover - depends on the environment
    _handle_qt_import_error(exc)

from .control.config import DEFAULTS, SLIDER_RANGES, RenderConfig
from .figures import FIGURES, create_figure
from .render import render_image

log = logging.getLogger("figures3d")

LOG_FORMAT = "[Figures3D][%(levelname)s] %(message)s"


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format=LOG_FORMAT)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="figures3d", description="Rotating 3D figures with a fading motion trail.")
    parser.add_argument("--figure", default=DEFAULTS["figure"]["name"], help=f"one of: {', '.join(FIGURES)}")
    lo, hi = SLIDER_RANGES["trail"]
    parser.add_argument("--trail", type=int, default=None, help=f"trail length ({lo}-{hi})")
    parser.add_argument("--fps", action="store_true", help="show the FPS counter")
    parser.add_argument(
        "--frames",
        type=int,
        default=None,
        metavar="N",
        help="render N frames offscreen and exit instead of opening a window",
    )
    parser.add_argument("--size", default="800x600", help="offscreen viewport, WIDTHxHEIGHT")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def _parse_size(parser: argparse.ArgumentParser, text: str) -> tuple:
    try:
        width, height = (int(part) for part in text.lower().split("x", 1))
    except ValueError:
        parser.error(f"invalid --size {text!r}, expected WIDTHxHEIGHT")
    return width, height


def run_offscreen(config: RenderConfig, figure_name: str, frames: int, width: int, height: int) -> int:
    """Tick ``figure_name`` ``frames`` times, rendering each frame into an image."""

    figure = create_figure(figure_name)
    config.apply_to(figure)
    image = None
    for _ in range(max(0, frames)):
        figure.update()
        image = render_image(figure, width, height)
    stored = len(figure.trail)
    log.info(
        "%s: %d frame(s) at %dx%d, %d trail entr%s stored",
        figure_name,
        frames,
        width,
        height,
        stored,
        "y" if stored == 1 else "ies",
    )
    return 0 if image is not None or frames == 0 else 1


def main(argv: Optional[Sequence[str]] = None, headless: bool = False) -> int:
    """Run the application and return its exit code.

    ``headless`` builds the window without entering the event loop, for
    callers that must not block.
    """

    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    configure_logging(args.verbose)
    if args.figure not in FIGURES:
        parser.error(f"unknown figure {args.figure!r}; choose one of {', '.join(FIGURES)}")

    lo, hi = SLIDER_RANGES["trail"]
    config = RenderConfig()
    if args.trail is not None:
        config.trail_length = max(lo, min(hi, args.trail))
    config.show_fps = bool(args.fps)

    qt_args: List[str] = [sys.argv[0] if sys.argv else "figures3d"]
    if args.frames is not None:
        _app = QtWidgets.QApplication.instance() or QtWidgets.QApplication(qt_args + ["-platform", "offscreen"])
        width, height = _parse_size(parser, args.size)
        return run_offscreen(config, args.figure, args.frames, width, height)

    from .control.control_window import ControlWindow

    QtWidgets.QApplication.setAttribute(QtCore.Qt.AA_EnableHighDpiScaling, True)
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication(qt_args)
    window = ControlWindow(config, args.figure, autostart=not headless)
    if headless:
        window.view.stop()
        return 0
    window.show()
    return app.exec_()


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
