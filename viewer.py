import os
import sys
import warnings

_VERBOSE_FLAGS = {"--verbose", "-v"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])
_env_log_level = os.environ.get("TF_CPP_MIN_LOG_LEVEL")
_suppress_messages = (not _cli_verbose) and _env_log_level != "0"

if _suppress_messages and _env_log_level is None:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

if _suppress_messages:
    warnings.filterwarnings(
        "ignore",
        message=r"Protobuf gencode version .* is exactly one major version older than the runtime version .*",
        category=UserWarning,
        module="google.protobuf",
    )

VERBOSE = _cli_verbose


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


import curses
import locale
from argparse import ArgumentParser

import tensorflow as tf

if _suppress_messages:
    tf.get_logger().setLevel("ERROR")
    for handler in tf.get_logger().handlers:
        handler.setLevel("ERROR")

from termbrot import App, Viewport
from termbrot.terminal import CursesTerminal
from termbrot.viewport import DEFAULT_BOUNDS, DEFAULT_MAX_ITERATIONS


def select_device():
    # Place the escape-time kernel on the first visible GPU when there is one.
    gpus = tf.config.list_physical_devices('GPU')
    if not gpus:
        log("No GPU found, using CPU")
        return '/CPU:0'
    try:
        for gpu in gpus:
            tf.config.experimental.set_memory_growth(gpu, True)
    except RuntimeError as e:
        log(e)
        return '/CPU:0'
    log("GPU found, using %s" % gpus[0].name)
    return '/GPU:0'


def build_parser():
    parser = ArgumentParser(
        description='Explore the Mandelbrot set in the terminal. '
                    'Keys: arrows/hjkl pan, z/PageUp zoom in, x/PageDown zoom out, '
                    '+/- change iteration depth, q/Esc quit.'
    )

    parser.add_argument('--x-min', type=float,
                        dest='x_min', help='left edge of the initial window in the complex plane',
                        metavar='X_MIN', default=DEFAULT_BOUNDS[0])

    parser.add_argument('--x-max', type=float,
                        dest='x_max', help='right edge of the initial window in the complex plane',
                        metavar='X_MAX', default=DEFAULT_BOUNDS[1])

    parser.add_argument('--y-min', type=float,
                        dest='y_min', help='top edge of the initial window in the complex plane',
                        metavar='Y_MIN', default=DEFAULT_BOUNDS[2])

    parser.add_argument('--y-max', type=float,
                        dest='y_max', help='bottom edge of the initial window in the complex plane',
                        metavar='Y_MAX', default=DEFAULT_BOUNDS[3])

    parser.add_argument('--max-iterations', type=int,
                        dest='max_iterations', help='initial escape-time iteration cap (at least 100)',
                        metavar='MAX_ITERATIONS', default=DEFAULT_MAX_ITERATIONS)

    parser.add_argument('--device', type=str, default=None,
                        help='TensorFlow device for the iteration kernel (e.g. "/CPU:0"). Defaults to the first GPU if present.')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow and hardware diagnostics.')

    return parser


def describe(viewport):
    return "x=[%.6g, %.6g] y=[%.6g, %.6g] max_iterations=%d" % (
        viewport.x_min, viewport.x_max, viewport.y_min, viewport.y_max, viewport.max_iterations
    )


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    try:
        viewport = Viewport(
            x_min=opt.x_min,
            x_max=opt.x_max,
            y_min=opt.y_min,
            y_max=opt.y_max,
            max_iterations=opt.max_iterations,
        )
    except ValueError as exc:
        parser.error(str(exc))

    log("TensorFlow version: %s" % tf.__version__)
    device = opt.device or select_device()
    log("Initial view: %s" % describe(viewport))

    app = App(viewport, device=device)

    locale.setlocale(locale.LC_ALL, '')
    curses.wrapper(lambda stdscr: app.run(CursesTerminal(stdscr)))

    log("Rendered %d frames, last frame took %.3fs" % (app.frames_rendered, app.last_render_seconds))
    log("Final view: %s" % describe(viewport))
    return 0


if __name__ == '__main__':
    sys.exit(main())
