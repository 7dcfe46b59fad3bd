"""Public API for the terminal Mandelbrot viewer."""

from .app import App, Terminal
from .commands import Command, KeyEvent, KeyEventKind, apply_command, command_for_key
from .renderer import (
    Cell,
    RenderResult,
    SamplingMetadata,
    brightness_to_rgb,
    build_histogram,
    compute_metadata,
    escape_counts,
    histogram_brightness,
    render_frame,
    sample_points,
)
from .viewport import Direction, Viewport

__all__ = [
    "App",
    "Cell",
    "Command",
    "Direction",
    "KeyEvent",
    "KeyEventKind",
    "RenderResult",
    "SamplingMetadata",
    "Terminal",
    "Viewport",
    "apply_command",
    "brightness_to_rgb",
    "build_histogram",
    "command_for_key",
    "compute_metadata",
    "escape_counts",
    "histogram_brightness",
    "render_frame",
    "sample_points",
]
