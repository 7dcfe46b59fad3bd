"""Rendering primitives for Mandelbrot frames drawn as stacked half-block cells."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

import numpy as np
import tensorflow as tf

from .viewport import Viewport

ESCAPE_RADIUS_SQUARED = 4.0
HALF_BLOCK = "▀"


@dataclass(frozen=True)
class SamplingMetadata:
    """Metadata describing the sampling grid for a rendered frame."""

    x_min: float
    y_min: float
    x_step: float
    y_step: float
    columns: int
    rows: int


@dataclass(frozen=True)
class Cell:
    """One display cell: the top sample as foreground, the bottom one as background."""

    fg: tuple[int, int, int]
    bg: tuple[int, int, int]
    symbol: str = HALF_BLOCK


@dataclass(frozen=True)
class RenderResult:
    """Container for the numerical and visual results of a frame."""

    iterations: np.ndarray
    brightness: np.ndarray
    foreground: np.ndarray
    background: np.ndarray
    metadata: SamplingMetadata

    @property
    def width(self) -> int:
        return int(self.foreground.shape[1])

    @property
    def height(self) -> int:
        return int(self.foreground.shape[0])

    def cells(self) -> Iterator[tuple[int, int, Cell]]:
        for y in range(self.height):
            for x in range(self.width):
                fg = self.foreground[y, x]
                bg = self.background[y, x]
                yield x, y, Cell(
                    fg=(int(fg[0]), int(fg[1]), int(fg[2])),
                    bg=(int(bg[0]), int(bg[1]), int(bg[2])),
                )


@tf.function
def _escape_step(zs: tf.Tensor, cs: tf.Tensor, ns: tf.Tensor, active: tf.Tensor) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor]:
    """Advance ``z <- z*z + c`` for every sample that has not escaped yet."""

    zs_new = zs * zs + cs
    zs = tf.where(active, zs_new, zs)
    ns = ns + tf.cast(active, tf.int32)
    re = tf.math.real(zs)
    im = tf.math.imag(zs)
    norm_sqr = re * re + im * im
    bound = tf.cast(ESCAPE_RADIUS_SQUARED, norm_sqr.dtype)
    new_active = tf.logical_and(active, norm_sqr <= bound)
    return zs, ns, new_active


@tf.function(reduce_retracing=True)
def _escape_run(cs: tf.Tensor, max_iterations: tf.Tensor) -> tf.Tensor:
    """Iterate every sample until it escapes or reaches ``max_iterations``."""

    max_iterations = tf.cast(max_iterations, tf.int32)
    i = tf.constant(0, dtype=tf.int32)
    zs = tf.zeros_like(cs)
    ns = tf.zeros(tf.shape(cs), tf.int32)
    active = tf.ones_like(ns, tf.bool)

    def cond(i: tf.Tensor, zs: tf.Tensor, ns: tf.Tensor, active: tf.Tensor) -> tf.Tensor:
        return tf.logical_and(tf.less(i, max_iterations), tf.reduce_any(active))

    def body(i: tf.Tensor, zs: tf.Tensor, ns: tf.Tensor, active: tf.Tensor) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
        zs, ns, active = _escape_step(zs, cs, ns, active)
        return i + 1, zs, ns, active

    _, _, ns, _ = tf.while_loop(cond, body, (i, zs, ns, active))
    return ns


def compute_metadata(viewport: Viewport, width: int, height: int) -> SamplingMetadata:
    """Describe the ``width x 2*height`` sample grid covering ``viewport``."""

    x_min, x_max, y_min, y_max = viewport.bounds()
    columns = max(int(width), 0)
    rows = max(int(height), 0) * 2

    x_step = np.float64(x_max - x_min) / np.float64(columns) if columns else np.float64(0.0)
    y_step = np.float64(y_max - y_min) / np.float64(height) / 2.0 if rows else np.float64(0.0)

    return SamplingMetadata(
        x_min=float(x_min),
        y_min=float(y_min),
        x_step=float(x_step),
        y_step=float(y_step),
        columns=columns,
        rows=rows,
    )


def sample_points(metadata: SamplingMetadata) -> np.ndarray:
    """Return the complex sample points shaped ``(rows, columns)``."""

    x = np.float64(metadata.x_min) + np.arange(metadata.columns, dtype=np.float64) * np.float64(metadata.x_step)
    y = np.float64(metadata.y_min) + np.arange(metadata.rows, dtype=np.float64) * np.float64(metadata.y_step)
    X, Y = np.meshgrid(x, y)
    return X + 1j * Y


def escape_counts(points: np.ndarray, max_iterations: int, *, device: Optional[str] = None) -> np.ndarray:
    """Escape-time iteration counts for ``points``; non-escaping samples hold ``max_iterations``."""

    points = np.asarray(points, dtype=np.complex128)
    if points.size == 0:
        return np.zeros(points.shape, dtype=np.int32)

    with tf.device(device if device is not None else "/CPU:0"):
        cs = tf.convert_to_tensor(points, dtype=tf.complex128)
        ns = _escape_run(cs, tf.constant(max_iterations, dtype=tf.int32))
    return ns.numpy()


def build_histogram(iterations: np.ndarray, max_iterations: int) -> np.ndarray:
    """Count escaped samples per iteration count; the ``max_iterations`` bucket stays empty."""

    iterations = np.asarray(iterations)
    escaped = iterations[iterations < max_iterations]
    return np.bincount(escaped.ravel().astype(np.int64), minlength=max_iterations + 1).astype(np.int64)


def histogram_brightness(iterations: np.ndarray, histogram: np.ndarray, max_iterations: int) -> np.ndarray:
    """Cumulative share of escaped samples that escaped strictly before each sample.

    Samples that never escape, and every sample of a frame in which nothing
    escaped, get brightness 0.
    """

    iterations = np.asarray(iterations)
    brightness = np.zeros(iterations.shape, dtype=np.float64)
    total = int(histogram.sum())
    if total == 0:
        return brightness

    # before[n] == sum(histogram[:n])
    before = np.concatenate(([0], np.cumsum(histogram, dtype=np.int64)))
    escaped = iterations < max_iterations
    brightness[escaped] = before[iterations[escaped]] / np.float64(total)
    return brightness


def brightness_to_rgb(brightness: np.ndarray) -> np.ndarray:
    """Map brightness in ``[0, 1)`` onto the blue channel."""

    brightness = np.asarray(brightness, dtype=np.float64)
    rgb = np.zeros(brightness.shape + (3,), dtype=np.uint8)
    rgb[..., 2] = np.floor(np.clip(brightness, 0.0, 1.0) * 255.0).astype(np.uint8)
    return rgb


def render_frame(viewport: Viewport, width: int, height: int, *, device: Optional[str] = None) -> RenderResult:
    """Render ``width x height`` display cells of the current viewport."""

    max_iterations = viewport.max_iterations
    metadata = compute_metadata(viewport, width, height)

    if metadata.columns == 0 or metadata.rows == 0:
        iterations = np.zeros((metadata.rows, metadata.columns), dtype=np.int32)
    else:
        iterations = escape_counts(sample_points(metadata), max_iterations, device=device)

    histogram = build_histogram(iterations, max_iterations)
    brightness = histogram_brightness(iterations, histogram, max_iterations)
    rgb = brightness_to_rgb(brightness)

    return RenderResult(
        iterations=iterations,
        brightness=brightness,
        foreground=rgb[0::2],
        background=rgb[1::2],
        metadata=metadata,
    )
