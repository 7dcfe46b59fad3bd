"""The visible window into the complex plane and its navigation transforms."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DEFAULT_BOUNDS = (-2.0, 1.0, -1.0, 1.0)
DEFAULT_MAX_ITERATIONS = 10000

DEPTH_STEP = 100
MIN_ITERATIONS = 100
PAN_FRACTION = 0.1
ZOOM_IN_FACTOR = 0.9
ZOOM_OUT_FACTOR = 1.1


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass
class Viewport:
    """Rectangle of the complex plane being sampled plus the escape-time cutoff.

    Every transform assigns all four bounds in a single statement, so a render
    reading ``bounds()`` between transforms never sees a half-applied change.
    """

    x_min: float = DEFAULT_BOUNDS[0]
    x_max: float = DEFAULT_BOUNDS[1]
    y_min: float = DEFAULT_BOUNDS[2]
    y_max: float = DEFAULT_BOUNDS[3]
    max_iterations: int = DEFAULT_MAX_ITERATIONS

    def __post_init__(self) -> None:
        if not self.x_min < self.x_max:
            raise ValueError(f"x_min ({self.x_min}) must be less than x_max ({self.x_max}).")
        if not self.y_min < self.y_max:
            raise ValueError(f"y_min ({self.y_min}) must be less than y_max ({self.y_max}).")
        if self.max_iterations < MIN_ITERATIONS:
            raise ValueError(f"max_iterations must be at least {MIN_ITERATIONS}, got {self.max_iterations}.")
        self.x_min = float(self.x_min)
        self.x_max = float(self.x_max)
        self.y_min = float(self.y_min)
        self.y_max = float(self.y_max)
        self.max_iterations = int(self.max_iterations)

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    @property
    def center(self) -> tuple[float, float]:
        return (self.x_min + self.x_max) / 2.0, (self.y_min + self.y_max) / 2.0

    def bounds(self) -> tuple[float, float, float, float]:
        return self.x_min, self.x_max, self.y_min, self.y_max

    def increase_depth(self) -> None:
        self.max_iterations += DEPTH_STEP

    def decrease_depth(self) -> None:
        self.max_iterations = max(self.max_iterations - DEPTH_STEP, MIN_ITERATIONS)

    def pan(self, direction: Direction) -> None:
        """Shift the window by a tenth of its current extent along one axis."""

        if direction in (Direction.LEFT, Direction.RIGHT):
            delta = PAN_FRACTION * (self.x_max - self.x_min)
            if direction is Direction.LEFT:
                delta = -delta
            self.x_min, self.x_max = self.x_min + delta, self.x_max + delta
        else:
            delta = PAN_FRACTION * (self.y_max - self.y_min)
            if direction is Direction.UP:
                delta = -delta
            self.y_min, self.y_max = self.y_min + delta, self.y_max + delta

    def pan_up(self) -> None:
        self.pan(Direction.UP)

    def pan_down(self) -> None:
        self.pan(Direction.DOWN)

    def pan_left(self) -> None:
        self.pan(Direction.LEFT)

    def pan_right(self) -> None:
        self.pan(Direction.RIGHT)

    def zoom(self, factor: float) -> None:
        """Scale both ranges by ``factor`` about the unchanged centre."""

        x_center, y_center = self.center
        x_range = (self.x_max - self.x_min) * factor
        y_range = (self.y_max - self.y_min) * factor
        self.x_min, self.x_max, self.y_min, self.y_max = (
            x_center - x_range / 2.0,
            x_center + x_range / 2.0,
            y_center - y_range / 2.0,
            y_center + y_range / 2.0,
        )

    def zoom_in(self) -> None:
        self.zoom(ZOOM_IN_FACTOR)

    def zoom_out(self) -> None:
        self.zoom(ZOOM_OUT_FACTOR)
