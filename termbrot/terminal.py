"""curses front end: draws rendered frames and reads key presses."""

from __future__ import annotations

import curses
from typing import Optional

import numpy as np

from .commands import KeyEvent
from .renderer import HALF_BLOCK, RenderResult

CUSTOM_COLOR_BASE = 16
MAX_CUSTOM_LEVELS = 32
XTERM_BLUE_STEPS = (0, 95, 135, 175, 215, 255)

_SPECIAL_KEYS = {
    curses.KEY_UP: "up",
    curses.KEY_DOWN: "down",
    curses.KEY_LEFT: "left",
    curses.KEY_RIGHT: "right",
    curses.KEY_PPAGE: "page_up",
    curses.KEY_NPAGE: "page_down",
    curses.KEY_RESIZE: "resize",
}


def translate_key(key: int | str) -> Optional[str]:
    """Turn a ``get_wch`` result into a binding name or character."""

    if isinstance(key, str):
        if key == "\x1b":
            return "escape"
        return key
    if key == 27:
        return "escape"
    return _SPECIAL_KEYS.get(key)


def nearest_level_table(blues: tuple[int, ...]) -> np.ndarray:
    """256-entry lookup from a blue value to the index of the closest palette level."""

    values = np.arange(256, dtype=np.int64)[:, None]
    levels = np.asarray(blues, dtype=np.int64)[None, :]
    return np.argmin(np.abs(values - levels), axis=1).astype(np.int64)


def evenly_spaced_blues(levels: int) -> tuple[int, ...]:
    if levels <= 1:
        return (0,)
    return tuple(int(round(i * 255 / (levels - 1))) for i in range(levels))


class CursesTerminal:
    """Display sink and key source backed by a curses screen."""

    def __init__(self, stdscr) -> None:
        self.stdscr = stdscr
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        stdscr.keypad(True)
        curses.set_escdelay(25)
        self._lookup: Optional[np.ndarray] = None
        self._levels = 0
        self._init_colors()

    def _init_colors(self) -> None:
        if not curses.has_colors():
            return
        curses.start_color()

        colors = curses.COLORS
        pairs = curses.COLOR_PAIRS

        if curses.can_change_color():
            levels = min(MAX_CUSTOM_LEVELS, colors - CUSTOM_COLOR_BASE)
            while levels > 2 and levels * levels >= pairs:
                levels //= 2
            if levels >= 2:
                blues = evenly_spaced_blues(levels)
                slots = []
                for i, blue in enumerate(blues):
                    slot = CUSTOM_COLOR_BASE + i
                    curses.init_color(slot, 0, 0, int(round(blue * 1000 / 255)))
                    slots.append(slot)
                self._install_palette(blues, slots)
                return

        if colors >= 256 and len(XTERM_BLUE_STEPS) ** 2 < pairs:
            self._install_palette(XTERM_BLUE_STEPS, [CUSTOM_COLOR_BASE + i for i in range(len(XTERM_BLUE_STEPS))])
            return

        self._install_palette((0, 255), [curses.COLOR_BLACK, curses.COLOR_BLUE])

    def _install_palette(self, blues: tuple[int, ...], slots: list[int]) -> None:
        levels = len(blues)
        for top in range(levels):
            for bottom in range(levels):
                curses.init_pair(self._pair_number(top, bottom, levels), slots[top], slots[bottom])
        self._lookup = nearest_level_table(blues)
        self._levels = levels

    @staticmethod
    def _pair_number(top: int, bottom: int, levels: int) -> int:
        return 1 + top * levels + bottom

    def size(self) -> tuple[int, int]:
        rows, cols = self.stdscr.getmaxyx()
        return cols, rows

    def draw(self, result: RenderResult) -> None:
        self.stdscr.erase()
        if self._lookup is not None:
            top_levels = self._lookup[result.foreground[..., 2]]
            bottom_levels = self._lookup[result.background[..., 2]]
        else:
            top_levels = bottom_levels = None

        for y in range(result.height):
            for x in range(result.width):
                attr = 0
                if top_levels is not None:
                    pair = self._pair_number(int(top_levels[y, x]), int(bottom_levels[y, x]), self._levels)
                    attr = curses.color_pair(pair)
                try:
                    self.stdscr.addstr(y, x, HALF_BLOCK, attr)
                except curses.error:
                    # the bottom-right cell cannot be written without scrolling
                    pass
        self.stdscr.refresh()

    def read_event(self) -> Optional[KeyEvent]:
        key = self.stdscr.get_wch()
        return KeyEvent(translate_key(key))
