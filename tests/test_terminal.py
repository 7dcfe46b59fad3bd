import curses

import numpy as np

from termbrot import RenderResult, SamplingMetadata
from termbrot.terminal import (
    XTERM_BLUE_STEPS,
    CursesTerminal,
    evenly_spaced_blues,
    nearest_level_table,
    translate_key,
)


def test_translate_special_keys():
    assert translate_key(curses.KEY_UP) == "up"
    assert translate_key(curses.KEY_DOWN) == "down"
    assert translate_key(curses.KEY_LEFT) == "left"
    assert translate_key(curses.KEY_RIGHT) == "right"
    assert translate_key(curses.KEY_PPAGE) == "page_up"
    assert translate_key(curses.KEY_NPAGE) == "page_down"
    assert translate_key(curses.KEY_RESIZE) == "resize"
    assert translate_key("\x1b") == "escape"
    assert translate_key(27) == "escape"


def test_translate_characters_pass_through():
    assert translate_key("q") == "q"
    assert translate_key("+") == "+"
    assert translate_key(curses.KEY_F1) is None


def test_evenly_spaced_blues_span_full_range():
    assert evenly_spaced_blues(2) == (0, 255)
    blues = evenly_spaced_blues(32)
    assert len(blues) == 32
    assert blues[0] == 0
    assert blues[-1] == 255
    assert list(blues) == sorted(blues)


def test_nearest_level_table_is_monotonic():
    table = nearest_level_table(XTERM_BLUE_STEPS)
    assert table.shape == (256,)
    assert table[0] == 0
    assert table[255] == len(XTERM_BLUE_STEPS) - 1
    assert table[100] == 1
    assert np.all(np.diff(table) >= 0)


class RecordingScreen:
    def __init__(self, fail_at=None):
        self.calls = []
        self.fail_at = fail_at
        self.refreshed = False

    def erase(self):
        self.calls.clear()

    def addstr(self, y, x, text, attr):
        if (y, x) == self.fail_at:
            raise curses.error("addwstr() returned ERR")
        self.calls.append((y, x, text, attr))

    def refresh(self):
        self.refreshed = True


def _result(top_blues, bottom_blues):
    top = np.zeros((1, len(top_blues), 3), dtype=np.uint8)
    bottom = np.zeros((1, len(bottom_blues), 3), dtype=np.uint8)
    top[0, :, 2] = top_blues
    bottom[0, :, 2] = bottom_blues
    metadata = SamplingMetadata(x_min=0.0, y_min=0.0, x_step=1.0, y_step=1.0, columns=len(top_blues), rows=2)
    return RenderResult(
        iterations=np.zeros((2, len(top_blues)), dtype=np.int32),
        brightness=np.zeros((2, len(top_blues))),
        foreground=top,
        background=bottom,
        metadata=metadata,
    )


def _terminal(screen, blues=None):
    terminal = CursesTerminal.__new__(CursesTerminal)
    terminal.stdscr = screen
    if blues is None:
        terminal._lookup = None
        terminal._levels = 0
    else:
        terminal._lookup = nearest_level_table(blues)
        terminal._levels = len(blues)
    return terminal


def test_draw_picks_pair_for_stacked_levels(monkeypatch):
    monkeypatch.setattr(curses, "color_pair", lambda pair: pair * 256)
    screen = RecordingScreen()
    terminal = _terminal(screen, (0, 255))

    terminal.draw(_result([0, 255, 200], [255, 200, 10]))

    # pair number is 1 + top_level * levels + bottom_level
    assert screen.calls == [
        (0, 0, "▀", 2 * 256),
        (0, 1, "▀", 4 * 256),
        (0, 2, "▀", 3 * 256),
    ]
    assert screen.refreshed


def test_draw_without_colors_writes_plain_glyphs():
    screen = RecordingScreen()
    terminal = _terminal(screen)

    terminal.draw(_result([0, 255], [255, 0]))

    assert screen.calls == [(0, 0, "▀", 0), (0, 1, "▀", 0)]


def test_draw_tolerates_unwritable_corner():
    screen = RecordingScreen(fail_at=(0, 1))
    terminal = _terminal(screen)

    terminal.draw(_result([0, 0], [0, 0]))

    assert screen.calls == [(0, 0, "▀", 0)]
    assert screen.refreshed
