"""Logical viewer commands and the key bindings that produce them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from .viewport import Direction, Viewport

Key = Optional[str]


class Command(Enum):
    QUIT = auto()
    INCREASE_DEPTH = auto()
    DECREASE_DEPTH = auto()
    PAN_UP = auto()
    PAN_DOWN = auto()
    PAN_LEFT = auto()
    PAN_RIGHT = auto()
    ZOOM_IN = auto()
    ZOOM_OUT = auto()
    NONE = auto()


class KeyEventKind(Enum):
    PRESS = auto()
    REPEAT = auto()
    RELEASE = auto()


@dataclass(frozen=True)
class KeyEvent:
    """A single key event; special keys are named, e.g. ``"up"`` or ``"page_down"``."""

    key: Key
    kind: KeyEventKind = KeyEventKind.PRESS


KEY_BINDINGS: dict[str, Command] = {
    "q": Command.QUIT,
    "escape": Command.QUIT,
    "+": Command.INCREASE_DEPTH,
    "-": Command.DECREASE_DEPTH,
    "k": Command.PAN_UP,
    "up": Command.PAN_UP,
    "j": Command.PAN_DOWN,
    "down": Command.PAN_DOWN,
    "h": Command.PAN_LEFT,
    "left": Command.PAN_LEFT,
    "l": Command.PAN_RIGHT,
    "right": Command.PAN_RIGHT,
    "z": Command.ZOOM_IN,
    "page_up": Command.ZOOM_IN,
    "x": Command.ZOOM_OUT,
    "page_down": Command.ZOOM_OUT,
}

_PAN_DIRECTIONS = {
    Command.PAN_UP: Direction.UP,
    Command.PAN_DOWN: Direction.DOWN,
    Command.PAN_LEFT: Direction.LEFT,
    Command.PAN_RIGHT: Direction.RIGHT,
}


def command_for_key(key: Key) -> Command:
    if key is None:
        return Command.NONE
    return KEY_BINDINGS.get(key, Command.NONE)


def apply_command(viewport: Viewport, command: Command) -> bool:
    """Apply ``command`` to ``viewport``; return ``True`` when it asks to quit."""

    if command is Command.QUIT:
        return True
    if command is Command.INCREASE_DEPTH:
        viewport.increase_depth()
    elif command is Command.DECREASE_DEPTH:
        viewport.decrease_depth()
    elif command in _PAN_DIRECTIONS:
        viewport.pan(_PAN_DIRECTIONS[command])
    elif command is Command.ZOOM_IN:
        viewport.zoom_in()
    elif command is Command.ZOOM_OUT:
        viewport.zoom_out()
    return False
