"""Interactive loop: render a frame, wait for one key, apply one command."""

from __future__ import annotations

import time
from typing import Optional, Protocol

from .commands import Command, KeyEvent, KeyEventKind, apply_command, command_for_key
from .renderer import RenderResult, render_frame
from .viewport import Viewport


class Terminal(Protocol):
    def size(self) -> tuple[int, int]: ...

    def draw(self, result: RenderResult) -> None: ...

    def read_event(self) -> Optional[KeyEvent]: ...


class App:
    """Own the viewport and the exit flag for one viewing session."""

    def __init__(self, viewport: Viewport, *, device: Optional[str] = None) -> None:
        self.viewport = viewport
        self.device = device
        self.exit = False
        self.frames_rendered = 0
        self.last_render_seconds = 0.0

    def run(self, terminal: Terminal) -> None:
        while not self.exit:
            self.draw(terminal)
            self.handle_event(terminal.read_event())

    def draw(self, terminal: Terminal) -> RenderResult:
        width, height = terminal.size()
        start = time.perf_counter()
        result = render_frame(self.viewport, width, height, device=self.device)
        self.last_render_seconds = time.perf_counter() - start
        self.frames_rendered += 1
        terminal.draw(result)
        return result

    def handle_event(self, event: Optional[KeyEvent]) -> Command:
        if event is None or event.kind is not KeyEventKind.PRESS:
            return Command.NONE
        command = command_for_key(event.key)
        if apply_command(self.viewport, command):
            self.exit = True
        return command
