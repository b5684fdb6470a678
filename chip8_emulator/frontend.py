"""
CHIP-8 Emulator — Headless Frontend

Satisfies the frame driver's frontend interface without opening a window.
Keeps the most recent frame so callers (the CLI's --headless mode, tests)
can inspect or print it. Key events can be queued ahead of time with
press() / release(); they are delivered on the next poll().
"""

import logging

from .periph.display import render_text


logger = logging.getLogger(__name__)


class HeadlessFrontend:

    def __init__(self):
        self.last_frame = None
        self.renders = 0
        self.buzzer_on = False
        self.closed = False
        self._events = []
        self._quit = False

    def press(self, key: int):
        self._events.append((key, True))

    def release(self, key: int):
        self._events.append((key, False))

    def request_quit(self):
        self._quit = True

    def poll(self):
        events, self._events = self._events, []
        return self._quit, events

    def render(self, rows):
        self.last_frame = rows
        self.renders += 1

    def buzzer(self, on: bool):
        self.buzzer_on = on
        logger.debug("Buzzer %s", "on" if on else "off")

    def close(self):
        self.closed = True

    def text(self, on: str = '#', off: str = '.') -> str:
        """Last rendered frame as text ('' if nothing was rendered)."""
        if self.last_frame is None:
            return ''
        return render_text(self.last_frame, on, off)
