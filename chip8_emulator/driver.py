"""
CHIP-8 Emulator — Frame Driver

Paces the emulator against the wall clock. One frame is 1/60 s:

  1. poll the frontend for quit + key events, apply them with set_key()
  2. run config.steps_per_frame instructions
  3. tick the delay/sound timers once
  4. repaint if the framebuffer changed, report buzzer on/off changes

Instruction rate (clock_hz) and timer rate (timer_hz) are configured
independently; the hardware timers ran at 60 Hz whatever the CPU speed.

A frontend is any object with:
  poll()            -> (quit: bool, events: list of (key, pressed))
  render(rows)      draw a framebuffer (tuple of 32 rows of 64 pixels)
  buzzer(on: bool)  sound timer crossed zero
  close()
"""

import logging
import time

from .config import RunConfig
from .errors import Chip8Error


logger = logging.getLogger(__name__)


class FrameDriver:
    """Runs an emulator frame by frame against a frontend."""

    def __init__(self, emulator, frontend, config: RunConfig = None,
                 clock=time.perf_counter, sleep=time.sleep):
        self.emu = emulator
        self.frontend = frontend
        self.config = config or RunConfig()
        self._clock = clock
        self._sleep = sleep
        self._buzzing = False
        self.frames = 0
        self.skipped_errors = 0

    def run_frame(self) -> bool:
        """Run one frame. Returns False when the frontend asked to quit."""
        quit_requested, events = self.frontend.poll()
        if quit_requested:
            return False
        for key, pressed in events:
            self.emu.set_key(key, pressed)

        for _ in range(self.config.steps_per_frame):
            try:
                self.emu.step()
            except Chip8Error as e:
                if self.config.on_error == "halt":
                    raise
                self.skipped_errors += 1
                logger.warning("Skipping faulting instruction: %s", e)

        self.emu.tick_timers()

        if self.emu.take_redraw_flag():
            self.frontend.render(self.emu.framebuffer)

        buzzing = self.emu.sound_timer > 0
        if buzzing != self._buzzing:
            self._buzzing = buzzing
            self.frontend.buzzer(buzzing)

        self.frames += 1
        return True

    def run(self, max_frames: int = None) -> int:
        """Run frames until quit or max_frames. Returns frames executed."""
        interval = self.config.frame_interval
        deadline = self._clock()
        try:
            while max_frames is None or self.frames < max_frames:
                if not self.run_frame():
                    logger.info("Quit requested after %d frames", self.frames)
                    break
                deadline += interval
                delay = deadline - self._clock()
                if delay > 0:
                    self._sleep(delay)
                else:
                    # Running behind; don't try to catch up in a burst.
                    deadline = self._clock()
        finally:
            self.frontend.close()
        return self.frames
