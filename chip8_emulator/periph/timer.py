"""
CHIP-8 Emulator — Delay and Sound Timers

Two 8-bit down-counters. The host must call tick() at a fixed 60 Hz,
independent of how fast instructions execute; both counters decrement
once per tick and stop at zero.

  delay  read by Fx07, written by Fx15, programs use it for pacing
  sound  written by Fx18; the buzzer sounds while it is non-zero
"""


class TimerPeripheral:
    """Delay + sound timer pair."""

    def __init__(self):
        self.delay = 0
        self.sound = 0

    def set_delay(self, value: int):
        self.delay = value & 0xFF

    def set_sound(self, value: int):
        self.sound = value & 0xFF

    @property
    def buzzer(self) -> bool:
        return self.sound > 0

    def tick(self):
        """One 60 Hz tick."""
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1

    def reset(self):
        self.delay = 0
        self.sound = 0
