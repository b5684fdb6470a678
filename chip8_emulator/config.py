"""
CHIP-8 Emulator — Run Configuration

Defaults for the frame driver and frontends. The CLI builds a RunConfig
from its flags; anything not given on the command line falls back to the
module-level defaults below.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


# =============================================================================
#  TIMING
# =============================================================================
CLOCK_HZ = 700            # Instructions per second (COSMAC VIP ran ~500–1000)
TIMER_HZ = 60             # Delay/sound timer rate, fixed by the hardware


# =============================================================================
#  DISPLAY
# =============================================================================
SCALE = 10                # Window pixels per CHIP-8 pixel
FG_COLOR = (255, 255, 255)
BG_COLOR = (0, 0, 0)


# =============================================================================
#  ERROR POLICY
# =============================================================================
# halt  stop the run and report the error
# skip  log a warning, continue with the next instruction
ON_ERROR = "halt"
ERROR_POLICIES = ("halt", "skip")


@dataclass
class RunConfig:
    clock_hz: int = CLOCK_HZ
    timer_hz: int = TIMER_HZ
    scale: int = SCALE
    fg_color: Tuple[int, int, int] = FG_COLOR
    bg_color: Tuple[int, int, int] = BG_COLOR
    on_error: str = ON_ERROR
    seed: Optional[int] = None

    def __post_init__(self):
        if self.clock_hz <= 0:
            raise ValueError(f"clock_hz must be positive, got {self.clock_hz}")
        if self.timer_hz <= 0:
            raise ValueError(f"timer_hz must be positive, got {self.timer_hz}")
        if self.scale <= 0:
            raise ValueError(f"scale must be positive, got {self.scale}")
        if self.on_error not in ERROR_POLICIES:
            raise ValueError(
                f"on_error must be one of {', '.join(ERROR_POLICIES)}, "
                f"got {self.on_error!r}")

    @property
    def steps_per_frame(self) -> int:
        """Instructions executed between two timer ticks (at least 1)."""
        return max(1, round(self.clock_hz / self.timer_hz))

    @property
    def frame_interval(self) -> float:
        return 1.0 / self.timer_hz
