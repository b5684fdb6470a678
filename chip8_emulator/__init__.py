"""
CHIP-8 Emulator
===============
A CHIP-8 virtual machine: 4K memory, sixteen 8-bit registers, a 16-entry
call stack, 60 Hz delay/sound timers, a 64x32 monochrome framebuffer and a
16-key hex keypad.

Architecture:
    ┌──────────┐    ┌──────────┐    ┌──────────────┐    ┌────────────┐
    │ ROM file │───>│  Memory  │───>│   Decoder    │───>│  Executor  │
    │ (.ch8)   │    │ (4K,$200)│    │ (Instruction)│    │ (dispatch) │
    └──────────┘    └──────────┘    └──────────────┘    └────────────┘
                                                              │
                         timers · keypad · framebuffer  <─────┘

    - emu.py:             Chip8Emulator, the fetch/decode/execute core
    - cpu/decoder.py:     pure opcode → Instruction decoding
    - cpu/alu.py:         8-bit arithmetic with VF side-channel
    - mem/memory.py:      12-bit masked memory + built-in font
    - periph/:            timers, keypad latch, framebuffer
    - driver.py:          60 Hz frame pacing against a frontend
    - frontend.py:        headless frontend (pygame one in pygame_frontend.py)
"""

__version__ = "0.1.0"

from .emu import Chip8Emulator, StopReason
from .errors import (
    Chip8Error, RomTooLarge, RomReadError, UnknownOpcode,
    StackOverflow, StackUnderflow, InvalidKeyIndex,
)
from .cpu.decoder import Instruction, decode
from .config import RunConfig
from .driver import FrameDriver
from .frontend import HeadlessFrontend
from .rom import read_rom
from .periph.display import render_text
