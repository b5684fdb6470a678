#!/usr/bin/env python3
"""
chip8run — CHIP-8 Emulator CLI

Usage:
    python chip8run.py <rom.ch8> [--clock 700] [--scale 10] [--seed N]
                                 [--on-error halt|skip] [--trace] [--verbose]
    python chip8run.py <rom.ch8> --headless --frames 120

Opens a pygame window and runs the ROM until the window is closed (or Esc).
With --headless no window is opened: the ROM runs for --frames frames and
the final screen is printed as text.

Exit status:
    0  normal exit
    1  ROM could not be read / too large, or execution error under --on-error halt
    2  bad command line (missing ROM, extra arguments)

Keys:
    1 2 3 4 / Q W E R / A S D F / Z X C V  →  CHIP-8 keypad 123C/456D/789E/A0BF
"""

import argparse
import logging
import random
import sys

from chip8_emulator import (
    Chip8Emulator, Chip8Error, RunConfig, FrameDriver, HeadlessFrontend,
    read_rom, __version__,
)
from chip8_emulator.config import CLOCK_HZ, SCALE, ERROR_POLICIES, ON_ERROR


logger = logging.getLogger("chip8run")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chip8run",
        description="CHIP-8 virtual machine",
    )
    parser.add_argument("rom", help="ROM image (raw bytes, loaded at $200)")
    parser.add_argument("--clock", type=int, default=CLOCK_HZ,
                        help=f"Instructions per second (default: {CLOCK_HZ})")
    parser.add_argument("--scale", type=int, default=SCALE,
                        help=f"Window pixels per CHIP-8 pixel (default: {SCALE})")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for the RND instruction (reproducible runs)")
    parser.add_argument("--on-error", choices=ERROR_POLICIES, default=ON_ERROR,
                        help=f"What to do on an execution error (default: {ON_ERROR})")
    parser.add_argument("--headless", action="store_true",
                        help="Run without a window and print the final screen")
    parser.add_argument("--frames", type=int, default=600,
                        help="Frames to run in --headless mode (default: 600)")
    parser.add_argument("--trace", action="store_true",
                        help="Log every executed instruction as it runs")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Debug logging")
    parser.add_argument("--version", action="version",
                        version=f"chip8run {__version__}")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s: %(message)s',
    )

    try:
        config = RunConfig(clock_hz=args.clock, scale=args.scale,
                           on_error=args.on_error, seed=args.seed)
    except ValueError as e:
        parser.error(str(e))

    rng = random.Random(config.seed)
    emu = Chip8Emulator(rng=rng)
    emu.enable_trace(args.trace)

    try:
        emu.load(read_rom(args.rom))
    except Chip8Error as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    logger.info("ROM loaded: %s", args.rom)

    if args.headless:
        frontend = HeadlessFrontend()
    else:
        from chip8_emulator.pygame_frontend import PygameFrontend
        frontend = PygameFrontend(scale=config.scale, fg_color=config.fg_color,
                                  bg_color=config.bg_color)

    driver = FrameDriver(emu, frontend, config)
    try:
        driver.run(max_frames=args.frames if args.headless else None)
    except Chip8Error as e:
        print(f"Execution error: {e}", file=sys.stderr)
        if args.verbose:
            print(emu.regs.display(), file=sys.stderr)
            print(emu.mem.hexdump(emu.regs.PC & ~0xF), file=sys.stderr)
        return 1

    logger.info("Stopped after %d frames (%d instructions)",
                driver.frames, emu.regs.cycles)
    if args.headless:
        print(frontend.text())
    return 0


if __name__ == "__main__":
    sys.exit(main())
