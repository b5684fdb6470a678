"""
CHIP-8 Emulator — Main Emulator Class

This is the top-level class that integrates:
  - CPU registers + call stack (regs.py)
  - 4K memory with the built-in font (memory.py)
  - Opcode decoder (decoder.py)
  - ALU operations (alu.py)
  - Peripherals: delay/sound timers, keypad latch, framebuffer

Execution model (one step):
  1. If a Fx0A key wait is pending, poll the keypad and return
  2. Fetch the big-endian opcode at PC, advance PC by 2
  3. Decode into an Instruction
  4. Dispatch on the mnemonic to its handler; jumps, calls, returns and
     skips rewrite PC themselves

Errors (UnknownOpcode, StackOverflow, StackUnderflow, InvalidKeyIndex)
propagate out of step() with PC already past the faulting instruction, so
a host that wants to skip it just calls step() again. run() converts them
into StopReason.ERROR for harness-style use.

Timers are NOT ticked by step(); the host calls tick_timers() at 60 Hz.

Termination reasons for run():
  TIMEOUT:  max_steps executed
  BREAK:    breakpoint address hit
  WAITKEY:  blocked on Fx0A with no key pressed
  ERROR:    a Chip8Error was raised (kept in last_error)
"""

import logging
import random
from collections import deque
from enum import Enum
from typing import Optional, Set

from .cpu.regs import Registers
from .cpu.decoder import decode_opcode
from .cpu import decoder as ops
from .cpu import alu
from .mem.memory import Memory, GLYPH_SIZE, FONT_BASE
from .periph.timer import TimerPeripheral
from .periph.keypad import Keypad
from .periph.display import Framebuffer
from .errors import Chip8Error


logger = logging.getLogger(__name__)


class StopReason(Enum):
    TIMEOUT = 'TIMEOUT'
    BREAK = 'BREAK'
    WAITKEY = 'WAITKEY'
    ERROR = 'ERROR'


class Chip8Emulator:
    """CHIP-8 virtual machine.

    Usage:
        emu = Chip8Emulator()
        emu.load(Path('pong.ch8').read_bytes())
        while running:
            for _ in range(steps_per_frame):
                emu.step()
            emu.tick_timers()
            if emu.take_redraw_flag():
                render(emu.framebuffer)
    """

    DEFAULT_MAX_STEPS = 1_000_000
    TRACE_DEPTH = 1000

    def __init__(self, rng: Optional[random.Random] = None):
        # Core components
        self.regs = Registers()
        self.mem = Memory()

        # Peripherals
        self.timers = TimerPeripheral()
        self.keypad = Keypad()
        self.display = Framebuffer()

        self._rng = rng if rng is not None else random.Random()

        # Fx0A target register while blocked on a key press
        self.awaiting_key: Optional[int] = None

        # Address of the instruction currently executing (error context)
        self._op_pc = self.regs.PC

        self._breakpoints: Set[int] = set()
        self.last_error: Optional[Chip8Error] = None

        # Only the most recent TRACE_DEPTH lines are kept; all are logged
        self._trace = False
        self._trace_output = deque(maxlen=self.TRACE_DEPTH)

        self._dispatch = self._build_dispatch()

    # ══════════════════════════════════════════════
    # Lifecycle
    # ══════════════════════════════════════════════

    def reset(self):
        """Power-on state: everything zeroed, font loaded, PC = $200."""
        self.regs.reset()
        self.mem.clear()
        self.mem.load_font()
        self.timers.reset()
        self.keypad.reset()
        self.display.reset()
        self.awaiting_key = None
        self.last_error = None
        self._op_pc = self.regs.PC
        self._trace_output.clear()
        logger.debug("Emulator reset")
        return self

    def load(self, rom: bytes):
        """Copy a ROM image to $200. Raises RomTooLarge.

        Registers, stack and framebuffer are left alone; call reset() first
        for a clean start.
        """
        self.mem.load_rom(bytes(rom))

    # ══════════════════════════════════════════════
    # Host interface
    # ══════════════════════════════════════════════

    def tick_timers(self):
        """Decrement delay and sound timers. Call at 60 Hz."""
        self.timers.tick()

    def set_key(self, index: int, pressed: bool):
        self.keypad.set_key(index, pressed)

    @property
    def framebuffer(self) -> tuple:
        return self.display.rows

    def take_redraw_flag(self) -> bool:
        return self.display.take_redraw_flag()

    @property
    def sound_timer(self) -> int:
        return self.timers.sound

    @property
    def delay_timer(self) -> int:
        return self.timers.delay

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def step(self):
        """Execute one instruction (or poll the keypad during a Fx0A wait)."""
        if self.awaiting_key is not None:
            key = self.keypad.first_pressed()
            if key is not None:
                self.regs.V[self.awaiting_key] = key
                self.awaiting_key = None
            return

        pc = self.regs.PC
        self._op_pc = pc
        ins, next_pc = decode_opcode(self.mem, pc)

        if self._trace:
            # Register state before the instruction runs
            line = f"{pc:03X}: {ins.opcode:04X} {ins.mnemonic:8s} {self.regs.display()}"
            self._trace_output.append(line)
            logger.info(line)

        self.regs.PC = next_pc
        self._dispatch[ins.mnemonic](ins)
        self.regs.cycles += 1

    def run(self, max_steps: int = None) -> StopReason:
        """Step until a breakpoint, error, key wait, or the step budget."""
        if max_steps is None:
            max_steps = self.DEFAULT_MAX_STEPS

        for _ in range(max_steps):
            if self.regs.PC in self._breakpoints and self.awaiting_key is None:
                return StopReason.BREAK
            try:
                self.step()
            except Chip8Error as e:
                self.last_error = e
                if self._trace:
                    self._trace_output.append(f"  ERROR: {e}")
                    logger.info("  ERROR: %s", e)
                return StopReason.ERROR
            if self.awaiting_key is not None:
                return StopReason.WAITKEY

        return StopReason.TIMEOUT

    # ══════════════════════════════════════════════
    # Debugging
    # ══════════════════════════════════════════════

    def add_breakpoint(self, addr: int):
        self._breakpoints.add(addr & 0xFFF)

    def remove_breakpoint(self, addr: int):
        self._breakpoints.discard(addr & 0xFFF)

    def enable_trace(self, on: bool = True):
        self._trace = on

    @property
    def trace_output(self) -> list:
        """Most recent trace lines, oldest first."""
        return list(self._trace_output)

    # ══════════════════════════════════════════════
    # Instruction handlers
    # ══════════════════════════════════════════════
    # Handler signature: handler(ins) where ins is a decoder.Instruction.
    # PC already points at the next instruction.

    def _build_dispatch(self) -> dict:
        """Build mnemonic → handler dispatch table."""
        return {
            # ── Flow control ──
            ops.CLS:      self._op_cls,
            ops.RET:      self._op_ret,
            ops.JP:       self._op_jp,
            ops.CALL:     self._op_call,
            ops.JP_V0:    self._op_jp_v0,

            # ── Skips ──
            ops.SE:       self._op_se,
            ops.SNE:      self._op_sne,
            ops.SE_R:     self._op_se_r,
            ops.SNE_R:    self._op_sne_r,
            ops.SKP:      self._op_skp,
            ops.SKNP:     self._op_sknp,

            # ── Immediate ──
            ops.LD:       self._op_ld,
            ops.ADD:      self._op_add,
            ops.RND:      self._op_rnd,

            # ── Register-register ──
            ops.LD_R:     self._op_ld_r,
            ops.OR:       self._op_or,
            ops.AND:      self._op_and,
            ops.XOR:      self._op_xor,
            ops.ADD_R:    self._op_add_r,
            ops.SUB:      self._op_sub,
            ops.SHR:      self._op_shr,
            ops.SUBN:     self._op_subn,
            ops.SHL:      self._op_shl,

            # ── Index / memory ──
            ops.LD_I:     self._op_ld_i,
            ops.ADD_I:    self._op_add_i,
            ops.LD_F:     self._op_ld_f,
            ops.LD_B:     self._op_ld_b,
            ops.LD_MEM:   self._op_ld_mem,
            ops.LD_REGS:  self._op_ld_regs,

            # ── Display ──
            ops.DRW:      self._op_drw,

            # ── Timers / keyboard ──
            ops.LD_VX_DT: self._op_ld_vx_dt,
            ops.LD_VX_K:  self._op_ld_vx_k,
            ops.LD_DT:    self._op_ld_dt,
            ops.LD_ST:    self._op_ld_st,
        }

    def _skip_if(self, condition: bool):
        if condition:
            self.regs.PC = (self.regs.PC + 2) & 0xFFF

    def _set_alu(self, x: int, result: tuple):
        # Result first, flag last: with x == VF the flag wins.
        value, flag = result
        self.regs.V[x] = value
        self.regs.flag = flag

    # ── Flow control ──

    def _op_cls(self, ins):
        self.display.clear()

    def _op_ret(self, ins):
        self.regs.PC = self.regs.pop(self._op_pc)

    def _op_jp(self, ins):
        self.regs.PC = ins.nnn

    def _op_call(self, ins):
        self.regs.push(self.regs.PC, self._op_pc)
        self.regs.PC = ins.nnn

    def _op_jp_v0(self, ins):
        self.regs.PC = (ins.nnn + self.regs.V[0]) & 0xFFF

    # ── Skips ──

    def _op_se(self, ins):
        self._skip_if(self.regs.V[ins.x] == ins.kk)

    def _op_sne(self, ins):
        self._skip_if(self.regs.V[ins.x] != ins.kk)

    def _op_se_r(self, ins):
        self._skip_if(self.regs.V[ins.x] == self.regs.V[ins.y])

    def _op_sne_r(self, ins):
        self._skip_if(self.regs.V[ins.x] != self.regs.V[ins.y])

    def _op_skp(self, ins):
        self._skip_if(self.keypad.is_pressed(self.regs.V[ins.x]))

    def _op_sknp(self, ins):
        self._skip_if(not self.keypad.is_pressed(self.regs.V[ins.x]))

    # ── Immediate ──

    def _op_ld(self, ins):
        self.regs.V[ins.x] = ins.kk

    def _op_add(self, ins):
        self.regs.V[ins.x] = (self.regs.V[ins.x] + ins.kk) & 0xFF

    def _op_rnd(self, ins):
        self.regs.V[ins.x] = self._rng.randrange(256) & ins.kk

    # ── Register-register ──

    def _op_ld_r(self, ins):
        self.regs.V[ins.x] = self.regs.V[ins.y]

    def _op_or(self, ins):
        self.regs.V[ins.x] |= self.regs.V[ins.y]

    def _op_and(self, ins):
        self.regs.V[ins.x] &= self.regs.V[ins.y]

    def _op_xor(self, ins):
        self.regs.V[ins.x] ^= self.regs.V[ins.y]

    def _op_add_r(self, ins):
        self._set_alu(ins.x, alu.add8(self.regs.V[ins.x], self.regs.V[ins.y]))

    def _op_sub(self, ins):
        self._set_alu(ins.x, alu.sub8(self.regs.V[ins.x], self.regs.V[ins.y]))

    def _op_subn(self, ins):
        self._set_alu(ins.x, alu.subn8(self.regs.V[ins.x], self.regs.V[ins.y]))

    def _op_shr(self, ins):
        self._set_alu(ins.x, alu.shr8(self.regs.V[ins.x]))

    def _op_shl(self, ins):
        self._set_alu(ins.x, alu.shl8(self.regs.V[ins.x]))

    # ── Index / memory ──

    def _op_ld_i(self, ins):
        self.regs.I = ins.nnn

    def _op_add_i(self, ins):
        self.regs.I = (self.regs.I + self.regs.V[ins.x]) & 0xFFFF

    def _op_ld_f(self, ins):
        self.regs.I = FONT_BASE + self.regs.V[ins.x] * GLYPH_SIZE

    def _op_ld_b(self, ins):
        for offset, digit in enumerate(alu.bcd(self.regs.V[ins.x])):
            self.mem.write8(self.regs.I + offset, digit)

    def _op_ld_mem(self, ins):
        """Store V0..Vx inclusive at I. I is not modified."""
        for k in range(ins.x + 1):
            self.mem.write8(self.regs.I + k, self.regs.V[k])

    def _op_ld_regs(self, ins):
        """Load V0..Vx inclusive from I. I is not modified."""
        for k in range(ins.x + 1):
            self.regs.V[k] = self.mem.read8(self.regs.I + k)

    # ── Display ──

    def _op_drw(self, ins):
        sprite = self.mem.read_block(self.regs.I, ins.n)
        collision = self.display.draw_sprite(
            self.regs.V[ins.x], self.regs.V[ins.y], sprite)
        self.regs.flag = 1 if collision else 0

    # ── Timers / keyboard ──

    def _op_ld_vx_dt(self, ins):
        self.regs.V[ins.x] = self.timers.delay

    def _op_ld_vx_k(self, ins):
        self.awaiting_key = ins.x

    def _op_ld_dt(self, ins):
        self.timers.set_delay(self.regs.V[ins.x])

    def _op_ld_st(self, ins):
        self.timers.set_sound(self.regs.V[ins.x])
