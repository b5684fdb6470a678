"""
CHIP-8 Emulator — CPU Register Set + Call Stack

Register model:
  V0–VF — 16 general purpose 8-bit registers
          VF doubles as the flag register: carry (ADD), NOT borrow
          (SUB/SUBN), shifted-out bit (SHR/SHL), collision (DRW)
  I     — 16-bit index register (memory accesses through it are masked
          to 12 bits at the point of use, not here)
  PC    — 12-bit program counter, starts at $200
  SP    — stack pointer: number of return addresses on the stack (0 = empty)

The call stack is 16 entries of 16-bit return addresses. It is not mapped
into emulated memory. Pushing a 17th entry or popping an empty stack is
reported as an error instead of wrapping.
"""

from ..errors import StackOverflow, StackUnderflow


NUM_REGS = 16
VF = 0xF
STACK_DEPTH = 16
PROGRAM_START = 0x200


class Registers:
    """CHIP-8 register file and call stack."""

    __slots__ = ('V', 'I', 'PC', 'SP', 'stack', 'cycles')

    def __init__(self):
        self.V = bytearray(NUM_REGS)       # V0–VF (8-bit)
        self.I: int = 0                    # Index register (16-bit)
        self.PC: int = PROGRAM_START       # Program counter (12-bit)
        self.SP: int = 0                   # Stack depth
        self.stack = [0] * STACK_DEPTH     # Return addresses
        self.cycles: int = 0               # Instructions executed

    # --- Flag register ---

    @property
    def flag(self) -> int:
        return self.V[VF]

    @flag.setter
    def flag(self, value: int):
        self.V[VF] = value & 0x01

    # --- Stack operations ---

    def push(self, address: int, pc: int):
        """Push a return address. `pc` is the CALL's own address (for errors)."""
        if self.SP >= STACK_DEPTH:
            raise StackOverflow(pc, self.SP)
        self.stack[self.SP] = address & 0xFFFF
        self.SP += 1

    def pop(self, pc: int) -> int:
        """Pop the most recent return address."""
        if self.SP == 0:
            raise StackUnderflow(pc)
        self.SP -= 1
        return self.stack[self.SP]

    # --- Display ---

    def display(self) -> str:
        """Format register state on one line for traces."""
        regs = ' '.join(f'{v:02X}' for v in self.V)
        return (f"PC={self.PC:03X} I={self.I:04X} SP={self.SP:X} "
                f"V=[{regs}]")

    def reset(self):
        """Reset to power-on state."""
        self.V = bytearray(NUM_REGS)
        self.I = 0
        self.PC = PROGRAM_START
        self.SP = 0
        self.stack = [0] * STACK_DEPTH
        self.cycles = 0
