"""
CHIP-8 Emulator — Error Taxonomy

Every fault the emulator can report is a subclass of Chip8Error, so a host
can catch the whole family in one place and decide whether to halt, skip
the faulting instruction, or report it.

  RomTooLarge      load-time; the caller may pick another ROM
  RomReadError     the ROM file could not be read
  UnknownOpcode    undefined instruction; PC already points past it
  StackOverflow    CALL with all 16 stack entries in use
  StackUnderflow   RET with an empty stack
  InvalidKeyIndex  key index outside 0x0–0xF
"""


class Chip8Error(Exception):
    """Base class for all emulator errors."""
    pass


class RomTooLarge(Chip8Error):
    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(
            f"ROM is {size} bytes, program space holds {limit} bytes")


class RomReadError(Chip8Error):
    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read ROM {path}: {reason}")


class UnknownOpcode(Chip8Error):
    def __init__(self, opcode: int, pc: int = None):
        self.opcode = opcode
        self.pc = pc
        where = f" at ${pc:03X}" if pc is not None else ""
        super().__init__(f"Unknown opcode ${opcode:04X}{where}")


class StackOverflow(Chip8Error):
    def __init__(self, pc: int, depth: int):
        self.pc = pc
        self.depth = depth
        super().__init__(
            f"Call stack overflow at ${pc:03X} (depth {depth})")


class StackUnderflow(Chip8Error):
    def __init__(self, pc: int):
        self.pc = pc
        super().__init__(f"Return with empty call stack at ${pc:03X}")


class InvalidKeyIndex(Chip8Error):
    def __init__(self, index: int):
        self.index = index
        super().__init__(f"Key index {index} out of range 0x0-0xF")
