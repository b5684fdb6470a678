"""
CHIP-8 Emulator — 4K Memory Map

Memory map:
  $000–$04F  Built-in hex font (16 glyphs × 5 bytes)
  $050–$1FF  Reserved (interpreter area on the original hardware)
  $200–$FFF  Program space (3584 bytes)

The address bus is 12 bits wide. Every read and write masks its address
with $FFF, so an index register that has drifted past $FFF (I is 16-bit)
wraps back into the 4K array instead of escaping it.

The font lives at $000 so that Fx29 (I = Vx * 5) lands on glyph Vx.
"""

import logging

from ..errors import RomTooLarge


logger = logging.getLogger(__name__)

MEMORY_SIZE = 0x1000
ADDR_MASK = 0xFFF
FONT_BASE = 0x000
GLYPH_SIZE = 5
PROGRAM_START = 0x200
MAX_ROM_SIZE = MEMORY_SIZE - PROGRAM_START   # 3584

# 4x5 hex digit glyphs 0–F, high nibble of each byte is the pixel row.
FONT = (
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
)


class Memory:
    """4K byte-addressable memory with a 12-bit address bus."""

    def __init__(self):
        self._mem = bytearray(MEMORY_SIZE)
        self.load_font()

    # --- Core read/write ---

    def read8(self, addr: int) -> int:
        return self._mem[addr & ADDR_MASK]

    def write8(self, addr: int, value: int):
        self._mem[addr & ADDR_MASK] = value & 0xFF

    def read16(self, addr: int) -> int:
        """Read 16-bit value (big-endian). Wraps from $FFF to $000."""
        hi = self.read8(addr)
        lo = self.read8(addr + 1)
        return (hi << 8) | lo

    def write16(self, addr: int, value: int):
        self.write8(addr, (value >> 8) & 0xFF)
        self.write8(addr + 1, value & 0xFF)

    def read_block(self, addr: int, length: int) -> bytes:
        """Read `length` bytes starting at addr, each address masked."""
        return bytes(self._mem[(addr + i) & ADDR_MASK] for i in range(length))

    # --- Bulk load ---

    def load_binary(self, data: bytes, base_addr: int):
        """Copy raw bytes into memory at base_addr (addresses masked)."""
        for i, byte in enumerate(data):
            self._mem[(base_addr + i) & ADDR_MASK] = byte

    def load_rom(self, data: bytes):
        """Copy a ROM image to the program space at $200.

        Raises RomTooLarge if the image does not fit. Bytes past the end of
        the new image are left untouched.
        """
        if len(data) > MAX_ROM_SIZE:
            raise RomTooLarge(len(data), MAX_ROM_SIZE)
        self._mem[PROGRAM_START:PROGRAM_START + len(data)] = data
        logger.debug("Loaded %d byte ROM at $%03X", len(data), PROGRAM_START)

    def load_font(self):
        """Copy the built-in font into the reserved low region."""
        self._mem[FONT_BASE:FONT_BASE + len(FONT)] = bytes(FONT)

    def clear(self):
        self._mem = bytearray(MEMORY_SIZE)

    # --- Snapshots ---

    def snapshot(self, start: int = 0x000, end: int = ADDR_MASK) -> bytes:
        """Copy of memory from start to end inclusive."""
        return bytes(self._mem[start:end + 1])

    # --- Hex dump ---

    def hexdump(self, start: int, length: int = 64) -> str:
        """Produce a hex dump of memory for debugging."""
        lines = []
        for offset in range(0, length, 16):
            addr = (start + offset) & ADDR_MASK
            hex_bytes = ' '.join(f'{self._mem[(addr + i) & ADDR_MASK]:02X}'
                                 for i in range(16))
            lines.append(f'{addr:03X}  {hex_bytes}')
        return '\n'.join(lines)
