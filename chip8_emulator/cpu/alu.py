"""
CHIP-8 Emulator — ALU Operations

8-bit arithmetic for the 8xyN register-register family. Each function
returns a tuple (result_byte, vf) where vf is the value the instruction
writes to the flag register. The caller writes the result to Vx first and
VF last, so when x is 15 the flag is what survives.

  ADD  (8xy4): vf = 1 if the unsigned sum exceeds 255 (carry)
  SUB  (8xy5): vf = 1 if Vx > Vy before subtracting (NOT borrow)
  SUBN (8xy7): vf = 1 if Vy > Vx before subtracting (NOT borrow)
  SHR  (8xy6): vf = bit 0 shifted out
  SHL  (8xyE): vf = bit 7 shifted out

Note SUB/SUBN use a strict comparison: equal operands give vf = 0.
"""


def add8(a: int, b: int) -> tuple:
    """Add two 8-bit values, carry into VF."""
    result = a + b
    return (result & 0xFF, 1 if result > 0xFF else 0)


def sub8(a: int, b: int) -> tuple:
    """a - b, VF = 1 when a > b."""
    return ((a - b) & 0xFF, 1 if a > b else 0)


def subn8(a: int, b: int) -> tuple:
    """b - a (reverse subtract), VF = 1 when b > a."""
    return ((b - a) & 0xFF, 1 if b > a else 0)


def shr8(a: int) -> tuple:
    return (a >> 1, a & 0x01)


def shl8(a: int) -> tuple:
    return ((a << 1) & 0xFF, (a >> 7) & 0x01)


def bcd(value: int) -> tuple:
    """Split an 8-bit value into (hundreds, tens, ones)."""
    value &= 0xFF
    return (value // 100, (value // 10) % 10, value % 10)
