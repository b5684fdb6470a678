"""
CHIP-8 Emulator — Opcode Decoder

Every CHIP-8 instruction is one big-endian 16-bit word. Decoding is pure:
decode(opcode) looks the word up in the OPCODES table and returns an
Instruction carrying the mnemonic plus every operand field, so the executor
never has to pick nibbles apart itself.

Operand fields:
  x    bits 11–8   register index
  y    bits 7–4    register index
  n    bits 3–0    4-bit immediate (sprite height)
  kk   bits 7–0    8-bit immediate
  nnn  bits 11–0   12-bit address

The high nibble selects the family. Families 0, 5, 8, 9, E and F are
further selected by the low nibble or low byte; any pattern not in the
table (including the legacy 0nnn machine-code call) is an UnknownOpcode.
"""

from dataclasses import dataclass

from ..errors import UnknownOpcode


# ──────────────────────────────────────────────
# Mnemonics
# ──────────────────────────────────────────────

CLS      = 'CLS'        # 00E0  clear screen
RET      = 'RET'        # 00EE  return from subroutine
JP       = 'JP'         # 1nnn  jump
CALL     = 'CALL'       # 2nnn  call subroutine
SE       = 'SE'         # 3xkk  skip if Vx == kk
SNE      = 'SNE'        # 4xkk  skip if Vx != kk
SE_R     = 'SE_R'       # 5xy0  skip if Vx == Vy
LD       = 'LD'         # 6xkk  Vx = kk
ADD      = 'ADD'        # 7xkk  Vx += kk (no flag)
LD_R     = 'LD_R'       # 8xy0  Vx = Vy
OR       = 'OR'         # 8xy1
AND      = 'AND'        # 8xy2
XOR      = 'XOR'        # 8xy3
ADD_R    = 'ADD_R'      # 8xy4  carry
SUB      = 'SUB'        # 8xy5  NOT borrow
SHR      = 'SHR'        # 8xy6  bit 0 out
SUBN     = 'SUBN'       # 8xy7  NOT borrow
SHL      = 'SHL'        # 8xyE  bit 7 out
SNE_R    = 'SNE_R'      # 9xy0  skip if Vx != Vy
LD_I     = 'LD_I'       # Annn  I = nnn
JP_V0    = 'JP_V0'      # Bnnn  jump nnn + V0
RND      = 'RND'        # Cxkk  Vx = rand & kk
DRW      = 'DRW'        # Dxyn  draw sprite
SKP      = 'SKP'        # Ex9E  skip if key Vx down
SKNP     = 'SKNP'       # ExA1  skip if key Vx up
LD_VX_DT = 'LD_VX_DT'   # Fx07  Vx = delay timer
LD_VX_K  = 'LD_VX_K'    # Fx0A  wait for key
LD_DT    = 'LD_DT'      # Fx15  delay timer = Vx
LD_ST    = 'LD_ST'      # Fx18  sound timer = Vx
ADD_I    = 'ADD_I'      # Fx1E  I += Vx
LD_F     = 'LD_F'       # Fx29  I = font glyph Vx
LD_B     = 'LD_B'       # Fx33  BCD of Vx at I
LD_MEM   = 'LD_MEM'     # Fx55  store V0..Vx at I
LD_REGS  = 'LD_REGS'    # Fx65  load V0..Vx from I


# ──────────────────────────────────────────────
# Opcode table
# ──────────────────────────────────────────────
# Format: (mask, pattern, mnemonic); opcode & mask == pattern selects it.
# Exact patterns come first within a family.

OPCODES = [
    (0xFFFF, 0x00E0, CLS),
    (0xFFFF, 0x00EE, RET),
    (0xF000, 0x1000, JP),
    (0xF000, 0x2000, CALL),
    (0xF000, 0x3000, SE),
    (0xF000, 0x4000, SNE),
    (0xF00F, 0x5000, SE_R),
    (0xF000, 0x6000, LD),
    (0xF000, 0x7000, ADD),

    # ── 8xyN register-register ──
    (0xF00F, 0x8000, LD_R),
    (0xF00F, 0x8001, OR),
    (0xF00F, 0x8002, AND),
    (0xF00F, 0x8003, XOR),
    (0xF00F, 0x8004, ADD_R),
    (0xF00F, 0x8005, SUB),
    (0xF00F, 0x8006, SHR),
    (0xF00F, 0x8007, SUBN),
    (0xF00F, 0x800E, SHL),

    (0xF00F, 0x9000, SNE_R),
    (0xF000, 0xA000, LD_I),
    (0xF000, 0xB000, JP_V0),
    (0xF000, 0xC000, RND),
    (0xF000, 0xD000, DRW),

    # ── Ex keyboard ──
    (0xF0FF, 0xE09E, SKP),
    (0xF0FF, 0xE0A1, SKNP),

    # ── Fx timers / index / memory ──
    (0xF0FF, 0xF007, LD_VX_DT),
    (0xF0FF, 0xF00A, LD_VX_K),
    (0xF0FF, 0xF015, LD_DT),
    (0xF0FF, 0xF018, LD_ST),
    (0xF0FF, 0xF01E, ADD_I),
    (0xF0FF, 0xF029, LD_F),
    (0xF0FF, 0xF033, LD_B),
    (0xF0FF, 0xF055, LD_MEM),
    (0xF0FF, 0xF065, LD_REGS),
]

MNEMONICS = frozenset(mnem for _, _, mnem in OPCODES)


@dataclass(frozen=True)
class Instruction:
    """One decoded instruction. All operand fields are always populated."""
    mnemonic: str
    opcode: int
    x: int
    y: int
    n: int
    kk: int
    nnn: int

    def __str__(self) -> str:
        return f"{self.opcode:04X} {self.mnemonic}"


def decode(opcode: int, pc: int = None) -> Instruction:
    """Decode a 16-bit opcode word.

    `pc` is only used to give UnknownOpcode a location.
    """
    opcode &= 0xFFFF
    for mask, pattern, mnem in OPCODES:
        if opcode & mask == pattern:
            return Instruction(
                mnemonic=mnem,
                opcode=opcode,
                x=(opcode >> 8) & 0xF,
                y=(opcode >> 4) & 0xF,
                n=opcode & 0xF,
                kk=opcode & 0xFF,
                nnn=opcode & 0xFFF,
            )
    raise UnknownOpcode(opcode, pc)


def decode_opcode(memory, pc: int):
    """Fetch and decode the instruction at pc.

    Returns: (instruction, next_pc)
    """
    opcode = memory.read16(pc)
    return decode(opcode, pc), (pc + 2) & 0xFFF
