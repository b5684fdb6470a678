"""
Opcode decoder tests: field extraction, table coverage, unknown opcodes.
Decoding is pure, so these never touch an emulator instance except to
check that every mnemonic has a handler.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from chip8_emulator import Chip8Emulator, UnknownOpcode
from chip8_emulator.cpu import decoder
from chip8_emulator.cpu.decoder import decode, decode_opcode, MNEMONICS, OPCODES
from chip8_emulator.mem.memory import Memory


class TestDecode:

    @pytest.mark.parametrize("opcode,mnem", [
        (0x00E0, decoder.CLS),
        (0x00EE, decoder.RET),
        (0x1ABC, decoder.JP),
        (0x2ABC, decoder.CALL),
        (0x3A12, decoder.SE),
        (0x4A12, decoder.SNE),
        (0x5AB0, decoder.SE_R),
        (0x6A12, decoder.LD),
        (0x7A12, decoder.ADD),
        (0x8AB0, decoder.LD_R),
        (0x8AB1, decoder.OR),
        (0x8AB2, decoder.AND),
        (0x8AB3, decoder.XOR),
        (0x8AB4, decoder.ADD_R),
        (0x8AB5, decoder.SUB),
        (0x8AB6, decoder.SHR),
        (0x8AB7, decoder.SUBN),
        (0x8ABE, decoder.SHL),
        (0x9AB0, decoder.SNE_R),
        (0xAABC, decoder.LD_I),
        (0xBABC, decoder.JP_V0),
        (0xCA12, decoder.RND),
        (0xDAB5, decoder.DRW),
        (0xEA9E, decoder.SKP),
        (0xEAA1, decoder.SKNP),
        (0xFA07, decoder.LD_VX_DT),
        (0xFA0A, decoder.LD_VX_K),
        (0xFA15, decoder.LD_DT),
        (0xFA18, decoder.LD_ST),
        (0xFA1E, decoder.ADD_I),
        (0xFA29, decoder.LD_F),
        (0xFA33, decoder.LD_B),
        (0xFA55, decoder.LD_MEM),
        (0xFA65, decoder.LD_REGS),
    ])
    def test_mnemonic(self, opcode, mnem):
        assert decode(opcode).mnemonic == mnem

    def test_fields(self):
        ins = decode(0xD7A5)
        assert ins.opcode == 0xD7A5
        assert ins.x == 0x7
        assert ins.y == 0xA
        assert ins.n == 0x5
        assert ins.kk == 0xA5
        assert ins.nnn == 0x7A5

    def test_table_covers_34_instructions(self):
        assert len(OPCODES) == len(MNEMONICS) == 34

    def test_every_mnemonic_has_a_handler(self):
        assert set(Chip8Emulator()._dispatch) == MNEMONICS

    @pytest.mark.parametrize("opcode", [
        0x0000, 0x0123, 0x00E1, 0x00FF,   # 0nnn machine-code calls
        0x5AB1, 0x9ABF,                    # 5xy?/9xy? with non-zero n
        0x8AB8, 0x8ABD, 0x8ABF,            # unused 8xy?
        0xEA00, 0xEA9F,                    # unused Ex??
        0xFA00, 0xFA56, 0xFAFF,            # unused Fx??
    ])
    def test_unknown(self, opcode):
        with pytest.raises(UnknownOpcode) as exc:
            decode(opcode, 0x2AA)
        assert exc.value.opcode == opcode
        assert exc.value.pc == 0x2AA
        assert f"{opcode:04X}" in str(exc.value)

    def test_str(self):
        assert str(decode(0x00E0)) == "00E0 CLS"


class TestDecodeOpcode:

    def test_fetch_big_endian(self):
        mem = Memory()
        mem.load_binary(bytes([0x6A, 0x42]), 0x200)
        ins, next_pc = decode_opcode(mem, 0x200)
        assert ins.mnemonic == decoder.LD
        assert ins.x == 0xA and ins.kk == 0x42
        assert next_pc == 0x202

    def test_fetch_wraps_at_end_of_memory(self):
        mem = Memory()
        mem.write8(0xFFF, 0x00)   # high byte at $FFF, low byte from $000
        mem.write8(0x000, 0xE0)
        ins, next_pc = decode_opcode(mem, 0xFFF)
        assert ins.mnemonic == decoder.CLS
        assert next_pc == 0x001
