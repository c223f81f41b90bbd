import pytest

from chip8core import instructions as ops
from chip8core.disassembler import (UNKNOWN, disassemble_instruction,
                                    disassemble_rom, format_listing)
from chip8core.dispatch import operation
from chip8core.opcode import Opcode


@pytest.mark.parametrize("code, mnemonic, operands", [
    (0x0000, "NOP", ""),
    (0x00E0, "CLS", ""),
    (0x00EE, "RET", ""),
    (0x1234, "JP", "$234"),
    (0x2ABC, "CALL", "$ABC"),
    (0x3A12, "SE", "VA, #12"),
    (0x5AB7, "SE", "VA, VB"),
    (0x8AB4, "ADD", "VA, VB"),
    (0x8AB6, "SHR", "VA, VB"),
    (0x8ABE, "SHL", "VA, VB"),
    (0xA2F0, "LD", "I, $2F0"),
    (0xB200, "JP", "V0, $200"),
    (0xD125, "DRW", "V1, V2, #5"),
    (0xE59E, "SKP", "V5"),
    (0xF50A, "LD", "V5, K"),
    (0xF533, "LD", "B, V5"),
    (0xF565, "LD", "V5, [I]"),
])
def test_disassemble_instruction(code, mnemonic, operands):
    got_mnemonic, got_operands, description = disassemble_instruction(code)
    assert (got_mnemonic, got_operands) == (mnemonic, operands)
    assert description


@pytest.mark.parametrize("code", [0x0123, 0x8AB9, 0xE5FF, 0xF5FF])
def test_unknown_words(code):
    mnemonic, operands, _ = disassemble_instruction(code)
    assert mnemonic == UNKNOWN
    assert operands == f"${code:04X}"


def test_agrees_with_dispatcher_on_unknown_words():
    for code in range(0x10000):
        is_unknown = operation(Opcode(code)) is ops.unknown
        assert (disassemble_instruction(code)[0] == UNKNOWN) == is_unknown, hex(code)


def test_disassemble_rom():
    listing = disassemble_rom(bytes([0x60, 0x05, 0x12, 0x02, 0xFF]))
    assert [(addr, code, mnemonic) for addr, code, mnemonic, _, _ in listing] == [
        (0x200, 0x6005, "LD"),
        (0x202, 0x1202, "JP"),
    ]


def test_disassemble_rom_custom_origin():
    listing = disassemble_rom(b"\x00\xE0", start_address=0x300)
    assert listing[0][0] == 0x300


def test_format_listing():
    text = format_listing(disassemble_rom(b"\x00\xE0\x12\x02"))
    lines = text.splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("$200    $00E0   CLS")
    assert "; Jump to 202" in lines[1]
