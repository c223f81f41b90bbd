"""
CHIP-8 disassembler.
Turns instruction words into (mnemonic, operands, description) triples.
Used for the per-step instruction trace and for ROM listings.
"""

from typing import List, Tuple

from .memory import PROGRAM_START
from .opcode import Opcode

UNKNOWN = "UNKNOWN"

Line = Tuple[str, str, str]


def disassemble_instruction(instruction: int) -> Line:
    """
    Disassemble a single CHIP-8 instruction
    Returns: (mnemonic, operands, description)
    """
    op = Opcode(instruction)
    family, x, y, n, kk, nnn = op.family, op.x, op.y, op.n, op.kk, op.nnn

    if family == 0x0:
        if kk == 0x00:
            return "NOP", "", "No operation"
        elif kk == 0xE0:
            return "CLS", "", "Clear display"
        elif kk == 0xEE:
            return "RET", "", "Return from subroutine"
        return UNKNOWN, f"${instruction:04X}", "Unknown 0xxx instruction"
    elif family == 0x1:
        return "JP", f"${nnn:03X}", f"Jump to {nnn:03X}"
    elif family == 0x2:
        return "CALL", f"${nnn:03X}", f"Call subroutine at {nnn:03X}"
    elif family == 0x3:
        return "SE", f"V{x:X}, #{kk:02X}", f"Skip if V{x:X} == {kk}"
    elif family == 0x4:
        return "SNE", f"V{x:X}, #{kk:02X}", f"Skip if V{x:X} != {kk}"
    elif family == 0x5:
        return "SE", f"V{x:X}, V{y:X}", f"Skip if V{x:X} == V{y:X}"
    elif family == 0x6:
        return "LD", f"V{x:X}, #{kk:02X}", f"Load {kk} into V{x:X}"
    elif family == 0x7:
        return "ADD", f"V{x:X}, #{kk:02X}", f"Add {kk} to V{x:X}"
    elif family == 0x8:
        return _disassemble_8xxx(instruction, x, y, n)
    elif family == 0x9:
        return "SNE", f"V{x:X}, V{y:X}", f"Skip if V{x:X} != V{y:X}"
    elif family == 0xA:
        return "LD", f"I, ${nnn:03X}", f"Load {nnn:03X} into I"
    elif family == 0xB:
        return "JP", f"V0, ${nnn:03X}", f"Jump to V0 + {nnn:03X}"
    elif family == 0xC:
        return "RND", f"V{x:X}, #{kk:02X}", f"V{x:X} = random & {kk:02X}"
    elif family == 0xD:
        return "DRW", f"V{x:X}, V{y:X}, #{n:X}", f"Draw {n}-byte sprite at V{x:X}, V{y:X}"
    elif family == 0xE:
        if kk == 0x9E:
            return "SKP", f"V{x:X}", f"Skip if key V{x:X} pressed"
        elif kk == 0xA1:
            return "SKNP", f"V{x:X}", f"Skip if key V{x:X} not pressed"
        return UNKNOWN, f"${instruction:04X}", "Unknown Exxx instruction"
    return _disassemble_fxxx(instruction, x, kk)


def _disassemble_8xxx(instruction: int, x: int, y: int, n: int) -> Line:
    """Disassemble 8xxx register operations"""
    if n == 0x0:
        return "LD", f"V{x:X}, V{y:X}", f"V{x:X} = V{y:X}"
    elif n == 0x1:
        return "OR", f"V{x:X}, V{y:X}", f"V{x:X} |= V{y:X}"
    elif n == 0x2:
        return "AND", f"V{x:X}, V{y:X}", f"V{x:X} &= V{y:X}"
    elif n == 0x3:
        return "XOR", f"V{x:X}, V{y:X}", f"V{x:X} ^= V{y:X}"
    elif n == 0x4:
        return "ADD", f"V{x:X}, V{y:X}", f"V{x:X} += V{y:X}, VF = carry"
    elif n == 0x5:
        return "SUB", f"V{x:X}, V{y:X}", f"V{x:X} -= V{y:X}, VF = !borrow"
    elif n == 0x6:
        return "SHR", f"V{x:X}, V{y:X}", f"V{x:X} = V{y:X} >> 1, VF = LSB"
    elif n == 0x7:
        return "SUBN", f"V{x:X}, V{y:X}", f"V{x:X} = V{y:X} - V{x:X}, VF = !borrow"
    elif n == 0xE:
        return "SHL", f"V{x:X}, V{y:X}", f"V{x:X} = V{y:X} << 1, VF = MSB"
    return UNKNOWN, f"${instruction:04X}", "Unknown 8xxx instruction"


def _disassemble_fxxx(instruction: int, x: int, kk: int) -> Line:
    """Disassemble Fxxx timer and memory operations"""
    if kk == 0x07:
        return "LD", f"V{x:X}, DT", f"V{x:X} = delay timer"
    elif kk == 0x0A:
        return "LD", f"V{x:X}, K", f"Wait for key press, store in V{x:X}"
    elif kk == 0x15:
        return "LD", f"DT, V{x:X}", f"Delay timer = V{x:X}"
    elif kk == 0x18:
        return "LD", f"ST, V{x:X}", f"Sound timer = V{x:X}"
    elif kk == 0x1E:
        return "ADD", f"I, V{x:X}", f"I += V{x:X}"
    elif kk == 0x29:
        return "LD", f"F, V{x:X}", f"I = sprite address for digit V{x:X}"
    elif kk == 0x33:
        return "LD", f"B, V{x:X}", f"Store BCD of V{x:X} at I, I+1, I+2"
    elif kk == 0x55:
        return "LD", f"[I], V{x:X}", f"Store V0-V{x:X} at I"
    elif kk == 0x65:
        return "LD", f"V{x:X}, [I]", f"Load V0-V{x:X} from I"
    return UNKNOWN, f"${instruction:04X}", "Unknown Fxxx instruction"


def disassemble_rom(rom_data: bytes, start_address: int = PROGRAM_START) -> List[Tuple[int, int, str, str, str]]:
    """
    Disassemble a whole image, two bytes at a time.
    Returns list of (address, instruction, mnemonic, operands, description).
    A trailing odd byte is ignored.
    """
    listing = []
    for offset in range(0, len(rom_data) - 1, 2):
        instruction = (rom_data[offset] << 8) | rom_data[offset + 1]
        mnemonic, operands, description = disassemble_instruction(instruction)
        listing.append((start_address + offset, instruction, mnemonic, operands, description))
    return listing


def format_listing(listing: List[Tuple[int, int, str, str, str]]) -> str:
    return '\n'.join(
        f"${address:03X}    ${instruction:04X}   {mnemonic:<8} {operands:<15} ; {description}"
        for address, instruction, mnemonic, operands, description in listing
    )
