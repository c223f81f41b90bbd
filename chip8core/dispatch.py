"""
Two-level opcode lookup.

The outer table is keyed on the family nibble. Families 0, 8, E and F
share a nibble between several instructions and are resolved by a second
table keyed on n (family 8) or kk (families 0, E, F). Anything missing
from the tables resolves to ``instructions.unknown``.
"""

from typing import Callable

from . import instructions as ops
from .opcode import Opcode

Operation = Callable[[object, Opcode], None]

SYSTEM_OPS = {
    0x00: ops.no_op,
    0xE0: ops.clear_display,
    0xEE: ops.return_from_subroutine,
}

ALU_OPS = {
    0x0: ops.load_vx_vy,
    0x1: ops.or_vx_vy,
    0x2: ops.and_vx_vy,
    0x3: ops.xor_vx_vy,
    0x4: ops.add_vx_vy,
    0x5: ops.sub_vx_vy,
    0x6: ops.shr_vx_vy,
    0x7: ops.subn_vx_vy,
    0xE: ops.shl_vx_vy,
}

KEY_OPS = {
    0x9E: ops.skip_key_pressed_vx,
    0xA1: ops.skip_key_not_pressed_vx,
}

MISC_OPS = {
    0x07: ops.load_vx_dt,
    0x0A: ops.load_vx_key,
    0x15: ops.load_dt_vx,
    0x18: ops.load_st_vx,
    0x1E: ops.add_i_vx,
    0x29: ops.load_i_vx_font,
    0x33: ops.load_bcd_vx,
    0x55: ops.load_through_vx,
    0x65: ops.read_through_vx,
}

FAMILY_OPS = {
    0x1: ops.jump_addr,
    0x2: ops.call_addr,
    0x3: ops.skip_equal_vx_byte,
    0x4: ops.skip_not_equal_vx_byte,
    0x5: ops.skip_equal_vx_vy,
    0x6: ops.load_vx_byte,
    0x7: ops.add_vx_byte,
    0x9: ops.skip_not_equal_vx_vy,
    0xA: ops.load_i_addr,
    0xB: ops.jump_v0_addr,
    0xC: ops.rand_vx_byte,
    0xD: ops.draw_vx_vy_n,
}


def operation(opcode: Opcode) -> Operation:
    """Resolve an opcode to the function that executes it"""
    family = opcode.family
    if family == 0x0:
        return SYSTEM_OPS.get(opcode.kk, ops.unknown)
    if family == 0x8:
        return ALU_OPS.get(opcode.n, ops.unknown)
    if family == 0xE:
        return KEY_OPS.get(opcode.kk, ops.unknown)
    if family == 0xF:
        return MISC_OPS.get(opcode.kk, ops.unknown)
    return FAMILY_OPS[family]


def known_operations() -> int:
    """Number of distinct instructions the dispatcher recognises"""
    return sum(len(table) for table in (SYSTEM_OPS, ALU_OPS, KEY_OPS, MISC_OPS, FAMILY_OPS))
