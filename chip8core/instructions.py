"""
CHIP-8 operations.

Every operation has the signature ``op(cpu, opcode) -> None`` and is
responsible for moving the program counter itself: one step for a plain
instruction, two for a taken skip, or an absolute set for jumps.
Operations never log; tracing happens once per step in the dispatcher's
caller.
"""

from .display import draw_sprite
from .errors import UnknownOpcode
from .font import glyph_address
from .memory import MEMORY_SIZE


def _skip_if(cpu, condition: bool):
    if condition:
        cpu.pc.advance()
    cpu.pc.advance()


def unknown(cpu, opcode):
    raise UnknownOpcode(opcode.code, cpu.pc.current)


def no_op(cpu, opcode):
    cpu.pc.advance()


# 00E0 - CLS
def clear_display(cpu, opcode):
    cpu.display.clear()
    cpu.draw = True
    cpu.stats['display_clears'] += 1
    cpu.pc.advance()


# 00EE - RET
def return_from_subroutine(cpu, opcode):
    addr = cpu.stack_pop()
    cpu.pc.set(addr)
    cpu.pc.advance()
    cpu.stats['returns'] += 1


# 1nnn - JP addr
def jump_addr(cpu, opcode):
    addr = opcode.nnn
    if addr == cpu.pc.current:
        # Jumping onto itself is how programs halt
        cpu.exit = True
        return
    cpu.pc.set(addr)
    cpu.stats['jumps_taken'] += 1


# 2nnn - CALL addr
def call_addr(cpu, opcode):
    cpu.stack_push(cpu.pc.current)
    cpu.pc.set(opcode.nnn)
    cpu.stats['subroutine_calls'] += 1


# 3xkk - SE Vx, byte
def skip_equal_vx_byte(cpu, opcode):
    _skip_if(cpu, cpu.read_register(opcode.x) == opcode.kk)


# 4xkk - SNE Vx, byte
def skip_not_equal_vx_byte(cpu, opcode):
    _skip_if(cpu, cpu.read_register(opcode.x) != opcode.kk)


# 5xy0 - SE Vx, Vy
def skip_equal_vx_vy(cpu, opcode):
    _skip_if(cpu, cpu.read_register(opcode.x) == cpu.read_register(opcode.y))


# 6xkk - LD Vx, byte
def load_vx_byte(cpu, opcode):
    cpu.load_register(opcode.x, opcode.kk)
    cpu.pc.advance()


# 7xkk - ADD Vx, byte (no carry flag)
def add_vx_byte(cpu, opcode):
    vx = cpu.read_register(opcode.x)
    cpu.load_register(opcode.x, (vx + opcode.kk) & 0xFF)
    cpu.pc.advance()


# 8xy0 - LD Vx, Vy
def load_vx_vy(cpu, opcode):
    cpu.load_register(opcode.x, cpu.read_register(opcode.y))
    cpu.pc.advance()


# 8xy1 - OR Vx, Vy
def or_vx_vy(cpu, opcode):
    cpu.load_register(opcode.x, cpu.read_register(opcode.x) | cpu.read_register(opcode.y))
    cpu.pc.advance()


# 8xy2 - AND Vx, Vy
def and_vx_vy(cpu, opcode):
    cpu.load_register(opcode.x, cpu.read_register(opcode.x) & cpu.read_register(opcode.y))
    cpu.pc.advance()


# 8xy3 - XOR Vx, Vy
def xor_vx_vy(cpu, opcode):
    cpu.load_register(opcode.x, cpu.read_register(opcode.x) ^ cpu.read_register(opcode.y))
    cpu.pc.advance()


# 8xy4 - ADD Vx, Vy; VF = carry
def add_vx_vy(cpu, opcode):
    # Operands are read before VF is written, x or y may be F
    vx = cpu.read_register(opcode.x)
    vy = cpu.read_register(opcode.y)
    result = vx + vy
    cpu.load_register(opcode.x, result & 0xFF)
    cpu.load_flag(result > 0xFF)
    cpu.pc.advance()


# 8xy5 - SUB Vx, Vy; VF = NOT borrow
def sub_vx_vy(cpu, opcode):
    vx = cpu.read_register(opcode.x)
    vy = cpu.read_register(opcode.y)
    cpu.load_register(opcode.x, (vx - vy) & 0xFF)
    cpu.load_flag(vx >= vy)
    cpu.pc.advance()


# 8xy6 - SHR Vx, Vy; VF = bit shifted out
def shr_vx_vy(cpu, opcode):
    vy = cpu.read_register(opcode.y)
    cpu.load_register(opcode.x, vy >> 1)
    cpu.load_flag(vy & 0x01)
    cpu.pc.advance()


# 8xy7 - SUBN Vx, Vy; VF = NOT borrow
def subn_vx_vy(cpu, opcode):
    vx = cpu.read_register(opcode.x)
    vy = cpu.read_register(opcode.y)
    cpu.load_register(opcode.x, (vy - vx) & 0xFF)
    cpu.load_flag(vy >= vx)
    cpu.pc.advance()


# 8xyE - SHL Vx, Vy; VF = bit shifted out
def shl_vx_vy(cpu, opcode):
    vy = cpu.read_register(opcode.y)
    cpu.load_register(opcode.x, (vy << 1) & 0xFF)
    cpu.load_flag(vy & 0x80)
    cpu.pc.advance()


# 9xy0 - SNE Vx, Vy
def skip_not_equal_vx_vy(cpu, opcode):
    _skip_if(cpu, cpu.read_register(opcode.x) != cpu.read_register(opcode.y))


# Annn - LD I, addr
def load_i_addr(cpu, opcode):
    cpu.i.set(opcode.nnn)
    cpu.pc.advance()


# Bnnn - JP V0, addr
def jump_v0_addr(cpu, opcode):
    cpu.pc.set(opcode.nnn + cpu.read_register(0x0))
    cpu.stats['jumps_taken'] += 1


# Cxkk - RND Vx, byte
def rand_vx_byte(cpu, opcode):
    random_byte = int(cpu.rng.integers(0, 256))
    cpu.load_register(opcode.x, random_byte & opcode.kk)
    cpu.stats['random_generations'] += 1
    cpu.pc.advance()


# Dxyn - DRW Vx, Vy, nibble
def draw_vx_vy_n(cpu, opcode):
    vx = cpu.read_register(opcode.x)
    vy = cpu.read_register(opcode.y)
    sprite = cpu.memory.read_range(cpu.i.current, opcode.n)

    collision, changed = draw_sprite(cpu.display, sprite, vx, vy)

    cpu.load_flag(collision)
    cpu.draw = cpu.draw or changed
    cpu.stats['display_writes'] += 1
    if collision:
        cpu.stats['sprite_collisions'] += 1
    cpu.pc.advance()


# Ex9E - SKP Vx, ExA1 - SKNP Vx, Fx0A - LD Vx, K
# Input is owned by the host; these only move past the instruction.
def skip_key_pressed_vx(cpu, opcode):
    cpu.pc.advance()


def skip_key_not_pressed_vx(cpu, opcode):
    cpu.pc.advance()


def load_vx_key(cpu, opcode):
    cpu.pc.advance()


# Fx07 - LD Vx, DT
def load_vx_dt(cpu, opcode):
    cpu.load_register(opcode.x, cpu.dt.current)
    cpu.pc.advance()


# Fx15 - LD DT, Vx
def load_dt_vx(cpu, opcode):
    cpu.dt.set(cpu.read_register(opcode.x))
    cpu.stats['timer_sets'] += 1
    cpu.pc.advance()


# Fx18 - LD ST, Vx
def load_st_vx(cpu, opcode):
    cpu.st.set(cpu.read_register(opcode.x))
    cpu.stats['timer_sets'] += 1
    cpu.pc.advance()


# Fx1E - ADD I, Vx
def add_i_vx(cpu, opcode):
    cpu.i.set((cpu.i.current + cpu.read_register(opcode.x)) % MEMORY_SIZE)
    cpu.pc.advance()


# Fx29 - LD F, Vx
def load_i_vx_font(cpu, opcode):
    cpu.i.set(glyph_address(cpu.read_register(opcode.x)))
    cpu.pc.advance()


# Fx33 - LD B, Vx
def load_bcd_vx(cpu, opcode):
    vx = cpu.read_register(opcode.x)
    cpu.memory.write_range(cpu.i.current, [vx // 100, vx % 100 // 10, vx % 10])
    cpu.pc.advance()


# Fx55 - LD [I], Vx
def load_through_vx(cpu, opcode):
    count = opcode.x + 1
    i = cpu.i.current
    cpu.memory.write_range(i, [cpu.read_register(r) for r in range(count)])
    cpu.i.set(i + count)
    cpu.pc.advance()


# Fx65 - LD Vx, [I]
def read_through_vx(cpu, opcode):
    count = opcode.x + 1
    i = cpu.i.current
    for r, byte in enumerate(cpu.memory.read_range(i, count)):
        cpu.load_register(r, byte)
    cpu.i.set(i + count)
    cpu.pc.advance()
