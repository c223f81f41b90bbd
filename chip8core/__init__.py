"""
chip8core - CHIP-8 instruction execution core.
"""

from .cpu import Chip8, DEFAULT_CONFIG
from .display import ArrayDisplay, Display, MemoryDisplay, draw_sprite
from .errors import AddressOutOfRange, Chip8Error, RomTooLarge, UnknownOpcode
from .memory import EXTERNAL_LAYOUT, INLINE_LAYOUT, Layout, Memory
from .opcode import Opcode
from .pointer import Pointer
from .timer import Timer

__version__ = "0.1.0"

__all__ = [
    "Chip8", "DEFAULT_CONFIG",
    "ArrayDisplay", "Display", "MemoryDisplay", "draw_sprite",
    "AddressOutOfRange", "Chip8Error", "RomTooLarge", "UnknownOpcode",
    "EXTERNAL_LAYOUT", "INLINE_LAYOUT", "Layout", "Memory",
    "Opcode", "Pointer", "Timer",
]
