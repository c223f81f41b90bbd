"""
Fatal error types raised by the CHIP-8 core.
None of these are recoverable: the machine has no trap handling, so the
owning run loop is expected to stop on the first one it sees.
"""

from typing import Optional


class Chip8Error(Exception):
    """Base class for every fatal machine condition"""


class AddressOutOfRange(Chip8Error, IndexError):
    """A cursor or byte access landed outside its owning range"""

    def __init__(self, addr: int, start: int, end: int):
        self.addr = addr
        self.start = start
        self.end = end
        super().__init__(f"Address 0x{addr:X} out of range (0x{start:X}..0x{end:X})")


class UnknownOpcode(Chip8Error):
    """The fetched word does not decode to any known instruction"""

    def __init__(self, code: int, address: Optional[int] = None):
        self.code = code
        self.address = address
        where = f" at PC=0x{address:03X}" if address is not None else ""
        super().__init__(f"Unknown opcode 0x{code:04X}{where}")


class RomTooLarge(Chip8Error, ValueError):
    """Program image does not fit in the region it is being loaded into"""

    def __init__(self, size: int, capacity: int):
        self.size = size
        self.capacity = capacity
        super().__init__(f"ROM too large: {size} bytes, max {capacity}")
