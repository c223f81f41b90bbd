"""
Bounds-checked address cursor used for PC, SP and I.
"""

from typing import Optional

from .errors import AddressOutOfRange

INSTRUCTION_SIZE = 2


class Pointer:
    """
    A cursor that may only ever hold an address inside its range.

    Stepping or setting outside the range raises AddressOutOfRange and
    leaves the cursor where it was - it never wraps or clamps.
    """

    def __init__(self, region: range, step_size: int = INSTRUCTION_SIZE, start: Optional[int] = None):
        if len(region) == 0:
            raise ValueError(f"Pointer range is empty: {region}")
        self.range = region
        self.step_size = step_size
        self.current = region.start
        if start is not None:
            self.set(start)

    def set(self, addr: int):
        if addr not in self.range:
            raise AddressOutOfRange(addr, self.range.start, self.range.stop)
        self.current = addr

    def advance(self):
        self.set(self.current + self.step_size)

    def retreat(self):
        self.set(self.current - self.step_size)

    def __int__(self) -> int:
        return self.current

    def __eq__(self, other) -> bool:
        if not isinstance(other, Pointer):
            return NotImplemented
        return (self.current, self.range, self.step_size) == (other.current, other.range, other.step_size)

    def __repr__(self) -> str:
        return (f"Pointer(current=0x{self.current:X}, "
                f"range=0x{self.range.start:X}..0x{self.range.stop:X}, step_size={self.step_size})")
