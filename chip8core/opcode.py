"""
16-bit CHIP-8 instruction word and its field accessors.

    family  x     y     n
    [15:12] [11:8][7:4] [3:0]
                  |-- kk ---|
            |------ nnn ----|
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Opcode:
    code: int

    def __post_init__(self):
        if not 0 <= self.code <= 0xFFFF:
            raise ValueError(f"Opcode must be a 16-bit word, got 0x{self.code:X}")

    @classmethod
    def from_bytes(cls, pair: Tuple[int, int]) -> 'Opcode':
        """Pack (high, low) big-endian"""
        hi, lo = pair
        return cls((int(hi) << 8) | int(lo))

    @property
    def family(self) -> int:
        return (self.code & 0xF000) >> 12

    @property
    def x(self) -> int:
        return (self.code & 0x0F00) >> 8

    @property
    def y(self) -> int:
        return (self.code & 0x00F0) >> 4

    @property
    def n(self) -> int:
        return self.code & 0x000F

    @property
    def kk(self) -> int:
        return self.code & 0x00FF

    @property
    def nnn(self) -> int:
        return self.code & 0x0FFF

    def __str__(self) -> str:
        return f"{self.code:04X}"

    def __repr__(self) -> str:
        return f"Opcode(0x{self.code:04X})"
