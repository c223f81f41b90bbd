"""
CHIP-8 address space.

4KB of flat byte storage split into four contiguous regions:
font glyphs, program image, call stack and (for the inline output mode)
the display framebuffer. Region boundaries are plain half-open ``range``
objects so ``addr in region`` and ``len(region)`` read naturally.
"""

from typing import NamedTuple, Optional, Union

import numpy as np

from .errors import AddressOutOfRange, RomTooLarge

# CHIP-8 System Constants
MEMORY_SIZE = 0x1000
PROGRAM_START = 0x200

FONT_RANGE = range(0x000, PROGRAM_START)


class Layout(NamedTuple):
    """Region table for one output mode"""
    font: range
    program: range
    stack: range
    display: range

    def validate(self) -> 'Layout':
        """Check the regions tile the address space in order"""
        font, program, stack, display = self
        ok = (
            font.start == 0
            and font.stop == program.start
            and program.start < stack.start
            and program.stop == stack.start
            and stack.start < display.start
            and stack.stop == display.start
            and display.start <= display.stop == MEMORY_SIZE
        )
        if not ok:
            raise ValueError(f"Invalid memory layout: {self}")
        return self

    @property
    def addressable(self) -> range:
        """Everything the index register may point at"""
        return range(self.font.start, self.display.stop)


# Framebuffer lives in the top 256 bytes of memory
INLINE_LAYOUT = Layout(
    font=FONT_RANGE,
    program=range(PROGRAM_START, 0xEA0),
    stack=range(0xEA0, 0xF00),
    display=range(0xF00, MEMORY_SIZE),
).validate()

# Framebuffer owned by an external sink, program region grows into the gap
EXTERNAL_LAYOUT = Layout(
    font=FONT_RANGE,
    program=range(PROGRAM_START, 0xFA0),
    stack=range(0xFA0, MEMORY_SIZE),
    display=range(MEMORY_SIZE, MEMORY_SIZE),
).validate()


def as_bytes(data: Union[bytes, bytearray, list, np.ndarray]) -> bytes:
    """Normalise a program image, rejecting array values that are not bytes"""
    if isinstance(data, np.ndarray):
        if data.size and (data.min() < 0 or data.max() > 0xFF):
            raise ValueError(
                f"Image values must be in 0..255, got {data.min()}..{data.max()}")
        return data.astype(np.uint8).tobytes()
    return bytes(data)


class Memory:
    """Flat byte buffer with bulk loading into regions"""

    def __init__(self, size: int = MEMORY_SIZE):
        if size <= 0:
            raise ValueError(f"Memory size must be positive, got {size}")
        self.size = size
        self.data = np.zeros(size, dtype=np.uint8)

    def __len__(self) -> int:
        return self.size

    def _check(self, addr: int, length: int = 1):
        if addr < 0 or addr + length > self.size:
            raise AddressOutOfRange(addr + max(length - 1, 0), 0, self.size)

    def read(self, addr: int) -> int:
        self._check(addr)
        return int(self.data[addr])

    def write(self, addr: int, value: int):
        self._check(addr)
        self.data[addr] = value

    def read_range(self, addr: int, length: int) -> bytes:
        self._check(addr, length)
        return self.data[addr:addr + length].tobytes()

    def write_range(self, addr: int, values: Union[bytes, bytearray, list]):
        self._check(addr, len(values))
        self.data[addr:addr + len(values)] = np.frombuffer(bytes(values), dtype=np.uint8)

    def load(self, data: Union[bytes, bytearray, np.ndarray], region: range) -> 'Memory':
        """
        Bulk-initialize a region: copy data to its start, zero the rest.

        Raises RomTooLarge (and leaves memory untouched) if data does not fit.
        """
        data = as_bytes(data)
        if len(data) > len(region):
            raise RomTooLarge(len(data), len(region))

        self.data[region.start:region.stop] = 0
        if data:
            self.data[region.start:region.start + len(data)] = np.frombuffer(data, dtype=np.uint8)
        return self

    def hexdump(self, region: Optional[range] = None) -> str:
        """Hex listing in 2-byte groups, 16 bytes per line"""
        region = region if region is not None else range(0, self.size)
        lines = []
        for line_start in range(region.start, region.stop, 16):
            chunk = self.data[line_start:min(line_start + 16, region.stop)]
            words = [
                ''.join(f"{int(b):02x}" for b in chunk[j:j + 2])
                for j in range(0, len(chunk), 2)
            ]
            lines.append(f"{line_start:03x}: " + ' '.join(words))
        return '\n'.join(lines)

    def __str__(self) -> str:
        return self.hexdump()
