"""
Monochrome 64x32 display surfaces and the XOR sprite blit.

Two output modes share one interface:
- MemoryDisplay keeps the framebuffer inside the address space
  (8 bytes per row, most significant bit is the leftmost pixel).
- ArrayDisplay is an externally owned numpy surface.
Both report pixels in row-major order, 64 wide and 32 tall.
"""

from typing import List, Tuple

import numpy as np

from .memory import Memory

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32
DISPLAY_PIXELS = DISPLAY_WIDTH * DISPLAY_HEIGHT
SPRITE_WIDTH = 8
ROW_BYTES = DISPLAY_WIDTH // SPRITE_WIDTH
FRAMEBUFFER_SIZE = DISPLAY_PIXELS // 8


class Display:
    """Interface every display sink implements"""

    width = DISPLAY_WIDTH
    height = DISPLAY_HEIGHT

    def get_pixel(self, x: int, y: int) -> bool:
        raise NotImplementedError

    def xor_pixel(self, x: int, y: int) -> bool:
        """Flip one pixel. Returns True if it was on (a collision)."""
        raise NotImplementedError

    def clear(self):
        raise NotImplementedError

    def xor_byte(self, byte_x: int, y: int, bits: int) -> bool:
        """XOR 8 horizontal pixels starting at column byte_x * 8"""
        collision = False
        for col in range(SPRITE_WIDTH):
            if bits & (0x80 >> col):
                collision |= self.xor_pixel(byte_x * SPRITE_WIDTH + col, y)
        return collision

    def pixels(self) -> List[bool]:
        """Row-major snapshot"""
        return [self.get_pixel(x, y) for y in range(self.height) for x in range(self.width)]

    def as_array(self) -> np.ndarray:
        return np.array(self.pixels(), dtype=np.uint8).reshape(self.height, self.width)


class ArrayDisplay(Display):
    """Framebuffer held in a (height, width) uint8 array"""

    def __init__(self):
        self.buffer = np.zeros((self.height, self.width), dtype=np.uint8)

    def get_pixel(self, x: int, y: int) -> bool:
        return bool(self.buffer[y, x])

    def xor_pixel(self, x: int, y: int) -> bool:
        was_on = bool(self.buffer[y, x])
        self.buffer[y, x] ^= 1
        return was_on

    def xor_byte(self, byte_x: int, y: int, bits: int) -> bool:
        start = byte_x * SPRITE_WIDTH
        row = np.unpackbits(np.array([bits], dtype=np.uint8))
        segment = self.buffer[y, start:start + SPRITE_WIDTH]
        collision = bool((segment & row).any())
        segment ^= row
        return collision

    def clear(self):
        self.buffer.fill(0)

    def pixels(self) -> List[bool]:
        return self.buffer.astype(bool).ravel().tolist()

    def as_array(self) -> np.ndarray:
        return self.buffer.copy()


class MemoryDisplay(Display):
    """Framebuffer packed into a region of the machine's own memory"""

    def __init__(self, memory: Memory, region: range):
        if len(region) != FRAMEBUFFER_SIZE:
            raise ValueError(
                f"Display region must be {FRAMEBUFFER_SIZE} bytes, got {len(region)}")
        self.memory = memory
        self.region = region

    def _addr(self, byte_x: int, y: int) -> int:
        return self.region.start + y * ROW_BYTES + byte_x

    def get_pixel(self, x: int, y: int) -> bool:
        byte = self.memory.read(self._addr(x // SPRITE_WIDTH, y))
        return bool((byte >> (7 - x % SPRITE_WIDTH)) & 1)

    def xor_pixel(self, x: int, y: int) -> bool:
        return self.xor_byte(x // SPRITE_WIDTH, y, 0x80 >> (x % SPRITE_WIDTH))

    def xor_byte(self, byte_x: int, y: int, bits: int) -> bool:
        addr = self._addr(byte_x, y)
        old = self.memory.read(addr)
        self.memory.write(addr, old ^ bits)
        return (old & bits) != 0

    def clear(self):
        self.memory.data[self.region.start:self.region.stop] = 0

    def _unpacked(self) -> np.ndarray:
        return np.unpackbits(self.memory.data[self.region.start:self.region.stop])

    def pixels(self) -> List[bool]:
        return self._unpacked().astype(bool).tolist()

    def as_array(self) -> np.ndarray:
        return self._unpacked().reshape(self.height, self.width)


def draw_sprite(display: Display, sprite: bytes, vx: int, vy: int) -> Tuple[bool, bool]:
    """
    XOR-blit sprite rows at (vx, vy), wrapping on both axes.

    A row that is not byte aligned is split into a right-shifted part for
    the byte under vx and a left-shifted remainder for the next byte.

    Returns (collision, changed): collision if any pixel went from on to
    off, changed if any pixel was written at all.
    """
    row_bytes = display.width // SPRITE_WIDTH
    byte_x = (vx // SPRITE_WIDTH) % row_bytes
    offset = vx % SPRITE_WIDTH

    collision = False
    changed = False
    for row, bits in enumerate(sprite):
        y = (vy + row) % display.height
        if offset == 0:
            parts = ((byte_x, bits),)
        else:
            parts = (
                (byte_x, bits >> offset),
                ((byte_x + 1) % row_bytes, (bits << (SPRITE_WIDTH - offset)) & 0xFF),
            )
        for part_x, part in parts:
            if part:
                collision |= display.xor_byte(part_x, y, part)
                changed = True
    return collision, changed
