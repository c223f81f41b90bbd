"""
CHIP-8 execution core.

Owns the registers, the PC/SP/I cursors, the delay and sound timers, the
address space and a display sink. The host drives it one ``step()`` at a
time and reads ``exit``, ``crashed``, ``draw`` and ``beep`` afterwards.
"""

import logging
import time
from typing import Callable, Dict, List, Optional, Union

import numpy as np

from .disassembler import disassemble_instruction
from .dispatch import operation
from .display import Display, MemoryDisplay
from .errors import Chip8Error
from .font import CHIP8_FONT
from .memory import EXTERNAL_LAYOUT, INLINE_LAYOUT, Memory, as_bytes
from .opcode import Opcode
from .pointer import Pointer
from .timer import TIMER_HZ, Timer

REGISTER_COUNT = 16
FLAG_REGISTER = 0xF

DEFAULT_CONFIG = {
    'timer_hz': TIMER_HZ,  # delay/sound timer decay rate
    'trace': False,        # promote the per-instruction trace from DEBUG to INFO
    'seed': None,          # RND seed, None for OS entropy
}

STAT_KEYS = (
    'instructions_executed',
    'display_writes',
    'display_clears',
    'sprite_collisions',
    'subroutine_calls',
    'returns',
    'jumps_taken',
    'timer_sets',
    'random_generations',
)


class Chip8:
    """
    Single CHIP-8 processor.

    Passing ``display`` selects the external output mode (framebuffer owned
    by the sink); leaving it out keeps the framebuffer inline in memory.
    """

    def __init__(self, rom: Union[bytes, bytearray, np.ndarray] = b"",
                 display: Optional[Display] = None,
                 config: Optional[dict] = None,
                 clock: Callable[[], float] = time.monotonic,
                 rng: Optional[np.random.Generator] = None,
                 logger: Optional[logging.Logger] = None):
        self.config = dict(DEFAULT_CONFIG)
        if config:
            unknown = set(config) - set(DEFAULT_CONFIG)
            if unknown:
                raise ValueError(f"Unknown config keys: {sorted(unknown)}")
            self.config.update(config)

        self.logger = logger or logging.getLogger(__name__)
        self.clock = clock
        self.rng = rng if rng is not None else np.random.default_rng(self.config['seed'])
        self._external_display = display
        self.layout = EXTERNAL_LAYOUT if display is not None else INLINE_LAYOUT

        self.reset()
        self.load_rom(rom)

    def reset(self):
        """Reset the machine to power-on state; the ROM must be loaded again"""
        self.memory = Memory()
        self.memory.load(CHIP8_FONT, self.layout.font)

        if self._external_display is not None:
            self.display = self._external_display
        else:
            self.display = MemoryDisplay(self.memory, self.layout.display)
        self.display.clear()

        self.v = np.zeros(REGISTER_COUNT, dtype=np.uint8)
        self.pc = Pointer(self.layout.program)
        self.sp = Pointer(self.layout.stack)
        self.i = Pointer(self.layout.addressable)

        hz = self.config['timer_hz']
        self.dt = Timer(0, hz, self.clock)
        self.st = Timer(0, hz, self.clock)

        self.exit = False
        self.crashed = False
        self.draw = False
        self.beep = False
        self.stats = {key: 0 for key in STAT_KEYS}

    def load_rom(self, rom_data: Union[bytes, bytearray, np.ndarray]):
        """Load a program image at the start of the program region"""
        rom_data = as_bytes(rom_data)
        self.memory.load(rom_data, self.layout.program)

        if rom_data:
            self.logger.info("Loaded ROM: %d bytes, first instruction 0x%s",
                             len(rom_data), rom_data[:2].hex().upper())

    # Register and stack helpers used by the instruction set

    def read_register(self, register: int) -> int:
        return int(self.v[register])

    def load_register(self, register: int, value: int):
        self.v[register] = value

    def load_flag(self, flag):
        self.v[FLAG_REGISTER] = 1 if flag else 0

    def stack_push(self, addr: int):
        """Store addr at SP, high byte first, then advance SP"""
        current = self.sp.current
        self.sp.advance()
        self.memory.write(current, (addr & 0xFF00) >> 8)
        self.memory.write(current + 1, addr & 0x00FF)

    def stack_pop(self) -> int:
        """Retreat SP and return the address stored there"""
        self.sp.retreat()
        current = self.sp.current
        return (self.memory.read(current) << 8) | self.memory.read(current + 1)

    # Execution

    def fetch_opcode(self) -> Opcode:
        current = self.pc.current
        return Opcode.from_bytes((self.memory.read(current), self.memory.read(current + 1)))

    def step(self) -> bool:
        """
        Execute one instruction and tick the timers.

        Returns False once the program has exited or crashed. Any Chip8Error
        marks the machine crashed and propagates to the caller.
        """
        if self.exit or self.crashed:
            return False

        self.draw = False
        address = self.pc.current
        opcode = None
        try:
            opcode = self.fetch_opcode()
            op = operation(opcode)
            self._trace(address, opcode)
            op(self, opcode)
        except Chip8Error:
            self.crashed = True
            self.logger.error("Fatal error executing %s at PC=0x%03X",
                              opcode if opcode is not None else "<fetch>", address)
            if self.logger.isEnabledFor(logging.DEBUG):
                self.logger.debug("Registers: %r\nStack:\n%s", self, self.memory.hexdump(self.layout.stack))
            raise

        self.stats['instructions_executed'] += 1
        self.update_timers()

        if self.exit:
            self.logger.info("Program exited at PC=0x%03X after %d instructions",
                             address, self.stats['instructions_executed'])
            return False
        return True

    def _trace(self, address: int, opcode: Opcode):
        level = logging.INFO if self.config['trace'] else logging.DEBUG
        if self.logger.isEnabledFor(level):
            mnemonic, operands, _ = disassemble_instruction(opcode.code)
            self.logger.log(level, "%03X  %04X  %-4s %s", address, opcode.code, mnemonic, operands)

    def update_timers(self):
        self.dt.tick()
        self.st.tick()
        self.beep = self.st.active()

    def run(self, max_cycles: int = 1000) -> int:
        """Step until exit, crash or max_cycles; returns instructions executed"""
        start = self.stats['instructions_executed']
        for _ in range(max_cycles):
            if not self.step():
                break
        return self.stats['instructions_executed'] - start

    # Output

    def display_data(self) -> List[bool]:
        """Framebuffer as a flat row-major list of booleans"""
        return self.display.pixels()

    def get_display(self) -> np.ndarray:
        """Framebuffer as a (height, width) array"""
        return self.display.as_array()

    def get_stats(self) -> Dict[str, int]:
        return self.stats.copy()

    def __repr__(self) -> str:
        registers = ' '.join(f"V{r:X}={int(self.v[r]):02X}" for r in range(REGISTER_COUNT))
        return (f"Chip8(pc=0x{self.pc.current:03X}, sp=0x{self.sp.current:03X}, "
                f"i=0x{self.i.current:03X}, dt={self.dt.current}, st={self.st.current}, "
                f"exit={self.exit}, {registers})")
