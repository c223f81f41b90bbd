"""
Shared fixtures: a hand-driven clock and processor factories.
"""

import numpy as np
import pytest

from chip8core import Chip8
from chip8core.dispatch import operation
from chip8core.opcode import Opcode


class FakeClock:
    """Monotonic clock that only moves when told to"""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_cpu(clock):
    def factory(rom=b"", **kwargs):
        kwargs.setdefault('clock', clock)
        kwargs.setdefault('rng', np.random.default_rng(1234))
        return Chip8(rom, **kwargs)
    return factory


@pytest.fixture
def cpu(make_cpu):
    return make_cpu()


@pytest.fixture
def execute():
    """Run a single instruction word directly through the dispatcher"""
    def run(cpu, code: int):
        opcode = Opcode(code)
        operation(opcode)(cpu, opcode)
    return run
