import random

import pytest

from chip8vm import Cpu, Machine, Quirks


def assemble(*words):
    program = bytearray()
    for word in words:
        program += word.to_bytes(2, "big")
    return bytes(program)


@pytest.fixture
def make_cpu():
    def factory(*words, rng=None, **quirks):
        machine = Machine()
        machine.load_program(assemble(*words))
        return Cpu(machine, Quirks(**quirks), rng=rng or random.Random(0))
    return factory


def run(cpu, steps):
    for _ in range(steps):
        cpu.step()
    return cpu.machine
