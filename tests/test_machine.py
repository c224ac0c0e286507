import pytest

from chip8vm import Machine, MemoryAccessError, ProgramTooLargeError
from chip8vm.machine import FONT_END, FONT_START, FONTSET, MEMORY_SIZE, PROGRAM_START


def test_initial_state():
    machine = Machine()
    assert machine.pc == 0x200
    assert machine.I == 0
    assert machine.V == [0] * 16
    assert len(machine.memory) == 4096
    assert machine.memory[FONT_START:FONT_START + 80] == FONTSET
    assert not machine.display.pixels.any()


def test_load_program_at_entry_point():
    machine = Machine()
    machine.load_program(b"\x00\xE0\x12\x00")
    assert machine.memory[0x200:0x204] == b"\x00\xE0\x12\x00"
    assert machine.fetch() == 0x00E0


def test_program_filling_memory_exactly_fits():
    machine = Machine()
    machine.load_program(b"\xAA" * (MEMORY_SIZE - PROGRAM_START))
    assert machine.memory[-1] == 0xAA


def test_oversized_program_is_refused_before_copying():
    machine = Machine()
    with pytest.raises(ProgramTooLargeError):
        machine.load_program(b"\xAA" * (MEMORY_SIZE - PROGRAM_START + 1))
    assert machine.memory[PROGRAM_START] == 0


@pytest.mark.parametrize("address,length", [(4095, 2), (4096, 1), (-1, 1)])
def test_reads_outside_memory_fail(address, length):
    with pytest.raises(MemoryAccessError) as excinfo:
        Machine().read(address, length)
    assert excinfo.value.address == address


def test_write_past_end_fails():
    with pytest.raises(MemoryAccessError):
        Machine().write(0xFFE, [1, 2, 3])


def test_fetch_past_end_fails():
    machine = Machine()
    machine.pc = 0xFFF
    with pytest.raises(MemoryAccessError):
        machine.fetch()


def test_timers_count_down_and_saturate():
    machine = Machine()
    machine.delay = 2
    machine.sound = 1
    machine.tick_timers()
    assert (machine.delay, machine.sound) == (1, 0)
    assert not machine.sound_active
    machine.tick_timers()
    machine.tick_timers()
    assert (machine.delay, machine.sound) == (0, 0)


def test_delay_timer_at_zero_stays_zero():
    machine = Machine()
    machine.tick_timers()
    assert machine.delay == 0


def test_dump_names_registers_and_stack():
    machine = Machine()
    machine.V[0xA] = 0x3C
    machine.stack.push(0x202)
    dump = machine.dump()
    assert "pc=200" in dump
    assert "VA=3C" in dump
    assert "0x202" in dump


def test_writes_to_font_are_ignored():
    machine = Machine()
    machine.write(FONT_START - 1, [0x11, 0x22])
    assert machine.memory[FONT_START - 1] == 0x11
    assert machine.memory[FONT_START:FONT_END] == FONTSET
