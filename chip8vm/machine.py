import logging

from .display import Display
from .errors import MemoryAccessError, ProgramTooLargeError
from .stack import Stack, STACK_SIZE

log = logging.getLogger(__name__)

MEMORY_SIZE = 4096
NUM_REGISTERS = 16
PROGRAM_START = 0x200

# set fonts (binary pixel patterns)
FONT_START = 0x050
FONT_CHAR_SIZE = 5
FONTSET = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])  # notice 80 bytes
FONT_END = FONT_START + len(FONTSET)


class Machine:
    """Everything a CHIP-8 program can observe: memory, registers, stack,
    timers and the framebuffer."""

    def __init__(self, stack_size=STACK_SIZE):
        self.memory = bytearray(MEMORY_SIZE)
        self.memory[FONT_START:FONT_END] = FONTSET
        self.V = [0] * NUM_REGISTERS
        self.I = 0
        self.pc = PROGRAM_START
        self.stack = Stack(stack_size)
        self.delay = 0
        self.sound = 0
        self.display = Display()

    def load_program(self, data):
        data = bytes(data)
        room = MEMORY_SIZE - PROGRAM_START
        if len(data) > room:
            raise ProgramTooLargeError(
                f"program is {len(data)} bytes, only {room} fit above 0x{PROGRAM_START:03X}")
        self.memory[PROGRAM_START:PROGRAM_START + len(data)] = data
        log.info("Loaded %d byte program at 0x%03X", len(data), PROGRAM_START)

    def _check_range(self, address, length, what):
        if address < 0 or length < 0 or address + length > MEMORY_SIZE:
            raise MemoryAccessError(
                f"{what} of {length} byte(s) at 0x{address:X} is outside memory",
                address, length)

    def read(self, address, length):
        self._check_range(address, length, "read")
        return bytes(self.memory[address:address + length])

    # program stores never reach the built-in font; those bytes are dropped
    def write(self, address, data):
        data = bytes(data)
        self._check_range(address, len(data), "write")
        for offset, value in enumerate(data):
            target = address + offset
            if FONT_START <= target < FONT_END:
                log.debug("Ignored write to font at 0x%03X", target)
                continue
            self.memory[target] = value

    def fetch(self):
        hi, lo = self.read(self.pc, 2)
        return (hi << 8) | lo

    # called once per presentation tick (60 Hz)
    def tick_timers(self):
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1

    @property
    def sound_active(self):
        return self.sound > 0

    def dump(self):
        regs = " ".join(f"V{i:X}={v:02X}" for i, v in enumerate(self.V))
        return (f"pc={self.pc:03X} I={self.I:03X} delay={self.delay} sound={self.sound} "
                f"{self.stack!r} {regs}")
