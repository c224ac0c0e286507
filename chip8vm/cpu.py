import logging
import random

from .errors import Chip8Error, DecodeError, StackUnderflowError
from .keypad import Keypad
from .machine import FONT_START, FONT_CHAR_SIZE
from .quirks import Quirks

log = logging.getLogger(__name__)


class Cpu:
    """Fetch/decode/execute over a Machine.

    Each step() runs exactly one instruction. The program counter is moved
    past the instruction before it executes, so jumps, calls and skips all
    work relative to the next instruction.
    """

    def __init__(self, machine, quirks=None, keypad=None, rng=None):
        self.machine = machine
        self.quirks = quirks if quirks is not None else Quirks()
        self.keypad = keypad if keypad is not None else Keypad()
        self.rng = rng if rng is not None else random.Random()
        self.cycles = 0

        # dispatch table, first match wins
        self.opcodes = [
            (0xFFFF, 0x00E0, self.op_CLS),
            (0xFFFF, 0x00EE, self.op_RET),

            (0xF000, 0x1000, self.op_JP),
            (0xF000, 0x2000, self.op_CALL),
            (0xF000, 0x3000, self.op_SE_Vx_kk),
            (0xF000, 0x4000, self.op_SNE_Vx_kk),
            (0xF00F, 0x5000, self.op_SE_Vx_Vy),
            (0xF000, 0x6000, self.op_LD_Vx_kk),
            (0xF000, 0x7000, self.op_ADD_Vx_kk),

            (0xF00F, 0x8000, self.op_LD_Vx_Vy),
            (0xF00F, 0x8001, self.op_OR),
            (0xF00F, 0x8002, self.op_AND),
            (0xF00F, 0x8003, self.op_XOR),
            (0xF00F, 0x8004, self.op_ADD),
            (0xF00F, 0x8005, self.op_SUB),
            (0xF00F, 0x8006, self.op_SHR),
            (0xF00F, 0x8007, self.op_SUBN),
            (0xF00F, 0x800E, self.op_SHL),

            (0xF00F, 0x9000, self.op_SNE_Vx_Vy),
            (0xF000, 0xA000, self.op_LD_I),
            (0xF000, 0xB000, self.op_JP_offset),
            (0xF000, 0xC000, self.op_RND),
            (0xF000, 0xD000, self.op_DRW),

            (0xF0FF, 0xE09E, self.op_SKP),
            (0xF0FF, 0xE0A1, self.op_SKNP),

            (0xF0FF, 0xF007, self.op_LD_Vx_DT),
            (0xF0FF, 0xF00A, self.op_WAITKEY),
            (0xF0FF, 0xF015, self.op_LD_DT_Vx),
            (0xF0FF, 0xF018, self.op_LD_ST_Vx),
            (0xF0FF, 0xF01E, self.op_ADD_I_Vx),
            (0xF0FF, 0xF029, self.op_FONT),
            (0xF0FF, 0xF033, self.op_BCD),
            (0xF0FF, 0xF055, self.op_STORE),
            (0xF0FF, 0xF065, self.op_LOAD),
        ]

    def decode(self, opcode):
        for mask, pattern, handler in self.opcodes:
            if (opcode & mask) == pattern:
                return handler
        raise DecodeError(f"unknown instruction {opcode:04X}")

    def step(self):
        m = self.machine
        pc = m.pc
        opcode = None
        try:
            opcode = m.fetch()
            m.pc += 2
            handler = self.decode(opcode)
            if log.isEnabledFor(logging.DEBUG):
                log.debug("%03X: %04X %s", pc, opcode, handler.__name__[3:])
            handler(opcode)
        except Chip8Error as err:
            err.pc = pc
            err.opcode = opcode
            raise
        self.cycles += 1

    def skip_if(self, condition):
        if condition:
            self.machine.pc += 2

    # opcode handlers
    def op_CLS(self, opcode):
        self.machine.display.clear()

    def op_RET(self, opcode):
        address = self.machine.stack.pop()
        if address is None:
            raise StackUnderflowError("return with an empty call stack")
        self.machine.pc = address

    def op_JP(self, opcode):
        self.machine.pc = opcode & 0x0FFF

    def op_CALL(self, opcode):
        # StackOverflowError propagates; a program nesting past 16 calls is broken
        self.machine.stack.push(self.machine.pc)
        self.machine.pc = opcode & 0x0FFF

    def op_SE_Vx_kk(self, opcode):
        x = (opcode >> 8) & 0xF
        self.skip_if(self.machine.V[x] == opcode & 0xFF)

    def op_SNE_Vx_kk(self, opcode):
        x = (opcode >> 8) & 0xF
        self.skip_if(self.machine.V[x] != opcode & 0xFF)

    def op_SE_Vx_Vy(self, opcode):
        x = (opcode >> 8) & 0xF
        y = (opcode >> 4) & 0xF
        self.skip_if(self.machine.V[x] == self.machine.V[y])

    def op_LD_Vx_kk(self, opcode):
        x = (opcode >> 8) & 0xF
        self.machine.V[x] = opcode & 0xFF

    def op_ADD_Vx_kk(self, opcode):
        x = (opcode >> 8) & 0xF
        V = self.machine.V
        V[x] = (V[x] + (opcode & 0xFF)) & 0xFF

    def op_LD_Vx_Vy(self, opcode):
        x = (opcode >> 8) & 0xF
        y = (opcode >> 4) & 0xF
        self.machine.V[x] = self.machine.V[y]

    def op_OR(self, opcode):
        x = (opcode >> 8) & 0xF
        y = (opcode >> 4) & 0xF
        self.machine.V[x] |= self.machine.V[y]

    def op_AND(self, opcode):
        x = (opcode >> 8) & 0xF
        y = (opcode >> 4) & 0xF
        self.machine.V[x] &= self.machine.V[y]

    def op_XOR(self, opcode):
        x = (opcode >> 8) & 0xF
        y = (opcode >> 4) & 0xF
        self.machine.V[x] ^= self.machine.V[y]

    # The flag instructions below read both operands before writing anything
    # and write VF last, so VF wins when x == 0xF.
    def op_ADD(self, opcode):
        x = (opcode >> 8) & 0xF
        y = (opcode >> 4) & 0xF
        V = self.machine.V
        total = V[x] + V[y]
        V[x] = total & 0xFF
        V[0xF] = 1 if total > 0xFF else 0

    def op_SUB(self, opcode):
        x = (opcode >> 8) & 0xF
        y = (opcode >> 4) & 0xF
        V = self.machine.V
        vx, vy = V[x], V[y]
        V[x] = (vx - vy) & 0xFF
        V[0xF] = 1 if vx >= vy else 0  # 1 means no borrow

    def op_SUBN(self, opcode):
        x = (opcode >> 8) & 0xF
        y = (opcode >> 4) & 0xF
        V = self.machine.V
        vx, vy = V[x], V[y]
        V[x] = (vy - vx) & 0xFF
        V[0xF] = 1 if vy >= vx else 0

    def _shift_source(self, opcode):
        x = (opcode >> 8) & 0xF
        y = (opcode >> 4) & 0xF
        if self.quirks.bitshift_ignores_vy:
            return x, self.machine.V[x]
        return x, self.machine.V[y]

    def op_SHR(self, opcode):
        x, value = self._shift_source(opcode)
        self.machine.V[x] = value >> 1
        self.machine.V[0xF] = value & 0x01

    def op_SHL(self, opcode):
        x, value = self._shift_source(opcode)
        self.machine.V[x] = (value << 1) & 0xFF
        self.machine.V[0xF] = (value >> 7) & 0x01

    def op_SNE_Vx_Vy(self, opcode):
        x = (opcode >> 8) & 0xF
        y = (opcode >> 4) & 0xF
        self.skip_if(self.machine.V[x] != self.machine.V[y])

    def op_LD_I(self, opcode):
        self.machine.I = opcode & 0x0FFF

    def op_JP_offset(self, opcode):
        # sets the program counter, not I
        x = (opcode >> 8) & 0xF
        register = x if self.quirks.jump_with_offset_uses_vx else 0
        self.machine.pc = (opcode & 0x0FFF) + self.machine.V[register]

    def op_RND(self, opcode):
        x = (opcode >> 8) & 0xF
        self.machine.V[x] = self.rng.randrange(256) & (opcode & 0xFF)

    def op_DRW(self, opcode):
        x = (opcode >> 8) & 0xF
        y = (opcode >> 4) & 0xF
        n = opcode & 0xF
        m = self.machine
        px = m.V[x] % m.display.width
        py = m.V[y] % m.display.height
        rows = m.read(m.I, n)
        m.V[0xF] = 0
        if m.display.draw_sprite(px, py, rows):
            m.V[0xF] = 1

    def op_SKP(self, opcode):
        x = (opcode >> 8) & 0xF
        self.skip_if(self.keypad.is_pressed(self.machine.V[x] & 0xF))

    def op_SKNP(self, opcode):
        x = (opcode >> 8) & 0xF
        self.skip_if(not self.keypad.is_pressed(self.machine.V[x] & 0xF))

    def op_LD_Vx_DT(self, opcode):
        x = (opcode >> 8) & 0xF
        self.machine.V[x] = self.machine.delay

    def op_WAITKEY(self, opcode):
        # no key down: rewind so this instruction is fetched again next step
        x = (opcode >> 8) & 0xF
        for key in range(16):
            if self.keypad.is_pressed(key):
                self.machine.V[x] = key
                return
        self.machine.pc -= 2

    def op_LD_DT_Vx(self, opcode):
        x = (opcode >> 8) & 0xF
        self.machine.delay = self.machine.V[x]

    def op_LD_ST_Vx(self, opcode):
        x = (opcode >> 8) & 0xF
        self.machine.sound = self.machine.V[x]

    def op_ADD_I_Vx(self, opcode):
        x = (opcode >> 8) & 0xF
        m = self.machine
        m.I = (m.I + m.V[x]) & 0xFFFF
        if not self.quirks.add_to_index_ignores_overflow and m.I > 0xFFF:
            m.V[0xF] = 1

    def op_FONT(self, opcode):
        x = (opcode >> 8) & 0xF
        self.machine.I = FONT_START + FONT_CHAR_SIZE * (self.machine.V[x] & 0xF)

    def op_BCD(self, opcode):
        x = (opcode >> 8) & 0xF
        v = self.machine.V[x]
        self.machine.write(self.machine.I, [v // 100, (v // 10) % 10, v % 10])

    def op_STORE(self, opcode):
        x = (opcode >> 8) & 0xF
        m = self.machine
        m.write(m.I, m.V[:x + 1])
        if self.quirks.store_and_load_increment_index:
            m.I += x

    def op_LOAD(self, opcode):
        x = (opcode >> 8) & 0xF
        m = self.machine
        m.V[:x + 1] = list(m.read(m.I, x + 1))
        if self.quirks.store_and_load_increment_index:
            m.I += x
