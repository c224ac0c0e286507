# Fatal conditions raised by the interpreter.
# Register arithmetic never raises: wraparound and flags are defined behaviour.


class Chip8Error(Exception):
    """Base class for anything that stops a run.

    Cpu.step() fills in ``pc`` and ``opcode`` for the faulting instruction
    so the host can report where the program went wrong.
    """

    def __init__(self, message, pc=None, opcode=None):
        super().__init__(message)
        self.message = message
        self.pc = pc
        self.opcode = opcode

    def __str__(self):
        if self.pc is None:
            return self.message
        if self.opcode is None:
            return f"{self.message} (pc={self.pc:03X})"
        return f"{self.message} (opcode {self.opcode:04X} at pc={self.pc:03X})"


class DecodeError(Chip8Error):
    pass


class MemoryAccessError(Chip8Error):
    def __init__(self, message, address, length=1, **kwargs):
        super().__init__(message, **kwargs)
        self.address = address
        self.length = length


class StackOverflowError(Chip8Error):
    pass


class StackUnderflowError(Chip8Error):
    pass


class ProgramTooLargeError(Chip8Error):
    pass
