"""CHIP-8 interpreter core and pyglet frontend."""

from .cpu import Cpu
from .display import Display
from .errors import (
    Chip8Error,
    DecodeError,
    MemoryAccessError,
    ProgramTooLargeError,
    StackOverflowError,
    StackUnderflowError,
)
from .keypad import Keypad
from .machine import Machine
from .quirks import Quirks
from .stack import Stack
from .timing import Pacer

__version__ = "0.1.0"
