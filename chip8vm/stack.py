import numpy as np

from .errors import StackOverflowError

STACK_SIZE = 16


class Stack:
    """Fixed-depth LIFO of 16-bit return addresses."""

    def __init__(self, capacity=STACK_SIZE):
        self.capacity = capacity
        self._slots = np.zeros(capacity, dtype=np.uint16)
        self.sp = 0

    def __len__(self):
        return self.sp

    def __repr__(self):
        entries = ", ".join(f"0x{int(v):03X}" for v in self._slots[:self.sp])
        return f"Stack([{entries}])"

    def push(self, value):
        if self.sp >= self.capacity:
            raise StackOverflowError(f"stack overflowed ({self.capacity} entries)")
        self._slots[self.sp] = value
        self.sp += 1

    # None means empty; the caller decides whether that is fatal
    def pop(self):
        if self.sp == 0:
            return None
        self.sp -= 1
        return int(self._slots[self.sp])
