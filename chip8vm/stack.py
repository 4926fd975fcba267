import numpy as np

from .constants import STACK_DEPTH
from .errors import StackOverflow, StackUnderflow


class CallStack:
    """Fixed-depth return address stack with an explicit stack pointer."""

    def __init__(self, depth=STACK_DEPTH):
        self.slots = np.zeros(depth, dtype=np.uint16)
        self.sp = 0

    def __len__(self):
        return self.sp

    @property
    def depth(self):
        return self.sp

    @property
    def capacity(self):
        return len(self.slots)

    def clear(self):
        self.slots[:] = 0
        self.sp = 0

    def push(self, addr):
        if self.sp >= len(self.slots):
            raise StackOverflow(f"call stack full ({len(self.slots)} entries) pushing 0x{addr:03X}")
        self.slots[self.sp] = addr
        self.sp += 1

    def pop(self):
        if self.sp == 0:
            raise StackUnderflow("return with an empty call stack")
        self.sp -= 1
        return int(self.slots[self.sp])

    def peek(self):
        if self.sp == 0:
            return None
        return int(self.slots[self.sp - 1])
