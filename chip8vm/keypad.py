import numpy as np

from .constants import KEY_COUNT


class Keypad:
    """Hex keypad state, written by the input side and read by the CPU."""

    def __init__(self):
        self.keys = np.zeros(KEY_COUNT, dtype=np.uint8)

    def clear(self):
        self.keys[:] = 0

    def set(self, key, pressed):
        self.keys[key & 0xF] = 1 if pressed else 0

    def press(self, key):
        self.set(key, True)

    def release(self, key):
        self.set(key, False)

    def is_pressed(self, key):
        return bool(self.keys[key & 0xF])

    def first_pressed(self):
        for i in range(KEY_COUNT):
            if self.keys[i]:
                return i
        return None
