import threading


class Volume:
    """Tone gain set from keyboard input and read once per frame.

    The audio thread never reads this object: Beeper.update copies a
    snapshot into player.volume on the pyglet main thread, and that copy is
    the only value pyglet's audio worker sees.
    """

    def __init__(self, value=0.25):
        self._lock = threading.Lock()
        self._value = self._clamp(value)

    @staticmethod
    def _clamp(value):
        return min(1.0, max(0.0, float(value)))

    def get(self):
        with self._lock:
            return self._value

    def set(self, value):
        with self._lock:
            self._value = self._clamp(value)
            return self._value

    def adjust(self, delta):
        with self._lock:
            self._value = self._clamp(self._value + delta)
            return self._value
