class Chip8Error(Exception):
    """Base class for everything the emulator raises."""


class RomLoadError(Chip8Error):
    pass


class RomTooLarge(RomLoadError):
    def __init__(self, size, limit):
        super().__init__(f"ROM is too big: {size} bytes, max allowed {limit}")
        self.size = size
        self.limit = limit


class StackOverflow(Chip8Error):
    pass


class StackUnderflow(Chip8Error):
    pass


class VMNotRunning(Chip8Error):
    pass
