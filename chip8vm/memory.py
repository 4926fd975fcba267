from .constants import ENTRY_POINT, FONTSET, MAX_ROM_SIZE, MEMORY_SIZE
from .errors import RomTooLarge

ADDRESS_MASK = MEMORY_SIZE - 1


class Memory:
    """4 KiB address space: font at 0..80, program from 0x200.

    Every access wraps modulo 4096 so an index register pointing past the
    end reads from the bottom of memory instead of raising.
    """

    def __init__(self):
        self.ram = bytearray(MEMORY_SIZE)
        self.reset()

    def reset(self):
        self.ram[:] = bytes(MEMORY_SIZE)
        self.ram[:len(FONTSET)] = FONTSET

    def load_program(self, data):
        data = bytes(data)
        if len(data) > MAX_ROM_SIZE:
            raise RomTooLarge(len(data), MAX_ROM_SIZE)
        self.reset()
        self.ram[ENTRY_POINT:ENTRY_POINT + len(data)] = data

    def read_byte(self, addr):
        return self.ram[addr & ADDRESS_MASK]

    def write_byte(self, addr, value):
        self.ram[addr & ADDRESS_MASK] = value & 0xFF

    def read_word(self, addr):
        # big endian
        return (self.ram[addr & ADDRESS_MASK] << 8) | self.ram[(addr + 1) & ADDRESS_MASK]

    def read_block(self, addr, length):
        return bytes(self.ram[(addr + i) & ADDRESS_MASK] for i in range(length))

    def write_block(self, addr, values):
        for i, value in enumerate(values):
            self.ram[(addr + i) & ADDRESS_MASK] = value & 0xFF
