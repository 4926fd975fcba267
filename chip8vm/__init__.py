"""CHIP-8 virtual machine with a pyglet frontend.

The core (``VirtualMachine`` and its parts) has no pyglet dependency; the
window and audio modules are only imported by the command line entry point.
"""

from .constants import ENTRY_POINT, FONTSET, HEIGHT, MAX_ROM_SIZE, MEMORY_SIZE, WIDTH
from .decoder import Instruction, Op, decode, fields
from .errors import Chip8Error, RomLoadError, RomTooLarge, StackOverflow, StackUnderflow, VMNotRunning
from .vm import VirtualMachine, VMState, instructions_per_frame

__version__ = "0.1.0"
