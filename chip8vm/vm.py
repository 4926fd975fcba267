import logging
from enum import Enum

from .constants import TIMER_HZ
from .cpu import CPU
from .display import Display
from .errors import RomLoadError, RomTooLarge, StackOverflow, StackUnderflow, VMNotRunning
from .keypad import Keypad
from .memory import Memory
from .stack import CallStack
from .timers import TimerUnit

log = logging.getLogger(__name__)


class VMState(Enum):
    HALTED = "halted"
    RUNNING = "running"
    PAUSED = "paused"
    QUIT = "quit"


def instructions_per_frame(instructions_per_second, frame_hz=TIMER_HZ):
    """Instructions to run between two timer ticks, never fewer than one."""
    return max(1, round(instructions_per_second / frame_hz))


class VirtualMachine:
    """The whole machine: memory, registers, stack, screen, keypad, timers.

    A frame loop drives it by feeding key changes, calling ``run_frame`` once
    per 60 Hz tick and presenting ``display`` when it is dirty.
    """

    def __init__(self, rng=None):
        self.memory = Memory()
        self.stack = CallStack()
        self.display = Display()
        self.keypad = Keypad()
        self.timers = TimerUnit()
        self.cpu = CPU(self.memory, self.stack, self.display, self.keypad, self.timers, rng=rng)

        self.state = VMState.HALTED
        self.program = None
        self.rom_name = None
        self.cycle_count = 0

    # ---- loading ----
    def load(self, program, name=None):
        program = bytes(program)
        try:
            self.memory.load_program(program)
        except RomTooLarge:
            self.state = VMState.HALTED
            raise
        self.program = program
        self.rom_name = name
        self._reset_state()
        self.state = VMState.RUNNING
        log.info("Loaded %s (%d bytes)", name or "program", len(program))

    def load_file(self, path):
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            self.state = VMState.HALTED
            raise RomLoadError(f"Failed to load rom file {path}: {e}") from e
        self.load(data, name=str(path))

    def reload(self):
        """Soft reset: load the same program again, keypad untouched."""
        if self.program is None:
            raise RomLoadError("nothing loaded")
        self.load(self.program, name=self.rom_name)

    def reset(self):
        self.reload()
        self.keypad.clear()

    def _reset_state(self):
        self.cpu.reset()
        self.stack.clear()
        self.timers.reset()
        self.display.clear()
        self.cycle_count = 0

    # ---- state machine ----
    @property
    def running(self):
        return self.state is VMState.RUNNING

    def toggle_pause(self):
        if self.state is VMState.RUNNING:
            self.state = VMState.PAUSED
            log.info("= PAUSED =")
        elif self.state is VMState.PAUSED:
            self.state = VMState.RUNNING
            log.info("= RESUMED =")
        return self.state

    def quit(self):
        self.state = VMState.QUIT

    @property
    def awaiting_key(self):
        """Register index a pending FX0A will store into, or None."""
        return self.cpu.awaiting_key

    @property
    def tone_active(self):
        return self.timers.tone_active

    # ---- execution ----
    def step(self):
        if self.state is not VMState.RUNNING:
            raise VMNotRunning(f"step() while {self.state.value}")
        try:
            ins = self.cpu.step()
        except (StackOverflow, StackUnderflow):
            self.state = VMState.HALTED
            log.error("Halted at pc=0x%03X", self.cpu.pc)
            raise
        self.cycle_count += 1
        return ins

    def tick_timers(self):
        return self.timers.tick()

    def run_frame(self, count):
        """Run ``count`` instructions then tick the timers once.

        Returns the tone flag for this frame. Does nothing while paused.
        """
        if self.state is not VMState.RUNNING:
            return self.timers.tone_active
        for _ in range(count):
            self.step()
        return self.tick_timers()

    # ---- input ----
    def press_key(self, key):
        self.keypad.press(key)

    def release_key(self, key):
        self.keypad.release(key)
