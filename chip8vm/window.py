# Frame loop: pyglet handles the window, keyboard, clock and sound.
# Every 1/60 s we run a batch of instructions, tick the timers once, gate
# the beeper and, when the framebuffer changed, rebuild the screen image.

import logging

import pyglet
from pyglet.window import key

from .constants import HEIGHT, TIMER_HZ, WIDTH
from .errors import Chip8Error
from .render import framebuffer_rgba
from .vm import VMState, instructions_per_frame

log = logging.getLogger(__name__)

#map binding keys
KEYMAP = {
    key._1: 0x1, key._2: 0x2, key._3: 0x3, key._4: 0xC,
    key.Q: 0x4, key.W: 0x5, key.E: 0x6, key.R: 0xD,
    key.A: 0x7, key.S: 0x8, key.D: 0x9, key.F: 0xE,
    key.Z: 0xA, key.X: 0x0, key.C: 0xB, key.V: 0xF,
}

VOLUME_STEP = 0.05


class Chip8Window(pyglet.window.Window):

    def __init__(self, vm, config, volume, beeper=None):
        self.window_width = WIDTH * config.scale
        self.window_height = HEIGHT * config.scale
        super().__init__(
            width=self.window_width,
            height=self.window_height,
            caption=f"CHIP-8 Emulator - {vm.rom_name}",
            resizable=False,
            vsync=False,
        )
        self.vm = vm
        self.config = config
        self.volume = volume
        self.beeper = beeper
        self.ipf = instructions_per_frame(config.instructions_per_second)

        self.image = pyglet.image.ImageData(
            self.window_width,
            self.window_height,
            'RGBA',
            self._render(),
        )

        # Performance tracking
        self._fps_counter = 0
        self._cycle_mark = 0
        self._bench_time = pyglet.clock.get_default().time()
        self.fps_label = pyglet.text.Label(
            "FPS: 0", font_size=12, x=5, y=self.window_height - 15,
            anchor_x='left', anchor_y='center', color=(255, 255, 255, 255))
        self.ips_label = pyglet.text.Label(
            "Instructions/s: 0", font_size=12, x=5, y=self.window_height - 30,
            anchor_x='left', anchor_y='center', color=(255, 255, 255, 255))

        pyglet.clock.schedule_interval(self.update, 1 / TIMER_HZ)
        if config.show_hud:
            pyglet.clock.schedule_interval(self._update_bench, 1.0)

    def _render(self):
        pixels = framebuffer_rgba(
            self.vm.display.as_array(),
            self.config.fg_color,
            self.config.bg_color,
            scale=self.config.scale,
            pixel_border=self.config.pixel_border,
        )
        self.vm.display.mark_clean()
        return pixels.tobytes()

    # ---- frame ----
    def update(self, dt):
        if self.vm.state is VMState.QUIT:
            self.close()
            return
        try:
            tone = self.vm.run_frame(self.ipf)
        except Chip8Error as e:
            log.error("Emulation error: %s", e)
            self.close()
            return
        if self.beeper is not None:
            self.beeper.update(tone and self.vm.running)
        if self.vm.display.dirty:
            self.image.set_data('RGBA', self.window_width * 4, self._render())

    def _update_bench(self, dt):
        now = pyglet.clock.get_default().time()
        elapsed = now - self._bench_time
        if elapsed >= 1.0:
            cycles = self.vm.cycle_count - self._cycle_mark
            self.fps_label.text = f"FPS: {self._fps_counter / elapsed:.1f}"
            self.ips_label.text = f"Instructions/s: {max(cycles, 0) / elapsed:.0f}"
            self._fps_counter = 0
            self._cycle_mark = self.vm.cycle_count
            self._bench_time = now

    def on_draw(self):
        self.clear()
        self.image.blit(0, 0)
        if self.config.show_hud:
            self.fps_label.draw()
            self.ips_label.draw()
        self._fps_counter += 1

    # ---- keyboard ----
    def on_key_press(self, symbol, modifiers):
        if symbol == key.ESCAPE:
            self.close()
        elif symbol == key.SPACE:
            self.vm.toggle_pause()
        elif symbol == key.BACKSPACE:
            log.info("Reset %s", self.vm.rom_name)
            self.vm.reset()
            self._cycle_mark = 0
        elif symbol == key.O:
            log.info("Volume %.2f", self.volume.adjust(-VOLUME_STEP))
        elif symbol == key.P:
            log.info("Volume %.2f", self.volume.adjust(VOLUME_STEP))
        elif symbol == key.F1:
            logger = logging.getLogger("chip8vm")
            level = logging.INFO if logger.getEffectiveLevel() <= logging.DEBUG else logging.DEBUG
            logger.setLevel(level)
            log.info("Debug logging %s", "on" if level == logging.DEBUG else "off")
        elif symbol in KEYMAP:
            self.vm.press_key(KEYMAP[symbol])

    def on_key_release(self, symbol, modifiers):
        if symbol in KEYMAP:
            self.vm.release_key(KEYMAP[symbol])

    def close(self):
        pyglet.clock.unschedule(self.update)
        pyglet.clock.unschedule(self._update_bench)
        if self.beeper is not None:
            self.beeper.close()
            self.beeper = None
        if self.vm.state is not VMState.QUIT:
            self.vm.quit()
        super().close()
