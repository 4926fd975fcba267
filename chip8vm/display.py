import numpy as np

from .constants import HEIGHT, WIDTH


class Display:
    """64x32 monochrome framebuffer, one byte (0 or 1) per pixel.

    Pixels are stored row-major, index = y * WIDTH + x. ``dirty`` is raised by
    every mutation and lowered by whoever presents the frame.
    """

    def __init__(self):
        self.vram = bytearray(WIDTH * HEIGHT)
        self.dirty = True

    def clear(self):
        self.vram[:] = bytes(len(self.vram))
        self.dirty = True

    def pixel(self, x, y):
        return bool(self.vram[y * WIDTH + x])

    def draw_sprite(self, x, y, rows):
        """XOR ``rows`` (one byte per row, MSB leftmost) onto the screen.

        The start position wraps, the sprite itself is clipped at the right and
        bottom edges. Returns True if any lit pixel was turned off.
        """
        x %= WIDTH
        y %= HEIGHT
        vram = self.vram
        collision = False
        for sprite in rows:
            col = x
            base = y * WIDTH
            for bit in range(7, -1, -1):
                if sprite & (1 << bit):
                    idx = base + col
                    if vram[idx]:
                        collision = True
                    vram[idx] ^= 1
                col += 1
                # stop drawing the row at the right screen edge
                if col >= WIDTH:
                    break
            y += 1
            if y >= HEIGHT:
                break
        self.dirty = True
        return collision

    def as_array(self):
        return np.frombuffer(bytes(self.vram), dtype=np.uint8).reshape(HEIGHT, WIDTH).astype(bool)

    def mark_clean(self):
        self.dirty = False
