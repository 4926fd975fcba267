import numpy as np


def unpack_rgba(color):
    return (
        (color >> 24) & 0xFF,
        (color >> 16) & 0xFF,
        (color >> 8) & 0xFF,
        color & 0xFF,
    )


def framebuffer_rgba(pixels, fg, bg, scale=1, pixel_border=False):
    """Turn a (height, width) bool grid into an upscaled RGBA image.

    Rows come out bottom-up, which is how pyglet.image.ImageData expects
    them. With ``pixel_border`` the last row and column of every scaled
    cell is painted in the background color.
    """
    pixels = np.asarray(pixels, dtype=bool)
    height, width = pixels.shape
    small = np.empty((height, width, 4), dtype=np.uint8)
    small[...] = unpack_rgba(bg)
    small[pixels] = unpack_rgba(fg)

    if scale != 1:
        image = np.repeat(np.repeat(small, scale, axis=0), scale, axis=1)
    else:
        image = small.copy()

    if pixel_border and scale > 2:
        edge = np.arange(height * scale) % scale == scale - 1
        image[edge, :, :] = unpack_rgba(bg)
        edge = np.arange(width * scale) % scale == scale - 1
        image[:, edge, :] = unpack_rgba(bg)

    return np.ascontiguousarray(np.flipud(image))
