import numpy as np

WIDTH, HEIGHT = 64, 32


class Display:
    """Monochrome framebuffer, indexed pixels[y, x]."""

    def __init__(self, width=WIDTH, height=HEIGHT):
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width), dtype=bool)

    def clear(self):
        self.pixels[:] = False

    def draw_sprite(self, x0, y0, rows):
        """XOR an 8-pixel-wide sprite onto the screen at (x0, y0).

        The origin must already be on screen. Sprites are clipped at the
        right and bottom edges, never wrapped. Returns True when any pixel
        was switched from on to off.
        """
        collision = False
        for row, sprite in enumerate(rows):
            y = y0 + row
            if y >= self.height:
                break
            for bit in range(8):
                x = x0 + bit
                if x >= self.width:
                    break
                if sprite & (0x80 >> bit):
                    if self.pixels[y, x]:
                        collision = True
                    self.pixels[y, x] = not self.pixels[y, x]
        return collision
