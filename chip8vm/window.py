import logging

import numpy as np
import pyglet
from pyglet.window import key

from .audio import Beeper
from .errors import Chip8Error
from .timing import Pacer, CPU_HZ, TIMER_HZ

log = logging.getLogger(__name__)

# map binding keys
KEYMAP = {
    key._1: 0x1, key._2: 0x2, key._3: 0x3, key._4: 0xC,
    key.Q: 0x4, key.W: 0x5, key.E: 0x6, key.R: 0xD,
    key.A: 0x7, key.S: 0x8, key.D: 0x9, key.F: 0xE,
    key.Z: 0xA, key.X: 0x0, key.C: 0xB, key.V: 0xF,
}


class Chip8Window(pyglet.window.Window):
    """Presents a running Cpu: keyboard in, framebuffer and beep out.

    A single clock callback at TIMER_HZ drives everything: the pacer runs
    whatever instructions are owed, the timers tick once, and the screen is
    redrawn.
    """

    def __init__(self, cpu, scale=10, rate=CPU_HZ, max_backlog=0.25, caption="CHIP-8 Emulator"):
        self.cpu = cpu
        self.machine = cpu.machine
        self.zoom = scale
        display = self.machine.display
        super().__init__(
            width=display.width * scale,
            height=display.height * scale,
            caption=caption,
            vsync=False
        )

        self.pacer = Pacer(cpu.step, rate=rate, max_backlog=max_backlog)
        self.beeper = Beeper()
        self.error = None

        # RGBA framebuffer at native resolution, upscaled with numpy.repeat on draw
        self._small_framebuf = np.zeros((display.height, display.width, 4), dtype=np.uint8)
        self._small_framebuf[..., 3] = 255
        self.image = pyglet.image.ImageData(
            self.width,
            self.height,
            'RGBA',
            bytes(self.width * self.height * 4)
        )

        pyglet.clock.schedule_interval(self.update, 1 / TIMER_HZ)
        self.pacer.reset()

    # timers and cpu
    def update(self, dt):
        if self.error is not None:
            return
        try:
            self.pacer.pump()
        except Chip8Error as err:
            self.fail(err)
            return
        self.machine.tick_timers()
        self.beeper.update(self.machine.sound_active)

    def fail(self, err):
        self.error = err
        log.error("Emulation error: %s", err)
        log.error("State: %s", self.machine.dump())
        self.on_close()

    # draw
    def on_draw(self):
        self.clear()
        # pyglet images are stored bottom row first
        lit = np.flipud(self.machine.display.pixels)
        self._small_framebuf[..., :3] = (lit * 255).astype(np.uint8)[..., None]
        scaled = np.repeat(np.repeat(self._small_framebuf, self.zoom, axis=0), self.zoom, axis=1)
        self.image.set_data('RGBA', self.width * 4, scaled.tobytes())
        self.image.blit(0, 0)

    # keyboard
    def on_key_press(self, symbol, modifiers):
        if symbol == key.ESCAPE:
            self.on_close()
        elif symbol == key.F1:
            root = logging.getLogger()
            root.setLevel(logging.INFO if root.level == logging.DEBUG else logging.DEBUG)
            log.info("Debug logging %s", "on" if root.level == logging.DEBUG else "off")
        elif symbol in KEYMAP:
            self.cpu.keypad.press(KEYMAP[symbol])

    def on_key_release(self, symbol, modifiers):
        if symbol in KEYMAP:
            self.cpu.keypad.release(KEYMAP[symbol])

    def on_deactivate(self):
        self.cpu.keypad.release_all()

    def on_close(self):
        pyglet.clock.unschedule(self.update)
        self.beeper.stop()
        super().on_close()
