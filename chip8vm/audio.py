import pyglet
from pyglet.media import synthesis


class Beeper:
    """Plays a short sine tone whenever the sound timer is running.

    At most one Player is alive at a time; it is deleted when its tone ends,
    when a new tone replaces it, or on stop().
    """

    def __init__(self, frequency=440, duration=0.2, sample_rate=44100):
        self.frequency = frequency
        self.duration = duration
        self.sample_rate = sample_rate
        self.sound_playing = False
        self.player = None

    def update(self, active):
        if active and not self.sound_playing:
            self._play_beep()
        elif not active and self.player is not None:
            self.stop()

    def _play_beep(self):
        self.stop()
        wave = synthesis.Sine(duration=self.duration, frequency=self.frequency,
                              sample_rate=self.sample_rate)
        player = pyglet.media.Player()
        player.queue(wave)
        player.play()
        self.player = player
        self.sound_playing = True

        def on_eos():
            if self.player is player:
                self.stop()

        player.on_eos = on_eos

    def stop(self):
        if self.player is not None:
            self.player.delete()
            self.player = None
        self.sound_playing = False
