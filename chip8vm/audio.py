import logging

import pyglet
from pyglet.media import synthesis

log = logging.getLogger(__name__)


def generate_tone(frequency=440, duration=1.0, sample_rate=44100):
    wave = synthesis.Square(duration=duration, frequency=frequency, sample_rate=sample_rate)
    return pyglet.media.StaticSource(wave)


class Beeper:
    """Square wave that plays for as long as the sound timer is non-zero."""

    def __init__(self, volume, frequency=440):
        self.volume = volume
        self.player = pyglet.media.Player()
        self.player.queue(generate_tone(frequency=frequency))
        self.player.loop = True
        self.player.volume = volume.get()
        self.sound_playing = False

    def update(self, tone_active):
        # snapshot hand-off: pyglet's audio worker only ever reads player.volume
        self.player.volume = self.volume.get()
        if tone_active and not self.sound_playing:
            self.player.play()
            self.sound_playing = True
        elif not tone_active and self.sound_playing:
            self.player.pause()
            self.sound_playing = False

    def close(self):
        self.player.pause()
        self.player.delete()
