class TimerUnit:
    """Delay and sound timers, both counting down once per 60 Hz tick."""

    def __init__(self):
        self.delay = 0
        self.sound = 0

    def reset(self):
        self.delay = 0
        self.sound = 0

    @property
    def tone_active(self):
        return self.sound > 0

    def tick(self):
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1
        return self.tone_active
