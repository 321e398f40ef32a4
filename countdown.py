"""
Auto-commit countdown (dwell select).
"""


class CountdownTimer:
    """
    Tick counter that commits the current choice when it runs out.

    Started at ``interval`` it needs ``interval`` ticks to reach zero; the
    following tick fires ``on_commit`` once and starts a fresh countdown.
    """

    def __init__(self, interval, on_commit):
        self.interval = interval
        self.on_commit = on_commit
        self.remaining = interval

    def tick(self):
        if self.remaining > 0:
            self.remaining -= 1
            return
        self.remaining = self.interval
        self.on_commit()

    def reset(self):
        """Start over without committing."""
        self.remaining = self.interval

    def seconds(self, ticks_per_second):
        """Whole seconds shown to the user (never 0 while counting)."""
        return self.remaining // ticks_per_second + 1
