"""SaveCadence — decides after which processed items the checkpoint is written."""


class SaveCadence:
    """Signals a save after every `every` recorded items.

    every=1 saves after each item. Callers flush whatever is pending when a
    phase ends or aborts.
    """

    def __init__(self, every: int) -> None:
        if every < 1:
            raise ValueError("every must be >= 1")
        self._every = every
        self._pending = 0

    @property
    def pending(self) -> int:
        return self._pending

    def record(self) -> bool:
        """Count one processed item; return True when a save is due."""
        self._pending += 1
        if self._pending >= self._every:
            self._pending = 0
            return True
        return False

    def flushed(self) -> None:
        self._pending = 0
