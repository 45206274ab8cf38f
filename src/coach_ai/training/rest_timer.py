"""Rest countdown between sets."""

from typing import Optional


class RestTimer:
    """Counts down whole seconds; ``remaining`` is None when no rest is running.

    Usage:
        timer = RestTimer()
        timer.start(60)
        while timer.active:
            timer.tick()
    """

    def __init__(self, remaining: Optional[int] = None):
        self._remaining: Optional[int] = None
        if remaining is not None:
            self.start(remaining)

    @property
    def remaining(self) -> Optional[int]:
        return self._remaining

    @property
    def active(self) -> bool:
        return self._remaining is not None

    def start(self, seconds: int) -> None:
        if seconds < 0:
            raise ValueError("Rest duration cannot be negative")
        self._remaining = seconds if seconds > 0 else None

    def tick(self) -> Optional[int]:
        """Advance one second. The countdown clears on reaching zero."""
        if self._remaining is None:
            return None
        self._remaining -= 1
        if self._remaining <= 0:
            self._remaining = None
        return self._remaining

    def skip(self) -> None:
        self._remaining = None
