"""Tk ``after``-based one-shot timer that restarts on every schedule call."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable


@dataclass
class Debouncer:
    """Run the latest scheduled callback once *delay_ms* has passed without a new schedule.

    Used to hide transient notifications: each new message restarts the timer.
    """

    widget: Any
    delay_ms: int = 3000
    _after_id: str | None = field(default=None, init=False)

    @property
    def pending(self) -> bool:
        return self._after_id is not None

    def cancel(self) -> None:
        if self._after_id is not None:
            self.widget.after_cancel(self._after_id)
            self._after_id = None

    def schedule(self, callback: Callable[[], None]) -> None:
        self.cancel()

        def _run() -> None:
            self._after_id = None
            callback()

        self._after_id = self.widget.after(self.delay_ms, _run)


__all__ = ["Debouncer"]
