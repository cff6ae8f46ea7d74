"""Rolling window of recorded estimates and their running statistics."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Deque, Dict, Iterator

from ..estimator.estimator import Estimate

DEFAULT_MAX_DATA_POINTS = 50


@dataclass(frozen=True)
class HistoryEntry:
    sequence: int
    label: str
    temperature: float
    pressure: float
    estimate: Estimate

    @property
    def enthalpy(self) -> float:
        return self.estimate.enthalpy

    def as_dict(self) -> Dict[str, Any]:
        return {
            "sequence": self.sequence,
            "label": self.label,
            "temperature": self.temperature,
            "pressure": self.pressure,
            **self.estimate.as_dict(),
        }


@dataclass(frozen=True)
class HistoryStats:
    count: int
    average: float | None
    latest: float | None

    @property
    def has_data(self) -> bool:
        return self.count > 0

    def as_dict(self) -> Dict[str, Any]:
        return {"count": self.count, "average": self.average, "latest": self.latest}


class History:
    """Append-only, FIFO-trimmed sequence of estimates.

    Sequence numbers keep increasing across evictions and resets so that chart
    points stay distinguishable over a whole session.
    """

    def __init__(self, max_size: int = DEFAULT_MAX_DATA_POINTS) -> None:
        if isinstance(max_size, bool) or not isinstance(max_size, int) or max_size <= 0:
            raise ValueError(f"History size must be a positive integer, got {max_size!r}")
        self._entries: Deque[HistoryEntry] = deque(maxlen=max_size)
        self._next_sequence = 1

    @property
    def max_size(self) -> int:
        return self._entries.maxlen or 0

    def record(self, temperature: float, pressure: float, estimate: Estimate, label: str | None = None) -> HistoryEntry:
        entry = HistoryEntry(
            sequence=self._next_sequence,
            label=label if label is not None else datetime.now().strftime("%H:%M:%S"),
            temperature=float(temperature),
            pressure=float(pressure),
            estimate=estimate,
        )
        self._next_sequence += 1
        self._entries.append(entry)
        return entry

    def reset(self) -> None:
        self._entries.clear()

    def stats(self) -> HistoryStats:
        if not self._entries:
            return HistoryStats(count=0, average=None, latest=None)
        enthalpies = [entry.enthalpy for entry in self._entries]
        return HistoryStats(
            count=len(enthalpies),
            average=sum(enthalpies) / len(enthalpies),
            latest=enthalpies[-1],
        )

    def snapshot(self) -> tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    def series(self) -> Dict[str, list[Any]]:
        return {
            "labels": [entry.label for entry in self._entries],
            "enthalpies": [entry.enthalpy for entry in self._entries],
            "temperatures": [entry.temperature for entry in self._entries],
            "pressures": [entry.pressure for entry in self._entries],
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(self.snapshot())


__all__ = ["DEFAULT_MAX_DATA_POINTS", "History", "HistoryEntry", "HistoryStats"]
