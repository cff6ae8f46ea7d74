"""Session service: estimate, record history and collect user-facing notices."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Protocol

from .config import DEFAULT_SETTINGS, MEDIA
from .errors import InvalidInputError, OutOfRangeError
from .estimator.air_correlation import AirCorrelationEstimator
from .estimator.estimator import Estimate, SteamTableEstimator
from .history.history import History, HistoryEntry, HistoryStats
from .table.steam_table import ReferenceTable, resolve_table
from .utils.warnings import format_warning

logger = logging.getLogger(__name__)


class Estimator(Protocol):
    def estimate(self, temperature: float, pressure: float) -> Estimate:
        ...


@dataclass(frozen=True)
class Submission:
    """Outcome of one submitted query."""

    temperature: Any
    pressure: Any
    estimate: Estimate | None = None
    entry: HistoryEntry | None = None
    error: OutOfRangeError | InvalidInputError | None = None
    notices: tuple[str, ...] = ()
    stats: HistoryStats | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        if self.estimate is not None:
            return f"Enthalpy: {self.estimate.enthalpy:.2f} kJ/kg"
        if isinstance(self.error, OutOfRangeError):
            return format_warning("TEMPERATURE_OUT_OF_RANGE", str(self.error))
        return format_warning("INVALID_INPUT", str(self.error))

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "temperature": self.temperature,
            "pressure": self.pressure,
            "ok": self.ok,
            "message": self.message,
            "notices": list(self.notices),
        }
        if self.estimate is not None:
            payload["estimate"] = self.estimate.as_dict()
        if isinstance(self.error, OutOfRangeError):
            payload["error"] = self.error.as_dict()
        elif self.error is not None:
            payload["error"] = {"error": "invalid_input", "field": self.error.field, "reason": self.error.reason}
        return payload


def build_estimator(medium: str, table: ReferenceTable | None = None) -> Estimator:
    if medium == "steam":
        return SteamTableEstimator(table)
    if medium == "air":
        return AirCorrelationEstimator()
    raise ValueError(f"Unknown medium {medium!r}; expected one of {', '.join(MEDIA)}")


@dataclass
class EnthalpyService:
    """Single owner of the estimate history for one user session."""

    table: ReferenceTable | None = None
    settings: Mapping[str, Any] = field(default_factory=lambda: DEFAULT_SETTINGS)
    medium: str | None = None

    def __post_init__(self) -> None:
        if self.table is None:
            self.table = resolve_table(self.settings)
        if self.medium is None:
            self.medium = str(self.settings.get("medium", "steam"))
        self.estimator: Estimator = build_estimator(self.medium, self.table)
        max_points = int(self.settings.get("history", {}).get("max_data_points", 50))
        self.history = History(max_points)

    def set_medium(self, medium: str) -> None:
        """Switch the estimator; changing the medium clears the history."""

        self.estimator = build_estimator(medium, self.table)
        if medium != self.medium:
            self.reset_all()
        self.medium = medium
        logger.info("Medium switched to %s", medium)

    def submit(self, temperature: Any, pressure: Any) -> Submission:
        try:
            estimate = self.estimator.estimate(temperature, pressure)
        except (OutOfRangeError, InvalidInputError) as exc:
            logger.warning("Rejected query T=%r P=%r: %s", temperature, pressure, exc)
            return Submission(temperature, pressure, error=exc, stats=self.history.stats())

        entry = self.history.record(estimate.temperature, estimate.pressure_requested, estimate)
        notices: list[str] = []
        if estimate.used_nearest_pressure:
            notices.append(
                format_warning(
                    "PRESSURE_NEAREST_USED",
                    f"requested {estimate.pressure_requested:g}, used {estimate.pressure_used:g} kg/cm²G",
                )
            )
        logger.info(
            "Estimate #%d: %.2f kJ/kg (%s) at T=%g P=%g",
            entry.sequence,
            estimate.enthalpy,
            estimate.method.value,
            estimate.temperature,
            estimate.pressure_used,
        )
        return Submission(
            temperature,
            pressure,
            estimate=estimate,
            entry=entry,
            notices=tuple(notices),
            stats=self.history.stats(),
        )

    def reset_all(self) -> HistoryStats:
        if len(self.history):
            logger.info("History reset (%d entries dropped)", len(self.history))
        self.history.reset()
        return self.history.stats()

    def current_stats(self) -> HistoryStats:
        return self.history.stats()


__all__ = ["EnthalpyService", "Estimator", "Submission", "build_estimator"]
