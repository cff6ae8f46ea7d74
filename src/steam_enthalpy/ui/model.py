"""View-model sitting between the Tk widgets and the enthalpy service."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from ..config import DEFAULT_SETTINGS
from ..errors import InvalidInputError
from ..estimator.estimator import validate_positive
from ..history.history import HistoryEntry, HistoryStats
from ..service import EnthalpyService, Submission
from ..utils.warnings import WARNING_MESSAGES
from .events import (
    ESTIMATE_RECORDED,
    ESTIMATE_REJECTED,
    HISTORY_RESET,
    MEDIUM_CHANGED,
    NOTIFY,
    STATS_CHANGED,
    EventBus,
)


@dataclass
class FieldErrors:
    temperature: str | None = None
    pressure: str | None = None

    @property
    def any(self) -> bool:
        return self.temperature is not None or self.pressure is not None


def validate_form(temperature: Any, pressure: Any) -> FieldErrors:
    """Check both form fields independently so each gets its own message."""

    errors = FieldErrors()
    for name in ("temperature", "pressure"):
        raw = temperature if name == "temperature" else pressure
        if isinstance(raw, str):
            raw = raw.strip()
        try:
            validate_positive(name, raw)
        except InvalidInputError as exc:
            setattr(errors, name, f"Enter a positive {name} ({exc.reason})")
    return errors


@dataclass
class SessionModel:
    """State container for the GUI; every change is announced on the bus."""

    bus: EventBus
    settings: Mapping[str, Any] = field(default_factory=lambda: DEFAULT_SETTINGS)
    service: EnthalpyService | None = None

    def __post_init__(self) -> None:
        if self.service is None:
            self.service = EnthalpyService(settings=self.settings)
        self.field_errors = FieldErrors()

    @property
    def medium(self) -> str:
        return str(self.service.medium)

    @property
    def stats(self) -> HistoryStats:
        return self.service.current_stats()

    def series(self) -> dict[str, list[Any]]:
        return self.service.history.series()

    def entries(self) -> tuple[HistoryEntry, ...]:
        return self.service.history.snapshot()

    # ------------------------------------------------------------------
    # Form submission
    # ------------------------------------------------------------------
    def submit(self, temperature: Any, pressure: Any) -> Submission | None:
        self.field_errors = validate_form(temperature, pressure)
        if self.field_errors.any:
            self.bus.publish(ESTIMATE_REJECTED, errors=self.field_errors, submission=None)
            self.bus.publish(NOTIFY, message=WARNING_MESSAGES["INVALID_INPUT"], kind="error")
            return None

        submission = self.service.submit(temperature, pressure)
        if not submission.ok:
            self.bus.publish(ESTIMATE_REJECTED, errors=self.field_errors, submission=submission)
            self.bus.publish(NOTIFY, message=str(submission.error), kind="error")
            return submission

        self.bus.publish(ESTIMATE_RECORDED, submission=submission, series=self.series())
        self.bus.publish(STATS_CHANGED, stats=submission.stats)
        for notice in submission.notices:
            self.bus.publish(NOTIFY, message=notice, kind="warning")
        self.bus.publish(NOTIFY, message=submission.message, kind="success")
        return submission

    # ------------------------------------------------------------------
    # Reset / medium
    # ------------------------------------------------------------------
    def reset_all(self) -> None:
        had_data = len(self.service.history) > 0
        self.field_errors = FieldErrors()
        stats = self.service.reset_all()
        self.bus.publish(HISTORY_RESET)
        self.bus.publish(STATS_CHANGED, stats=stats)
        if had_data:
            self.bus.publish(NOTIFY, message=WARNING_MESSAGES["HISTORY_RESET"], kind="success")

    def set_medium(self, medium: str) -> None:
        if medium == self.medium:
            return
        self.field_errors = FieldErrors()
        self.service.set_medium(medium)
        self.bus.publish(MEDIUM_CHANGED, medium=medium)
        self.bus.publish(HISTORY_RESET)
        self.bus.publish(STATS_CHANGED, stats=self.service.current_stats())


__all__ = ["FieldErrors", "SessionModel", "validate_form"]
