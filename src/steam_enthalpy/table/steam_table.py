"""Reference steam table: pressure levels mapped to temperature/enthalpy curves."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, Mapping

from ..errors import TableError

# Superheated steam, pressure in kg/cm²G, temperature in °C, enthalpy in kJ/kg.
STEAM_TABLE_DATA: Dict[str, Dict[str, list[float]]] = {
    "10": {
        "temperatures": [200, 250, 300, 350, 400, 450, 500, 550, 600],
        "enthalpies": [2827.4, 2957.2, 3058.5, 3162.3, 3266.2, 3372.1, 3479.8, 3600.3, 3723.4],
    },
    "20": {
        "temperatures": [250, 300, 350, 400, 450, 500, 550, 600],
        "enthalpies": [2903.2, 3024.2, 3137.7, 3248.4, 3357.5, 3467.3, 3578.0, 3690.7],
    },
    "30": {
        "temperatures": [250, 300, 350, 400, 450, 500, 550, 600],
        "enthalpies": [2856.5, 2994.3, 3116.1, 3231.6, 3344.0, 3456.4, 3568.0, 3682.8],
    },
    "50": {
        "temperatures": [300, 350, 400, 450, 500, 550, 600],
        "enthalpies": [2925.7, 3069.3, 3196.7, 3317.2, 3434.7, 3550.0, 3666.9],
    },
    "90": {
        "temperatures": [350, 400, 450, 500, 550, 600],
        "enthalpies": [2957.0, 3118.8, 3256.8, 3387.1, 3511.1, 3634.1],
    },
}


def _as_floats(values: Iterable[Any], label: str, pressure: float) -> tuple[float, ...]:
    try:
        converted = tuple(float(value) for value in values)
    except (TypeError, ValueError) as exc:
        raise TableError(f"Curve {pressure:g}: {label} must be numeric") from exc
    if not all(math.isfinite(value) for value in converted):
        raise TableError(f"Curve {pressure:g}: {label} must be finite")
    return converted


@dataclass(frozen=True)
class Curve:
    """Ordered (temperature, enthalpy) samples for one pressure level."""

    pressure: float
    temperatures: tuple[float, ...]
    enthalpies: tuple[float, ...]

    def __post_init__(self) -> None:
        pressure = float(self.pressure)
        if not math.isfinite(pressure):
            raise TableError(f"Curve {pressure!r}: pressure level must be finite")
        temperatures = _as_floats(self.temperatures, "temperatures", pressure)
        enthalpies = _as_floats(self.enthalpies, "enthalpies", pressure)
        if not temperatures:
            raise TableError(f"Curve {pressure:g}: at least one sample is required")
        if len(temperatures) != len(enthalpies):
            raise TableError(
                f"Curve {pressure:g}: {len(temperatures)} temperatures but {len(enthalpies)} enthalpies"
            )
        for index, (lower, upper) in enumerate(zip(temperatures, temperatures[1:])):
            if not lower < upper:
                raise TableError(
                    f"Curve {pressure:g}: temperatures must be strictly increasing "
                    f"(index {index}: {lower:g} >= {upper:g})"
                )
        object.__setattr__(self, "pressure", pressure)
        object.__setattr__(self, "temperatures", temperatures)
        object.__setattr__(self, "enthalpies", enthalpies)

    @property
    def t_min(self) -> float:
        return self.temperatures[0]

    @property
    def t_max(self) -> float:
        return self.temperatures[-1]

    def __len__(self) -> int:
        return len(self.temperatures)

    def samples(self) -> list[tuple[float, float]]:
        return list(zip(self.temperatures, self.enthalpies))


@dataclass(frozen=True)
class ReferenceTable:
    """Immutable catalogue of curves keyed by pressure level.

    Levels keep their declaration order; nearest-level selection relies on it
    to break ties deterministically.
    """

    curves: tuple[Curve, ...]
    _index: Dict[float, Curve] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        curves = tuple(self.curves)
        if not curves:
            raise TableError("Reference table must contain at least one pressure level")
        index: Dict[float, Curve] = {}
        for curve in curves:
            if not isinstance(curve, Curve):
                raise TableError(f"Expected Curve, got {type(curve).__name__}")
            if curve.pressure in index:
                raise TableError(f"Duplicate pressure level {curve.pressure:g}")
            index[curve.pressure] = curve
        object.__setattr__(self, "curves", curves)
        object.__setattr__(self, "_index", index)

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------
    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ReferenceTable":
        """Build a table from ``{"<level>": {"temperatures": [...], "enthalpies": [...]}}``."""

        curves = []
        for level, payload in data.items():
            try:
                pressure = float(level)
            except (TypeError, ValueError) as exc:
                raise TableError(f"Pressure level {level!r} is not numeric") from exc
            if not isinstance(payload, Mapping):
                raise TableError(f"Curve {level!r} must be a mapping")
            try:
                temperatures = payload["temperatures"]
                enthalpies = payload["enthalpies"]
            except KeyError as exc:
                raise TableError(f"Curve {level!r} is missing {exc.args[0]!r}") from exc
            curves.append(Curve(pressure, tuple(temperatures), tuple(enthalpies)))
        return cls(tuple(curves))

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def levels(self) -> tuple[float, ...]:
        return tuple(curve.pressure for curve in self.curves)

    def curve(self, level: float) -> Curve:
        return self._index[float(level)]

    def __iter__(self) -> Iterator[Curve]:
        return iter(self.curves)

    def __len__(self) -> int:
        return len(self.curves)

    def __contains__(self, level: object) -> bool:
        try:
            return float(level) in self._index  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return False

    def as_dict(self) -> Dict[str, Dict[str, list[float]]]:
        return {
            f"{curve.pressure:g}": {
                "temperatures": list(curve.temperatures),
                "enthalpies": list(curve.enthalpies),
            }
            for curve in self.curves
        }


def load_table(path: Path | str) -> ReferenceTable:
    """Load and validate a reference table from a JSON file."""

    table_path = Path(path)
    try:
        with table_path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except OSError as exc:
        raise TableError(f"Cannot read steam table {table_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise TableError(f"Steam table {table_path} is not valid JSON: {exc}") from exc
    if not isinstance(data, Mapping):
        raise TableError(f"Steam table {table_path} must contain a JSON object")
    return ReferenceTable.from_mapping(data)


@lru_cache(maxsize=1)
def default_table() -> ReferenceTable:
    """Return the built-in steam table, validated once per process."""

    return ReferenceTable.from_mapping(STEAM_TABLE_DATA)


def resolve_table(settings: Mapping[str, Any] | None = None) -> ReferenceTable:
    """Return the configured table file if one is set, else the built-in table."""

    path = ((settings or {}).get("table") or {}).get("path")
    if path:
        return load_table(path)
    return default_table()


__all__ = [
    "STEAM_TABLE_DATA",
    "Curve",
    "ReferenceTable",
    "default_table",
    "load_table",
    "resolve_table",
]
