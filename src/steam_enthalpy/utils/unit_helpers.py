"""Temperature and gauge/absolute pressure conversions backed by Pint."""

from __future__ import annotations

from .units import canonical_unit, ensure_quantity

ATMOSPHERE_BAR = 1.01325

# Units accepted for query pressures, mapped to (pint unit, is_gauge).
PRESSURE_UNITS: dict[str, tuple[str, bool]] = {
    "kgf_cm2g": ("technical_atmosphere", True),
    "bar": ("bar", True),
    "bar_abs": ("bar", False),
    "MPa": ("megapascal", False),
    "kPa": ("kilopascal", False),
}


def c_to_k(temperature_c: float) -> float:
    """Convert Celsius to Kelvin."""

    return ensure_quantity(temperature_c, "degC").to("kelvin").magnitude


def k_to_c(temperature_k: float) -> float:
    """Convert Kelvin to Celsius."""

    return ensure_quantity(temperature_k, "kelvin").to("degC").magnitude


def kgf_cm2g_to_bar_abs(pressure_kgf_cm2g: float) -> float:
    return ensure_quantity(pressure_kgf_cm2g, "kgf_cm2").to("bar").magnitude + ATMOSPHERE_BAR


def bar_abs_to_kgf_cm2g(pressure_bar_abs: float) -> float:
    return ensure_quantity(pressure_bar_abs - ATMOSPHERE_BAR, "bar").to("technical_atmosphere").magnitude


def kgf_cm2g_to_mpa_abs(pressure_kgf_cm2g: float) -> float:
    return ensure_quantity(kgf_cm2g_to_bar_abs(pressure_kgf_cm2g), "bar").to("megapascal").magnitude


def to_table_pressure(value: float, unit: str) -> float:
    """Convert a query pressure in *unit* to the table's kg/cm²G."""

    try:
        pint_unit, is_gauge = PRESSURE_UNITS[unit]
    except KeyError:
        raise ValueError(f"Unsupported pressure unit {unit!r}") from None
    if pint_unit == "technical_atmosphere":
        return float(value)
    pressure_bar = ensure_quantity(value, canonical_unit(pint_unit)).to("bar").magnitude
    if is_gauge:
        pressure_bar += ATMOSPHERE_BAR
    return bar_abs_to_kgf_cm2g(pressure_bar)


__all__ = [
    "ATMOSPHERE_BAR",
    "PRESSURE_UNITS",
    "bar_abs_to_kgf_cm2g",
    "c_to_k",
    "k_to_c",
    "kgf_cm2g_to_bar_abs",
    "kgf_cm2g_to_mpa_abs",
    "to_table_pressure",
]
