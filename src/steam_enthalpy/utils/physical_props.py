"""IAPWS-IF97 reference enthalpy used to cross-check tabulated estimates."""

from __future__ import annotations

from typing import Dict

from iapws import IAPWS97

from ..estimator.estimator import Estimate
from .unit_helpers import c_to_k, kgf_cm2g_to_mpa_abs


def reference_steam_enthalpy(pressure_kgf_cm2g: float, temperature_c: float) -> float:
    """Return the IAPWS-IF97 specific enthalpy in kJ/kg for the requested state."""

    state = IAPWS97(P=kgf_cm2g_to_mpa_abs(pressure_kgf_cm2g), T=c_to_k(temperature_c))
    enthalpy = getattr(state, "h", None)
    if enthalpy is None:
        raise ValueError(
            f"IAPWS-IF97 has no solution at {pressure_kgf_cm2g:g} kg/cm²G, {temperature_c:g} °C"
        )
    return float(enthalpy)


def reference_deviation(estimate: Estimate) -> Dict[str, float]:
    """Compare a steam estimate against IAPWS-IF97 at the pressure actually used."""

    if estimate.medium != "steam":
        raise ValueError("IAPWS-IF97 reference applies to steam estimates only")
    reference = reference_steam_enthalpy(estimate.pressure_used, estimate.temperature)
    deviation = estimate.enthalpy - reference
    return {
        "reference_kJ_per_kg": reference,
        "deviation_kJ_per_kg": deviation,
        "deviation_pct": 100.0 * deviation / reference,
    }


__all__ = ["reference_deviation", "reference_steam_enthalpy"]
