"""Steam and air enthalpy estimation from tabulated reference curves."""

from importlib import metadata


def get_version() -> str:
    """Return the installed package version."""
    try:
        return metadata.version("steam-enthalpy")
    except metadata.PackageNotFoundError:  # pragma: no cover - local dev fallback
        return "0.0.0"
