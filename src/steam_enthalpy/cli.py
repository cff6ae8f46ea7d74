"""Command-line runner for single or batched enthalpy queries."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Mapping, Sequence

from .config import MEDIA, ConfigError, load_settings
from .errors import TableError
from .reporter.chart_svg import export_history_chart
from .reporter.console_reporter import export_history_json, render_estimate, render_history
from .reporter.excel_reporter import export_history_to_excel
from .service import EnthalpyService, Submission
from .utils.physical_props import reference_deviation
from .utils.unit_helpers import PRESSURE_UNITS, to_table_pressure
from .utils.warnings import format_warning

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Estimate steam or dry-air enthalpy from temperature and pressure")
    parser.add_argument("--temperature", "-t", type=float, help="Temperature (°C for steam, K for air)")
    parser.add_argument("--pressure", "-p", type=float, help="Pressure (see --pressure-unit; Pa for air)")
    parser.add_argument("--queries", type=Path, help="JSON file with a list of {temperature, pressure} objects")
    parser.add_argument("--medium", choices=MEDIA, help="Override the configured medium")
    parser.add_argument(
        "--pressure-unit",
        choices=sorted(PRESSURE_UNITS),
        default="kgf_cm2g",
        help="Unit of steam query pressures (converted to kg/cm²G)",
    )
    parser.add_argument("--config", type=Path, help="JSON settings file")
    parser.add_argument("--out", type=Path, help="Directory for history.json, history.xlsx and history.svg")
    parser.add_argument("--reference", action="store_true", help="Show the IAPWS-IF97 deviation for steam estimates")
    parser.add_argument("--quiet", action="store_true", help="Only report errors")
    parser.add_argument("--log-level", choices=("DEBUG", "INFO", "WARNING", "ERROR"), help="Logging verbosity")
    return parser


def load_queries(path: Path) -> list[dict[str, Any]]:
    """Load and shape-check a JSON list of queries."""
    with path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON list of queries")
    queries = []
    for index, item in enumerate(data):
        if not isinstance(item, Mapping) or "temperature" not in item or "pressure" not in item:
            raise ValueError(f"Query #{index + 1} in {path} needs 'temperature' and 'pressure'")
        queries.append({"temperature": item["temperature"], "pressure": item["pressure"]})
    return queries


def _convert_pressure(value: Any, unit: str, medium: str) -> Any:
    if medium != "steam" or unit == "kgf_cm2g":
        return value
    try:
        return to_table_pressure(float(value), unit)
    except (TypeError, ValueError):
        # Leave the raw value for the estimator to reject with a proper message.
        return value


def _report(submission: Submission, *, reference: bool, quiet: bool) -> None:
    if not submission.ok:
        print(submission.message, file=sys.stderr)
        return
    if quiet:
        return
    notices = list(submission.notices)
    deviation = None
    if reference and submission.estimate.medium == "steam":
        try:
            deviation = reference_deviation(submission.estimate)
        except (ValueError, NotImplementedError) as exc:
            notices.append(format_warning("REFERENCE_UNAVAILABLE", str(exc)))
    render_estimate(submission.estimate, notices=notices, reference=deviation)
    print()


def run(args: argparse.Namespace) -> int:
    settings = load_settings(args.config)
    medium = args.medium or settings["medium"]
    logging.basicConfig(
        level=args.log_level or settings.get("logging", {}).get("level", "WARNING"),
        format="%(levelname)s: %(message)s",
    )

    if args.queries is not None:
        queries = load_queries(args.queries)
    else:
        queries = [{"temperature": args.temperature, "pressure": args.pressure}]

    service = EnthalpyService(settings=settings, medium=medium)
    failures = 0
    for query in queries:
        pressure = _convert_pressure(query["pressure"], args.pressure_unit, medium)
        submission = service.submit(query["temperature"], pressure)
        if not submission.ok:
            failures += 1
        _report(submission, reference=args.reference, quiet=args.quiet)

    entries = service.history.snapshot()
    stats = service.current_stats()
    if not args.quiet:
        render_history(entries if len(queries) > 1 else (), stats)

    if args.out is not None:
        args.out.mkdir(parents=True, exist_ok=True)
        json_path = export_history_json(entries, stats, args.out / "history.json")
        excel_path = export_history_to_excel(entries, stats, args.out / "history.xlsx")
        svg_path = export_history_chart(entries, args.out / "history.svg")
        if not args.quiet:
            print()
            print("Artifacts saved:")
            print(f"  History JSON  : {json_path}")
            print(f"  Excel report  : {excel_path}")
            print(f"  History chart : {svg_path}")

    return 1 if failures else 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the ``steam-enthalpy`` command."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.queries is None and (args.temperature is None or args.pressure is None):
        parser.error("either --queries or both --temperature and --pressure are required")
    try:
        return run(args)
    except (ConfigError, TableError, OSError, ValueError) as exc:
        logger.debug("Aborted", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2


__all__ = ["build_parser", "load_queries", "main", "run"]
