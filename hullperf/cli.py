#!/usr/bin/env python3
"""
HULLPERF CLI Tool.

Command-line interface over the fleet exports:
- Train the degradation model and print the training report
- Cleaning suggestion for one vessel
- Fleet-wide cleaning schedule

Usage:
    python -m hullperf.cli train --data-dir data
    python -m hullperf.cli suggest "Bruno Lima" --today 2026-01-15
    python -m hullperf.cli fleet --json
"""
import argparse
import sys
from datetime import date
from typing import List, Optional

from .config import Settings, get_settings
from .metrics import metrics
from .schemas import CleaningSuggestionModel, TrainingReportModel
from .service import HullPerformanceService


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD")


def _build_service(args) -> HullPerformanceService:
    settings = Settings(data_dir=args.data_dir) if args.data_dir else get_settings()
    settings.configure_logging()
    return HullPerformanceService(settings=settings)


def train(service: HullPerformanceService, as_of: Optional[date]) -> int:
    """Train and print the report as JSON."""
    report = service.train_model(as_of=as_of)
    print(TrainingReportModel.from_domain(report).model_dump_json(indent=2))
    return 0 if report.trained else 1


def suggest(
    service: HullPerformanceService,
    vessel: str,
    as_of: Optional[date],
    today: Optional[date],
    summary_only: bool = False,
) -> int:
    """Train, then print the cleaning suggestion for one vessel as JSON."""
    service.train_model(as_of=as_of)
    suggestion = service.suggest_cleaning_date(vessel, today=today)

    exclude = {"predictions"} if summary_only else None
    print(CleaningSuggestionModel.from_domain(suggestion).model_dump_json(indent=2, exclude=exclude))
    return 0


def fleet(
    service: HullPerformanceService,
    as_of: Optional[date],
    today: Optional[date],
    as_json: bool = False,
) -> int:
    """Train, then print one suggestion per vessel."""
    service.train_model(as_of=as_of)
    suggestions = service.suggest_fleet(today=today)

    if as_json:
        models = [CleaningSuggestionModel.from_domain(s) for s in suggestions]
        print("[" + ",\n".join(m.model_dump_json(exclude={"predictions"}) for m in models) + "]")
        return 0

    if not suggestions:
        print("\nNo vessels found.")
        return 1

    print("\n" + "=" * 96)
    print("FLEET HULL CLEANING SCHEDULE")
    print("=" * 96)
    print(f"{'Vessel':<24} {'Last cleaning':<14} {'Ideal cleaning':<15} {'Days':>5}  {'HPI':>6}  {'Status':<28}")
    print("-" * 96)

    for s in suggestions:
        last = s.last_cleaning_date.isoformat() if s.last_cleaning_date else "-"
        ideal = s.ideal_cleaning_date.isoformat() if s.ideal_cleaning_date else "-"
        days = str(s.days_to_intervention) if s.days_to_intervention is not None else "-"
        print(
            f"{s.vessel_id[:22]:<24} "
            f"{last:<14} "
            f"{ideal:<15} "
            f"{days:>5}  "
            f"{s.current_hpi:>6.4f}  "
            f"{s.status:<28}"
        )

    print("=" * 96)
    print(f"Total: {len(suggestions)} vessel(s)\n")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="HULLPERF CLI Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Train on the exports in ./data:
    python -m hullperf.cli train --data-dir data

  Suggest a cleaning date for one vessel:
    python -m hullperf.cli suggest "Bruno Lima" --today 2026-01-15

  Fleet schedule as JSON, without daily projections:
    python -m hullperf.cli fleet --json
        """
    )
    parser.add_argument("--data-dir", help="Directory holding the fleet CSV exports")
    parser.add_argument(
        "--as-of",
        type=_iso_date,
        help="Training reference date, YYYY-MM-DD (default: HULLPERF_REFERENCE_DATE or today)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # train
    subparsers.add_parser("train", help="Train the degradation model")

    # suggest
    suggest_parser = subparsers.add_parser("suggest", help="Cleaning suggestion for one vessel")
    suggest_parser.add_argument("vessel", help="Vessel name (any spelling variant)")
    suggest_parser.add_argument("--today", type=_iso_date, help="Simulation start date, YYYY-MM-DD (default: training reference date)")
    suggest_parser.add_argument(
        "--summary",
        action="store_true",
        help="Omit the daily predictions"
    )

    # fleet
    fleet_parser = subparsers.add_parser("fleet", help="Cleaning schedule for every known vessel")
    fleet_parser.add_argument("--today", type=_iso_date, help="Simulation start date, YYYY-MM-DD (default: training reference date)")
    fleet_parser.add_argument("--json", action="store_true", help="Print JSON instead of a table")

    # metrics
    parser.add_argument("--metrics", action="store_true", help="Log pipeline metrics on exit")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    service = _build_service(args)

    if args.command == "train":
        code = train(service, args.as_of)
    elif args.command == "suggest":
        code = suggest(service, args.vessel, args.as_of, args.today, args.summary)
    else:
        code = fleet(service, args.as_of, args.today, args.json)

    if args.metrics:
        metrics.log_summary()
    return code


if __name__ == "__main__":
    sys.exit(main())
