"""Command-line entry point: prints parts readiness for exported records."""

import logging
import sys
from collections import Counter
from pathlib import Path

from field_logistics.config import Config
from field_logistics.domain.logistics import (
    get_logistics_jobs,
    get_logistics_summary_stats,
    group_purchase_orders_by_stage,
)
from field_logistics.domain.numbering import plan_logistics_job_numbers
from field_logistics.domain.readiness import (
    compute_parts_status,
    effective_part_status,
    is_pickable_part,
)
from field_logistics.domain.status import get_status_label
from field_logistics.domain.warnings import WarningRegistry
from field_logistics.io.record_loader import load_records
from field_logistics.io.report_export import (
    export_readiness_csv,
    export_readiness_excel,
)
from field_logistics.io.validators import validate_part_row, validate_po_row
from field_logistics.utils.constants import PO_STAGE_LABELS
from field_logistics.utils.formatters import format_quantity, format_readiness

logger = logging.getLogger(__name__)

USAGE = ("Usage: field-logistics <parts-file> [purchase-orders-file] "
         "[jobs-file] [--out <report.csv|report.xlsx>] "
         "[--plan-numbers <projects-file>]")


def _log_level(name) -> int:
    """Numeric level for a level name; unknown names fall back to INFO."""
    level = logging.getLevelName(str(name or "").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def _parse_args(argv: list[str]) -> tuple[list[str], dict]:
    """Split positional file arguments from the options."""
    files = []
    options = {"out": None, "projects": None}
    flags = {"--out": "out", "--plan-numbers": "projects"}
    args = iter(argv)
    for arg in args:
        if arg in flags:
            value = next(args, None)
            if value is None:
                raise ValueError(f"{arg} needs a file path")
            options[flags[arg]] = value
        elif arg.startswith("-"):
            raise ValueError(f"Unknown option: {arg}")
        else:
            files.append(arg)
    if not 1 <= len(files) <= 3:
        raise ValueError("Expected one to three input files")
    if options["projects"] and len(files) < 3:
        raise ValueError("--plan-numbers needs a jobs file")
    return files, options


def _load(filepath: str | None, validator, warnings: WarningRegistry
          ) -> list[dict]:
    if filepath is None:
        return []
    records = load_records(filepath)
    if validator is not None:
        for row_num, row in enumerate(records, start=1):
            for error in validator(row, row_num):
                warnings.warn_once(f"{filepath}:{error}",
                                   f"{Path(filepath).name}: {error}")
    return records


def _write_report(summary, stats, out: str) -> int:
    fmt = Path(out).suffix.lower().lstrip(".")
    if fmt not in ("csv", "xlsx"):
        fmt = Config.REPORT_FORMAT
    if fmt == "xlsx":
        return export_readiness_excel(summary, stats, out)
    return export_readiness_csv(summary, stats, out)


def _print_breakdown(parts: list[dict], purchase_orders: list[dict]):
    print(f"  Pickable parts: {sum(1 for p in parts if is_pickable_part(p))}")

    stages = group_purchase_orders_by_stage(purchase_orders)
    print("  PO stages: " + ", ".join(
        f"{PO_STAGE_LABELS[stage]} {len(pos)}" for stage, pos in stages.items()
    ))

    status_counts = Counter(effective_part_status(p) for p in parts)
    if status_counts:
        print("  Parts by status:")
        for status, count in sorted(status_counts.items()):
            print(f"    {get_status_label('part', status)}: {count}")


def _print_number_plan(jobs: list[dict], projects: list[dict],
                       purchase_orders: list[dict]):
    groups = get_logistics_jobs(jobs).as_dict()
    logistics_jobs = [job for bucket in groups.values() for job in bucket]
    plan = plan_logistics_job_numbers(logistics_jobs, projects, purchase_orders)
    print(f"Job numbers: {plan.updated} to assign, "
          f"{plan.skipped} already numbered")
    for job_id, number in plan.assignments.items():
        print(f"  {job_id}: {number}")
    for error in plan.errors:
        print(f"  {error}")


def main(argv: list[str] | None = None) -> int:
    """Run the readiness report. Returns the process exit code."""
    logging.basicConfig(
        level=_log_level(Config.LOG_LEVEL),
        format="%(levelname)s %(name)s: %(message)s",
    )
    argv = sys.argv[1:] if argv is None else argv
    try:
        files, options = _parse_args(argv)
    except ValueError as e:
        print(f"{e}\n{USAGE}")
        return 1

    parts_file, po_file, jobs_file = (files + [None, None])[:3]
    warnings = WarningRegistry()
    try:
        parts = _load(parts_file, validate_part_row, warnings)
        purchase_orders = _load(po_file, validate_po_row, warnings)
        jobs = _load(jobs_file, None, warnings)
        projects = _load(options["projects"], None, warnings)
    except (OSError, ValueError) as e:
        print(f"Could not read input: {e}")
        return 1

    summary = compute_parts_status(parts, purchase_orders, jobs,
                                   warnings=warnings)
    stats = get_logistics_summary_stats(purchase_orders, jobs, parts)

    print(format_readiness(summary))
    print(f"  Ready:    {format_quantity(summary.ready_count)}")
    print(f"  Ordered:  {format_quantity(summary.ordered_count)}")
    print(f"  Missing:  {format_quantity(summary.missing_count)}")
    print(f"  Open POs: {summary.open_po_count} "
          f"({summary.overdue_po_count} overdue)")
    print(f"  Incoming POs: {stats.incoming_po_count}")
    print(f"  Logistics jobs: {stats.logistics_job_count}")
    print(f"  Loading bay parts: {stats.loading_bay_part_count}")
    _print_breakdown(parts, purchase_orders)

    if options["projects"]:
        _print_number_plan(jobs, projects, purchase_orders)

    if options["out"]:
        rows = _write_report(summary, stats, options["out"])
        logger.info(f"Wrote {rows} report rows to {options['out']}")
        print(f"Report written to {options['out']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
