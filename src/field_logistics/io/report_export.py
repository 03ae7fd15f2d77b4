"""CSV and Excel export of the readiness summary and logistics counts."""

import csv
from pathlib import Path

from openpyxl import Workbook

from field_logistics.domain.logistics import LogisticsSummary
from field_logistics.domain.readiness import ReadinessSummary

REPORT_COLUMNS = ["metric", "value"]

METRIC_LABELS = {
    "required_count": "Parts required",
    "ready_count": "Parts ready",
    "ordered_count": "Parts ordered",
    "missing_count": "Parts missing",
    "parts_ready": "All parts ready",
    "open_po_count": "Open purchase orders",
    "overdue_po_count": "Overdue purchase orders",
    "incoming_po_count": "Incoming purchase orders",
    "logistics_job_count": "Logistics jobs",
    "loading_bay_part_count": "Parts in loading bay",
}


def _report_rows(summary: ReadinessSummary,
                 stats: LogisticsSummary | None) -> list[tuple[str, object]]:
    values = summary.as_dict()
    if stats is not None:
        values.update(stats.as_dict())
    return [(METRIC_LABELS.get(key, key), value) for key, value in values.items()]


def export_readiness_csv(summary: ReadinessSummary,
                         stats: LogisticsSummary | None,
                         filepath: str | Path) -> int:
    """Write one metric/value row per field. Returns the number of rows."""
    rows = _report_rows(summary, stats)
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(REPORT_COLUMNS)
        writer.writerows(rows)
    return len(rows)


def export_readiness_excel(summary: ReadinessSummary,
                           stats: LogisticsSummary | None,
                           filepath: str | Path) -> int:
    """Excel version of ``export_readiness_csv``. Returns row count."""
    rows = _report_rows(summary, stats)
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    wb = Workbook()
    ws = wb.active
    ws.title = "Readiness"
    ws.append(["Metric", "Value"])
    for label, value in rows:
        ws.append([label, value])

    # Auto-fit column widths (approximate)
    for col in ws.columns:
        max_len = max(len(str(cell.value or "")) for cell in col)
        ws.column_dimensions[col[0].column_letter].width = min(max_len + 2, 40)

    wb.save(filepath)
    return len(rows)
