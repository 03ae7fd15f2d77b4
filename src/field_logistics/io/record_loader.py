"""Load exported backend records from JSON, CSV or Excel files."""

import csv
import json
import logging
from pathlib import Path
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".json", ".csv", ".xlsx")


def _header_key(value) -> str:
    return (str(value or "").strip().lower()
            .replace(" ", "_").replace("#", "number"))


def load_json_records(filepath: str | Path) -> list[dict]:
    """A JSON list of objects, or an object holding one under ``items``."""
    data = json.loads(Path(filepath).read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("items", [])
    if not isinstance(data, list):
        logger.warning(f"{filepath}: expected a list of records")
        return []
    return [item for item in data if isinstance(item, dict)]


def load_csv_records(filepath: str | Path) -> list[dict]:
    """CSV with a header row. Blank cells become None."""
    records = []
    with open(filepath, "r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for row in reader:
            records.append({
                _header_key(k): (v if v is not None and v.strip() else None)
                for k, v in row.items() if k
            })
    return records


def load_excel_records(filepath: str | Path) -> list[dict]:
    """First worksheet of an Excel workbook, first row as header.

    Raises ValueError when the file is not a readable workbook.
    """
    try:
        wb = load_workbook(filepath, read_only=True, data_only=True)
    except (BadZipFile, InvalidFileException) as e:
        raise ValueError(
            f"{Path(filepath).name} is not a valid Excel workbook: {e}"
        ) from e
    try:
        ws = wb.active
        rows = list(ws.iter_rows(values_only=True))
    finally:
        wb.close()
    if not rows:
        return []

    header = [_header_key(h) for h in rows[0]]
    records = []
    for row_data in rows[1:]:
        if all(v is None or str(v).strip() == "" for v in row_data):
            continue
        records.append({
            key: value
            for key, value in zip(header, row_data) if key
        })
    return records


def load_records(filepath: str | Path) -> list[dict]:
    """Load records, picking the reader from the file extension."""
    filepath = Path(filepath)
    suffix = filepath.suffix.lower()
    if suffix == ".json":
        records = load_json_records(filepath)
    elif suffix == ".csv":
        records = load_csv_records(filepath)
    elif suffix == ".xlsx":
        records = load_excel_records(filepath)
    else:
        raise ValueError(
            f"Unsupported file type: {suffix or filepath.name}. "
            f"Use one of {', '.join(SUPPORTED_EXTENSIONS)}."
        )
    logger.info(f"Loaded {len(records)} records from {filepath.name}")
    return records
