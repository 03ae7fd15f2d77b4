"""Validation rules for imported part and purchase order rows.

Problems are reported, not enforced: the readiness math still runs on
rows that fail here.
"""

from field_logistics.domain.records import get_po_eta, safe_parse_date
from field_logistics.domain.status import resolve_part_status, resolve_po_status


def _check_quantity(row: dict, keys: tuple[str, ...], label: str,
                    row_num: int, errors: list[str]):
    """Validate the first populated key; returns the parsed value or None."""
    for key in keys:
        value = row.get(key)
        if value is None or str(value).strip() == "":
            continue
        try:
            number = float(str(value).strip())
        except ValueError:
            errors.append(f"Row {row_num}: {label} must be a number")
            return None
        if number < 0:
            errors.append(f"Row {row_num}: {label} cannot be negative")
        return number
    return None


def validate_part_row(row: dict, row_num: int) -> list[str]:
    """Validate a single part row. Returns list of error strings."""
    errors = []

    required = _check_quantity(
        row, ("quantity_required", "required_qty", "quantity"),
        "required quantity", row_num, errors,
    )
    received = _check_quantity(
        row, ("received_qty", "quantity_received"),
        "received quantity", row_num, errors,
    )
    if required is not None and received is not None and received > required:
        errors.append(
            f"Row {row_num}: received quantity ({received:g}) exceeds "
            f"required quantity ({required:g})"
        )

    status = row.get("status") or row.get("part_status")
    if status and not resolve_part_status(status).recognized:
        errors.append(f"Row {row_num}: unrecognized part status '{status}'")

    return errors


def validate_po_row(row: dict, row_num: int) -> list[str]:
    """Validate a single purchase order row. Returns list of error strings."""
    errors = []

    if row.get("id") is None or str(row.get("id")).strip() == "":
        errors.append(f"Row {row_num}: id is required")

    eta = get_po_eta(row)
    if eta and safe_parse_date(eta) is None:
        errors.append(f"Row {row_num}: expected date '{eta}' is not a date")

    status = row.get("status")
    if status and not resolve_po_status(status).recognized:
        errors.append(f"Row {row_num}: unrecognized PO status '{status}'")

    return errors
