"""Typed records built from raw backend rows.

Backend rows spell the same attribute several ways (``quantity_required``
vs ``required_qty``, ``received_qty`` vs ``quantity_received``, four
different PO link fields). The ``from_raw`` constructors resolve those
variants once so the rest of the package works on a single shape.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Optional

from field_logistics.domain.status import (
    NormalizedStatus,
    normalize_status_key,
    resolve_part_location,
    resolve_part_status,
    resolve_po_status,
    resolve_source_type,
)
from field_logistics.domain.warnings import WarningRegistry
from field_logistics.utils.constants import PART_PO_LINK_FIELDS, PO_ETA_FIELDS


def to_number(value, default=0):
    """Coerce a raw quantity to a number; anything unusable becomes 0."""
    if value is None:
        return default
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return 0
        return value
    text = str(value).strip()
    if not text:
        return 0
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return 0
    return number if math.isfinite(number) else 0


def safe_parse_date(value) -> Optional[datetime]:
    """Parse a date/datetime/ISO string into an aware UTC datetime.

    Naive values are taken as UTC. Returns None instead of raising.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def to_id(value) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _first_present(data: Mapping, *keys):
    """First value that is not None (the ``??`` chain)."""
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def _first_truthy(data: Mapping, *keys):
    for key in keys:
        value = data.get(key)
        if value:
            return value
    return None


def get_po_eta(po: Mapping):
    """Raw expected-arrival value of a purchase order, or None."""
    if isinstance(po, PurchaseOrderRecord):
        po = po.raw
    if not isinstance(po, Mapping):
        return None
    return _first_truthy(po, *PO_ETA_FIELDS)


@dataclass
class PartRecord:
    id: Optional[str] = None
    name: str = ""
    required_qty: float = 1
    received_qty: float = 0
    status: Optional[str] = None
    location: Optional[str] = None
    source_type: Optional[str] = None
    purchase_order_id: Optional[str] = None
    linked_po_id: Optional[str] = None
    po_id: Optional[str] = None
    purchase_order_line_id: Optional[str] = None
    po_status: Optional[str] = None
    supplier_id: Optional[str] = None
    project_id: Optional[str] = None
    job_id: Optional[str] = None
    created_date: Optional[datetime] = None
    raw: dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_raw(cls, data: Mapping) -> "PartRecord":
        return cls(
            id=to_id(data.get("id")),
            name=str(_first_truthy(
                data, "name", "item_name", "description") or ""),
            required_qty=to_number(_first_present(
                data, "quantity_required", "required_qty", "quantity"), 1),
            received_qty=to_number(_first_present(
                data, "received_qty", "quantity_received"), 0),
            status=_first_truthy(data, "status", "part_status"),
            location=data.get("location") or None,
            source_type=data.get("source_type") or None,
            purchase_order_id=to_id(data.get("purchase_order_id")),
            linked_po_id=to_id(data.get("linked_po_id")),
            po_id=to_id(data.get("po_id")),
            purchase_order_line_id=to_id(data.get("purchase_order_line_id")),
            po_status=_first_truthy(data, "po_status", "purchase_order_status"),
            supplier_id=to_id(data.get("supplier_id")),
            project_id=to_id(data.get("project_id")),
            job_id=to_id(data.get("job_id")),
            created_date=safe_parse_date(data.get("created_date")),
            raw=dict(data),
        )

    @property
    def has_po_link(self) -> bool:
        """Any PO link field is set (the PO itself may be closed)."""
        return any(getattr(self, name) for name in PART_PO_LINK_FIELDS)

    @property
    def status_result(self) -> NormalizedStatus:
        return resolve_part_status(self.status)

    @property
    def location_result(self) -> NormalizedStatus:
        return resolve_part_location(self.location)

    @property
    def source_type_result(self) -> NormalizedStatus:
        return resolve_source_type(self.source_type)


@dataclass
class PurchaseOrderRecord:
    id: Optional[str] = None
    po_number: str = ""
    status: Optional[str] = None
    eta: Optional[datetime] = None
    created_date: Optional[datetime] = None
    supplier_id: Optional[str] = None
    supplier_name: str = ""
    delivery_method: str = ""
    project_id: Optional[str] = None
    raw: dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_raw(cls, data: Mapping) -> "PurchaseOrderRecord":
        return cls(
            id=to_id(data.get("id")),
            po_number=str(_first_truthy(
                data, "po_number", "po_reference") or ""),
            status=data.get("status") or None,
            eta=safe_parse_date(get_po_eta(data)),
            created_date=safe_parse_date(data.get("created_date")),
            supplier_id=to_id(data.get("supplier_id")),
            supplier_name=str(data.get("supplier_name") or ""),
            delivery_method=normalize_status_key(data.get("delivery_method")),
            project_id=to_id(data.get("project_id")),
            raw=dict(data),
        )

    @property
    def status_key(self) -> str:
        """Status with spelling normalized but no legacy remapping."""
        return normalize_status_key(self.status)

    @property
    def status_result(self) -> NormalizedStatus:
        return resolve_po_status(self.status)


@dataclass
class JobRecord:
    id: Optional[str] = None
    job_number: str = ""
    job_type_name: str = ""
    status: str = "Open"
    project_id: Optional[str] = None
    purchase_order_id: Optional[str] = None
    logistics_purpose: Optional[str] = None
    created_date: Optional[datetime] = None
    raw: dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_raw(cls, data: Mapping) -> "JobRecord":
        return cls(
            id=to_id(data.get("id")),
            job_number=str(data.get("job_number") or ""),
            job_type_name=_job_type_name(data),
            status=str(data.get("status") or "Open"),
            project_id=to_id(data.get("project_id")),
            purchase_order_id=to_id(data.get("purchase_order_id")),
            logistics_purpose=data.get("logistics_purpose") or None,
            created_date=safe_parse_date(data.get("created_date")),
            raw=dict(data),
        )


def _job_type_name(data: Mapping) -> str:
    if data.get("job_type_name"):
        return str(data["job_type_name"])
    job_type = data.get("job_type")
    if isinstance(job_type, str):
        return job_type
    if isinstance(job_type, Mapping) and job_type.get("name"):
        return str(job_type["name"])
    return ""


def _as_records(items, record_cls, kind: str,
                warnings: WarningRegistry | None) -> list:
    if not isinstance(items, (list, tuple)):
        return []
    records = []
    for index, item in enumerate(items):
        if isinstance(item, record_cls):
            records.append(item)
        elif isinstance(item, Mapping):
            records.append(record_cls.from_raw(item))
        elif warnings is not None:
            warnings.warn_once(
                f"{kind}:not-a-mapping:{index}",
                f"Skipping {kind} #{index}: expected a record, "
                f"got {type(item).__name__}",
            )
    return records


def as_part_records(items, warnings: WarningRegistry | None = None
                    ) -> list[PartRecord]:
    return _as_records(items, PartRecord, "part", warnings)


def as_purchase_order_records(items, warnings: WarningRegistry | None = None
                              ) -> list[PurchaseOrderRecord]:
    return _as_records(items, PurchaseOrderRecord, "purchase order", warnings)


def as_job_records(items, warnings: WarningRegistry | None = None
                   ) -> list[JobRecord]:
    return _as_records(items, JobRecord, "job", warnings)
