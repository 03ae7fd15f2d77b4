"""Parts readiness: per-part classification and the summary counts.

A part's required quantity is split across three buckets with the
precedence Ready > Ordered > Missing. Purchase orders contribute the
open / overdue counts. Everything here is pure and never raises on bad
data: unusable numbers count as 0 and unparseable ETAs as "no ETA".
"""

from collections.abc import Mapping
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Optional

from field_logistics.domain.records import (
    PartRecord,
    as_part_records,
    as_purchase_order_records,
)
from field_logistics.domain.status import (
    normalize_legacy_part_status,
    normalize_status_key,
)
from field_logistics.domain.warnings import WarningRegistry
from field_logistics.utils.constants import (
    CLOSED_PO_STATUSES,
    ORDERED_PART_STATUSES,
    PICKABLE_PART_STATUSES,
    READY_PART_STATUSES,
    RECEIVED_PO_STATUSES,
)


@dataclass
class ReadinessSummary:
    required_count: float = 0
    ready_count: float = 0
    ordered_count: float = 0
    missing_count: float = 0
    parts_ready: bool = False
    open_po_count: int = 0
    overdue_po_count: int = 0

    def as_dict(self) -> dict:
        return asdict(self)


def _as_part(part) -> PartRecord:
    if isinstance(part, PartRecord):
        return part
    return PartRecord.from_raw(part if isinstance(part, Mapping) else {})


def _canonical_part_status(part: PartRecord) -> Optional[str]:
    result = part.status_result
    return result.value if result.recognized else None


def is_part_ready(part) -> bool:
    """Physically available by status, or anything already received."""
    part = _as_part(part)
    if _canonical_part_status(part) in READY_PART_STATUSES:
        return True
    return part.received_qty > 0


def is_part_ordered(part) -> bool:
    """On order by status, or linked to any purchase order."""
    part = _as_part(part)
    if _canonical_part_status(part) in ORDERED_PART_STATUSES:
        return True
    return part.has_po_link


def compute_parts_status(parts, purchase_orders=None, logistics_jobs=None,
                         now: datetime | None = None,
                         warnings: WarningRegistry | None = None
                         ) -> ReadinessSummary:
    """Fold parts and purchase orders into a ``ReadinessSummary``.

    ``logistics_jobs`` is accepted for callers that already pass it but
    does not affect the counts. ``now`` defaults to the current UTC time.
    """
    summary = ReadinessSummary()

    for part in as_part_records(parts, warnings):
        if warnings is not None and not part.status_result.recognized:
            warnings.warn_once(
                f"part-status:{part.status}",
                f"Unrecognized part status {part.status!r}; "
                f"treating it as neither ready nor ordered",
            )

        required_qty = part.required_qty
        received_qty = part.received_qty
        summary.required_count += required_qty

        if is_part_ready(part):
            if received_qty > 0:
                ready_qty = min(received_qty, required_qty)
            else:
                ready_qty = required_qty
            summary.ready_count += ready_qty

            # The remainder is judged on the same part record
            remaining_qty = max(required_qty - ready_qty, 0)
            if remaining_qty > 0:
                if is_part_ordered(part):
                    summary.ordered_count += remaining_qty
                else:
                    summary.missing_count += remaining_qty
        elif is_part_ordered(part):
            summary.ordered_count += max(required_qty - received_qty, 0)
        else:
            summary.missing_count += max(required_qty - received_qty, 0)

    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    for po in as_purchase_order_records(purchase_orders, warnings):
        # Both spellings: "received" is closed, "Canceled" only after remapping
        statuses = {po.status_key, po.status_result.value}
        if statuses & CLOSED_PO_STATUSES:
            continue
        summary.open_po_count += 1
        if statuses & RECEIVED_PO_STATUSES:
            continue
        if po.eta is not None and po.eta < now:
            summary.overdue_po_count += 1

    summary.parts_ready = (summary.required_count > 0
                           and summary.ready_count >= summary.required_count)
    return summary


def map_po_status_to_part_status(po_status) -> str:
    """Part status implied by a purchase order's status."""
    key = normalize_status_key(po_status)
    if key in ("sent", "on_order"):
        return "on_order"
    if key in ("in_transit", "partially_received"):
        return "in_transit"
    if key in ("in_loading_bay", "received", "delivered"):
        return "in_loading_bay"
    if key in ("in_storage", "in_vehicle", "installed"):
        return key
    return "pending"


def effective_part_status(part) -> str:
    """Normalized part status, promoted (never demoted) by its PO status."""
    part = _as_part(part)
    status = normalize_legacy_part_status(part.status)
    if status in ("in_storage", "in_vehicle", "installed"):
        return status
    if not part.po_status:
        return status

    po_key = normalize_status_key(part.po_status).replace("_", "")
    if po_key in ("instorage", "invehicle", "installed"):
        return {"instorage": "in_storage", "invehicle": "in_vehicle",
                "installed": "installed"}[po_key]
    if po_key in ("inloadingbay", "received", "delivered"):
        if status in ("pending", "on_order", "in_transit"):
            return "in_loading_bay"
    elif po_key == "intransit":
        if status in ("pending", "on_order"):
            return "in_transit"
    elif po_key in ("onorder", "sent"):
        if status == "pending":
            return "on_order"
    return status


def is_pickable_part(part) -> bool:
    """Can go on a pick list: in the loading bay, storage or a vehicle."""
    part = _as_part(part)
    if normalize_legacy_part_status(part.status) in ("cancelled", "installed"):
        return False
    return effective_part_status(part) in PICKABLE_PART_STATUSES
