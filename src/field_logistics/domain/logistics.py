"""Logistics board grouping: incoming POs, loading bay, logistics jobs."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from field_logistics.config import Config
from field_logistics.domain.records import (
    JobRecord,
    PartRecord,
    PurchaseOrderRecord,
    as_job_records,
    as_part_records,
    as_purchase_order_records,
)
from field_logistics.utils.constants import (
    COMPLETED_PO_STATUSES,
    INCOMING_PO_STATUSES,
    LOADING_BAY_PO_STATUSES,
    LOGISTICS_JOB_BUCKETS,
)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


@dataclass
class LogisticsJobGroups:
    open: list[JobRecord] = field(default_factory=list)
    scheduled: list[JobRecord] = field(default_factory=list)
    in_progress: list[JobRecord] = field(default_factory=list)
    completed: list[JobRecord] = field(default_factory=list)

    @property
    def total(self) -> int:
        return (len(self.open) + len(self.scheduled)
                + len(self.in_progress) + len(self.completed))

    def as_dict(self) -> dict[str, list[JobRecord]]:
        return {
            "open": list(self.open),
            "scheduled": list(self.scheduled),
            "in_progress": list(self.in_progress),
            "completed": list(self.completed),
        }


@dataclass
class LogisticsSummary:
    incoming_po_count: int = 0
    logistics_job_count: int = 0
    loading_bay_part_count: int = 0

    def as_dict(self) -> dict:
        return {
            "incoming_po_count": self.incoming_po_count,
            "logistics_job_count": self.logistics_job_count,
            "loading_bay_part_count": self.loading_bay_part_count,
        }


def get_incoming_purchase_orders(purchase_orders) -> list[PurchaseOrderRecord]:
    """POs still on their way in, newest first.

    Undated POs sort after dated ones and otherwise keep their order.
    """
    incoming = [
        po for po in as_purchase_order_records(purchase_orders)
        if po.status_result.value in INCOMING_PO_STATUSES
    ]
    return sorted(
        incoming,
        key=lambda po: (po.created_date is not None,
                        po.created_date or _EPOCH),
        reverse=True,
    )


def get_loading_bay_parts(parts) -> list[PartRecord]:
    return [
        part for part in as_part_records(parts)
        if part.status_result.recognized
        and part.status_result.value == "in_loading_bay"
    ]


def get_logistics_jobs(jobs, job_type_name: str | None = None
                       ) -> LogisticsJobGroups:
    """Logistics jobs grouped by status; unknown statuses count as open."""
    job_type_name = job_type_name or Config.LOGISTICS_JOB_TYPE_NAME
    groups = LogisticsJobGroups()
    for job in as_job_records(jobs):
        if job.job_type_name != job_type_name:
            continue
        bucket = LOGISTICS_JOB_BUCKETS.get(job.status, "open")
        getattr(groups, bucket).append(job)
    return groups


def get_logistics_summary_stats(purchase_orders, jobs,
                                parts) -> LogisticsSummary:
    return LogisticsSummary(
        incoming_po_count=len(get_incoming_purchase_orders(purchase_orders)),
        logistics_job_count=get_logistics_jobs(jobs).total,
        loading_bay_part_count=len(get_loading_bay_parts(parts)),
    )


def group_purchase_orders_by_stage(purchase_orders
                                   ) -> dict[str, list[PurchaseOrderRecord]]:
    """Supply board columns. POs in no column (e.g. cancelled) are left out."""
    stages = {
        "draft": [],
        "on_order": [],
        "ready_for_pickup": [],
        "at_delivery_bay": [],
        "completed": [],
    }
    for po in as_purchase_order_records(purchase_orders):
        status = po.status_result.value
        if status == "draft":
            stages["draft"].append(po)
        elif status in INCOMING_PO_STATUSES:
            stages["on_order"].append(po)
        elif status in LOADING_BAY_PO_STATUSES:
            if po.delivery_method == "pickup":
                stages["ready_for_pickup"].append(po)
            elif po.delivery_method == "delivery":
                stages["at_delivery_bay"].append(po)
        elif status in COMPLETED_PO_STATUSES:
            stages["completed"].append(po)
    return stages
