"""Logistics job numbers.

Project-linked jobs are numbered ``#<project>-<code>`` and then
``#<project>-<code>-2``, ``-3``... for further jobs with the same
purpose. Jobs without a project get ``#LOG-<code>-<short id>``.
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Optional

from field_logistics.config import Config
from field_logistics.domain.records import as_job_records, as_purchase_order_records
from field_logistics.utils.constants import (
    DEFAULT_PURPOSE_CODE,
    LOGISTICS_PURPOSES,
    PURPOSE_CODES,
)

logger = logging.getLogger(__name__)

_SHORT_PURPOSE_CODES = {
    "po-del": "po_delivery_to_warehouse",
    "po-pu": "po_pickup_from_supplier",
    "part-pu": "part_pickup_for_install",
    "drop": "manual_client_dropoff",
    "samp-do": "sample_dropoff",
    "samp-pu": "sample_pickup",
}


@dataclass
class NumberingPlan:
    assignments: dict[str, str] = field(default_factory=dict)
    skipped: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def updated(self) -> int:
        return len(self.assignments)


def normalize_logistics_purpose(value) -> str:
    """Map any purpose spelling to a known purpose; never returns None."""
    if not value:
        return "other"
    raw = str(value).strip().lower()
    if raw in LOGISTICS_PURPOSES:
        return raw
    if raw in _SHORT_PURPOSE_CODES:
        return _SHORT_PURPOSE_CODES[raw]

    if "delivery" in raw or ("po" in raw and "warehouse" in raw):
        return "po_delivery_to_warehouse"
    if "pickup" in raw and "supplier" in raw:
        return "po_pickup_from_supplier"
    if "pickup" in raw and "material" in raw:
        return "part_pickup_for_install"
    if "sample" in raw and "pickup" in raw:
        return "sample_pickup"
    if "sample" in raw and "drop" in raw:
        return "sample_dropoff"
    if "dropoff" in raw or "client" in raw:
        return "manual_client_dropoff"
    return "other"


def get_purpose_code(purpose) -> str:
    return PURPOSE_CODES.get(purpose, DEFAULT_PURPOSE_CODE)


def build_logistics_job_number(project_number, purpose_code: str,
                               sequence: int = 1,
                               fallback_short_id: str = "",
                               prefix: Optional[str] = None) -> str:
    if not project_number:
        prefix = prefix or Config.LOGISTICS_NUMBER_PREFIX
        return f"#{prefix}-{purpose_code}-{fallback_short_id}"
    if sequence == 1:
        return f"#{project_number}-{purpose_code}"
    return f"#{project_number}-{purpose_code}-{sequence}"


def is_logistics_job_number(value, prefix: Optional[str] = None) -> bool:
    if not value:
        return False
    prefix = re.escape(prefix or Config.LOGISTICS_NUMBER_PREFIX)
    pattern = rf"^#(\d+|{prefix})-[A-Z]+(-[A-Z]+)?(-[A-Za-z0-9]+)?$"
    return re.match(pattern, str(value)) is not None


def next_logistics_sequence(existing_numbers, project_number,
                            purpose_code: str) -> int:
    """Sequence to use for the next job with this project and purpose."""
    base = f"#{project_number}-{purpose_code}"
    suffix = re.compile(rf"^{re.escape(base)}-(\d+)$")
    sequences = []
    for number in existing_numbers or []:
        number = str(number)
        if number == base:
            sequences.append(1)
            continue
        match = suffix.match(number)
        if match:
            sequences.append(int(match.group(1)))
    return max(sequences) + 1 if sequences else 1


def plan_logistics_job_numbers(jobs, projects=None, purchase_orders=None,
                               limit: Optional[int] = None,
                               prefix: Optional[str] = None) -> NumberingPlan:
    """Work out the job numbers missing or malformed logistics jobs need.

    Nothing is written; the caller applies ``plan.assignments``. Jobs that
    already carry a valid number are counted in ``plan.skipped``.
    """
    job_records = as_job_records(jobs)
    project_numbers = {}
    for project in projects or []:
        if isinstance(project, Mapping) and project.get("id") is not None:
            number = project.get("project_number")
            if number is not None and number != "":
                project_numbers[str(project["id"])] = str(number)
    po_projects = {
        po.id: po.project_id
        for po in as_purchase_order_records(purchase_orders)
        if po.id
    }

    taken = [job.job_number for job in job_records
             if is_logistics_job_number(job.job_number, prefix)]
    plan = NumberingPlan()

    for job in job_records:
        if is_logistics_job_number(job.job_number, prefix):
            plan.skipped += 1
            continue
        if not job.id:
            plan.errors.append(
                f"Job {job.job_number or '(unnumbered)'} has no id")
            continue

        project_number = project_numbers.get(job.project_id)
        if project_number is None and job.purchase_order_id:
            project_number = project_numbers.get(
                po_projects.get(job.purchase_order_id))

        purpose_code = get_purpose_code(
            normalize_logistics_purpose(job.logistics_purpose))
        if project_number:
            sequence = next_logistics_sequence(
                taken, project_number, purpose_code)
            number = build_logistics_job_number(
                project_number, purpose_code, sequence)
        else:
            number = build_logistics_job_number(
                None, purpose_code,
                fallback_short_id=job.id[:6], prefix=prefix)

        taken.append(number)
        plan.assignments[job.id] = number
        logger.info(
            f"Job {job.id}: {job.job_number or 'null'} -> {number}")

        if limit and plan.updated >= limit:
            logger.info(f"Reached limit of {limit} job number updates")
            break

    return plan
