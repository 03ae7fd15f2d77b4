"""Shared test fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from field_logistics.domain.warnings import WarningRegistry


@pytest.fixture
def now():
    """A fixed 'current time' so ETA checks are deterministic."""
    return datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def yesterday(now):
    return (now - timedelta(days=1)).date().isoformat()


@pytest.fixture
def next_week(now):
    return (now + timedelta(days=7)).date().isoformat()


@pytest.fixture
def registry():
    """A fresh warning registry per test."""
    return WarningRegistry()


@pytest.fixture
def sample_parts():
    """A small project's parts in mixed legacy/canonical spellings."""
    return [
        {"id": "p1", "quantity_required": 5, "received_qty": 3,
         "status": "in_storage"},
        {"id": "p2", "quantity_required": 2, "status": "on_order",
         "purchase_order_id": "po1"},
        {"id": "p3", "required_qty": 4, "status": "Pending"},
        {"id": "p4", "quantity": 1, "status": "Delivered"},
    ]


@pytest.fixture
def sample_jobs():
    return [
        {"id": "j1", "job_type_name": "Logistics", "status": "Open"},
        {"id": "j2", "job_type_name": "Logistics", "status": "Scheduled"},
        {"id": "j3", "job_type": {"name": "Logistics"},
         "status": "In Progress"},
        {"id": "j4", "job_type": "Logistics", "status": "Completed"},
        {"id": "j5", "job_type_name": "Logistics", "status": "Cancelled"},
        {"id": "j6", "job_type_name": "Install", "status": "Open"},
    ]
