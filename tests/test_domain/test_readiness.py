"""Tests for part readiness classification and the readiness summary."""

import copy
from datetime import datetime

import pytest

from field_logistics.domain.readiness import (
    ReadinessSummary,
    compute_parts_status,
    effective_part_status,
    is_part_ordered,
    is_part_ready,
    is_pickable_part,
    map_po_status_to_part_status,
)
from field_logistics.domain.records import PartRecord


class TestIsPartReady:
    """Test the Ready classification."""

    @pytest.mark.parametrize("status", [
        "in_storage", "in_loading_bay", "in_vehicle", "installed",
        "Delivered", "With Technician",
    ])
    def test_ready_statuses(self, status):
        assert is_part_ready({"status": status})

    @pytest.mark.parametrize("status", [
        "pending", "on_order", "in_transit", "cancelled", None,
    ])
    def test_not_ready_statuses(self, status):
        assert not is_part_ready({"status": status})

    def test_received_quantity_makes_ready(self):
        assert is_part_ready({"status": "pending", "received_qty": 1})
        assert is_part_ready({"quantity_received": "2"})

    def test_unrecognized_status_is_not_ready(self):
        assert not is_part_ready({"status": "ready"})

    def test_accepts_records(self):
        assert is_part_ready(PartRecord(status="in_storage"))


class TestIsPartOrdered:
    """Test the Ordered classification."""

    def test_ordered_statuses(self):
        assert is_part_ordered({"status": "on_order"})
        assert is_part_ordered({"status": "Back-ordered"})

    def test_po_link_makes_ordered(self):
        assert is_part_ordered({"status": "pending", "linked_po_id": "po9"})

    def test_link_to_closed_po_still_counts(self):
        # Link presence alone decides, whatever the PO's state
        part = {"status": "pending", "po_id": "po-cancelled"}
        assert is_part_ordered(part)

    def test_pending_without_link(self):
        assert not is_part_ordered({"status": "pending"})

    def test_non_mapping_part(self):
        assert not is_part_ordered(None)


class TestComputePartsStatus:
    """Test the readiness summary fold."""

    def test_empty_inputs(self, now):
        summary = compute_parts_status([], [], now=now)
        assert summary.as_dict() == {
            "required_count": 0,
            "ready_count": 0,
            "ordered_count": 0,
            "missing_count": 0,
            "parts_ready": False,
            "open_po_count": 0,
            "overdue_po_count": 0,
        }

    def test_none_inputs(self, now):
        assert compute_parts_status(None, None, now=now) == ReadinessSummary()

    def test_required_count_is_sum_of_required(self, sample_parts, now):
        summary = compute_parts_status(sample_parts, [], now=now)
        assert summary.required_count == 5 + 2 + 4 + 1

    def test_required_count_uses_default_of_one(self, now):
        summary = compute_parts_status([{}, {}, {"quantity": 3}], now=now)
        assert summary.required_count == 5

    def test_counts_partition_required_quantity(self, sample_parts, now):
        summary = compute_parts_status(sample_parts, [], now=now)
        assert (summary.ready_count + summary.ordered_count
                + summary.missing_count) == summary.required_count

    def test_example_project(self, next_week, now):
        parts = [
            {"quantity_required": 5, "received_qty": 3, "status": "in_storage"},
            {"quantity_required": 2, "status": "on_order",
             "purchase_order_id": "po1"},
        ]
        pos = [{"id": "po1", "status": "sent", "expected_date": next_week}]
        summary = compute_parts_status(parts, pos, now=now)
        assert summary.required_count == 7
        assert summary.ready_count == 3
        # Remainder of the first part has no PO link of its own
        assert summary.missing_count == 2
        assert summary.ordered_count == 2
        assert summary.open_po_count == 1
        assert summary.overdue_po_count == 0
        assert summary.parts_ready is False

    def test_ready_status_without_received_is_fully_ready(self, now):
        summary = compute_parts_status(
            [{"quantity_required": 4, "status": "in_vehicle"}], now=now)
        assert summary.ready_count == 4
        assert summary.missing_count == 0

    def test_ready_remainder_goes_to_ordered_when_linked(self, now):
        part = {"quantity_required": 5, "received_qty": 2,
                "status": "on_order", "po_id": "po1"}
        summary = compute_parts_status([part], now=now)
        assert summary.ready_count == 2
        assert summary.ordered_count == 3
        assert summary.missing_count == 0

    def test_ready_portion_never_missing(self, now):
        part = {"quantity_required": 5, "received_qty": 5, "status": "pending"}
        summary = compute_parts_status([part], now=now)
        assert summary.ready_count == 5
        assert summary.missing_count == 0

    def test_received_above_required_is_clamped(self, now):
        part = {"quantity_required": 2, "received_qty": 10}
        summary = compute_parts_status([part], now=now)
        assert summary.ready_count == 2
        assert summary.parts_ready is True

    def test_ordered_part(self, now):
        summary = compute_parts_status(
            [{"quantity_required": 3, "status": "in_transit"}], now=now)
        assert summary.ordered_count == 3

    def test_missing_part(self, now):
        summary = compute_parts_status(
            [{"quantity_required": 3, "status": "pending"}], now=now)
        assert summary.missing_count == 3

    def test_full_readiness(self, now):
        parts = [
            {"quantity_required": 2, "received_qty": 2, "status": "in_storage"},
            {"quantity_required": 1, "received_qty": 1, "status": "in_storage"},
        ]
        summary = compute_parts_status(parts, [], now=now)
        assert summary.parts_ready is True
        assert summary.missing_count == 0

    def test_malformed_numbers_count_as_zero(self, now):
        part = {"quantity_required": "several", "received_qty": "n/a",
                "status": "pending"}
        summary = compute_parts_status([part], now=now)
        assert summary.required_count == 0
        assert summary.missing_count == 0
        assert summary.parts_ready is False

    def test_unrecognized_status_warned_once(self, registry, now):
        parts = [{"status": "Lost In Space"}, {"status": "Lost In Space"}]
        summary = compute_parts_status(parts, now=now, warnings=registry)
        assert summary.missing_count == 2
        assert len(registry) == 1

    def test_inputs_not_mutated(self, sample_parts, now, yesterday):
        pos = [{"id": "po1", "status": "sent", "expected_date": yesterday}]
        parts_before = copy.deepcopy(sample_parts)
        pos_before = copy.deepcopy(pos)
        compute_parts_status(sample_parts, pos, now=now)
        assert sample_parts == parts_before
        assert pos == pos_before

    def test_logistics_jobs_do_not_change_counts(self, sample_parts,
                                                 sample_jobs, now):
        without = compute_parts_status(sample_parts, [], now=now)
        with_jobs = compute_parts_status(sample_parts, [], sample_jobs, now=now)
        assert without == with_jobs


class TestPurchaseOrderCounts:
    """Test open / overdue purchase order counting."""

    def test_sent_po_past_eta_is_overdue(self, now, yesterday):
        pos = [{"id": "po1", "status": "sent", "expected_date": yesterday}]
        summary = compute_parts_status([], pos, now=now)
        assert summary.open_po_count == 1
        assert summary.overdue_po_count == 1

    def test_received_po_is_neither(self, now, yesterday):
        pos = [{"id": "po1", "status": "received", "expected_date": yesterday}]
        summary = compute_parts_status([], pos, now=now)
        assert summary.open_po_count == 0
        assert summary.overdue_po_count == 0

    @pytest.mark.parametrize("status", ["completed", "Closed", "cancelled"])
    def test_closed_statuses(self, status, now, yesterday):
        pos = [{"status": status, "expected_date": yesterday}]
        assert compute_parts_status([], pos, now=now).open_po_count == 0

    def test_delivered_po_is_open_but_not_overdue(self, now, yesterday):
        pos = [{"status": "in_loading_bay", "expected_date": yesterday}]
        summary = compute_parts_status([], pos, now=now)
        assert summary.open_po_count == 1
        assert summary.overdue_po_count == 0

    @pytest.mark.parametrize("status", ["Canceled", "canceled"])
    def test_legacy_cancelled_spelling_is_closed(self, status, now, yesterday):
        pos = [{"status": status, "expected_date": yesterday}]
        summary = compute_parts_status([], pos, now=now)
        assert summary.open_po_count == 0
        assert summary.overdue_po_count == 0

    @pytest.mark.parametrize("status", [
        "Delivered to Delivery Bay", "Ready for Pick up", "At Delivery Bay",
        "Completed in Storage",
    ])
    def test_legacy_arrived_spellings_not_overdue(self, status, now,
                                                  yesterday):
        pos = [{"status": status, "expected_date": yesterday}]
        summary = compute_parts_status([], pos, now=now)
        assert summary.open_po_count == 1
        assert summary.overdue_po_count == 0

    def test_legacy_in_transit_spelling_can_be_overdue(self, now, yesterday):
        pos = [{"status": "Partially Received", "expected_date": yesterday}]
        summary = compute_parts_status([], pos, now=now)
        assert summary.open_po_count == 1
        assert summary.overdue_po_count == 1

    def test_future_eta_not_overdue(self, now, next_week):
        pos = [{"status": "on_order", "eta": next_week}]
        assert compute_parts_status([], pos, now=now).overdue_po_count == 0

    def test_missing_or_invalid_eta_not_overdue(self, now):
        pos = [{"status": "sent"}, {"status": "sent", "eta": "whenever"}]
        summary = compute_parts_status([], pos, now=now)
        assert summary.open_po_count == 2
        assert summary.overdue_po_count == 0

    def test_missing_status_is_open(self, now):
        assert compute_parts_status([], [{}], now=now).open_po_count == 1

    def test_naive_now_is_treated_as_utc(self, yesterday):
        pos = [{"status": "sent", "expected_date": yesterday}]
        summary = compute_parts_status(
            [], pos, now=datetime(2026, 10, 19, 12, 0))
        assert summary.overdue_po_count == 1

    def test_default_now(self):
        pos = [{"status": "sent", "expected_date": "2000-01-01"}]
        assert compute_parts_status([], pos).overdue_po_count == 1


class TestEffectiveStatus:
    """Test PO-driven status promotion and pick list eligibility."""

    @pytest.mark.parametrize("po_status,expected", [
        ("draft", "pending"),
        ("Sent", "on_order"),
        ("partially_received", "in_transit"),
        ("Delivered", "in_loading_bay"),
        ("in storage", "in_storage"),
        ("cancelled", "pending"),
        (None, "pending"),
    ])
    def test_map_po_status_to_part_status(self, po_status, expected):
        assert map_po_status_to_part_status(po_status) == expected

    def test_pending_promoted_by_sent_po(self):
        assert effective_part_status(
            {"status": "pending", "po_status": "sent"}) == "on_order"

    def test_on_order_promoted_by_received_po(self):
        assert effective_part_status(
            {"status": "on_order", "po_status": "Received"}) == "in_loading_bay"

    def test_never_demoted(self):
        assert effective_part_status(
            {"status": "in_storage", "po_status": "sent"}) == "in_storage"
        assert effective_part_status(
            {"status": "in_transit", "po_status": "on_order"}) == "in_transit"

    def test_po_in_vehicle_promotes_directly(self):
        assert effective_part_status(
            {"status": "pending", "purchase_order_status": "In Vehicle"}
        ) == "in_vehicle"

    def test_no_po_status(self):
        assert effective_part_status({"status": "Ordered"}) == "on_order"

    def test_pickable(self):
        assert is_pickable_part({"status": "in_storage"})
        assert is_pickable_part({"status": "pending", "po_status": "delivered"})

    def test_not_pickable(self):
        assert not is_pickable_part({"status": "installed"})
        assert not is_pickable_part({"status": "cancelled",
                                     "po_status": "in_storage"})
        assert not is_pickable_part({"status": "on_order"})
