"""Application-wide constants."""

APP_NAME = "Field-Logistics"
APP_VERSION = "1.0.0"

# ── Part status ──────────────────────────────────────────────────
PART_STATUSES = [
    "pending",
    "on_order",
    "in_transit",
    "in_loading_bay",
    "in_storage",
    "in_vehicle",
    "installed",
    "cancelled",
]

PART_STATUS_LABELS = {
    "pending": "Pending",
    "on_order": "On Order",
    "in_transit": "In Transit",
    "in_loading_bay": "In Loading Bay",
    "in_storage": "In Storage",
    "in_vehicle": "In Vehicle",
    "installed": "Installed",
    "cancelled": "Cancelled",
}

DEFAULT_PART_STATUS = "pending"

# Keys are lower-cased with whitespace collapsed to underscores
LEGACY_PART_STATUS_MAP = {
    "pending": "pending",
    "ordered": "on_order",
    "on_order": "on_order",
    "back-ordered": "in_transit",
    "back_ordered": "in_transit",
    "backordered": "in_transit",
    "in_transit": "in_transit",
    "delivered": "in_loading_bay",
    "arrived": "in_loading_bay",
    "at_delivery_bay": "in_loading_bay",
    "in_loading_bay": "in_loading_bay",
    "in_storage": "in_storage",
    "in_warehouse_storage": "in_storage",
    "on_vehicle": "in_vehicle",
    "in_vehicle": "in_vehicle",
    "with_technician": "in_vehicle",
    "installed": "installed",
    "at_client_site": "installed",
    "returned": "cancelled",
    "cancelled": "cancelled",
    "canceled": "cancelled",
}

# Physically available for the job
READY_PART_STATUSES = frozenset({
    "in_storage",
    "in_loading_bay",
    "in_vehicle",
    "installed",
})

ORDERED_PART_STATUSES = frozenset({"on_order", "in_transit"})

PICKABLE_PART_STATUSES = frozenset({
    "in_loading_bay",
    "in_storage",
    "in_vehicle",
})

# Any populated field counts as a purchase-order link
PART_PO_LINK_FIELDS = [
    "purchase_order_id",
    "linked_po_id",
    "po_id",
    "purchase_order_line_id",
]

# ── Part location ────────────────────────────────────────────────
PART_LOCATIONS = [
    "supplier",
    "loading_bay",
    "warehouse_storage",
    "vehicle",
    "client_site",
]

PART_LOCATION_LABELS = {
    "supplier": "At Supplier",
    "loading_bay": "Loading Bay",
    "warehouse_storage": "Warehouse Storage",
    "vehicle": "In Vehicle",
    "client_site": "At Client Site",
}

DEFAULT_PART_LOCATION = "supplier"

LEGACY_PART_LOCATION_MAP = {
    "supplier": "supplier",
    "at_supplier": "supplier",
    "on_order": "supplier",
    "loading_bay": "loading_bay",
    "in_loading_bay": "loading_bay",
    "delivery_bay": "loading_bay",
    "at_delivery_bay": "loading_bay",
    "warehouse_storage": "warehouse_storage",
    "in_warehouse_storage": "warehouse_storage",
    "warehouse": "warehouse_storage",
    "storage": "warehouse_storage",
    "vehicle": "vehicle",
    "in_vehicle": "vehicle",
    "with_technician": "vehicle",
    "client_site": "client_site",
    "at_client_site": "client_site",
    "site": "client_site",
}

# ── Purchase order status ────────────────────────────────────────
PO_STATUSES = [
    "draft",
    "sent",
    "on_order",
    "in_transit",
    "in_loading_bay",
    "in_storage",
    "in_vehicle",
    "installed",
    "completed",
    "closed",
    "cancelled",
]

PO_STATUS_LABELS = {
    "draft": "Draft",
    "sent": "Sent",
    "on_order": "On Order",
    "in_transit": "In Transit",
    "in_loading_bay": "In Loading Bay",
    "in_storage": "In Storage",
    "in_vehicle": "In Vehicle",
    "installed": "Installed",
    "completed": "Completed",
    "closed": "Closed",
    "cancelled": "Cancelled",
}

DEFAULT_PO_STATUS = "draft"

LEGACY_PO_STATUS_MAP = {
    "draft": "draft",
    "sent": "sent",
    "ordered": "on_order",
    "on_order": "on_order",
    "in_transit": "in_transit",
    "partially_received": "in_transit",
    "received": "in_loading_bay",
    "delivered": "in_loading_bay",
    "arrived": "in_loading_bay",
    "delivered_loading_bay": "in_loading_bay",
    "delivered_to_delivery_bay": "in_loading_bay",
    "delivered_to_loading_bay": "in_loading_bay",
    "ready_for_pickup": "in_loading_bay",
    "ready_for_pick_up": "in_loading_bay",
    "ready_to_pickup": "in_loading_bay",
    "at_delivery_bay": "in_loading_bay",
    "in_delivery_bay": "in_loading_bay",
    "loading_bay": "in_loading_bay",
    "in_loading_bay": "in_loading_bay",
    "in_storage": "in_storage",
    "completed_in_storage": "in_storage",
    "in_vehicle": "in_vehicle",
    "completed_in_vehicle": "in_vehicle",
    "installed": "installed",
    "completed": "completed",
    "closed": "closed",
    "cancelled": "cancelled",
    "canceled": "cancelled",
}

# Matched against both the generic status key and the legacy-mapped value
CLOSED_PO_STATUSES = frozenset({"received", "completed", "closed", "cancelled"})

# Goods have arrived, so an ETA in the past is not overdue
RECEIVED_PO_STATUSES = frozenset({
    "received",
    "delivered",
    "arrived",
    "in_loading_bay",
    "in_storage",
    "in_vehicle",
    "installed",
    "completed",
})

INCOMING_PO_STATUSES = frozenset({"sent", "on_order", "in_transit"})

LOADING_BAY_PO_STATUSES = frozenset({"in_loading_bay"})

COMPLETED_PO_STATUSES = frozenset({"in_storage", "in_vehicle", "installed"})

# Supply board columns, in display order
PO_STAGE_LABELS = {
    "draft": "Draft",
    "on_order": "On Order",
    "ready_for_pickup": "Ready for Pickup",
    "at_delivery_bay": "At Delivery Bay",
    "completed": "Completed",
}

# Field names that may carry a PO's expected arrival, in priority order
PO_ETA_FIELDS = [
    "expected_date",
    "expected_delivery_date",
    "eta",
    "estimated_delivery_date",
    "delivery_date",
]

# ── Delivery / source type ───────────────────────────────────────
DELIVERY_METHODS = ["delivery", "pickup"]

SOURCE_TYPES = [
    "supplier_delivery",
    "supplier_pickup",
    "in_stock",
    "client_supplied",
]

SOURCE_TYPE_LABELS = {
    "supplier_delivery": "Supplier – Deliver to Warehouse",
    "supplier_pickup": "Supplier – Pickup Required",
    "in_stock": "In Stock",
    "client_supplied": "Client Supplied",
}

DEFAULT_SOURCE_TYPE = "supplier_delivery"

LEGACY_SOURCE_TYPE_MAP = {
    "supplier_delivery": "supplier_delivery",
    "supplier_–_deliver_to_warehouse": "supplier_delivery",
    "supplier_-_deliver_to_warehouse": "supplier_delivery",
    "deliver_to_warehouse": "supplier_delivery",
    "delivery": "supplier_delivery",
    "supplier_pickup": "supplier_pickup",
    "supplier_–_pickup_required": "supplier_pickup",
    "supplier_-_pickup_required": "supplier_pickup",
    "pickup_required": "supplier_pickup",
    "pickup": "supplier_pickup",
    "in_stock": "in_stock",
    "in_stock_(kgd)": "in_stock",
    "client_supplied": "client_supplied",
}

# ── Jobs ─────────────────────────────────────────────────────────
DEFAULT_LOGISTICS_JOB_TYPE_NAME = "Logistics"

# Raw job status -> bucket; anything else lands in "open"
LOGISTICS_JOB_BUCKETS = {
    "Open": "open",
    "Scheduled": "scheduled",
    "In Progress": "in_progress",
    "Completed": "completed",
}

JOB_STATUS_LABELS = {
    "open": "Open",
    "scheduled": "Scheduled",
    "in_progress": "In Progress",
    "completed": "Completed",
    "cancelled": "Cancelled",
}

# ── Logistics purposes & job numbering ──────────────────────────
LOGISTICS_PURPOSES = [
    "po_delivery_to_warehouse",
    "po_pickup_from_supplier",
    "part_pickup_for_install",
    "manual_client_dropoff",
    "sample_dropoff",
    "sample_pickup",
    "other",
]

PURPOSE_CODES = {
    "po_delivery_to_warehouse": "PO-DEL",
    "po_pickup_from_supplier": "PO-PU",
    "part_pickup_for_install": "PART-PU",
    "manual_client_dropoff": "DROP",
    "sample_dropoff": "SAMP-DO",
    "sample_pickup": "SAMP-PU",
}

DEFAULT_PURPOSE_CODE = "LOG"

# ── Status registry (entity type -> labels) ─────────────────────
STATUS_LABELS = {
    "part": PART_STATUS_LABELS,
    "part_location": PART_LOCATION_LABELS,
    "po": PO_STATUS_LABELS,
    "purchase_order": PO_STATUS_LABELS,
    "source_type": SOURCE_TYPE_LABELS,
    "job": JOB_STATUS_LABELS,
}

# Report output formats
REPORT_FORMATS = ["csv", "xlsx"]
