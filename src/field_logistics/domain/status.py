"""Status registry and legacy status normalizers.

Historical records carry free-text statuses ("Delivered to Delivery Bay",
"With Technician", "Ready for Pick up"). Each domain (part status, part
location, PO status, source type) has one table mapping those spellings
to a canonical value. Values missing from the table pass through, tagged
as unrecognized so callers have to decide what to do with them.
"""

import re
from dataclasses import dataclass
from typing import Optional

from field_logistics.utils.constants import (
    DEFAULT_PART_LOCATION,
    DEFAULT_PART_STATUS,
    DEFAULT_PO_STATUS,
    DEFAULT_SOURCE_TYPE,
    LEGACY_PART_LOCATION_MAP,
    LEGACY_PART_STATUS_MAP,
    LEGACY_PO_STATUS_MAP,
    LEGACY_SOURCE_TYPE_MAP,
    STATUS_LABELS,
)

_WHITESPACE = re.compile(r"\s+")
_SEPARATORS = re.compile(r"[\s-]+")
_REPEATED_UNDERSCORES = re.compile(r"_+")


@dataclass(frozen=True)
class NormalizedStatus:
    """Outcome of a legacy lookup.

    ``value`` is the canonical value when ``recognized`` is True, otherwise
    the raw input returned verbatim.
    """
    value: str
    raw: Optional[str] = None
    recognized: bool = True

    def __str__(self) -> str:
        return self.value


def normalize_status_key(value) -> str:
    """Lower-case, underscore-separated form of any status value."""
    if not value:
        return ""
    key = str(value).strip().lower()
    key = _SEPARATORS.sub("_", key)
    return _REPEATED_UNDERSCORES.sub("_", key)


def _lookup_key(value: str) -> str:
    return _WHITESPACE.sub("_", value.strip().lower())


def _resolve(raw, legacy_map: dict[str, str],
             default: str) -> NormalizedStatus:
    if not raw:
        return NormalizedStatus(value=default, raw=raw, recognized=True)
    text = str(raw)
    canonical = legacy_map.get(_lookup_key(text))
    if canonical is None:
        return NormalizedStatus(value=text, raw=raw, recognized=False)
    return NormalizedStatus(value=canonical, raw=raw, recognized=True)


def resolve_part_status(raw) -> NormalizedStatus:
    return _resolve(raw, LEGACY_PART_STATUS_MAP, DEFAULT_PART_STATUS)


def resolve_part_location(raw) -> NormalizedStatus:
    return _resolve(raw, LEGACY_PART_LOCATION_MAP, DEFAULT_PART_LOCATION)


def resolve_po_status(raw) -> NormalizedStatus:
    return _resolve(raw, LEGACY_PO_STATUS_MAP, DEFAULT_PO_STATUS)


def resolve_source_type(raw) -> NormalizedStatus:
    return _resolve(raw, LEGACY_SOURCE_TYPE_MAP, DEFAULT_SOURCE_TYPE)


def normalize_legacy_part_status(raw) -> str:
    return resolve_part_status(raw).value


def normalize_legacy_part_location(raw) -> str:
    return resolve_part_location(raw).value


def normalize_legacy_po_status(raw) -> str:
    return resolve_po_status(raw).value


def normalize_source_type(raw) -> str:
    return resolve_source_type(raw).value


def get_status_label(entity_type: str, status) -> str:
    """Display label for a status, falling back to the raw value."""
    if not entity_type or not status:
        return ""
    labels = STATUS_LABELS.get(normalize_status_key(entity_type))
    if labels is None:
        return str(status)
    return (labels.get(normalize_status_key(status))
            or labels.get(status)
            or str(status))
