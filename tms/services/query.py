"""
Shipment query pipeline: filter -> sort -> paginate.

All functions are pure: they take a snapshot of the collection and return
new lists, never touching the store.
"""
import math
from dataclasses import dataclass
from datetime import datetime
from functools import cmp_to_key
from operator import attrgetter
from typing import Any, Callable, Optional

from pyuca import Collator

from tms.core.exceptions import ValidationError
from tms.models.enums import ShipmentStatus, SortOrder
from tms.models.shipment import Shipment
from tms.schemas.shipment import PaginationParams, ShipmentFilter, SortParams

DEFAULT_PAGE_SIZE = 10

# Default Unicode collation table, loaded once
_COLLATOR = Collator()

# GraphQL field name -> record attribute
_SORTABLE_ATTRIBUTES = {
    "id": "id",
    "shipperName": "shipper_name",
    "carrierName": "carrier_name",
    "pickupLocation": "pickup_location",
    "deliveryLocation": "delivery_location",
    "pickupDate": "pickup_date",
    "deliveryDate": "delivery_date",
    "status": "status",
    "trackingNumber": "tracking_number",
    "weight": "weight",
    "dimensions": "dimensions",
    "rate": "rate",
    "currency": "currency",
    "priority": "priority",
    "flagged": "flagged",
    "notes": "notes",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}

SORT_ACCESSORS: dict[str, Callable[[Shipment], Any]] = {
    name: attrgetter(attribute) for name, attribute in _SORTABLE_ATTRIBUTES.items()
}
# snake_case attribute names are accepted too
SORT_ACCESSORS.update(
    {attribute: attrgetter(attribute) for attribute in _SORTABLE_ATTRIBUTES.values()}
)


@dataclass
class ShipmentPage:
    """One page of a filtered, sorted listing."""
    shipments: list[Shipment]
    total_count: int  # after filtering, before pagination
    page: int
    limit: int
    total_pages: int

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev_page(self) -> bool:
        return self.page > 1


@dataclass
class ShipmentStats:
    """Status counts over the whole, unfiltered collection."""
    total: int
    pending: int
    in_transit: int
    delivered: int
    cancelled: int
    flagged: int


# =========================================================================
# Filter
# =========================================================================
def _contains(haystack: str, needle: str) -> bool:
    return needle.lower() in haystack.lower()


def matches_filter(shipment: Shipment, spec: ShipmentFilter) -> bool:
    """Check one shipment against every constraint present in ``spec``."""
    if spec.status and shipment.status != spec.status:
        return False
    if spec.carrier_name and not _contains(shipment.carrier_name, spec.carrier_name):
        return False
    if spec.shipper_name and not _contains(shipment.shipper_name, spec.shipper_name):
        return False
    if spec.priority and shipment.priority != spec.priority:
        return False
    if spec.flagged is not None and shipment.flagged != spec.flagged:
        return False
    if spec.search_term and not _contains(shipment.searchable_text, spec.search_term):
        return False
    return True


def apply_filters(shipments: list[Shipment], spec: Optional[ShipmentFilter]) -> list[Shipment]:
    if spec is None:
        return list(shipments)
    return [s for s in shipments if matches_filter(s, spec)]


# =========================================================================
# Sort
# =========================================================================
def resolve_sort_field(field: str) -> Callable[[Shipment], Any]:
    try:
        return SORT_ACCESSORS[field]
    except KeyError:
        raise ValidationError(
            f"Invalid sort field: {field}",
            {"field": field, "allowed": sorted(_SORTABLE_ATTRIBUTES)},
        ) from None


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def _compare_text(a: str, b: str) -> int:
    # Full Unicode collation: accents and case are weaker than base letters
    key_a, key_b = _COLLATOR.sort_key(a), _COLLATOR.sort_key(b)
    if key_a == key_b:
        return 0
    return -1 if key_a < key_b else 1


def _as_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def compare_values(a: Any, b: Any) -> int:
    """Three-way compare of two non-missing field values."""
    if isinstance(a, str) and isinstance(b, str):
        return _compare_text(a, b)
    if _is_number(a) and _is_number(b):
        return _sign(a - b)
    if isinstance(a, datetime) and isinstance(b, datetime):
        return -1 if a < b else (1 if a > b else 0)
    return _compare_text(_as_text(a), _as_text(b))


def apply_sort(shipments: list[Shipment], spec: Optional[SortParams]) -> list[Shipment]:
    """Stable sort by one field.

    A missing value orders after a present one, and DESC negates the whole
    comparison, so missing values end up last under ASC and first under DESC.
    """
    if spec is None:
        return list(shipments)

    accessor = resolve_sort_field(spec.field)
    direction = -1 if spec.order == SortOrder.DESC else 1

    def compare(a: Shipment, b: Shipment) -> int:
        value_a, value_b = accessor(a), accessor(b)
        if value_a is None and value_b is None:
            return 0
        if value_a is None:
            result = 1
        elif value_b is None:
            result = -1
        else:
            result = compare_values(value_a, value_b)
        return direction * result

    return sorted(shipments, key=cmp_to_key(compare))


# =========================================================================
# Paginate
# =========================================================================
def apply_pagination(
    shipments: list[Shipment],
    pagination: Optional[PaginationParams],
    default_limit: int = DEFAULT_PAGE_SIZE,
) -> ShipmentPage:
    """Slice one 1-based page.

    Pages past the end or below 1 give an empty slice; nothing is clamped.
    """
    page = 1
    limit = default_limit
    if pagination is not None:
        if pagination.page is not None:
            page = pagination.page
        if pagination.limit is not None and pagination.limit > 0:
            limit = pagination.limit

    total_count = len(shipments)
    if page >= 1:
        start = (page - 1) * limit
        items = shipments[start:start + limit]
    else:
        items = []

    return ShipmentPage(
        shipments=items,
        total_count=total_count,
        page=page,
        limit=limit,
        total_pages=math.ceil(total_count / limit),
    )


def run_query(
    shipments: list[Shipment],
    filter_spec: Optional[ShipmentFilter] = None,
    sort_spec: Optional[SortParams] = None,
    pagination: Optional[PaginationParams] = None,
    default_limit: int = DEFAULT_PAGE_SIZE,
) -> ShipmentPage:
    """Run the full pipeline in its fixed order."""
    filtered = apply_filters(shipments, filter_spec)
    ordered = apply_sort(filtered, sort_spec)
    return apply_pagination(ordered, pagination, default_limit)


def compute_stats(shipments: list[Shipment]) -> ShipmentStats:
    return ShipmentStats(
        total=len(shipments),
        pending=sum(1 for s in shipments if s.status == ShipmentStatus.PENDING),
        in_transit=sum(1 for s in shipments if s.status == ShipmentStatus.IN_TRANSIT),
        delivered=sum(1 for s in shipments if s.status == ShipmentStatus.DELIVERED),
        cancelled=sum(1 for s in shipments if s.status == ShipmentStatus.CANCELLED),
        flagged=sum(1 for s in shipments if s.flagged),
    )
