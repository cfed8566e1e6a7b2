"""
Shipment record for TMS.

Field names are snake_case here; the GraphQL layer exposes them in camelCase.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from tms.models.base import RecordMixin, new_id, utcnow
from tms.models.enums import Priority, ShipmentStatus


@dataclass(repr=False)
class Shipment(RecordMixin):
    """
    A freight shipment tracked from pickup to delivery.

    Identity (``id``, ``tracking_number``) and ``created_at`` never change
    after creation. ``updated_at`` is re-stamped by the store on every
    mutation and is always >= ``created_at``.
    """

    _repr_fields = ("id", "tracking_number", "status")

    # Parties & route
    shipper_name: str
    carrier_name: str
    pickup_location: str
    delivery_location: str

    # Schedule (delivery is expected after pickup, not enforced)
    pickup_date: datetime
    delivery_date: datetime

    # Identification
    tracking_number: str

    # Cargo & pricing
    weight: float  # kg, positive
    rate: Optional[float]  # non-negative; None only on hand-built records
    dimensions: str = "0x0x0 cm"
    currency: str = "USD"

    # Operations
    status: ShipmentStatus = ShipmentStatus.PENDING
    priority: Priority = Priority.MEDIUM
    flagged: bool = False
    notes: Optional[str] = None

    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.updated_at is None:
            self.updated_at = self.created_at

    @property
    def searchable_text(self) -> str:
        """Text matched by the free-text search filter."""
        return " ".join(
            [
                self.shipper_name,
                self.carrier_name,
                self.tracking_number,
                self.pickup_location,
                self.delivery_location,
            ]
        )
