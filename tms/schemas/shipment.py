"""
Shipment Pydantic schemas: mutation inputs and query specs.
"""
from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from tms.models.enums import Priority, ShipmentStatus, SortOrder
from tms.schemas.base import BaseSchema, ensure_utc


class ShipmentCreate(BaseSchema):
    """Schema for creating a new shipment.

    Status, flag and tracking number are assigned by the server.
    """
    shipper_name: str = Field(..., min_length=1)
    carrier_name: str = Field(..., min_length=1)
    pickup_location: str = Field(..., min_length=1)
    delivery_location: str = Field(..., min_length=1)
    pickup_date: datetime
    delivery_date: datetime
    weight: float = Field(..., gt=0, description="Weight in kg")
    rate: float = Field(..., ge=0)

    dimensions: Optional[str] = None
    currency: Optional[str] = None
    priority: Optional[Priority] = None
    notes: Optional[str] = None

    normalize_dates = field_validator("pickup_date", "delivery_date")(ensure_utc)


class ShipmentUpdate(BaseSchema):
    """Schema for updating a shipment (all fields optional)."""
    shipper_name: Optional[str] = None
    carrier_name: Optional[str] = None
    pickup_location: Optional[str] = None
    delivery_location: Optional[str] = None
    pickup_date: Optional[datetime] = None
    delivery_date: Optional[datetime] = None
    status: Optional[ShipmentStatus] = None
    weight: Optional[float] = Field(None, gt=0)
    dimensions: Optional[str] = None
    rate: Optional[float] = Field(None, ge=0)
    currency: Optional[str] = None
    priority: Optional[Priority] = None
    flagged: Optional[bool] = None
    notes: Optional[str] = None

    normalize_dates = field_validator("pickup_date", "delivery_date")(ensure_utc)

    def changes(self) -> dict:
        """Fields the caller actually set.

        An explicit null only counts for ``notes``; on any other field it
        is ignored.
        """
        data = self.model_dump(exclude_unset=True)
        return {k: v for k, v in data.items() if v is not None or k == "notes"}


class ShipmentFilter(BaseSchema):
    """Optional match constraints, ANDed together."""
    status: Optional[ShipmentStatus] = None
    carrier_name: Optional[str] = None
    shipper_name: Optional[str] = None
    priority: Optional[Priority] = None
    flagged: Optional[bool] = None
    search_term: Optional[str] = None


class PaginationParams(BaseSchema):
    """1-based page number plus page size."""
    page: Optional[int] = None
    limit: Optional[int] = None


class SortParams(BaseSchema):
    """Sort field (GraphQL or attribute name) plus direction."""
    field: str
    order: SortOrder = SortOrder.ASC
