"""
GraphQL object and input types.

Python attributes are snake_case; Strawberry exposes them in camelCase.
"""
import dataclasses
from datetime import datetime
from typing import Any, Optional

import strawberry

from tms.models.enums import Priority, ShipmentStatus, SortOrder, UserRole
from tms.models.shipment import Shipment
from tms.schemas.auth import AuthPayload, UserResponse
from tms.schemas.shipment import PaginationParams, ShipmentFilter, SortParams
from tms.services.query import ShipmentPage, ShipmentStats

# Register the domain enums as GraphQL enums
strawberry.enum(ShipmentStatus)
strawberry.enum(Priority)
strawberry.enum(UserRole)
strawberry.enum(SortOrder)


def _set_fields(obj: Any) -> dict[str, Any]:
    """Input fields the client actually sent (UNSET ones dropped)."""
    return {
        f.name: getattr(obj, f.name)
        for f in dataclasses.fields(obj)
        if getattr(obj, f.name) is not strawberry.UNSET
    }


# =========================================================================
# Object types
# =========================================================================
@strawberry.type(name="User")
class UserType:
    id: strawberry.ID
    email: str
    name: str
    role: UserRole
    created_at: datetime

    @classmethod
    def from_model(cls, user: UserResponse) -> "UserType":
        return cls(
            id=strawberry.ID(user.id),
            email=user.email,
            name=user.name,
            role=user.role,
            created_at=user.created_at,
        )


@strawberry.type(name="AuthPayload")
class AuthPayloadType:
    token: str
    user: UserType

    @classmethod
    def from_model(cls, payload: AuthPayload) -> "AuthPayloadType":
        return cls(token=payload.token, user=UserType.from_model(payload.user))


@strawberry.type(name="Shipment")
class ShipmentType:
    id: strawberry.ID
    shipper_name: str
    carrier_name: str
    pickup_location: str
    delivery_location: str
    pickup_date: datetime
    delivery_date: datetime
    status: ShipmentStatus
    tracking_number: str
    weight: float
    dimensions: str
    rate: Optional[float]
    currency: str
    priority: Priority
    flagged: bool
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, shipment: Shipment) -> "ShipmentType":
        return cls(
            id=strawberry.ID(shipment.id),
            shipper_name=shipment.shipper_name,
            carrier_name=shipment.carrier_name,
            pickup_location=shipment.pickup_location,
            delivery_location=shipment.delivery_location,
            pickup_date=shipment.pickup_date,
            delivery_date=shipment.delivery_date,
            status=shipment.status,
            tracking_number=shipment.tracking_number,
            weight=shipment.weight,
            dimensions=shipment.dimensions,
            rate=shipment.rate,
            currency=shipment.currency,
            priority=shipment.priority,
            flagged=shipment.flagged,
            notes=shipment.notes,
            created_at=shipment.created_at,
            updated_at=shipment.updated_at,
        )


@strawberry.type(name="ShipmentsResponse")
class ShipmentsResponseType:
    shipments: list[ShipmentType]
    total_count: int
    page: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def from_page(cls, page: ShipmentPage) -> "ShipmentsResponseType":
        return cls(
            shipments=[ShipmentType.from_record(s) for s in page.shipments],
            total_count=page.total_count,
            page=page.page,
            total_pages=page.total_pages,
            has_next_page=page.has_next_page,
            has_prev_page=page.has_prev_page,
        )


@strawberry.type(name="ShipmentStats")
class ShipmentStatsType:
    total: int
    pending: int
    in_transit: int
    delivered: int
    cancelled: int
    flagged: int

    @classmethod
    def from_stats(cls, stats: ShipmentStats) -> "ShipmentStatsType":
        return cls(**dataclasses.asdict(stats))


# =========================================================================
# Input types
# =========================================================================
@strawberry.input(name="PaginationInput")
class PaginationInput:
    page: Optional[int] = None
    limit: Optional[int] = None

    def to_params(self) -> PaginationParams:
        return PaginationParams(page=self.page, limit=self.limit)


@strawberry.input(name="SortInput")
class SortInput:
    field: str
    order: SortOrder

    def to_params(self) -> SortParams:
        return SortParams(field=self.field, order=self.order)


@strawberry.input(name="ShipmentFilterInput")
class ShipmentFilterInput:
    status: Optional[ShipmentStatus] = None
    carrier_name: Optional[str] = None
    shipper_name: Optional[str] = None
    priority: Optional[Priority] = None
    flagged: Optional[bool] = None
    search_term: Optional[str] = None

    def to_params(self) -> ShipmentFilter:
        return ShipmentFilter(
            status=self.status,
            carrier_name=self.carrier_name,
            shipper_name=self.shipper_name,
            priority=self.priority,
            flagged=self.flagged,
            search_term=self.search_term,
        )


@strawberry.input(name="CreateShipmentInput")
class CreateShipmentInput:
    shipper_name: str
    carrier_name: str
    pickup_location: str
    delivery_location: str
    pickup_date: datetime
    delivery_date: datetime
    weight: float
    rate: float
    dimensions: Optional[str] = strawberry.UNSET
    currency: Optional[str] = strawberry.UNSET
    priority: Optional[Priority] = strawberry.UNSET
    notes: Optional[str] = strawberry.UNSET

    def to_data(self) -> dict[str, Any]:
        return _set_fields(self)


@strawberry.input(name="UpdateShipmentInput")
class UpdateShipmentInput:
    shipper_name: Optional[str] = strawberry.UNSET
    carrier_name: Optional[str] = strawberry.UNSET
    pickup_location: Optional[str] = strawberry.UNSET
    delivery_location: Optional[str] = strawberry.UNSET
    pickup_date: Optional[datetime] = strawberry.UNSET
    delivery_date: Optional[datetime] = strawberry.UNSET
    status: Optional[ShipmentStatus] = strawberry.UNSET
    weight: Optional[float] = strawberry.UNSET
    dimensions: Optional[str] = strawberry.UNSET
    rate: Optional[float] = strawberry.UNSET
    currency: Optional[str] = strawberry.UNSET
    priority: Optional[Priority] = strawberry.UNSET
    flagged: Optional[bool] = strawberry.UNSET
    notes: Optional[str] = strawberry.UNSET

    def to_data(self) -> dict[str, Any]:
        return _set_fields(self)
