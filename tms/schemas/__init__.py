"""
Pydantic schemas for API input validation and responses.
"""

from tms.schemas.base import BaseSchema
from tms.schemas.auth import AuthPayload, UserResponse
from tms.schemas.shipment import (
    PaginationParams,
    ShipmentCreate,
    ShipmentFilter,
    ShipmentUpdate,
    SortParams,
)

__all__ = [
    # Base
    "BaseSchema",
    # Auth
    "AuthPayload",
    "UserResponse",
    # Shipment
    "PaginationParams",
    "ShipmentCreate",
    "ShipmentFilter",
    "ShipmentUpdate",
    "SortParams",
]
