"""
Enum type definitions for TMS.

Values double as the GraphQL enum members exposed by the API.
"""
from enum import Enum


class ShipmentStatus(str, Enum):
    """Shipment lifecycle status.

    Any status may follow any other; no transition rules are enforced.
    """
    PENDING = "PENDING"                    # Created, awaiting pickup
    PICKED_UP = "PICKED_UP"                # Collected from the shipper
    IN_TRANSIT = "IN_TRANSIT"              # Moving between hubs
    OUT_FOR_DELIVERY = "OUT_FOR_DELIVERY"  # On the final leg
    DELIVERED = "DELIVERED"                # Handed to the consignee
    CANCELLED = "CANCELLED"                # Cancelled by customer/system
    ON_HOLD = "ON_HOLD"                    # Held (customs, payment, damage)


class Priority(str, Enum):
    """Shipment handling priority."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


class UserRole(str, Enum):
    """Authorization role of a user account."""
    ADMIN = "ADMIN"        # Full shipment management
    EMPLOYEE = "EMPLOYEE"  # Read access plus flagging

    @property
    def is_admin(self) -> bool:
        return self == UserRole.ADMIN


class SortOrder(str, Enum):
    """Sort direction for shipment listings."""
    ASC = "ASC"
    DESC = "DESC"
