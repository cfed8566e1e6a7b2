"""
In-memory record types for TMS.

This module exports the domain records and enums.
"""

# Enums
from tms.models.enums import Priority, ShipmentStatus, SortOrder, UserRole

# Records
from tms.models.shipment import Shipment
from tms.models.user import User

__all__ = [
    # Enums
    "Priority",
    "ShipmentStatus",
    "SortOrder",
    "UserRole",
    # Records
    "Shipment",
    "User",
]
