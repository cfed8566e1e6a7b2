"""Business services for TMS."""
from tms.services.auth import AuthService
from tms.services.shipments import ShipmentService

__all__ = ["AuthService", "ShipmentService"]
