"""In-memory storage and demo data for TMS."""
from tms.db.seed import generate_shipments, generate_users
from tms.db.store import ShipmentStore, UserStore

__all__ = [
    "ShipmentStore",
    "UserStore",
    "generate_shipments",
    "generate_users",
]
