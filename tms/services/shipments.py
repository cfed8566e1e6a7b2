"""
Shipment operations behind the authorization gate.

Every method takes the resolved caller first; gate checks run before any
input validation or store access.
"""
import logging
import secrets
import string
import time
from typing import Any, Mapping, Optional, Union

from tms.core.exceptions import NotFoundError
from tms.core.permissions import require_admin, require_authenticated
from tms.db.store import ShipmentStore
from tms.models.enums import Priority, ShipmentStatus
from tms.models.shipment import Shipment
from tms.schemas.auth import UserResponse
from tms.schemas.base import validate_input
from tms.schemas.shipment import (
    PaginationParams,
    ShipmentCreate,
    ShipmentFilter,
    ShipmentUpdate,
    SortParams,
)
from tms.services.query import (
    DEFAULT_PAGE_SIZE,
    ShipmentPage,
    ShipmentStats,
    compute_stats,
    run_query,
)

logger = logging.getLogger(__name__)

_TRACKING_ALPHABET = string.ascii_uppercase + string.digits


def generate_tracking_number() -> str:
    """Tracking number for a newly created shipment: TRK<epoch ms><6 chars>."""
    suffix = "".join(secrets.choice(_TRACKING_ALPHABET) for _ in range(6))
    return f"TRK{int(time.time() * 1000)}{suffix}"


class ShipmentService:
    """Queries and mutations over the shipment store."""

    def __init__(self, store: ShipmentStore, default_page_size: int = DEFAULT_PAGE_SIZE):
        self.store = store
        self.default_page_size = default_page_size

    # =====================================================================
    # Queries
    # =====================================================================
    def list_shipments(
        self,
        caller: Optional[UserResponse],
        filter_spec: Optional[ShipmentFilter] = None,
        pagination: Optional[PaginationParams] = None,
        sort: Optional[SortParams] = None,
    ) -> ShipmentPage:
        require_authenticated(caller)
        return run_query(
            self.store.get_all(),
            filter_spec=filter_spec,
            sort_spec=sort,
            pagination=pagination,
            default_limit=self.default_page_size,
        )

    def get_shipment(self, caller: Optional[UserResponse], shipment_id: str) -> Optional[Shipment]:
        """Look up one shipment; None (not an error) when unknown."""
        require_authenticated(caller)
        return self.store.get_by_id(shipment_id)

    def get_stats(self, caller: Optional[UserResponse]) -> ShipmentStats:
        require_authenticated(caller)
        return compute_stats(self.store.get_all())

    # =====================================================================
    # Mutations
    # =====================================================================
    def create_shipment(
        self,
        caller: Optional[UserResponse],
        data: Union[ShipmentCreate, Mapping[str, Any]],
    ) -> Shipment:
        """Create a shipment.

        Status is forced to PENDING, the flag to False, and the tracking
        number is generated here whatever the input says.
        """
        require_admin(caller, "Only admins can create shipments")
        data = validate_input(ShipmentCreate, data)

        shipment = Shipment(
            shipper_name=data.shipper_name,
            carrier_name=data.carrier_name,
            pickup_location=data.pickup_location,
            delivery_location=data.delivery_location,
            pickup_date=data.pickup_date,
            delivery_date=data.delivery_date,
            tracking_number=generate_tracking_number(),
            weight=data.weight,
            rate=data.rate,
            dimensions=data.dimensions or "0x0x0 cm",
            currency=data.currency or "USD",
            priority=data.priority or Priority.MEDIUM,
            status=ShipmentStatus.PENDING,
            flagged=False,
            notes=data.notes or None,
        )
        self.store.insert(shipment)

        logger.info(
            f"Shipment {shipment.tracking_number} ({shipment.id}) created by '{caller.email}'"
        )
        return shipment

    def update_shipment(
        self,
        caller: Optional[UserResponse],
        shipment_id: str,
        data: Union[ShipmentUpdate, Mapping[str, Any]],
    ) -> Shipment:
        """Merge the set fields into a shipment.

        Raises:
            NotFoundError: unknown id
        """
        require_admin(caller, "Only admins can update shipments")
        data = validate_input(ShipmentUpdate, data)

        changes = data.changes()
        updated = self.store.update(shipment_id, changes)
        if updated is None:
            raise NotFoundError("Shipment", shipment_id)

        logger.info(
            f"Shipment {shipment_id} updated by '{caller.email}': {sorted(changes)}"
        )
        return updated

    def delete_shipment(self, caller: Optional[UserResponse], shipment_id: str) -> bool:
        """Delete a shipment; False (not an error) when unknown."""
        require_admin(caller, "Only admins can delete shipments")

        deleted = self.store.remove(shipment_id)
        if deleted:
            logger.info(f"Shipment {shipment_id} deleted by '{caller.email}'")
        return deleted

    def toggle_flag(self, caller: Optional[UserResponse], shipment_id: str) -> Shipment:
        """Flip the flag. Open to any authenticated caller, not just admins.

        Raises:
            NotFoundError: unknown id
        """
        require_authenticated(caller)

        shipment = self.store.get_by_id(shipment_id)
        if shipment is None:
            raise NotFoundError("Shipment", shipment_id)

        updated = self.store.update(shipment_id, {"flagged": not shipment.flagged})

        logger.info(
            f"Shipment {shipment_id} {'flagged' if updated.flagged else 'unflagged'} "
            f"by '{caller.email}'"
        )
        return updated
