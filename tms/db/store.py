"""
In-memory record stores for TMS.

Both stores hold records in one process-local ordered list with no locking;
requests are served one at a time on a single event loop. Instances are
created by the application factory and injected into services.
"""
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Any, Iterable, Optional

from tms.models.base import utcnow
from tms.models.shipment import Shipment
from tms.models.user import User

# Fields a merge update may never overwrite
IMMUTABLE_SHIPMENT_FIELDS = frozenset({"id", "tracking_number", "created_at", "updated_at"})


class ShipmentStore:
    """Ordered shipment collection, most recently created first."""

    def __init__(self, shipments: Optional[Iterable[Shipment]] = None):
        self._shipments: list[Shipment] = list(shipments or [])

    def __len__(self) -> int:
        return len(self._shipments)

    def get_all(self) -> list[Shipment]:
        """Return a shallow snapshot of the collection in stored order."""
        return list(self._shipments)

    def get_by_id(self, shipment_id: str) -> Optional[Shipment]:
        return next((s for s in self._shipments if s.id == shipment_id), None)

    def insert(self, shipment: Shipment) -> Shipment:
        """Add a shipment at the head of the collection.

        Identifier and tracking number uniqueness is the caller's job.
        """
        self._shipments.insert(0, shipment)
        return shipment

    def update(self, shipment_id: str, changes: dict[str, Any]) -> Optional[Shipment]:
        """Merge ``changes`` into a shipment and stamp ``updated_at``.

        The stored record is replaced, never mutated in place, so snapshots
        handed out earlier keep their values.

        Returns:
            The updated shipment, or None if the id is unknown
        """
        index = self._index_of(shipment_id)
        if index is None:
            return None

        current = self._shipments[index]
        merged = {k: v for k, v in changes.items() if k not in IMMUTABLE_SHIPMENT_FIELDS}
        updated = replace(current, **merged, updated_at=self._next_stamp(current))
        self._shipments[index] = updated
        return updated

    def remove(self, shipment_id: str) -> bool:
        index = self._index_of(shipment_id)
        if index is None:
            return False
        del self._shipments[index]
        return True

    def _index_of(self, shipment_id: str) -> Optional[int]:
        for index, shipment in enumerate(self._shipments):
            if shipment.id == shipment_id:
                return index
        return None

    @staticmethod
    def _next_stamp(shipment: Shipment) -> datetime:
        # updated_at must strictly increase even within one clock tick
        now = utcnow()
        floor = max(shipment.updated_at, shipment.created_at) + timedelta(microseconds=1)
        return now if now >= floor else floor


class UserStore:
    """Seeded user accounts. No create/update/delete path exists."""

    def __init__(self, users: Optional[Iterable[User]] = None):
        self._users: list[User] = list(users or [])

    def get_all(self) -> list[User]:
        return list(self._users)

    def get_by_id(self, user_id: str) -> Optional[User]:
        return next((u for u in self._users if u.id == user_id), None)

    def get_by_email(self, email: str) -> Optional[User]:
        """Case-insensitive email lookup."""
        wanted = email.lower()
        return next((u for u in self._users if u.email.lower() == wanted), None)
