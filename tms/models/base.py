"""
Base helpers shared by the in-memory record types.
"""
from datetime import datetime, timezone
from uuid import uuid4


def utcnow() -> datetime:
    """Timezone-aware current time in UTC."""
    return datetime.now(timezone.utc)


def new_id() -> str:
    """Generate an opaque record identifier."""
    return str(uuid4())


class RecordMixin:
    """Mixin for dataclass records stored in memory."""

    _repr_fields: tuple[str, ...] = ("id",)

    def __repr__(self) -> str:
        class_name = self.__class__.__name__
        attrs = ", ".join(
            f"{k}={getattr(self, k)!r}" for k in self._repr_fields
        )
        return f"<{class_name}({attrs})>"
