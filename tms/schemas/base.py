"""
Base Pydantic schemas and common types.
"""
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from tms.core.exceptions import ValidationError


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,  # Build from dataclass records
        populate_by_name=True,
    )


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive timestamps as UTC so all stored datetimes are aware."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


SchemaT = TypeVar("SchemaT", bound=BaseSchema)


def validate_input(schema: Type[SchemaT], data: Union[SchemaT, Mapping[str, Any]]) -> SchemaT:
    """Validate raw input against ``schema``, raising the TMS ValidationError."""
    if isinstance(data, schema):
        return data
    try:
        return schema.model_validate(data)
    except PydanticValidationError as exc:
        field_errors = {
            ".".join(str(part) for part in error["loc"]): error["msg"]
            for error in exc.errors()
        }
        summary = "; ".join(f"{field}: {msg}" for field, msg in field_errors.items())
        raise ValidationError(f"Invalid input - {summary}", field_errors) from exc
