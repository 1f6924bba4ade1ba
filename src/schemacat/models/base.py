"""Base models for schemacat."""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, field_serializer


class SchemaCatBaseModel(BaseModel):
    """Base model for every catalog entity.

    Strict validation keeps persisted snapshots free of stray keys.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        extra="forbid",
    )


class TimestampedModel(SchemaCatBaseModel):
    """Base model for entities carrying a snapshot timestamp."""

    snapshot_time: datetime

    @field_serializer("snapshot_time")
    def serialize_datetime(self, dt: Optional[datetime], _info: Any) -> Optional[str]:
        """Serialize datetime to ISO format."""
        return dt.isoformat() if dt else None

    def formatted_time(self) -> str:
        """Return the snapshot time in local time for display."""
        return self.snapshot_time.astimezone().strftime("%Y-%m-%d %H:%M:%S")
