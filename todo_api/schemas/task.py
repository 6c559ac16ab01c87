from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_serializer
from pydantic.alias_generators import to_camel


class CreateTaskInput(BaseModel):
    """Normalised creation input: title trimmed, blank optionals already None."""
    title: str
    description: Optional[str] = None
    due_date: Optional[datetime] = None


class UpdateTaskInput(BaseModel):
    """Normalised partial update.

    Only the fields that were present in the request are *set*; a set field
    holding None means "clear it", an unset field means "leave unchanged".
    """
    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    is_done: Optional[bool] = None

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class TaskRead(BaseModel):
    """Task as sent to API clients (camelCase keys, UTC timestamps)."""
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: int
    title: str
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    is_done: bool
    created_at: datetime
    updated_at: datetime

    @field_serializer("due_date", "created_at", "updated_at")
    def _serialize_utc(self, value: Optional[datetime]) -> Optional[str]:
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
