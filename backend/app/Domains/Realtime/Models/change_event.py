from datetime import datetime, timezone
from typing import Any, Dict, Literal

from pydantic import BaseModel, Field

EventType = Literal["INSERT", "UPDATE", "DELETE"]


class ChangeEvent(BaseModel):
    """A row change notification, shaped like a postgres_changes payload."""

    table: str
    event_type: EventType
    new: Dict[str, Any] = Field(default_factory=dict)
    old: Dict[str, Any] = Field(default_factory=dict)
    commit_timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def row(self) -> Dict[str, Any]:
        return self.old if self.event_type == "DELETE" else self.new
