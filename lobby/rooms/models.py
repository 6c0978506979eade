# rooms/models.py
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RoomStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"  # set by the lifecycle policy after idling
    ENDED = "ended"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self is not RoomStatus.ACTIVE


# Only these are ever deleted; completed/cancelled rooms are kept as history
PURGEABLE_STATUSES = (RoomStatus.INACTIVE, RoomStatus.ENDED)


class Room(BaseModel):
    """A row of the `programs` table. `id` doubles as the join code."""
    id: str
    title: str
    description: Optional[str] = None
    created_by: str
    created_at: datetime
    status: RoomStatus = RoomStatus.ACTIVE
    last_activity: Optional[datetime] = None
    ended_at: Optional[datetime] = None


class RoomSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    created_by: str = Field(alias="createdBy")


class RoomPage(BaseModel):
    code: str
    room: RoomSummary


class ErrorMessage(BaseModel):
    message: str
