# cleanup/models.py
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CleanupResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    marked_inactive: int = Field(alias="markedInactive")
    deleted: int
    timestamp: datetime


class CleanupError(BaseModel):
    error: str
