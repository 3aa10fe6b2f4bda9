from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional
from datetime import datetime
from ..models.enums import ResponseStatus
from ..utils.date_helpers import DateHelpers


class ResponseUpsert(BaseModel):
    session_id: str
    status: ResponseStatus


class SessionResponseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    session_id: str
    status: ResponseStatus
    user_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("created_at", "updated_at")
    @classmethod
    def as_utc(cls, v):
        return DateHelpers.ensure_aware(v)
