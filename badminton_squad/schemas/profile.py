from pydantic import BaseModel, ConfigDict, field_validator
from typing import List, Optional
from datetime import datetime
from ..models.enums import UserRole
from ..utils.date_helpers import DateHelpers


class ProfileResponse(BaseModel):
    """Public profile information for API responses"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    phone: Optional[str] = None
    role: UserRole
    approved: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("created_at", "updated_at")
    @classmethod
    def as_utc(cls, v):
        return DateHelpers.ensure_aware(v)


class ProfileSummary(BaseModel):
    """Minimal profile info for lists and references"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str


class ProfileDirectory(BaseModel):
    pending: List[ProfileResponse]
    approved: List[ProfileResponse]
