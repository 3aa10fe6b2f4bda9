from pydantic import BaseModel, Field, field_validator, computed_field
from typing import Optional
from datetime import datetime
from .common import CreatorSummary, ResponseCounts, Playability
from ..models.enums import ResponseStatus
from ..utils.constants import SquadConstants
from ..utils.courts import get_courts_description


class SessionBase(BaseModel):
    title: Optional[str] = Field(
        None,
        max_length=SquadConstants.MAX_TITLE_LENGTH,
        description="Optional session title",
    )
    description: Optional[str] = Field(
        None, max_length=SquadConstants.MAX_DESCRIPTION_LENGTH
    )
    location: str = Field(
        ..., min_length=1, max_length=SquadConstants.MAX_LOCATION_LENGTH
    )

    @field_validator("location")
    @classmethod
    def location_not_blank(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Location is required")
        return v

    @field_validator("title", "description")
    @classmethod
    def blank_to_none(cls, v):
        if v is not None and not v.strip():
            return None
        return v


class SessionCreate(SessionBase):
    """
    Payload for creating or replacing a session.

    Only field shapes are checked here; the calendar rules depend on the
    current time and are applied by the session service.
    """

    start_time: datetime
    end_time: datetime


class SessionUpdate(SessionCreate):
    pass


class SessionDetail(BaseModel):
    id: str
    title: Optional[str]
    description: Optional[str]
    location: str
    start_time: datetime
    end_time: datetime
    created_by: CreatorSummary
    response_counts: ResponseCounts
    recommended_courts: int
    playability: Playability
    user_response: Optional[ResponseStatus] = None
    response_cutoff: datetime
    is_completed: bool = False
    can_edit: Optional[bool] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @computed_field
    @property
    def courts_description(self) -> str:
        return get_courts_description(self.response_counts.COMING)
