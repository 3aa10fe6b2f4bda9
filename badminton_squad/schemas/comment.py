from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime
from uuid import UUID
from .profile import ProfileSummary
from ..utils.constants import SquadConstants


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=SquadConstants.MAX_COMMENT_LENGTH)
    parent_comment_id: Optional[UUID] = None

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Comment content is required")
        return v


class CommentUpdate(BaseModel):
    """Only the content of a comment can change"""

    content: str = Field(..., min_length=1, max_length=SquadConstants.MAX_COMMENT_LENGTH)

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Comment content is required")
        return v


class CommentNode(BaseModel):
    id: str
    content: str
    session_id: str
    user_id: str
    parent_comment_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    user: Optional[ProfileSummary] = None
    replies: List["CommentNode"] = Field(default_factory=list)


CommentNode.model_rebuild()
