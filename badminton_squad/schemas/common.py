from typing import Any, Dict, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response"""

    success: bool = False
    error: str
    details: Optional[Dict[str, Any]] = None


class CreatorSummary(BaseModel):
    id: str
    name: Optional[str] = None


class ResponseCounts(BaseModel):
    COMING: int = 0
    TENTATIVE: int = 0
    NOT_COMING: int = 0


class Playability(BaseModel):
    status: str
    message: str
