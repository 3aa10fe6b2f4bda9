from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Dict, Any
from ..database import get_db
from ..dependencies.permissions import require_approved_user
from ..models.profile import Profile
from ..models.enums import ActivityFilter
from ..services.activity_service import ActivityService
from ..services.analytics_service import AnalyticsService
from ..utils.constants import SquadConstants
from ..utils.router_helpers import handle_service_errors, RouterResponse

router = APIRouter(tags=["users"])


@router.get("/activity", response_model=Dict[str, Any])
@handle_service_errors
async def get_activity(
    activity_filter: ActivityFilter = Query(
        ActivityFilter.ALL, alias="filter", description="all, created or responded"
    ),
    limit: int = Query(
        SquadConstants.DEFAULT_ACTIVITY_LIMIT, ge=0, le=SquadConstants.MAX_PAGE_SIZE
    ),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_approved_user),
):
    """Sessions the caller created or responded to"""
    activity = ActivityService(db).get_user_activity(
        current_user.id, activity_filter=activity_filter, limit=limit, offset=offset
    )
    return RouterResponse.success(data=activity)


@router.get("/me/accuracy", response_model=Dict[str, Any])
@handle_service_errors
async def get_my_accuracy(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_approved_user),
):
    """How reliably the caller's RSVPs predicted attendance"""
    accuracy = AnalyticsService(db).get_user_accuracy(current_user.id)
    return RouterResponse.success(data={"accuracy": accuracy})
