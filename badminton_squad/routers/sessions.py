from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Dict, Any
from ..database import get_db
from ..dependencies.permissions import require_approved_user
from ..models.profile import Profile
from ..models.enums import SessionFilter
from ..schemas.session import SessionCreate, SessionUpdate
from ..schemas.comment import CommentCreate, CommentUpdate
from ..schemas.analytics import SessionCompletion
from ..services.session_service import SessionService
from ..services.comment_service import CommentService
from ..services.analytics_service import AnalyticsService
from ..utils.constants import SquadConstants
from ..utils.router_helpers import handle_service_errors, RouterResponse

router = APIRouter(tags=["sessions"])


@router.get("/", response_model=Dict[str, Any])
@handle_service_errors
async def list_sessions(
    session_filter: SessionFilter = Query(
        SessionFilter.ALL, alias="filter", description="all, responded or created"
    ),
    limit: int = Query(
        SquadConstants.DEFAULT_SESSION_LIMIT, ge=1, le=SquadConstants.MAX_PAGE_SIZE
    ),
    sort: str = Query("start_time", pattern="^(start_time|created_at)$"),
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_approved_user),
):
    """Upcoming sessions with response counts and recommended courts"""
    sessions = SessionService(db).list_sessions(
        user=current_user, session_filter=session_filter, limit=limit, sort=sort
    )
    return RouterResponse.success(data={"sessions": sessions})


@router.post("/", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED)
@handle_service_errors
async def create_session(
    session_data: SessionCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_approved_user),
):
    session_service = SessionService(db)
    session = session_service.create_session(session_data, created_by=current_user)
    detail = session_service.get_session_details(session.id, current_user)

    return RouterResponse.created(
        data={"session": detail}, message="Session created successfully"
    )


@router.get("/{session_id}", response_model=Dict[str, Any])
@handle_service_errors
async def get_session(
    session_id: str,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_approved_user),
):
    detail = SessionService(db).get_session_details(session_id, current_user)
    return RouterResponse.success(data={"session": detail})


@router.put("/{session_id}", response_model=Dict[str, Any])
@handle_service_errors
async def update_session(
    session_id: str,
    session_updates: SessionUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_approved_user),
):
    """Edit a session (creator only, not on the day of the session)"""
    session_service = SessionService(db)
    session_service.update_session(session_id, session_updates, updated_by=current_user)
    detail = session_service.get_session_details(session_id, current_user)

    return RouterResponse.updated(
        data={"session": detail}, message="Session updated successfully"
    )


@router.delete("/{session_id}", response_model=Dict[str, Any])
@handle_service_errors
async def delete_session(
    session_id: str,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_approved_user),
):
    SessionService(db).delete_session(session_id, deleted_by=current_user)
    return RouterResponse.deleted(message="Session deleted successfully")


@router.post("/{session_id}/complete", response_model=Dict[str, Any])
@handle_service_errors
async def complete_session(
    session_id: str,
    completion: SessionCompletion,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_approved_user),
):
    """Mark a session as played and record prediction analytics"""
    result = AnalyticsService(db).complete_session(
        session_id,
        actual_attendees=completion.actual_attendees,
        completed_by=current_user,
    )
    return RouterResponse.success(data=result, message="Session marked as complete")


# Comments
@router.get("/{session_id}/comments", response_model=Dict[str, Any])
@handle_service_errors
async def list_comments(
    session_id: str,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_approved_user),
):
    comments = CommentService(db).list_comments(session_id)
    return RouterResponse.success(data={"comments": comments})


@router.post(
    "/{session_id}/comments",
    response_model=Dict[str, Any],
    status_code=status.HTTP_201_CREATED,
)
@handle_service_errors
async def create_comment(
    session_id: str,
    comment_data: CommentCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_approved_user),
):
    parent_id = comment_data.parent_comment_id
    comment = CommentService(db).create_comment(
        session_id,
        user=current_user,
        content=comment_data.content,
        parent_comment_id=str(parent_id) if parent_id else None,
    )
    return RouterResponse.created(
        data={"comment": comment}, message="Comment posted successfully"
    )


@router.put("/{session_id}/comments/{comment_id}", response_model=Dict[str, Any])
@handle_service_errors
async def update_comment(
    session_id: str,
    comment_id: str,
    comment_data: CommentUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_approved_user),
):
    comment = CommentService(db).update_comment(
        session_id, comment_id, user=current_user, content=comment_data.content
    )
    return RouterResponse.updated(
        data={"comment": comment}, message="Comment updated successfully"
    )


@router.delete("/{session_id}/comments/{comment_id}", response_model=Dict[str, Any])
@handle_service_errors
async def delete_comment(
    session_id: str,
    comment_id: str,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_approved_user),
):
    CommentService(db).delete_comment(session_id, comment_id, user=current_user)
    return RouterResponse.deleted(message="Comment deleted successfully")
