from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Dict, Any
from ..database import get_db
from ..dependencies.permissions import require_approved_user
from ..models.profile import Profile
from ..schemas.response import ResponseUpsert, SessionResponseOut
from ..services.response_service import ResponseService
from ..utils.router_helpers import handle_service_errors, RouterResponse

router = APIRouter(tags=["responses"])


@router.post("/", response_model=Dict[str, Any])
@handle_service_errors
async def upsert_response(
    response_data: ResponseUpsert,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_approved_user),
):
    """Set or change the caller's RSVP for a session"""
    response = ResponseService(db).upsert_response(
        session_id=response_data.session_id,
        status=response_data.status,
        user=current_user,
    )
    return RouterResponse.success(
        data={"response": SessionResponseOut.model_validate(response)},
        message="Response recorded successfully",
    )


@router.get("/", response_model=Dict[str, Any])
@handle_service_errors
async def list_responses(
    session_id: str = Query(..., description="Session to list responses for"),
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_approved_user),
):
    responses = ResponseService(db).list_session_responses(session_id)
    return RouterResponse.success(data={"responses": responses})
