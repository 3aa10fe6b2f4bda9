from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Dict, Any
from ..database import get_db
from ..dependencies.permissions import require_super_admin
from ..models.profile import Profile
from ..schemas.profile import ProfileResponse
from ..services.profile_service import ProfileService
from ..utils.router_helpers import handle_service_errors, RouterResponse

router = APIRouter(tags=["admin"])


@router.get("/users", response_model=Dict[str, Any])
@handle_service_errors
async def list_users(
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_super_admin),
):
    """Pending and approved accounts"""
    directory = ProfileService(db).list_profiles(acting_user=admin)
    return RouterResponse.success(data=directory)


@router.put("/users/{user_id}/approve", response_model=Dict[str, Any])
@handle_service_errors
async def approve_user(
    user_id: str,
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_super_admin),
):
    profile = ProfileService(db).approve(user_id, acting_user=admin)
    return RouterResponse.updated(
        data={"user": ProfileResponse.model_validate(profile)},
        message="User approved successfully",
    )


@router.put("/users/{user_id}/revoke", response_model=Dict[str, Any])
@handle_service_errors
async def revoke_user(
    user_id: str,
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_super_admin),
):
    profile = ProfileService(db).revoke(user_id, acting_user=admin)
    return RouterResponse.updated(
        data={"user": ProfileResponse.model_validate(profile)},
        message="User approval revoked",
    )
