from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from ..database import get_db, get_supabase
from ..models.profile import Profile
from ..schemas.auth import SignupRequest, LoginRequest, LoginResponse
from ..schemas.profile import ProfileResponse
from ..services.profile_service import ProfileService
from ..utils.router_helpers import handle_service_errors, RouterResponse
from ..dependencies.permissions import get_current_user
from supabase import Client
import logging

router = APIRouter(tags=["authentication"])
logger = logging.getLogger(__name__)


@router.post("/signup", response_model=dict, status_code=status.HTTP_201_CREATED)
@handle_service_errors
async def signup(
    user_data: SignupRequest,
    db: Session = Depends(get_db),
    supabase: Client = Depends(get_supabase),
):
    """Register with Supabase Auth; the new profile waits for admin approval"""

    profile_service = ProfileService(db)
    if profile_service.get_profile_by_email(user_data.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="An account with this email already exists",
        )

    try:
        auth_response = supabase.auth.sign_up(
            {
                "email": user_data.email,
                "password": user_data.password,
                "options": {"data": {"name": user_data.name, "phone": user_data.phone}},
            }
        )
    except Exception as e:
        logger.error(f"Signup error: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Registration failed: {str(e)}",
        )

    if not auth_response.user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Registration failed"
        )

    profile = profile_service.create_profile(
        profile_id=str(auth_response.user.id),
        email=user_data.email,
        name=user_data.name,
        phone=user_data.phone,
    )

    return RouterResponse.created(
        data={"user": ProfileResponse.model_validate(profile)},
        message="Registration successful. Your account is pending approval.",
    )


@router.post("/login", response_model=LoginResponse)
@handle_service_errors
async def login(
    login_data: LoginRequest,
    db: Session = Depends(get_db),
    supabase: Client = Depends(get_supabase),
):
    """Login with Supabase Auth"""

    try:
        auth_response = supabase.auth.sign_in_with_password(
            {"email": login_data.email, "password": login_data.password}
        )
    except Exception as e:
        logger.warning(f"Login failed for {login_data.email}: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    if not auth_response.user or not auth_response.session:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    profile = ProfileService(db).get_profile(str(auth_response.user.id))
    if not profile:
        profile = Profile.create_from_supabase(auth_response.user, db)

    return LoginResponse(
        access_token=auth_response.session.access_token,
        token_type="bearer",
        expires_in=auth_response.session.expires_in,
        user={
            "id": profile.id,
            "name": profile.name,
            "email": profile.email,
            "role": profile.role,
            "approved": profile.approved,
        },
    )


@router.post("/signout", response_model=dict)
@handle_service_errors
async def signout(
    current_user: Profile = Depends(get_current_user),
    supabase: Client = Depends(get_supabase),
):
    supabase.auth.sign_out()
    return RouterResponse.success(message="Signed out successfully")


@router.get("/me", response_model=dict)
@handle_service_errors
async def get_me(current_user: Profile = Depends(get_current_user)):
    """Current profile; available before approval so clients can show status"""
    return RouterResponse.success(
        data={"user": ProfileResponse.model_validate(current_user)}
    )
