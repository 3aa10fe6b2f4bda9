from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from ..database import get_db, get_supabase
from ..models.profile import Profile
from supabase import Client
import logging

security = HTTPBearer(auto_error=False)
logger = logging.getLogger(__name__)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
    supabase: Client = Depends(get_supabase),
) -> Profile:
    """Resolve the Supabase bearer token to a profile row"""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Authentication required",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    try:
        auth_response = supabase.auth.get_user(credentials.credentials)
    except Exception as e:
        logger.error(f"Authentication error: {e}")
        raise credentials_exception

    if not auth_response or not auth_response.user:
        raise credentials_exception

    supabase_user = auth_response.user
    profile = db.query(Profile).filter(Profile.id == str(supabase_user.id)).first()

    # Profiles are normally created at signup; backfill if the row is missing
    if not profile:
        profile = Profile.create_from_supabase(supabase_user, db)

    return profile


async def require_approved_user(
    current_user: Profile = Depends(get_current_user),
) -> Profile:
    """Ensure an admin has approved the account"""
    if not current_user.approved:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="User not approved"
        )
    return current_user


async def require_super_admin(
    current_user: Profile = Depends(require_approved_user),
) -> Profile:
    if not current_user.is_super_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin permissions required",
        )
    return current_user
