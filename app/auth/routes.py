# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Signup/login is handled by Supabase Auth client-side.
# This route lets the editor check whether a stored token is still valid.
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser

router = APIRouter()


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Verify that the current token is valid.

    Returns:
        dict: Confirmation with user_id

    Raises:
        401: If token is invalid or expired
    """
    return {
        "valid": True,
        "user_id": user.identity,
        "email": user.email,
        "username": user.username,
    }
