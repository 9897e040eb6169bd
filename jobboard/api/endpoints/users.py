"""
Identity lookup endpoints. All require a valid session token.
"""

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from jobboard.core.database import MAX_ID, get_db
from jobboard.core.deps import get_current_claims
from jobboard.core.exceptions import NotFoundError
from jobboard.crud import user as user_crud
from jobboard.schemas.user import AdminStatusResponse, TokenClaims, UserResponse

router = APIRouter(tags=["Users"])


@router.get("/get-user", response_model=UserResponse)
def get_user_by_username(
    username: str,
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(get_current_claims)
):
    """Public profile for a username."""
    user = user_crud.get_by_username(db, username)
    if not user:
        raise NotFoundError("User not found")
    return user


@router.get("/get-user/{user_id}", response_model=UserResponse)
def get_user_by_id(
    user_id: int = Path(..., le=MAX_ID),
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(get_current_claims)
):
    """Public profile for a user id."""
    user = user_crud.get_by_id(db, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


@router.get("/users/{user_id}/admin-status", response_model=AdminStatusResponse)
def get_admin_status(
    user_id: int = Path(..., le=MAX_ID),
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(get_current_claims)
):
    """Whether a user holds the admin (reviewer) role."""
    user = user_crud.get_by_id(db, user_id)
    if not user:
        raise NotFoundError("User not found")
    return AdminStatusResponse(user_id=user.id, isAdmin=user.is_admin)
