"""
Authentication endpoints.

- POST /sign-in: verify credentials and receive a session token
- POST /users: create an account (public)

Sign-in failures are reported with one generic message whether the username
is unknown or the password is wrong.
"""

import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jobboard.core.database import get_db
from jobboard.core.exceptions import ValidationError
from jobboard.core.security import get_password_hash
from jobboard.crud import user as user_crud
from jobboard.schemas.user import (
    SignedInUser,
    SignInRequest,
    SignInResponse,
    UserCreateResponse,
    UserRegisterRequest,
)
from jobboard.services import authentication

router = APIRouter(tags=["Authentication"])
logger = logging.getLogger(__name__)


@router.post("/sign-in", response_model=SignInResponse)
def sign_in(
    request: SignInRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate a user and return a session token.

    The token is valid for ACCESS_TOKEN_EXPIRE_HOURS (24h by default) and is
    sent back as `Authorization: Bearer <token>` on protected routes.

    Raises:
        401: Invalid credentials (unknown user or wrong password)
        500: Credential store unavailable
    """
    token, user = authentication.sign_in(db, request.username, request.password)
    return SignInResponse(token=token, user=SignedInUser(username=user.username))


@router.post("/users", status_code=status.HTTP_201_CREATED, response_model=UserCreateResponse)
def register(
    request: UserRegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Create a new account.

    The password is stored only as a bcrypt hash.
    """
    if user_crud.get_by_username(db, request.account_username):
        raise ValidationError("Username already registered")

    profile = request.model_dump(exclude={"account_username", "password"})
    user_id = user_crud.create(
        db,
        username=request.account_username,
        password_hash=get_password_hash(request.password),
        **profile
    )

    logger.info(f"New user registered: {request.account_username} (id: {user_id})")
    return UserCreateResponse(message="User created successfully", user_id=user_id)
