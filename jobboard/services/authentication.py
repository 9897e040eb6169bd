"""
Sign-in orchestration.

username -> credential store -> bcrypt verification -> session token.
Unknown usernames and wrong passwords produce the same AuthError so callers
cannot tell which accounts exist. Store failures surface as
ServiceUnavailableError from the CRUD layer and are never reported as bad
credentials.
"""

import logging
from typing import Tuple

from sqlalchemy.orm import Session

from jobboard.core.exceptions import AuthError, AuthErrorKind
from jobboard.core.security import create_access_token, dummy_verify_password, verify_password
from jobboard.crud import user as user_crud
from jobboard.models.user import User

logger = logging.getLogger(__name__)


def token_claims_for(user: User) -> dict:
    """Minimal claims needed to authorize later requests."""
    return {"sub": str(user.id), "username": user.username}


def sign_in(db: Session, username: str, password: str) -> Tuple[str, User]:
    """
    Verify a credential pair and issue a session token.

    Returns:
        (token, user)

    Raises:
        AuthError(INVALID_CREDENTIALS): unknown username or wrong password
        ServiceUnavailableError: credential store unreachable
    """
    user = user_crud.get_by_username(db, username)

    if user is None:
        dummy_verify_password()
        logger.info("Sign-in rejected: invalid credentials")
        raise AuthError(AuthErrorKind.INVALID_CREDENTIALS)

    if not verify_password(password, user.password_hash):
        logger.info("Sign-in rejected: invalid credentials")
        raise AuthError(AuthErrorKind.INVALID_CREDENTIALS)

    token = create_access_token(data=token_claims_for(user))
    logger.info(f"User signed in: {user.username} (id: {user.id})")
    return token, user
