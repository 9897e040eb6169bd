"""
FastAPI dependencies for authentication and authorization.

get_current_claims is the single token gate. Every endpoint that changes data
or discloses an identity depends on it (directly or through get_admin_claims).
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from fastapi.security.utils import get_authorization_scheme_param
from sqlalchemy.orm import Session

from jobboard.core.database import get_db
from jobboard.core.exceptions import AuthError, AuthErrorKind
from jobboard.core.security import decode_token
from jobboard.crud import user as user_crud
from jobboard.schemas.user import TokenClaims

# HTTP Bearer token scheme (Authorization: Bearer <token>).
# auto_error is off so the gate decides between MISSING and MALFORMED.
security = HTTPBearer(auto_error=False)


async def get_current_claims(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> TokenClaims:
    """
    Validate the bearer token and return its claims.

    Stateless: the token is not checked against the users table, so a token
    stays valid until expiry even if its user is deleted.

    The claims are also stored on request.state.claims.

    Raises:
        AuthError 401: no Authorization header, or a header without a token
        AuthError 403: wrong scheme, or token malformed, wrongly signed or expired
    """
    if credentials is None:
        # HTTPBearer also returns None for a non-Bearer scheme
        header = request.headers.get("Authorization", "").strip()
        scheme, token = get_authorization_scheme_param(header)
        if not header or (scheme.lower() == "bearer" and not token):
            raise AuthError(AuthErrorKind.MISSING)
        raise AuthError(AuthErrorKind.MALFORMED)

    claims = decode_token(credentials.credentials)
    request.state.claims = claims
    return claims


def get_admin_claims(
    claims: TokenClaims = Depends(get_current_claims),
    db: Session = Depends(get_db),
) -> TokenClaims:
    """
    Require a valid token whose subject holds the admin (reviewer) role.

    Raises:
        AuthError 403: caller is not an admin
    """
    if not user_crud.is_admin(db, claims.subject_id):
        raise AuthError(AuthErrorKind.FORBIDDEN, "Admin access required")
    return claims
