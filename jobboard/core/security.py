"""
Security utilities for session tokens and password hashing.

Session tokens are stateless HS256 JWTs signed with the process-wide SECRET_KEY.
Passwords are hashed with bcrypt; the cost factor is embedded in each hash.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from passlib.exc import PasswordValueError
from jobboard.core.config import settings
from jobboard.core.exceptions import AuthError, AuthErrorKind, InternalError, ValidationError
from jobboard.schemas.user import TokenClaims

logger = logging.getLogger(__name__)

# Password hashing context (bcrypt)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS)

# bcrypt only reads the first 72 bytes of a secret
BCRYPT_MAX_BYTES = 72


def _secret_bytes(password: str) -> bytes:
    return password.encode('utf-8')[:BCRYPT_MAX_BYTES]


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a stored bcrypt hash.

    A malformed or unrecognised stored hash counts as a mismatch.
    """
    try:
        return pwd_context.verify(_secret_bytes(plain_password), hashed_password)
    except PasswordValueError:
        logger.info("Presented password rejected by the hasher; treating as mismatch")
        return False
    except (ValueError, TypeError):
        logger.warning("Stored password hash could not be parsed; treating as mismatch")
        return False


def dummy_verify_password() -> None:
    """Spend the same time as a real verification (used when the user does not exist)."""
    pwd_context.dummy_verify()


def get_password_hash(password: str) -> str:
    """
    Hash a password using bcrypt with the configured cost factor.

    Note: Bcrypt has a 72-byte limit. Longer passwords are truncated here and
    in verify_password, so both sides see the same secret.
    """
    try:
        return pwd_context.hash(_secret_bytes(password))
    except PasswordValueError as e:
        raise ValidationError("Password contains characters that cannot be hashed") from e
    except (ValueError, TypeError) as e:
        raise InternalError("Password hashing failed") from e


def create_access_token(
    data: dict,
    expires_delta: Optional[timedelta] = None,
    secret_key: Optional[str] = None,
    issued_at: Optional[datetime] = None,
) -> str:
    """
    Create a signed session token.

    Args:
        data: Identity claims, {"sub": str(user_id), "username": username}
        expires_delta: Token lifetime (default: ACCESS_TOKEN_EXPIRE_HOURS), at least one second
        secret_key: Signing secret (default: settings.SECRET_KEY)
        issued_at: Issuance time (default: now)

    Returns:
        Encoded JWT as a string
    """
    if expires_delta is None:
        expires_delta = timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS)

    lifetime = int(expires_delta.total_seconds())
    if lifetime < 1:
        raise ValueError("Token lifetime must be at least one second")

    issued = int((issued_at or datetime.now(timezone.utc)).timestamp())

    to_encode = data.copy()
    to_encode.update({"iat": issued, "exp": issued + lifetime})
    return jwt.encode(to_encode, secret_key or settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(
    token: Optional[str],
    secret_key: Optional[str] = None,
    now: Optional[datetime] = None,
) -> TokenClaims:
    """
    Verify a session token and recover its claims.

    Args:
        token: The encoded JWT
        secret_key: Verification secret (default: settings.SECRET_KEY)
        now: Timezone-aware current time (default: now)

    Returns:
        TokenClaims for the token's subject

    Raises:
        AuthError(MISSING): no token
        AuthError(MALFORMED): unparsable token, bad signature or missing claims
        AuthError(EXPIRED): now is at or past the token's expiry
    """
    if not token:
        raise AuthError(AuthErrorKind.MISSING)

    try:
        # Expiry is checked below so that "now == exp" counts as expired
        payload = jwt.decode(
            token,
            secret_key or settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"verify_exp": False},
        )
    except JWTError:
        raise AuthError(AuthErrorKind.MALFORMED)

    try:
        claims = TokenClaims(
            subject_id=int(payload["sub"]),
            username=payload["username"],
            issued_at=payload["iat"],
            expires_at=payload["exp"],
        )
    except (KeyError, TypeError, ValueError):
        raise AuthError(AuthErrorKind.MALFORMED)

    current = now or datetime.now(timezone.utc)
    if current >= claims.expires_at:
        raise AuthError(AuthErrorKind.EXPIRED)

    return claims
