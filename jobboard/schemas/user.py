"""
Pydantic schemas for identities, sign-in and session tokens.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime


def _reject_nul(password: str) -> str:
    # bcrypt cannot hash a secret containing NUL
    if "\x00" in password:
        raise ValueError("Password must not contain NUL characters")
    return password


class UserRegisterRequest(BaseModel):
    """Request schema for creating an account."""
    account_username: str = Field(..., min_length=3, max_length=64)
    password: str = Field(..., min_length=8, max_length=72)  # bcrypt limit
    real_name: Optional[str] = None
    personal_email: Optional[str] = None
    school_name: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    bio: Optional[str] = None
    is_teacher: bool = False

    @field_validator("password")
    @classmethod
    def reject_nul(cls, v: str) -> str:
        return _reject_nul(v)


class UserCreateResponse(BaseModel):
    message: str
    user_id: int


class SignInRequest(BaseModel):
    """Credential pair presented at sign-in. Never persisted."""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("password")
    @classmethod
    def reject_nul(cls, v: str) -> str:
        return _reject_nul(v)


class SignedInUser(BaseModel):
    """The part of the profile returned with a fresh token."""
    username: str


class SignInResponse(BaseModel):
    message: str = "Login successful"
    token: str
    user: SignedInUser


class UserResponse(BaseModel):
    """Public profile (no password hash)."""
    id: int
    username: str
    real_name: Optional[str] = None
    school_name: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    bio: Optional[str] = None
    is_teacher: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AdminStatusResponse(BaseModel):
    user_id: int
    isAdmin: bool


class TokenClaims(BaseModel):
    """Identity claims recovered from a verified session token."""
    subject_id: int
    username: str
    issued_at: datetime
    expires_at: datetime

    class Config:
        frozen = True
