"""
Credential store adapter.

Looks up identities by username or id, and creates them with an already
hashed password. Callers never see raw store errors (see crud.base).
"""

from typing import Optional
from sqlalchemy.orm import Session
from jobboard.crud import base
from jobboard.models.user import User


def get_by_username(db: Session, username: str) -> Optional[User]:
    """Fetch an identity and its stored hash by username, or None."""
    return base.find_one(db, User, username=username)


def get_by_id(db: Session, user_id: int) -> Optional[User]:
    """Fetch an identity by id, or None."""
    return base.find_one(db, User, id=user_id)


def create(db: Session, username: str, password_hash: str, **profile) -> int:
    """
    Create an identity.

    Args:
        db: Database session
        username: Unique username
        password_hash: Output of security.get_password_hash
        profile: Optional profile columns (real_name, city, is_teacher, ...)

    Returns:
        The new user id
    """
    fields = dict(profile)
    fields.update({"username": username, "password_hash": password_hash})
    return base.insert(db, User, fields)


def is_admin(db: Session, user_id: int) -> bool:
    """True if the user exists and holds the admin (reviewer) role."""
    user = get_by_id(db, user_id)
    return bool(user and user.is_admin)
