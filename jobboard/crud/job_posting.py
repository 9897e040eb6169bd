"""
CRUD operations for JobPosting.
"""

from typing import List, Optional
from sqlalchemy.orm import Session
from jobboard.crud import base
from jobboard.models.job_posting import JobPosting


def create(db: Session, owner_id: int, **fields) -> int:
    """Create a posting owned by `owner_id`. New postings are always pending."""
    fields.update({"owner_id": owner_id, "is_approved": False})
    return base.insert(db, JobPosting, fields)


def get_by_id(db: Session, job_id: int) -> Optional[JobPosting]:
    return base.find_one(db, JobPosting, id=job_id)


def get_multi(db: Session, is_approved: Optional[bool] = None) -> List[JobPosting]:
    """
    List postings, optionally filtered by approval state.

    Args:
        db: Database session
        is_approved: True for approved, False for pending, None for all
    """
    if is_approved is None:
        return base.find(db, JobPosting)
    return base.find(db, JobPosting, is_approved=is_approved)


def set_approval(db: Session, job_id: int, is_approved: bool) -> int:
    """Write the approval flag. Returns the number of rows affected (0 if unknown id)."""
    return base.update(db, JobPosting, {"is_approved": is_approved}, id=job_id)


def get_approval(db: Session, job_id: int) -> Optional[bool]:
    """Read back the stored approval flag, or None if the posting does not exist."""
    posting = get_by_id(db, job_id)
    return None if posting is None else posting.is_approved
