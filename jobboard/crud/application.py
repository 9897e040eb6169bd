"""
CRUD operations for JobApplication.
"""

from typing import Iterable, List, Optional
from sqlalchemy.orm import Session
from jobboard.crud import base
from jobboard.models.application import ApplicationStatus, JobApplication


def create(db: Session, job_id: int, user_id: int, **answers) -> int:
    """Create an application in the SUBMITTED state. Returns the new id."""
    answers.update({
        "job_id": job_id,
        "user_id": user_id,
        "application_status": ApplicationStatus.SUBMITTED,
        "is_complete": False,
    })
    return base.insert(db, JobApplication, answers)


def get_by_id(db: Session, application_id: int) -> Optional[JobApplication]:
    return base.find_one(db, JobApplication, id=application_id)


def get_by_job(db: Session, job_id: int) -> List[JobApplication]:
    return base.find(db, JobApplication, job_id=job_id)


def get_by_user(db: Session, user_id: int) -> List[JobApplication]:
    return base.find(db, JobApplication, user_id=user_id)


def update_status(
    db: Session,
    application_id: int,
    status: ApplicationStatus,
    review_feedback: Optional[str],
    is_complete: bool,
    allowed_from: Iterable[ApplicationStatus],
) -> int:
    """
    Write status, feedback and completion flag in one UPDATE.

    The row is only changed if its current status is in `allowed_from`, so the
    transition check and the write are a single atomic statement.

    Returns:
        Number of rows affected (0 if unknown id or transition not allowed)
    """
    return base.update(
        db,
        JobApplication,
        {
            "application_status": status,
            "review_feedback": review_feedback,
            "is_complete": is_complete,
        },
        JobApplication.application_status.in_(list(allowed_from)),
        id=application_id,
    )


def delete(db: Session, application_id: int) -> bool:
    """Delete an application. Returns False if it did not exist."""
    return base.delete(db, JobApplication, id=application_id) > 0
