"""
Approval workflow for job postings and job applications.

Job posting approval has two states, pending (is_approved=False) and approved
(is_approved=True). A reviewer sets the flag explicitly; both values are
accepted.

Application status follows ALLOWED_TRANSITIONS. Status, feedback and the
completion flag are always written together, so a caller that only wants to
change feedback re-sends the current status. Concurrent updates to the same
row are last-write-wins.
"""

import logging
from typing import Any, Dict, FrozenSet, Optional

from sqlalchemy.orm import Session

from jobboard.core.exceptions import NotFoundError, ValidationError
from jobboard.crud import application as application_crud
from jobboard.crud import job_posting as job_posting_crud
from jobboard.models.application import ApplicationStatus

logger = logging.getLogger(__name__)

# target status -> statuses it may be entered from
ALLOWED_TRANSITIONS: Dict[ApplicationStatus, FrozenSet[ApplicationStatus]] = {
    ApplicationStatus.SUBMITTED: frozenset({ApplicationStatus.SUBMITTED}),
    ApplicationStatus.UNDER_REVIEW: frozenset({
        ApplicationStatus.SUBMITTED,
        ApplicationStatus.UNDER_REVIEW,
    }),
    ApplicationStatus.ACCEPTED: frozenset({
        ApplicationStatus.SUBMITTED,
        ApplicationStatus.UNDER_REVIEW,
        ApplicationStatus.ACCEPTED,
    }),
    ApplicationStatus.REJECTED: frozenset({
        ApplicationStatus.SUBMITTED,
        ApplicationStatus.UNDER_REVIEW,
        ApplicationStatus.REJECTED,
    }),
}


def toggle_posting_approval(db: Session, job_id: int, is_approved: Any) -> Dict[str, Any]:
    """
    Set a posting's approval flag.

    Args:
        db: Database session
        job_id: Posting id
        is_approved: Target state; must be a real bool

    Returns:
        {"job_id": job_id, "new_status": <flag as stored>}

    Raises:
        ValidationError: is_approved is not a bool
        NotFoundError: no posting with this id
    """
    if not isinstance(is_approved, bool):
        raise ValidationError("isApproved must be a boolean value")

    affected = job_posting_crud.set_approval(db, job_id, is_approved)
    if affected == 0:
        raise NotFoundError("Job posting not found")

    new_status = job_posting_crud.get_approval(db, job_id)
    if new_status is None:
        # Deleted between the write and the read-back
        raise NotFoundError("Job posting not found")

    if new_status:
        logger.info(f"Job posting {job_id} approved")
    else:
        logger.warning(f"Job posting {job_id} set back to pending")

    return {"job_id": job_id, "new_status": new_status}


def update_application_status(
    db: Session,
    application_id: int,
    application_status: Any,
    review_feedback: Optional[str],
    is_complete: Any,
) -> Dict[str, Any]:
    """
    Move an application to a new status with feedback and completion flag.

    Returns:
        The fields as written: application_status, review_feedback, isComplete

    Raises:
        ValidationError: unknown status, non-bool is_complete, or a transition
            ALLOWED_TRANSITIONS does not permit
        NotFoundError: no application with this id
    """
    try:
        status = ApplicationStatus(application_status)
    except (ValueError, TypeError):
        allowed = ", ".join(s.value for s in ApplicationStatus)
        raise ValidationError(f"application_status must be one of: {allowed}")

    if not isinstance(is_complete, bool):
        raise ValidationError("isComplete must be a boolean value")

    if review_feedback is not None and not isinstance(review_feedback, str):
        raise ValidationError("review_feedback must be text")

    affected = application_crud.update_status(
        db,
        application_id,
        status,
        review_feedback,
        is_complete,
        allowed_from=ALLOWED_TRANSITIONS[status],
    )

    if affected == 0:
        current = application_crud.get_by_id(db, application_id)
        if current is None:
            raise NotFoundError("Application not found")
        raise ValidationError(
            f"Cannot change application status from {current.application_status.value} to {status.value}"
        )

    logger.info(f"Application {application_id} status set to {status.value} (complete: {is_complete})")

    return {
        "application_status": status,
        "review_feedback": review_feedback,
        "isComplete": is_complete,
    }
