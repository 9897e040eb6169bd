"""
API endpoints for job applications.

Access rules:
- create: any signed-in user (the applicant is the token subject)
- read / delete one: the applicant, the posting owner, or an admin
  (anyone else gets 404, the same as for an unknown id)
- list by job: the posting owner or an admin
- list by user: that user or an admin
- status update: the posting owner or an admin
"""

import logging
from typing import List, Tuple
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from jobboard.core.database import MAX_ID, get_db
from jobboard.core.deps import get_current_claims
from jobboard.core.exceptions import AuthError, AuthErrorKind, NotFoundError
from jobboard.crud import application as application_crud
from jobboard.crud import job_posting as job_posting_crud
from jobboard.crud import user as user_crud
from jobboard.models.application import JobApplication
from jobboard.schemas.application import (
    ApplicationCreateRequest,
    ApplicationCreateResponse,
    ApplicationResponse,
    ApplicationStatusFields,
    ApplicationStatusUpdateRequest,
    ApplicationStatusUpdateResponse,
)
from jobboard.schemas.user import TokenClaims
from jobboard.services import approval

router = APIRouter(prefix="/applications", tags=["Applications"])
logger = logging.getLogger(__name__)


def _require_party(db: Session, claims: TokenClaims, *user_ids: int) -> None:
    """Allow the caller if they are one of `user_ids` or an admin."""
    if claims.subject_id in user_ids:
        return
    if user_crud.is_admin(db, claims.subject_id):
        return
    raise AuthError(AuthErrorKind.FORBIDDEN)


def _get_visible_application(
    db: Session, claims: TokenClaims, application_id: int
) -> Tuple[JobApplication, int]:
    """
    Load an application the caller is a party to.

    Returns:
        (application, posting owner id)

    Raises:
        NotFoundError: unknown id, or the caller is not the applicant, the
            posting owner or an admin
    """
    application = application_crud.get_by_id(db, application_id)
    if application is not None:
        owner_id = _posting_owner_id(db, application.job_id)
        if claims.subject_id in (application.user_id, owner_id):
            return application, owner_id
        if user_crud.is_admin(db, claims.subject_id):
            return application, owner_id
    raise NotFoundError("Application not found")


def _posting_owner_id(db: Session, job_id: int) -> int:
    posting = job_posting_crud.get_by_id(db, job_id)
    if not posting:
        raise NotFoundError("Job posting not found")
    return posting.owner_id


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ApplicationCreateResponse)
def create_application(
    request: ApplicationCreateRequest,
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(get_current_claims)
):
    """
    Apply to a job posting as the signed-in user.

    The application starts in the Submitted state.
    """
    if job_posting_crud.get_by_id(db, request.job_id) is None:
        raise NotFoundError("Job posting not found")
    if user_crud.get_by_id(db, claims.subject_id) is None:
        raise NotFoundError("User not found")

    application_id = application_crud.create(
        db,
        job_id=request.job_id,
        user_id=claims.subject_id,
        **request.model_dump(exclude={"job_id"})
    )
    logger.info(f"User {claims.subject_id} applied to job posting {request.job_id} (application {application_id})")
    return ApplicationCreateResponse(applicationId=application_id)


@router.get("/job/{job_id}", response_model=List[ApplicationResponse])
def list_applications_for_job(
    job_id: int = Path(..., le=MAX_ID),
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(get_current_claims)
):
    """All applications to a posting."""
    _require_party(db, claims, _posting_owner_id(db, job_id))
    return application_crud.get_by_job(db, job_id)


@router.get("/user/{user_id}", response_model=List[ApplicationResponse])
def list_applications_for_user(
    user_id: int = Path(..., le=MAX_ID),
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(get_current_claims)
):
    """All applications made by a user."""
    _require_party(db, claims, user_id)
    return application_crud.get_by_user(db, user_id)


@router.get("/{application_id}", response_model=ApplicationResponse)
def get_application(
    application_id: int = Path(..., le=MAX_ID),
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(get_current_claims)
):
    application, _ = _get_visible_application(db, claims, application_id)
    return application


@router.delete("/{application_id}")
def delete_application(
    application_id: int = Path(..., le=MAX_ID),
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(get_current_claims)
):
    """Withdraw (applicant) or remove (posting owner) an application."""
    _get_visible_application(db, claims, application_id)

    if not application_crud.delete(db, application_id):
        raise NotFoundError("Application not found")

    logger.info(f"User {claims.subject_id} deleted application {application_id}")
    return {"message": "Application deleted successfully"}


@router.put("/{application_id}/status", response_model=ApplicationStatusUpdateResponse)
def update_application_status(
    request: ApplicationStatusUpdateRequest,
    application_id: int = Path(..., le=MAX_ID),
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(get_current_claims)
):
    """
    Update status, review feedback and completion flag together.

    Raises:
        400: unknown status, non-boolean isComplete, or a transition out of a final decision
        403: caller is the applicant (not the posting owner or an admin)
        404: unknown application, or the caller is not a party to it
    """
    _, owner_id = _get_visible_application(db, claims, application_id)
    _require_party(db, claims, owner_id)

    updated = approval.update_application_status(
        db,
        application_id,
        request.application_status,
        request.review_feedback,
        request.isComplete,
    )
    return ApplicationStatusUpdateResponse(updatedFields=ApplicationStatusFields(**updated))
