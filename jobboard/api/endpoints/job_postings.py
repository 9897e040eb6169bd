import logging
from typing import List
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from jobboard.core.database import MAX_ID, get_db
from jobboard.core.deps import get_admin_claims, get_current_claims
from jobboard.core.exceptions import NotFoundError
from jobboard.crud import job_posting as job_posting_crud
from jobboard.crud import user as user_crud
from jobboard.schemas.job_posting import (
    JobPostingCreateRequest,
    JobPostingCreateResponse,
    JobPostingResponse,
    ToggleApprovalRequest,
    ToggleApprovalResponse,
)
from jobboard.schemas.user import TokenClaims
from jobboard.services import approval

router = APIRouter(prefix="/job_postings", tags=["Job Postings"])
logger = logging.getLogger(__name__)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=JobPostingCreateResponse)
def create_job_posting(
    request: JobPostingCreateRequest,
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(get_current_claims)
):
    """
    Create a job posting owned by the signed-in user.

    New postings start pending and only appear in /job_postings/approved
    after a reviewer approves them.
    """
    if user_crud.get_by_id(db, claims.subject_id) is None:
        raise NotFoundError("User not found")

    job_id = job_posting_crud.create(db, owner_id=claims.subject_id, **request.model_dump())
    logger.info(f"Created job posting {job_id} for user {claims.subject_id}")
    return JobPostingCreateResponse(message="Job posting created successfully", jobId=job_id)


@router.get("", response_model=List[JobPostingResponse])
def list_job_postings(db: Session = Depends(get_db)):
    """List all job postings regardless of approval state."""
    return job_posting_crud.get_multi(db)


@router.get("/approved", response_model=List[JobPostingResponse])
def list_approved_job_postings(db: Session = Depends(get_db)):
    """Postings a reviewer has approved."""
    return job_posting_crud.get_multi(db, is_approved=True)


@router.get("/pending", response_model=List[JobPostingResponse])
def list_pending_job_postings(db: Session = Depends(get_db)):
    """Postings waiting for review."""
    return job_posting_crud.get_multi(db, is_approved=False)


@router.get("/{job_id}", response_model=JobPostingResponse)
def get_job_posting(job_id: int = Path(..., le=MAX_ID), db: Session = Depends(get_db)):
    posting = job_posting_crud.get_by_id(db, job_id)
    if not posting:
        raise NotFoundError("Job posting not found")
    return posting


@router.put("/{job_id}/toggle-approval", response_model=ToggleApprovalResponse)
def toggle_approval(
    request: ToggleApprovalRequest,
    job_id: int = Path(..., le=MAX_ID),
    db: Session = Depends(get_db),
    claims: TokenClaims = Depends(get_admin_claims)
):
    """
    Set a posting's approval state. Admin only.

    The body must carry an explicit boolean, e.g. {"isApproved": true}.

    Raises:
        400: isApproved missing or not a boolean
        403: caller is not an admin
        404: unknown posting
    """
    result = approval.toggle_posting_approval(db, job_id, request.isApproved)
    logger.info(f"Reviewer {claims.subject_id} set job posting {job_id} approval to {result['new_status']}")
    return ToggleApprovalResponse(**result)
