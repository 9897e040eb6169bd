"""
Pydantic schemas for job applications and their review status.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, StrictBool
from jobboard.core.database import MAX_ID
from jobboard.models.application import ApplicationStatus


class ApplicationCreateRequest(BaseModel):
    """Applicant's answers. The applicant is the token subject."""
    job_id: int = Field(..., le=MAX_ID)
    why_interested: Optional[str] = None
    relevant_skills: Optional[str] = None
    hope_to_gain: Optional[str] = None


class ApplicationCreateResponse(BaseModel):
    message: str = "Application submitted successfully"
    applicationId: int


class ApplicationResponse(BaseModel):
    id: int
    job_id: int
    user_id: int
    why_interested: Optional[str] = None
    relevant_skills: Optional[str] = None
    hope_to_gain: Optional[str] = None
    application_status: ApplicationStatus
    review_feedback: Optional[str] = None
    is_complete: bool = Field(..., serialization_alias="isComplete")
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ApplicationStatusUpdateRequest(BaseModel):
    """
    Full next state of an application.

    All three fields are written together: to change only the feedback,
    send the current application_status and isComplete again.
    """
    application_status: ApplicationStatus
    review_feedback: Optional[str] = None
    isComplete: StrictBool


class ApplicationStatusFields(BaseModel):
    application_status: ApplicationStatus
    review_feedback: Optional[str] = None
    isComplete: bool


class ApplicationStatusUpdateResponse(BaseModel):
    message: str = "Application updated successfully"
    updatedFields: ApplicationStatusFields
