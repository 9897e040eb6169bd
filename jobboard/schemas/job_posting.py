from pydantic import BaseModel, Field, StrictBool
from typing import Optional
from datetime import datetime


class JobPostingCreateRequest(BaseModel):
    """Schema for creating a new job posting (owner comes from the token)"""
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    signup_form: Optional[str] = None
    job_type_tag: Optional[str] = None
    industry_tag: Optional[str] = None


class JobPostingCreateResponse(BaseModel):
    message: str
    jobId: int


class JobPostingResponse(BaseModel):
    """Schema for job posting response"""
    id: int
    owner_id: int
    title: str
    description: str
    signup_form: Optional[str] = None
    job_type_tag: Optional[str] = None
    industry_tag: Optional[str] = None
    is_approved: bool = Field(..., serialization_alias="isApproved")
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True  # Allows conversion from SQLAlchemy models


class ToggleApprovalRequest(BaseModel):
    """Explicit target approval state. Strings and numbers are rejected."""
    isApproved: StrictBool


class ToggleApprovalResponse(BaseModel):
    message: str = "Approval status updated successfully"
    job_id: int
    new_status: bool
