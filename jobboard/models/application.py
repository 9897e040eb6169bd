import enum
from sqlalchemy import Column, Integer, Boolean, DateTime, Enum, ForeignKey, Text, func
from sqlalchemy.orm import relationship
from jobboard.core.database import Base


class ApplicationStatus(str, enum.Enum):
    """
    Application review lifecycle:

    SUBMITTED -> UNDER_REVIEW -> ACCEPTED | REJECTED
    SUBMITTED -> ACCEPTED | REJECTED

    is_complete is tracked separately and may be set in any status.
    """
    SUBMITTED = "Submitted"
    UNDER_REVIEW = "UnderReview"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"


class JobApplication(Base):
    """An application by a user (the applicant) to a job posting."""
    __tablename__ = "job_applications"

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, ForeignKey("job_postings.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    why_interested = Column(Text, nullable=True)
    relevant_skills = Column(Text, nullable=True)
    hope_to_gain = Column(Text, nullable=True)

    # Written only by the status-update operation
    application_status = Column(
        Enum(ApplicationStatus),
        default=ApplicationStatus.SUBMITTED,
        nullable=False,
        index=True
    )
    review_feedback = Column(Text, nullable=True)
    is_complete = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    job = relationship("JobPosting", back_populates="applications")
    applicant = relationship("User", back_populates="applications")

    def __repr__(self):
        return f"<JobApplication(id={self.id}, job_id={self.job_id}, status={self.application_status.value})>"
