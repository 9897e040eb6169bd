from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Text, func
from sqlalchemy.orm import relationship
from jobboard.core.database import Base


class JobPosting(Base):
    """
    A job posted by a user.

    Postings start unapproved (pending) and become visible in the approved
    list once a reviewer sets is_approved. Nothing resets the flag automatically.
    """
    __tablename__ = "job_postings"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    signup_form = Column(String, nullable=True)
    job_type_tag = Column(String, nullable=True)
    industry_tag = Column(String, nullable=True)

    # Approval state: False = pending, True = approved
    is_approved = Column(Boolean, default=False, nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    owner = relationship("User", back_populates="job_postings")
    applications = relationship("JobApplication", back_populates="job", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<JobPosting(id={self.id}, title='{self.title}', is_approved={self.is_approved})>"
