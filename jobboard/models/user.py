"""
User model for authentication.

Each User is an Identity that can sign in. The password hash is written once
at registration and is never returned by any endpoint.
"""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, func
from sqlalchemy.orm import relationship
from jobboard.core.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    # Authentication credentials
    username = Column(String(64), unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)  # bcrypt output only

    # Roles
    is_admin = Column(Boolean, default=False, nullable=False)  # Reviewer for posting approval
    is_teacher = Column(Boolean, default=False, nullable=False)

    # Profile
    real_name = Column(String, nullable=True)
    personal_email = Column(String, nullable=True)
    school_name = Column(String, nullable=True)
    city = Column(String, nullable=True)
    state = Column(String, nullable=True)
    bio = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    job_postings = relationship("JobPosting", back_populates="owner", cascade="all, delete-orphan")
    applications = relationship("JobApplication", back_populates="applicant", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}')>"
