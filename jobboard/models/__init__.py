"""
Database models package.
"""

from jobboard.models.user import User
from jobboard.models.job_posting import JobPosting
from jobboard.models.application import JobApplication, ApplicationStatus

__all__ = ["User", "JobPosting", "JobApplication", "ApplicationStatus"]
