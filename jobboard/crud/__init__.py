"""
CRUD operations (Create, Read, Update, Delete) for database models.

This layer provides a clean separation between API routes and database operations,
following the Repository pattern. All modules go through crud.base, which
translates store failures into the application's error types.
"""

from jobboard.crud import application, job_posting, user

__all__ = ["application", "job_posting", "user"]
