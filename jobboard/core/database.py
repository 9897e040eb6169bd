from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from jobboard.core.config import settings

# Create SQLAlchemy engine (shared connection pool for all requests)
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,  # Verify connections before using them
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
    pool_timeout=settings.DB_POOL_TIMEOUT,  # Queue for a connection, then raise TimeoutError
    connect_args={"connect_timeout": settings.DB_CONNECT_TIMEOUT},
)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()

# Largest id an Integer primary key column can hold
MAX_ID = 2**31 - 1


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """
    Initialize database.

    Imports the models so they are registered on Base.metadata. Tables are
    only created when DB_CREATE_TABLES is set (local development); deployed
    databases are provisioned separately.
    """
    from jobboard.models import user, job_posting, application  # noqa: F401
    if settings.DB_CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
