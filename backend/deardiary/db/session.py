"""
Database session management.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from deardiary.core.config import settings
from deardiary.db.base import Base

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # Requests may be served from a thread other than the one that opened the connection
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    pool_pre_ping=True,
    connect_args=connect_args,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Session:
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Initialize database tables."""
    import deardiary.models  # noqa: F401  registers all tables on Base.metadata
    Base.metadata.create_all(bind=engine)
