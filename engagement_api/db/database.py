# /engagement_api/db/database.py

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from ..config import DATABASE_URL


def build_engine(url: str = DATABASE_URL, **engine_kwargs):
    """
    Creates the SQLAlchemy engine for `url`. SQLite connections are handed to
    FastAPI's worker threads, so same-thread checking is switched off for them;
    server databases get a liveness ping before a pooled connection is reused.
    """
    if url.startswith("sqlite"):
        engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
    else:
        engine_kwargs.setdefault("pool_pre_ping", True)
    return create_engine(url, **engine_kwargs)


engine = build_engine()

# Each SessionLocal() call opens one unit of work for one request.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """FastAPI dependency: one session per request, always closed afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
