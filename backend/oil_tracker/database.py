from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from oil_tracker.config import settings


connect_args = {}
if settings.database_url.startswith("sqlite"):
    # FastAPI may hand the session to a different worker thread
    connect_args = {"check_same_thread": False}

engine = create_engine(settings.database_url, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Yield a session per request and always close it."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
