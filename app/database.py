# app/database.py
from sqlalchemy import create_engine
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import sessionmaker
from app.config import settings

# SQLite needs this so the session can be used from FastAPI's worker threads
connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

# Database engine
engine = create_engine(
    settings.database_url,
    echo=settings.debug,  # log SQL queries
    connect_args=connect_args
)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for all models
Base = declarative_base()

# DB session dependency (used by FastAPI)
def get_db():
    """Open and close a DB session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
