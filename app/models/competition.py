# app/models/competition.py
from sqlalchemy import Column, String, Boolean, DateTime, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
import uuid
import enum

class CompetitionStatus(str, enum.Enum):
    """Competition lifecycle, in order"""
    UPCOMING = "upcoming"    # before start_date
    ACTIVE = "active"        # accepting submissions
    VOTING = "voting"        # submissions closed, peers rate
    COMPLETED = "completed"  # voting closed, medals awarded

STATUS_ORDER = [
    CompetitionStatus.UPCOMING,
    CompetitionStatus.ACTIVE,
    CompetitionStatus.VOTING,
    CompetitionStatus.COMPLETED,
]

class Competition(Base):
    """Themed photo competition"""
    __tablename__ = "competitions"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(100), nullable=False)
    theme = Column(String(50), nullable=False, default="")

    status = Column(SQLEnum(CompetitionStatus), default=CompetitionStatus.UPCOMING, nullable=False)

    # Schedule
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    voting_end_date = Column(DateTime(timezone=True), nullable=True)

    # Admins can pin a status; the cron tick skips pinned competitions
    manual_status_override = Column(Boolean, default=False, nullable=False)
    last_auto_status_update = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    submissions = relationship("PhotoSubmission", back_populates="competition", cascade="all, delete-orphan")
    results = relationship("Result", back_populates="competition", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Competition {self.title} - {self.status}>"
