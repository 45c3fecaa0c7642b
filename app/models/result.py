# app/models/result.py
from sqlalchemy import Column, String, Integer, Float, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
import uuid

PRIZES = {
    1: "Gold Medal",
    2: "Silver Medal",
    3: "Bronze Medal",
}

class Result(Base):
    """One medal awarded to one user in one competition"""
    __tablename__ = "results"
    __table_args__ = (
        # A user holds at most one record per medal position
        UniqueConstraint("competition_id", "position", "user_id", name="competition_position_user_unique"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    competition_id = Column(String, ForeignKey("competitions.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    photo_id = Column(String, ForeignKey("photo_submissions.id", ondelete="CASCADE"), nullable=False)

    position = Column(Integer, nullable=False)  # 1, 2, 3
    final_score = Column(Float, nullable=False, default=0)
    prize = Column(String, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    competition = relationship("Competition", back_populates="results")
    user = relationship("User", backref="results")
    photo = relationship("PhotoSubmission")

    def __repr__(self):
        return f"<Result {self.prize} for User {self.user_id} in {self.competition_id}>"
