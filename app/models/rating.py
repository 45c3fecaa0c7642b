# app/models/rating.py
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
import uuid

class Rating(Base):
    """Peer rating (1-5) of a submission"""
    __tablename__ = "ratings"
    __table_args__ = (
        UniqueConstraint("user_id", "submission_id", name="uq_rating_user_submission"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    submission_id = Column(String, ForeignKey("photo_submissions.id", ondelete="CASCADE"), nullable=False)
    competition_id = Column(String, ForeignKey("competitions.id", ondelete="CASCADE"), nullable=False)

    # Rater
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    score = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    submission = relationship("PhotoSubmission", backref="ratings")
    user = relationship("User", backref="ratings")

    def __repr__(self):
        return f"<Rating {self.score} for Submission {self.submission_id}>"
