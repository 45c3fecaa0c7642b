# app/models/submission.py
from sqlalchemy import Column, String, Integer, Float, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
import uuid
import enum

class SubmissionStatus(str, enum.Enum):
    """Moderation status"""
    PENDING = "pending"
    APPROVED = "approved"  # only approved entries are ranked
    REJECTED = "rejected"

class PhotoSubmission(Base):
    """Photo entered into a competition"""
    __tablename__ = "photo_submissions"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    competition_id = Column(String, ForeignKey("competitions.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(100), nullable=False)
    image_url = Column(String, nullable=False, default="")

    # Ratings (average_rating stays NULL until the first vote)
    average_rating = Column(Float, nullable=True)
    rating_count = Column(Integer, nullable=False, default=0)
    total_rating_sum = Column(Integer, nullable=False, default=0)

    status = Column(SQLEnum(SubmissionStatus), default=SubmissionStatus.PENDING, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    competition = relationship("Competition", back_populates="submissions")
    user = relationship("User", backref="submissions")

    def update_average_rating(self):
        """Recompute average_rating from the running sum and count"""
        if self.rating_count and self.rating_count > 0:
            self.average_rating = self.total_rating_sum / self.rating_count
        else:
            self.average_rating = None

    def __repr__(self):
        return f"<PhotoSubmission {self.title} ({self.average_rating}, {self.rating_count})>"
