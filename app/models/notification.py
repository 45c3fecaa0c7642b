# app/models/notification.py
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
import uuid
import enum

class NotificationKind(str, enum.Enum):
    MEDAL = "medal"
    STATUS = "status"

class Notification(Base):
    """In-app notification"""
    __tablename__ = "notifications"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    competition_id = Column(String, ForeignKey("competitions.id", ondelete="CASCADE"), nullable=True)

    kind = Column(SQLEnum(NotificationKind), nullable=False)
    message = Column(String, nullable=False)
    is_read = Column(Boolean, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User")

    def __repr__(self):
        return f"<Notification {self.kind} for User {self.user_id}>"
