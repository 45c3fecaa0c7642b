# app/schemas/rating.py
from pydantic import BaseModel, Field
from datetime import datetime

class RatingCreate(BaseModel):
    """Rating request"""
    submission_id: str
    score: int = Field(..., ge=1, le=5)

class RatingResponse(BaseModel):
    id: str
    submission_id: str
    competition_id: str
    user_id: str
    score: int
    created_at: datetime | None = None

    class Config:
        from_attributes = True
