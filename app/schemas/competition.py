# app/schemas/competition.py
from pydantic import BaseModel
from datetime import datetime
from typing import List, Optional

class LeaderboardEntry(BaseModel):
    """Ranked submission"""
    rank: int
    submission_id: str
    user_id: str
    title: str
    average_rating: float
    rating_count: int

class LeaderboardResponse(BaseModel):
    """Competition leaderboard"""
    competition_id: str
    competition_title: str
    status: str
    entries: List[LeaderboardEntry]
    total: int

class StatusUpdateResponse(BaseModel):
    competition_id: str
    title: str
    old_status: str
    new_status: str
    success: bool
    message: str
    notifications_sent: int = 0
    results_created: Optional[int] = None

class StatusUpdateSummary(BaseModel):
    """Cron tick summary"""
    total: int
    successful: int
    errors: int
    updates: List[StatusUpdateResponse]

class PendingStatusChangeResponse(BaseModel):
    competition_id: str
    title: str
    current_status: str
    expected_status: str
    start_date: datetime
    end_date: datetime
    voting_end_date: Optional[datetime] = None
