# app/schemas/achievement.py
from pydantic import BaseModel, Field
from typing import List, Optional

class AchievementItem(BaseModel):
    """One medal"""
    competition_id: str
    competition_title: str
    photo_id: str
    position: int
    final_score: float
    prize: str

class UserAchievementsResponse(BaseModel):
    user_id: str
    achievements: List[AchievementItem]
    gold: int
    silver: int
    bronze: int
    total: int

class UserSyncOutcomeResponse(BaseModel):
    user_id: str
    success: bool
    positions: List[int]
    error: Optional[str] = None

class SyncReportResponse(BaseModel):
    """Result of syncing one competition"""
    competition_id: str
    competition_title: str
    ranked_submissions: int
    results_created: int
    medal_counts: dict[int, int]
    users: List[UserSyncOutcomeResponse]

class BatchSyncRequest(BaseModel):
    """Batch sync request (defaults to every completed competition)"""
    competition_ids: Optional[List[str]] = Field(default=None, min_length=1)

class BatchSyncResponse(BaseModel):
    competitions: List[SyncReportResponse]
    errors: List[dict]
    results_created: int

class CompetitionResultItem(BaseModel):
    user_id: str
    photo_id: str
    position: int
    final_score: float
    prize: str

    class Config:
        from_attributes = True

class CompetitionAchievementsResponse(BaseModel):
    """Medal results of one competition, by position"""
    competition_id: str
    results: List[CompetitionResultItem]
    total: int
