# app/api/routes/competitions.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.models.competition import Competition
from app.schemas.competition import LeaderboardEntry, LeaderboardResponse
from app.schemas.achievement import CompetitionAchievementsResponse, CompetitionResultItem, SyncReportResponse
from app.api.deps import get_current_admin
from app.core.exceptions import NotFoundError
from app.services import ranking_service, achievement_service

router = APIRouter(prefix="/api/v1/competitions", tags=["competitions"])

@router.get("/{competition_id}/leaderboard", response_model=LeaderboardResponse)
def get_leaderboard(
    competition_id: str,
    limit: int = 50,
    db: Session = Depends(get_db)
):
    """Ranked approved submissions"""

    competition = db.query(Competition).filter(Competition.id == competition_id).first()
    if not competition:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Competition not found"
        )

    ranked = ranking_service.rank_competition(db, competition_id)

    entries = [
        LeaderboardEntry(
            rank=s.rank,
            submission_id=s.id,
            user_id=s.user_id,
            title=s.title,
            average_rating=s.average_rating,
            rating_count=s.rating_count
        )
        for s in ranked[:max(limit, 0)]
    ]

    return LeaderboardResponse(
        competition_id=competition.id,
        competition_title=competition.title,
        status=competition.status.value,
        entries=entries,
        total=len(ranked)
    )

@router.get("/{competition_id}/achievements", response_model=CompetitionAchievementsResponse)
def get_competition_achievements(
    competition_id: str,
    db: Session = Depends(get_db)
):
    """Medal results of a competition"""

    try:
        results = achievement_service.get_competition_results(db, competition_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message
        )

    return CompetitionAchievementsResponse(
        competition_id=competition_id,
        results=[CompetitionResultItem.model_validate(r) for r in results],
        total=len(results)
    )

@router.post("/{competition_id}/sync-results", response_model=SyncReportResponse)
def sync_competition_results(
    competition_id: str,
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Rebuild medal results for one competition (admin)"""

    try:
        report = achievement_service.synchronize_competition(db, competition_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message
        )

    return SyncReportResponse(**report.to_dict())
