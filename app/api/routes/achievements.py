# app/api/routes/achievements.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.schemas.achievement import UserAchievementsResponse
from app.services import achievement_service

router = APIRouter(prefix="/api/v1/users", tags=["achievements"])

@router.get("/{user_id}/achievements", response_model=UserAchievementsResponse)
def get_user_achievements(
    user_id: str,
    db: Session = Depends(get_db)
):
    """User medals"""

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    return achievement_service.get_user_achievements(db, user_id)
