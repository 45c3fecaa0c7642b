# app/api/routes/ratings.py
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.schemas.rating import RatingCreate, RatingResponse
from app.api.deps import get_current_user
from app.core.exceptions import NotFoundError, RatingNotAllowedError
from app.services import rating_service

router = APIRouter(prefix="/api/v1/ratings", tags=["ratings"])

@router.post("", response_model=RatingResponse, status_code=status.HTTP_201_CREATED)
def create_rating(
    data: RatingCreate,
    response: Response,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Rate a submission (201 on first rating, 200 on update)"""

    try:
        rating, created = rating_service.rate_submission(db, current_user, data.submission_id, data.score)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=e.message
        )
    except RatingNotAllowedError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message
        )

    if not created:
        response.status_code = status.HTTP_200_OK

    return rating
