# app/services/rating_service.py
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, RatingNotAllowedError
from app.core.logger import logger
from app.models.competition import Competition, CompetitionStatus
from app.models.rating import Rating
from app.models.submission import PhotoSubmission, SubmissionStatus
from app.models.user import User

MIN_SCORE = 1
MAX_SCORE = 5

def rate_submission(db: Session, user: User, submission_id: str, score: int) -> tuple[Rating, bool]:
    """
    Rate a submission during the voting phase.
    - score 1-5
    - no rating your own photo
    - rating again replaces your previous score
    Returns (rating, created).
    """
    if not MIN_SCORE <= score <= MAX_SCORE:
        raise RatingNotAllowedError(f"Rating must be between {MIN_SCORE} and {MAX_SCORE}")

    submission = db.query(PhotoSubmission).filter(PhotoSubmission.id == submission_id).first()
    if not submission:
        raise NotFoundError("Submission", submission_id)

    if submission.status != SubmissionStatus.APPROVED:
        raise RatingNotAllowedError("Only approved submissions can be rated")

    competition = db.query(Competition).filter(Competition.id == submission.competition_id).first()
    if not competition:
        raise NotFoundError("Competition", submission.competition_id)

    # Open only while voting, not while photos are still being submitted ("active")
    if competition.status != CompetitionStatus.VOTING:
        raise RatingNotAllowedError("Competition is not open for voting")

    if submission.user_id == user.id:
        raise RatingNotAllowedError("You cannot rate your own submission")

    existing = db.query(Rating)\
        .filter(Rating.user_id == user.id, Rating.submission_id == submission_id)\
        .first()

    if existing:
        submission.total_rating_sum = submission.total_rating_sum - existing.score + score
        existing.score = score
        rating = existing
    else:
        rating = Rating(
            submission_id=submission_id,
            competition_id=submission.competition_id,
            user_id=user.id,
            score=score
        )
        db.add(rating)
        submission.total_rating_sum = (submission.total_rating_sum or 0) + score
        submission.rating_count = (submission.rating_count or 0) + 1

    submission.update_average_rating()
    db.commit()
    db.refresh(rating)

    logger.info(
        f"User {user.id} rated submission {submission_id} {score}/5 "
        f"(avg {submission.average_rating:.2f} over {submission.rating_count})"
    )
    return rating, existing is None
