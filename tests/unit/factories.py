from datetime import datetime, timedelta, timezone

from app.core.security import create_access_token
from app.models.competition import Competition, CompetitionStatus
from app.models.submission import PhotoSubmission, SubmissionStatus
from app.models.user import User


NOW = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_user(db, name: str, is_admin: bool = False) -> User:
    user = User(id=name, email=f"{name}@example.com", username=name, is_admin=is_admin)
    db.add(user)
    db.commit()
    return user


def make_competition(db, competition_id: str = "comp-1", status: CompetitionStatus = CompetitionStatus.COMPLETED, **dates) -> Competition:
    competition = Competition(
        id=competition_id,
        title=f"Competition {competition_id}",
        theme="Street",
        status=status,
        start_date=dates.get("start_date", NOW - timedelta(days=30)),
        end_date=dates.get("end_date", NOW - timedelta(days=20)),
        voting_end_date=dates.get("voting_end_date", NOW - timedelta(days=10)),
        manual_status_override=dates.get("manual_status_override", False),
    )
    db.add(competition)
    db.commit()
    return competition


def make_submission(db, submission_id: str, user: User, competition: Competition, rating=None, count: int = 0,
                    status: SubmissionStatus = SubmissionStatus.APPROVED) -> PhotoSubmission:
    submission = PhotoSubmission(
        id=submission_id,
        competition_id=competition.id,
        user_id=user.id,
        title=f"Photo {submission_id}",
        image_url=f"https://img.example.com/{submission_id}.jpg",
        average_rating=rating,
        rating_count=count,
        total_rating_sum=round((rating or 0) * count),
        status=status,
    )
    db.add(submission)
    db.commit()
    return submission


def auth_headers(user: User) -> dict:
    token = create_access_token({"sub": user.email, "user_id": user.id})
    return {"Authorization": f"Bearer {token}"}
