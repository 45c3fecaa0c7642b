# app/services/ranking_service.py
"""Dense ranking of competition submissions.

Submissions are ordered by average rating, then by rating count, both
descending. Entries with the same (rating, count) pair share a rank and the
next distinct pair gets the next integer, so ranks never skip:

    A(4.8, 10), B(4.8, 10), C(4.5, 8)  ->  A:1, B:1, C:2
"""
from dataclasses import dataclass
from typing import Iterable, List

from sqlalchemy.orm import Session

from app.models.submission import PhotoSubmission, SubmissionStatus


@dataclass(frozen=True)
class RankedSubmission:
    """Submission snapshot with its dense rank"""
    id: str
    user_id: str
    average_rating: float
    rating_count: int
    rank: int
    title: str = ""

    @property
    def rating_key(self) -> tuple[float, int]:
        return (self.average_rating, self.rating_count)


def _rating_pair(submission) -> tuple[float, int]:
    # Unrated entries rank as rating 0 / count 0
    return (submission.average_rating or 0.0, submission.rating_count or 0)


def rank_submissions(submissions: Iterable) -> List[RankedSubmission]:
    """Assign dense ranks to the approved submissions of one competition.

    Accepts any objects exposing ``id``, ``user_id``, ``average_rating`` and
    ``rating_count``. Ties keep a stable order by id so repeated runs produce
    the same list.
    """
    ordered = sorted(submissions, key=lambda s: str(s.id))
    ordered.sort(key=_rating_pair, reverse=True)

    ranked: List[RankedSubmission] = []
    rank = 0
    previous = None

    for submission in ordered:
        pair = _rating_pair(submission)
        if pair != previous:
            rank += 1
            previous = pair

        ranked.append(RankedSubmission(
            id=str(submission.id),
            user_id=str(submission.user_id),
            average_rating=pair[0],
            rating_count=pair[1],
            rank=rank,
            title=getattr(submission, "title", "") or "",
        ))

    return ranked


def get_approved_submissions(db: Session, competition_id: str) -> List[PhotoSubmission]:
    """Approved submissions of a competition"""
    return db.query(PhotoSubmission)\
        .filter(
            PhotoSubmission.competition_id == competition_id,
            PhotoSubmission.status == SubmissionStatus.APPROVED
        )\
        .all()


def rank_competition(db: Session, competition_id: str) -> List[RankedSubmission]:
    """Load and rank a competition's approved submissions"""
    return rank_submissions(get_approved_submissions(db, competition_id))
