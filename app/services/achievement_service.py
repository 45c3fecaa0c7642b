# app/services/achievement_service.py
"""Medal (Result) synchronization.

Results are rebuilt from scratch on every run: the user's Results for the
competition are deleted, one representative submission is chosen per medal
position, and a Result is inserted for each. Given the same submission
snapshot, a run always produces the same records.
"""
from dataclasses import dataclass, field, asdict
from typing import Callable, Iterable, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import InvariantViolation, NotFoundError, PersistenceError
from app.core.logger import logger
from app.models.competition import Competition, CompetitionStatus
from app.models.result import Result, PRIZES
from app.services.achievement_cache import achievement_cache
from app.services.notification_service import notify_medal
from app.services.ranking_service import RankedSubmission, rank_competition

MEDAL_POSITIONS = (1, 2, 3)

# (competition_id, user_id)
InvalidateCallback = Callable[[str, str], None]
# (user_id, competition_id, position)
MedalNotifier = Callable[[str, str, int], None]


class ResultStore:
    """Result persistence for one DB session"""

    def __init__(self, db: Session):
        self.db = db

    def find(self, competition_id: str, user_id: str) -> List[Result]:
        return self.db.query(Result)\
            .filter(Result.competition_id == competition_id, Result.user_id == user_id)\
            .order_by(Result.position)\
            .all()

    def user_ids(self, competition_id: str) -> List[str]:
        """Users currently holding Results in a competition"""
        rows = self.db.query(Result.user_id)\
            .filter(Result.competition_id == competition_id)\
            .distinct()\
            .all()
        return [row[0] for row in rows]

    def delete_many(self, competition_id: str, user_id: str) -> int:
        try:
            deleted = self.db.query(Result)\
                .filter(Result.competition_id == competition_id, Result.user_id == user_id)\
                .delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(
                f"Could not clear results for user {user_id} in competition {competition_id}",
                {"competition_id": competition_id, "user_id": user_id, "cause": str(e)}
            ) from e
        return deleted

    def insert(self, record: dict) -> Result:
        result = Result(**record)
        try:
            self.db.add(result)
            self.db.commit()
            self.db.refresh(result)
        except IntegrityError as e:
            self.db.rollback()
            raise InvariantViolation(
                f"Result already exists for position {record['position']} "
                f"of user {record['user_id']} in competition {record['competition_id']}",
                {key: record[key] for key in ("competition_id", "user_id", "position")}
            ) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(
                f"Could not insert result for position {record['position']}",
                {"cause": str(e)}
            ) from e
        return result


def select_representatives(user_submissions: Iterable[RankedSubmission]) -> dict[int, RankedSubmission]:
    """Pick at most one submission per medal position for a single user.

    Positions 1 and 2 need a submission at exactly that dense rank. Position 3
    falls back to the user's best-ranked submission not already used for
    gold or silver when nothing sits at rank 3. A photo that tied for an
    earlier position but was not picked stays eligible.
    """
    user_submissions = list(user_submissions)
    selected: dict[int, RankedSubmission] = {}

    for position in MEDAL_POSITIONS:
        at_position = [s for s in user_submissions if s.rank == position]

        if at_position:
            selected[position] = min(at_position, key=lambda s: (-s.average_rating, s.id))
        elif position == 3:
            used = {s.id for s in selected.values()}
            remaining = [s for s in user_submissions if s.id not in used]
            if remaining:
                selected[position] = min(remaining, key=lambda s: (s.rank, s.id))

    return selected


def build_result_record(competition_id: str, user_id: str, position: int, submission: RankedSubmission) -> dict:
    return {
        "competition_id": competition_id,
        "user_id": user_id,
        "photo_id": submission.id,
        "position": position,
        "final_score": submission.average_rating or 0,
        "prize": PRIZES[position],
    }


def synchronize_user_results(
    competition_id: str,
    user_id: str,
    ranked: List[RankedSubmission],
    store: ResultStore,
    on_results_changed: Optional[InvalidateCallback] = None,
    notify: Optional[MedalNotifier] = None
) -> List[Result]:
    """Rebuild one user's Results in one competition.

    Raises PersistenceError when the clear step fails; insert failures are
    logged per position and the remaining positions still run. Returns the
    inserted Results.
    """
    previous = {(r.position, r.photo_id) for r in store.find(competition_id, user_id)}

    # 1. Clear (aborts the run on failure)
    deleted = store.delete_many(competition_id, user_id)

    # 2. Select
    user_submissions = [s for s in ranked if s.user_id == user_id]
    representatives = select_representatives(user_submissions)

    # 3. Persist
    inserted: List[Result] = []
    for position, submission in sorted(representatives.items()):
        record = build_result_record(competition_id, user_id, position, submission)
        try:
            inserted.append(store.insert(record))
        except InvariantViolation as e:
            logger.error(f"Invariant violation while syncing {competition_id}: {e.message}")
        except PersistenceError as e:
            logger.error(f"Skipping position {position} for user {user_id} in {competition_id}: {e.message}")

    logger.debug(
        f"Synced user {user_id} in {competition_id}: "
        f"deleted {deleted}, inserted {[r.position for r in inserted]}"
    )

    if notify:
        for result in inserted:
            if (result.position, result.photo_id) in previous:
                continue
            try:
                notify(user_id, competition_id, result.position)
            except Exception as e:
                logger.warning(f"Medal notification failed for user {user_id}: {e}")

    if on_results_changed:
        on_results_changed(competition_id, user_id)

    return inserted


@dataclass
class UserSyncOutcome:
    user_id: str
    success: bool
    positions: List[int] = field(default_factory=list)
    error: Optional[str] = None


@dataclass
class SyncReport:
    competition_id: str
    competition_title: str = ""
    ranked_submissions: int = 0
    users: List[UserSyncOutcome] = field(default_factory=list)

    @property
    def results_created(self) -> int:
        return sum(len(u.positions) for u in self.users)

    @property
    def failures(self) -> List[UserSyncOutcome]:
        return [u for u in self.users if not u.success]

    def medal_counts(self) -> dict[int, int]:
        counts = {position: 0 for position in MEDAL_POSITIONS}
        for outcome in self.users:
            for position in outcome.positions:
                counts[position] += 1
        return counts

    def to_dict(self) -> dict:
        data = asdict(self)
        data["results_created"] = self.results_created
        data["medal_counts"] = self.medal_counts()
        return data


@dataclass
class BatchSyncReport:
    competitions: List[SyncReport] = field(default_factory=list)
    errors: List[dict] = field(default_factory=list)

    @property
    def results_created(self) -> int:
        return sum(report.results_created for report in self.competitions)

    def to_dict(self) -> dict:
        return {
            "competitions": [report.to_dict() for report in self.competitions],
            "errors": self.errors,
            "results_created": self.results_created,
        }


def synchronize_competition(
    db: Session,
    competition_id: str,
    on_results_changed: Optional[InvalidateCallback] = achievement_cache.invalidate,
    send_notifications: bool = True
) -> SyncReport:
    """Rank a competition once and rebuild Results for every participant"""

    competition = db.query(Competition).filter(Competition.id == competition_id).first()
    if not competition:
        raise NotFoundError("Competition", competition_id)

    ranked = rank_competition(db, competition_id)
    store = ResultStore(db)
    report = SyncReport(
        competition_id=competition_id,
        competition_title=competition.title,
        ranked_submissions=len(ranked)
    )

    notify = None
    if send_notifications:
        def notify(user_id, comp_id, position):
            notify_medal(db, user_id, comp_id, position, competition.title)

    # Participants in rank order, then users left holding stale Results
    user_ids: List[str] = []
    for submission in ranked:
        if submission.user_id not in user_ids:
            user_ids.append(submission.user_id)
    user_ids.extend(uid for uid in store.user_ids(competition_id) if uid not in user_ids)

    logger.info(f"Synchronizing \"{competition.title}\" ({competition_id}): {len(ranked)} submissions, {len(user_ids)} users")

    for user_id in user_ids:
        try:
            inserted = synchronize_user_results(
                competition_id, user_id, ranked, store,
                on_results_changed=on_results_changed,
                notify=notify
            )
            report.users.append(UserSyncOutcome(
                user_id=user_id,
                success=True,
                positions=[r.position for r in inserted]
            ))
        except Exception as e:
            logger.exception(f"Result sync failed for user {user_id} in {competition_id}")
            db.rollback()
            report.users.append(UserSyncOutcome(user_id=user_id, success=False, error=str(e)))

    logger.info(
        f"Synchronized \"{competition.title}\": {report.results_created} results, "
        f"{len(report.failures)} failures"
    )
    return report


def synchronize_all_completed(
    db: Session,
    competition_ids: Optional[List[str]] = None,
    on_results_changed: Optional[InvalidateCallback] = achievement_cache.invalidate,
    send_notifications: bool = True
) -> BatchSyncReport:
    """Rebuild Results for the given competitions, or every completed one"""

    if competition_ids is None:
        rows = db.query(Competition.id)\
            .filter(Competition.status == CompetitionStatus.COMPLETED)\
            .order_by(Competition.end_date)\
            .all()
        competition_ids = [row[0] for row in rows]

    batch = BatchSyncReport()
    for competition_id in competition_ids:
        try:
            batch.competitions.append(synchronize_competition(
                db, competition_id,
                on_results_changed=on_results_changed,
                send_notifications=send_notifications
            ))
        except NotFoundError as e:
            logger.warning(f"Skipping sync: {e.message}")
            batch.errors.append({"competition_id": competition_id, **e.to_dict()})
        except Exception as e:
            logger.exception(f"Result sync failed for competition {competition_id}")
            db.rollback()
            batch.errors.append({"competition_id": competition_id, "error": type(e).__name__, "message": str(e)})

    logger.info(
        f"Batch sync finished: {len(batch.competitions)} competitions, "
        f"{batch.results_created} results, {len(batch.errors)} errors"
    )
    return batch


def get_user_achievements(db: Session, user_id: str) -> dict:
    """User medals with per-position totals (cached)"""
    cached = achievement_cache.get(user_id)
    if cached is not None:
        return cached

    results = db.query(Result)\
        .filter(Result.user_id == user_id)\
        .order_by(Result.created_at.desc(), Result.position)\
        .all()

    achievements = [
        {
            "competition_id": r.competition_id,
            "competition_title": r.competition.title if r.competition else "",
            "photo_id": r.photo_id,
            "position": r.position,
            "final_score": r.final_score,
            "prize": r.prize,
        }
        for r in results
    ]
    summary = {
        "user_id": user_id,
        "achievements": achievements,
        "gold": sum(1 for a in achievements if a["position"] == 1),
        "silver": sum(1 for a in achievements if a["position"] == 2),
        "bronze": sum(1 for a in achievements if a["position"] == 3),
        "total": len(achievements),
    }
    achievement_cache.set(user_id, summary)
    return summary


def get_competition_results(db: Session, competition_id: str) -> List[Result]:
    """Medal Results of a competition, ordered by position"""
    competition = db.query(Competition).filter(Competition.id == competition_id).first()
    if not competition:
        raise NotFoundError("Competition", competition_id)

    return db.query(Result)\
        .filter(Result.competition_id == competition_id, Result.position <= 3)\
        .order_by(Result.position, Result.user_id)\
        .all()
