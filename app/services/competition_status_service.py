# app/services/competition_status_service.py
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.logger import logger
from app.models.competition import Competition, CompetitionStatus, STATUS_ORDER
from app.models.submission import PhotoSubmission
from app.services import achievement_service, notification_service

@dataclass
class StatusUpdateResult:
    competition_id: str
    title: str
    old_status: str
    new_status: str
    success: bool
    message: str
    notifications_sent: int = 0
    results_created: Optional[int] = None

@dataclass
class PendingStatusChange:
    competition_id: str
    title: str
    current_status: str
    expected_status: str
    start_date: datetime
    end_date: datetime
    voting_end_date: Optional[datetime] = None

def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)

def expected_status(competition: Competition, now: datetime) -> CompetitionStatus:
    """Status the competition should have at `now`, from its dates alone"""
    now = _as_utc(now)
    start_date = _as_utc(competition.start_date)
    end_date = _as_utc(competition.end_date)
    voting_end_date = _as_utc(competition.voting_end_date)

    if now < start_date:
        return CompetitionStatus.UPCOMING
    if now < end_date:
        return CompetitionStatus.ACTIVE
    if voting_end_date is not None and now < voting_end_date:
        return CompetitionStatus.VOTING
    return CompetitionStatus.COMPLETED

def next_status(current: CompetitionStatus, expected: CompetitionStatus) -> CompetitionStatus:
    """Transitions only move forward; an earlier expected status is ignored"""
    current = CompetitionStatus(current)
    if STATUS_ORDER.index(expected) > STATUS_ORDER.index(current):
        return expected
    return current

def _participant_ids(db: Session, competition_id: str) -> List[str]:
    rows = db.query(PhotoSubmission.user_id)\
        .filter(PhotoSubmission.competition_id == competition_id)\
        .distinct()\
        .all()
    return [row[0] for row in rows]

def _eligible_competitions(db: Session, bypass_manual_override: bool) -> List[Competition]:
    query = db.query(Competition)
    if not bypass_manual_override:
        query = query.filter(or_(
            Competition.manual_status_override == False,  # noqa: E712
            Competition.manual_status_override == None  # noqa: E711
        ))
    return query.order_by(Competition.start_date).all()

def update_single_competition_status(db: Session, competition: Competition, now: datetime) -> Optional[StatusUpdateResult]:
    """Advance one competition; None when nothing changes"""
    current = CompetitionStatus(competition.status)
    new = next_status(current, expected_status(competition, now))

    if new == current:
        return None

    logger.info(f"[AUTO-STATUS] \"{competition.title}\" ({competition.id}): {current.value} -> {new.value}")

    try:
        competition.status = new
        competition.last_auto_status_update = now
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"[AUTO-STATUS] Error updating \"{competition.title}\": {e}")
        return StatusUpdateResult(
            competition_id=competition.id,
            title=competition.title,
            old_status=current.value,
            new_status=new.value,
            success=False,
            message=f"Error updating status: {e}"
        )

    result = StatusUpdateResult(
        competition_id=competition.id,
        title=competition.title,
        old_status=current.value,
        new_status=new.value,
        success=True,
        message=f"Successfully updated from {current.value} to {new.value}"
    )

    # Medals first, so the "completed" notification points at real results
    if new == CompetitionStatus.COMPLETED:
        try:
            report = achievement_service.synchronize_competition(db, competition.id)
            result.results_created = report.results_created
        except Exception as e:
            logger.exception(f"[AUTO-STATUS] Result sync failed for \"{competition.title}\"")
            db.rollback()
            result.message += f" (result sync failed: {e})"

    if new in (CompetitionStatus.VOTING, CompetitionStatus.COMPLETED):
        result.notifications_sent = notification_service.notify_status_change(
            db,
            _participant_ids(db, competition.id),
            competition.id,
            competition.title,
            new.value
        )

    return result

def update_competition_statuses(
    db: Session,
    now: Optional[datetime] = None,
    bypass_manual_override: bool = False
) -> List[StatusUpdateResult]:
    """Cron tick: move every eligible competition to its date-derived status"""
    now = now or datetime.now(timezone.utc)
    results: List[StatusUpdateResult] = []

    competitions = _eligible_competitions(db, bypass_manual_override)
    logger.info(f"[AUTO-STATUS] Checking {len(competitions)} competitions at {now.isoformat()}")

    for competition in competitions:
        update = update_single_competition_status(db, competition, now)
        if update:
            results.append(update)

    logger.info(f"[AUTO-STATUS] {len(results)} competitions updated")
    return results

def competitions_needing_update(db: Session, now: Optional[datetime] = None) -> List[PendingStatusChange]:
    """Preview of pending transitions, no writes"""
    now = now or datetime.now(timezone.utc)
    pending = []

    for competition in _eligible_competitions(db, bypass_manual_override=False):
        current = CompetitionStatus(competition.status)
        new = next_status(current, expected_status(competition, now))
        if new != current:
            pending.append(PendingStatusChange(
                competition_id=competition.id,
                title=competition.title,
                current_status=current.value,
                expected_status=new.value,
                start_date=competition.start_date,
                end_date=competition.end_date,
                voting_end_date=competition.voting_end_date
            ))

    return pending
