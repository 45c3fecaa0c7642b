# app/services/notification_service.py
from sqlalchemy.orm import Session

from app.core.logger import logger
from app.models.notification import Notification, NotificationKind
from app.models.result import PRIZES

def notify_medal(db: Session, user_id: str, competition_id: str, position: int, competition_title: str = "") -> bool:
    """Announce a new medal (fire-and-forget).

    Runs after the Result is committed; a failure here is logged and never
    rolls the Result back.
    """
    prize = PRIZES.get(position, f"Position {position}")
    where = f" in {competition_title}" if competition_title else ""

    try:
        db.add(Notification(
            user_id=user_id,
            competition_id=competition_id,
            kind=NotificationKind.MEDAL,
            message=f"Congratulations! You won the {prize}{where}."
        ))
        db.commit()
        return True
    except Exception as e:
        db.rollback()
        logger.warning(f"Medal notification failed for user {user_id} in {competition_id}: {e}")
        return False

def notify_status_change(db: Session, user_ids: list[str], competition_id: str, competition_title: str, new_status: str) -> int:
    """Tell participants that a competition moved to voting or completed"""
    if new_status == "voting":
        message = f"Voting is now open for {competition_title}."
    else:
        message = f"{competition_title} has ended. Check out the results!"

    try:
        for user_id in user_ids:
            db.add(Notification(
                user_id=user_id,
                competition_id=competition_id,
                kind=NotificationKind.STATUS,
                message=message
            ))
        db.commit()
    except Exception as e:
        db.rollback()
        logger.warning(f"Status notifications failed for {competition_id} ({new_status}): {e}")
        return 0

    logger.info(f"Sent {len(user_ids)} '{new_status}' notifications for \"{competition_title}\"")
    return len(user_ids)
