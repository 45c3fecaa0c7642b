# app/api/routes/admin.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.schemas.achievement import BatchSyncRequest, BatchSyncResponse
from app.schemas.competition import StatusUpdateSummary
from app.api.deps import get_current_admin
from app.core.logger import logger
from app.services import achievement_service, competition_status_service
from app.api.routes.cron import summarize

router = APIRouter(prefix="/api/v1/admin", tags=["admin"])

@router.post("/sync-achievements", response_model=BatchSyncResponse)
def sync_all_achievements(
    data: BatchSyncRequest | None = None,
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Rebuild medal results for the given (or every completed) competition"""

    logger.info(f"Admin {current_admin.email} started achievement sync")
    batch = achievement_service.synchronize_all_completed(db, competition_ids=data.competition_ids if data else None)
    return batch.to_dict()

@router.post("/update-competition-statuses", response_model=StatusUpdateSummary)
def update_statuses_manually(
    bypass_manual_override: bool = False,
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Manual lifecycle tick"""

    logger.info(f"[MANUAL] {current_admin.email} started competition status update")
    results = competition_status_service.update_competition_statuses(
        db, bypass_manual_override=bypass_manual_override
    )
    return summarize(results)
