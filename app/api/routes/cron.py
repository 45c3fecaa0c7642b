# app/api/routes/cron.py
from dataclasses import asdict
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.competition import PendingStatusChangeResponse, StatusUpdateSummary
from app.api.deps import verify_cron_secret
from app.core.logger import logger
from app.services import competition_status_service

router = APIRouter(
    prefix="/api/v1/cron",
    tags=["cron"],
    dependencies=[Depends(verify_cron_secret)]
)

def summarize(results: List[competition_status_service.StatusUpdateResult]) -> dict:
    successful = sum(1 for r in results if r.success)
    return {
        "total": len(results),
        "successful": successful,
        "errors": len(results) - successful,
        "updates": [asdict(r) for r in results],
    }

@router.get("/update-competition-statuses", response_model=StatusUpdateSummary)
def update_competition_statuses(db: Session = Depends(get_db)):
    """Scheduled lifecycle tick"""

    logger.info("[CRON] Starting automatic competition status update")
    results = competition_status_service.update_competition_statuses(db)
    summary = summarize(results)
    logger.info(f"[CRON] Status update completed: {summary['successful']} successful, {summary['errors']} errors")
    return summary

@router.get("/competition-statuses/preview", response_model=List[PendingStatusChangeResponse])
def preview_competition_statuses(db: Session = Depends(get_db)):
    """Pending transitions, no writes"""
    return [asdict(p) for p in competition_status_service.competitions_needing_update(db)]
