"""
Judging Automation API Routes

Manual triggers for the jobs a scheduler would normally run:
- Judge assignment (all entries or one award)
- Shortlist generation (one award or every active award)
- Judging progress statistics
- Pending-score reminders
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from awards_backend.config import AutomationSettings, get_settings
from awards_backend.database import AsyncSessionLocal, get_db
from awards_backend.errors import raise_automation_error
from awards_backend.exceptions import AwardsAutomationError
from awards_backend.schemas.judging import (
    AssignJudgesRequest, GenerateAllShortlistsRequest, GenerateShortlistRequest
)
from awards_backend.services.judge_assignment_service import assign_judges_to_entries
from awards_backend.services.judging_statistics_service import (
    get_judging_statistics, send_judge_reminders
)
from awards_backend.services.notification_service import EmailNotifier, Notifier
from awards_backend.services.shortlist_service import generate_all_shortlists, generate_shortlist

router = APIRouter(prefix="/automation", tags=["Judging Automation"])


def get_notifier() -> Notifier:
    return EmailNotifier(get_settings().email, session_factory=AsyncSessionLocal)


def get_automation_settings() -> AutomationSettings:
    return get_settings().automation


# =============================================================================
# Assignment
# =============================================================================

@router.post("/assign-judges", status_code=status.HTTP_200_OK)
async def assign_judges(
    request: Optional[AssignJudgesRequest] = None,
    db: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
    settings: AutomationSettings = Depends(get_automation_settings)
) -> Dict[str, Any]:
    """
    Assign judges to submitted entries.

    Re-running is safe: judges already assigned to an entry are never
    assigned twice, and fully staffed entries get no new judges.
    """
    award_id = request.award_id if request else None
    try:
        summary = await assign_judges_to_entries(db, notifier, settings, award_id=award_id)
    except AwardsAutomationError as e:
        raise_automation_error(e)

    return {
        "success": True,
        **summary.model_dump(),
        "message": f"Assigned {summary.assigned} judge-entry pairs"
    }


# =============================================================================
# Shortlists
# =============================================================================

@router.post("/generate-shortlist", status_code=status.HTTP_200_OK)
async def generate_award_shortlist(
    request: GenerateShortlistRequest,
    db: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
    settings: AutomationSettings = Depends(get_automation_settings)
) -> Dict[str, Any]:
    """Rank one award's scored entries and shortlist the top N."""
    try:
        shortlist = await generate_shortlist(
            request.award_id, db, notifier, settings, top_n=request.top_n
        )
    except AwardsAutomationError as e:
        raise_automation_error(e)

    return {
        "success": True,
        "award_id": request.award_id,
        "shortlisted": len(shortlist),
        "shortlist": [item.model_dump() for item in shortlist],
    }


@router.post("/generate-all-shortlists", status_code=status.HTTP_200_OK)
async def generate_every_shortlist(
    request: Optional[GenerateAllShortlistsRequest] = None,
    db: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
    settings: AutomationSettings = Depends(get_automation_settings)
) -> Dict[str, Any]:
    """Generate shortlists for every active award."""
    top_n = request.top_n if request else None
    try:
        results = await generate_all_shortlists(db, notifier, settings, top_n=top_n)
    except AwardsAutomationError as e:
        raise_automation_error(e)

    return {
        "success": True,
        "awards_processed": len(results),
        "results": [r.model_dump() for r in results],
    }


# =============================================================================
# Progress
# =============================================================================

@router.get("/judging-stats")
async def judging_stats(
    award_id: Optional[int] = Query(default=None, ge=1, description="Restrict to one award"),
    db: AsyncSession = Depends(get_db),
    settings: AutomationSettings = Depends(get_automation_settings)
) -> Dict[str, Any]:
    stats = await get_judging_statistics(db, settings, award_id=award_id)
    return {"success": True, **stats.model_dump()}


@router.post("/send-judge-reminders", status_code=status.HTTP_200_OK)
async def remind_judges(
    db: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier)
) -> Dict[str, Any]:
    """Email every active judge who still has unscored entries."""
    summary = await send_judge_reminders(db, notifier)
    return {"success": True, **summary.model_dump()}
