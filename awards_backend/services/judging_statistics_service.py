"""
Judging progress statistics and pending-score reminders.
"""
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from awards_backend.config.settings import AutomationSettings
from awards_backend.schemas.judging import JudgingStatistics, ReminderSummary
from awards_backend.services import judging_store
from awards_backend.services.notification_service import Notifier

logger = logging.getLogger(__name__)


async def get_judging_statistics(
    db: AsyncSession,
    settings: AutomationSettings,
    award_id: Optional[int] = None
) -> JudgingStatistics:
    """
    Judging progress across entries (optionally one award).

    An entry counts as fully judged once it has
    settings.fully_judged_threshold completed scores.
    """
    entries = await judging_store.get_entries_with_scores(db, award_id=award_id)

    stats = JudgingStatistics(total_entries=len(entries))
    if not entries:
        return stats

    total_scores = 0
    for entry in entries:
        completed = sum(1 for s in entry.judge_scores if s.is_complete)

        if completed > 0:
            stats.entries_with_scores += 1
        if completed >= settings.fully_judged_threshold:
            stats.entries_fully_judged += 1

        total_scores += completed

    stats.average_scores_per_entry = round(total_scores / len(entries), 2)
    stats.completion_rate = round(stats.entries_fully_judged / len(entries) * 100, 1)

    return stats


async def send_judge_reminders(db: AsyncSession, notifier: Notifier) -> ReminderSummary:
    """Remind every active judge who still has unscored assignments."""
    logger.info("Sending judge reminders...")

    judges = await judging_store.get_active_judges(db)
    counts = await judging_store.get_judge_score_counts(db)

    summary = ReminderSummary()
    for judge in judges:
        completed, total = counts.get(judge.email, (0, 0))
        if total - completed <= 0:
            continue

        summary.judges_with_pending += 1
        if await notifier.notify_judge_reminder(judge, completed, total):
            summary.reminders_sent += 1

    logger.info(f"✓ Reminders sent: {summary.reminders_sent}/{summary.judges_with_pending}")
    return summary
