"""
Shortlist Service

Score-based shortlist generation per award.

composite_score = average - CONSISTENCY_PENALTY * std_dev

std_dev is the population standard deviation of an entry's completed
scores, so wider disagreement between judges ranks an entry slightly lower.
Judges' "shortlist" recommendations are counted for display only.
"""
import logging
import statistics
from typing import List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from awards_backend.config.settings import AutomationSettings
from awards_backend.exceptions import AwardNotFoundError, InvalidAutomationParameterError
from awards_backend.orm.base import utc_now
from awards_backend.orm.judge_score import Recommendation
from awards_backend.schemas.judging import AwardShortlistSummary, EntryRecord, RankedEntry
from awards_backend.services import judging_store
from awards_backend.services.notification_service import Notifier

logger = logging.getLogger(__name__)


def score_entry(
    entry: EntryRecord,
    consistency_penalty: float = 0.1
) -> Optional[RankedEntry]:
    """Compute ranking fields for one entry; None if it has no completed scores."""
    completed = entry.completed_scores
    if not completed:
        return None

    scores = [s.total_score for s in completed]
    average = sum(scores) / len(scores)
    std_dev = statistics.pstdev(scores)

    return RankedEntry(
        rank=0,
        entry_id=entry.id,
        entry_number=entry.entry_number,
        entry_title=entry.entry_title,
        award_id=entry.award_id,
        company_name=entry.company_name,
        contact_email=entry.contact_email,
        average_score=average,
        score_consistency=std_dev,
        composite_score=average - (std_dev * consistency_penalty),
        shortlist_recommendations=sum(
            1 for s in completed if s.recommendation == Recommendation.shortlist
        ),
        completed_scores=len(completed),
        total_judges=len(entry.judge_scores),
    )


def rank_entries(
    entries: Sequence[EntryRecord],
    top_n: int = 5,
    min_scores: int = 2,
    consistency_penalty: float = 0.1
) -> List[RankedEntry]:
    """
    Rank entries by composite score and keep the top N.

    Entries with fewer than min_scores completed scores are excluded.
    Sorting is stable, so equal composites keep the input order.
    """
    eligible = [e for e in entries if len(e.completed_scores) >= min_scores]

    ranked = [score_entry(e, consistency_penalty) for e in eligible]
    ranked = [r for r in ranked if r is not None]
    ranked.sort(key=lambda r: r.composite_score, reverse=True)

    shortlist = ranked[:top_n]
    for position, item in enumerate(shortlist, start=1):
        item.rank = position

    return shortlist


async def generate_shortlist(
    award_id: int,
    db: AsyncSession,
    notifier: Notifier,
    settings: AutomationSettings,
    top_n: Optional[int] = None
) -> List[RankedEntry]:
    """
    Generate and persist the shortlist for one award.

    Steps:
    1. Fetch submitted entries with an average score (best first)
    2. Keep entries with at least min_scores completed scores
    3. Rank by composite score, keep top_n
    4. Mark each as shortlisted, commit, then notify the entry contact

    Returns:
        The ranked shortlist (empty if no entry is eligible)
    """
    top_n = settings.shortlist_top_n if top_n is None else top_n
    if top_n < 1:
        raise InvalidAutomationParameterError("top_n must be at least 1")

    award = await judging_store.get_award(award_id, db)
    if award is None:
        raise AwardNotFoundError(award_id)

    logger.info(f"Generating shortlist for award {award_id}...")

    candidates = await judging_store.get_shortlist_candidates(award_id, db)
    if not candidates:
        logger.info("No entries with scores found for this award")
        return []

    shortlist = rank_entries(
        candidates,
        top_n=top_n,
        min_scores=settings.min_scores,
        consistency_penalty=settings.consistency_penalty,
    )
    logger.info(f"{len(shortlist)} of {len(candidates)} entries shortlisted")

    by_id = {e.id: e for e in candidates}
    shortlisted_at = utc_now()

    for item in shortlist:
        await judging_store.mark_entry_shortlisted(item.entry_id, db, shortlisted_at)
        await db.commit()
        await notifier.notify_entry_shortlisted(by_id[item.entry_id])

    for item in shortlist:
        logger.info(
            f"   {item.rank}. {item.company_name} - Score: {item.average_score:.2f} "
            f"(σ: {item.score_consistency:.2f})"
        )

    return shortlist


async def generate_all_shortlists(
    db: AsyncSession,
    notifier: Notifier,
    settings: AutomationSettings,
    top_n: Optional[int] = None
) -> List[AwardShortlistSummary]:
    """Run generate_shortlist for every active award."""
    logger.info("Generating shortlists for all awards...")

    results = []
    for award in await judging_store.get_active_awards(db):
        logger.info(f"Processing: {award.award_name}")
        shortlist = await generate_shortlist(award.id, db, notifier, settings, top_n=top_n)
        results.append(AwardShortlistSummary(
            award_id=award.id,
            award_name=award.award_name,
            shortlist_count=len(shortlist),
        ))

    logger.info("✓ All shortlists generated")
    return results
