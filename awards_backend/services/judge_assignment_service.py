"""
Judge Assignment Service

Automated assignment of judges to submitted entries:
- Candidate pool = active judges not yet assigned to the entry
- Conflict of interest filtering
- Expertise-based ordering (stable, pool order breaks ties)
- Bounded fan-out of judges_per_entry per entry
- Per-entry commit so an interrupted batch can simply be re-run
"""
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Set

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from awards_backend.config.settings import AutomationSettings, DEFAULT_EXPERTISE_KEYWORDS
from awards_backend.exceptions import (
    AwardNotFoundError, InvalidAutomationParameterError, NoJudgesAvailableError
)
from awards_backend.schemas.judging import AssignmentSummary, EntryRecord, JudgeRecord
from awards_backend.services import judging_store
from awards_backend.services.conflict_service import detect_conflict
from awards_backend.services.notification_service import Notifier

logger = logging.getLogger(__name__)


@dataclass
class CandidateEvaluation:
    judge: JudgeRecord
    expertise_score: int
    conflict: bool
    conflict_reason: Optional[str] = None


@dataclass
class EntryAssignmentPlan:
    """Judges chosen for one entry, plus the conflicts found on the way."""
    entry: EntryRecord
    selected: List[JudgeRecord] = field(default_factory=list)
    conflicted: List[CandidateEvaluation] = field(default_factory=list)
    already_assigned: int = 0

    @property
    def conflict_count(self) -> int:
        return len(self.conflicted)


# =============================================================================
# Expertise scoring
# =============================================================================

def calculate_expertise_score(
    judge: JudgeRecord,
    entry: EntryRecord,
    keywords: Iterable[str] = DEFAULT_EXPERTISE_KEYWORDS
) -> int:
    """
    Heuristic match of judge notes against the award category.

    +10 if the category appears in the notes,
    +5 per industry keyword present in both.
    """
    award_category = ((entry.award.category if entry.award else None) or "").lower()
    judge_expertise = (judge.notes or "").lower()

    score = 0

    if award_category in judge_expertise:
        score += 10

    for keyword in keywords:
        if keyword in award_category and keyword in judge_expertise:
            score += 5

    return score


# =============================================================================
# Planning (pure)
# =============================================================================

def plan_entry_assignment(
    entry: EntryRecord,
    judges: Sequence[JudgeRecord],
    already_assigned: Set[str],
    judges_per_entry: int = 3,
    keywords: Iterable[str] = DEFAULT_EXPERTISE_KEYWORDS,
    case_insensitive_domains: bool = False
) -> EntryAssignmentPlan:
    """
    Choose judges for one entry.

    Args:
        entry: Entry to staff
        judges: Active judges in pool order
        already_assigned: Emails of judges already assigned to this entry
        judges_per_entry: Target number of judges per entry

    Returns:
        EntryAssignmentPlan with selected judges in assignment order
    """
    keywords = tuple(keywords)
    candidates = [j for j in judges if j.email not in already_assigned]

    evaluations = []
    for judge in candidates:
        conflict, reason = detect_conflict(judge, entry, case_insensitive_domains)
        evaluations.append(CandidateEvaluation(
            judge=judge,
            expertise_score=calculate_expertise_score(judge, entry, keywords),
            conflict=conflict,
            conflict_reason=reason,
        ))

    suitable = [e for e in evaluations if not e.conflict]
    suitable.sort(key=lambda e: e.expertise_score, reverse=True)

    slots = max(0, judges_per_entry - len(already_assigned))

    return EntryAssignmentPlan(
        entry=entry,
        selected=[e.judge for e in suitable[:slots]],
        conflicted=[e for e in evaluations if e.conflict],
        already_assigned=len(already_assigned),
    )


# =============================================================================
# Batch assignment
# =============================================================================

async def assign_judges_to_entries(
    db: AsyncSession,
    notifier: Notifier,
    settings: AutomationSettings,
    award_id: Optional[int] = None
) -> AssignmentSummary:
    """
    Assign judges to every submitted entry (optionally one award only).

    Algorithm:
    1. Fetch active judges; abort with NoJudgesAvailableError if none
    2. Fetch submitted entries ordered by submitted_at, id
    3. For each entry:
       - Plan against the judges not yet assigned to it
       - Persist new assignments and commit
       - Notify each newly assigned judge
    4. Report assignment and conflict counts

    An entry whose assignments collide with a concurrent run is rolled
    back, logged and skipped; other storage errors propagate.
    """
    if settings.judges_per_entry < 1:
        raise InvalidAutomationParameterError("judges_per_entry must be at least 1")

    logger.info("Starting automated judge assignment...")

    if award_id is not None and await judging_store.get_award(award_id, db) is None:
        raise AwardNotFoundError(award_id)

    judges = await judging_store.get_active_judges(db)
    if not judges:
        raise NoJudgesAvailableError()

    entries = await judging_store.get_entries_for_assignment(db, award_id=award_id)

    summary = AssignmentSummary(total_entries=len(entries), total_judges=len(judges))

    if not entries:
        logger.info("No entries found that need judging")
        return summary

    logger.info(f"Found {len(entries)} entries to assign")
    logger.info(f"Found {len(judges)} available judges")

    for entry in entries:
        already_assigned = await judging_store.get_assigned_judge_emails(entry.id, db)

        plan = plan_entry_assignment(
            entry,
            judges,
            already_assigned,
            judges_per_entry=settings.judges_per_entry,
            keywords=settings.expertise_keywords,
            case_insensitive_domains=settings.conflict_domain_case_insensitive,
        )

        for evaluation in plan.conflicted:
            logger.debug(
                f"Conflict for entry {entry.id} / {evaluation.judge.email}: {evaluation.conflict_reason}"
            )

        created: List[JudgeRecord] = []
        try:
            for judge in plan.selected:
                if await judging_store.create_assignment_if_absent(entry.id, judge, db):
                    created.append(judge)
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            logger.warning(f"Skipping entry {entry.id}: assignment already exists ({str(e.orig)})")
            continue

        summary.assigned += len(created)
        summary.conflicts += plan.conflict_count

        for judge in created:
            await notifier.notify_judge_assigned(judge, entry)

    logger.info("✓ Assignment complete:")
    logger.info(f"   - Assigned: {summary.assigned} judge-entry pairs")
    logger.info(f"   - Conflicts detected: {summary.conflicts}")

    return summary
