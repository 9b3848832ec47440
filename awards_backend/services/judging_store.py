"""
Judging Store

Storage boundary for the judging automation. Every read returns typed
records; every write is a single statement or insert.
"""
import logging
from datetime import datetime
from typing import Dict, List, Optional, Set, Tuple

from sqlalchemy import select, update, func, case, and_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from awards_backend.orm.award import Award
from awards_backend.orm.base import utc_now
from awards_backend.orm.contact import Contact, ContactType
from awards_backend.orm.entry import Entry, EntryStatus
from awards_backend.orm.judge_score import JudgeScore
from awards_backend.schemas.judging import AwardRecord, EntryRecord, JudgeRecord

logger = logging.getLogger(__name__)


def _entry_query():
    # populate_existing: a batch re-reads entries after writing to them in the same session
    return (
        select(Entry)
        .options(
            selectinload(Entry.organisation),
            selectinload(Entry.award),
            selectinload(Entry.judge_scores),
        )
        .execution_options(populate_existing=True)
    )


# =============================================================================
# Judges
# =============================================================================

async def get_active_judges(db: AsyncSession) -> List[JudgeRecord]:
    """Active judge contacts in id order (the candidate pool order)."""
    result = await db.execute(
        select(Contact)
        .where(
            and_(
                Contact.contact_type == ContactType.judge,
                Contact.is_active == True  # noqa: E712
            )
        )
        .order_by(Contact.id.asc())
    )
    return [JudgeRecord.model_validate(c) for c in result.scalars().all()]


async def get_judge_score_counts(db: AsyncSession) -> Dict[str, Tuple[int, int]]:
    """Map judge email -> (completed, total) assignments."""
    result = await db.execute(
        select(
            JudgeScore.judge_email,
            func.sum(case((JudgeScore.is_complete == True, 1), else_=0)),  # noqa: E712
            func.count(JudgeScore.id),
        )
        .group_by(JudgeScore.judge_email)
    )
    return {row[0]: (int(row[1] or 0), int(row[2] or 0)) for row in result.all()}


# =============================================================================
# Awards
# =============================================================================

async def get_award(award_id: int, db: AsyncSession) -> Optional[AwardRecord]:
    result = await db.execute(select(Award).where(Award.id == award_id))
    award = result.scalar_one_or_none()
    return AwardRecord.model_validate(award) if award else None


async def get_active_awards(db: AsyncSession) -> List[AwardRecord]:
    result = await db.execute(
        select(Award)
        .where(Award.is_active == True)  # noqa: E712
        .order_by(Award.id.asc())
    )
    return [AwardRecord.model_validate(a) for a in result.scalars().all()]


# =============================================================================
# Entries
# =============================================================================

async def get_entries_for_assignment(
    db: AsyncSession,
    award_id: Optional[int] = None
) -> List[EntryRecord]:
    """
    Submitted entries awaiting judges.

    Ordered by submission time (unsubmitted timestamps last), then id.
    """
    query = _entry_query().where(Entry.status == EntryStatus.submitted)

    if award_id is not None:
        query = query.where(Entry.award_id == award_id)

    query = query.order_by(
        Entry.submitted_at.is_(None),
        Entry.submitted_at.asc(),
        Entry.id.asc()
    )

    result = await db.execute(query)
    return [EntryRecord.model_validate(e) for e in result.scalars().all()]


async def get_shortlist_candidates(award_id: int, db: AsyncSession) -> List[EntryRecord]:
    """Submitted, scored entries of an award, best average first."""
    result = await db.execute(
        _entry_query()
        .where(
            and_(
                Entry.award_id == award_id,
                Entry.status == EntryStatus.submitted,
                Entry.average_score.is_not(None)
            )
        )
        .order_by(Entry.average_score.desc(), Entry.id.asc())
    )
    return [EntryRecord.model_validate(e) for e in result.scalars().all()]


async def get_entries_with_scores(
    db: AsyncSession,
    award_id: Optional[int] = None
) -> List[EntryRecord]:
    query = _entry_query()
    if award_id is not None:
        query = query.where(Entry.award_id == award_id)
    result = await db.execute(query.order_by(Entry.id.asc()))
    return [EntryRecord.model_validate(e) for e in result.scalars().all()]


async def mark_entry_shortlisted(
    entry_id: int,
    db: AsyncSession,
    shortlisted_at: Optional[datetime] = None
) -> None:
    """Flag, timestamp and status change in one UPDATE."""
    await db.execute(
        update(Entry)
        .where(Entry.id == entry_id)
        .values(
            is_shortlisted=True,
            shortlisted_date=shortlisted_at or utc_now(),
            status=EntryStatus.shortlisted,
        )
    )


# =============================================================================
# Assignments
# =============================================================================

async def get_assigned_judge_emails(entry_id: int, db: AsyncSession) -> Set[str]:
    result = await db.execute(
        select(JudgeScore.judge_email).where(JudgeScore.entry_id == entry_id)
    )
    return set(row[0] for row in result.all())


async def create_assignment_if_absent(
    entry_id: int,
    judge: JudgeRecord,
    db: AsyncSession
) -> bool:
    """
    Insert an incomplete score row for (judge, entry).

    Returns False if the pair already exists. A concurrent insert of the
    same pair surfaces as IntegrityError from the unique constraint.
    """
    result = await db.execute(
        select(JudgeScore.id).where(
            and_(
                JudgeScore.entry_id == entry_id,
                JudgeScore.judge_email == judge.email
            )
        )
    )
    if result.scalar_one_or_none() is not None:
        return False

    db.add(JudgeScore(
        entry_id=entry_id,
        judge_email=judge.email,
        judge_name=judge.display_name,
        is_complete=False,
        has_conflict=False,
    ))
    await db.flush()
    return True
