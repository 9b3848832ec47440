"""
Shared fixtures for the judging automation tests.

Each test gets a fresh in-memory SQLite database.
"""
from datetime import datetime, timedelta
from typing import AsyncGenerator, List, Optional, Tuple

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from awards_backend.config.settings import AutomationSettings
from awards_backend.orm import Base
from awards_backend.orm.award import Award
from awards_backend.orm.contact import Contact, ContactType
from awards_backend.orm.entry import Entry, EntryStatus
from awards_backend.orm.judge_score import JudgeScore, Recommendation
from awards_backend.orm.organisation import Organisation
from awards_backend.schemas.judging import EntryRecord, JudgeRecord

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def automation_settings() -> AutomationSettings:
    return AutomationSettings()


# =============================================================================
# Notifier double
# =============================================================================

class RecordingNotifier:
    """Collects notifications instead of sending email."""

    def __init__(self, succeed: bool = True):
        self.succeed = succeed
        self.assigned: List[Tuple[str, int]] = []
        self.shortlisted: List[int] = []
        self.reminders: List[Tuple[str, int, int]] = []

    async def notify_judge_assigned(self, judge, entry) -> bool:
        self.assigned.append((judge.email, entry.id))
        return self.succeed

    async def notify_entry_shortlisted(self, entry) -> bool:
        self.shortlisted.append(entry.id)
        return self.succeed

    async def notify_judge_reminder(self, judge, scored, total) -> bool:
        self.reminders.append((judge.email, scored, total))
        return self.succeed


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


# =============================================================================
# Entity factories
# =============================================================================

@pytest.fixture
def make_award(db: AsyncSession):
    async def _make(award_name: str = "Export Excellence", category: Optional[str] = "Export",
                    is_active: bool = True) -> Award:
        award = Award(award_name=award_name, category=category, is_active=is_active)
        db.add(award)
        await db.flush()
        return award
    return _make


@pytest.fixture
def make_organisation(db: AsyncSession):
    async def _make(company_name: str = "Widget Works Ltd",
                    website: Optional[str] = "https://widgetworks.co.uk") -> Organisation:
        org = Organisation(company_name=company_name, website=website)
        db.add(org)
        await db.flush()
        return org
    return _make


@pytest.fixture
def make_judge(db: AsyncSession):
    async def _make(email: str, full_name: Optional[str] = None, company_name: Optional[str] = None,
                    notes: Optional[str] = None, is_active: bool = True) -> Contact:
        judge = Contact(
            email=email,
            full_name=full_name,
            company_name=company_name,
            notes=notes,
            contact_type=ContactType.judge,
            is_active=is_active,
        )
        db.add(judge)
        await db.flush()
        return judge
    return _make


@pytest.fixture
def make_entry(db: AsyncSession):
    counter = {"n": 0}

    async def _make(award: Award, organisation: Organisation,
                    status: EntryStatus = EntryStatus.submitted,
                    submitted_at: Optional[datetime] = None,
                    average_score: Optional[float] = None,
                    contact_email: Optional[str] = "entrant@example.com") -> Entry:
        counter["n"] += 1
        entry = Entry(
            entry_number=f"BTA-{counter['n']:04d}",
            entry_title=f"Entry {counter['n']}",
            award_id=award.id,
            organisation_id=organisation.id,
            status=status,
            submitted_at=submitted_at or datetime(2026, 1, 1) + timedelta(hours=counter["n"]),
            contact_name="Entrant",
            contact_email=contact_email,
            average_score=average_score,
        )
        db.add(entry)
        await db.flush()
        return entry
    return _make


@pytest.fixture
def add_scores(db: AsyncSession):
    """Attach completed scores to an entry and set its average."""
    async def _add(entry: Entry, scores: List[float],
                   recommendation: Recommendation = Recommendation.maybe) -> None:
        for i, score in enumerate(scores):
            db.add(JudgeScore(
                entry_id=entry.id,
                judge_email=f"scorer{i}-{entry.id}@judges.org",
                is_complete=True,
                total_score=score,
                recommendation=recommendation,
            ))
        entry.average_score = sum(scores) / len(scores) if scores else None
        await db.flush()
    return _add


# =============================================================================
# Plain records for pure-function tests
# =============================================================================

def judge_record(email: str, company_name: Optional[str] = None, notes: Optional[str] = None,
                 judge_id: int = 1) -> JudgeRecord:
    return JudgeRecord(id=judge_id, email=email, company_name=company_name, notes=notes)


def entry_record(company_name: str = "Acme Ltd", website: Optional[str] = "https://www.acme.com",
                 category: Optional[str] = "Technology", scores: Optional[List[float]] = None,
                 entry_id: int = 1, award_id: int = 1) -> EntryRecord:
    return EntryRecord.model_validate({
        "id": entry_id,
        "entry_number": f"BTA-{entry_id:04d}",
        "award_id": award_id,
        "organisation_id": 1,
        "status": EntryStatus.submitted,
        "organisation": {"id": 1, "company_name": company_name, "website": website},
        "award": {"id": award_id, "award_name": "Innovation", "category": category},
        "judge_scores": [
            {"id": i + 1, "judge_email": f"j{i}@judges.org", "is_complete": True, "total_score": s}
            for i, s in enumerate(scores or [])
        ],
    })
