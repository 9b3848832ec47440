"""
awards_backend/schemas/judging.py
Typed records for the judging automation

Records are parsed from ORM rows at the storage boundary
(`Model.model_validate(row)`) so the assignment and ranking logic never
touches loosely-shaped data.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from awards_backend.orm.entry import EntryStatus
from awards_backend.orm.judge_score import Recommendation


# =============================================================================
# Entity records
# =============================================================================

class JudgeRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    email: str
    full_name: Optional[str] = None
    company_name: Optional[str] = None
    notes: Optional[str] = None
    is_active: bool = True

    @property
    def display_name(self) -> str:
        return self.full_name or self.email


class OrganisationRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    company_name: str
    website: Optional[str] = None


class AwardRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    award_name: str
    category: Optional[str] = None
    is_active: bool = True


class ScoreRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    judge_email: str
    judge_name: Optional[str] = None
    is_complete: bool = False
    total_score: Optional[float] = None
    recommendation: Optional[Recommendation] = None


class EntryRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    entry_number: Optional[str] = None
    entry_title: Optional[str] = None
    award_id: int
    organisation_id: int
    status: EntryStatus
    submitted_at: Optional[datetime] = None
    contact_name: Optional[str] = None
    contact_email: Optional[str] = None
    average_score: Optional[float] = None
    is_shortlisted: bool = False
    organisation: Optional[OrganisationRecord] = None
    award: Optional[AwardRecord] = None
    judge_scores: List[ScoreRecord] = Field(default_factory=list)

    @property
    def completed_scores(self) -> List[ScoreRecord]:
        return [s for s in self.judge_scores if s.is_complete and s.total_score is not None]

    @property
    def company_name(self) -> Optional[str]:
        return self.organisation.company_name if self.organisation else None


# =============================================================================
# Results
# =============================================================================

class AssignmentSummary(BaseModel):
    """Outcome of one judge assignment batch."""
    assigned: int = 0
    conflicts: int = 0
    total_entries: int = 0
    total_judges: int = 0


class RankedEntry(BaseModel):
    """An entry selected for the shortlist, with its ranking inputs."""
    rank: int
    entry_id: int
    entry_number: Optional[str] = None
    entry_title: Optional[str] = None
    award_id: int
    company_name: Optional[str] = None
    contact_email: Optional[str] = None
    average_score: float
    score_consistency: float = Field(description="Population standard deviation of completed scores")
    composite_score: float
    shortlist_recommendations: int = 0
    completed_scores: int
    total_judges: int


class AwardShortlistSummary(BaseModel):
    award_id: int
    award_name: str
    shortlist_count: int


class JudgingStatistics(BaseModel):
    total_entries: int = 0
    entries_with_scores: int = 0
    entries_fully_judged: int = 0
    average_scores_per_entry: float = 0.0
    completion_rate: float = Field(0.0, description="Percentage of entries fully judged")


class ReminderSummary(BaseModel):
    judges_with_pending: int = 0
    reminders_sent: int = 0


# =============================================================================
# Requests
# =============================================================================

class AssignJudgesRequest(BaseModel):
    award_id: Optional[int] = Field(None, ge=1, description="Restrict assignment to one award")


class GenerateShortlistRequest(BaseModel):
    award_id: int = Field(..., ge=1)
    top_n: Optional[int] = Field(None, ge=1, le=100)


class GenerateAllShortlistsRequest(BaseModel):
    top_n: Optional[int] = Field(None, ge=1, le=100)
