"""
awards_backend/orm/judge_score.py
Judge assignment + score record

A row is created (incomplete) when a judge is assigned to an entry and is
completed by the judging workflow with a total score and recommendation.
"""
from enum import Enum

from sqlalchemy import (
    Column, Integer, String, Float, Boolean, ForeignKey,
    Enum as SQLEnum, Index, UniqueConstraint
)
from sqlalchemy.orm import relationship

from awards_backend.orm.base import BaseModel


class Recommendation(str, Enum):
    shortlist = "shortlist"
    maybe = "maybe"
    reject = "reject"


class JudgeScore(BaseModel):
    __tablename__ = "judge_scores"

    entry_id = Column(
        Integer,
        ForeignKey("entries.id", ondelete="CASCADE"),
        nullable=False
    )
    judge_email = Column(String(255), nullable=False)
    judge_name = Column(String(200), nullable=True)

    is_complete = Column(Boolean, nullable=False, default=False)
    # Self-declared by the judge while scoring; unrelated to automatic detection
    has_conflict = Column(Boolean, nullable=False, default=False)
    total_score = Column(Float, nullable=True)
    recommendation = Column(SQLEnum(Recommendation), nullable=True)

    entry = relationship("Entry", back_populates="judge_scores")

    __table_args__ = (
        UniqueConstraint('entry_id', 'judge_email', name='uq_judge_score_entry_judge'),
        Index('idx_judge_scores_entry', 'entry_id'),
        Index('idx_judge_scores_judge', 'judge_email'),
    )
