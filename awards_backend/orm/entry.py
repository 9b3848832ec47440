"""
awards_backend/orm/entry.py
Award entries (submissions)
"""
from enum import Enum

from sqlalchemy import (
    Column, Integer, String, Float, Boolean, DateTime, ForeignKey,
    Enum as SQLEnum, Index
)
from sqlalchemy.orm import relationship

from awards_backend.orm.base import BaseModel


class EntryStatus(str, Enum):
    draft = "draft"
    submitted = "submitted"
    under_review = "under_review"
    shortlisted = "shortlisted"
    winner = "winner"
    rejected = "rejected"


class Entry(BaseModel):
    """
    One submission by an organisation to one award category.

    average_score is maintained by the judging workflow;
    the shortlist fields are written by shortlist generation.
    """
    __tablename__ = "entries"

    entry_number = Column(String(50), nullable=True, unique=True)
    entry_title = Column(String(500), nullable=True)

    organisation_id = Column(
        Integer,
        ForeignKey("organisations.id", ondelete="RESTRICT"),
        nullable=False,
        index=True
    )
    award_id = Column(
        Integer,
        ForeignKey("awards.id", ondelete="RESTRICT"),
        nullable=False,
        index=True
    )

    status = Column(
        SQLEnum(EntryStatus),
        nullable=False,
        default=EntryStatus.draft,
        index=True
    )
    submitted_at = Column(DateTime, nullable=True)

    contact_name = Column(String(200), nullable=True)
    contact_email = Column(String(255), nullable=True)

    average_score = Column(Float, nullable=True)

    is_shortlisted = Column(Boolean, nullable=False, default=False)
    shortlisted_date = Column(DateTime, nullable=True)

    # Relationships
    organisation = relationship("Organisation", back_populates="entries")
    award = relationship("Award", back_populates="entries")
    judge_scores = relationship(
        "JudgeScore",
        back_populates="entry",
        cascade="all, delete-orphan",
        order_by="JudgeScore.id"
    )

    __table_args__ = (
        Index('idx_entries_award_status', 'award_id', 'status'),
    )
