from .base import Base

from .contact import Contact, ContactType
from .organisation import Organisation
from .award import Award
from .entry import Entry, EntryStatus
from .judge_score import JudgeScore, Recommendation
from .email_log import EmailLog, EmailStatus

__all__ = [
    "Base",
    "Contact",
    "ContactType",
    "Organisation",
    "Award",
    "Entry",
    "EntryStatus",
    "JudgeScore",
    "Recommendation",
    "EmailLog",
    "EmailStatus",
]
