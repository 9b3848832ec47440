"""
awards_backend/orm/contact.py
CRM contacts; judges are contacts with contact_type = 'judge'
"""
from enum import Enum

from sqlalchemy import Column, String, Text, Boolean, Enum as SQLEnum, Index

from awards_backend.orm.base import BaseModel


class ContactType(str, Enum):
    judge = "judge"
    nominee = "nominee"
    sponsor = "sponsor"
    general = "general"


class Contact(BaseModel):
    """
    Contact record.

    Judge-relevant fields:
    - email: unique identity of the judge
    - notes: free-text expertise used for matching
    - company_name: affiliation used for conflict detection
    """
    __tablename__ = "contacts"

    email = Column(String(255), nullable=False, unique=True, index=True)
    full_name = Column(String(200), nullable=True)
    company_name = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    contact_type = Column(
        SQLEnum(ContactType),
        nullable=False,
        default=ContactType.general,
        index=True
    )
    is_active = Column(Boolean, default=True, nullable=False, index=True)

    __table_args__ = (
        Index('idx_contacts_type_active', 'contact_type', 'is_active'),
    )

    def __repr__(self) -> str:
        return f"<Contact {self.email} ({self.contact_type.value if self.contact_type else None})>"
