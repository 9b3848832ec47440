"""
awards_backend/orm/email_log.py
Audit trail of outgoing automation emails
"""
from enum import Enum

from sqlalchemy import Column, String, Text, DateTime, Enum as SQLEnum, Index

from awards_backend.orm.base import BaseModel, utc_now


class EmailStatus(str, Enum):
    sent = "sent"
    failed = "failed"
    skipped = "skipped"


class EmailLog(BaseModel):
    __tablename__ = "email_log"

    template_key = Column(String(100), nullable=False)
    recipient_email = Column(String(255), nullable=False)
    subject = Column(String(500), nullable=True)
    status = Column(SQLEnum(EmailStatus), nullable=False)
    error_message = Column(Text, nullable=True)
    sent_at = Column(DateTime, nullable=False, default=utc_now)

    __table_args__ = (
        Index('idx_email_log_recipient', 'recipient_email'),
        Index('idx_email_log_template', 'template_key'),
    )
