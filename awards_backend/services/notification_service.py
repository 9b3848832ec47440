"""
Notification Service

Email collaborator for the judging automation. Sends are best-effort:
a failed delivery is logged and recorded in email_log, never raised, so
a batch keeps going.
"""
import asyncio
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from awards_backend.config.settings import EmailSettings
from awards_backend.orm.base import utc_now
from awards_backend.orm.email_log import EmailLog, EmailStatus
from awards_backend.schemas.judging import EntryRecord, JudgeRecord
from awards_backend.services.email_templates import DEFAULT_TEMPLATES, EmailTemplate

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    async def notify_judge_assigned(self, judge: JudgeRecord, entry: EntryRecord) -> bool: ...

    async def notify_entry_shortlisted(self, entry: EntryRecord) -> bool: ...

    async def notify_judge_reminder(self, judge: JudgeRecord, scored: int, total: int) -> bool: ...


class EmailNotifier:
    """
    SMTP-backed notifier.

    Args:
        settings: SMTP and programme settings
        templates: Template map, copied into a read-only view
        session_factory: Optional async session factory for email_log rows
    """

    def __init__(
        self,
        settings: EmailSettings,
        templates: Mapping[str, EmailTemplate] = DEFAULT_TEMPLATES,
        session_factory: Optional[Callable[[], AsyncSession]] = None
    ):
        self.settings = settings
        self.templates = MappingProxyType(dict(templates))
        self.session_factory = session_factory

    # -------------------------------------------------------------------------
    # Automation notifications
    # -------------------------------------------------------------------------

    async def notify_judge_assigned(self, judge: JudgeRecord, entry: EntryRecord) -> bool:
        logger.info(f"Sending assignment email to {judge.email}")
        return await self.send_template(
            "JUDGE_ASSIGNMENT",
            to_email=judge.email,
            to_name=judge.display_name,
            variables={
                "judge_name": judge.display_name,
                "entry_number": entry.entry_number or f"#{entry.id}",
                "company_name": entry.company_name,
                "award_name": entry.award.award_name if entry.award else None,
                "deadline": self.settings.judging_deadline,
                "judge_portal_link": self.settings.judge_portal_link,
            }
        )

    async def notify_entry_shortlisted(self, entry: EntryRecord) -> bool:
        if not entry.contact_email:
            logger.warning(f"Entry {entry.id} has no contact email - shortlist notification skipped")
            return False

        logger.info(f"Sending shortlist notification to {entry.contact_email}")
        return await self.send_template(
            "SHORTLIST_NOTIFICATION",
            to_email=entry.contact_email,
            to_name=entry.contact_name,
            variables={
                "contact_name": entry.contact_name,
                "company_name": entry.company_name,
                "award_name": entry.award.award_name if entry.award else None,
                "winner_date": self.settings.winner_date,
                "ceremony_date": self.settings.ceremony_date,
                "ceremony_venue": self.settings.ceremony_venue,
                "ceremony_tickets_link": self.settings.ceremony_tickets_link,
            }
        )

    async def notify_judge_reminder(self, judge: JudgeRecord, scored: int, total: int) -> bool:
        return await self.send_template(
            "JUDGE_REMINDER",
            to_email=judge.email,
            to_name=judge.display_name,
            variables={
                "judge_name": judge.display_name,
                "scored_count": scored,
                "total_count": total,
                "pending_count": total - scored,
                "deadline": self.settings.judging_deadline,
                "judge_portal_link": self.settings.judge_portal_link,
            }
        )

    # -------------------------------------------------------------------------
    # Delivery
    # -------------------------------------------------------------------------

    async def send_template(
        self,
        template_key: str,
        to_email: str,
        to_name: Optional[str],
        variables: Dict[str, Any]
    ) -> bool:
        """Render and deliver a template. Returns True only if SMTP accepted it."""
        template = self.templates.get(template_key)
        if template is None:
            raise ValueError(f"Template {template_key} not found")

        subject, html, text = template.render(variables)

        if not self.settings.is_configured:
            logger.info(f"Email not configured - skipping {template_key} to {to_email}")
            await self._record(template_key, to_email, subject, EmailStatus.skipped)
            return False

        try:
            await asyncio.to_thread(self._deliver, to_email, to_name, subject, html, text)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Error sending {template_key} to {to_email}: {str(e)}")
            await self._record(template_key, to_email, subject, EmailStatus.failed, str(e))
            return False

        logger.info(f"✓ Email sent: {template_key} to {to_email}")
        await self._record(template_key, to_email, subject, EmailStatus.sent)
        return True

    def _deliver(
        self,
        to_email: str,
        to_name: Optional[str],
        subject: str,
        html_body: str,
        text_body: str
    ) -> None:
        """Multipart/alternative: text/plain + text/html."""
        cfg = self.settings

        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = formataddr((cfg.from_name, cfg.from_email))
        msg["To"] = formataddr((to_name, to_email)) if to_name else to_email
        msg.attach(MIMEText(text_body, "plain"))
        msg.attach(MIMEText(html_body, "html"))

        with smtplib.SMTP(cfg.host, cfg.port, timeout=30) as server:
            server.starttls()
            if cfg.user:
                server.login(cfg.user, cfg.password)
            server.sendmail(cfg.from_email, [to_email], msg.as_string())

    async def _record(
        self,
        template_key: str,
        to_email: str,
        subject: str,
        status: EmailStatus,
        error: Optional[str] = None
    ) -> None:
        if self.session_factory is None:
            return

        try:
            async with self.session_factory() as session:
                session.add(EmailLog(
                    template_key=template_key,
                    recipient_email=to_email,
                    subject=subject,
                    status=status,
                    error_message=error,
                    sent_at=utc_now(),
                ))
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to write email_log for {to_email}: {str(e)}")
