"""
Email notifier tests.

SMTP is replaced with an in-process fake; email_log rows are written to the
test database.
"""
import email
import smtplib
from email.utils import getaddresses

import pytest
from sqlalchemy import select

from awards_backend.config.settings import EmailSettings
from awards_backend.orm.email_log import EmailLog, EmailStatus
from awards_backend.services.email_templates import DEFAULT_TEMPLATES, render_placeholders
from awards_backend.services.notification_service import EmailNotifier
from conftest import entry_record, judge_record

CONFIGURED = EmailSettings(
    enabled=True,
    host="smtp.test.local",
    port=2525,
    user="mailer",
    password="secret",
    judging_deadline="31 March 2026",
)


class FakeSMTP:
    sent = []
    fail_with = None

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        pass

    def login(self, user, password):
        pass

    def sendmail(self, from_addr, to_addrs, message):
        if FakeSMTP.fail_with is not None:
            raise FakeSMTP.fail_with
        FakeSMTP.sent.append((from_addr, to_addrs, message))


@pytest.fixture
def fake_smtp(monkeypatch):
    FakeSMTP.sent = []
    FakeSMTP.fail_with = None
    monkeypatch.setattr(smtplib, "SMTP", FakeSMTP)
    return FakeSMTP


async def email_log_rows(db):
    result = await db.execute(select(EmailLog).order_by(EmailLog.id))
    return result.scalars().all()


# =============================================================================
# Templates
# =============================================================================

def test_placeholders_render_and_missing_values_blank():
    rendered = render_placeholders("Hello {{ name }}, {{missing}}!", {"name": "Ann"})

    assert rendered == "Hello Ann, !"


def test_default_templates_are_read_only():
    with pytest.raises(TypeError):
        DEFAULT_TEMPLATES["JUDGE_ASSIGNMENT"] = None


def test_assignment_template_renders_entry_details():
    subject, html, text = DEFAULT_TEMPLATES["JUDGE_ASSIGNMENT"].render({
        "judge_name": "Jo",
        "entry_number": "BTA-0001",
        "company_name": "Acme Ltd",
        "award_name": "Innovation",
    })

    assert subject == "New Judging Assignment - Innovation"
    assert "BTA-0001" in html
    assert "Acme Ltd" in text


def test_html_body_escapes_entrant_text():
    company = '<a href="https://evil.example">Click</a>'

    subject, html, text = DEFAULT_TEMPLATES["JUDGE_ASSIGNMENT"].render({
        "judge_name": "Jo & Co",
        "company_name": company,
        "award_name": "Innovation",
        "judge_portal_link": "https://judging.example/portal",
    })

    assert '<a href="https://evil.example">' not in html
    assert "&lt;a href=&quot;https://evil.example&quot;&gt;Click&lt;/a&gt;" in html
    assert "Dear Jo &amp; Co," in html
    assert '<a href="https://judging.example/portal">Start Judging</a>' in html
    assert company in text


# =============================================================================
# Delivery
# =============================================================================

@pytest.mark.asyncio
async def test_unconfigured_email_is_skipped_and_logged(db, session_factory, fake_smtp):
    notifier = EmailNotifier(EmailSettings(enabled=False), session_factory=session_factory)

    sent = await notifier.notify_judge_assigned(judge_record("jo@judges.org"), entry_record())

    assert sent is False
    assert fake_smtp.sent == []
    rows = await email_log_rows(db)
    assert [(r.template_key, r.status) for r in rows] == [("JUDGE_ASSIGNMENT", EmailStatus.skipped)]


@pytest.mark.asyncio
async def test_successful_delivery(db, session_factory, fake_smtp):
    notifier = EmailNotifier(CONFIGURED, session_factory=session_factory)

    sent = await notifier.notify_judge_reminder(judge_record("jo@judges.org"), 1, 3)

    assert sent is True
    assert len(fake_smtp.sent) == 1
    from_addr, to_addrs, message = fake_smtp.sent[0]
    assert to_addrs == ["jo@judges.org"]
    assert "31 March 2026" in message

    rows = await email_log_rows(db)
    assert rows[0].status == EmailStatus.sent
    assert rows[0].subject == "Judging Reminder - 2 Entries Awaiting Your Score"


@pytest.mark.asyncio
async def test_recipient_name_with_comma_is_one_address(db, session_factory, fake_smtp):
    notifier = EmailNotifier(CONFIGURED, session_factory=session_factory)
    judge = judge_record("john@judges.org").model_copy(update={"full_name": "Smith, John"})

    assert await notifier.notify_judge_reminder(judge, 0, 1) is True

    message = email.message_from_string(fake_smtp.sent[0][2])
    assert getaddresses([message["To"]]) == [("Smith, John", "john@judges.org")]
    assert len(getaddresses([message["From"]])) == 1


@pytest.mark.asyncio
async def test_smtp_failure_is_logged_not_raised(db, session_factory, fake_smtp):
    fake_smtp.fail_with = smtplib.SMTPException("relay refused")
    notifier = EmailNotifier(CONFIGURED, session_factory=session_factory)

    sent = await notifier.notify_judge_assigned(judge_record("jo@judges.org"), entry_record())

    assert sent is False
    rows = await email_log_rows(db)
    assert rows[0].status == EmailStatus.failed
    assert "relay refused" in rows[0].error_message


@pytest.mark.asyncio
async def test_shortlist_notification_needs_contact_email(fake_smtp):
    notifier = EmailNotifier(CONFIGURED)
    entry = entry_record().model_copy(update={"contact_email": None})

    assert await notifier.notify_entry_shortlisted(entry) is False
    assert fake_smtp.sent == []


@pytest.mark.asyncio
async def test_unknown_template_raises():
    notifier = EmailNotifier(CONFIGURED)

    with pytest.raises(ValueError):
        await notifier.send_template("WINNER", "a@b.org", None, {})
