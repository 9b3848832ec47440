"""
Conflict of Interest Detection

Pure checks of a judge against an entry's organisation:
- Email domain matches the organisation website domain
- Organisation company name contains the judge's company name

No database access, no side effects.
"""
import re
from typing import Optional, Tuple

from awards_backend.schemas.judging import EntryRecord, JudgeRecord

_SCHEME_RE = re.compile(r"^https?://")
_WWW_RE = re.compile(r"^www\.")


def email_domain(email: Optional[str]) -> Optional[str]:
    """Return the part of an email address after '@', or None."""
    if not email or "@" not in email:
        return None
    return email.split("@")[1] or None


def website_domain(website: Optional[str]) -> Optional[str]:
    """
    Reduce a website URL to its host.

    "https://www.acme.com/about" -> "acme.com"
    """
    if not website:
        return None
    host = _WWW_RE.sub("", _SCHEME_RE.sub("", website)).split("/")[0]
    return host or None


def check_domain_conflict(
    judge: JudgeRecord,
    entry: EntryRecord,
    case_insensitive: bool = False
) -> bool:
    """True if the judge's email domain equals the organisation's website domain."""
    judge_domain = email_domain(judge.email)
    company_domain = website_domain(entry.organisation.website if entry.organisation else None)

    if not judge_domain or not company_domain:
        return False

    if case_insensitive:
        return judge_domain.lower() == company_domain.lower()
    return judge_domain == company_domain


def check_company_conflict(judge: JudgeRecord, entry: EntryRecord) -> bool:
    """True if the organisation name contains the judge's declared company."""
    if not entry.organisation or not entry.organisation.company_name:
        return False

    judge_company = (judge.company_name or "").lower()
    if not judge_company:
        return False

    return judge_company in entry.organisation.company_name.lower()


def detect_conflict(
    judge: JudgeRecord,
    entry: EntryRecord,
    case_insensitive_domains: bool = False
) -> Tuple[bool, Optional[str]]:
    """
    Run the conflict rules in order.

    Returns:
        Tuple of (has_conflict, reason)
    """
    if check_domain_conflict(judge, entry, case_insensitive=case_insensitive_domains):
        return (True, "Judge email domain matches organisation website")

    if check_company_conflict(judge, entry):
        return (True, "Judge works for the entering organisation")

    return (False, None)


def has_conflict(
    judge: JudgeRecord,
    entry: EntryRecord,
    case_insensitive_domains: bool = False
) -> bool:
    conflict, _ = detect_conflict(judge, entry, case_insensitive_domains)
    return conflict
