"""
Email templates for judging automation notifications.

Templates are exposed read-only; variables use {{name}} placeholders.
"""
import html
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Tuple

_PLACEHOLDER_RE = re.compile(r"\{\{\s*(\w+)\s*\}\}")


@dataclass(frozen=True)
class EmailTemplate:
    key: str
    subject: str
    html: str
    text: str

    def render(self, variables: Mapping[str, Any]) -> Tuple[str, str, str]:
        """Return (subject, html, text) with every placeholder substituted."""
        return (
            render_placeholders(self.subject, variables),
            render_html(self.html, variables),
            render_placeholders(self.text, variables),
        )


def render_placeholders(template: str, variables: Mapping[str, Any]) -> str:
    """Replace {{name}} with variables[name]; unknown or empty values become ''."""
    def _substitute(match):
        value = variables.get(match.group(1))
        return "" if value is None else str(value)

    return _PLACEHOLDER_RE.sub(_substitute, template)


def render_html(template: str, variables: Mapping[str, Any]) -> str:
    """Like render_placeholders, but every value is HTML-escaped."""
    escaped = {
        key: None if value is None else html.escape(str(value))
        for key, value in variables.items()
    }
    return render_placeholders(template, escaped)


JUDGE_ASSIGNMENT = EmailTemplate(
    key="JUDGE_ASSIGNMENT",
    subject="New Judging Assignment - {{award_name}}",
    html="""
      <h1>New Judging Assignment</h1>
      <p>Dear {{judge_name}},</p>
      <p>You have been assigned to judge entry <strong>{{entry_number}}</strong>
      from <strong>{{company_name}}</strong> in the <strong>{{award_name}}</strong> category.</p>
      <p><strong>Deadline:</strong> {{deadline}}</p>
      <a href="{{judge_portal_link}}">Start Judging</a>
      <p>Thank you for your time and expertise.</p>
    """,
    text=(
        "Dear {{judge_name}},\n\n"
        "You have been assigned to judge entry {{entry_number}} from {{company_name}} "
        "in the {{award_name}} category.\n"
        "Deadline: {{deadline}}\n"
        "Judge portal: {{judge_portal_link}}\n"
    ),
)

SHORTLIST_NOTIFICATION = EmailTemplate(
    key="SHORTLIST_NOTIFICATION",
    subject="Congratulations - You've Been Shortlisted!",
    html="""
      <h1>You've Been Shortlisted!</h1>
      <p>Dear {{contact_name}},</p>
      <p>We're delighted to inform you that <strong>{{company_name}}</strong> has been
      shortlisted for the <strong>{{award_name}}</strong>.</p>
      <h3>Next Steps:</h3>
      <ul>
        <li><strong>Winner Announcement:</strong> {{winner_date}}</li>
        <li><strong>Awards Ceremony:</strong> {{ceremony_date}} at {{ceremony_venue}}</li>
      </ul>
      <a href="{{ceremony_tickets_link}}">Book Ceremony Tickets</a>
    """,
    text=(
        "Dear {{contact_name}},\n\n"
        "{{company_name}} has been shortlisted for the {{award_name}}.\n"
        "Winner announcement: {{winner_date}}\n"
        "Awards ceremony: {{ceremony_date}} at {{ceremony_venue}}\n"
        "Tickets: {{ceremony_tickets_link}}\n"
    ),
)

JUDGE_REMINDER = EmailTemplate(
    key="JUDGE_REMINDER",
    subject="Judging Reminder - {{pending_count}} Entries Awaiting Your Score",
    html="""
      <h1>Judging Reminder</h1>
      <p>Dear {{judge_name}},</p>
      <p>You have scored <strong>{{scored_count}}</strong> of <strong>{{total_count}}</strong>
      assigned entries. {{pending_count}} still need your score before {{deadline}}.</p>
      <a href="{{judge_portal_link}}">Continue Judging</a>
    """,
    text=(
        "Dear {{judge_name}},\n\n"
        "You have scored {{scored_count}} of {{total_count}} assigned entries. "
        "{{pending_count}} still need your score before {{deadline}}.\n"
        "Judge portal: {{judge_portal_link}}\n"
    ),
)

DEFAULT_TEMPLATES: Mapping[str, EmailTemplate] = MappingProxyType({
    t.key: t for t in (JUDGE_ASSIGNMENT, SHORTLIST_NOTIFICATION, JUDGE_REMINDER)
})
