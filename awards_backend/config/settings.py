"""
Automation Settings

Centralized configuration for the judging automation.
All values are loaded from environment variables (optionally via .env).
"""
import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from dotenv import load_dotenv

load_dotenv()


DEFAULT_EXPERTISE_KEYWORDS = ("technology", "manufacturing", "retail", "services", "export")


def get_bool_env(key: str, default: bool = False) -> bool:
    """Get a boolean value from environment variable."""
    value = os.getenv(key, str(default)).lower()
    return value in ('true', '1', 'yes', 'on', 'enabled')


def get_int_env(key: str, default: int) -> int:
    """Get an integer value from environment variable."""
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {value!r}")


def get_float_env(key: str, default: float) -> float:
    """Get a float value from environment variable."""
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{key} must be a number, got {value!r}")


@dataclass(frozen=True)
class AutomationSettings:
    """Judge assignment and shortlist parameters."""
    judges_per_entry: int = 3
    min_scores: int = 2
    shortlist_top_n: int = 5
    consistency_penalty: float = 0.1
    fully_judged_threshold: int = 3
    # Domain comparison is exact unless explicitly relaxed
    conflict_domain_case_insensitive: bool = False
    expertise_keywords: Tuple[str, ...] = DEFAULT_EXPERTISE_KEYWORDS


@dataclass(frozen=True)
class EmailSettings:
    """SMTP delivery and programme details used by email templates."""
    enabled: bool = False
    host: str = ""
    port: int = 587
    user: str = ""
    password: str = ""
    from_email: str = "awards@britishtrade.com"
    from_name: str = "British Trade Awards"
    judging_deadline: str = ""
    judge_portal_link: str = ""
    winner_date: str = ""
    ceremony_date: str = ""
    ceremony_venue: str = ""
    ceremony_tickets_link: str = ""

    @property
    def is_configured(self) -> bool:
        return bool(self.enabled and self.host and self.from_email)


@dataclass(frozen=True)
class ApiSettings:
    """HTTP surface configuration."""
    environment: str = "development"
    allowed_origins: Tuple[str, ...] = ()
    rate_limit_default: str = "60/minute"


@dataclass(frozen=True)
class Settings:
    database_url: str = "sqlite+aiosqlite:///./awards.db"
    log_level: str = "INFO"
    automation: AutomationSettings = field(default_factory=AutomationSettings)
    email: EmailSettings = field(default_factory=EmailSettings)
    api: ApiSettings = field(default_factory=ApiSettings)


def load_settings() -> Settings:
    """Build settings from the current environment."""
    keywords = os.getenv("EXPERTISE_KEYWORDS")
    expertise_keywords = (
        tuple(k.strip().lower() for k in keywords.split(",") if k.strip())
        if keywords else DEFAULT_EXPERTISE_KEYWORDS
    )

    automation = AutomationSettings(
        judges_per_entry=get_int_env("JUDGES_PER_ENTRY", 3),
        min_scores=get_int_env("MIN_SCORES", 2),
        shortlist_top_n=get_int_env("SHORTLIST_TOP_N", 5),
        consistency_penalty=get_float_env("CONSISTENCY_PENALTY", 0.1),
        fully_judged_threshold=get_int_env("FULLY_JUDGED_THRESHOLD", 3),
        conflict_domain_case_insensitive=get_bool_env("CONFLICT_DOMAIN_CASE_INSENSITIVE", False),
        expertise_keywords=expertise_keywords,
    )

    email = EmailSettings(
        enabled=get_bool_env("EMAIL_ENABLED", False),
        host=os.getenv("SMTP_HOST", ""),
        port=get_int_env("SMTP_PORT", 587),
        user=os.getenv("SMTP_USER", ""),
        password=os.getenv("SMTP_PASSWORD", ""),
        from_email=os.getenv("SMTP_FROM_EMAIL", "awards@britishtrade.com"),
        from_name=os.getenv("SMTP_FROM_NAME", "British Trade Awards"),
        judging_deadline=os.getenv("JUDGING_DEADLINE", ""),
        judge_portal_link=os.getenv("JUDGE_PORTAL_LINK", ""),
        winner_date=os.getenv("WINNER_DATE", ""),
        ceremony_date=os.getenv("CEREMONY_DATE", ""),
        ceremony_venue=os.getenv("CEREMONY_VENUE", ""),
        ceremony_tickets_link=os.getenv("CEREMONY_TICKETS_LINK", ""),
    )

    origins = os.getenv("ALLOWED_ORIGINS", "")
    api = ApiSettings(
        environment=os.getenv("ENVIRONMENT", "development"),
        allowed_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
        rate_limit_default=os.getenv("RATE_LIMIT_DEFAULT", "60/minute"),
    )

    return Settings(
        database_url=os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./awards.db"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        automation=automation,
        email=email,
        api=api,
    )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the process-wide settings."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings
