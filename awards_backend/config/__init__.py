from .settings import (
    AutomationSettings,
    EmailSettings,
    ApiSettings,
    Settings,
    get_settings,
    load_settings,
)

__all__ = [
    "AutomationSettings",
    "EmailSettings",
    "ApiSettings",
    "Settings",
    "get_settings",
    "load_settings",
]
