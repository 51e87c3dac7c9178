from employee_api.config.loader import (
    load_from_environment,
    load_settings,
)
from employee_api.config.models import (
    LoggingSettings,
    RetrySettings,
    Settings,
    UpstreamSettings,
)

__all__ = [
    "LoggingSettings",
    "RetrySettings",
    "Settings",
    "UpstreamSettings",
    "load_from_environment",
    "load_settings",
]
