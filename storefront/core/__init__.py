# Core modules

from .config import settings, get_settings, Settings
from .clock import Clock, SystemClock, FixedClock
from .session import AuthSession

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "Clock",
    "SystemClock",
    "FixedClock",
    "AuthSession",
]
