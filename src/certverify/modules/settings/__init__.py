"""
Settings module - keyed school settings such as the verification message.
"""

from certverify.modules.settings.models import (
    DEFAULT_VERIFICATION_MESSAGE,
    VERIFICATION_MESSAGE_KEY,
    SchoolSetting,
)
from certverify.modules.settings.repository import SettingsStore

__all__ = [
    "DEFAULT_VERIFICATION_MESSAGE",
    "VERIFICATION_MESSAGE_KEY",
    "SchoolSetting",
    "SettingsStore",
]
