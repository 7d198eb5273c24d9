"""Application settings read from the environment."""

import os
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Dict, Optional

from .environment import IS_PRODUCTION_ENVIRONMENT

REGISTRATION_STORE_BACKENDS = ('sql', 'supabase')


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass
class AppSettings:
    """
    Runtime settings for the campus events service.

    Fields left at their empty default are filled from the environment:
        timezone: IANA zone used for end-of-day and date-only inputs (CAMPUS_TIMEZONE)
        reminder_window_days: Size of the reminder window in days (REMINDER_WINDOW_DAYS)
        registration_store: Durable registration backend, 'sql' or 'supabase' (REGISTRATION_STORE)
        admin_api_key: Shared secret for the admin endpoints (ADMIN_API_KEY)
        seed_sample_data: Load the sample catalog on startup (SEED_SAMPLE_DATA)
    """
    timezone: str = ""
    reminder_window_days: Optional[int] = None
    registration_store: str = ""
    admin_api_key: str = ""
    seed_sample_data: Optional[bool] = None

    def __post_init__(self):
        """Fill unset values from the environment and validate them."""
        if not self.timezone:
            self.timezone = os.environ.get('CAMPUS_TIMEZONE', 'UTC')
        if self.reminder_window_days is None:
            self.reminder_window_days = int(os.environ.get('REMINDER_WINDOW_DAYS', '3'))
        if not self.registration_store:
            self.registration_store = os.environ.get('REGISTRATION_STORE', 'sql').strip().lower()
        if not self.admin_api_key:
            self.admin_api_key = os.environ.get('ADMIN_API_KEY', '')
        if self.seed_sample_data is None:
            # Sample data is a development convenience
            self.seed_sample_data = _env_flag('SEED_SAMPLE_DATA', not IS_PRODUCTION_ENVIRONMENT)
        self.validate()

    @property
    def reminder_window(self) -> timedelta:
        return timedelta(days=self.reminder_window_days)

    def validate(self) -> bool:
        """Validate the settings."""
        if self.registration_store not in REGISTRATION_STORE_BACKENDS:
            raise ValueError(
                f"REGISTRATION_STORE must be one of {REGISTRATION_STORE_BACKENDS}, "
                f"got '{self.registration_store}'"
            )
        if self.reminder_window_days < 0:
            raise ValueError("REMINDER_WINDOW_DAYS must not be negative")
        return True

    def to_dict(self) -> Dict[str, Any]:
        """Settings without secrets, for logging."""
        return {
            'timezone': self.timezone,
            'reminder_window_days': self.reminder_window_days,
            'registration_store': self.registration_store,
            'admin_api_key_set': bool(self.admin_api_key),
            'seed_sample_data': self.seed_sample_data,
        }


def verify_admin_auth(auth_header: str, settings: AppSettings) -> bool:
    """Verify the admin Authorization header against ADMIN_API_KEY."""
    return bool(settings.admin_api_key and auth_header and auth_header == settings.admin_api_key)
