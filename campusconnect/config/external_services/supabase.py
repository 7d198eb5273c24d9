"""Supabase service configuration."""

import os
from typing import Dict, Any
from dataclasses import dataclass


@dataclass
class SupabaseConfig:
    """Supabase configuration settings for the registrations table."""

    # API configuration
    url: str = ""
    table: str = "event_registrations"
    timeout: float = 0

    # Authentication
    api_key: str = ""

    def __post_init__(self):
        """Fill unset values from the environment."""
        if not self.url:
            self.url = os.environ.get('SUPABASE_URL', '')
        if not self.api_key:
            self.api_key = os.environ.get('SUPABASE_KEY', '')
        if not self.timeout:
            self.timeout = float(os.environ.get('SUPABASE_TIMEOUT', '10'))
        self.url = self.url.rstrip('/')

    @property
    def rest_url(self) -> str:
        """PostgREST endpoint of the registrations table."""
        return f"{self.url}/rest/v1/{self.table}"

    def headers(self) -> Dict[str, str]:
        """Headers every PostgREST call needs."""
        return {
            'apikey': self.api_key,
            'Authorization': f"Bearer {self.api_key}",
            'Content-Type': 'application/json',
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return {
            'url': self.url,
            'table': self.table,
            'timeout': self.timeout,
            'api_key': self.api_key,
        }

    def validate(self) -> bool:
        """Validate the configuration."""
        if not self.url:
            raise ValueError("SUPABASE_URL environment variable is required")
        if not self.api_key:
            raise ValueError("SUPABASE_KEY environment variable is required")
        return True


def get_supabase_config() -> SupabaseConfig:
    """Get Supabase configuration with validation."""
    config = SupabaseConfig()
    config.validate()
    return config
