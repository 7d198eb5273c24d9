"""External service configurations."""

from .supabase import (
    SupabaseConfig,
    get_supabase_config,
)

__all__ = [
    'SupabaseConfig',
    'get_supabase_config',
]
