"""Adapters - I/O implementations of ports."""

from .errors import BackendError, AuthenticationError
from .supabase_rest import SupabaseAdapter
from .file_store import FileEventStore

__all__ = [
    "SupabaseAdapter",
    "BackendError",
    "AuthenticationError",
    "FileEventStore",
]
