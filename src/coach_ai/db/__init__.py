"""Persistence layer: adapters, schema and repositories."""

from .adapters import DatabaseAdapter, SQLiteAdapter, SupabaseAdapter
from ..config import Settings


def create_adapter(settings: Settings) -> DatabaseAdapter:
    """Build the adapter selected by ``settings.database_backend``."""
    if settings.database_backend == "supabase":
        return SupabaseAdapter(url=settings.supabase_url, key=settings.supabase_service_key)
    adapter = SQLiteAdapter(str(settings.database_path))
    adapter.initialize()
    return adapter


__all__ = ["DatabaseAdapter", "SQLiteAdapter", "SupabaseAdapter", "create_adapter"]
