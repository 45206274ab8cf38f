"""Base repository over a DatabaseAdapter."""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone

from ..adapters import DatabaseAdapter
from ...exceptions import CoachAIError, DatabaseError

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AdapterRepository:
    """
    Shared plumbing for repositories backed by a DatabaseAdapter.

    Backend failures (sqlite3 errors, PostgREST API errors, network errors)
    are re-raised as DatabaseError so callers handle a single type.
    """

    table: str = ""

    def __init__(self, adapter: DatabaseAdapter):
        self.adapter = adapter

    @contextmanager
    def _operation(self, name: str):
        try:
            yield
        except CoachAIError:
            raise
        except Exception as e:
            logger.error(f"{self.table}.{name} failed: {e}")
            raise DatabaseError(operation=f"{self.table}.{name}", details={"reason": str(e)}) from e
