"""API middleware modules."""

from .auth import CurrentUser, get_current_user

__all__ = ["CurrentUser", "get_current_user"]
