"""Database package."""

from .db import get_session, init_db
from .models import FocusSession, PausePeriod

__all__ = ["get_session", "init_db", "FocusSession", "PausePeriod"]
