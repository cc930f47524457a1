"""Timestamp helpers."""

from datetime import datetime, timezone
from typing import Optional


def ensure_aware(moment: datetime) -> datetime:
    """Treat naive timestamps as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def resolve_now(now: Optional[datetime] = None) -> datetime:
    return ensure_aware(now) if now is not None else datetime.now(timezone.utc)
