"""
Cooldown rules for user-initiated actions on an application.

Both windows are inclusive: an action becomes available again at exactly
`last + cooldown`.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from applicant_portal.config import EDIT_COOLDOWN_HOURS, NUDGE_COOLDOWN_HOURS

EDIT_COOLDOWN = timedelta(hours=EDIT_COOLDOWN_HOURS)
NUDGE_COOLDOWN = timedelta(hours=NUDGE_COOLDOWN_HOURS)


def _as_utc(instant: datetime) -> datetime:
    # Naive datetimes coming back from the database are UTC
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant


def cooldown_elapsed(last_at: Optional[datetime], now: datetime, cooldown: timedelta) -> bool:
    if last_at is None:
        return True
    return _as_utc(now) - _as_utc(last_at) >= cooldown


def can_edit(last_edit_at: Optional[datetime], now: datetime, cooldown: timedelta = EDIT_COOLDOWN) -> bool:
    return cooldown_elapsed(last_edit_at, now, cooldown)


def can_nudge(last_nudge_at: Optional[datetime], now: datetime, cooldown: timedelta = NUDGE_COOLDOWN) -> bool:
    return cooldown_elapsed(last_nudge_at, now, cooldown)
