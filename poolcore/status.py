"""Pool lifecycle status and time-based helpers.

Pool status is never stored. It is recomputed from configuration and the
current time on every read.
"""

from datetime import datetime
from typing import Any, Optional

from .constants import POLLING_INTERVALS, TERMINAL_EVENT_STATUSES
from .models import TournamentLeaderboard
from .utils import parse_timestamp, utc_now


def picks_locked(
    picks_lock_at: datetime | str | None,
    now: Optional[datetime] = None,
    demo_mode: bool = False,
) -> bool:
    """True once the current time reaches the lock time. Demo pools never lock."""
    if demo_mode:
        return False
    lock_time = parse_timestamp(picks_lock_at)
    if lock_time is None:
        return False
    return (now or utc_now()) >= lock_time


def derive_pool_status(
    event_id: Optional[str],
    event_status: Optional[str],
    picks_lock_at: datetime | str | None,
    public_entries_enabled: bool,
    now: Optional[datetime] = None,
) -> str:
    """
    Compute a pool's visible status. First match wins:

        1. no linked event          -> draft
        2. linked event is terminal -> completed
        3. past the lock time       -> in_progress
        4. public entry enabled     -> open
        5. otherwise                -> draft

    Args:
        event_id: Linked tournament or game id (None when unlinked)
        event_status: Status of the linked event ('completed', 'final', ...)
        picks_lock_at: Lock timestamp (datetime or ISO-8601 string)
        public_entries_enabled: Whether the pool accepts public entries
        now: Current time (default: now, UTC)
    """
    if not event_id:
        return 'draft'
    if event_status in TERMINAL_EVENT_STATUSES:
        return 'completed'
    if picks_locked(picks_lock_at, now):
        return 'in_progress'
    if public_entries_enabled:
        return 'open'
    return 'draft'


def time_until_lock(
    picks_lock_at: datetime | str | None,
    now: Optional[datetime] = None,
) -> dict[str, Any]:
    """
    Countdown to the pick lock.

    Returns:
        Dict with 'locked', 'time_string' ('3 days', '5h 12m', '40m',
        'Locked' or None) and 'urgency' ('none', 'warning' or 'danger')
    """
    lock_time = parse_timestamp(picks_lock_at)
    if lock_time is None:
        return {'locked': False, 'time_string': None, 'urgency': 'none'}

    seconds = (lock_time - (now or utc_now())).total_seconds()
    if seconds <= 0:
        return {'locked': True, 'time_string': 'Locked', 'urgency': 'danger'}

    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)

    if hours > 24:
        days = hours // 24
        time_string = f'{days} day{"s" if days != 1 else ""}'
        urgency = 'none'
    elif hours > 0:
        time_string = f'{hours}h {minutes}m'
        urgency = 'warning' if hours < 2 else 'none'
    else:
        time_string = f'{minutes}m'
        urgency = 'danger'

    return {'locked': False, 'time_string': time_string, 'urgency': urgency}


def golf_event_status(leaderboard: TournamentLeaderboard) -> str:
    """Map a tournament's state onto the shared event status vocabulary."""
    if leaderboard.status == 'completed':
        return 'final'
    if leaderboard.status == 'in_progress':
        return 'in_progress'
    return 'scheduled'


def polling_interval(
    status: str,
    is_halftime: bool = False,
    start_time: datetime | str | None = None,
    now: Optional[datetime] = None,
) -> int:
    """
    Suggested seconds until the caller should poll an event again.

    0 means stop polling (final or cancelled).
    """
    if status in ('final', 'cancelled'):
        return POLLING_INTERVALS['final']

    if status == 'in_progress':
        return POLLING_INTERVALS['halftime'] if is_halftime else POLLING_INTERVALS['in_progress']

    start = parse_timestamp(start_time)
    if start is not None:
        hours_until_start = (start - (now or utc_now())).total_seconds() / 3600
        if hours_until_start <= 1:
            return POLLING_INTERVALS['pre_game_short']

    return POLLING_INTERVALS['pre_game_long']
