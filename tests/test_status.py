"""Tests for pool status derivation and time helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from poolcore.models import TournamentLeaderboard
from poolcore.status import (
    derive_pool_status,
    golf_event_status,
    picks_locked,
    polling_interval,
    time_until_lock,
)

NOW = datetime(2026, 4, 9, 12, 0, tzinfo=timezone.utc)
PAST = NOW - timedelta(hours=1)
FUTURE = NOW + timedelta(days=2)


class TestDerivePoolStatus:
    """Tests for status precedence."""

    def test_no_event_is_draft(self):
        """Test an unlinked pool is draft even with public entry on."""
        assert derive_pool_status(None, None, PAST, True, now=NOW) == 'draft'

    def test_completed_event(self):
        """Test a terminal event wins over everything else."""
        assert derive_pool_status('t1', 'completed', FUTURE, True, now=NOW) == 'completed'
        assert derive_pool_status('g1', 'final', None, False, now=NOW) == 'completed'
        assert derive_pool_status('g1', 'cancelled', None, False, now=NOW) == 'completed'

    def test_past_lock_is_in_progress(self):
        assert derive_pool_status('t1', 'in_progress', PAST, False, now=NOW) == 'in_progress'

    def test_lock_time_exactly_now(self):
        """Test the lock applies at the lock instant itself."""
        assert derive_pool_status('t1', 'upcoming', NOW, True, now=NOW) == 'in_progress'

    def test_public_entries_open(self):
        assert derive_pool_status('t1', 'upcoming', FUTURE, True, now=NOW) == 'open'

    def test_private_pool_before_lock(self):
        assert derive_pool_status('t1', 'upcoming', FUTURE, False, now=NOW) == 'draft'

    def test_no_lock_time(self):
        assert derive_pool_status('t1', 'upcoming', None, True, now=NOW) == 'open'

    def test_iso_string_lock_time(self):
        assert derive_pool_status('t1', None, '2026-04-09T11:00:00Z', True, now=NOW) == 'in_progress'


class TestPicksLocked:
    """Tests for the pick lock."""

    def test_locked_after_lock_time(self):
        assert picks_locked(PAST, now=NOW)

    def test_unlocked_before_lock_time(self):
        assert not picks_locked(FUTURE, now=NOW)

    def test_demo_mode_never_locks(self):
        assert not picks_locked(PAST, now=NOW, demo_mode=True)

    def test_naive_timestamp_is_utc(self):
        assert picks_locked('2026-04-09T11:59:00', now=NOW)

    def test_invalid_timestamp(self):
        with pytest.raises(ValueError):
            picks_locked('next tuesday', now=NOW)


class TestTimeUntilLock:
    """Tests for the lock countdown."""

    def test_days(self):
        result = time_until_lock(NOW + timedelta(days=3, hours=1), now=NOW)
        assert result == {'locked': False, 'time_string': '3 days', 'urgency': 'none'}

    def test_hours_warning(self):
        result = time_until_lock(NOW + timedelta(hours=1, minutes=30), now=NOW)
        assert result['time_string'] == '1h 30m'
        assert result['urgency'] == 'warning'

    def test_minutes_danger(self):
        result = time_until_lock(NOW + timedelta(minutes=40), now=NOW)
        assert result['time_string'] == '40m'
        assert result['urgency'] == 'danger'

    def test_locked(self):
        assert time_until_lock(PAST, now=NOW)['locked'] is True

    def test_no_lock(self):
        assert time_until_lock(None, now=NOW)['time_string'] is None


class TestEventHelpers:
    """Tests for golf event status and polling cadence."""

    def test_golf_event_status(self):
        board = TournamentLeaderboard(tournament_id='t1', name='The Masters', status='completed')
        assert golf_event_status(board) == 'final'
        board.status = 'in_progress'
        assert golf_event_status(board) == 'in_progress'
        board.status = 'upcoming'
        assert golf_event_status(board) == 'scheduled'

    def test_polling_final(self):
        assert polling_interval('final') == 0
        assert polling_interval('cancelled') == 0

    def test_polling_live(self):
        assert polling_interval('in_progress') == 15
        assert polling_interval('in_progress', is_halftime=True) == 30

    def test_polling_pre_game(self):
        assert polling_interval('scheduled', start_time=NOW + timedelta(minutes=30), now=NOW) == 300
        assert polling_interval('scheduled', start_time=NOW + timedelta(hours=5), now=NOW) == 900
        assert polling_interval('scheduled') == 900
