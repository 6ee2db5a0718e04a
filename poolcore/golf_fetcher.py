"""Sportradar golf adapter: schedules, fields, leaderboards and player profiles.

Fetch methods return raw payloads or normalized records; the module-level
``normalize_*`` functions are pure and can be exercised without a network.
"""

from typing import Any, Iterable, Optional, Sequence

import requests

from .base_fetcher import BaseFetcher
from .config import get_sportradar_api_key
from .constants import (
    MAJOR_TOURNAMENTS,
    PLAYER_STATUS_MAP,
    ROUND_NUMBERS,
    SPORTRADAR_BASE_URL,
    TOURNAMENT_STATUS_MAP,
)
from .errors import EventNotFound, NormalizationFailure
from .models import FieldPlayer, LeaderboardPlayer, TournamentLeaderboard, TournamentSummary


def map_tournament_status(status: Optional[str]) -> str:
    """scheduled -> upcoming, inprogress -> in_progress, closed/cancelled -> completed."""
    return TOURNAMENT_STATUS_MAP.get(status or '', 'upcoming')


def map_player_status(status: Optional[str]) -> str:
    """cut, withdrawn, disqualified, else active."""
    return PLAYER_STATUS_MAP.get(status or '', 'active')


def is_major_tournament(name: str, majors: Sequence[str] = MAJOR_TOURNAMENTS) -> bool:
    """True if the tournament title names one of the majors."""
    normalized = name.lower()
    return any(major.lower() in normalized for major in majors)


def filter_major_tournaments(
    tournaments: Iterable[TournamentSummary],
    majors: Sequence[str] = MAJOR_TOURNAMENTS,
) -> list[TournamentSummary]:
    """Keep only the major championships from a schedule, preserving order."""
    return [t for t in tournaments if is_major_tournament(t.name, majors)]


def format_position(position: Any, tied: bool) -> str:
    """Leaderboard position string, prefixed with 'T' when tied (e.g. 'T2')."""
    if position is None or position == '':
        return '-'
    return f'T{position}' if tied else str(position)


def extract_round_strokes(rounds: Optional[list[dict]]) -> dict[int, Optional[int]]:
    """
    Strokes for rounds 1-4 keyed by round number.

    Rounds are matched on their ``sequence`` number; a round missing from
    the payload maps to None, never 0.
    """
    by_sequence = {}
    for round_data in rounds or []:
        sequence = round_data.get('sequence')
        if sequence in ROUND_NUMBERS:
            by_sequence[sequence] = round_data.get('strokes')
    return {number: by_sequence.get(number) for number in ROUND_NUMBERS}


def _require(payload: Any, key: str, context: str) -> Any:
    if not isinstance(payload, dict) or key not in payload:
        raise NormalizationFailure(f'{context} payload is missing "{key}"', 'sportradar')
    return payload[key]


def normalize_schedule(payload: dict) -> list[TournamentSummary]:
    """Normalize a season schedule payload."""
    tournaments = _require(payload, 'tournaments', 'Schedule')
    summaries = []
    for t in tournaments:
        summaries.append(
            TournamentSummary(
                tournament_id=_require(t, 'id', 'Tournament'),
                name=t.get('name', ''),
                start_date=t.get('start_date', ''),
                end_date=t.get('end_date', ''),
                venue_name=(t.get('venue') or {}).get('name'),
                course_name=(t.get('course') or {}).get('name'),
                status=map_tournament_status(t.get('status')),
            )
        )
    return summaries


def normalize_field(payload: dict) -> list[FieldPlayer]:
    """Normalize a tournament field (entry list) payload."""
    field = _require(payload, 'field', 'Field')
    return [
        FieldPlayer(
            player_id=_require(p, 'id', 'Field player'),
            first_name=p.get('first_name', ''),
            last_name=p.get('last_name', ''),
            country=p.get('country', ''),
            status=map_player_status(p.get('status')),
        )
        for p in field
    ]


def normalize_leaderboard(payload: dict, tournament_id: Optional[str] = None) -> TournamentLeaderboard:
    """
    Normalize a leaderboard payload.

    Args:
        payload: Raw Sportradar leaderboard response
        tournament_id: Expected tournament id; checked against the payload

    Raises:
        EventNotFound: If the payload belongs to a different tournament
        NormalizationFailure: If required structure is missing
    """
    tournament = _require(payload, 'tournament', 'Leaderboard')
    payload_id = str(_require(tournament, 'id', 'Leaderboard tournament'))
    if tournament_id is not None and payload_id != str(tournament_id):
        raise EventNotFound(str(tournament_id), 'sportradar')

    rows = payload.get('leaderboard') or []
    if not isinstance(rows, list):
        raise NormalizationFailure('Leaderboard rows are not a list', 'sportradar')

    players = []
    for row in rows:
        rounds = row.get('rounds') or []
        tied = bool(row.get('tied', False))
        players.append(
            LeaderboardPlayer(
                player_id=_require(row, 'id', 'Leaderboard player'),
                first_name=row.get('first_name', ''),
                last_name=row.get('last_name', ''),
                position=format_position(row.get('position'), tied),
                tied=tied,
                rounds=extract_round_strokes(rounds),
                total_strokes=row.get('strokes'),
                to_par=row.get('score'),
                thru=rounds[-1].get('thru') if rounds else None,
                status=map_player_status(row.get('status')),
            )
        )

    return TournamentLeaderboard(
        tournament_id=payload_id,
        name=tournament.get('name', ''),
        status=map_tournament_status(tournament.get('status')),
        current_round=payload.get('current_round') or payload.get('round'),
        players=players,
    )


def headshot_url(profile: dict) -> Optional[str]:
    """Headshot URL from a player profile, if any."""
    return profile.get('headshot') or None


def world_rank(profile: dict, source: str = 'OWGR') -> Optional[int]:
    """Official world ranking position from a player profile."""
    for ranking in profile.get('rankings') or []:
        if str(ranking.get('source', '')).upper() == source.upper():
            return ranking.get('position')
    return None


class GolfLeaderboardFetcher(BaseFetcher):
    """Fetches golf data from the Sportradar API."""

    provider = 'sportradar'

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = SPORTRADAR_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: float = 15.0,
    ):
        super().__init__(session=session, timeout=timeout)
        self.api_key = api_key or get_sportradar_api_key()
        self.base_url = base_url.rstrip('/')
        if not self.api_key:
            self.logger.warning('Sportradar API key not configured')

    def _fetch(self, endpoint: str) -> Any:
        if not self.api_key:
            raise ValueError('Sportradar API key not configured (set SPORTRADAR_API_KEY)')
        return self._get_json(f'{self.base_url}{endpoint}', params={'api_key': self.api_key})

    def get_schedule(self, year: int) -> dict:
        """Raw season schedule."""
        return self._fetch(f'/tournaments/{year}/schedule.json')

    def get_tournaments(self, year: int) -> list[TournamentSummary]:
        return normalize_schedule(self.get_schedule(year))

    def get_major_tournaments(self, year: int) -> list[TournamentSummary]:
        return filter_major_tournaments(self.get_tournaments(year))

    def get_field(self, tournament_id: str) -> dict:
        """Raw tournament field."""
        return self._fetch(f'/tournaments/{tournament_id}/field.json')

    def get_players(self, tournament_id: str) -> list[FieldPlayer]:
        return normalize_field(self.get_field(tournament_id))

    def fetch_snapshot(self, tournament_id: str) -> dict:
        """Raw leaderboard payload for a tournament."""
        return self._fetch(f'/tournaments/{tournament_id}/leaderboard.json')

    def get_leaderboard(self, tournament_id: str) -> TournamentLeaderboard:
        """Fetch and normalize a tournament leaderboard."""
        leaderboard = normalize_leaderboard(self.fetch_snapshot(tournament_id), tournament_id)
        self.logger.debug(
            f'{leaderboard.name}: {len(leaderboard.players)} players, status {leaderboard.status}'
        )
        return leaderboard

    def get_player_profile(self, player_id: str) -> dict:
        """Raw player profile."""
        return self._fetch(f'/players/{player_id}/profile.json')
