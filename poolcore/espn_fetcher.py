"""ESPN scoreboard adapter for team-sport games (NFL, college football and basketball)."""

from typing import Any, Optional

import requests

from .base_fetcher import BaseFetcher
from .constants import (
    ESPN_ENDPOINTS,
    ESPN_HALFTIME_STATUS,
    ESPN_SEASON_PARAMS,
    ESPN_STATUS_MAP,
)
from .errors import EventNotFound, NormalizationFailure
from .models import GameState, QuarterScore


def map_espn_status(status_name: str) -> str:
    """Map an ESPN status type name to a canonical game status."""
    return ESPN_STATUS_MAP.get(status_name, 'scheduled')


def _parse_score(value: Any) -> Optional[int]:
    if value is None or value == '':
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise NormalizationFailure(f'Invalid score value: {value!r}', 'espn') from e


def _period_values(linescores: list[dict]) -> dict[int, int]:
    """Map period number -> points scored in that period."""
    values: dict[int, int] = {}
    for index, line in enumerate(linescores or [], 1):
        try:
            period = int(line.get('period', index))
            values[period] = int(line.get('value') or 0)
        except (TypeError, ValueError) as e:
            raise NormalizationFailure(f'Invalid linescore: {line!r}', 'espn') from e
    return values


def cumulative_score(period_values: dict[int, int], through_period: int) -> int:
    """Points scored through ``through_period``; missing periods count as 0."""
    return sum(period_values.get(p, 0) for p in range(1, through_period + 1))


def find_event(payload: dict, event_id: str) -> dict:
    """
    Find an event by id in a scoreboard payload.

    Raises:
        EventNotFound: If no event has the requested id
    """
    for event in payload.get('events') or []:
        if str(event.get('id')) == str(event_id):
            return event
    raise EventNotFound(str(event_id), 'espn')


def normalize_event(event: dict) -> GameState:
    """
    Normalize one ESPN scoreboard event into a GameState.

    Cumulative quarter scores for Q1-Q3 materialize once the game has
    reached that period or is final; Q4 materializes only when final and
    equals the final score.

    Raises:
        NormalizationFailure: If the competition or either side cannot be identified
    """
    event_id = str(event.get('id', ''))
    competitions = event.get('competitions') or []
    if not competitions:
        raise NormalizationFailure(f'Event {event_id} has no competitions', 'espn')
    competition = competitions[0]

    competitors = competition.get('competitors') or []
    home = next((c for c in competitors if c.get('homeAway') == 'home'), None)
    away = next((c for c in competitors if c.get('homeAway') == 'away'), None)
    if home is None or away is None:
        raise NormalizationFailure(f'Could not identify home/away teams for event {event_id}', 'espn')

    home_score = _parse_score(home.get('score'))
    away_score = _parse_score(away.get('score'))

    status_block = competition.get('status') or {}
    status_name = (status_block.get('type') or {}).get('name', '')
    status = map_espn_status(status_name)
    try:
        period = int(status_block.get('period') or 0)
    except (TypeError, ValueError) as e:
        raise NormalizationFailure(f'Invalid period for event {event_id}', 'espn') from e
    is_final = status == 'final'
    is_halftime = status_name == ESPN_HALFTIME_STATUS or (period == 2 and not is_final)

    home_periods = _period_values(home.get('linescores'))
    away_periods = _period_values(away.get('linescores'))

    quarters: dict[int, Optional[QuarterScore]] = {}
    for quarter in (1, 2, 3):
        if period >= quarter or is_final:
            quarters[quarter] = QuarterScore(
                home=cumulative_score(home_periods, quarter),
                away=cumulative_score(away_periods, quarter),
            )
        else:
            quarters[quarter] = None

    q4 = None
    if is_final:
        q4 = QuarterScore(
            home=home_score if home_score is not None else sum(home_periods.values()),
            away=away_score if away_score is not None else sum(away_periods.values()),
        )

    return GameState(
        game_id=event_id,
        home_team=(home.get('team') or {}).get('displayName', ''),
        away_team=(away.get('team') or {}).get('displayName', ''),
        home_score=home_score,
        away_score=away_score,
        status=status,
        period=period,
        clock=status_block.get('displayClock', ''),
        is_halftime=is_halftime,
        q1=quarters[1],
        q2=quarters[2],
        q3=quarters[3],
        q4=q4,
    )


def normalize_scoreboard(payload: dict) -> list[GameState]:
    """Normalize every event on a scoreboard."""
    return [normalize_event(event) for event in payload.get('events') or []]


def to_state_payload(game: GameState) -> dict[str, Any]:
    """Project a GameState into the persisted event-state payload."""
    payload: dict[str, Any] = {
        'home_score': game.home_score or 0,
        'away_score': game.away_score or 0,
        'home_team': game.home_team,
        'away_team': game.away_team,
        'period': game.period,
        'clock': game.clock,
        'is_halftime': game.is_halftime,
    }
    quarters = game.quarter_scores
    if quarters:
        payload['quarter_scores'] = {
            key: {'home': score.home, 'away': score.away} for key, score in quarters.items()
        }
    return payload


class ESPNScoreboardFetcher(BaseFetcher):
    """Fetches ESPN scoreboards and normalizes games."""

    provider = 'espn'

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = 10.0):
        super().__init__(session=session, timeout=timeout)

    def fetch_snapshot(self, sport: str) -> dict:
        """
        Fetch the raw scoreboard payload for a sport.

        Raises:
            ValueError: If the sport has no ESPN scoreboard
            ProviderUnreachable: On network or HTTP failure
        """
        endpoint = ESPN_ENDPOINTS.get(sport)
        if not endpoint:
            raise ValueError(f'ESPN not supported for sport: {sport}')
        return self._get_json(endpoint, params=ESPN_SEASON_PARAMS.get(sport) or None)

    def fetch_game(self, sport: str, game_id: str) -> GameState:
        """Fetch and normalize a single game."""
        payload = self.fetch_snapshot(sport)
        game = normalize_event(find_event(payload, game_id))
        self.logger.debug(
            f'{game.away_team} @ {game.home_team}: {game.away_score}-{game.home_score} ({game.status})'
        )
        return game

    def fetch_all_games(self, sport: str) -> list[GameState]:
        """Fetch and normalize every game on the sport's scoreboard."""
        return normalize_scoreboard(self.fetch_snapshot(sport))
