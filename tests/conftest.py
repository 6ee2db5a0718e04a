"""Shared fixtures for poolcore tests."""

import json
from unittest.mock import MagicMock

import pytest
import requests

from poolcore.config import clear_config_cache


def make_response(payload=None, status_code=200, body=None):
    """Build a real requests.Response with a canned body."""
    response = requests.Response()
    response.status_code = status_code
    if body is None:
        body = json.dumps(payload if payload is not None else {})
    response._content = body.encode('utf-8')
    response.url = 'https://example.test/endpoint'
    return response


def make_session(payload=None, status_code=200, body=None):
    """MagicMock session whose get() returns a canned response."""
    session = MagicMock(spec=requests.Session)
    session.get.return_value = make_response(payload, status_code, body)
    return session


def make_competitor(side, team, score, linescores=None):
    return {
        'homeAway': side,
        'team': {'displayName': team},
        'score': score,
        'linescores': [{'value': v} for v in (linescores or [])],
    }


def make_espn_event(
    event_id='401547001',
    status_name='STATUS_IN_PROGRESS',
    period=2,
    clock='0:00',
    home=('Kansas City Chiefs', '21', [14, 7]),
    away=('Buffalo Bills', '17', [10, 7]),
):
    """Minimal ESPN scoreboard event."""
    competitors = []
    if home is not None:
        competitors.append(make_competitor('home', *home))
    if away is not None:
        competitors.append(make_competitor('away', *away))
    return {
        'id': event_id,
        'competitions': [
            {
                'competitors': competitors,
                'status': {
                    'period': period,
                    'displayClock': clock,
                    'type': {'name': status_name},
                },
            }
        ],
    }


@pytest.fixture
def espn_scoreboard():
    """Scoreboard payload with two games."""
    return {
        'events': [
            make_espn_event(),
            make_espn_event(
                event_id='401547002',
                status_name='STATUS_FINAL',
                period=4,
                home=('Detroit Lions', '31', [7, 10, 7, 7]),
                away=('Green Bay Packers', '24', [3, 7, 7, 7]),
            ),
        ]
    }


@pytest.fixture
def golf_leaderboard_payload():
    """Sportradar leaderboard payload after the cut."""
    return {
        'tournament': {'id': 'tourn-1', 'name': 'The Masters', 'status': 'inprogress'},
        'round': 3,
        'leaderboard': [
            {
                'id': 'p1',
                'first_name': 'Scottie',
                'last_name': 'Scheffler',
                'position': 1,
                'tied': False,
                'score': -10,
                'strokes': 206,
                'status': None,
                'rounds': [
                    {'sequence': 1, 'strokes': 68, 'thru': 18},
                    {'sequence': 2, 'strokes': 67, 'thru': 18},
                    {'sequence': 3, 'strokes': 71, 'thru': 18},
                ],
            },
            {
                'id': 'p2',
                'first_name': 'Rory',
                'last_name': 'McIlroy',
                'position': 2,
                'tied': True,
                'score': -8,
                'strokes': 208,
                'rounds': [
                    {'sequence': 1, 'strokes': 70, 'thru': 18},
                    {'sequence': 2, 'strokes': 69, 'thru': 18},
                    {'sequence': 3, 'strokes': 69, 'thru': 14},
                ],
            },
            {
                'id': 'p3',
                'first_name': 'Tiger',
                'last_name': 'Woods',
                'position': 60,
                'tied': False,
                'score': 6,
                'strokes': 150,
                'status': 'cut',
                'rounds': [
                    {'sequence': 1, 'strokes': 74, 'thru': 18},
                    {'sequence': 2, 'strokes': 76, 'thru': 18},
                ],
            },
        ],
    }


@pytest.fixture(autouse=True)
def reset_config_cache():
    """Keep cached configuration from leaking between tests."""
    clear_config_cache()
    yield
    clear_config_cache()
