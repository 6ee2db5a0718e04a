"""Constants and lookup tables for the pool scoring core."""

# ESPN scoreboard endpoints by sport
ESPN_ENDPOINTS = {
    'nfl': 'https://site.api.espn.com/apis/site/v2/sports/football/nfl/scoreboard',
    'ncaa_fb': 'https://site.api.espn.com/apis/site/v2/sports/football/college-football/scoreboard',
    'ncaa_bb': 'https://site.api.espn.com/apis/site/v2/sports/basketball/mens-college-basketball/scoreboard',
}

# Extra query parameters per sport (NFL pools run on the playoff scoreboard)
ESPN_SEASON_PARAMS = {
    'nfl': {'seasontype': '3'},
    'ncaa_fb': {},
    'ncaa_bb': {},
}

# ESPN status type name -> canonical game status
ESPN_STATUS_MAP = {
    'STATUS_IN_PROGRESS': 'in_progress',
    'STATUS_HALFTIME': 'in_progress',
    'STATUS_FINAL': 'final',
    'STATUS_FINAL_OVERTIME': 'final',
    'STATUS_CANCELED': 'cancelled',
    'STATUS_POSTPONED': 'cancelled',
}

ESPN_HALFTIME_STATUS = 'STATUS_HALFTIME'

GAME_STATUSES = ('scheduled', 'in_progress', 'final', 'cancelled')

# Event statuses after which a pool can no longer change
TERMINAL_EVENT_STATUSES = ('completed', 'final', 'cancelled')

# Sportradar tournament status -> tournament state
TOURNAMENT_STATUS_MAP = {
    'scheduled': 'upcoming',
    'inprogress': 'in_progress',
    'closed': 'completed',
    'cancelled': 'completed',
}

# Sportradar player status -> leaderboard player status
PLAYER_STATUS_MAP = {
    'cut': 'cut',
    'withdrawn': 'withdrawn',
    'disqualified': 'disqualified',
}

# Player statuses that end a golfer's tournament before the weekend
ELIMINATED_STATUSES = ('cut', 'withdrawn', 'disqualified')

# Major championships, matched case-insensitively as substrings of the title
MAJOR_TOURNAMENTS = (
    'The Masters',
    'PGA Championship',
    'U.S. Open',
    'The Open Championship',
    'The Open',
)

# OWGR rank bands for tiers 1-6 (tier 0 is assigned by hand)
TIER_RANGES = [
    (1, 1, 15),
    (2, 16, 40),
    (3, 41, 75),
    (4, 76, 125),
    (5, 126, 200),
    (6, 201, 9999),
]

UNRANKED_TIER = 6
ELITE_TIER = 0

ROUND_NUMBERS = (1, 2, 3, 4)

SPORTRADAR_BASE_URL = 'https://api.sportradar.com/golf/production/pga/v3/en'

# Defaults mirrored by GolfPoolSettings
DEFAULT_PICKS_REQUIRED = 6
DEFAULT_COUNTED_GOLFERS = 4
DEFAULT_MISSED_CUT_ROUND_SCORE = 80
DEFAULT_PAR_PER_ROUND = 72

MISSED_CUT_POLICIES = ('fixed_round', 'worst_round', 'worst_field_round')

GRID_DIGITS = list(range(10))

# Polling intervals in seconds
POLLING_INTERVALS = {
    'pre_game_long': 15 * 60,
    'pre_game_short': 5 * 60,
    'in_progress': 15,
    'halftime': 30,
    'final': 0,
}

# Squares score-change mode win types
SCORE_CHANGE_WIN = 'score_change'
SCORE_CHANGE_REVERSE_WIN = 'score_change_reverse'
SCORE_CHANGE_FINAL_WIN = 'score_change_final'
SCORE_CHANGE_FINAL_REVERSE_WIN = 'score_change_final_reverse'

# Display priority of score-change winning rounds (higher takes precedence)
SCORE_CHANGE_ROUND_RANKS = {
    'score_change_forward': 1,
    'score_change_reverse': 1,
    'score_change_both': 2,
    'score_change_final': 3,
    'score_change_final_reverse': 3,
    'score_change_final_both': 4,
}
