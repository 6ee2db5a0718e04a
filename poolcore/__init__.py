from .models import (
    QuarterScore,
    GameState,
    GolferResult,
    LeaderboardPlayer,
    TournamentLeaderboard,
    TournamentSummary,
    FieldPlayer,
    GolferEntryScore,
    EntryScore,
    EntryStanding,
    GridNumbers,
    ScoreChange,
    SquareWin,
    UnicornTeam,
)
from .errors import ProviderError, ProviderUnreachable, EventNotFound, NormalizationFailure
from .grid import (
    generate_grid_numbers,
    shuffle_digits,
    is_valid_permutation,
    winning_square,
    score_change_wins,
    score_change_winning_rounds,
)
from .espn_fetcher import ESPNScoreboardFetcher, normalize_event, to_state_payload
from .golf_fetcher import (
    GolfLeaderboardFetcher,
    normalize_leaderboard,
    is_major_tournament,
    filter_major_tournaments,
)
from .scoring import (
    score_golfer,
    score_entry,
    tier_for_rank,
    find_unicorn_team,
    find_best_replacement,
)
from .standings import rank_entries, build_golf_standings, save_standings_json
from .status import derive_pool_status, picks_locked, polling_interval

__all__ = [
    # Models
    'QuarterScore',
    'GameState',
    'GolferResult',
    'LeaderboardPlayer',
    'TournamentLeaderboard',
    'TournamentSummary',
    'FieldPlayer',
    'GolferEntryScore',
    'EntryScore',
    'EntryStanding',
    'GridNumbers',
    'ScoreChange',
    'SquareWin',
    'UnicornTeam',
    # Errors
    'ProviderError',
    'ProviderUnreachable',
    'EventNotFound',
    'NormalizationFailure',
    # Squares grid
    'generate_grid_numbers',
    'shuffle_digits',
    'is_valid_permutation',
    'winning_square',
    'score_change_wins',
    'score_change_winning_rounds',
    # Provider adapters
    'ESPNScoreboardFetcher',
    'normalize_event',
    'to_state_payload',
    'GolfLeaderboardFetcher',
    'normalize_leaderboard',
    'is_major_tournament',
    'filter_major_tournaments',
    # Scoring and standings
    'score_golfer',
    'score_entry',
    'tier_for_rank',
    'find_unicorn_team',
    'find_best_replacement',
    'rank_entries',
    'build_golf_standings',
    'save_standings_json',
    # Status
    'derive_pool_status',
    'picks_locked',
    'polling_interval',
]
