"""Validation functions for pick sets, grids, score logs, and normalized results."""

from typing import Optional, Sequence

from .constants import GAME_STATUSES
from .grid import is_valid_permutation, sort_score_changes
from .models import GameState, GolferResult, GridNumbers, ScoreChange
from .schemas import GolfPoolSettings
from .scoring import tier_points

# Plausible range for a single round of tournament golf
MIN_ROUND_STROKES = 55
MAX_ROUND_STROKES = 100


def tier_point_total(
    picks: Sequence[str],
    tiers: dict[str, int],
    default_tier: int = 5,
) -> int:
    """Sum of tier points across a pick set."""
    return sum(tier_points(tiers.get(golfer_id, default_tier)) for golfer_id in picks)


def validate_picks(
    picks: Sequence[str],
    tiers: dict[str, int],
    settings: Optional[GolfPoolSettings] = None,
    golfer_names: Optional[dict[str, str]] = None,
) -> list[str]:
    """
    Check an entry's pick set against the contest rules.

    Checks:
    - Exactly picks_required golfers
    - No golfer picked twice
    - Tier points within min_tier_points / max_tier_points when configured

    Args:
        picks: Golfer ids in pick order
        tiers: Golfer id -> tier
        settings: Contest rules
        golfer_names: Optional id -> name map for friendlier messages

    Returns:
        List of error messages (empty if valid)
    """
    settings = settings or GolfPoolSettings()
    golfer_names = golfer_names or {}
    errors = []

    required = settings.picks_required
    if len(picks) < required:
        missing = required - len(picks)
        errors.append(f'Need {missing} more golfer{"s" if missing != 1 else ""}')
    elif len(picks) > required:
        errors.append(f'Too many golfers selected ({len(picks)}/{required})')

    seen = set()
    duplicates = set()
    for golfer_id in picks:
        if golfer_id in seen:
            duplicates.add(golfer_names.get(golfer_id, golfer_id))
        seen.add(golfer_id)
    if duplicates:
        errors.append(f'Duplicate golfers: {", ".join(sorted(duplicates))}')

    total = tier_point_total(picks, tiers, settings.default_tier)
    if settings.min_tier_points is not None and total < settings.min_tier_points:
        needed = settings.min_tier_points - total
        errors.append(
            f'Need {needed} more tier point{"s" if needed != 1 else ""} '
            f'({total}/{settings.min_tier_points})'
        )
    if settings.max_tier_points is not None and total > settings.max_tier_points:
        errors.append(f'Tier points {total} exceed maximum of {settings.max_tier_points}')

    return errors


def validate_grid_numbers(grid: GridNumbers) -> list[str]:
    """Each grid axis must be a permutation of 0-9."""
    errors = []
    for axis, digits in (('rows', grid.rows), ('cols', grid.cols)):
        if not is_valid_permutation(digits):
            errors.append(f'Grid {axis} {list(digits)} is not a permutation of 0-9')
    return errors


def validate_golfer_result(result: GolferResult) -> list[str]:
    """
    Sanity-check a golfer's rounds.

    Warnings:
    - Round strokes outside a plausible range
    - A later round present while an earlier one is missing
    """
    warnings = []

    for number, strokes in enumerate(result.rounds, 1):
        if strokes is None:
            continue
        if not MIN_ROUND_STROKES <= strokes <= MAX_ROUND_STROKES:
            warnings.append(f'{result.golfer_id} R{number} of {strokes} strokes is implausible')

    played = [r is not None for r in result.rounds]
    if any(later and not earlier for earlier, later in zip(played, played[1:])):
        warnings.append(f'{result.golfer_id} has a gap in recorded rounds')

    return warnings


def validate_game_state(game: GameState) -> list[str]:
    """
    Check the invariants of a normalized game.

    - Status is one of the canonical game statuses
    - Cumulative quarter scores never decrease
    - Q4 is only present once the game is final
    """
    errors = []

    if game.status not in GAME_STATUSES:
        errors.append(f'Game {game.game_id} has unknown status {game.status!r}')

    previous = None
    for key, score in game.quarter_scores.items():
        if previous is not None and (score.home < previous.home or score.away < previous.away):
            errors.append(f'Game {game.game_id} cumulative score decreased at {key}')
        previous = score

    if game.q4 is not None and not game.is_final:
        errors.append(f'Game {game.game_id} has a Q4 score but is {game.status}')

    return errors


def validate_score_change(
    new_home: int,
    new_away: int,
    previous_home: int,
    previous_away: int,
    home_team: str = 'Home',
    away_team: str = 'Away',
) -> list[str]:
    """
    Check a new entry in a score-change log against the previous score.

    Rules, in order (only the first failure is reported):
    1. Neither score may decrease
    2. Only one team can score at a time
    3. At least one score must change

    Returns:
        List with at most one error message (empty if valid)
    """
    if new_home < previous_home:
        return [f'{home_team} score cannot be less than {previous_home}']
    if new_away < previous_away:
        return [f'{away_team} score cannot be less than {previous_away}']

    home_changed = new_home != previous_home
    away_changed = new_away != previous_away
    if home_changed and away_changed:
        return ['Only one team can score at a time']
    if not home_changed and not away_changed:
        return ['Score must change from the previous entry']
    return []


def validate_first_score_change(home_score: int, away_score: int) -> list[str]:
    """A score-change log always opens at 0-0."""
    if home_score != 0 or away_score != 0:
        return ['First score must be 0-0']
    return []


def validate_score_changes(
    changes: Sequence[ScoreChange],
    home_team: str = 'Home',
    away_team: str = 'Away',
) -> list[str]:
    """Check a whole score-change log, in change_order."""
    ordered = sort_score_changes(changes)
    if not ordered:
        return []

    errors = [
        f'Change {ordered[0].change_order}: {error}'
        for error in validate_first_score_change(ordered[0].home_score, ordered[0].away_score)
    ]
    for previous, change in zip(ordered, ordered[1:]):
        for error in validate_score_change(
            change.home_score,
            change.away_score,
            previous.home_score,
            previous.away_score,
            home_team,
            away_team,
        ):
            errors.append(f'Change {change.change_order}: {error}')
    return errors
