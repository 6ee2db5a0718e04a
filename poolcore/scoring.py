"""Golfer and entry scoring for best-ball golf pools.

Golf scoring is ascending: fewer strokes is better.

Golfer scoring:
    - Made the cut: sum of rounds played so far (missing rounds are skipped)
    - Missed the cut: rounds played plus a penalty for every missing round
    - No rounds played and no cut decision: not scoreable yet (None)

Entry scoring:
    - Best N of M picks count (default 4 of 6)
    - Entry total is None until all M picks have a score

The unicorn team is the best legal pick set in hindsight, found by walking
tier combinations rather than every pick set.
"""

import itertools
import logging
from collections import Counter, defaultdict
from dataclasses import replace
from typing import Collection, Iterable, Optional, Sequence

from .constants import (
    ELITE_TIER,
    TIER_RANGES,
    UNRANKED_TIER,
)
from .models import EntryScore, GolferEntryScore, GolferResult, UnicornTeam
from .schemas import GolferRecord, GolfPoolSettings

logger = logging.getLogger('poolcore.scoring')


def missed_cut_penalty(
    played: Sequence[int],
    settings: Optional[GolfPoolSettings] = None,
    field_worst_round: Optional[int] = None,
) -> int:
    """
    Strokes charged for each round a cut golfer did not play.

    Policies:
        - fixed_round: the configured round score (default 80)
        - worst_round: the golfer's own worst played round
        - worst_field_round: the worst round in the field, supplied by the caller

    Policies that lack their input fall back to the fixed round score.
    """
    settings = settings or GolfPoolSettings()
    fixed = settings.missed_cut_round_score
    if settings.missed_cut_policy == 'worst_round' and played:
        return max(played)
    if settings.missed_cut_policy == 'worst_field_round' and field_worst_round is not None:
        return field_worst_round
    return fixed


def score_golfer(
    rounds: Sequence[Optional[int]],
    made_cut: bool,
    settings: Optional[GolfPoolSettings] = None,
    field_worst_round: Optional[int] = None,
) -> Optional[int]:
    """
    Total strokes for one golfer.

    Args:
        rounds: Strokes for R1-R4, None where a round has not been played
        made_cut: False once the golfer is cut, withdrawn or disqualified
        settings: Contest rules (missed-cut policy)
        field_worst_round: Worst completed round in the field, for the
            worst_field_round policy

    Returns:
        Total strokes, or None when a made-cut golfer has no rounds yet
    """
    played = [r for r in rounds if r is not None]

    if made_cut:
        return sum(played) if played else None

    missing = sum(1 for r in rounds if r is None)
    penalty = missed_cut_penalty(played, settings, field_worst_round)
    return sum(played) + missing * penalty


def score_result(
    result: GolferResult,
    settings: Optional[GolfPoolSettings] = None,
    field_worst_round: Optional[int] = None,
) -> Optional[int]:
    """Score a GolferResult record."""
    return score_golfer(result.rounds, result.made_cut, settings, field_worst_round)


def worst_field_round(results: Iterable[GolferResult]) -> Optional[int]:
    """Highest single-round score among all completed rounds."""
    played = [r for result in results for r in result.rounds if r is not None]
    return max(played) if played else None


def score_entry(
    golfer_scores: Sequence[GolferEntryScore],
    settings: Optional[GolfPoolSettings] = None,
) -> EntryScore:
    """
    Aggregate an entry using best-N-of-M.

    Scored golfers are sorted ascending (ties keep pick order); the best N
    are counted and the rest dropped. Unscored golfers are always dropped.
    The total is only reported once at least M golfers have a score.

    Returns:
        EntryScore with total_score None for an incomplete entry
    """
    settings = settings or GolfPoolSettings()

    scored = sorted(
        (g for g in golfer_scores if g.total_score is not None), key=lambda g: g.total_score
    )
    unscored = [g for g in golfer_scores if g.total_score is None]

    counted = [replace(g, counted=True) for g in scored[: settings.counted_golfers]]
    dropped = [replace(g, counted=False) for g in scored[settings.counted_golfers:] + unscored]

    if len(scored) < settings.picks_required:
        logger.debug(
            f'Entry incomplete: {len(scored)}/{settings.picks_required} golfers scored'
        )
        return EntryScore(total_score=None, counted_golfers=counted, dropped_golfers=dropped)

    total = sum(g.total_score for g in counted)
    return EntryScore(total_score=total, counted_golfers=counted, dropped_golfers=dropped)


def tier_for_rank(rank: Optional[int]) -> int:
    """
    Tier for an official world ranking.

    OWGR bands: 1-15 -> 1, 16-40 -> 2, 41-75 -> 3, 76-125 -> 4,
    126-200 -> 5, everything else (including unranked) -> 6.
    """
    if not rank:
        return UNRANKED_TIER
    for tier, min_rank, max_rank in TIER_RANGES:
        if min_rank <= rank <= max_rank:
            return tier
    return UNRANKED_TIER


def tier_points(tier: int) -> int:
    """Points a pick of this tier costs against the entry budget."""
    return max(tier, ELITE_TIER)


def assign_tiers(
    rankings: dict[str, Optional[int]],
    overrides: Optional[dict[str, int]] = None,
) -> dict[str, int]:
    """
    Tier for every golfer from world rankings, with manual overrides.

    Overrides win, which is how elite tier 0 is assigned.
    """
    tiers = {golfer_id: tier_for_rank(rank) for golfer_id, rank in rankings.items()}
    tiers.update(overrides or {})
    return tiers


def format_score_to_par(score: int, par: int = 72 * 4) -> str:
    """Format strokes relative to par: 'E', '+3', '-8'."""
    diff = score - par
    if diff == 0:
        return 'E'
    if diff > 0:
        return f'+{diff}'
    return str(diff)


def format_round_score(score: Optional[int]) -> str:
    return '-' if score is None else str(score)


def valid_tier_multisets(settings: Optional[GolfPoolSettings] = None) -> list[tuple[int, ...]]:
    """
    Every tier combination (with repetition) a legal pick set can have.

    Combinations hold picks_required tiers in nondecreasing order and are
    kept when their tier points satisfy min_tier_points / max_tier_points.
    """
    settings = settings or GolfPoolSettings()
    minimum = settings.min_tier_points or 0
    maximum = settings.max_tier_points

    multisets = []
    tiers = range(ELITE_TIER, UNRANKED_TIER + 1)
    for combo in itertools.combinations_with_replacement(tiers, settings.picks_required):
        points = sum(tier_points(tier) for tier in combo)
        if points < minimum or (maximum is not None and points > maximum):
            continue
        multisets.append(combo)
    return multisets


def find_unicorn_team(
    golfers: Iterable[GolferEntryScore],
    settings: Optional[GolfPoolSettings] = None,
) -> Optional[UnicornTeam]:
    """
    Find the best possible pick set in hindsight.

    Rather than trying every pick set, walks the legal tier multisets: for
    each one the best team takes the lowest-scoring golfers of every tier
    it uses. Teams are scored with the pool's best-N-of-M rule. The first
    team reaching the best total is returned; the others that tie it are
    counted in alternative_count.

    Args:
        golfers: Field golfers with tier and total_score set; unscored
            golfers are ignored
        settings: Contest rules

    Returns:
        UnicornTeam (counted golfers first), or None when no legal pick
        set can be built from the scored field
    """
    settings = settings or GolfPoolSettings()

    by_tier = defaultdict(list)
    for golfer in golfers:
        if golfer.total_score is not None:
            by_tier[golfer.tier].append(golfer)
    for tier_golfers in by_tier.values():
        tier_golfers.sort(key=lambda g: g.total_score)

    best = None
    best_points = 0
    ties = 0
    for multiset in valid_tier_multisets(settings):
        counts = Counter(multiset)
        if any(len(by_tier[tier]) < count for tier, count in counts.items()):
            continue

        team = [g for tier, count in counts.items() for g in by_tier[tier][:count]]
        entry = score_entry(team, settings)
        if best is None or entry.total_score < best.total_score:
            best = entry
            best_points = sum(tier_points(tier) for tier in multiset)
            ties = 1
        elif entry.total_score == best.total_score:
            ties += 1

    if best is None:
        logger.debug('No legal pick set can be built from the scored field')
        return None

    return UnicornTeam(
        golfers=best.counted_golfers + best.dropped_golfers,
        total_score=best.total_score,
        total_tier_points=best_points,
        alternative_count=ties - 1,
    )


def find_best_replacement(
    golfers: Iterable[GolferRecord],
    tiers: dict[str, int],
    tier: int,
    exclude_ids: Collection[str],
    active_ids: Optional[Collection[str]] = None,
) -> Optional[GolferRecord]:
    """
    Best available golfer to replace a withdrawn pick.

    Candidates sit in the same tier, are not excluded (the entry's other
    picks and the withdrawn golfer) and are still active in the field.
    The best world ranking wins; unranked golfers come last.

    Args:
        golfers: Pool golfers
        tiers: Golfer id -> tier
        tier: Tier of the withdrawn golfer
        exclude_ids: Golfer ids that cannot be picked
        active_ids: Golfer ids still in the field (default: everyone)

    Returns:
        The replacement, or None if the tier has no one left
    """
    candidates = [
        g for g in golfers
        if tiers.get(g.golfer_id) == tier
        and g.golfer_id not in exclude_ids
        and (active_ids is None or g.golfer_id in active_ids)
    ]
    candidates.sort(key=lambda g: (g.owgr_rank is None, g.owgr_rank or 0))
    return candidates[0] if candidates else None
