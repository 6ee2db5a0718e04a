"""Standings ranking and assembly for golf pools."""

from dataclasses import asdict, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Sequence

from .models import EntryStanding, GolferEntryScore
from .schemas import GolfPoolSettings, GolfPoolSnapshot
from .scoring import score_entry, score_result, worst_field_round
from .utils import save_json


def rank_entries(entries: Sequence[EntryStanding]) -> list[EntryStanding]:
    """
    Sort entries by score and assign competition ranks.

    Lower scores rank first. Tied scores share a rank and the next distinct
    score resumes at its 1-indexed position (1, 1, 3). Entries without a
    score sort last (in input order), get rank len(entries) + 1 and are
    never marked tied.

    Example:
        scores [68, 68, 70, None] -> ranks [1, 1, 3, 5], tied [T, T, F, F]
    """
    ordered = sorted(entries, key=lambda e: (e.score is None, e.score if e.score is not None else 0))

    score_counts: dict[int, int] = {}
    for entry in ordered:
        if entry.score is not None:
            score_counts[entry.score] = score_counts.get(entry.score, 0) + 1

    unranked = len(ordered) + 1
    current_rank = 1
    ranked = []
    for index, entry in enumerate(ordered):
        if entry.score is None:
            ranked.append(replace(entry, rank=unranked, tied=False))
            continue

        if index > 0 and entry.score != ordered[index - 1].score:
            current_rank = index + 1

        ranked.append(replace(entry, rank=current_rank, tied=score_counts[entry.score] > 1))

    return ranked


def build_golf_standings(
    snapshot: GolfPoolSnapshot,
    settings: Optional[GolfPoolSettings] = None,
) -> list[EntryStanding]:
    """
    Compute ranked standings for every entry in a golf pool.

    Picks without a result record stay unscored, which keeps their entry
    incomplete. Picks without a tier assignment are charged the default tier.

    Args:
        snapshot: Entries, picks, tiers and golfer results read from storage
        settings: Contest rules (default: GolfPoolSettings())

    Returns:
        Ranked standings, best first
    """
    settings = settings or GolfPoolSettings()
    names = snapshot.golfer_names()
    tiers = snapshot.tier_map()
    results = {gid: record.to_result(names.get(gid, '')) for gid, record in snapshot.result_map().items()}

    field_worst = None
    if settings.missed_cut_policy == 'worst_field_round':
        field_worst = worst_field_round(results.values())

    standings = []
    for entry in snapshot.entries:
        golfer_scores = []
        for golfer_id in entry.picks:
            result = results.get(golfer_id)
            score = GolferEntryScore(
                golfer_id=golfer_id,
                golfer_name=names.get(golfer_id, 'Unknown'),
                tier=tiers.get(golfer_id, settings.default_tier),
            )
            if result is not None:
                score.rounds = result.rounds
                score.made_cut = result.made_cut
                score.total_score = score_result(result, settings, field_worst)
            golfer_scores.append(score)

        entry_score = score_entry(golfer_scores, settings)
        standings.append(
            EntryStanding(
                entry_id=entry.entry_id,
                score=entry_score.total_score,
                entry_name=entry.entry_name,
                user_name=entry.user_name,
                counted_golfers=entry_score.counted_golfers,
                dropped_golfers=entry_score.dropped_golfers,
            )
        )

    return rank_entries(standings)


def standings_to_dict(standings: Sequence[EntryStanding]) -> list[dict[str, Any]]:
    """Plain-dict form of standings for JSON output."""
    rows = []
    for standing in standings:
        row = asdict(standing)
        for key in ('counted_golfers', 'dropped_golfers'):
            for golfer in row[key]:
                golfer['rounds'] = list(golfer['rounds'])
        rows.append(row)
    return rows


def save_standings_json(
    standings_path: str | Path,
    standings: Sequence[EntryStanding],
    tournament_id: Optional[str] = None,
) -> None:
    """Write ranked standings with an updated_at timestamp."""
    save_json(
        standings_path,
        {
            'updated_at': datetime.now(timezone.utc).isoformat(),
            'tournament_id': tournament_id,
            'standings': standings_to_dict(standings),
        },
    )
