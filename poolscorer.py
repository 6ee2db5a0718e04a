#!/usr/bin/env python3
"""
Pool scoring CLI

Fetches live provider data and computes pool outputs.

Usage:
    python poolscorer.py game --sport nfl --game-id 401671889
    python poolscorer.py game --sport nfl --game-id 401671889 --grid data/grid.json
    python poolscorer.py golf --tournament-id <id> --pool data/pool.json --output standings.json
    python poolscorer.py majors --year 2026
    python poolscorer.py grid --output data/grid.json
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from poolcore.config import get_config
from poolcore.errors import EventNotFound, NormalizationFailure, ProviderUnreachable
from poolcore.espn_fetcher import ESPNScoreboardFetcher
from poolcore.golf_fetcher import GolfLeaderboardFetcher
from poolcore.grid import generate_grid_numbers, quarter_winners
from poolcore.logging_config import get_logger, setup_logging
from poolcore.schemas import GolferResultRecord, GolfPoolSnapshot, GridNumbersRecord
from poolcore.scoring import format_score_to_par
from poolcore.standings import build_golf_standings, save_standings_json
from poolcore.status import golf_event_status, polling_interval
from poolcore.utils import load_json, save_json
from poolcore.validators import validate_game_state, validate_golfer_result

logger = get_logger('poolcore.cli')


def results_from_leaderboard(leaderboard, id_map=None) -> list[GolferResultRecord]:
    """
    Convert leaderboard rows into persisted result records.

    Args:
        leaderboard: Normalized TournamentLeaderboard
        id_map: Provider player id -> pool golfer id. When given, players
            missing from the map are not in the pool and are skipped.

    Returns:
        Result records keyed by pool golfer id
    """
    records = []
    skipped = 0
    for player in leaderboard.players:
        result = player.to_golfer_result()
        if id_map is not None:
            if result.golfer_id not in id_map:
                skipped += 1
                continue
            result = replace(result, golfer_id=id_map[result.golfer_id])
        for warning in validate_golfer_result(result):
            logger.warning(warning)
        records.append(
            GolferResultRecord(
                golfer_id=result.golfer_id,
                round_1=result.round1,
                round_2=result.round2,
                round_3=result.round3,
                round_4=result.round4,
                made_cut=result.made_cut,
                position=result.position,
            )
        )
    if skipped:
        logger.debug(f'Skipped {skipped} leaderboard players not in the pool')
    return records


def run_game(args, config) -> int:
    fetcher = ESPNScoreboardFetcher(timeout=config.espn_timeout_seconds)
    game = fetcher.fetch_game(args.sport, args.game_id)

    for error in validate_game_state(game):
        logger.warning(error)

    print(f'{game.away_team} {game.away_score} @ {game.home_team} {game.home_score}')
    print(f'  Status: {game.status} (period {game.period}, {game.clock})')
    for quarter, score in game.quarter_scores.items():
        print(f'  {quarter.upper()}: home {score.home} - away {score.away}')

    if args.grid:
        grid = load_json(args.grid, schema=GridNumbersRecord).to_grid()
        for quarter, (row, col) in quarter_winners(game, grid).items():
            print(f'  {quarter.upper()} winner: row {row}, col {col}')

    print(f'  Next poll in {polling_interval(game.status, game.is_halftime)}s')
    return 0


def run_golf(args, config) -> int:
    snapshot = load_json(args.pool, schema=GolfPoolSnapshot)
    tournament_id = args.tournament_id or snapshot.tournament_id
    if not tournament_id:
        print('❌ No tournament id given and none linked in the pool file')
        return 1

    fetcher = GolfLeaderboardFetcher(
        base_url=config.sportradar_base_url, timeout=config.golf_timeout_seconds
    )
    leaderboard = fetcher.get_leaderboard(tournament_id)
    snapshot.results = results_from_leaderboard(leaderboard, snapshot.external_id_map())

    settings = config.golf
    standings = build_golf_standings(snapshot, settings)
    entry_par = settings.par_per_round * 4 * settings.counted_golfers

    print(f'{leaderboard.name} ({golf_event_status(leaderboard)})')
    print('=' * 60)
    for standing in standings:
        rank = f'T{standing.rank}' if standing.tied else str(standing.rank)
        score = '-' if standing.score is None else standing.score
        to_par = ''
        if standing.score is not None:
            to_par = f' ({format_score_to_par(standing.score, entry_par)})'
        print(f'  {rank:>4}. {standing.entry_name or standing.entry_id}: {score}{to_par}')

    if args.output:
        save_standings_json(args.output, standings, tournament_id)
        print(f'Standings saved to {args.output}')
    return 0


def run_majors(args, config) -> int:
    fetcher = GolfLeaderboardFetcher(
        base_url=config.sportradar_base_url, timeout=config.golf_timeout_seconds
    )
    for tournament in fetcher.get_major_tournaments(args.year):
        print(f'  {tournament.start_date}  {tournament.name} [{tournament.status}] {tournament.tournament_id}')
    return 0


def run_grid(args, config) -> int:
    grid = generate_grid_numbers()
    print(f'Rows: {list(grid.rows)}')
    print(f'Cols: {list(grid.cols)}')
    if args.output:
        save_json(args.output, GridNumbersRecord(rows=list(grid.rows), cols=list(grid.cols)))
        print(f'Grid saved to {args.output}')
    return 0


def main():
    parser = argparse.ArgumentParser(description="Pool scoring from live sports data")
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--trace-http",
        action="store_true",
        help="Log every provider request, independent of --verbose",
    )
    parser.add_argument(
        "--log-dir",
        default=None,
        help="Directory for log files (file logging is off when omitted)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    game_parser = subparsers.add_parser("game", help="Show the normalized state of a game")
    game_parser.add_argument("--sport", "-s", default="nfl", choices=["nfl", "ncaa_fb", "ncaa_bb"])
    game_parser.add_argument("--game-id", "-g", required=True, help="ESPN event id")
    game_parser.add_argument("--grid", default=None, help="Grid digits JSON for winner lookup")

    golf_parser = subparsers.add_parser("golf", help="Compute golf pool standings")
    golf_parser.add_argument("--tournament-id", "-t", default=None, help="Sportradar tournament id")
    golf_parser.add_argument("--pool", "-p", required=True, help="Pool snapshot JSON")
    golf_parser.add_argument("--output", "-o", default=None, help="Output path for standings JSON")

    majors_parser = subparsers.add_parser("majors", help="List major championships for a season")
    majors_parser.add_argument("--year", "-y", type=int, required=True)

    grid_parser = subparsers.add_parser("grid", help="Draw squares grid digits")
    grid_parser.add_argument("--output", "-o", default=None, help="Output path for grid JSON")

    args = parser.parse_args()

    setup_logging(
        log_dir=Path(args.log_dir) if args.log_dir else None,
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_to_file=bool(args.log_dir),
        provider_level=logging.DEBUG if args.trace_http else None,
    )
    config = get_config()

    commands = {
        "game": run_game,
        "golf": run_golf,
        "majors": run_majors,
        "grid": run_grid,
    }

    try:
        sys.exit(commands[args.command](args, config))
    except ProviderUnreachable as e:
        print(f"❌ Data temporarily unavailable: {e}")
        sys.exit(2)
    except EventNotFound as e:
        print(f"❌ {e}")
        sys.exit(3)
    except NormalizationFailure as e:
        print(f"❌ Provider data could not be read: {e}")
        sys.exit(4)


if __name__ == "__main__":
    main()
