"""Squares grid digit generation and winning-square lookup.

Each axis of a 10x10 squares grid is labeled with a random permutation of
the digits 0-9. The random source is always injectable so the shuffle can be
checked against fixed sequences.
"""

import math
import random
from collections import defaultdict
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .constants import (
    GRID_DIGITS,
    SCORE_CHANGE_FINAL_REVERSE_WIN,
    SCORE_CHANGE_FINAL_WIN,
    SCORE_CHANGE_REVERSE_WIN,
    SCORE_CHANGE_ROUND_RANKS,
    SCORE_CHANGE_WIN,
)
from .models import GameState, GridNumbers, ScoreChange, SquareWin

RandomFn = Callable[[], float]

_system_random = random.SystemRandom()


def shuffle_digits(values: Sequence[int], rng: Optional[RandomFn] = None) -> list[int]:
    """
    Return a shuffled copy of ``values`` using the Fisher-Yates algorithm.

    Walks index i from the last position down to 1, draws
    j = floor(rng() * (i + 1)) and swaps positions i and j. A sequence of
    length n consumes exactly n - 1 draws. The input is never mutated.

    Args:
        values: Sequence to shuffle
        rng: Callable returning floats in [0, 1) (default: system random)

    Returns:
        New list holding a permutation of ``values``

    Raises:
        ValueError: If rng returns a value outside [0, 1)
    """
    draw = rng or _system_random.random
    result = list(values)
    for i in range(len(result) - 1, 0, -1):
        sample = draw()
        if not 0 <= sample < 1:
            raise ValueError(f'Random source returned {sample}, expected a value in [0, 1)')
        j = math.floor(sample * (i + 1))
        result[i], result[j] = result[j], result[i]
    return result


def generate_grid_numbers(rng: Optional[RandomFn] = None) -> GridNumbers:
    """
    Generate row and column labels for a squares grid.

    Rows are shuffled first, then columns, from the same random source.

    Example:
        draws = iter([0.5] * 18)
        grid = generate_grid_numbers(lambda: next(draws))
    """
    rows = shuffle_digits(GRID_DIGITS, rng)
    cols = shuffle_digits(GRID_DIGITS, rng)
    return GridNumbers(rows=tuple(rows), cols=tuple(cols))


def is_valid_permutation(values: Sequence[int]) -> bool:
    """True iff ``values`` holds exactly the digits 0-9 once each."""
    if len(values) != 10:
        return False
    return sorted(values) == GRID_DIGITS


def winning_square(
    home_score: int,
    away_score: int,
    grid: GridNumbers,
    reverse: bool = False,
) -> Tuple[int, int]:
    """
    Locate the winning square for a score using last-digit matching.

    Forward: row digit = home % 10, column digit = away % 10.
    Reverse: row digit = away % 10, column digit = home % 10.

    Returns:
        (row_index, col_index) into the grid

    Raises:
        ValueError: If either axis is not a valid digit permutation
    """
    if not (is_valid_permutation(grid.rows) and is_valid_permutation(grid.cols)):
        raise ValueError('Grid digits are not valid permutations of 0-9')

    home_digit = home_score % 10
    away_digit = away_score % 10
    row_digit, col_digit = (away_digit, home_digit) if reverse else (home_digit, away_digit)
    return grid.rows.index(row_digit), grid.cols.index(col_digit)


def quarter_winners(game: GameState, grid: GridNumbers) -> Dict[str, Tuple[int, int]]:
    """Forward winning square for every materialized quarter of a game."""
    return {
        quarter: winning_square(score.home, score.away, grid)
        for quarter, score in game.quarter_scores.items()
    }


def winning_squares(
    home_score: int, away_score: int, grid: GridNumbers
) -> Tuple[Tuple[int, int], Tuple[int, int]]:
    """Forward and reverse winning squares for a score."""
    return (
        winning_square(home_score, away_score, grid),
        winning_square(home_score, away_score, grid, reverse=True),
    )


def sort_score_changes(changes: Iterable[ScoreChange]) -> List[ScoreChange]:
    """Score changes in log order (ascending change_order)."""
    return sorted(changes, key=lambda change: change.change_order)


def get_last_score(changes: Sequence[ScoreChange]) -> Tuple[int, int]:
    """(home, away) of the latest score change, or (0, 0) for an empty log."""
    if not changes:
        return 0, 0
    last = max(changes, key=lambda change: change.change_order)
    return last.home_score, last.away_score


def score_change_wins(
    changes: Iterable[ScoreChange],
    grid: GridNumbers,
    is_final: bool = False,
    reverse_scoring: bool = True,
) -> List[SquareWin]:
    """
    Winning squares for a score-change squares game.

    Every score change wins its forward square, and its reverse square when
    reverse scoring is on. Once the game is final the last score also wins
    the final bonus (forward and, with reverse scoring, reverse).

    Args:
        changes: Score change log in any order
        grid: Row and column digits
        is_final: Whether the game has ended
        reverse_scoring: Whether reverse squares also win

    Returns:
        Wins in log order, final wins last
    """
    ordered = sort_score_changes(changes)
    wins = []
    for change in ordered:
        forward, reverse = winning_squares(change.home_score, change.away_score, grid)
        wins.append(
            SquareWin(SCORE_CHANGE_WIN, *forward, change.home_score, change.away_score, change.change_order)
        )
        if reverse_scoring:
            wins.append(
                SquareWin(
                    SCORE_CHANGE_REVERSE_WIN, *reverse, change.home_score, change.away_score, change.change_order
                )
            )

    if is_final and ordered:
        home, away = get_last_score(ordered)
        forward, reverse = winning_squares(home, away, grid)
        wins.append(SquareWin(SCORE_CHANGE_FINAL_WIN, *forward, home, away))
        if reverse_scoring:
            wins.append(SquareWin(SCORE_CHANGE_FINAL_REVERSE_WIN, *reverse, home, away))
    return wins


def _round_label(forward: bool, reverse: bool, final: bool) -> Optional[str]:
    prefix = 'score_change_final' if final else 'score_change'
    if forward and reverse:
        return f'{prefix}_both'
    if forward:
        return prefix if final else f'{prefix}_forward'
    if reverse:
        return f'{prefix}_reverse'
    return None


def score_change_winning_rounds(wins: Iterable[SquareWin]) -> Dict[Tuple[int, int], str]:
    """
    Display round for every winning square of a score-change game.

    A square that won both forward and reverse is marked ``_both``. Final
    bonus rounds outrank regular score-change rounds.

    Example:
        {(3, 9): 'score_change_both', (1, 2): 'score_change_final'}
    """
    win_types = defaultdict(set)
    for win in wins:
        win_types[win.square].add(win.win_type)

    rounds = {}
    for square, types in win_types.items():
        labels = [
            _round_label(SCORE_CHANGE_FINAL_WIN in types, SCORE_CHANGE_FINAL_REVERSE_WIN in types, final=True),
            _round_label(SCORE_CHANGE_WIN in types, SCORE_CHANGE_REVERSE_WIN in types, final=False),
        ]
        labels = [label for label in labels if label]
        if labels:
            rounds[square] = max(labels, key=SCORE_CHANGE_ROUND_RANKS.__getitem__)
    return rounds
