"""Unit tests for validation functions."""

from poolcore.models import GameState, GolferResult, GridNumbers, QuarterScore, ScoreChange
from poolcore.schemas import GolfPoolSettings
from poolcore.validators import (
    tier_point_total,
    validate_game_state,
    validate_golfer_result,
    validate_grid_numbers,
    validate_first_score_change,
    validate_picks,
    validate_score_change,
    validate_score_changes,
)

TIERS = {'g1': 1, 'g2': 2, 'g3': 3, 'g4': 4, 'g5': 5, 'g6': 6, 'elite': 0}


class TestPickValidation:
    """Tests for entry pick sets."""

    def test_valid_picks(self):
        """Test six distinct golfers worth 21 tier points pass."""
        assert validate_picks(['g1', 'g2', 'g3', 'g4', 'g5', 'g6'], TIERS) == []

    def test_too_few_golfers(self):
        errors = validate_picks(['g4', 'g5', 'g6', 'g6', 'g6'], TIERS)
        assert 'Need 1 more golfer' in errors

    def test_too_many_golfers(self):
        picks = ['g1', 'g2', 'g3', 'g4', 'g5', 'g6', 'elite']
        errors = validate_picks(picks, TIERS)
        assert 'Too many golfers selected (7/6)' in errors

    def test_duplicates_use_names(self):
        """Test duplicate picks are reported by golfer name."""
        errors = validate_picks(
            ['g6', 'g6', 'g5', 'g4', 'g3', 'g2'],
            TIERS,
            golfer_names={'g6': 'Golfer Six'},
        )
        assert 'Duplicate golfers: Golfer Six' in errors

    def test_below_minimum_tier_points(self):
        """Test a stacked roster of top-tier golfers is rejected."""
        picks = ['elite', 'g1', 'g1b', 'g2', 'g3', 'g4']
        errors = validate_picks(picks, {**TIERS, 'g1b': 1})
        assert 'Need 10 more tier points (11/21)' in errors

    def test_maximum_tier_points(self):
        settings = GolfPoolSettings(min_tier_points=None, max_tier_points=20)
        errors = validate_picks(['g1', 'g2', 'g3', 'g4', 'g5', 'g6'], TIERS, settings)
        assert errors == ['Tier points 21 exceed maximum of 20']

    def test_unknown_golfer_uses_default_tier(self):
        assert tier_point_total(['mystery'], {}) == 5


class TestGridValidation:
    """Tests for grid digits."""

    def test_valid_grid(self):
        grid = GridNumbers(rows=tuple(range(10)), cols=tuple(reversed(range(10))))
        assert validate_grid_numbers(grid) == []

    def test_invalid_axis(self):
        grid = GridNumbers(rows=(1,) * 10, cols=tuple(range(10)))
        errors = validate_grid_numbers(grid)
        assert len(errors) == 1
        assert 'rows' in errors[0]


class TestGolferResultValidation:
    """Tests for golfer round sanity checks."""

    def test_clean_result(self):
        assert validate_golfer_result(GolferResult(golfer_id='g1', round1=68, round2=71)) == []

    def test_implausible_round(self):
        warnings = validate_golfer_result(GolferResult(golfer_id='g1', round1=7))
        assert warnings == ['g1 R1 of 7 strokes is implausible']

    def test_round_gap(self):
        warnings = validate_golfer_result(GolferResult(golfer_id='g1', round1=70, round3=72))
        assert warnings == ['g1 has a gap in recorded rounds']


class TestGameStateValidation:
    """Tests for normalized game invariants."""

    def test_valid_game(self):
        game = GameState(
            game_id='1',
            home_team='Home',
            away_team='Away',
            status='final',
            q1=QuarterScore(7, 0),
            q2=QuarterScore(14, 3),
            q3=QuarterScore(14, 10),
            q4=QuarterScore(21, 17),
        )
        assert validate_game_state(game) == []

    def test_decreasing_score(self):
        game = GameState(
            game_id='1',
            home_team='Home',
            away_team='Away',
            status='in_progress',
            q1=QuarterScore(7, 0),
            q2=QuarterScore(3, 3),
        )
        assert validate_game_state(game) == ['Game 1 cumulative score decreased at q2']

    def test_unknown_status(self):
        game = GameState(game_id='1', home_team='Home', away_team='Away', status='halftime')
        assert validate_game_state(game) == ["Game 1 has unknown status 'halftime'"]

    def test_q4_before_final(self):
        game = GameState(
            game_id='1',
            home_team='Home',
            away_team='Away',
            status='in_progress',
            q4=QuarterScore(21, 17),
        )
        assert validate_game_state(game) == ['Game 1 has a Q4 score but is in_progress']


class TestScoreChangeValidation:
    """Tests for score-change log rules."""

    def test_valid_change(self):
        assert validate_score_change(7, 0, 0, 0) == []
        assert validate_score_change(7, 3, 7, 0) == []

    def test_score_decreased(self):
        assert validate_score_change(6, 0, 7, 0, home_team='Chiefs') == [
            'Chiefs score cannot be less than 7'
        ]
        assert validate_score_change(7, 0, 7, 3) == ['Away score cannot be less than 3']

    def test_both_teams_scored(self):
        assert validate_score_change(7, 3, 0, 0) == ['Only one team can score at a time']

    def test_unchanged(self):
        assert validate_score_change(7, 3, 7, 3) == ['Score must change from the previous entry']

    def test_decrease_reported_before_other_rules(self):
        """Only the first failing rule is reported."""
        assert validate_score_change(3, 10, 7, 0) == ['Home score cannot be less than 7']

    def test_first_change(self):
        assert validate_first_score_change(0, 0) == []
        assert validate_first_score_change(0, 3) == ['First score must be 0-0']

    def test_whole_log(self):
        """The log is checked in change order."""
        changes = [
            ScoreChange(7, 3, 3),
            ScoreChange(7, 0, 2),
            ScoreChange(0, 0, 1),
        ]
        assert validate_score_changes(changes) == []

    def test_whole_log_errors(self):
        changes = [
            ScoreChange(3, 0, 1),
            ScoreChange(10, 7, 2),
            ScoreChange(10, 7, 3),
        ]
        assert validate_score_changes(changes, home_team='Eagles') == [
            'Change 1: First score must be 0-0',
            'Change 2: Only one team can score at a time',
            'Change 3: Score must change from the previous entry',
        ]

    def test_empty_log(self):
        assert validate_score_changes([]) == []
