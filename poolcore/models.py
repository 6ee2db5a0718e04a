"""Canonical records produced by the provider adapters and the scoring core."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .constants import ELIMINATED_STATUSES


@dataclass(frozen=True)
class QuarterScore:
    """Cumulative score for both teams at the end of a quarter."""
    home: int
    away: int


@dataclass
class GameState:
    """Normalized live state of a team-sport game."""
    game_id: str
    home_team: str
    away_team: str
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    status: str = 'scheduled'  # scheduled | in_progress | final | cancelled
    period: int = 0
    clock: str = ''
    is_halftime: bool = False
    q1: Optional[QuarterScore] = None
    q2: Optional[QuarterScore] = None
    q3: Optional[QuarterScore] = None
    q4: Optional[QuarterScore] = None

    @property
    def is_final(self) -> bool:
        return self.status == 'final'

    @property
    def quarter_scores(self) -> Dict[str, QuarterScore]:
        """Materialized cumulative quarter scores keyed 'q1'..'q4'."""
        quarters = {'q1': self.q1, 'q2': self.q2, 'q3': self.q3, 'q4': self.q4}
        return {key: value for key, value in quarters.items() if value is not None}


@dataclass
class GolferResult:
    """Per-golfer tournament result used for pool scoring."""
    golfer_id: str
    round1: Optional[int] = None
    round2: Optional[int] = None
    round3: Optional[int] = None
    round4: Optional[int] = None
    made_cut: bool = True  # true until a cut determination exists
    name: str = ''
    position: Optional[str] = None

    @property
    def rounds(self) -> Tuple[Optional[int], Optional[int], Optional[int], Optional[int]]:
        return (self.round1, self.round2, self.round3, self.round4)


@dataclass
class LeaderboardPlayer:
    """One row of a normalized golf leaderboard."""
    player_id: str
    first_name: str
    last_name: str
    position: str = '-'
    tied: bool = False
    rounds: Dict[int, Optional[int]] = field(default_factory=dict)
    total_strokes: Optional[int] = None
    to_par: Optional[int] = None
    thru: Optional[int] = None
    status: str = 'active'  # active | cut | withdrawn | disqualified

    @property
    def name(self) -> str:
        return f'{self.first_name} {self.last_name}'.strip()

    @property
    def made_cut(self) -> bool:
        return self.status not in ELIMINATED_STATUSES

    def round_strokes(self, round_number: int) -> Optional[int]:
        return self.rounds.get(round_number)

    def to_golfer_result(self) -> GolferResult:
        """Project this leaderboard row onto the scoring input record."""
        return GolferResult(
            golfer_id=self.player_id,
            round1=self.round_strokes(1),
            round2=self.round_strokes(2),
            round3=self.round_strokes(3),
            round4=self.round_strokes(4),
            made_cut=self.made_cut,
            name=self.name,
            position=self.position,
        )


@dataclass
class TournamentLeaderboard:
    """Normalized leaderboard for a golf tournament."""
    tournament_id: str
    name: str
    status: str = 'upcoming'  # upcoming | in_progress | completed
    current_round: Optional[int] = None
    players: List[LeaderboardPlayer] = field(default_factory=list)

    def golfer_results(self) -> Dict[str, GolferResult]:
        return {p.player_id: p.to_golfer_result() for p in self.players}


@dataclass
class TournamentSummary:
    """Schedule entry for a golf tournament."""
    tournament_id: str
    name: str
    start_date: str = ''
    end_date: str = ''
    venue_name: Optional[str] = None
    course_name: Optional[str] = None
    status: str = 'upcoming'


@dataclass
class FieldPlayer:
    """Golfer entered in a tournament field."""
    player_id: str
    first_name: str
    last_name: str
    country: str = ''
    status: str = 'active'

    @property
    def full_name(self) -> str:
        return f'{self.first_name} {self.last_name}'.strip()


@dataclass
class GolferEntryScore:
    """A picked golfer's score inside an entry."""
    golfer_id: str
    golfer_name: str = ''
    tier: int = 0
    rounds: Tuple[Optional[int], ...] = (None, None, None, None)
    made_cut: bool = True
    total_score: Optional[int] = None
    counted: bool = False


@dataclass
class EntryScore:
    """Best-N-of-M aggregate for one entry."""
    total_score: Optional[int]
    counted_golfers: List[GolferEntryScore] = field(default_factory=list)
    dropped_golfers: List[GolferEntryScore] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return self.total_score is not None


@dataclass
class EntryStanding:
    """Ranked standing row, recomputed on every request."""
    entry_id: str
    score: Optional[int]
    entry_name: Optional[str] = None
    user_name: Optional[str] = None
    rank: int = 0
    tied: bool = False
    counted_golfers: List[GolferEntryScore] = field(default_factory=list)
    dropped_golfers: List[GolferEntryScore] = field(default_factory=list)

    @property
    def golfer_scores(self) -> List[GolferEntryScore]:
        return self.counted_golfers + self.dropped_golfers


@dataclass(frozen=True)
class GridNumbers:
    """Row and column digit labels for a 10x10 squares grid."""
    rows: Tuple[int, ...]
    cols: Tuple[int, ...]


@dataclass(frozen=True)
class ScoreChange:
    """One entry in a score-change squares game log."""
    home_score: int
    away_score: int
    change_order: int


@dataclass(frozen=True)
class SquareWin:
    """A square that won on a score."""
    win_type: str  # score_change | score_change_reverse | score_change_final | score_change_final_reverse
    row_index: int
    col_index: int
    home_score: int
    away_score: int
    change_order: Optional[int] = None

    @property
    def square(self) -> Tuple[int, int]:
        return (self.row_index, self.col_index)


@dataclass
class UnicornTeam:
    """Best possible pick set in hindsight for a golf pool."""
    golfers: List[GolferEntryScore]
    total_score: int
    total_tier_points: int
    alternative_count: int = 0  # other pick sets reaching the same score

    @property
    def counted_golfers(self) -> List[GolferEntryScore]:
        return [g for g in self.golfers if g.counted]
