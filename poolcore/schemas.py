"""Pydantic schemas for configuration and persisted pool records."""

from pydantic import BaseModel, Field, field_validator, model_validator

from .constants import (
    DEFAULT_COUNTED_GOLFERS,
    DEFAULT_MISSED_CUT_ROUND_SCORE,
    DEFAULT_PAR_PER_ROUND,
    DEFAULT_PICKS_REQUIRED,
    MISSED_CUT_POLICIES,
    SPORTRADAR_BASE_URL,
)
from .grid import is_valid_permutation
from .models import GolferResult, GridNumbers


class GolfPoolSettings(BaseModel):
    """Contest rules for a golf best-ball pool."""

    picks_required: int = Field(default=DEFAULT_PICKS_REQUIRED, ge=1, le=20)
    counted_golfers: int = Field(default=DEFAULT_COUNTED_GOLFERS, ge=1, le=20)
    missed_cut_policy: str = 'fixed_round'
    missed_cut_round_score: int = Field(default=DEFAULT_MISSED_CUT_ROUND_SCORE, ge=0, le=200)
    max_tier_points: int | None = Field(default=None, ge=0)
    min_tier_points: int | None = Field(default=21, ge=0)
    default_tier: int = Field(default=5, ge=0, le=6)
    par_per_round: int = Field(default=DEFAULT_PAR_PER_ROUND, ge=60, le=80)

    @field_validator('missed_cut_policy')
    @classmethod
    def validate_policy(cls, v):
        if v not in MISSED_CUT_POLICIES:
            raise ValueError(f'missed_cut_policy must be one of {MISSED_CUT_POLICIES}, got {v!r}')
        return v

    @model_validator(mode='after')
    def validate_counts(self):
        """Counted golfers must be a subset of the pick set."""
        if self.counted_golfers > self.picks_required:
            raise ValueError(
                f'counted_golfers ({self.counted_golfers}) exceeds '
                f'picks_required ({self.picks_required})'
            )
        if (
            self.min_tier_points is not None
            and self.max_tier_points is not None
            and self.min_tier_points > self.max_tier_points
        ):
            raise ValueError(
                f'min_tier_points ({self.min_tier_points}) exceeds '
                f'max_tier_points ({self.max_tier_points})'
            )
        return self

    class Config:
        extra = 'forbid'


class PoolConfig(BaseModel):
    """Top-level configuration file structure."""

    espn_timeout_seconds: float = Field(default=10.0, gt=0, le=120)
    golf_timeout_seconds: float = Field(default=15.0, gt=0, le=120)
    sportradar_base_url: str = Field(default=SPORTRADAR_BASE_URL, min_length=1)
    golf: GolfPoolSettings = Field(default_factory=GolfPoolSettings)

    @field_validator('sportradar_base_url')
    @classmethod
    def strip_trailing_slash(cls, v):
        """Endpoints are appended with a leading slash."""
        return v.rstrip('/')

    class Config:
        extra = 'forbid'


class GolferRecord(BaseModel):
    """Golfer metadata row."""

    golfer_id: str = Field(..., min_length=1)
    name: str = ''
    owgr_rank: int | None = Field(default=None, ge=1)
    # Leaderboard provider player id, when it differs from golfer_id
    external_id: str | None = None

    class Config:
        extra = 'allow'


class TierAssignmentRecord(BaseModel):
    """Tier assigned to a golfer for one pool."""

    golfer_id: str = Field(..., min_length=1)
    tier: int = Field(..., ge=0, le=6)

    class Config:
        extra = 'forbid'


class GolferResultRecord(BaseModel):
    """Persisted round-by-round result for one golfer."""

    golfer_id: str = Field(..., min_length=1)
    round_1: int | None = Field(default=None, ge=0)
    round_2: int | None = Field(default=None, ge=0)
    round_3: int | None = Field(default=None, ge=0)
    round_4: int | None = Field(default=None, ge=0)
    made_cut: bool = True
    position: str | None = None

    def to_result(self, name: str = '') -> GolferResult:
        return GolferResult(
            golfer_id=self.golfer_id,
            round1=self.round_1,
            round2=self.round_2,
            round3=self.round_3,
            round4=self.round_4,
            made_cut=self.made_cut,
            name=name,
            position=self.position,
        )

    class Config:
        extra = 'allow'


class EntryRecord(BaseModel):
    """Pool entry with its golfer picks."""

    entry_id: str = Field(..., min_length=1)
    entry_name: str | None = None
    user_name: str | None = None
    picks: list[str] = Field(default_factory=list)

    class Config:
        extra = 'allow'


class GolfPoolSnapshot(BaseModel):
    """Everything needed to compute standings for one golf pool."""

    tournament_id: str | None = None
    entries: list[EntryRecord] = Field(default_factory=list)
    golfers: list[GolferRecord] = Field(default_factory=list)
    tiers: list[TierAssignmentRecord] = Field(default_factory=list)
    results: list[GolferResultRecord] = Field(default_factory=list)

    def golfer_names(self) -> dict[str, str]:
        return {g.golfer_id: g.name for g in self.golfers}

    def tier_map(self) -> dict[str, int]:
        return {t.golfer_id: t.tier for t in self.tiers}

    def result_map(self) -> dict[str, GolferResultRecord]:
        return {r.golfer_id: r for r in self.results}

    def external_id_map(self) -> dict[str, str]:
        """Map leaderboard player ids to pool golfer ids.

        Golfers without an external_id are matched on their own golfer_id.
        """
        return {g.external_id or g.golfer_id: g.golfer_id for g in self.golfers}

    class Config:
        extra = 'forbid'


class GridNumbersRecord(BaseModel):
    """Persisted grid digits, validated before use."""

    rows: list[int]
    cols: list[int]

    @field_validator('rows', 'cols')
    @classmethod
    def validate_permutation(cls, v):
        """Each axis must hold exactly the digits 0-9."""
        if not is_valid_permutation(v):
            raise ValueError(f'Grid digits must be a permutation of 0-9, got {v}')
        return v

    def to_grid(self) -> GridNumbers:
        return GridNumbers(rows=tuple(self.rows), cols=tuple(self.cols))

    class Config:
        extra = 'forbid'
