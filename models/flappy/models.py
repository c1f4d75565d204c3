"""
Flappy Bird data models.

Read-only projections handed out by the game core (pipes, session
summaries) and the small records kept in the key-value store (stats and
player settings).
"""

from pydantic import BaseModel, Field, computed_field, ConfigDict

from ..primitives import Rectangle
from .enums import Difficulty


class PipeData(BaseModel):
    """Immutable snapshot of one obstacle.

    The top segment runs from y=0 down to ``height``; the bottom segment
    starts at ``height + gap`` and extends without limit.

    Attributes:
        x: Left edge of the pipe
        width: Horizontal size of both segments
        height: Height of the top segment
        gap: Vertical clearance between the segments
        passed: Whether this pipe has already been scored

    Examples:
        >>> pipe = PipeData(x=400.0, width=52.0, height=200.0, gap=120.0)
        >>> pipe.top_rect().bottom
        200.0
        >>> pipe.bottom_rect().top
        320.0
    """
    x: float
    width: float = Field(gt=0)
    height: float = Field(gt=0)
    gap: float = Field(gt=0)
    passed: bool = False

    model_config = ConfigDict(frozen=True)

    @computed_field
    @property
    def trailing_edge(self) -> float:
        """Right edge of the pipe; scoring and removal are keyed on it."""
        return self.x + self.width

    def top_rect(self) -> Rectangle:
        """Rectangle of the upper segment."""
        return Rectangle(x=self.x, y=0.0, width=self.width, height=self.height)

    def bottom_rect(self) -> Rectangle:
        """Rectangle of the lower segment, unbounded below."""
        return Rectangle(
            x=self.x,
            y=self.height + self.gap,
            width=self.width,
            height=float('inf'),
        )


class SessionSummary(BaseModel):
    """Outcome of a finished round.

    Attributes:
        score: Final score of the round
        high_score: Best score after this round was taken into account
        new_high_score: True if this round beat the previous best
        play_time: Simulated play time in seconds
        steps: Number of fixed physics steps that ran
    """
    score: int = Field(ge=0)
    high_score: int = Field(ge=0)
    new_high_score: bool = False
    play_time: float = Field(default=0.0, ge=0.0)
    steps: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)


class GameStats(BaseModel):
    """Lifetime statistics stored next to the high score."""
    total_games: int = Field(default=0, ge=0)
    total_score: int = Field(default=0, ge=0)
    average_score: int = Field(default=0, ge=0)
    best_score: int = Field(default=0, ge=0)
    play_time: float = Field(default=0.0, ge=0.0)

    model_config = ConfigDict(frozen=True)

    def record_game(self, score: int, play_time: float = 0.0) -> 'GameStats':
        """Return new stats with one more finished game folded in."""
        total_games = self.total_games + 1
        total_score = self.total_score + score
        return GameStats(
            total_games=total_games,
            total_score=total_score,
            average_score=round(total_score / total_games),
            best_score=max(self.best_score, score),
            play_time=self.play_time + play_time,
        )


class PlayerSettings(BaseModel):
    """Player preferences persisted in the key-value store."""
    sound: bool = True
    vibration: bool = True
    difficulty: Difficulty = Difficulty.NORMAL

    model_config = ConfigDict(frozen=True)
