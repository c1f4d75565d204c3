"""
Unit tests for the shared models.

Tests cover:
- Primitive geometry (Point2D, Resolution, Rectangle)
- Pipe snapshots and their segment rectangles
- Stored records (GameStats, PlayerSettings, SessionSummary)
- Difficulty configuration validation
"""

import pytest
from pydantic import ValidationError

from models import (
    BirdSettings, Difficulty, FlappyConfig, GameStats, LoopSettings, PipeData,
    PipeSettings, PlayerSettings, Point2D, Rectangle, Resolution, SessionSummary,
    SoundEffect,
)


class TestPrimitives:
    """Tests for geometric primitives."""

    def test_point_is_frozen(self):
        point = Point2D(x=1.0, y=2.0)
        with pytest.raises(ValidationError):
            point.x = 5.0

    def test_resolution(self):
        canvas = Resolution(width=400, height=600)
        assert canvas.aspect_ratio == pytest.approx(400 / 600)
        assert str(canvas) == "Resolution(400x600)"

    @pytest.mark.parametrize('width,height', [(0, 600), (400, -1)])
    def test_resolution_rejects_non_positive(self, width, height):
        with pytest.raises(ValidationError):
            Resolution(width=width, height=height)

    def test_rectangle_edges(self):
        rect = Rectangle(x=10.0, y=20.0, width=30.0, height=40.0)

        assert (rect.left, rect.right, rect.top, rect.bottom) == (10.0, 40.0, 20.0, 60.0)
        assert rect.area == 1200.0
        assert rect.center == Point2D(x=25.0, y=40.0)

    def test_rectangle_contains_point_inclusive(self):
        rect = Rectangle(x=0.0, y=0.0, width=10.0, height=10.0)
        assert rect.contains_point(Point2D(x=10.0, y=10.0))
        assert not rect.contains_point(Point2D(x=10.1, y=5.0))

    @pytest.mark.parametrize('width,height', [(0.0, 1.0), (1.0, -2.0), (float('nan'), 1.0)])
    def test_rectangle_rejects_bad_dimensions(self, width, height):
        with pytest.raises(ValidationError):
            Rectangle(x=0.0, y=0.0, width=width, height=height)

    def test_rectangle_allows_infinite_height(self):
        rect = Rectangle(x=0.0, y=100.0, width=52.0, height=float('inf'))
        assert rect.bottom == float('inf')


class TestPipeData:
    """Tests for pipe snapshots."""

    def test_segments(self):
        pipe = PipeData(x=400.0, width=52.0, height=200.0, gap=120.0)

        top = pipe.top_rect()
        assert (top.x, top.y, top.width, top.height) == (400.0, 0.0, 52.0, 200.0)

        bottom = pipe.bottom_rect()
        assert bottom.top == 320.0
        assert bottom.height == float('inf')

    def test_trailing_edge(self):
        assert PipeData(x=-10.0, width=52.0, height=100.0, gap=120.0).trailing_edge == 42.0

    def test_rejects_empty_gap(self):
        with pytest.raises(ValidationError):
            PipeData(x=0.0, width=52.0, height=100.0, gap=0.0)


class TestRecords:
    """Tests for stored records."""

    def test_game_stats_record_game(self):
        stats = GameStats().record_game(10, 5.0).record_game(5, 2.5)

        assert stats.total_games == 2
        assert stats.total_score == 15
        assert stats.average_score == 8
        assert stats.best_score == 10
        assert stats.play_time == pytest.approx(7.5)

    def test_game_stats_is_immutable(self):
        stats = GameStats()
        stats.record_game(3)
        assert stats.total_games == 0

    def test_player_settings_from_strings(self):
        settings = PlayerSettings(difficulty='easy', sound=False)
        assert settings.difficulty == Difficulty.EASY
        assert settings.model_dump(mode='json') == {
            'sound': False, 'vibration': True, 'difficulty': 'easy',
        }

    def test_session_summary_rejects_negative_score(self):
        with pytest.raises(ValidationError):
            SessionSummary(score=-1, high_score=0)

    def test_sound_effect_values(self):
        assert [e.value for e in SoundEffect] == ['flap', 'point', 'hit']


class TestFlappyConfig:
    """Tests for difficulty configuration."""

    def test_defaults_are_classic_tuning(self):
        config = FlappyConfig()

        assert config.bird.gravity == 0.5
        assert config.bird.flap_impulse == -8.0
        assert config.pipes.initial_gap == 120.0
        assert config.pipes.min_gap == 80.0
        assert config.pipes.initial_speed == 2.0
        assert config.pipes.ramp_every == 5
        assert config.loop.timestep == pytest.approx(16.667, abs=1e-3)
        assert config.loop.max_frame_delta == 100.0
        assert config.loop.ground_height == 80.0

    def test_flap_must_be_upward(self):
        with pytest.raises(ValidationError):
            BirdSettings(flap_impulse=3.0)

    def test_rotation_range(self):
        with pytest.raises(ValidationError):
            BirdSettings(min_rotation=1.0, max_rotation=0.5)

    def test_min_gap_not_above_initial(self):
        with pytest.raises(ValidationError):
            PipeSettings(initial_gap=70.0, min_gap=80.0)

    def test_min_gap_floor(self):
        with pytest.raises(ValidationError):
            PipeSettings(min_gap=75.0)
        assert PipeSettings(min_gap=80.0).min_gap == 80.0

    def test_segments_need_height(self):
        with pytest.raises(ValidationError):
            PipeSettings(min_segment_height=0.0)

    def test_clamp_at_least_one_step(self):
        with pytest.raises(ValidationError):
            LoopSettings(timestep=50.0, max_frame_delta=20.0)

    def test_nested_dicts(self):
        config = FlappyConfig(name='Custom', pipes={'initial_speed': 3.0})
        assert config.pipes.initial_speed == 3.0
        assert config.pipes.width == 52.0

    def test_frozen(self):
        with pytest.raises(ValidationError):
            FlappyConfig().name = 'Other'
