"""
Unit tests for the Bird entity.

Tests cover:
- Gravity integration scaled by elapsed time
- Flap impulse overwrite
- Rotation clamping and smoothing
- Hitbox geometry
- Reset round-trip
"""

import pytest

from models import BirdSettings, Point2D
from games.FlappyBird.game.entities.bird import Bird

FRAME = 1000.0 / 60.0


@pytest.fixture
def bird():
    return Bird(Point2D(x=100.0, y=300.0))


class TestBirdPhysics:
    """Tests for gravity and flapping."""

    def test_starts_at_spawn_at_rest(self, bird):
        assert bird.x == 100.0
        assert bird.y == 300.0
        assert bird.velocity == 0.0
        assert bird.rotation == 0.0

    def test_one_frame_adds_one_gravity_increment(self, bird):
        bird.update(FRAME)

        assert bird.velocity == pytest.approx(0.5)
        assert bird.y == pytest.approx(300.5)

    def test_gravity_scales_with_elapsed_time(self, bird):
        bird.update(2 * FRAME)

        assert bird.velocity == pytest.approx(1.0)
        # Position moves once per update, by the new velocity
        assert bird.y == pytest.approx(301.0)

    def test_velocity_strictly_increases_without_flaps(self, bird):
        previous = bird.velocity
        for delta in (5.0, FRAME, 40.0, 100.0, 1.0):
            bird.update(delta)
            assert bird.velocity > previous
            previous = bird.velocity

    def test_flap_overwrites_velocity(self, bird):
        bird.velocity = 12.0
        bird.flap()
        assert bird.velocity == -8.0

        bird.velocity = -3.0
        bird.flap()
        assert bird.velocity == -8.0

    def test_flap_twice_is_same_as_once(self, bird):
        bird.flap()
        bird.flap()
        assert bird.velocity == -8.0

    def test_step_after_flap_removes_one_gravity_increment(self, bird):
        bird.flap()
        bird.update(FRAME)

        assert bird.velocity == pytest.approx(-7.5)
        assert bird.y == pytest.approx(292.5)

    def test_nan_position_fails_fast(self, bird):
        bird.velocity = float('nan')
        with pytest.raises(AssertionError):
            bird.update(FRAME)

    def test_custom_settings(self):
        bird = Bird(Point2D(x=0.0, y=100.0), BirdSettings(gravity=1.0, flap_impulse=-5.0))
        bird.update(FRAME)
        assert bird.velocity == pytest.approx(1.0)
        bird.flap()
        assert bird.velocity == -5.0


class TestBirdRotation:
    """Tests for the velocity-driven tilt."""

    def test_rotation_moves_ten_percent_toward_target(self, bird):
        bird.flap()
        bird.update(FRAME)

        # velocity -7.5 -> target clamps to -0.44
        assert bird.rotation == pytest.approx(-0.044)

    def test_rotation_never_exceeds_limits(self, bird):
        for _ in range(200):
            bird.update(FRAME)
            assert -0.44 <= bird.rotation <= 1.57

        assert bird.rotation == pytest.approx(1.57, abs=1e-3)

    def test_rotation_settles_nose_up_while_flapping(self, bird):
        for _ in range(200):
            bird.flap()
            bird.update(FRAME)

        assert bird.rotation == pytest.approx(-0.44, abs=1e-3)


class TestBirdBounds:
    """Tests for the hitbox."""

    def test_bounds_are_scaled_and_centered(self, bird):
        bounds = bird.get_bounds()

        assert bounds.width == pytest.approx(34 * 0.8)
        assert bounds.height == pytest.approx(24 * 0.8)
        assert bounds.center.x == pytest.approx(100.0)
        assert bounds.center.y == pytest.approx(300.0)

    def test_bounds_follow_position(self, bird):
        bird.y = 450.0
        assert bird.get_bounds().center.y == pytest.approx(450.0)


class TestBirdReset:
    """Tests for reset and spawn handling."""

    def test_reset_restores_initial_state(self, bird):
        for i in range(30):
            if i % 7 == 0:
                bird.flap()
            bird.update(FRAME)

        bird.reset()

        assert (bird.x, bird.y, bird.velocity, bird.rotation) == (100.0, 300.0, 0.0, 0.0)
        assert bird.flap_phase == 0.0

    def test_set_spawn_applies_on_next_reset(self, bird):
        bird.set_spawn(Point2D(x=200.0, y=150.0))
        assert bird.y == 300.0

        bird.reset()
        assert (bird.x, bird.y) == (200.0, 150.0)

    def test_repr(self, bird):
        assert repr(bird).startswith("Bird(x=100.0, y=300.0")
