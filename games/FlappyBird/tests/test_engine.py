"""
Unit tests for the FlappyEngine class.

Tests cover:
- State machine transitions (start, pause, resume, stop, game over)
- Fixed-timestep accumulator and delta clamping
- Flap input and effect triggers
- High score persistence and session summary
- Collaborator failures that must not interrupt play
- Resize, rendering delegation and diagnostics
"""

from unittest.mock import Mock

import pytest

from models import Capability, SoundEffect
from skyflap.effects import EffectSink, StaticCapabilities
from skyflap.games import GameState
from skyflap.logging import LogSink, NullSink, register_sink
from skyflap.storage import KeyValueStore, MemoryStore
from games.FlappyBird.game.engine import FlappyEngine, spawn_point


def crash(engine):
    """Put the bird into the ground so the next step ends the round."""
    engine.bird.y = engine.ground_level + 5


class TestStateMachine:
    """Tests for round lifecycle."""

    def test_starts_idle(self, engine):
        assert engine.state == GameState.IDLE
        assert not engine.is_running
        assert engine.tick(0.0) is False

    def test_start_runs_round(self, engine):
        engine.start()

        assert engine.state == GameState.RUNNING
        assert engine.is_running
        assert engine.score == 0
        assert (engine.bird.x, engine.bird.y) == (100.0, 300.0)

    def test_start_is_ignored_mid_round(self, engine):
        engine.start()
        engine.step()
        steps = engine.steps

        engine.start()
        assert engine.steps == steps

    def test_pause_and_resume(self, engine):
        engine.start()
        engine.pause()
        assert engine.state == GameState.PAUSED
        assert engine.is_running
        assert engine.is_paused

        engine.resume()
        assert engine.state == GameState.RUNNING

    def test_toggle_pause(self, engine):
        engine.start()
        engine.on_pause_toggle()
        assert engine.is_paused
        engine.on_pause_toggle()
        assert not engine.is_paused

    def test_pause_outside_round_is_ignored(self, engine):
        engine.pause()
        assert engine.state == GameState.IDLE

    def test_stop_returns_to_idle_without_saving(self, engine, store):
        engine.start()
        engine.stop()

        assert engine.state == GameState.IDLE
        assert engine.tick(100.0) is False
        assert store.get('highScore') is None
        assert engine.summary is None

    def test_collision_ends_round(self, engine):
        engine.start()
        crash(engine)

        assert engine.step() is False
        assert engine.state == GameState.GAME_OVER
        assert not engine.is_running

    def test_restart_after_game_over(self, engine):
        engine.start()
        crash(engine)
        engine.step()

        engine.start()

        assert engine.state == GameState.RUNNING
        assert engine.score == 0
        assert engine.steps == 0
        assert len(engine.pipes) == 0


class TestScheduling:
    """Tests for tick() and the accumulator."""

    def test_first_tick_sets_time_reference(self, fast_engine):
        fast_engine.start()
        assert fast_engine.tick(5000.0) is True
        assert fast_engine.steps == 0

    def test_accumulator_drains_whole_steps(self, fast_engine):
        fast_engine.start()
        fast_engine.tick(0.0)
        fast_engine.tick(35.0)

        assert fast_engine.steps == 3
        assert fast_engine.accumulator == pytest.approx(5.0)

    def test_remainder_carries_over(self, fast_engine):
        fast_engine.start()
        fast_engine.tick(0.0)
        fast_engine.tick(7.0)
        assert fast_engine.steps == 0

        fast_engine.tick(14.0)
        assert fast_engine.steps == 1
        assert fast_engine.accumulator == pytest.approx(4.0)

    def test_stall_is_clamped(self, fast_engine):
        fast_engine.start()
        fast_engine.tick(0.0)
        fast_engine.tick(5000.0)

        # 100 ms clamp at 10 ms per step
        assert fast_engine.steps == 10

    def test_time_going_backwards_runs_nothing(self, fast_engine):
        fast_engine.start()
        fast_engine.tick(100.0)
        fast_engine.tick(50.0)
        assert fast_engine.steps == 0

    def test_paused_tick_keeps_scheduling_but_does_not_simulate(self, fast_engine):
        fast_engine.start()
        fast_engine.tick(0.0)
        fast_engine.tick(20.0)
        fast_engine.pause()

        assert fast_engine.tick(80.0) is True
        assert fast_engine.steps == 2

    def test_resume_does_not_integrate_paused_time(self, fast_engine):
        fast_engine.start()
        fast_engine.tick(0.0)
        fast_engine.pause()
        fast_engine.tick(50.0)
        fast_engine.resume()

        fast_engine.tick(10_000.0)
        assert fast_engine.steps == 0

        fast_engine.tick(10_010.0)
        assert fast_engine.steps == 1

    def test_resume_with_timestamp(self, fast_engine):
        fast_engine.start()
        fast_engine.tick(0.0)
        fast_engine.pause()
        fast_engine.resume(now=2000.0)

        fast_engine.tick(2010.0)
        assert fast_engine.steps == 1

    def test_no_steps_after_game_over_in_same_tick(self, fast_engine):
        fast_engine.start()
        fast_engine.tick(0.0)
        crash(fast_engine)

        assert fast_engine.tick(100.0) is False
        assert fast_engine.steps == 1
        assert fast_engine.accumulator == 0.0

    def test_tick_after_game_over_is_inert(self, fast_engine):
        fast_engine.start()
        crash(fast_engine)
        fast_engine.step()
        steps = fast_engine.steps

        assert fast_engine.tick(1000.0) is False
        assert fast_engine.tick(2000.0) is False
        assert fast_engine.steps == steps

    def test_bird_falls_without_flaps(self, engine):
        engine.start()
        for _ in range(10):
            engine.step()

        assert engine.bird.y > 300.0
        assert engine.bird.velocity == pytest.approx(5.0)
        assert engine.sim_time == pytest.approx(10 * 1000.0 / 60.0)


class TestInput:
    """Tests for flapping and effects."""

    def test_flap_sets_impulse_then_gravity_applies(self, engine):
        engine.start()
        assert engine.on_input() is True
        assert engine.bird.velocity == -8.0

        engine.step()
        assert engine.bird.velocity == pytest.approx(-7.5)

    def test_flap_ignored_when_not_running(self, engine, effects):
        assert engine.on_input() is False

        engine.start()
        engine.pause()
        assert engine.on_input() is False
        assert engine.bird.velocity == 0.0
        assert effects.sounds == []

    def test_flap_plays_sound_and_vibrates(self, engine, effects):
        engine.start()
        engine.on_input()

        assert effects.sounds == [SoundEffect.FLAP]
        assert effects.vibrations == [50]

    def test_no_vibration_without_capability(self, store, effects):
        engine = FlappyEngine(400, 600, store=store, effects=effects,
                              capabilities=StaticCapabilities())
        engine.start()
        engine.on_input()

        assert effects.sounds == [SoundEffect.FLAP]
        assert effects.vibrations == []

    def test_point_sound_and_milestone_vibration(self, engine, effects, monkeypatch):
        engine.start()
        monkeypatch.setattr(engine.pipes, 'get_score', lambda: 10)
        engine.step()

        assert engine.score == 10
        assert effects.sounds == [SoundEffect.POINT]
        assert effects.vibrations == [[100, 50, 100]]

    def test_hit_effects_on_game_over(self, engine, effects):
        engine.start()
        crash(engine)
        engine.step()

        assert effects.sounds == [SoundEffect.HIT]
        assert effects.vibrations == [[200, 100, 200]]

    def test_no_score_on_colliding_step(self, engine, effects, monkeypatch):
        engine.start()
        monkeypatch.setattr(engine.pipes, 'get_score', lambda: 1)
        crash(engine)
        engine.step()

        assert engine.score == 0
        assert SoundEffect.POINT not in effects.sounds


class TestPersistence:
    """Tests for high score handling."""

    def play_to(self, engine, score, monkeypatch):
        engine.start()
        monkeypatch.setattr(engine.pipes, 'get_score', lambda: score)
        engine.step()
        crash(engine)
        engine.step()

    def test_init_loads_high_score(self):
        engine = FlappyEngine(400, 600, store=MemoryStore({'highScore': 17}))
        engine.init()
        assert engine.high_score == 17

    def test_new_high_score_is_persisted(self, monkeypatch):
        store = MemoryStore({'highScore': 10})
        engine = FlappyEngine(400, 600, store=store)
        engine.init()

        self.play_to(engine, 25, monkeypatch)

        assert engine.state == GameState.GAME_OVER
        assert store.get('highScore') == 25
        assert engine.high_score == 25
        assert engine.summary.new_high_score is True
        assert engine.summary.score == 25

    def test_lower_score_keeps_high_score(self, monkeypatch):
        store = MemoryStore({'highScore': 40})
        engine = FlappyEngine(400, 600, store=store)
        engine.init()

        self.play_to(engine, 25, monkeypatch)

        assert store.get('highScore') == 40
        assert engine.summary.new_high_score is False
        assert engine.summary.high_score == 40

    def test_game_stats_updated(self, engine, store, monkeypatch):
        self.play_to(engine, 3, monkeypatch)

        stats = engine.score_book.get_game_stats()
        assert stats.total_games == 1
        assert stats.best_score == 3

    def test_session_record_emitted(self, engine, monkeypatch):
        sink = Mock(spec=LogSink)
        register_sink('session', sink)
        try:
            self.play_to(engine, 4, monkeypatch)
        finally:
            register_sink('session', NullSink())

        module, record = sink.emit.call_args[0]
        assert module == 'session'
        assert record['type'] == 'game_over'
        assert record['score'] == 4


class TestCollaboratorFailures:
    """Failures in effects or storage never interrupt play."""

    def test_effect_failure_is_swallowed(self, store):
        effects = Mock(spec=EffectSink)
        effects.play_effect.side_effect = RuntimeError("no audio device")
        effects.vibrate.side_effect = RuntimeError("no haptics")
        engine = FlappyEngine(400, 600, store=store, effects=effects,
                              capabilities=StaticCapabilities([Capability.VIBRATION]))
        engine.start()

        assert engine.on_input() is True
        assert engine.bird.velocity == -8.0

        crash(engine)
        engine.step()
        assert engine.state == GameState.GAME_OVER

    def test_store_failure_counts_as_no_high_score(self, monkeypatch):
        store = Mock(spec=KeyValueStore)
        store.get.side_effect = OSError("disk gone")
        store.set.side_effect = OSError("disk gone")
        engine = FlappyEngine(400, 600, store=store)

        engine.init()
        assert engine.high_score == 0

        engine.start()
        monkeypatch.setattr(engine.pipes, 'get_score', lambda: 5)
        engine.step()
        crash(engine)
        engine.step()

        assert engine.state == GameState.GAME_OVER
        assert engine.high_score == 5


class TestLifecycleExtras:
    """Tests for resize, render, teardown and diagnostics."""

    def test_spawn_point(self):
        point = spawn_point(400, 600)
        assert (point.x, point.y) == (100.0, 300.0)

    def test_resize_updates_geometry(self, engine):
        engine.resize(800, 500)

        assert engine.canvas.width == 800
        assert engine.ground_level == 420.0
        assert engine.pipes.score_line == 200.0
        assert (engine.bird.x, engine.bird.y) == (200.0, 250.0)

    def test_resize_mid_round_keeps_bird(self, engine):
        engine.start()
        engine.step()
        y = engine.bird.y

        engine.resize(800, 500)
        assert engine.bird.y == y

    def test_render_delegates_to_renderer(self, store):
        renderer = Mock()
        engine = FlappyEngine(400, 600, store=store, renderer=renderer)
        surface = Mock()

        engine.render(surface)

        renderer.render.assert_called_once_with(surface, engine)

    def test_teardown_closes_collaborators(self, engine, effects):
        engine.start()
        engine.teardown()

        assert engine.state == GameState.IDLE
        assert effects.closed is True

    def test_performance_info(self, fast_engine):
        fast_engine.start()
        fast_engine.tick(0.0)
        fast_engine.tick(20.0)

        info = fast_engine.get_performance_info()
        assert info['fps'] == 50
        assert info['score'] == 0
        assert info['running'] is True
        assert info['paused'] is False
        assert info['steps'] == 2
        assert info['pipes'] == 0
