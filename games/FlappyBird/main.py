#!/usr/bin/env python3
"""FlappyBird - Standalone Entry Point.

Usage:
    python main.py
    python main.py --difficulty hard
    python main.py --mute --store memory
"""

import argparse
import os
import sys
from typing import Optional

# Add project root to path for imports
_project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import pygame

from models import Difficulty
from skyflap.games import GameState
from skyflap.logging import configure_logging, create_sink_for_environment, get_logger, register_sink
from skyflap.storage import JsonFileStore, KeyValueStore, MemoryStore

from games.FlappyBird.config import (
    SCREEN_WIDTH, SCREEN_HEIGHT, MIN_SCREEN_WIDTH, MIN_SCREEN_HEIGHT, FPS,
    AUDIO_ENABLED, VIBRATION_ENABLED,
    IDLE_TITLE, IDLE_HINT, GAME_OVER_TITLE, GAME_OVER_HINT,
)
from games.FlappyBird.game.audio import PygameCapabilities, PygameEffects
from games.FlappyBird.game.engine import FlappyEngine
from games.FlappyBird.game.preset_loader import PresetLoader
from games.FlappyBird.game.records import ScoreBook
from games.FlappyBird.game.renderer import FlappyRenderer
from games.FlappyBird.input import InputAction, InputEvent, InputManager

log = get_logger('flappy')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="FlappyBird - Standalone")

    # Display options
    parser.add_argument('--width', type=int, default=SCREEN_WIDTH, help='Screen width')
    parser.add_argument('--height', type=int, default=SCREEN_HEIGHT, help='Screen height')
    parser.add_argument('--fullscreen', action='store_true', help='Run fullscreen')

    # Game options
    parser.add_argument('--difficulty', type=str, default=None,
                        choices=[d.value for d in Difficulty],
                        help='Difficulty preset (default: saved setting)')
    parser.add_argument('--mute', action='store_true', help='Disable sound')
    parser.add_argument('--no-vibration', action='store_true', help='Disable gamepad rumble')
    parser.add_argument('--store', type=str, default='json', choices=['json', 'memory'],
                        help='Where to keep high score and stats')
    parser.add_argument('--log-level', type=str, default=None,
                        help='Log level (TRACE, DEBUG, INFO, WARNING, ERROR)')
    return parser


def create_store(kind: str) -> KeyValueStore:
    if kind == 'memory':
        return MemoryStore()
    return JsonFileStore()


def dispatch(engine: FlappyEngine, event: InputEvent) -> bool:
    """Apply one input event to the engine.

    A flap or Enter outside a round starts a new one; losing focus pauses
    a running round.

    Returns:
        False when the host should exit
    """
    action = event.action

    if action == InputAction.QUIT:
        return False

    if action in (InputAction.FLAP, InputAction.START):
        if engine.state in (GameState.IDLE, GameState.GAME_OVER):
            engine.start()
        elif action == InputAction.FLAP:
            engine.on_input()
    elif action == InputAction.PAUSE_TOGGLE:
        if engine.is_running:
            engine.on_pause_toggle()
    elif action == InputAction.FOCUS_LOST:
        engine.pause()

    return True


def draw_status(renderer: FlappyRenderer, screen: pygame.Surface, engine: FlappyEngine) -> None:
    """Title and game-over screens on top of the engine's frame."""
    if engine.state == GameState.IDLE:
        renderer.draw_overlay(screen, IDLE_TITLE, f"Best: {engine.high_score}", IDLE_HINT)
    elif engine.state == GameState.GAME_OVER:
        summary = engine.summary
        best = f"Best: {engine.high_score}"
        if summary is not None and summary.new_high_score:
            best = f"New best: {engine.high_score}!"
        renderer.draw_overlay(screen, GAME_OVER_TITLE, f"Score: {engine.score}", best, GAME_OVER_HINT)


def main(argv: Optional[list] = None) -> int:
    """Run FlappyBird standalone."""
    args = build_parser().parse_args(argv)

    if args.log_level:
        configure_logging(level=args.log_level)
    register_sink('session', create_sink_for_environment('session'))

    # Persistent data
    store = create_store(args.store)
    records = ScoreBook(store)
    records.migrate_data()
    settings = records.get_settings()

    difficulty = args.difficulty or settings.difficulty.value
    config = PresetLoader().load_preset(difficulty)

    # Initialize pygame
    pygame.init()
    pygame.font.init()

    # Create display
    if args.fullscreen:
        screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        width, height = screen.get_size()
    else:
        width = max(MIN_SCREEN_WIDTH, args.width)
        height = max(MIN_SCREEN_HEIGHT, args.height)
        screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)

    pygame.display.set_caption("Flappy Bird")

    effects = PygameEffects(
        sound=AUDIO_ENABLED and settings.sound and not args.mute,
        vibration=VIBRATION_ENABLED and settings.vibration and not args.no_vibration,
    )
    renderer = FlappyRenderer()
    engine = FlappyEngine(
        width, height,
        store=store,
        effects=effects,
        capabilities=PygameCapabilities(effects, store),
        config=config,
        renderer=renderer,
    )
    engine.init()
    log.info("Starting %s difficulty at %dx%d", config.name, width, height)

    input_manager = InputManager()
    input_manager.open_joysticks()
    clock = pygame.time.Clock()
    running = True

    try:
        while running:
            clock.tick(FPS)

            for event in input_manager.poll():
                if event.action == InputAction.RESIZE and not args.fullscreen:
                    width = max(MIN_SCREEN_WIDTH, event.size[0])
                    height = max(MIN_SCREEN_HEIGHT, event.size[1])
                    screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
                    engine.resize(width, height)
                elif not dispatch(engine, event):
                    running = False
                    break

            if engine.is_running:
                engine.tick(float(pygame.time.get_ticks()))

            engine.render(screen)
            draw_status(renderer, screen, engine)
            pygame.display.flip()
    finally:
        engine.teardown()
        pygame.quit()

    return 0


if __name__ == "__main__":
    sys.exit(main())
