"""
Persistent records for FlappyBird: high score, lifetime stats, settings.

ScoreBook is the only place the game touches the key-value store. Every
call is guarded, so a store that raises behaves like an empty store and a
failed write is reported as False.
"""

from typing import Any

from pydantic import ValidationError

from models import GameStats, PlayerSettings
from skyflap.logging import get_logger
from skyflap.storage import KeyValueStore

from ..config import (
    HIGH_SCORE_KEY, LEGACY_HIGH_SCORE_KEY, GAME_STATS_KEY, SETTINGS_KEY,
    DATA_VERSION_KEY, DATA_VERSION, DEFAULT_DIFFICULTY,
)

log = get_logger('records')


class ScoreBook:
    """Game-specific view over a KeyValueStore.

    Examples:
        >>> from skyflap.storage import MemoryStore
        >>> book = ScoreBook(MemoryStore())
        >>> book.set_high_score(12)
        True
        >>> book.get_high_score()
        12
        >>> book.set_high_score(5)
        False
    """

    def __init__(self, store: KeyValueStore):
        self._store = store

    @property
    def store(self) -> KeyValueStore:
        return self._store

    def _get(self, key: str, default: Any) -> Any:
        try:
            return self._store.get(key, default)
        except Exception as e:
            log.warning("Reading %s failed: %s", key, e)
            return default

    def _set(self, key: str, value: Any) -> bool:
        try:
            return bool(self._store.set(key, value))
        except Exception as e:
            log.warning("Writing %s failed: %s", key, e)
            return False

    # -------------------------------------------------------------------------
    # High score
    # -------------------------------------------------------------------------

    def get_high_score(self) -> int:
        """Stored best score; anything unreadable counts as 0."""
        value = self._get(HIGH_SCORE_KEY, 0)
        try:
            return max(0, int(value))
        except (TypeError, ValueError):
            log.warning("Ignoring invalid stored high score %r", value)
            return 0

    def set_high_score(self, score: int) -> bool:
        """Store score if it beats the stored best.

        Returns:
            True only if a new record was written
        """
        if score <= self.get_high_score():
            return False
        success = self._set(HIGH_SCORE_KEY, score)
        if success:
            log.info("New high score: %d", score)
        return success

    # -------------------------------------------------------------------------
    # Stats and settings
    # -------------------------------------------------------------------------

    def get_game_stats(self) -> GameStats:
        raw = self._get(GAME_STATS_KEY, None)
        if not isinstance(raw, dict):
            return GameStats()
        try:
            return GameStats(**raw)
        except ValidationError:
            log.warning("Discarding invalid stored game stats")
            return GameStats()

    def update_game_stats(self, score: int, play_time: float = 0.0) -> bool:
        """Fold one finished game into the lifetime stats."""
        stats = self.get_game_stats().record_game(score, play_time)
        return self._set(GAME_STATS_KEY, stats.model_dump(mode='json'))

    def get_settings(self) -> PlayerSettings:
        raw = self._get(SETTINGS_KEY, None)
        if not isinstance(raw, dict):
            return PlayerSettings(difficulty=DEFAULT_DIFFICULTY)
        try:
            return PlayerSettings(**raw)
        except ValidationError:
            log.warning("Discarding invalid stored settings")
            return PlayerSettings(difficulty=DEFAULT_DIFFICULTY)

    def update_settings(self, **changes: Any) -> bool:
        """Merge changes into the stored settings.

        Raises:
            ValidationError: If a changed value is invalid
        """
        merged = PlayerSettings(**{**self.get_settings().model_dump(), **changes})
        success = self._set(SETTINGS_KEY, merged.model_dump(mode='json'))
        if success:
            log.info("Settings updated: %s", merged.model_dump(mode='json'))
        return success

    # -------------------------------------------------------------------------
    # Migration
    # -------------------------------------------------------------------------

    def migrate_data(self) -> bool:
        """Move data written under old key names to the current layout.

        Returns:
            True if anything was migrated
        """
        if self._get(DATA_VERSION_KEY, None) == DATA_VERSION:
            return False

        migrated = False
        legacy = self._get(LEGACY_HIGH_SCORE_KEY, None)
        if legacy is not None:
            try:
                legacy_score = int(legacy)
            except (TypeError, ValueError):
                legacy_score = 0
            if legacy_score > self.get_high_score():
                self._set(HIGH_SCORE_KEY, legacy_score)
            try:
                self._store.remove(LEGACY_HIGH_SCORE_KEY)
            except Exception as e:
                log.warning("Removing %s failed: %s", LEGACY_HIGH_SCORE_KEY, e)
            migrated = True
            log.info("Migrated legacy high score %r", legacy)

        self._set(DATA_VERSION_KEY, DATA_VERSION)
        return migrated
