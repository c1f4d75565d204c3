"""
Key-value persistence for games.

The game core only ever talks to a KeyValueStore. Stores never raise
during normal operation: a failed read returns the caller's default and a
failed write returns False, so a broken disk or a read-only home directory
degrades to "no saved data" instead of interrupting play.

Usage:
    from skyflap.storage import JsonFileStore

    store = JsonFileStore()
    store.set('highScore', 25)
    store.get('highScore', 0)
"""

import errno
import json
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

from skyflap.logging import get_data_dir, get_logger

log = get_logger('storage')

STORAGE_VERSION = '1.0'
DEFAULT_PREFIX = 'flappy_'
ONE_WEEK = 7 * 24 * 60 * 60


class KeyValueStore(ABC):
    """Abstract key-value store.

    Values must be JSON-serializable. Implementations must not raise from
    get() or set() for I/O problems.
    """

    @property
    def supported(self) -> bool:
        """Whether the backend can actually persist data."""
        return True

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value for key, or default."""

    @abstractmethod
    def set(self, key: str, value: Any) -> bool:
        """Store value under key. Returns True on success."""

    @abstractmethod
    def remove(self, key: str) -> bool:
        """Remove key. Returns True on success (including absent keys)."""

    @abstractmethod
    def clear(self) -> bool:
        """Remove every key owned by this store."""

    @abstractmethod
    def get_all(self) -> Dict[str, Any]:
        """Return all stored values by key."""

    def close(self) -> None:
        """Release resources. Default is a no-op."""


class MemoryStore(KeyValueStore):
    """In-process store; nothing survives the interpreter."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> bool:
        self._data[key] = value
        return True

    def remove(self, key: str) -> bool:
        self._data.pop(key, None)
        return True

    def clear(self) -> bool:
        self._data.clear()
        return True

    def get_all(self) -> Dict[str, Any]:
        return dict(self._data)


class JsonFileStore(KeyValueStore):
    """Store backed by a single JSON document on disk.

    Each entry is saved under ``prefix + key`` and wrapped with metadata::

        {"flappy_highScore": {"value": 25, "timestamp": 1700000000.0, "version": "1.0"}}

    The document is read once and rewritten on every change. Keys that do
    not carry the prefix are preserved but never exposed.

    Args:
        path: JSON file location (default: <user data dir>/storage.json)
        prefix: Namespace prepended to every key
    """

    def __init__(self, path: Optional[Path] = None, prefix: str = DEFAULT_PREFIX):
        self._path = Path(path) if path is not None else Path(get_data_dir()) / 'storage.json'
        self._prefix = prefix
        self._supported = self._check_support()
        self._document: Optional[Dict[str, Any]] = None
        self._disk_full = False

        if not self._supported:
            log.warning("Storage directory %s is not writable; scores will not be saved",
                        self._path.parent)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def supported(self) -> bool:
        return self._supported

    def _check_support(self) -> bool:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError:
            return False
        return self._path.parent.is_dir()

    def _load(self) -> Dict[str, Any]:
        """Read the document, treating a missing or corrupt file as empty."""
        if self._document is not None:
            return self._document

        document: Dict[str, Any] = {}
        if self._path.exists():
            try:
                with open(self._path, 'r', encoding='utf-8') as f:
                    loaded = json.load(f)
                if isinstance(loaded, dict):
                    document = loaded
                else:
                    log.warning("Ignoring malformed storage file %s", self._path)
            except (OSError, ValueError) as e:
                log.error("Failed to read storage file %s: %s", self._path, e)

        self._document = document
        return document

    def _save(self, document: Dict[str, Any]) -> bool:
        """Write the document atomically via a sibling temp file."""
        tmp_path = self._path.with_suffix(self._path.suffix + '.tmp')
        try:
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(document, f, indent=2, sort_keys=True)
            tmp_path.replace(self._path)
        except (OSError, TypeError, ValueError) as e:
            log.error("Failed to write storage file %s: %s", self._path, e)
            self._disk_full = getattr(e, 'errno', None) == errno.ENOSPC
            try:
                tmp_path.unlink()
            except OSError:
                pass
            return False
        self._document = document
        return True

    def get(self, key: str, default: Any = None) -> Any:
        if not self._supported:
            return default

        entry = self._load().get(self._prefix + key)
        if not isinstance(entry, dict) or 'value' not in entry:
            return default
        value = entry['value']
        return default if value is None else value

    def get_with_metadata(self, key: str) -> Optional[Dict[str, Any]]:
        """Return the full stored envelope (value, timestamp, version)."""
        if not self._supported:
            return None
        entry = self._load().get(self._prefix + key)
        return dict(entry) if isinstance(entry, dict) else None

    def set(self, key: str, value: Any) -> bool:
        if not self._supported:
            log.debug("Storage unavailable, dropping write of %s", key)
            return False

        document = dict(self._load())
        document[self._prefix + key] = {
            'value': value,
            'timestamp': time.time(),
            'version': STORAGE_VERSION,
        }
        if self._save(document):
            return True

        if self._disk_full:
            self._disk_full = False
            log.warning("Disk full, clearing old storage entries")
            self.clear_old_data()
        return False

    def remove(self, key: str) -> bool:
        if not self._supported:
            return False
        document = dict(self._load())
        if document.pop(self._prefix + key, None) is None:
            return True
        return self._save(document)

    def clear(self) -> bool:
        if not self._supported:
            return False
        document = {k: v for k, v in self._load().items() if not k.startswith(self._prefix)}
        return self._save(document)

    def get_all(self) -> Dict[str, Any]:
        if not self._supported:
            return {}
        items = {}
        for full_key in self._load():
            if full_key.startswith(self._prefix):
                key = full_key[len(self._prefix):]
                items[key] = self.get(key)
        return items

    def clear_old_data(self, max_age: float = ONE_WEEK) -> int:
        """Drop entries older than max_age seconds, and unreadable ones.

        Returns:
            Number of entries removed
        """
        if not self._supported:
            return 0

        cutoff = time.time() - max_age
        document = dict(self._load())
        stale = []
        for full_key, entry in document.items():
            if not full_key.startswith(self._prefix):
                continue
            timestamp = entry.get('timestamp') if isinstance(entry, dict) else None
            if not isinstance(timestamp, (int, float)) or timestamp < cutoff:
                stale.append(full_key)

        for full_key in stale:
            del document[full_key]
        if stale and self._save(document):
            log.info("Removed %d stale storage entries", len(stale))
        return len(stale)
