"""
Key/value persistence for challenge state, high scores and user stats.

Values are JSON documents stored under namespaced keys, either in a single
JSON file or only in memory. If the file cannot be read or written the
service drops to memory-only mode for the rest of the session: gameplay
carries on, progress just won't survive a restart.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..errors import StorageUnavailable


logger = logging.getLogger(__name__)


class StorageService:
    """
    Namespaced key/value store with an in-memory fallback.

    Attributes:
        namespace: Prefix applied to every key
        path: JSON file backing the store, or None for memory only
        is_available: False once the service has fallen back to memory
    """

    def __init__(self, namespace: str = "wordsearch:", path: Optional[str | Path] = None):
        self.namespace = namespace
        self.path = Path(path) if path is not None else None
        self.memory_fallback: Dict[str, Any] = {}
        self.is_available = self.path is not None and self._check_availability()

    def _check_availability(self) -> bool:
        try:
            self._read_file()
            return True
        except StorageUnavailable as e:
            logger.warning("Storage not available, using memory fallback: %s", e)
            return False

    def _key(self, key: str) -> str:
        return f"{self.namespace}{key}"

    def _read_file(self) -> Dict[str, Any]:
        if self.path is None:
            raise StorageUnavailable("No storage file configured")
        if not self.path.exists():
            return {}
        try:
            with open(self.path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageUnavailable(f"Cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageUnavailable(f"Unexpected storage format in {self.path}")
        return data

    def _write_file(self, data: Dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w') as f:
                json.dump(data, f, indent=2, default=str)
        except (OSError, TypeError, ValueError) as e:
            raise StorageUnavailable(f"Cannot write {self.path}: {e}") from e

    def _fall_back(self, error: StorageUnavailable) -> None:
        logger.warning("Storage failed, continuing in memory only: %s", error)
        self.is_available = False

    def get(self, key: str, default: Any = None) -> Any:
        """Get a stored value, or default if the key is missing."""
        namespaced = self._key(key)

        if self.is_available:
            try:
                data = self._read_file()
                return data.get(namespaced, default)
            except StorageUnavailable as e:
                self._fall_back(e)

        return self.memory_fallback.get(namespaced, default)

    def set(self, key: str, value: Any) -> bool:
        """
        Store a JSON-serializable value.

        Returns:
            True if the value was persisted, False if it is only held in memory
        """
        namespaced = self._key(key)
        self.memory_fallback[namespaced] = value

        if not self.is_available:
            return False

        try:
            data = self._read_file()
            data[namespaced] = value
            self._write_file(data)
            return True
        except StorageUnavailable as e:
            self._fall_back(e)
            return False

    def remove(self, key: str) -> bool:
        """Delete a key. Returns False only if the backing file could not be updated."""
        namespaced = self._key(key)
        self.memory_fallback.pop(namespaced, None)

        if not self.is_available:
            return True

        try:
            data = self._read_file()
            if data.pop(namespaced, None) is not None:
                self._write_file(data)
            return True
        except StorageUnavailable as e:
            self._fall_back(e)
            return False

    def clear(self) -> bool:
        """Remove every key in this namespace."""
        self.memory_fallback = {
            k: v for k, v in self.memory_fallback.items() if not k.startswith(self.namespace)
        }

        if not self.is_available:
            return True

        try:
            data = self._read_file()
            kept = {k: v for k, v in data.items() if not k.startswith(self.namespace)}
            self._write_file(kept)
            return True
        except StorageUnavailable as e:
            self._fall_back(e)
            return False

    def keys(self) -> List[str]:
        """List keys in this namespace, without the prefix."""
        source: Dict[str, Any] = self.memory_fallback
        if self.is_available:
            try:
                source = self._read_file()
            except StorageUnavailable as e:
                self._fall_back(e)

        return [k[len(self.namespace):] for k in source if k.startswith(self.namespace)]
