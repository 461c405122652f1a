"""
Key-value substrate contract and the non-Redis backends.
"""
import json
import logging
import os
from abc import ABC, abstractmethod
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)


class KeyValueSubstrate(ABC):
    """
    Durable, synchronous, string-keyed text store.

    Stores serialize their state as JSON text under fixed keys and call
    ``set_json`` after every mutation.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the text stored under key, or None if absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store text under key, replacing any previous value."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete key. Removing a missing key is a no-op."""

    def get_json(self, key: str, default: Any = None) -> Any:
        """
        Load a JSON value.

        Args:
            key: Substrate key
            default: Returned when the key is absent or unreadable

        Returns:
            Decoded value or default
        """
        raw = self.get(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring unreadable value under '{key}': {e}")
            return default

    def set_json(self, key: str, value: Any) -> None:
        """Serialize value as JSON and store it under key."""
        self.set(key, json.dumps(value, ensure_ascii=False))

    def close(self):
        """Release backend resources."""
        pass


class MemorySubstrate(KeyValueSubstrate):
    """Process-local substrate backed by a dict."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class FileSubstrate(KeyValueSubstrate):
    """
    Substrate persisted as a single JSON object on disk.

    The whole mapping is rewritten on every set/remove.
    """

    def __init__(self, path: str):
        """
        Initialize the file substrate.

        Args:
            path: JSON file holding the key/value mapping
        """
        self.path = path
        self.data: Dict[str, str] = self._load()
        logger.info(f"File substrate initialized at {self.path} ({len(self.data)} keys)")

    def _load(self) -> Dict[str, str]:
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError as e:
            logger.warning(f"Invalid JSON in {self.path}, starting empty: {e}")
            return {}

    def _flush(self):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp_path = f"{self.path}.tmp"
        try:
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(self.data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error(f"Failed to write {self.path}: {e}")
            raise

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value
        self._flush()

    def remove(self, key: str) -> None:
        if key in self.data:
            del self.data[key]
            self._flush()
