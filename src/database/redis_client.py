"""
Redis client wrapper implementing the key-value substrate.
"""
import logging
from typing import Optional
import redis
from redis.exceptions import RedisError
from database.substrate import KeyValueSubstrate

logger = logging.getLogger(__name__)


class RedisClient(KeyValueSubstrate):
    """Redis-backed substrate. Keys are namespaced with an optional prefix."""

    def __init__(self, host: str, port: int, db: int, prefix: str = ''):
        """
        Initialize Redis client.

        Args:
            host: Redis server host (from Config)
            port: Redis server port (from Config)
            db: Redis database number (from Config)
            prefix: Namespace prepended to every key
        """
        self.prefix = prefix
        try:
            self.client = redis.Redis(
                host=host,
                port=port,
                db=db,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5
            )
            # Test connection
            self.client.ping()
            logger.info(f"Connected to Redis at {host}:{port}")
        except RedisError as e:
            logger.error(f"Failed to connect to Redis: {e}")
            raise

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def get(self, key: str) -> Optional[str]:
        """
        Read a value.

        Args:
            key: Unprefixed key

        Returns:
            Stored text or None if absent
        """
        try:
            return self.client.get(self._key(key))
        except RedisError as e:
            logger.error(f"Failed to read '{key}': {e}")
            raise

    def set(self, key: str, value: str) -> None:
        """
        Write a value, replacing any previous one.

        Args:
            key: Unprefixed key
            value: Text to store
        """
        try:
            self.client.set(self._key(key), value)
            logger.debug(f"Wrote '{key}' ({len(value)} chars)")
        except RedisError as e:
            logger.error(f"Failed to write '{key}': {e}")
            raise

    def remove(self, key: str) -> None:
        """Delete a key; missing keys are ignored by Redis."""
        try:
            self.client.delete(self._key(key))
            logger.debug(f"Removed '{key}'")
        except RedisError as e:
            logger.error(f"Failed to remove '{key}': {e}")
            raise

    def close(self):
        """Close the Redis connection."""
        if self.client:
            self.client.close()
            logger.info("Redis connection closed")
