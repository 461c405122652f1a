"""
Key-value substrate backends.
"""
from .substrate import KeyValueSubstrate, MemorySubstrate, FileSubstrate
from .redis_client import RedisClient

__all__ = ['KeyValueSubstrate', 'MemorySubstrate', 'FileSubstrate', 'RedisClient']
