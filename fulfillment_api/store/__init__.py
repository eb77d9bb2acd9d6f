"""Backends del Moisture Store.

- base.py: Interface MoistureStore
- memory.py: Store en memoria (dev/tests)
- firebase.py: Firebase Realtime Database (firebase-admin)
- redis_store.py: Redis (redis.asyncio)
"""

from .base import MoistureStore
from .memory import InMemoryMoistureStore

__all__ = [
    "MoistureStore",
    "InMemoryMoistureStore",
]
