"""Stores clave-valor con expiración para el flujo OAuth.

El servicio de account linking recibe el store inyectado, así que
códigos y tokens no viven en dicts globales del proceso.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Tuple

from redis import asyncio as aioredis
from redis.exceptions import RedisError

from ..exceptions import OAuthError

logger = logging.getLogger(__name__)


class ExpiringStore(ABC):
    """Contrato mínimo: put con TTL, get y pop (lectura + borrado)."""

    @abstractmethod
    async def put(self, key: str, value: Dict[str, Any], ttl_seconds: int) -> None:
        ...

    @abstractmethod
    async def get(self, key: str) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    async def pop(self, key: str) -> Optional[Dict[str, Any]]:
        ...

    async def close(self) -> None:
        return None


class InMemoryExpiringStore(ExpiringStore):
    """Store en memoria con TTL por entrada.

    - Expiración perezosa al leer
    - Limpieza cuando el store supera 50% de capacidad
    """

    def __init__(self, max_size: int = 10000, clock: Callable[[], float] = time.monotonic) -> None:
        self._max_size = max_size
        self._clock = clock
        self._entries: Dict[str, Tuple[Dict[str, Any], float]] = {}
        self._lock = asyncio.Lock()

    async def put(self, key: str, value: Dict[str, Any], ttl_seconds: int) -> None:
        async with self._lock:
            self._cleanup()
            self._entries[key] = (dict(value), self._clock() + ttl_seconds)

    async def get(self, key: str) -> Optional[Dict[str, Any]]:
        async with self._lock:
            return self._live(key)

    async def pop(self, key: str) -> Optional[Dict[str, Any]]:
        async with self._lock:
            value = self._live(key)
            self._entries.pop(key, None)
            return value

    def _live(self, key: str) -> Optional[Dict[str, Any]]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at <= self._clock():
            del self._entries[key]
            return None
        return dict(value)

    def _cleanup(self) -> None:
        if len(self._entries) <= self._max_size // 2:
            return
        now = self._clock()
        expired = [k for k, (_, expires_at) in self._entries.items() if expires_at <= now]
        for k in expired:
            del self._entries[k]

    def __len__(self) -> int:
        return len(self._entries)


class RedisExpiringStore(ExpiringStore):
    """Store en Redis: SET key value EX ttl, GETDEL para consumo único."""

    def __init__(
        self,
        url: str = "redis://localhost:6379/0",
        *,
        key_prefix: str = "oauth:",
        client: Optional[aioredis.Redis] = None,
    ) -> None:
        self._key_prefix = key_prefix
        self._client = client or aioredis.from_url(
            url,
            decode_responses=True,
            socket_timeout=5.0,
            socket_connect_timeout=5.0,
        )

    def _key(self, key: str) -> str:
        return f"{self._key_prefix}{key}"

    async def put(self, key: str, value: Dict[str, Any], ttl_seconds: int) -> None:
        try:
            await self._client.set(self._key(key), json.dumps(value), ex=ttl_seconds)
        except RedisError as e:
            logger.warning("[OAUTH] Redis put failed err=%s", type(e).__name__)
            raise OAuthError("token store unavailable") from e

    async def get(self, key: str) -> Optional[Dict[str, Any]]:
        try:
            raw = await self._client.get(self._key(key))
        except RedisError as e:
            logger.warning("[OAUTH] Redis get failed err=%s", type(e).__name__)
            raise OAuthError("token store unavailable") from e
        return json.loads(raw) if raw else None

    async def pop(self, key: str) -> Optional[Dict[str, Any]]:
        try:
            raw = await self._client.getdel(self._key(key))
        except RedisError as e:
            logger.warning("[OAUTH] Redis pop failed err=%s", type(e).__name__)
            raise OAuthError("token store unavailable") from e
        return json.loads(raw) if raw else None

    async def close(self) -> None:
        try:
            await self._client.aclose()
        except RedisError:
            logger.debug("[OAUTH] Redis close failed", exc_info=True)
