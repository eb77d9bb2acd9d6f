"""Backend Redis.

Cada path del store es una key de Redis. El valor se guarda como JSON:
- "monitor"      -> '{"SoilMoisture": 42}'
- "SoilMoisture" -> '42'
Valores que no son JSON válido se retornan como string crudo.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from redis import asyncio as aioredis
from redis.exceptions import RedisError

from ..exceptions import StoreUnavailable
from .base import MoistureStore

logger = logging.getLogger(__name__)


class RedisMoistureStore(MoistureStore):
    """Lecturas puntuales contra Redis (redis.asyncio)."""

    def __init__(
        self,
        url: str = "redis://localhost:6379/0",
        *,
        key_prefix: str = "",
        client: Optional[aioredis.Redis] = None,
    ) -> None:
        self._url = url
        self._key_prefix = key_prefix
        self._client = client or aioredis.from_url(
            url,
            decode_responses=True,
            socket_timeout=5.0,
            socket_connect_timeout=5.0,
        )

    def _key(self, path: str) -> str:
        return f"{self._key_prefix}{path.strip('/')}"

    async def read(self, path: str) -> Any:
        key = self._key(path)
        try:
            raw = await self._client.get(key)
        except RedisError as e:
            logger.warning("[STORE] Redis read failed key=%s err=%s", key, type(e).__name__)
            raise StoreUnavailable(str(e), path=path, backend=self.backend_name) from e

        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            return raw

    async def ping(self) -> bool:
        try:
            return bool(await self._client.ping())
        except RedisError as e:
            logger.warning("[STORE] Redis ping failed: %s", e)
            return False

    async def close(self) -> None:
        try:
            await self._client.aclose()
        except RedisError:
            logger.debug("[STORE] Redis close failed", exc_info=True)

    @property
    def backend_name(self) -> str:
        return "redis"

    @property
    def url(self) -> str:
        # Sin credenciales en logs.
        return self._url.split("@")[-1]
