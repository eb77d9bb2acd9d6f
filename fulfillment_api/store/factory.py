"""Factory para crear el Moisture Store configurado.

MOISTURE_STORE_BACKEND:
- firebase: Firebase Realtime Database
- redis: Redis (REDIS_URL)
- memory: store vacío en memoria (todas las lecturas -> 0)

No hay fallback automático entre backends: si el backend elegido falla
en runtime, el webhook responde con el error de cada protocolo.
"""

from __future__ import annotations

import logging

from common.config import Settings

from ..exceptions import StoreConfigError
from .base import MoistureStore
from .memory import InMemoryMoistureStore

logger = logging.getLogger(__name__)

SUPPORTED_BACKENDS = ("firebase", "redis", "memory")


def create_store(settings: Settings) -> MoistureStore:
    backend = settings.store_backend

    if backend == "firebase":
        from .firebase import FirebaseMoistureStore

        store = FirebaseMoistureStore(settings.firebase)
        store.connect()
        logger.info("[STORE_FACTORY] Using Firebase store project=%s", settings.firebase.project_id)
        return store

    if backend == "redis":
        from .redis_store import RedisMoistureStore

        store = RedisMoistureStore(settings.redis_url)
        logger.info("[STORE_FACTORY] Using Redis store: %s", store.url)
        return store

    if backend == "memory":
        logger.warning("[STORE_FACTORY] Using in-memory store (DEV ONLY)")
        return InMemoryMoistureStore()

    raise StoreConfigError(
        f"Unknown MOISTURE_STORE_BACKEND={backend!r}, expected one of {SUPPORTED_BACKENDS}"
    )
