from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from common.config import Settings, get_settings

from .dispatch import DispatchEngine
from .endpoints import health_router, oauth_router, webhook_router
from .log_config import configure_logging
from .oauth import AccountLinkingService, ExpiringStore, InMemoryExpiringStore, RedisExpiringStore
from .resolver import ReadingResolver, layouts_from_settings
from .store import MoistureStore
from .store.factory import create_store

logger = logging.getLogger(__name__)


def _create_oauth_store(settings: Settings) -> ExpiringStore:
    if settings.oauth.store_backend == "redis":
        return RedisExpiringStore(settings.redis_url)
    return InMemoryExpiringStore()


@asynccontextmanager
async def _lifespan(app: FastAPI):
    yield
    await app.state.moisture_store.close()
    await app.state.oauth_store.close()
    logger.info("[APP] Store connections closed")


def create_app(
    settings: Optional[Settings] = None,
    *,
    store: Optional[MoistureStore] = None,
    oauth_store: Optional[ExpiringStore] = None,
) -> FastAPI:
    """Construye la app con sus componentes.

    `store` y `oauth_store` permiten inyectar backends (tests, dev).
    """
    settings = settings or get_settings()
    store = store or create_store(settings)
    oauth_store = oauth_store or _create_oauth_store(settings)

    resolver = ReadingResolver(store, layouts_from_settings(settings.layout))
    engine = DispatchEngine(
        resolver,
        settings.device,
        query_keywords=settings.query_keywords,
    )

    app = FastAPI(title="Soil Moisture Fulfillment Webhook", version="1.0.0", lifespan=_lifespan)
    app.state.settings = settings
    app.state.moisture_store = store
    app.state.oauth_store = oauth_store
    app.state.dispatch_engine = engine
    app.state.account_linking = AccountLinkingService(
        oauth_store,
        code_ttl_seconds=settings.oauth.code_ttl_seconds,
        token_ttl_seconds=settings.oauth.token_ttl_seconds,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    csp = settings.content_security_policy

    @app.middleware("http")
    async def content_security_policy(request: Request, call_next):
        response = await call_next(request)
        response.headers["Content-Security-Policy"] = csp
        return response

    app.include_router(webhook_router)
    app.include_router(health_router)
    app.include_router(oauth_router)

    if settings.fonts_dir:
        fonts_dir = Path(settings.fonts_dir)
        if fonts_dir.is_dir():
            app.mount("/type-font", StaticFiles(directory=str(fonts_dir)), name="type-font")
        else:
            logger.warning("[APP] FONTS_DIR=%s does not exist, /type-font not mounted", fonts_dir)

    logger.info(
        "[APP] Webhook ready store=%s layouts=%s device_id=%s",
        store.backend_name,
        [(layout.path, layout.field) for layout in resolver.layouts],
        settings.device.device_id,
    )
    return app


def build_default_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)
    return create_app(settings)


app = build_default_app()
