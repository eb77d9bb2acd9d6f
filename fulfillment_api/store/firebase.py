"""Backend Firebase Realtime Database.

Usa firebase-admin (cliente síncrono); las lecturas se ejecutan en un
thread con asyncio.to_thread para no bloquear el event loop.

Credenciales (service account) desde variables de entorno:
- FIREBASE_PROJECT_ID
- FIREBASE_CLIENT_EMAIL
- FIREBASE_PRIVATE_KEY (con "\\n" literales, como en Vercel/Heroku)
- FIREBASE_DATABASE_URL
"""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Any, Optional

import firebase_admin
from firebase_admin import credentials, db
from firebase_admin import exceptions as firebase_exceptions

from common.config import FirebaseSettings

from ..exceptions import StoreConfigError, StoreUnavailable
from .base import MoistureStore

logger = logging.getLogger(__name__)

APP_NAME = "moisture-webhook"
TOKEN_URI = "https://oauth2.googleapis.com/token"


def build_service_account_info(settings: FirebaseSettings) -> dict:
    """Arma el dict de service account que espera credentials.Certificate."""
    missing = [
        name
        for name, value in (
            ("FIREBASE_PROJECT_ID", settings.project_id),
            ("FIREBASE_CLIENT_EMAIL", settings.client_email),
            ("FIREBASE_PRIVATE_KEY", settings.private_key),
            ("FIREBASE_DATABASE_URL", settings.database_url),
        )
        if not value
    ]
    if missing:
        raise StoreConfigError(f"Firebase backend requires: {', '.join(missing)}")

    return {
        "type": "service_account",
        "project_id": settings.project_id,
        "client_email": settings.client_email,
        # Las plataformas de deploy guardan la key con "\n" escapados.
        "private_key": settings.private_key.replace("\\n", "\n"),
        "token_uri": TOKEN_URI,
    }


class FirebaseMoistureStore(MoistureStore):
    """Lecturas puntuales contra Firebase Realtime Database."""

    def __init__(self, settings: FirebaseSettings, *, app_name: str = APP_NAME) -> None:
        self._settings = settings
        self._app_name = app_name
        self._app: Optional[firebase_admin.App] = None
        self._lock = threading.Lock()

    def connect(self) -> None:
        """Inicializa la app de firebase-admin (idempotente)."""
        with self._lock:
            if self._app is not None:
                return
            try:
                self._app = firebase_admin.get_app(self._app_name)
                return
            except ValueError:
                pass

            info = build_service_account_info(self._settings)
            try:
                cred = credentials.Certificate(info)
                self._app = firebase_admin.initialize_app(
                    cred,
                    {"databaseURL": self._settings.database_url},
                    name=self._app_name,
                )
            except ValueError as e:
                raise StoreConfigError(f"Invalid Firebase credentials: {e}") from e

            logger.info(
                "[STORE] Firebase app initialized project=%s db=%s",
                self._settings.project_id,
                self._settings.database_url,
            )

    def _read_sync(self, path: str, shallow: bool = False) -> Any:
        self.connect()
        return db.reference(path, app=self._app).get(shallow=shallow)

    async def read(self, path: str, *, shallow: bool = False) -> Any:
        try:
            return await asyncio.to_thread(self._read_sync, path, shallow)
        except StoreConfigError:
            raise
        except firebase_exceptions.FirebaseError as e:
            logger.warning("[STORE] Firebase read failed path=%s code=%s", path, e.code)
            raise StoreUnavailable(str(e), path=path, backend=self.backend_name) from e
        except Exception as e:
            logger.warning("[STORE] Firebase read failed path=%s err=%s", path, type(e).__name__)
            raise StoreUnavailable(str(e), path=path, backend=self.backend_name) from e

    async def ping(self) -> bool:
        try:
            await self.read("/", shallow=True)
            return True
        except StoreUnavailable:
            return False

    async def close(self) -> None:
        with self._lock:
            if self._app is None:
                return
            try:
                firebase_admin.delete_app(self._app)
            except ValueError:
                pass
            self._app = None

    @property
    def backend_name(self) -> str:
        return "firebase"
