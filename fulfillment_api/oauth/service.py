"""Servicio de account linking (OAuth 2.0 authorization code).

Mínimo necesario para que Google vincule la cuenta:
- issue_code(client_id, redirect_uri) -> code (un solo uso, TTL corto)
- exchange(code, client_id) -> access + refresh token
- refresh(refresh_token, client_id) -> nuevo access token

No verifica client secrets ni muestra pantalla de consentimiento.
"""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from typing import Optional

from ..exceptions import InvalidGrant
from .store import ExpiringStore

logger = logging.getLogger(__name__)

REFRESH_TOKEN_TTL_SECONDS = 60 * 60 * 24 * 365


@dataclass(frozen=True)
class TokenGrant:
    access_token: str
    expires_in: int
    refresh_token: Optional[str] = None


def _new_token() -> str:
    return secrets.token_urlsafe(32)


def _redact(token: str) -> str:
    return f"{token[:4]}..." if token else ""


class AccountLinkingService:
    def __init__(
        self,
        store: ExpiringStore,
        *,
        code_ttl_seconds: int = 600,
        token_ttl_seconds: int = 3600,
        refresh_ttl_seconds: int = REFRESH_TOKEN_TTL_SECONDS,
    ) -> None:
        self._store = store
        self._code_ttl = code_ttl_seconds
        self._token_ttl = token_ttl_seconds
        self._refresh_ttl = refresh_ttl_seconds

    async def issue_code(self, client_id: str, redirect_uri: str) -> str:
        code = _new_token()
        await self._store.put(
            f"code:{code}",
            {"client_id": client_id, "redirect_uri": redirect_uri},
            self._code_ttl,
        )
        logger.info("[OAUTH] Issued code client_id=%s code=%s", client_id, _redact(code))
        return code

    async def exchange(self, code: str, client_id: str) -> TokenGrant:
        entry = await self._store.pop(f"code:{code}")
        if entry is None:
            logger.warning("[OAUTH] Unknown or expired code=%s", _redact(code))
            raise InvalidGrant("authorization code is invalid or expired")
        if entry.get("client_id") != client_id:
            logger.warning("[OAUTH] Code client mismatch client_id=%s", client_id)
            raise InvalidGrant("authorization code was issued to another client")

        access_token = await self._issue_access_token(client_id)
        refresh_token = _new_token()
        await self._store.put(f"refresh:{refresh_token}", {"client_id": client_id}, self._refresh_ttl)

        logger.info("[OAUTH] Exchanged code client_id=%s", client_id)
        return TokenGrant(
            access_token=access_token,
            expires_in=self._token_ttl,
            refresh_token=refresh_token,
        )

    async def refresh(self, refresh_token: str, client_id: str) -> TokenGrant:
        entry = await self._store.get(f"refresh:{refresh_token}")
        if entry is None or entry.get("client_id") != client_id:
            logger.warning("[OAUTH] Invalid refresh token=%s", _redact(refresh_token))
            raise InvalidGrant("refresh token is invalid or expired")

        access_token = await self._issue_access_token(client_id)
        logger.info("[OAUTH] Refreshed access token client_id=%s", client_id)
        return TokenGrant(access_token=access_token, expires_in=self._token_ttl)

    async def validate_access_token(self, access_token: str) -> Optional[str]:
        """Retorna el client_id dueño del token, o None."""
        entry = await self._store.get(f"access:{access_token}")
        return entry.get("client_id") if entry else None

    async def _issue_access_token(self, client_id: str) -> str:
        access_token = _new_token()
        await self._store.put(f"access:{access_token}", {"client_id": client_id}, self._token_ttl)
        return access_token
