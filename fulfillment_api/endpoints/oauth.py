"""Endpoints OAuth para account linking de Google Smart Home.

- GET /auth: emite un código y redirige a redirect_uri
- POST /token: intercambia código / refresh token por tokens
"""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from fastapi import APIRouter, Depends, Form, Query, status
from fastapi.responses import JSONResponse, RedirectResponse

from ..dependencies import get_account_linking
from ..exceptions import InvalidGrant, OAuthError, UnsupportedGrantType
from ..oauth import AccountLinkingService
from ..schemas import OAuthErrorResponse, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["oauth"])


def _with_query(url: str, **params: str) -> str:
    parts = urlsplit(url)
    query = parse_qsl(parts.query, keep_blank_values=True)
    query.extend((k, v) for k, v in params.items() if v is not None)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(query), parts.fragment))


def _oauth_error(status_code: int, error: str, description: Optional[str] = None) -> JSONResponse:
    body = OAuthErrorResponse(error=error, error_description=description)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.get("/auth")
async def authorize(
    client_id: str = Query(...),
    redirect_uri: str = Query(...),
    state: Optional[str] = Query(default=None),
    response_type: str = Query(default="code"),
    service: AccountLinkingService = Depends(get_account_linking),
):
    if response_type != "code":
        return _oauth_error(status.HTTP_400_BAD_REQUEST, "unsupported_response_type")

    try:
        code = await service.issue_code(client_id, redirect_uri)
    except OAuthError:
        logger.exception("[OAUTH] Could not issue code client_id=%s", client_id)
        return _oauth_error(status.HTTP_503_SERVICE_UNAVAILABLE, "temporarily_unavailable")

    return RedirectResponse(
        url=_with_query(redirect_uri, code=code, state=state),
        status_code=status.HTTP_302_FOUND,
    )


@router.post("/token", response_model=TokenResponse, response_model_exclude_none=True)
async def token(
    grant_type: str = Form(...),
    client_id: str = Form(...),
    client_secret: Optional[str] = Form(default=None),
    code: Optional[str] = Form(default=None),
    refresh_token: Optional[str] = Form(default=None),
    service: AccountLinkingService = Depends(get_account_linking),
):
    try:
        if grant_type == "authorization_code":
            if not code:
                raise InvalidGrant("code is required")
            grant = await service.exchange(code, client_id)
        elif grant_type == "refresh_token":
            if not refresh_token:
                raise InvalidGrant("refresh_token is required")
            grant = await service.refresh(refresh_token, client_id)
        else:
            raise UnsupportedGrantType(f"grant_type={grant_type!r} is not supported")
    except (InvalidGrant, UnsupportedGrantType) as e:
        return _oauth_error(status.HTTP_400_BAD_REQUEST, e.error_code, str(e))
    except OAuthError:
        logger.exception("[OAUTH] Token store failure grant_type=%s", grant_type)
        return _oauth_error(status.HTTP_503_SERVICE_UNAVAILABLE, "temporarily_unavailable")

    return TokenResponse(
        access_token=grant.access_token,
        refresh_token=grant.refresh_token,
        expires_in=grant.expires_in,
    )
