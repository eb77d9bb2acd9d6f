"""Endpoint del webhook de fulfillment.

Atiende Smart Home (SYNC/QUERY) y Dialogflow en la misma ruta. Siempre
responde HTTP 200: los asistentes esperan 200 incluso ante fallos lógicos,
el error va dentro del body de cada protocolo.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..dependencies import get_dispatch_engine
from ..dispatch import DispatchEngine
from ..exceptions import MalformedRequest
from ..schemas import WebhookStatus

logger = logging.getLogger(__name__)

router = APIRouter(tags=["webhook"])


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError as e:
        raise MalformedRequest("request body is not valid JSON") from e


@router.get("/webhook", response_model=WebhookStatus)
async def webhook_status() -> WebhookStatus:
    """Health check del webhook."""
    return WebhookStatus()


@router.post("/webhook")
async def webhook(
    request: Request,
    engine: DispatchEngine = Depends(get_dispatch_engine),
) -> JSONResponse:
    try:
        body = await _read_json(request)
    except MalformedRequest as e:
        # Body vacío o no-JSON: se clasifica como formato no reconocido.
        logger.warning("[WEBHOOK] %s", e)
        body = None
    result = await engine.dispatch(body)
    return JSONResponse(content=result.body, status_code=200)


# Ruta histórica del deploy serverless (/api/webhook). Kept for compatibility.
router.add_api_route("/api/webhook", webhook, methods=["POST"], include_in_schema=False)
router.add_api_route("/api/webhook", webhook_status, methods=["GET"], include_in_schema=False)
