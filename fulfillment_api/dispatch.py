"""Motor de dispatch de intents.

Flujo por request (sin estado entre requests):

    recibir -> clasificar protocolo -> resolver lectura (QUERY/Dialogflow)
            -> clasificar estado -> serializar -> responder

Estados terminales:
- responded-success: respuesta normal
- responded-error: fallo del store o del serializador
- responded-unrecognized: body no soportado

Cada invocación trabaja solo con variables locales, así que el engine
puede atender requests concurrentes sin locks.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence

from common.config import DeviceSettings

from .classification import (
    ProtocolVariant,
    WateringState,
    WateringThresholds,
    classify_protocol,
    classify_watering_state,
)
from .exceptions import StoreUnavailable
from .resolver import ReadingResolver
from .responses import (
    format_fulfillment,
    format_fulfillment_error,
    format_not_sure,
    format_query,
    format_query_error,
    format_sync,
    format_unrecognized,
)
from .schemas import ErrorResponse, FulfillmentResponse

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Unable to process request"


class DispatchOutcome(str, Enum):
    SUCCESS = "responded-success"
    ERROR = "responded-error"
    UNRECOGNIZED = "responded-unrecognized"


@dataclass(frozen=True)
class DispatchResult:
    """Resultado de un dispatch: variante, estado terminal y respuesta."""

    variant: ProtocolVariant
    outcome: DispatchOutcome
    response: FulfillmentResponse
    reading: Optional[int] = None
    state: Optional[WateringState] = None

    @property
    def body(self) -> dict:
        return self.response.to_body()


def _request_id(body: Any) -> Any:
    if isinstance(body, Mapping):
        return body.get("requestId")
    return None


def _query_text(body: Any) -> str:
    query_result = body.get("queryResult") if isinstance(body, Mapping) else None
    if not isinstance(query_result, Mapping):
        return ""
    text = query_result.get("queryText")
    return text.lower() if isinstance(text, str) else ""


class DispatchEngine:
    """Orquesta clasificación, resolución y serialización por request."""

    def __init__(
        self,
        resolver: ReadingResolver,
        device: DeviceSettings,
        *,
        thresholds: WateringThresholds = WateringThresholds(),
        query_keywords: Sequence[str] = (),
    ) -> None:
        self._resolver = resolver
        self._device = device
        self._thresholds = thresholds
        self._query_keywords = tuple(k.lower() for k in query_keywords if k)

    async def dispatch(self, body: Any) -> DispatchResult:
        variant = classify_protocol(body)
        request_id = _request_id(body)

        try:
            result = await self._handle(variant, body, request_id)
        except Exception:
            logger.exception("[DISPATCH] Unexpected failure variant=%s", variant.value)
            result = DispatchResult(
                variant=variant,
                outcome=DispatchOutcome.ERROR,
                response=self._fallback_response(variant, request_id),
            )

        logger.info(
            "[DISPATCH] variant=%s outcome=%s request_id=%s reading=%s state=%s",
            variant.value,
            result.outcome.value,
            request_id,
            result.reading,
            result.state.value if result.state else None,
        )
        return result

    async def _handle(self, variant: ProtocolVariant, body: Any, request_id: Any) -> DispatchResult:
        if variant is ProtocolVariant.SMART_HOME_SYNC:
            return DispatchResult(
                variant=variant,
                outcome=DispatchOutcome.SUCCESS,
                response=format_sync(request_id, self._device),
            )

        if variant is ProtocolVariant.SMART_HOME_QUERY:
            try:
                reading = await self._resolver.resolve()
            except StoreUnavailable:
                return DispatchResult(
                    variant=variant,
                    outcome=DispatchOutcome.ERROR,
                    response=format_query_error(request_id, self._device),
                )
            state = classify_watering_state(reading, self._thresholds)
            return DispatchResult(
                variant=variant,
                outcome=DispatchOutcome.SUCCESS,
                response=format_query(request_id, self._device, reading, state),
                reading=reading,
                state=state,
            )

        if variant is ProtocolVariant.DIALOGFLOW_FULFILLMENT:
            if not self._asks_for_moisture(body):
                return DispatchResult(
                    variant=variant,
                    outcome=DispatchOutcome.UNRECOGNIZED,
                    response=format_not_sure(),
                )
            try:
                reading = await self._resolver.resolve()
            except StoreUnavailable:
                return DispatchResult(
                    variant=variant,
                    outcome=DispatchOutcome.ERROR,
                    response=format_fulfillment_error(),
                )
            state = classify_watering_state(reading, self._thresholds)
            return DispatchResult(
                variant=variant,
                outcome=DispatchOutcome.SUCCESS,
                response=format_fulfillment(reading, state),
                reading=reading,
                state=state,
            )

        return DispatchResult(
            variant=variant,
            outcome=DispatchOutcome.UNRECOGNIZED,
            response=format_unrecognized(body),
        )

    def _asks_for_moisture(self, body: Any) -> bool:
        # Sin keywords configuradas se responde cualquier query de Dialogflow.
        if not self._query_keywords:
            return True
        text = _query_text(body)
        return any(keyword in text for keyword in self._query_keywords)

    def _fallback_response(self, variant: ProtocolVariant, request_id: Any) -> FulfillmentResponse:
        if variant is ProtocolVariant.SMART_HOME_QUERY:
            return format_query_error(request_id, self._device)
        if variant is ProtocolVariant.DIALOGFLOW_FULFILLMENT:
            return format_fulfillment_error()
        return ErrorResponse(error=INTERNAL_ERROR)
