"""Clasificador de protocolo por forma del body.

Distingue entre:
1. Smart Home SYNC  (inputs[0].intent == action.devices.SYNC)
2. Smart Home QUERY (inputs[0].intent == action.devices.QUERY)
3. Dialogflow       (queryResult presente)
4. Cualquier otra cosa -> UNRECOGNIZED

Nunca lanza excepción: un body sin `inputs`, con `inputs` vacío o que
ni siquiera es un objeto JSON se trata como "no es Smart Home".
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Optional

from .models import ProtocolVariant

SYNC_INTENT = "action.devices.SYNC"
QUERY_INTENT = "action.devices.QUERY"

KNOWN_TOP_LEVEL_FIELDS = ("inputs", "queryResult")


def extract_smart_home_intent(body: Any) -> Optional[str]:
    """Retorna inputs[0].intent si existe, o None."""
    if not isinstance(body, Mapping):
        return None

    inputs = body.get("inputs")
    if isinstance(inputs, (str, bytes)) or not isinstance(inputs, Sequence) or not inputs:
        return None

    first = inputs[0]
    if not isinstance(first, Mapping):
        return None

    intent = first.get("intent")
    return intent if isinstance(intent, str) else None


def matches_known_shape(body: Any) -> bool:
    """True si el body tiene al menos un campo top-level conocido."""
    if not isinstance(body, Mapping):
        return False
    return any(key in body for key in KNOWN_TOP_LEVEL_FIELDS)


def classify_protocol(body: Any) -> ProtocolVariant:
    intent = extract_smart_home_intent(body)
    if intent == SYNC_INTENT:
        return ProtocolVariant.SMART_HOME_SYNC
    if intent == QUERY_INTENT:
        return ProtocolVariant.SMART_HOME_QUERY

    if isinstance(body, Mapping) and body.get("queryResult") is not None:
        return ProtocolVariant.DIALOGFLOW_FULFILLMENT

    return ProtocolVariant.UNRECOGNIZED
