"""Módulo de clasificación.

Estructura:
- models.py: Enums (ProtocolVariant, WateringState) y umbrales
- protocol_classifier.py: Clasificación del request por forma del body
- state_classifier.py: Clasificación de la lectura en estado de riego
"""

from .models import ProtocolVariant, WateringState, WateringThresholds
from .protocol_classifier import (
    QUERY_INTENT,
    SYNC_INTENT,
    classify_protocol,
    extract_smart_home_intent,
    matches_known_shape,
)
from .state_classifier import classify_watering_state

__all__ = [
    "ProtocolVariant",
    "WateringState",
    "WateringThresholds",
    "SYNC_INTENT",
    "QUERY_INTENT",
    "classify_protocol",
    "extract_smart_home_intent",
    "matches_known_shape",
    "classify_watering_state",
]
