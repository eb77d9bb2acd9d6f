"""Serializadores de respuesta, uno por variante de protocolo.

- smart_home.py: SYNC (discovery) y QUERY (estado del sensor)
- dialogflow.py: fulfillmentText en lenguaje natural
- fallback.py: requests no reconocidos
"""

from .dialogflow import (
    NOT_SURE_TEXT,
    STATE_MESSAGES,
    STORE_ERROR_TEXT,
    build_moisture_message,
    format_fulfillment,
    format_fulfillment_error,
    format_not_sure,
)
from .fallback import UNRECOGNIZED_FORMAT_ERROR, format_unrecognized
from .smart_home import (
    ERROR_DEVICE_OFFLINE,
    SENSOR_NAME,
    format_query,
    format_query_error,
    format_sync,
)

__all__ = [
    "NOT_SURE_TEXT",
    "STATE_MESSAGES",
    "STORE_ERROR_TEXT",
    "UNRECOGNIZED_FORMAT_ERROR",
    "ERROR_DEVICE_OFFLINE",
    "SENSOR_NAME",
    "build_moisture_message",
    "format_fulfillment",
    "format_fulfillment_error",
    "format_not_sure",
    "format_unrecognized",
    "format_query",
    "format_query_error",
    "format_sync",
]
