"""Respuestas para requests no reconocidos.

Dos sub-casos:
- El body trae algún campo conocido (inputs/queryResult) pero no una
  variante soportada, ej. action.devices.EXECUTE -> texto "not sure".
- El body no se parece a nada conocido -> {"error": "..."}.
"""

from __future__ import annotations

from typing import Any, Union

from ..classification.protocol_classifier import matches_known_shape
from ..schemas import ErrorResponse, FulfillmentTextResponse
from .dialogflow import format_not_sure

UNRECOGNIZED_FORMAT_ERROR = "Unrecognized request format"


def format_unrecognized(body: Any) -> Union[FulfillmentTextResponse, ErrorResponse]:
    if matches_known_shape(body):
        return format_not_sure()
    return ErrorResponse(error=UNRECOGNIZED_FORMAT_ERROR)
