"""Modelos de clasificación.

Enums que representan la variante de protocolo de un request y el
estado de riego derivado de una lectura de humedad.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ProtocolVariant(str, Enum):
    """Variante de protocolo detectada a partir de la forma del body."""

    SMART_HOME_SYNC = "smart-home-sync"
    SMART_HOME_QUERY = "smart-home-query"
    DIALOGFLOW_FULFILLMENT = "dialogflow-fulfillment"
    UNRECOGNIZED = "unrecognized"


class WateringState(str, Enum):
    """Estado descriptivo de riego."""

    DRY = "dry"
    NEEDS_WATERING = "needs-watering"
    WELL_WATERED = "well-watered"


@dataclass(frozen=True)
class WateringThresholds:
    """Umbrales de clasificación (límites superiores inclusivos).

    reading <= dry_max                       -> DRY
    dry_max < reading <= needs_watering_max  -> NEEDS_WATERING
    reading > needs_watering_max             -> WELL_WATERED
    """

    dry_max: int = 30
    needs_watering_max: int = 60
