"""Clasificador de estado de riego."""

from __future__ import annotations

from .models import WateringState, WateringThresholds

DEFAULT_THRESHOLDS = WateringThresholds()


def classify_watering_state(
    reading: int,
    thresholds: WateringThresholds = DEFAULT_THRESHOLDS,
) -> WateringState:
    """Clasifica una lectura de humedad (%) en un estado de riego.

    Función total: valores negativos caen en DRY y valores >100 en
    WELL_WATERED por las mismas comparaciones.
    """
    if reading > thresholds.needs_watering_max:
        return WateringState.WELL_WATERED
    if reading > thresholds.dry_max:
        return WateringState.NEEDS_WATERING
    return WateringState.DRY
