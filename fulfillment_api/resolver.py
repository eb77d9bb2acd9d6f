"""Resolución de la lectura de humedad desde el store.

Orden de evaluación:
1. Layout primario (por defecto "monitor" -> campo "SoilMoisture")
2. Layout secundario (por defecto "SoilMoisture", valor plano)
3. Nada registrado -> 0 (se asume el peor caso: seco)

Máximo dos lecturas secuenciales; la segunda solo si la primera no
trae valor. Un fallo del store NO se convierte en 0: se propaga como
StoreUnavailable para que el dispatch responda con error explícito.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from common.config import MoistureLayoutSettings

from .exceptions import StoreUnavailable
from .store.base import MoistureStore

logger = logging.getLogger(__name__)

MISSING_READING = 0


@dataclass(frozen=True)
class StorageLayout:
    """Ubicación de una lectura: path y, opcionalmente, campo anidado."""

    path: str
    field: Optional[str] = None

    def extract(self, document: Any) -> Any:
        if self.field is None:
            return document
        if not isinstance(document, Mapping):
            return None
        return document.get(self.field)


def layouts_from_settings(settings: MoistureLayoutSettings) -> tuple[StorageLayout, StorageLayout]:
    return (
        StorageLayout(settings.primary_path, settings.primary_field),
        StorageLayout(settings.fallback_path, settings.fallback_field),
    )


def normalize_reading(value: Any) -> Optional[int]:
    """Convierte el valor crudo en porcentaje entero.

    Returns:
        int redondeado, o None si el valor no es numérico (ausente).
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().rstrip("%")
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return int(round(number))


class ReadingResolver:
    """Obtiene la lectura de humedad probando layouts en orden."""

    def __init__(self, store: MoistureStore, layouts: Sequence[StorageLayout]) -> None:
        if not layouts:
            raise ValueError("at least one storage layout is required")
        self._store = store
        self._layouts = tuple(layouts)

    @property
    def layouts(self) -> tuple[StorageLayout, ...]:
        return self._layouts

    async def resolve(self) -> int:
        for layout in self._layouts:
            try:
                document = await self._store.read(layout.path)
            except StoreUnavailable:
                logger.warning("[RESOLVER] Store unavailable path=%s", layout.path)
                raise
            except Exception as e:
                logger.exception("[RESOLVER] Unexpected store error path=%s", layout.path)
                raise StoreUnavailable(
                    str(e) or type(e).__name__,
                    path=layout.path,
                    backend=self._store.backend_name,
                ) from e

            reading = normalize_reading(layout.extract(document))
            if reading is not None:
                logger.debug(
                    "[RESOLVER] Reading found path=%s field=%s value=%s",
                    layout.path,
                    layout.field,
                    reading,
                )
                return reading

            logger.debug("[RESOLVER] No reading at path=%s field=%s", layout.path, layout.field)

        logger.info("[RESOLVER] No reading recorded, defaulting to %s", MISSING_READING)
        return MISSING_READING
