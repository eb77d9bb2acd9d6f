"""MoistureStore - Interface base para los backends de lectura.

Define el contrato común que implementan Firebase, Redis y memoria.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class MoistureStore(ABC):
    """Store clave-valor de documentos con lecturas puntuales por path.

    Cada backend traduce los errores de su librería a StoreUnavailable.
    """

    @abstractmethod
    async def read(self, path: str) -> Any:
        """Lee el valor en `path`.

        Returns:
            El valor almacenado (número, string, dict) o None si no existe.

        Raises:
            StoreUnavailable: si el backend no responde.
        """

    async def ping(self) -> bool:
        """Verifica conectividad. Por defecto, siempre disponible."""
        return True

    async def close(self) -> None:
        """Libera conexiones."""
        return None

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Nombre del backend: firebase, redis, memory."""
