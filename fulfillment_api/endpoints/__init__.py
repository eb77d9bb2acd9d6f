"""Módulo de endpoints HTTP.

Contiene todos los endpoints de la API organizados por función.
"""

from .health import router as health_router
from .oauth import router as oauth_router
from .webhook import router as webhook_router

__all__ = [
    "health_router",
    "oauth_router",
    "webhook_router",
]
