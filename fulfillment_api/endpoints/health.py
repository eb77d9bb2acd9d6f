"""Health and readiness endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from ..dependencies import get_moisture_store
from ..store import MoistureStore

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    """Liveness probe: ok mientras el proceso esté vivo."""
    return {"status": "ok"}


@router.get("/ready")
async def ready(store: MoistureStore = Depends(get_moisture_store)):
    """Readiness probe: verifica conectividad con el store."""
    if not await store.ping():
        raise HTTPException(status_code=503, detail="not ready")
    return {"status": "ready", "store": store.backend_name}
