"""Fixtures compartidas para los tests del webhook."""

from __future__ import annotations

from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient

from common.config import DeviceSettings, Settings
from fulfillment_api.dispatch import DispatchEngine
from fulfillment_api.exceptions import StoreUnavailable
from fulfillment_api.main import create_app
from fulfillment_api.oauth import InMemoryExpiringStore
from fulfillment_api.resolver import ReadingResolver, StorageLayout
from fulfillment_api.store import InMemoryMoistureStore, MoistureStore


class FailingStore(MoistureStore):
    """Store que falla en cada lectura (simula caída del backend)."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error or StoreUnavailable("connection refused", backend="failing")
        self.reads: List[str] = []

    async def read(self, path: str) -> Any:
        self.reads.append(path)
        raise self.error

    async def ping(self) -> bool:
        return False

    @property
    def backend_name(self) -> str:
        return "failing"


# =============================================================================
# FIXTURES
# =============================================================================

DEFAULT_LAYOUTS = (
    StorageLayout("monitor", "SoilMoisture"),
    StorageLayout("SoilMoisture"),
)


@pytest.fixture
def device() -> DeviceSettings:
    return DeviceSettings(
        device_id="sensor-1",
        name="Soil Moisture Sensor",
        nicknames=("plant sensor",),
        default_names=("Soil Moisture Sensor",),
        room_hint="Garden",
        agent_user_id="user-123",
    )


@pytest.fixture
def settings(device: DeviceSettings) -> Settings:
    return Settings(store_backend="memory", device=device, content_security_policy="default-src 'self';")


@pytest.fixture
def store_data() -> Dict[str, Any]:
    return {"monitor": {"SoilMoisture": 75}}


@pytest.fixture
def memory_store(store_data: Dict[str, Any]) -> InMemoryMoistureStore:
    return InMemoryMoistureStore(store_data)


@pytest.fixture
def failing_store() -> FailingStore:
    return FailingStore()


def make_engine(store: MoistureStore, device: DeviceSettings, **kwargs: Any) -> DispatchEngine:
    return DispatchEngine(ReadingResolver(store, DEFAULT_LAYOUTS), device, **kwargs)


@pytest.fixture
def engine(memory_store: InMemoryMoistureStore, device: DeviceSettings) -> DispatchEngine:
    return make_engine(memory_store, device)


@pytest.fixture
def oauth_store() -> InMemoryExpiringStore:
    return InMemoryExpiringStore()


@pytest.fixture
def client(settings: Settings, memory_store: InMemoryMoistureStore, oauth_store: InMemoryExpiringStore) -> TestClient:
    app = create_app(settings, store=memory_store, oauth_store=oauth_store)
    return TestClient(app)


@pytest.fixture
def failing_client(settings: Settings, failing_store: FailingStore, oauth_store: InMemoryExpiringStore) -> TestClient:
    app = create_app(settings, store=failing_store, oauth_store=oauth_store)
    return TestClient(app)
