"""Store en memoria para desarrollo y tests."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Optional

from .base import MoistureStore


class InMemoryMoistureStore(MoistureStore):
    """Árbol de documentos en memoria con paths estilo Realtime Database.

    `read("monitor/SoilMoisture")` recorre los niveles separados por "/".
    """

    def __init__(self, data: Optional[Dict[str, Any]] = None) -> None:
        self._data: Dict[str, Any] = dict(data or {})
        self.reads: list[str] = []

    async def read(self, path: str) -> Any:
        self.reads.append(path)
        node: Any = self._data
        for part in _split_path(path):
            if not isinstance(node, Mapping) or part not in node:
                return None
            node = node[part]
        return node

    def set(self, path: str, value: Any) -> None:
        parts = _split_path(path)
        if not parts:
            raise ValueError("path must not be empty")
        node = self._data
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[parts[-1]] = value

    @property
    def backend_name(self) -> str:
        return "memory"


def _split_path(path: str) -> list[str]:
    return [part for part in path.strip("/").split("/") if part]
