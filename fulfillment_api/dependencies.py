"""Dependencias FastAPI.

Los componentes se crean una vez en create_app() y se guardan en
app.state; los endpoints los obtienen por request.
"""

from __future__ import annotations

from fastapi import Request

from .dispatch import DispatchEngine
from .oauth import AccountLinkingService
from .store import MoistureStore


def get_dispatch_engine(request: Request) -> DispatchEngine:
    return request.app.state.dispatch_engine


def get_moisture_store(request: Request) -> MoistureStore:
    return request.app.state.moisture_store


def get_account_linking(request: Request) -> AccountLinkingService:
    return request.app.state.account_linking
