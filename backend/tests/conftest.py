"""Shared fixtures: in-memory storage, a fresh service per test, auth headers."""
from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone

# deps builds its repository at import time; keep tests off the SQLite file
os.environ["STORAGE"] = "memory"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.config import get_settings  # noqa: E402
from app.main import app  # noqa: E402
from application.revenue_service import RevenueService  # noqa: E402
from application.token_service import create_access_token  # noqa: E402
from infrastructure.memory_store import InMemoryRevenueRepository  # noqa: E402
from interfaces import deps  # noqa: E402


class SteppingClock:
    """Each call returns a moment one second after the previous one."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2025, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def repository():
    return InMemoryRevenueRepository()


@pytest.fixture
def service(settings, repository):
    return RevenueService(settings, repository, clock=SteppingClock())


@pytest.fixture
def client(service, repository):
    app.dependency_overrides[deps.get_revenue_service] = lambda: service
    app.dependency_overrides[deps.get_repository] = lambda: repository
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(settings):
    token = create_access_token("admin-1", "admin", settings)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def employee_headers(settings):
    token = create_access_token("employee-1", "employee", settings)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def example_records(service):
    """January 100 + 50 and February 200, all in 2025."""
    return [
        service.create_record({"month": "January", "year": 2025, "revenue": 100}),
        service.create_record({"month": "January", "year": 2025, "revenue": 50}),
        service.create_record({"month": "February", "year": 2025, "revenue": 200}),
    ]
