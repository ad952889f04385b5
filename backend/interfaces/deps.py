"""Process-scoped singletons for settings, database, repository, and services.

The storage backend comes from ``storage.backend`` in app_config.yaml
(or the ``STORAGE`` environment variable). Routers never touch these globals
directly: they receive them through the ``get_*`` dependency functions, which
tests replace via ``app.dependency_overrides``.
"""
from __future__ import annotations

import logging
from typing import Optional

from app.config import AppConfig, get_settings
from application.revenue_service import RevenueService
from infrastructure.database import Database
from infrastructure.memory_store import InMemoryRevenueRepository
from infrastructure.repository import RevenueRepository
from infrastructure.sqlite_repo import SQLRevenueRepository

logger = logging.getLogger(__name__)

settings = get_settings()
database: Optional[Database] = None


def _create_repository(config: AppConfig) -> RevenueRepository:
    """Pick the repository implementation named by the configuration."""
    global database
    backend = config.database_backend
    if backend == "memory":
        return InMemoryRevenueRepository()
    elif backend == "sqlite":
        database = Database(config.database_url)
        return SQLRevenueRepository(database)
    else:
        raise ValueError(f"Unknown database backend: {backend}. Supported: sqlite, memory")


repository = _create_repository(settings)
revenue_service = RevenueService(settings, repository)

logger.info("Storage backend: %s", settings.database_backend)


def get_app_settings() -> AppConfig:
    return settings


def get_repository() -> RevenueRepository:
    return repository


def get_revenue_service() -> RevenueService:
    return revenue_service


def shutdown() -> None:
    if database is not None:
        database.dispose()
