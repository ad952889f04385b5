"""Configuration loader that keeps all runtime constants centralized."""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

CONFIG_PATH = Path(__file__).resolve().parent / "app_config.yaml"


@dataclass(frozen=True)
class AppConfig:
    """Strongly-typed wrapper over the raw YAML document.

    Environment variables win over the file for the values that differ
    between deployments (storage backend, database URL, JWT secret, log level).
    """

    raw: Dict[str, Any]

    @property
    def version(self) -> str:
        return str(self.raw.get("version", "v1"))

    @property
    def storage(self) -> Dict[str, Any]:
        return self.raw.get("storage", {}) or {}

    @property
    def auth(self) -> Dict[str, Any]:
        return self.raw.get("auth", {}) or {}

    @property
    def pagination(self) -> Dict[str, Any]:
        return self.raw.get("pagination", {}) or {}

    @property
    def database_backend(self) -> str:
        return (os.getenv("STORAGE") or str(self.storage.get("backend", "sqlite"))).lower()

    @property
    def database_url(self) -> Optional[str]:
        return os.getenv("DATABASE_URL") or self.storage.get("database_url")

    @property
    def jwt_secret(self) -> str:
        return os.getenv("JWT_SECRET") or str(self.auth.get("jwt_secret", ""))

    @property
    def jwt_algorithm(self) -> str:
        return str(self.auth.get("algorithm", "HS256"))

    @property
    def token_expire_days(self) -> int:
        return int(self.auth.get("token_expire_days", 30))

    @property
    def cors_origins(self) -> List[str]:
        return list((self.raw.get("cors", {}) or {}).get("allow_origins", []))

    @property
    def log_level(self) -> str:
        logging_cfg = self.raw.get("logging", {}) or {}
        return (os.getenv("LOG_LEVEL") or str(logging_cfg.get("level", "INFO"))).upper()

    @property
    def log_file(self) -> Optional[Path]:
        logging_cfg = self.raw.get("logging", {}) or {}
        value = logging_cfg.get("file")
        return Path(value) if value else None

    @property
    def seed_on_startup(self) -> bool:
        return bool((self.raw.get("seed", {}) or {}).get("on_startup", False))

    @property
    def default_page_size(self) -> int:
        return int(self.pagination.get("default_limit", 10))

    @property
    def max_page_size(self) -> int:
        return int(self.pagination.get("max_limit", 100))


@lru_cache(maxsize=1)
def get_settings(path: Path | None = None) -> AppConfig:
    """Load configuration once per process."""

    config_path = path or CONFIG_PATH
    data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):  # pragma: no cover - invalid file guard
        raise ValueError("Configuration file must define a mapping at the top level.")
    return AppConfig(raw=data)
