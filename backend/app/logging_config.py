"""Process-wide logging setup driven by ``app_config.yaml``."""
from __future__ import annotations

import logging
import sys
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from app.config import AppConfig

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# chatty third-party loggers kept at WARNING unless we run at DEBUG
QUIET_LOGGERS = ("sqlalchemy.engine", "multipart")


def configure_logging(config: "AppConfig") -> None:
    """Install stdout (and optional file) handlers at the configured level."""
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if config.log_file is not None:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(config.log_file, encoding="utf-8"))

    level = logging.getLevelName(config.log_level)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if level <= logging.DEBUG else logging.WARNING)
