"""
Configuration for planboard.

All settings come from environment variables with defaults suitable for
local development.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 100
CONTENT_MAX_LENGTH = 1000

STORE_BACKENDS = ("memory", "sql")


@dataclass(frozen=True)
class Settings:
    """Runtime settings.

    Attributes:
        store_backend: ``memory`` or ``sql``
        database_url: SQLAlchemy URL used by the ``sql`` backend
        log_level: root log level name
    """

    store_backend: str = "memory"
    database_url: str = "sqlite:///./planboard.db"
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.store_backend not in STORE_BACKENDS:
            raise ValueError(
                f"Unknown store backend {self.store_backend!r}, expected one of {STORE_BACKENDS}"
            )

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment variables."""
        return cls(
            store_backend=os.getenv("PLANBOARD_STORE", "memory").lower(),
            database_url=os.getenv("DATABASE_URL", "sqlite:///./planboard.db"),
            log_level=os.getenv("PLANBOARD_LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.debug("Logging configured at %s", level)
