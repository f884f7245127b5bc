"""Service-wide configuration loaded from the environment."""

import logging
import os
from typing import Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


def _optional_float(name: str) -> Optional[float]:
    value = os.getenv(name, "").strip()
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        logger.warning(f"⚠️ Ignoring non-numeric {name}={value!r}")
        return None


class FactCheckConfig(BaseModel):
    """Top-level configuration of the fact-checking service."""

    ai_provider: str = Field(default="chatgpt", description="Generative model provider (chatgpt|cohere)")
    store: str = Field(default="sqlite", description="Store backend (sqlite|memory)")
    db_path: str = Field(default="factcheckr.db", description="SQLite database file")
    cache_ttl: Optional[float] = Field(
        default=None,
        description="Seconds a stored result stays valid; unset means forever",
    )
    source_timeout: float = Field(default=15.0, description="Per-source time limit during evidence collection")
    log_level: str = Field(default="INFO", description="Root logging level")

    @classmethod
    def from_env(cls) -> "FactCheckConfig":
        """Create configuration from environment variables."""
        defaults = cls()
        return cls(
            ai_provider=os.getenv("FACTCHECK_AI_PROVIDER", defaults.ai_provider).lower(),
            store=os.getenv("FACTCHECK_STORE", defaults.store).lower(),
            db_path=os.getenv("FACTCHECK_DB_PATH", defaults.db_path),
            cache_ttl=_optional_float("FACTCHECK_CACHE_TTL_SECONDS"),
            source_timeout=float(os.getenv("FACTCHECK_SOURCE_TIMEOUT", defaults.source_timeout)),
            log_level=os.getenv("FACTCHECK_LOG_LEVEL", defaults.log_level).upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    """Root logging setup shared by every entry point."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
