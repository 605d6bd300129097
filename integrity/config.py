"""
Typing Integrity Configuration

Reads service settings from environment variables. ``main.py`` loads a
``.env`` file (python-dotenv) before the first call.

Variables:
- INTEGRITY_LOG_LEVEL: Root log level (default: INFO)
- INTEGRITY_HOST: Bind host (default: 0.0.0.0)
- INTEGRITY_PORT: Bind port (default: 8000)
- INTEGRITY_CORS_ORIGINS: Comma separated origins (default: *)
"""

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List


logger = logging.getLogger(__name__)

ENGINE_VERSION = "1.0.0"


@dataclass(frozen=True)
class Settings:
    """Immutable service settings."""

    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    version: str = ENGINE_VERSION


def load_settings() -> Settings:
    """Build Settings from the current environment."""
    raw_port = os.getenv("INTEGRITY_PORT", "8000")
    try:
        port = int(raw_port)
    except ValueError:
        logger.warning(f"Invalid INTEGRITY_PORT {raw_port!r}, falling back to 8000")
        port = 8000

    origins = [
        origin.strip()
        for origin in os.getenv("INTEGRITY_CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ]

    return Settings(
        log_level=os.getenv("INTEGRITY_LOG_LEVEL", "INFO").upper(),
        host=os.getenv("INTEGRITY_HOST", "0.0.0.0"),
        port=port,
        cors_origins=origins or ["*"],
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide cached settings."""
    return load_settings()
