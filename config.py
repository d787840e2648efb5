"""Runtime settings for the tax chatbot page."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_BACKEND_URL = "http://localhost:8000"


@dataclass(frozen=True)
class Settings:
    backend_url: str = DEFAULT_BACKEND_URL
    request_timeout: Optional[float] = None  # None waits indefinitely
    log_level: str = "INFO"
    transcript_height: int = 480


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the environment (and a .env file when reading os.environ)."""
    if environ is None:
        load_dotenv()
        environ = os.environ

    backend_url = environ.get("BACKEND_URL", "").strip().rstrip("/") or DEFAULT_BACKEND_URL

    raw_timeout = environ.get("BACKEND_TIMEOUT", "").strip()
    timeout = None
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ValueError(f"BACKEND_TIMEOUT must be a number of seconds, got {raw_timeout!r}") from None
        if timeout <= 0:
            raise ValueError(f"BACKEND_TIMEOUT must be positive, got {raw_timeout!r}")

    raw_height = environ.get("TRANSCRIPT_HEIGHT", "").strip()
    height = Settings.transcript_height
    if raw_height:
        try:
            height = int(raw_height)
        except ValueError:
            raise ValueError(f"TRANSCRIPT_HEIGHT must be an integer, got {raw_height!r}") from None

    log_level = environ.get("LOG_LEVEL", "").strip().upper() or Settings.log_level
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"LOG_LEVEL must be a logging level name such as INFO or DEBUG, got {log_level!r}")

    return Settings(
        backend_url=backend_url,
        request_timeout=timeout,
        log_level=log_level,
        transcript_height=height,
    )
