# config.py
"""
Settings
--------
Environment-driven configuration. A local .env file is loaded first so
development keys (OPENAI_API_KEY) never have to be exported by hand.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    port: int = 5000
    log_level: str = "INFO"
    max_terms: int = 200
    max_terms_limit: int = 700
    scrape_concurrency: int = 5
    scrape_timeout: float = 15.0
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"


def get_settings() -> Settings:
    return Settings(
        port=_int_env("PORT", 5000),
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        max_terms=_int_env("KEYWORDS_MAX_TERMS", 200),
        max_terms_limit=_int_env("KEYWORDS_MAX_TERMS_LIMIT", 700),
        scrape_concurrency=max(1, _int_env("SCRAPE_CONCURRENCY", 5)),
        scrape_timeout=_float_env("SCRAPE_TIMEOUT", 15.0),
        openai_api_key=os.environ.get("OPENAI_API_KEY") or None,
        openai_model=os.environ.get("OPENAI_MODEL", "gpt-4o-mini"),
    )


def setup_logging(level: str = "INFO"):
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
