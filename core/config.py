"""
Environment configuration.

Values come from the process environment, with a local .env file loaded first.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


DEFAULT_LOCAL_CACHE_PATH = Path("logs") / "local_cache.sqlite"


def get_learner_id(explicit: Optional[str] = None) -> Optional[str]:
    """
    Resolve the learner identity.

    An explicit identity (e.g. from a URL parameter) wins over LEARNER_ID.
    Blank values count as absent, which means local-only mode.
    """
    for candidate in (explicit, os.getenv("LEARNER_ID")):
        if candidate and candidate.strip():
            return candidate.strip()
    return None


def get_local_cache_path() -> Path:
    """Path of the sqlite file backing the local durable cache."""
    return Path(os.getenv("LOCAL_CACHE_PATH", str(DEFAULT_LOCAL_CACHE_PATH)))


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def is_test_mode() -> bool:
    """Check if running in test mode."""
    return os.getenv("TEST_MODE", "false").lower() == "true"


def get_words_csv_path() -> Optional[Path]:
    """Offline word list; when set, words are read from it instead of MongoDB."""
    path = os.getenv("WORDS_CSV_PATH")
    return Path(path) if path else None
