"""
Environment helpers.

Developers often keep geocoder credentials in a `.env` file next to where they run
the CLI or uvicorn. `load_dotenv_if_present()` loads it once, best-effort:
- `TRIPDISTANCE_ENV_FILE` names the file explicitly;
- otherwise the nearest `.env` from the current working directory upwards is used.

Variables already set in the process environment always win.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from dotenv import find_dotenv, load_dotenv


@lru_cache
def load_dotenv_if_present() -> Path | None:
    """Load `.env` once if present; returns the loaded env path (or None)."""
    explicit = os.getenv("TRIPDISTANCE_ENV_FILE")
    if explicit:
        env_path = Path(explicit).expanduser().resolve()
    else:
        found = find_dotenv(usecwd=True)
        if not found:
            return None
        env_path = Path(found)

    if not env_path.is_file():
        return None
    load_dotenv(dotenv_path=env_path, override=False)
    return env_path
