"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/TimerDeck/settings.json

Usage::

    settings = load_settings()
    settings.tick_interval_ms = 500
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .database.db import APP_SUPPORT_DIR
from .database.gateway import DEFAULT_STORAGE_KEY

logger = logging.getLogger(__name__)

SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── engine ────────────────────────────────────────────────────────
    tick_interval_ms: int = 1000

    # ── collaborators ─────────────────────────────────────────────────
    notifications_enabled: bool = True
    analytics_enabled: bool = True

    # ── storage ───────────────────────────────────────────────────────
    storage_key: str = DEFAULT_STORAGE_KEY
    database_url: str | None = None        # None → sqlite file in APP_SUPPORT_DIR

    # ── logging ───────────────────────────────────────────────────────
    log_level: str = "INFO"


def load_settings(path: Path = SETTINGS_PATH) -> Settings:
    """Load settings from disk, falling back to defaults."""
    if not path.exists():
        return Settings()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning(f"Ignoring unreadable settings file {path}: {exc}")
        return Settings()
    if not isinstance(data, dict):
        logger.warning(f"Ignoring settings file {path}: not a JSON object")
        return Settings()
    # Only use keys that exist in the dataclass
    valid_keys = {f.name for f in fields(Settings)}
    filtered = {k: v for k, v in data.items() if k in valid_keys}
    return Settings(**filtered)


def save_settings(settings: Settings, path: Path = SETTINGS_PATH) -> None:
    """Write settings to disk as JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
