import json
import logging
import os
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Optional

from core.deck import CATEGORIES

logger = logging.getLogger(__name__)

SETTINGS_ENV = "CARD_DRAWER_SETTINGS"
SETTINGS_FILE = Path("data/settings.json")
CARDS_PER_ROW_MIN = 1
CARDS_PER_ROW_MAX = 6

DEFAULT_SETTINGS: Dict[str, Any] = {
    "allow_repeats": False,
    "default_category": CATEGORIES[0],

    # Drawn-card grid width.
    "cards_per_row": 4,
    "show_tip": True,
}


def settings_path() -> Path:
    env = os.getenv(SETTINGS_ENV)
    return Path(env) if env else SETTINGS_FILE


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load app settings, merged with defaults. The file is never written."""
    merged = deepcopy(DEFAULT_SETTINGS)
    path = path or settings_path()
    if not path.exists():
        return merged

    try:
        with open(path, "r", encoding="utf-8") as f:
            loaded = json.load(f)
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return merged

    if not isinstance(loaded, dict):
        logger.warning("Ignoring settings file %s: expected a JSON object", path)
        return merged

    for k in DEFAULT_SETTINGS:
        if k in loaded:
            merged[k] = loaded[k]

    for k in ("allow_repeats", "show_tip"):
        if not isinstance(merged[k], bool):
            merged[k] = DEFAULT_SETTINGS[k]

    if merged["default_category"] not in CATEGORIES:
        merged["default_category"] = DEFAULT_SETTINGS["default_category"]

    # Clamp the grid width to what the layout supports.
    try:
        cols = int(merged["cards_per_row"])
    except (TypeError, ValueError):
        cols = DEFAULT_SETTINGS["cards_per_row"]
    merged["cards_per_row"] = max(CARDS_PER_ROW_MIN, min(cols, CARDS_PER_ROW_MAX))

    logger.debug("Loaded settings from %s", path)
    return merged
