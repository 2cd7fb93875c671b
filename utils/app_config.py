"""Pre-DB bootstrap configuration. Zero imports from the rest of the app.

Stores user preferences that must be known before opening the DB (db_folder,
log_level). Config lives in ~/.iexpense/config.json.
"""
import json
import logging
from pathlib import Path

CONFIG_DIR = Path.home() / ".iexpense"
CONFIG_FILE = CONFIG_DIR / "config.json"

logger = logging.getLogger(__name__)


def load_config(path: Path | None = None) -> dict:
    """Returns {} on missing or corrupt file; never raises."""
    path = path or CONFIG_FILE
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return {}
    return data if isinstance(data, dict) else {}


def get_db_folder(path: Path | None = None) -> str | None:
    """Return config["db_folder"] or None if not set."""
    return load_config(path).get("db_folder")


def get_log_level(path: Path | None = None) -> str:
    level = load_config(path).get("log_level", "INFO")
    return level.upper() if isinstance(level, str) else "INFO"
