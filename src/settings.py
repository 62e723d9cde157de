"""Static configuration for explbot.

All user-editable settings (database, display, limits, logging) live in a
single JSON file for quick edits without touching Python. The file defaults
to config.json in the project root; set EXPLBOT_CONFIG to point elsewhere,
which is required for non-editable installs. Relative paths inside the file
are resolved against the file's own directory.
"""

import json
import os

from core.config import ExplConfig

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

CONFIG_ENV_VAR = "EXPLBOT_CONFIG"
CONFIG_PATH = os.path.abspath(os.getenv(CONFIG_ENV_VAR) or os.path.join(PROJECT_ROOT, "config.json"))

# Base for relative database and log paths.
BASE_DIR = os.path.dirname(CONFIG_PATH)


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(
            f"Config file not found: {CONFIG_PATH} (set {CONFIG_ENV_VAR} to override)"
        )

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)


def _resolve_path(path: str) -> str:
    if os.path.isabs(path):
        return path
    return os.path.join(BASE_DIR, path)


_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# Where to store the SQLite database. Relative paths follow the config file.
_database = _CONFIG.get("database", {})
DB_PATH = _resolve_path(_database.get("path", "explbot.db"))

# Display and size settings for !add / !expl.
# - TIME_ZONE / DATETIME_FORMAT: how entry timestamps are shown
# - limits are UTF-16 code units for terms/explanations, entries for results
_expl = _CONFIG.get("expl", {})
TIME_ZONE = _expl.get("time_zone", "UTC")
DATETIME_FORMAT = _expl.get("datetime_format", "%Y-%m-%d %H:%M")
EXPL_CONFIG = ExplConfig(
    max_term_units=int(_expl.get("max_term_units", 50)),
    max_explanation_units=int(_expl.get("max_explanation_units", 200)),
    max_results=int(_expl.get("max_results", 50)),
)

# Reply formatting: "html" or "markdown".
_responses = _CONFIG.get("responses", {})
PARSE_MODE = _responses.get("parse_mode", "html")

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
