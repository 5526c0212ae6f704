import json
import os

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "outgrid")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")
LOG_PATH = os.path.join(CONFIG_DIR, "outgrid.log")

# default settings
SAMPLE_LIMIT_DEFAULT = 50
FILTER_MODE_DEFAULT = "query"
LOG_LEVEL_DEFAULT = "WARNING"

_FILTER_MODES = {"query", "regex"}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}


def ensure_config_dirs():
    os.makedirs(CONFIG_DIR, exist_ok=True)


def load_config():
    cfg = {
        "SAMPLE_LIMIT": SAMPLE_LIMIT_DEFAULT,
        "FILTER_MODE": FILTER_MODE_DEFAULT,
        "LOG_LEVEL": LOG_LEVEL_DEFAULT,
    }

    if not os.path.exists(CONFIG_JSON):
        return cfg

    try:
        with open(CONFIG_JSON, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return cfg
    if not isinstance(data, dict):
        return cfg

    limit = data.get("sample_limit")
    if isinstance(limit, int) and not isinstance(limit, bool):
        cfg["SAMPLE_LIMIT"] = limit

    mode = data.get("filter_mode")
    if isinstance(mode, str) and mode.lower() in _FILTER_MODES:
        cfg["FILTER_MODE"] = mode.lower()

    level = data.get("log_level")
    if isinstance(level, str) and level.upper() in _LOG_LEVELS:
        cfg["LOG_LEVEL"] = level.upper()

    return cfg
