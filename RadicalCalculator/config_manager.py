# config_manager.py
import json
import logging
import math
from pathlib import Path

from . import error as E

logger = logging.getLogger(__name__)

config_json = Path(__file__).resolve().parent.parent / "config.json"


DEFAULT_SETTINGS = {
    "decimal_places": 10,
    "radical_precision": 0.0001,
    "max_exact_integer": 1000000000000,
    "degree_mode": False,
    "approximate_radicals": True,
    "auto_ans": True,
    "history_size": 50,
    "log_level": "WARNING",
}

# Inclusive bounds for the numeric settings
SETTING_RANGES = {
    "decimal_places": (0, 100),
    "radical_precision": (0, 1),
    "max_exact_integer": (1, 10 ** 14),
    "history_size": (0, 10000),
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def is_valid_setting(key_value, new_value):
    """Check a value against the type of its default and the range of the setting."""
    default = DEFAULT_SETTINGS[key_value]

    # bool is an int subclass, so it is checked first in both directions
    if isinstance(default, bool) or isinstance(new_value, bool):
        return isinstance(default, bool) and isinstance(new_value, bool)

    if isinstance(default, (int, float)):
        if isinstance(default, int) and not isinstance(new_value, int):
            return False
        if not isinstance(new_value, (int, float)):
            return False
        if isinstance(new_value, float) and not math.isfinite(new_value):
            return False
        low, high = SETTING_RANGES[key_value]
        return low <= new_value <= high

    if key_value == "log_level":
        return isinstance(new_value, str) and new_value.upper() in LOG_LEVELS

    return isinstance(new_value, type(default))



def load_setting_value(key_value):
    """Return one setting, or every setting for key_value == "all".

    Missing keys (and a missing or broken config.json) fall back to DEFAULT_SETTINGS.
    """
    settings_dict = dict(DEFAULT_SETTINGS)
    try:
        with open(config_json, 'r', encoding= 'utf-8') as f:
            stored = json.load(f)

        if isinstance(stored, dict):
            for key, value in stored.items():
                if key in DEFAULT_SETTINGS and not is_valid_setting(key, value):
                    logger.warning("Ignoring invalid value %r for setting %s in %s", value, key, config_json)
                    continue
                settings_dict[key] = value
        else:
            logger.warning("Ignoring %s: expected a JSON object", config_json)

    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.debug("Using default settings (%s)", e)


    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, 0)


def resolve_settings(settings=None):
    """Merge caller-supplied settings over the defaults; read config.json when none are given."""
    if settings is None:
        return load_setting_value("all")
    merged = dict(DEFAULT_SETTINGS)
    merged.update(settings)
    return merged


def save_setting(settings_dict):
    try:
        with open (config_json, 'w', encoding= 'utf-8') as f:
            json.dump(settings_dict, f, indent=4)
            return settings_dict

    except OSError as e:
        raise E.ConfigError(f"Settings could not be saved: {e}", code="5000")


def update_setting(key_value, new_value):
    """Change one known setting and persist the full settings dict."""
    if key_value not in DEFAULT_SETTINGS:
        raise E.ConfigError(f"Unknown setting: {key_value}", code="5001")
    if not is_valid_setting(key_value, new_value):
        raise E.ConfigError(f"Invalid value for {key_value}: {new_value!r}", code="5002")
    all_settings = load_setting_value("all")
    all_settings[key_value] = new_value
    return save_setting(all_settings)
