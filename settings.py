"""JSON-based picker preferences (read-only)."""

import json
import logging
import os

from calendar_logic import parse_weekday

logger = logging.getLogger(__name__)

_SETTINGS_PATH = os.path.join(os.path.expanduser("~"), ".calendar-picker-settings.json")

_DEFAULTS = {
    "week_starts_on": 6,  # Sunday
    "show_week_numbers": False,
    "show_jump_buttons": True,
    "dark_mode": False,
    "drag_min_distance": 10,
}

_BOOL_KEYS = ("show_week_numbers", "show_jump_buttons", "dark_mode")


def load_settings(path: str | None = None) -> dict:
    """Load settings from disk, returning defaults for missing or invalid keys."""
    settings = dict(_DEFAULTS)
    path = path or _SETTINGS_PATH
    try:
        with open(path, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except FileNotFoundError:
        return settings
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Could not read settings from %s: %s", path, exc)
        return settings
    if not isinstance(stored, dict):
        logger.warning("Ignoring settings in %s: expected a JSON object", path)
        return settings

    if "week_starts_on" in stored:
        try:
            settings["week_starts_on"] = parse_weekday(stored["week_starts_on"])
        except ValueError as exc:
            logger.warning("Ignoring week_starts_on: %s", exc)
    for key in _BOOL_KEYS:
        if key in stored:
            if isinstance(stored[key], bool):
                settings[key] = stored[key]
            else:
                logger.warning("Ignoring %s: expected true/false, got %r", key, stored[key])
    if "drag_min_distance" in stored:
        value = stored["drag_min_distance"]
        if isinstance(value, int) and not isinstance(value, bool) and value > 0:
            settings["drag_min_distance"] = value
        else:
            logger.warning("Ignoring drag_min_distance: expected a positive int, got %r", value)
    return settings
