"""
Settings Module for the Grid Pathfinding Visualizer

Reads user preferences from a JSON file.  Settings live in
gridsearch.json in the working directory unless another path is given.
The file is optional and is never written: grids are not persisted.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from algorithms import Algorithm
from engine import SPEED_PRESETS

logger = logging.getLogger(__name__)

# Settings file location (working directory)
SETTINGS_FILE = Path("gridsearch.json")

# Default settings
DEFAULT_SETTINGS: Dict[str, Any] = {
    "rows": 20,
    "cols": 20,
    "algorithm": Algorithm.ASTAR.value,
    "speed": "medium",
    "cell_size": 30,
    "debug": False,
    "host": "127.0.0.1",
    "port": 5000,
    "max_workspaces": 64,
}


def load_settings(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load settings from a JSON file.

    Args:
        path: Settings file; defaults to SETTINGS_FILE

    Returns:
        Settings dictionary. Returns defaults if file missing or invalid,
        and falls back per key for values that make no sense.
    """
    settings_file = Path(path) if path is not None else SETTINGS_FILE

    if not settings_file.exists():
        logger.debug("Settings file not found, using defaults")
        return DEFAULT_SETTINGS.copy()

    try:
        with open(settings_file, 'r', encoding='utf-8') as f:
            settings = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return DEFAULT_SETTINGS.copy()

    if not isinstance(settings, dict):
        logger.warning("Settings file does not hold a JSON object, using defaults")
        return DEFAULT_SETTINGS.copy()

    # Merge with defaults to handle missing keys
    result = DEFAULT_SETTINGS.copy()
    result.update(settings)
    result = validate_settings(result)
    logger.debug(f"Settings loaded: {result}")
    return result


def validate_settings(settings: Dict[str, Any]) -> Dict[str, Any]:
    """
    Replace nonsensical values with their defaults.

    Args:
        settings: Merged settings dictionary

    Returns:
        A new dictionary with every known key holding a usable value
    """
    result = dict(settings)

    for key in ("rows", "cols", "cell_size", "port", "max_workspaces"):
        value = result.get(key)
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            logger.warning(f"Invalid {key} {value!r}, using {DEFAULT_SETTINGS[key]}")
            result[key] = DEFAULT_SETTINGS[key]

    valid_algorithms = {a.value for a in Algorithm}
    if result.get("algorithm") not in valid_algorithms:
        logger.warning(f"Unknown algorithm {result.get('algorithm')!r}, using {DEFAULT_SETTINGS['algorithm']}")
        result["algorithm"] = DEFAULT_SETTINGS["algorithm"]

    if result.get("speed") not in SPEED_PRESETS:
        logger.warning(f"Unknown speed {result.get('speed')!r}, using {DEFAULT_SETTINGS['speed']}")
        result["speed"] = DEFAULT_SETTINGS["speed"]

    result["debug"] = bool(result.get("debug"))
    return result
