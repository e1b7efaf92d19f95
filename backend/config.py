# backend/config.py

import copy
import logging
import os

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "config", "game_config.yaml"
)

DEFAULT_CONFIG = {
    "default_difficulty": "classic",
    "difficulties": {
        "classic": {"width": 10, "height": 12, "num_mines": 12},
        "beginner": {"width": 9, "height": 9, "num_mines": 10},
        "intermediate": {"width": 16, "height": 16, "num_mines": 40},
        "expert": {"width": 30, "height": 16, "num_mines": 99},
    },
    "server": {"host": "127.0.0.1", "port": 5000, "max_sessions": 1000},
}


def load_game_config(path: str = None) -> dict:
    """
    Load the game config yaml, falling back to built-in defaults when
    the file does not exist. Top-level sections from the file replace
    the defaults section by section.
    """
    path = path or DEFAULT_CONFIG_PATH
    config = copy.deepcopy(DEFAULT_CONFIG)

    if os.path.exists(path):
        with open(path, "r") as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        for key, value in loaded.items():
            if isinstance(value, dict) and isinstance(config.get(key), dict):
                config[key].update(value)
            else:
                config[key] = value
    else:
        logger.debug("Config file %s not found, using defaults", path)

    if config["default_difficulty"] not in config["difficulties"]:
        raise ValueError(f"Unknown default_difficulty '{config['default_difficulty']}'")
    return config


def get_difficulty(config: dict, name: str = None) -> dict:
    """
    Return {"width", "height", "num_mines"} for a named preset.
    """
    name = name or config["default_difficulty"]
    difficulties = config["difficulties"]
    if name not in difficulties:
        raise ValueError(f"Unknown difficulty '{name}', available: {sorted(difficulties)}")
    preset = difficulties[name]
    return {
        "width": int(preset["width"]),
        "height": int(preset["height"]),
        "num_mines": int(preset["num_mines"]),
    }
