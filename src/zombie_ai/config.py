import json
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Tuple

from loguru import logger
from platformdirs import user_config_dir

from .entities_constants import (
    GROUND_HEIGHT,
    KNOCKBACK_MAX_FALL_S,
    PLAYER_EYE_HEIGHT,
    PLAYER_GRAVITY,
    PLAYER_JUMP_SPEED,
    PLAYER_KNOCKBACK_DURATION_S,
    PLAYER_KNOCKBACK_FORCE,
    PLAYER_KNOCKBACK_GRAVITY,
    PLAYER_KNOCKBACK_VERTICAL_FORCE,
    PLAYER_PUNCH_COOLDOWN_S,
    PLAYER_PUNCH_DAMAGE,
    PLAYER_PUNCH_RANGE,
    PLAYER_SPEED,
    SPATIAL_INDEX_CELL_SIZE,
    ZOMBIE_ATTACK_COOLDOWN_S,
    ZOMBIE_ATTACK_VERTICAL_BIAS,
    ZOMBIE_AWARENESS_RADIUS,
    ZOMBIE_CHASE_SPEED,
    ZOMBIE_DEATH_EFFECT,
    ZOMBIE_EYE_HEIGHT,
    ZOMBIE_GROUND_CHECK_DISTANCE,
    ZOMBIE_HEALTH,
    ZOMBIE_KNOCKBACK_DURATION_S,
    ZOMBIE_KNOCKBACK_FORCE,
    ZOMBIE_KNOCKBACK_GRAVITY,
    ZOMBIE_KNOCKBACK_VERTICAL_FORCE,
    ZOMBIE_MELEE_RANGE,
    ZOMBIE_WANDER_PAUSE_S,
    ZOMBIE_WANDER_RADIUS,
    ZOMBIE_WANDER_SPEED,
)

APP_NAME = "ZombieAI"

# Defaults for all configurable options
DEFAULT_CONFIG: Dict[str, Any] = {
    "zombie": {
        "health": ZOMBIE_HEALTH,
        "wander_radius": ZOMBIE_WANDER_RADIUS,
        "wander_pause_s": ZOMBIE_WANDER_PAUSE_S,
        "awareness_radius": ZOMBIE_AWARENESS_RADIUS,
        "melee_range": ZOMBIE_MELEE_RANGE,
        "eye_height": ZOMBIE_EYE_HEIGHT,
        "wander_speed": ZOMBIE_WANDER_SPEED,
        "chase_speed": ZOMBIE_CHASE_SPEED,
        "attack_cooldown_s": ZOMBIE_ATTACK_COOLDOWN_S,
        "attack_vertical_bias": ZOMBIE_ATTACK_VERTICAL_BIAS,
        "ground_check_distance": ZOMBIE_GROUND_CHECK_DISTANCE,
        "death_effect": ZOMBIE_DEATH_EFFECT,
        "knockback": {
            "horizontal_force": ZOMBIE_KNOCKBACK_FORCE,
            "vertical_force": ZOMBIE_KNOCKBACK_VERTICAL_FORCE,
            "gravity": ZOMBIE_KNOCKBACK_GRAVITY,
            "duration_s": ZOMBIE_KNOCKBACK_DURATION_S,
        },
    },
    "player": {
        "speed": PLAYER_SPEED,
        "jump_speed": PLAYER_JUMP_SPEED,
        "gravity": PLAYER_GRAVITY,
        "eye_height": PLAYER_EYE_HEIGHT,
        "punch_range": PLAYER_PUNCH_RANGE,
        "punch_damage": PLAYER_PUNCH_DAMAGE,
        "punch_cooldown_s": PLAYER_PUNCH_COOLDOWN_S,
        "knockback": {
            "horizontal_force": PLAYER_KNOCKBACK_FORCE,
            "vertical_force": PLAYER_KNOCKBACK_VERTICAL_FORCE,
            "gravity": PLAYER_KNOCKBACK_GRAVITY,
            "duration_s": PLAYER_KNOCKBACK_DURATION_S,
        },
    },
    "world": {
        "ground_height": GROUND_HEIGHT,
        "spatial_cell_size": SPATIAL_INDEX_CELL_SIZE,
        "max_fall_s": KNOCKBACK_MAX_FALL_S,
    },
    "debug": {"log_level": "INFO"},
}


def user_config_path() -> Path:
    """Return the platform-specific config file path."""
    return Path(user_config_dir(APP_NAME, APP_NAME)) / "config.json"


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge dictionaries, with override winning on conflicts."""
    merged: Dict[str, Any] = deepcopy(base)
    for key, val in override.items():
        if isinstance(val, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], val)
        else:
            merged[key] = val
    return merged


def load_config(path: Path | None = None) -> Tuple[Dict[str, Any], Path]:
    """Load config from disk, falling back to defaults on errors."""
    config_path = path or user_config_path()
    config: Dict[str, Any] = deepcopy(DEFAULT_CONFIG)

    try:
        if config_path.exists():
            loaded = json.loads(config_path.read_text(encoding="utf-8"))
            if isinstance(loaded, dict):
                config = _deep_merge(config, loaded)
    except Exception as exc:  # noqa: BLE001
        logger.warning(f"Failed to load config ({config_path}): {exc}")

    return config, config_path


def save_config(config: Dict[str, Any], path: Path | None = None) -> None:
    """Persist config to disk, creating parent dirs as needed."""
    config_path = path or user_config_path()
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(json.dumps(config, indent=2), encoding="utf-8")
    except Exception as exc:  # noqa: BLE001
        logger.warning(f"Failed to save config ({config_path}): {exc}")
