"""Default tuning values for zombies, the player and the world."""

from __future__ import annotations

# --- Zombie settings ---
ZOMBIE_HEALTH = 20.0
ZOMBIE_WANDER_RADIUS = 7.0
ZOMBIE_WANDER_PAUSE_S = 2.0
ZOMBIE_AWARENESS_RADIUS = 35.0
ZOMBIE_MELEE_RANGE = 1.5
ZOMBIE_EYE_HEIGHT = 1.5
ZOMBIE_WANDER_SPEED = 2.0
ZOMBIE_CHASE_SPEED = 4.0
ZOMBIE_ATTACK_COOLDOWN_S = 1.0
# Added to the y component of the attack direction before re-normalizing.
ZOMBIE_ATTACK_VERTICAL_BIAS = 0.5
ZOMBIE_GROUND_CHECK_DISTANCE = 1.0
ZOMBIE_DEATH_EFFECT = "death_particles"
ZOMBIE_WALKING_SPEED_THRESHOLD = 0.1

# --- Zombie knockback (taking damage) ---
ZOMBIE_KNOCKBACK_FORCE = 5.0
ZOMBIE_KNOCKBACK_VERTICAL_FORCE = 1.0
ZOMBIE_KNOCKBACK_GRAVITY = 20.0
ZOMBIE_KNOCKBACK_DURATION_S = 0.3

# --- Player settings ---
PLAYER_SPEED = 6.0
PLAYER_JUMP_SPEED = 8.0
PLAYER_GRAVITY = 20.0
PLAYER_EYE_HEIGHT = 1.5
PLAYER_GROUNDED_FALL_SPEED = -1.0
PLAYER_PUNCH_RANGE = 2.0
PLAYER_PUNCH_DAMAGE = 2.0
PLAYER_PUNCH_COOLDOWN_S = 0.5
PLAYER_PITCH_LIMIT_DEG = 80.0
PLAYER_WALKING_INPUT_THRESHOLD = 0.1

# --- Player knockback (being attacked) ---
PLAYER_KNOCKBACK_FORCE = 5.0
PLAYER_KNOCKBACK_VERTICAL_FORCE = 2.0
PLAYER_KNOCKBACK_GRAVITY = 20.0
PLAYER_KNOCKBACK_DURATION_S = 0.3

# --- World settings ---
GROUND_HEIGHT = 0.0
GROUND_LAYER = 1 << 0
OBSTACLE_LAYER = 1 << 1
SPATIAL_INDEX_CELL_SIZE = 8.0
AGENT_COLLIDER_RADIUS = 0.4
AGENT_COLLIDER_HEIGHT = 1.8
# Knockback falls longer than this are forced to land.
KNOCKBACK_MAX_FALL_S = 10.0

__all__ = [
    "ZOMBIE_HEALTH",
    "ZOMBIE_WANDER_RADIUS",
    "ZOMBIE_WANDER_PAUSE_S",
    "ZOMBIE_AWARENESS_RADIUS",
    "ZOMBIE_MELEE_RANGE",
    "ZOMBIE_EYE_HEIGHT",
    "ZOMBIE_WANDER_SPEED",
    "ZOMBIE_CHASE_SPEED",
    "ZOMBIE_ATTACK_COOLDOWN_S",
    "ZOMBIE_ATTACK_VERTICAL_BIAS",
    "ZOMBIE_GROUND_CHECK_DISTANCE",
    "ZOMBIE_DEATH_EFFECT",
    "ZOMBIE_WALKING_SPEED_THRESHOLD",
    "ZOMBIE_KNOCKBACK_FORCE",
    "ZOMBIE_KNOCKBACK_VERTICAL_FORCE",
    "ZOMBIE_KNOCKBACK_GRAVITY",
    "ZOMBIE_KNOCKBACK_DURATION_S",
    "PLAYER_SPEED",
    "PLAYER_JUMP_SPEED",
    "PLAYER_GRAVITY",
    "PLAYER_EYE_HEIGHT",
    "PLAYER_GROUNDED_FALL_SPEED",
    "PLAYER_PUNCH_RANGE",
    "PLAYER_PUNCH_DAMAGE",
    "PLAYER_PUNCH_COOLDOWN_S",
    "PLAYER_PITCH_LIMIT_DEG",
    "PLAYER_WALKING_INPUT_THRESHOLD",
    "PLAYER_KNOCKBACK_FORCE",
    "PLAYER_KNOCKBACK_VERTICAL_FORCE",
    "PLAYER_KNOCKBACK_GRAVITY",
    "PLAYER_KNOCKBACK_DURATION_S",
    "GROUND_HEIGHT",
    "GROUND_LAYER",
    "OBSTACLE_LAYER",
    "SPATIAL_INDEX_CELL_SIZE",
    "AGENT_COLLIDER_RADIUS",
    "AGENT_COLLIDER_HEIGHT",
    "KNOCKBACK_MAX_FALL_S",
]
