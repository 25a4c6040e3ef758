"""
Configuration constants.

Centralizes the default generation settings, algorithm tunables and presets.
Organized by functional area for easy maintenance.
"""

from __future__ import annotations

from typing import Any

# =============================================================================
# GENERAL
# =============================================================================

# Seed used when a caller pins the seed without choosing one.
DEFAULT_SEED = 0

# Upper bound (exclusive) for seeds drawn when use_random_seed is set.
RANDOM_SEED_UPPER_BOUND = 2**31 - 1

# =============================================================================
# LEVEL & ROOM LAYOUT
# =============================================================================

DEFAULT_LEVEL_SIZE = (20, 3, 20)  # (x, y, z); y is the number of layers

DEFAULT_MIN_ROOM_SIZE = 3
DEFAULT_MAX_ROOM_SIZE = 8
DEFAULT_MAX_ROOM_ATTEMPTS = 50
DEFAULT_ROOM_DENSITY = 0.6  # Fraction of the XZ area covered by rooms

# Rooms keep this many cells clear of the level border.
ROOM_MARGIN = 1

# =============================================================================
# CORRIDORS
# =============================================================================

DEFAULT_CORRIDOR_EXTRA_PROBABILITY = 0.3

# Chance that a corridor is carved as an L (one axis fully, then the other)
# instead of a stepped diagonal walk.
CORRIDOR_ELBOW_PROBABILITY = 0.7

# Chance that an L-shaped corridor runs along X first.
CORRIDOR_HORIZONTAL_FIRST_PROBABILITY = 0.5

# Chance that a stepped corridor advances along X when both axes remain.
CORRIDOR_STEP_X_PROBABILITY = 0.5

# Extra (cycle-forming) connections are capped at this fraction of the room
# count, with a minimum of one.
EXTRA_CONNECTION_RATIO = 0.5

# =============================================================================
# TILES & SOLVER
# =============================================================================

# A grid cell has at most six face neighbors.
DEFAULT_MIN_NEIGHBOR_COUNT = 0
DEFAULT_MAX_NEIGHBOR_COUNT = 6

# Emit a debug log line every this many collapses.
SOLVER_LOG_INTERVAL = 100

DEFAULT_FURNITURE_DENSITY = 0.2

# Yaw values available to tiles that can rotate.
ROTATION_STEPS = (0, 90, 180, 270)

# =============================================================================
# PROGRESS REPORTING
# =============================================================================

# Progress fraction reported when each pipeline layer finishes.
PROGRESS_ROOMS = 0.2
PROGRESS_CORRIDORS = 0.4
PROGRESS_GRID_SEEDED = 0.5
PROGRESS_GRID_SOLVED = 0.8
PROGRESS_FURNITURE = 0.9
PROGRESS_COMPLETE = 1.0

# =============================================================================
# PRESETS
# =============================================================================

# Named overrides applied on top of the defaults by Settings.from_preset().
PRESETS: dict[str, dict[str, Any]] = {
    "default": {},
    "small_dungeon": {
        "level_size": (15, 3, 15),
        "min_room_size": 3,
        "max_room_size": 6,
        "room_density": 0.4,
        "furniture_density": 0.1,
    },
    "large_complex": {
        "level_size": (30, 4, 30),
        "min_room_size": 4,
        "max_room_size": 10,
        "room_density": 0.6,
        "furniture_density": 0.3,
        "corridor_extra_probability": 0.4,
    },
    "sparse_layout": {
        "level_size": (25, 3, 25),
        "min_room_size": 5,
        "max_room_size": 8,
        "room_density": 0.3,
        "furniture_density": 0.05,
        "corridor_extra_probability": 0.2,
    },
}

# =============================================================================
# ASCII RENDERING
# =============================================================================

HOLE_GLYPH = " "

# One glyph per tile category, keyed by TileCategory value.
CATEGORY_GLYPHS = {
    "empty": "_",
    "floor": ".",
    "wall": "#",
    "door": "+",
    "ceiling": "^",
    "furniture": "&",
}
