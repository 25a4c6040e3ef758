from __future__ import annotations

# =============================================================================
# GRID COORDINATE SYSTEMS (Always integers)
# =============================================================================

GridCoord = int  # Always integer cell position

# Full 3D grid position. Y is the vertical axis; Y=0 is the floor layer.
GridPos = tuple[GridCoord, GridCoord, GridCoord]  # Example: (4, 0, 7)

# Position on the horizontal XZ plane used by rooms and corridors.
XZCell = tuple[GridCoord, GridCoord]  # Example: (4, 7) = column 4, row 7

# Level dimensions as (size_x, size_y, size_z).
LevelSize = tuple[int, int, int]

# Yaw applied to a placed tile, in degrees. Always a multiple of 90.
Yaw = int
