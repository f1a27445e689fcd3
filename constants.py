# constants.py
"""
Application-level constants.

These values are static and do not change between simulation runs.
They cover the fixed physics of the ring (spring, friction, time step),
the bounds enforced on the live controls, and rendering properties.
Anything tunable per run lives in `config.json` instead.
"""

# --- Physics ---
# Spring constant pulling each particle back toward its home position.
SPRING = 0.08
# Velocity multiplier applied once per tick.
FRICTION = 0.92
# Fixed integration step. Not derived from the measured frame time.
TIME_STEP = 0.016
# Pointer proximity radius (pixels) inside which particles are pushed away.
REPULSION_RADIUS = 80.0
# Share of the overlap each particle of a colliding pair is moved by.
COLLISION_SHARE = 0.5

# --- Layout ---
# Ring radius as a fraction of the smaller viewport dimension.
RING_RADIUS_RATIO = 0.3
# Particle radii are drawn uniformly from [MIN, MAX).
PARTICLE_RADIUS_MIN = 2.0
PARTICLE_RADIUS_MAX = 7.0

# --- Control bounds ---
MIN_PARTICLES = 1
MAX_PARTICLES = 999
MIN_REPULSE_FORCE = 0.0
MAX_REPULSE_FORCE = 10.0

# --- Defaults (used when config.json omits a key) ---
DEFAULT_SEED = 42
DEFAULT_PARTICLE_COUNT = 500
DEFAULT_REPULSE_FORCE = 0.5
DEFAULT_SHOW_OUTLINE = True
DEFAULT_PARTICLE_COLOR = (0, 255, 0)  # Green
DEFAULT_WINDOW_SIZE = (1280, 800)
DEFAULT_COUNT_STEP = 10
DEFAULT_REPULSE_STEP = 0.1

# --- Visualization settings ---
FPS = 60
BACKGROUND_COLOR = (0, 0, 0)
OUTLINE_COLOR = (0, 255, 0)
OUTLINE_WIDTH = 8
# Alpha value for the outline stroke (0-255), about 0.7 opacity.
OUTLINE_ALPHA = 178
# Alpha for the control panel background
UI_BACKGROUND_ALPHA = 100
UI_PANEL_WIDTH = 260
