# constants.py

"""
Application Constants

This module defines static configuration values for the fireworks engine and
its demo host. Values that a run may want to tune are exposed as defaults and
can be overridden through the 'fireworks' section of config.json.

Data Contract:
- All values are immutable constants.
- Units are specified in comments where applicable.
"""

# Screen dimensions
WIDTH = 1280  # Pixels
HEIGHT = 720  # Pixels

# Framerate
FPS = 60  # Frames per second

# Colors (RGB)
BLACK = (0, 0, 0)

# Window Title
TITLE = "Canvas Fireworks"

# --- Controller defaults (overridable per run) ---
DEFAULT_HUE = 120                  # Degrees
DEFAULT_FIREWORKS_LIMITER = 5      # Frames between user-triggered launches
DEFAULT_AUTOLAUNCH_TIMER = 80      # Frames between automatic launches
DEFAULT_PARTICLE_TRAIL = 5         # Tracked positions per particle
DEFAULT_SPEED = 2.0                # Pixels per frame
DEFAULT_ACCELERATION = 1.05        # Speed multiplier per frame
DEFAULT_PARTICLE_COUNT = 30        # Particles per explosion
DEFAULT_GRAVITY = 1.0              # Pixels per frame, downward

# --- Firework ---
FIREWORK_TRAIL_LENGTH = 3
TARGET_RADIUS_MIN = 1.0            # Pixels
TARGET_RADIUS_MAX = 8.0            # Pixels
TARGET_RADIUS_STEP = 0.3           # Pixels per frame
FIREWORK_BRIGHTNESS_RANGE = (50, 70)   # Lightness percent

# --- Particle ---
PARTICLE_SPEED_RANGE = (1.0, 10.0)     # Pixels per frame
PARTICLE_FRICTION = 0.95               # Speed multiplier per frame
PARTICLE_HUE_SPREAD = 20               # Degrees either side of the frame hue
PARTICLE_BRIGHTNESS_RANGE = (50, 80)   # Lightness percent
PARTICLE_DECAY_RANGE = (0.015, 0.03)   # Opacity lost per frame

# Auto-launch targets are drawn from the upper part of the surface.
AUTOLAUNCH_TARGET_HEIGHT_FRACTION = 0.5

# --- Visual Effects ---
TRAIL_FADE_ALPHA = 0.5  # Opacity of the per-frame erase. Lower = longer trails.
LINE_WIDTH = 1          # Pixels
ARC_SEGMENTS = 24       # Line segments used to approximate a full circle
