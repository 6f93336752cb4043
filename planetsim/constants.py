#!/usr/bin/env python3
"""
Shared constants for Planet Playground (screen units: pixels and ticks).

Keeping defaults in one place helps ensure values are consistent across the
codebase and makes tuning easier. SimulationParameters reads its defaults from
here; the viewport reads its colors from here.
"""

# Physics
G = 6.67430e-11  # kept at its SI value; bodies are measured in pixels
DEFAULT_SPEED_FACTOR = 2.0  # position advance per unit velocity per tick
DEFAULT_SPRING_CONSTANT = 0.05
DEFAULT_REST_LENGTH = 500.0  # pixels
DEFAULT_DAMPING = 0.05  # fraction of velocity lost per tick
MAX_DAMPING = 0.999

# Bodies
DEFAULT_BODY_COUNT = 10
MAX_BODY_COUNT = 1000
DEFAULT_BODY_RADIUS = 5.0  # pixels
MIN_BODY_RADIUS = 0.1
MAX_INITIAL_SPEED = 1.0  # initial velocity components are drawn from [-1, 1)
BODY_SATURATION = 0.5
BODY_LIGHTNESS = 0.5

# Rendering passthrough
DEFAULT_LINE_OPACITY = 0.5
LINE_WIDTH_SCALE = 1e-10
MIN_LINE_WIDTH = 1
MAX_LINE_WIDTH = 10

# Viewport
VIEW_WIDTH = 1100
VIEW_HEIGHT = 800
TARGET_FPS = 60
BACKGROUND_COLOR = (255, 255, 255)
LINE_COLOR = (0, 0, 0)
SELECTED_BODY_COLOR = (255, 0, 0)
HOVERED_BODY_COLOR = (173, 216, 230)
SELECTION_COLOR = (255, 255, 0)

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
