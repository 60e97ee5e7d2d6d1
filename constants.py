# constants.py
"""
Application-level constants.

These values are static and do not change between simulation runs.
They are fundamental to the application's framework, such as the window
size, rendering colors and the default physics settings used whenever
the configuration file leaves a value out.
"""

# Window settings
WINDOW_WIDTH = 1200
WINDOW_HEIGHT = 800
WINDOW_TITLE = "Advanced Particle Simulation"
FPS = 60
BACKGROUND_COLOR = (10, 10, 20) # Near-black navy

# Connection lines are white; only their alpha varies with distance.
CONNECTION_COLOR = (255, 255, 255)

# --- Default Physics Parameters ---
# Used when config.json does not provide the corresponding key.
DEFAULT_GRAVITY = 9.81
# Fraction of the normal velocity kept after bouncing off a wall.
DEFAULT_DAMPING = 0.99
DEFAULT_ATTRACTION = 50.0
DEFAULT_REPULSION = 10.0
DEFAULT_MAX_SPEED = 500.0
DEFAULT_INTERACTION_RADIUS = 100.0
DEFAULT_CONNECTION_RADIUS = 100.0

# --- Default Spawning Parameters ---
DEFAULT_INITIAL_PARTICLE_COUNT = 100
DEFAULT_INITIAL_RADIUS_RANGE = (3.0, 15.0)
DEFAULT_BURST_SIZE = 10
# Maximum distance from the cursor at which burst particles appear.
DEFAULT_BURST_SPREAD = 50.0
DEFAULT_BURST_RADIUS_RANGE = (3.0, 8.0)
