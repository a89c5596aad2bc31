"""
Game constants - all magic numbers in one place.
NO UI DEPENDENCIES.
"""

# =============================================================================
# DIFFICULTY
# =============================================================================
MIN_LEVEL = 1
MAX_LEVEL = 5
INITIAL_LEVEL = 1

# Upper bound (inclusive, miles) -> level. Anything farther is MIN_LEVEL.
LEVEL_DISTANCE_BANDS = (
    (1.0, 5),
    (2.0, 4),
    (3.0, 3),
    (4.0, 2),
)

TACO_COUNTS = {
    1: 2,
    2: 5,
    3: 11,
    4: 17,
    5: 25,
}
DEFAULT_TACO_COUNT = 2        # unknown levels

# =============================================================================
# GEO / SEARCH
# =============================================================================
METERS_PER_MILE = 1609.34
EARTH_RADIUS_METERS = 6371008.8
SEARCH_RADIUS_METERS = 10000.0
SEARCH_QUERY = "Taco Bell"
DEFAULT_LATITUDE = 37.7749    # San Francisco
DEFAULT_LONGITUDE = -122.4194

# =============================================================================
# TACO FIELD (pixels, seconds)
# =============================================================================
TACO_SIZE = 60
SPAWN_MARGIN = 50
SPAWN_START_Y = -50
SPAWN_STACK_SPACING = 30
MAX_ANGULAR_VELOCITY = 3.0    # radians per second

GRAVITY = 1000.0              # pixels per second^2
ELASTICITY = 0.6
FRICTION = 0.2
ANGULAR_DAMPING = 1.0         # fraction of spin lost per second
REST_SPEED = 20.0             # below this a bounce settles

POP_DURATION = 0.3
POP_SCALE = 1.5

# =============================================================================
# LEVEL LABEL PULSE
# =============================================================================
PULSE_GROW_TIME = 0.3
PULSE_SHRINK_TIME = 0.2
PULSE_SCALE = 1.3
