"""
Engine constants - all magic numbers in one place.
NO UI DEPENDENCIES.
"""

# =============================================================================
# PLAYBACK
# =============================================================================
MIN_FPS = 1
MAX_FPS = 60
DEFAULT_FPS = 8
CONTAIN_FILL = 0.8            # fraction of the viewport a preview frame fills
TIMING_EPSILON = 1e-9         # seconds; absorbs float error in summed dt

# =============================================================================
# PIXEL EDITOR
# =============================================================================
MIN_ZOOM = 1
MAX_ZOOM = 16
SMALL_IMAGE_WIDTH = 64        # images narrower than this open at SMALL_IMAGE_ZOOM
SMALL_IMAGE_ZOOM = 4
DEFAULT_ZOOM = 2
DEFAULT_COLOR = "#ffffff"
PALETTE_LIMIT = 20

# =============================================================================
# RUNTIME PHYSICS (per tick)
# =============================================================================
MOVE_IMPULSE = 1.0
FRICTION = 0.8
GRAVITY = 0.8
JUMP_IMPULSE = -15.0
RUN_THRESHOLD = 0.5           # |vx| above this while grounded means "run"

PLAYER_SIZE = 32
PLAYER_SPAWN = (100.0, 200.0)
SPRITE_SCALE = 2              # player sprite is drawn at twice its hitbox

FLOOR_MARGIN = 64             # floor sits this far above the viewport bottom
TILE_SIZE = 32
PLATFORM_X = 300
PLATFORM_TILES = 3
PLATFORM_RISE = 100           # platform top, measured up from the floor
PLATFORM_LANDING_BAND = 10    # feet must be within this many px below the top

ANIMATION_TICKS = 8           # ticks per animation frame

ENEMY_CENTER_X = 400
ENEMY_PATROL = 100
ENEMY_PERIOD = 1.0            # seconds per radian of patrol phase
