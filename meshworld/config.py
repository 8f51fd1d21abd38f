from __future__ import annotations

# App
APP_VERSION = "0.4.1"

# Chunk grid
DEFAULT_ROWS = 32  # quads per chunk along Y
DEFAULT_COLUMNS = 32  # quads per chunk along X
DEFAULT_PIECE_SIZE_X = 100.0
DEFAULT_PIECE_SIZE_Y = 100.0

# Height field
DEFAULT_SEED = 0  # 0 = random every pass
DEFAULT_FREQUENCY = 4.0
DEFAULT_OCTAVES = 6
DEFAULT_MAX_HEIGHT = 1500.0  # above origin Z
DEFAULT_INVERT = False
DEFAULT_NOISE = "perlin"

# Limits applied by GenerationParameters.clamped()
FREQUENCY_MIN = 0.1
FREQUENCY_MAX = 64.0
OCTAVES_MIN = 1
OCTAVES_MAX = 16

# Material blend (relative height, 0..1)
DEFAULT_FIRST_MATERIAL_MAX = 0.15
DEFAULT_SECOND_MATERIAL_MAX = 0.6
VERTEX_COLOR_RGB = (0.0, 0.75, 0.0)  # alpha carries the blend weight

# World size
DEFAULT_SINGLE_CHUNK = False
DEFAULT_VIEW_DISTANCE = 1
DEFAULT_WORLD_SIZE_MULTIPLIER = 0  # only widens preview bounds

# Water plane
DEFAULT_CREATE_WATER = True
DEFAULT_WATER_LEVEL = 0.15  # fraction of max height
DEFAULT_WATER_SIZE = 1.0  # in chunk widths, for a 100 unit engine plane
WATER_PLANE_THICKNESS = 0.1

# Workers
DEFAULT_WORKERS = 0  # 0 = generate on the calling thread
