#!/usr/bin/env python3
"""
Constants for the Pixelsmith sprite editor engine
Centralizes all magic numbers and configuration values
"""

# ============================================================================
# GRID CONSTANTS
# ============================================================================

# Size of one grid cell on the editor canvas, in view pixels at scale 1.0
CELL_SIZE = 16

# Default canvas is 2000x2000 view pixels
DEFAULT_CANVAS_WIDTH = 2000
DEFAULT_CANVAS_HEIGHT = 2000
DEFAULT_GRID_ROWS = DEFAULT_CANVAS_HEIGHT // CELL_SIZE  # 125
DEFAULT_GRID_COLS = DEFAULT_CANVAS_WIDTH // CELL_SIZE  # 125

# Minimum valid dimensions
MIN_GRID_DIMENSION = 1

# Maximum dimensions (to prevent memory issues on import)
MAX_GRID_DIMENSION = 4096
MAX_GRID_CELLS = 4096 * 4096

# ============================================================================
# COLOR CONSTANTS
# ============================================================================

# Checkerboard sentinel colors (RGBA), these mean "empty"
CHECKER_LIGHT = (160, 160, 160, 255)  # (row + col) even
CHECKER_DARK = (96, 96, 96, 255)  # (row + col) odd

# Fully transparent pixel written for empty cells on export
TRANSPARENT = (0, 0, 0, 0)

# Default paint color
DEFAULT_PAINT_COLOR = (0, 0, 0, 255)

# Channels per cell in the grid array
CHANNELS = 4

# ============================================================================
# TOOL CONSTANTS
# ============================================================================

# Tool names
TOOL_PEN = "pen"
TOOL_ERASER = "eraser"
TOOL_FILL = "fill"
TOOL_EYEDROPPER = "eyedropper"
TOOL_SQUARE = "square"
TOOL_LINE = "line"

DEFAULT_TOOL = TOOL_PEN

# Tool size selector values, indexed by the size slider position
TOOL_SIZES = (1, 2, 3, 4)
DEFAULT_TOOL_SIZE_INDEX = 0

# ============================================================================
# VIEW CONSTANTS
# ============================================================================

ZOOM_FACTOR = 1.05  # Scale multiplier per scroll tick
ZOOM_MIN = 0.05
ZOOM_MAX = 64.0
ZOOM_DEFAULT = 1.0

# ============================================================================
# FILE CONSTANTS
# ============================================================================

SUPPORTED_IMPORT_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif")
MAX_SPRITE_FILE_SIZE = 100 * 1024 * 1024  # 100MB

# ============================================================================
# TIMING CONSTANTS
# ============================================================================

STATUS_MESSAGE_TIMEOUT = 3000  # Status bar message duration in milliseconds
