"""
Pixel Layers - Constants and Configuration

This module contains all constant values used throughout the package:
- Default image and layer settings
- View/navigation constraints (grid spacing)
- Display rectangle geometry
- Painting defaults
"""

# ======================================================================
# COLOR CHANNELS
# ======================================================================

# Pixel grids store RGBA as float64, channel order r, g, b, a
CHANNEL_COUNT = 4
PIXEL_DTYPE = 'float64'

# Fully transparent pixel (accumulator start for blending)
TRANSPARENT_RGBA = (0.0, 0.0, 0.0, 0.0)

# ======================================================================
# IMAGE / LAYER DEFAULTS
# ======================================================================

DEFAULT_LAYER_NAME = 'Layer'
DEFAULT_LAYER_ORDER = 0
DEFAULT_SELECTED_LAYER = 0

# Returned by remove_layer_at when the selected index 0 is removed
NO_SELECTION = -1

# ======================================================================
# VIEW & NAVIGATION
# ======================================================================

# Grid spacing is stored clamped to [MIN, MAX] and read back with a fixed offset
GRID_SPACING_MIN = 0.0
GRID_SPACING_MAX = 140.0
GRID_SPACING_READ_OFFSET = 1.0
DEFAULT_GRID_SPACING = 20.0

DEFAULT_GRID_OFFSET_X = 0.0
DEFAULT_GRID_OFFSET_Y = 0.0

DEFAULT_GRID_BG_INDEX = 0

# ======================================================================
# DISPLAY RECTANGLE
# ======================================================================

# Rendered image width = grid spacing * DISPLAY_SCALE
DISPLAY_SCALE = 30.0

# Fixed vertical bias below the viewport centre (toolbar height in the editor)
DISPLAY_VERTICAL_BIAS = 20.0

# Viewport used until the host reports its real size
DEFAULT_VIEWPORT_WIDTH = 800.0
DEFAULT_VIEWPORT_HEIGHT = 600.0

# ======================================================================
# PAINTING
# ======================================================================

# Opaque red
DEFAULT_SELECTED_COLOR = (1.0, 0.0, 0.0, 1.0)

# ======================================================================
# MUTATION DESCRIPTIONS (passed to listeners before a change is applied)
# ======================================================================

ACTION_INITIALIZE = 'Initialize'
ACTION_COLOR_PIXEL = 'ColorPixel'
ACTION_ADD_LAYER = 'AddLayer'
ACTION_REMOVE_LAYER = 'RemoveLayer'
ACTION_LAYER_ENABLED = 'LayerEnabled'
ACTION_LAYER_ORDER = 'LayerOrder'
ACTION_RESTORE_SNAPSHOT = 'RestoreSnapshot'
