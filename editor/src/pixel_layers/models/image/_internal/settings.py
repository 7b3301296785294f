"""View/navigation and painting settings persisted alongside an image.

The host owns what these mean on screen; the core only stores them and
applies the grid spacing clamp.
"""

from enum import Enum
from typing import Any, Dict

from pixel_layers.constants import (
    GRID_SPACING_MIN, GRID_SPACING_MAX, GRID_SPACING_READ_OFFSET,
    DEFAULT_GRID_SPACING, DEFAULT_GRID_OFFSET_X, DEFAULT_GRID_OFFSET_Y,
    DEFAULT_GRID_BG_INDEX, DEFAULT_SELECTED_COLOR,
)
from pixel_layers.models.pixel import Pixel


class Tool(Enum):
    """Active paint tool"""
    PAINT_BRUSH = 'paint_brush'
    BOX_BRUSH = 'box_brush'
    ERASER = 'eraser'
    COLOR_PICKER = 'color_picker'


class ImageSettings:
    """Grid spacing, offsets, selected colour, tool and background grid index"""

    def __init__(self):
        self._grid_spacing = DEFAULT_GRID_SPACING
        self.grid_offset_x = DEFAULT_GRID_OFFSET_X
        self.grid_offset_y = DEFAULT_GRID_OFFSET_Y
        self.selected_color = Pixel(*DEFAULT_SELECTED_COLOR)
        self.tool = Tool.PAINT_BRUSH
        self.grid_bg_index = DEFAULT_GRID_BG_INDEX

    @property
    def grid_spacing(self) -> float:
        """Stored spacing plus the fixed read offset (never below 1.0)"""
        return self._grid_spacing + GRID_SPACING_READ_OFFSET

    @grid_spacing.setter
    def grid_spacing(self, value: float):
        """Store spacing clamped to [0, 140]; the read offset is NOT subtracted"""
        self._grid_spacing = max(GRID_SPACING_MIN, min(GRID_SPACING_MAX, float(value)))

    @property
    def stored_grid_spacing(self) -> float:
        """Raw clamped value as persisted"""
        return self._grid_spacing

    def to_dict(self) -> Dict[str, Any]:
        return {
            'grid_spacing': self._grid_spacing,
            'grid_offset_x': self.grid_offset_x,
            'grid_offset_y': self.grid_offset_y,
            'selected_color': list(self.selected_color.to_tuple()),
            'tool': self.tool.value,
            'grid_bg_index': self.grid_bg_index,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'ImageSettings':
        settings = ImageSettings()
        settings.grid_spacing = data.get('grid_spacing', DEFAULT_GRID_SPACING)
        settings.grid_offset_x = data.get('grid_offset_x', DEFAULT_GRID_OFFSET_X)
        settings.grid_offset_y = data.get('grid_offset_y', DEFAULT_GRID_OFFSET_Y)
        settings.selected_color = Pixel.from_tuple(data.get('selected_color', DEFAULT_SELECTED_COLOR))
        settings.tool = Tool(data.get('tool', Tool.PAINT_BRUSH.value))
        settings.grid_bg_index = data.get('grid_bg_index', DEFAULT_GRID_BG_INDEX)
        return settings

    def __repr__(self) -> str:
        return (f"ImageSettings(grid_spacing={self.grid_spacing:g}, "
                f"tool={self.tool.name}, grid_bg_index={self.grid_bg_index})")
