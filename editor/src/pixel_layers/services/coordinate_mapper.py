"""Coordinate mapping between display space and pixel space.

Provides conversion between:
- Display space (host widget units, Y-down, origin top-left)
- Pixel space (integer cell coordinates, Y-up: row 0 is the bottom row)

The display rectangle is where the image is drawn inside the viewport.
Mapping failures are returned as OUT_OF_BOUNDS instead of a sentinel
coordinate so callers can branch on `result.in_bounds`.
"""

import math
from dataclasses import dataclass
from typing import Union

from pixel_layers.constants import DISPLAY_SCALE, DISPLAY_VERTICAL_BIAS
from pixel_layers.models.transform import Rect, Vec2


@dataclass(frozen=True)
class PixelCoordinate:
    """Successful mapping result. NOT checked against the image bounds."""
    x: int
    y: int

    in_bounds = True

    def __iter__(self):
        return iter((self.x, self.y))


class OutOfBounds:
    """Mapping result for positions outside the display rectangle"""

    in_bounds = False

    def __repr__(self) -> str:
        return 'OUT_OF_BOUNDS'


OUT_OF_BOUNDS = OutOfBounds()

MappingResult = Union[PixelCoordinate, OutOfBounds]


def compute_display_rect(image_width, image_height, grid_spacing, offset_x, offset_y, viewport_size):
    """Rectangle the image occupies inside the viewport.

    Width is grid_spacing * 30, height follows the image aspect ratio. The
    rectangle is centred in the viewport, shifted by the offsets plus a
    fixed 20 unit vertical bias.

    Args:
        image_width: Image width in pixels
        image_height: Image height in pixels
        grid_spacing: Grid spacing as read from the settings (already +1)
        offset_x: Horizontal pan offset
        offset_y: Vertical pan offset
        viewport_size: Vec2 (or (w, h) pair) of the rendering surface

    Returns:
        Rect in display space
    """
    viewport_w, viewport_h = viewport_size
    ratio = image_height / image_width
    w = grid_spacing * DISPLAY_SCALE
    h = ratio * grid_spacing * DISPLAY_SCALE

    x = viewport_w / 2 - w / 2 + offset_x
    y = viewport_h / 2 - h / 2 + DISPLAY_VERTICAL_BIAS + offset_y

    return Rect(x, y, w, h)


def map_position_to_pixel(pos: Vec2, display_rect: Rect, image_width: int, image_height: int) -> MappingResult:
    """Convert a display-space position to a pixel coordinate.

    Y is inverted (display Y grows downward, pixel Y grows upward) and the
    resulting row is shifted down by one. Saved images were painted through
    this exact mapping, so the shift stays.

    Args:
        pos: Display-space position
        display_rect: Rectangle the image is drawn in
        image_width: Image width in pixels
        image_height: Image height in pixels

    Returns:
        PixelCoordinate, or OUT_OF_BOUNDS when pos is outside display_rect
    """
    if not display_rect.contains(pos):
        return OUT_OF_BOUNDS

    rel_x = (pos.x - display_rect.x) / display_rect.width
    rel_y = (display_rect.y + display_rect.height - pos.y) / display_rect.height

    pixel_x = math.floor(image_width * rel_x)
    pixel_y = math.floor(image_height * rel_y) - 1

    return PixelCoordinate(pixel_x, pixel_y)


def pixel_center_position(pixel: PixelCoordinate, display_rect: Rect, image_width: int, image_height: int) -> Vec2:
    """Display-space position at the centre of the cell that maps to pixel.

    Inverse of map_position_to_pixel: re-mapping the returned position
    yields `pixel` again whenever that position lies inside display_rect.
    """
    rel_x = (pixel.x + 0.5) / image_width
    rel_y = (pixel.y + 1.5) / image_height

    x = display_rect.x + rel_x * display_rect.width
    y = display_rect.y + display_rect.height - rel_y * display_rect.height
    return Vec2(x, y)
