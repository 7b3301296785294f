"""
Image Pixel Access Mixin

Position-based pixel access for the ImageController. Pointer positions are
resolved through the display rectangle; positions that do not land on a
pixel are ignored (set) or read as transparent (get). These are normal
out-of-view pointer positions, not errors.
"""

from pixel_layers.constants import ACTION_COLOR_PIXEL
from pixel_layers.models.pixel import Pixel
from pixel_layers.models.transform import Rect, Vec2
from pixel_layers.services.coordinate_mapper import (
    PixelCoordinate, MappingResult, OUT_OF_BOUNDS,
    compute_display_rect, map_position_to_pixel, pixel_center_position,
)


class ImagePixelMixin:
    """Mixin providing display-space pixel access for ImageController

    This mixin assumes the parent class has:
        - self._image: Image state
        - self._viewport_size: Vec2
        - self._logger: logging.Logger instance
        - self._notify(description, layer_index)
        - self._require_initialized()
    """

    # ========================================
    # Display Geometry
    # ========================================

    @property
    def viewport_size(self) -> Vec2:
        return self._viewport_size

    def set_viewport_size(self, width: float, height: float):
        """Record the size of the host's rendering surface"""
        self._viewport_size = Vec2(float(width), float(height))

    def get_display_rect(self) -> Rect:
        """Rectangle the image is drawn in, for the current viewport and settings"""
        self._require_initialized()
        image = self._image
        settings = image.settings
        return compute_display_rect(
            image.width, image.height,
            settings.grid_spacing, settings.grid_offset_x, settings.grid_offset_y,
            self._viewport_size)

    def map_position(self, pos: Vec2) -> MappingResult:
        """Map a display position to a pixel coordinate inside the image grid

        Returns:
            PixelCoordinate, or OUT_OF_BOUNDS when the position misses the
            display rectangle or lands outside the grid
        """
        image = self._image
        result = map_position_to_pixel(pos, self.get_display_rect(), image.width, image.height)
        if not result.in_bounds:
            return OUT_OF_BOUNDS

        # The row shift can push the edge rows off the grid
        if not (0 <= result.x < image.width and 0 <= result.y < image.height):
            return OUT_OF_BOUNDS
        return result

    def pixel_to_position(self, x: int, y: int) -> Vec2:
        """Display position at the centre of pixel (x, y)"""
        image = self._image
        return pixel_center_position(PixelCoordinate(x, y), self.get_display_rect(),
                                     image.width, image.height)

    # ========================================
    # Pixel Access by Position
    # ========================================

    def set_pixel_at_position(self, color: Pixel, pos: Vec2, layer_index: int) -> bool:
        """Colour the pixel under a display position in a given layer

        Args:
            color: New pixel value
            pos: Display-space position
            layer_index: Collection index of the target layer

        Returns:
            True if a pixel was changed, False if pos missed the image

        Raises:
            OutOfBoundsError: If layer_index is invalid and pos hits the image
        """
        self._require_initialized()
        coord = self.map_position(pos)
        if not coord.in_bounds:
            self._logger.debug(f"Ignored paint outside image at ({pos.x}, {pos.y})")
            return False

        layer = self._image.layers[layer_index]

        self._notify(ACTION_COLOR_PIXEL, layer_index)
        layer.set_pixel(coord.x, coord.y, color)
        self._image.mark_dirty()

        self._logger.debug(f"Set pixel ({coord.x}, {coord.y}) on layer {layer_index} to {color!r}")
        return True

    def get_pixel_at_position(self, pos: Vec2, layer_index: int) -> Pixel:
        """Read the pixel under a display position in a given layer

        Returns:
            The layer pixel, or a fully transparent pixel when pos misses the image
        """
        self._require_initialized()
        coord = self.map_position(pos)
        if not coord.in_bounds:
            return Pixel.clear()
        return self._image.layers[layer_index].get_pixel(coord.x, coord.y)
