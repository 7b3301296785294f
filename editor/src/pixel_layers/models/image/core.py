"""
Pixel Layers - Image Controller

THE MODEL of the pixel editor. Owns one layered image and every operation
a host editor performs on it.

This class handles:
- Initialization (dimensions + first layer)
- Pixel access by display position (via the coordinate mapper)
- Layer management (add, remove, sort, enable, reorder)
- The composited final image, cached behind a dirty flag
- Snapshot API (for the host's undo/redo and persistence)
- Mutation notifications to host listeners

The controller is INDEPENDENT of UI:
- No Qt imports
- No rendering logic
- No undo stack (the host records snapshots when notified)

Usage:
    controller = ImageController()
    controller.initialize(16, 16)
    controller.set_viewport_size(800, 600)

    pos = controller.pixel_to_position(3, 4)
    controller.set_pixel_at_position(Pixel(1, 0, 0, 1), pos, 0)

    bitmap = controller.get_final_image()
"""

import logging
from typing import Callable, List, Optional

import numpy as np

from pixel_layers.constants import (
    DEFAULT_LAYER_NAME, DEFAULT_SELECTED_LAYER, NO_SELECTION,
    DEFAULT_VIEWPORT_WIDTH, DEFAULT_VIEWPORT_HEIGHT,
    ACTION_INITIALIZE,
)
from pixel_layers.errors import InvalidDimensionsError, NotInitializedError
from pixel_layers.models.transform import Vec2
from pixel_layers.services.compositor import build_composite_image
from pixel_layers.utils.logger import logger_raise
from ._internal.image_data import Image
from ._internal.layer import Layer, Layers
from ._internal.settings import ImageSettings
from .layer_mixin import ImageLayerMixin
from .pixel_mixin import ImagePixelMixin
from .serialization_mixin import ImageSerializationMixin

MutationListener = Callable[[str, Optional[int]], None]


class ImageController(ImageLayerMixin, ImagePixelMixin, ImageSerializationMixin):
    """Layered pixel image with position-based editing and a cached composite

    Properties:
        width, height: image dimensions
        layers: Layers collection
        selected_layer: selected collection index (-1 = no selection)
        dirty: True when the cached composite is stale
        settings: view/paint settings (grid spacing, offsets, colour, tool)
        generation: bumped on every invalidation of the composite
        composite_count: number of times the composite was recomputed
    """

    def __init__(self, viewport_size: Optional[Vec2] = None):
        """Create an uninitialized controller

        Args:
            viewport_size: Size of the host's rendering surface
        """
        self._logger = logging.getLogger('ImageController')

        self._image = Image()
        self._initialized = False
        self._viewport_size = viewport_size or Vec2(DEFAULT_VIEWPORT_WIDTH, DEFAULT_VIEWPORT_HEIGHT)
        self._listeners: List[MutationListener] = []
        self._composite_count = 0

    def initialize(self, width: int, height: int):
        """Set dimensions and create exactly one transparent layer

        Not done in the constructor so the host controls when an image
        becomes live (new image vs. restore from snapshot).

        Raises:
            InvalidDimensionsError: If width or height is not positive
        """
        if width <= 0 or height <= 0:
            logger_raise(InvalidDimensionsError(f"Image size must be positive, got {width}x{height}"),
                         "Cannot create image")

        self._notify(ACTION_INITIALIZE, None)

        image = Image(int(width), int(height))
        image.settings = self._image.settings
        image.layers.append(Layer(image.width, image.height, name=f"{DEFAULT_LAYER_NAME} 1"))
        image.selected_layer = DEFAULT_SELECTED_LAYER
        image.mark_dirty()

        self._image = image
        self._initialized = True
        self._logger.debug(f"Initialized {width}x{height} image")

    # ========================================
    # Properties
    # ========================================

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def image(self) -> Image:
        return self._image

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    @property
    def layers(self) -> Layers:
        return self._image.layers

    @property
    def selected_layer(self) -> int:
        return self._image.selected_layer

    @property
    def dirty(self) -> bool:
        return self._image.dirty

    @property
    def settings(self) -> ImageSettings:
        return self._image.settings

    @property
    def generation(self) -> int:
        return self._image.generation

    @property
    def composite_count(self) -> int:
        return self._composite_count

    def has_selection(self) -> bool:
        """False when no valid layer is selected (e.g. after removing selected index 0)"""
        return self._image.selected_layer != NO_SELECTION and \
            0 <= self._image.selected_layer < len(self._image.layers)

    # ========================================
    # Final Image
    # ========================================

    def get_final_image(self, force_update: bool = False) -> np.ndarray:
        """Get the composited image

        Returns the cached bitmap unless the image is dirty, force_update is
        set, or nothing has been composited yet. The returned array is the
        cache itself; use get_final_image_copy() to modify it.

        Returns:
            numpy array of shape (height, width, 4); row index is y
        """
        self._require_initialized()
        image = self._image

        cached = image.cached_composite()
        if cached is not None and not force_update:
            return cached

        self.sort_layers_by_order()
        bitmap = build_composite_image(image.layers, image.width, image.height)
        image.store_composite(bitmap)
        self._composite_count += 1

        self._logger.debug(f"Recomputed composite (generation {image.generation})")
        return bitmap

    def get_final_image_copy(self, force_update: bool = False) -> np.ndarray:
        return self.get_final_image(force_update).copy()

    # ========================================
    # Mutation Listeners
    # ========================================

    def add_listener(self, callback: MutationListener):
        """Register a callback run BEFORE each mutation is applied

        Args:
            callback: Callable taking (description, layer_index); layer_index
                is None for image-wide changes
        """
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback: MutationListener):
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify(self, description: str, layer_index: Optional[int]):
        for callback in list(self._listeners):
            callback(description, layer_index)

    def _require_initialized(self):
        if not self._initialized:
            logger_raise(NotInitializedError("Image has not been initialized"),
                         "No image is open")

    def __repr__(self) -> str:
        return f"ImageController({self._image!r})"
