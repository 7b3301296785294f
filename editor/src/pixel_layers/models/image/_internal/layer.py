"""
Pixel Layers - Layer Data Model

Provides the layer pixel grid and the ordered layer collection:
- Dense RGBA float grid backed by numpy, addressed by (x, y)
- Compositing order and enabled flag
- UUID-based identification (stable across reordering and snapshots)
- Export to / import from plain dicts for snapshots

This is part of the MODEL layer - pure data, no UI logic.

Usage:
    layer = Layer(width=16, height=16, order=0)
    layer.set_pixel(3, 4, Pixel(1, 0, 0, 1))
    red = layer.get_pixel(3, 4)

    data = layer.to_dict()
    same = Layer.from_dict(data)
"""

import logging
import uuid as uuid_module
from typing import Any, Dict, List, Optional

import numpy as np

from pixel_layers.constants import (
    CHANNEL_COUNT, PIXEL_DTYPE,
    DEFAULT_LAYER_NAME, DEFAULT_LAYER_ORDER,
)
from pixel_layers.errors import OutOfBoundsError, InvalidDimensionsError
from pixel_layers.models.pixel import Pixel


class Layer:
    """A single RGBA pixel grid contributing to the final image

    Properties:
        width, height: grid size (fixed at creation)
        pixels: numpy array of shape (height, width, 4), float64
        order: compositing order (ascending = bottom to top)
        enabled: disabled layers are skipped while compositing
        name, uuid: identification
    """

    def __init__(self, width: int, height: int, order: int = DEFAULT_LAYER_ORDER,
                 enabled: bool = True, name: str = "", uuid: Optional[str] = None,
                 pixels: Optional[np.ndarray] = None):
        """Create a layer, fully transparent unless pixels are given

        Args:
            width: Grid width in pixels
            height: Grid height in pixels
            order: Compositing order
            enabled: Whether the layer contributes to the composite
            name: Display name (defaults to "Layer")
            uuid: Existing UUID to preserve, or None to generate one
            pixels: Optional (height, width, 4) array to adopt (copied)

        Raises:
            InvalidDimensionsError: If width/height are not positive or
                pixels has the wrong shape
        """
        if width <= 0 or height <= 0:
            raise InvalidDimensionsError(f"Layer size must be positive, got {width}x{height}")

        self._width = int(width)
        self._height = int(height)
        self.order = int(order)
        self.enabled = bool(enabled)
        self.name = name or DEFAULT_LAYER_NAME
        self._uuid = uuid or str(uuid_module.uuid4())

        shape = (self._height, self._width, CHANNEL_COUNT)
        if pixels is None:
            self._pixels = np.zeros(shape, dtype=PIXEL_DTYPE)
        else:
            pixels = np.asarray(pixels, dtype=PIXEL_DTYPE)
            if pixels.shape != shape:
                raise InvalidDimensionsError(
                    f"Pixel grid shape {pixels.shape} does not match layer shape {shape}")
            self._pixels = pixels.copy()

    @property
    def uuid(self) -> str:
        """Get UUID (stable identifier, persists through snapshots)"""
        return self._uuid

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def pixels(self) -> np.ndarray:
        """Raw (height, width, 4) grid. Row index is y, column index is x."""
        return self._pixels

    # ========================================
    # Pixel Access
    # ========================================

    def contains(self, x: int, y: int) -> bool:
        """Check whether (x, y) addresses a pixel of this grid"""
        return 0 <= x < self._width and 0 <= y < self._height

    def get_pixel(self, x: int, y: int) -> Pixel:
        """Get pixel at (x, y)

        Raises:
            OutOfBoundsError: If x or y is outside the grid
        """
        self._check_bounds(x, y)
        return Pixel(*self._pixels[y, x].tolist())

    def set_pixel(self, x: int, y: int, color: Pixel):
        """Set pixel at (x, y)

        Raises:
            OutOfBoundsError: If x or y is outside the grid
        """
        self._check_bounds(x, y)
        self._pixels[y, x] = color.to_tuple()

    def fill(self, color: Pixel):
        """Set every pixel to color"""
        self._pixels[:, :] = color.to_tuple()

    def clear(self):
        """Reset every pixel to fully transparent"""
        self._pixels.fill(0.0)

    def _check_bounds(self, x: int, y: int):
        if not self.contains(x, y):
            raise OutOfBoundsError(
                f"Pixel ({x}, {y}) outside layer of size {self._width}x{self._height}")

    # ========================================
    # Copy / Serialization
    # ========================================

    def copy(self, keep_uuid: bool = False) -> 'Layer':
        """Deep copy of this layer (new UUID unless keep_uuid)"""
        return Layer(self._width, self._height, order=self.order, enabled=self.enabled,
                     name=self.name, uuid=self._uuid if keep_uuid else None,
                     pixels=self._pixels)

    def to_dict(self) -> Dict[str, Any]:
        """Export layer to plain Python data"""
        return {
            'uuid': self._uuid,
            'name': self.name,
            'width': self._width,
            'height': self._height,
            'order': self.order,
            'enabled': self.enabled,
            'pixels': self._pixels.tolist(),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'Layer':
        """Create layer from to_dict() output"""
        return Layer(
            data['width'], data['height'],
            order=data.get('order', DEFAULT_LAYER_ORDER),
            enabled=data.get('enabled', True),
            name=data.get('name', ''),
            uuid=data.get('uuid'),
            pixels=np.asarray(data['pixels'], dtype=PIXEL_DTYPE),
        )

    def __repr__(self) -> str:
        return (f"Layer('{self.name}', {self._width}x{self._height}, "
                f"order={self.order}, enabled={self.enabled})")


class Layers:
    """Collection of Layer objects with list-like access

    Provides container for multiple layers with:
    - List-like access (indexing, iteration, len)
    - Ordering by the layer order field
    - UUID-based lookups
    - Export to dict list
    """

    _logger = logging.getLogger('Layers')

    def __init__(self, layers: Optional[List[Layer]] = None):
        self._layers: List[Layer] = list(layers) if layers else []

    def __len__(self) -> int:
        return len(self._layers)

    def __getitem__(self, index: int) -> Layer:
        """Get layer by index

        Raises:
            OutOfBoundsError: If index is outside [0, len)
        """
        self._check_index(index)
        return self._layers[index]

    def __iter__(self):
        return iter(self._layers)

    def __repr__(self) -> str:
        return f"Layers({len(self._layers)} layers)"

    def _check_index(self, index: int):
        # Negative indices are a caller error, not Python-style wraparound
        if not 0 <= index < len(self._layers):
            raise OutOfBoundsError(
                f"Layer index {index} out of range for {len(self._layers)} layers")

    def append(self, layer: Layer):
        """Add layer to end"""
        if not isinstance(layer, Layer):
            raise TypeError(f"Expected Layer, got {type(layer)}")
        self._layers.append(layer)
        self._logger.debug(f"Appended {layer!r}")

    def remove_at(self, index: int) -> Layer:
        """Remove and return layer at index

        Raises:
            OutOfBoundsError: If index is outside [0, len)
        """
        self._check_index(index)
        layer = self._layers.pop(index)
        self._logger.debug(f"Removed {layer!r} at index {index}")
        return layer

    def clear(self):
        """Remove all layers"""
        self._layers.clear()

    def index_of_uuid(self, uuid: str) -> Optional[int]:
        """Get collection index of the layer with this UUID, or None"""
        for i, layer in enumerate(self._layers):
            if layer.uuid == uuid:
                return i
        return None

    def get_by_uuid(self, uuid: str) -> Optional[Layer]:
        """Find layer by UUID"""
        index = self.index_of_uuid(uuid)
        return None if index is None else self._layers[index]

    # ========================================
    # Ordering
    # ========================================

    def sort_by_order(self):
        """Stable in-place sort by ascending order field"""
        self._layers.sort(key=lambda layer: layer.order)

    def sorted_by_order(self) -> List[Layer]:
        """Layers sorted by ascending order, without touching the collection"""
        return sorted(self._layers, key=lambda layer: layer.order)

    def max_order(self) -> Optional[int]:
        """Highest order field, or None when empty"""
        if not self._layers:
            return None
        return max(layer.order for layer in self._layers)

    # ========================================
    # Serialization
    # ========================================

    def to_dict_list(self) -> List[Dict[str, Any]]:
        return [layer.to_dict() for layer in self._layers]

    @staticmethod
    def from_dict_list(data_list: List[Dict[str, Any]]) -> 'Layers':
        return Layers([Layer.from_dict(data) for data in data_list])
