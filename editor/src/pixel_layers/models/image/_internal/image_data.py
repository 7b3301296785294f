"""
Pixel Layers - Image State

Owns the data behind one editable image:
- Dimensions shared by every layer
- Layers collection and selected layer index
- Dirty flag and the cached composite bitmap
- View/paint settings

Cache coherence: the cached composite is only handed out while `dirty` is
False. Every invalidation also bumps `generation`, so a host holding a
bitmap can tell whether it is still current.
"""

from typing import Optional

import numpy as np

from pixel_layers.constants import DEFAULT_SELECTED_LAYER
from .layer import Layers
from .settings import ImageSettings


class Image:
    """Image data: dimensions, layers, selection, settings and composite cache"""

    def __init__(self, width: int = 0, height: int = 0):
        self.width = width
        self.height = height
        self.layers = Layers()
        self.selected_layer = DEFAULT_SELECTED_LAYER
        self.settings = ImageSettings()

        self.dirty = False
        self._composite: Optional[np.ndarray] = None
        self._composite_generation = -1
        self.generation = 0

    def mark_dirty(self):
        """Invalidate the cached composite"""
        self.dirty = True
        self.generation += 1

    def cached_composite(self) -> Optional[np.ndarray]:
        """Cached bitmap if it is known fresh, else None"""
        if self.dirty or self._composite_generation != self.generation:
            return None
        return self._composite

    def store_composite(self, bitmap: np.ndarray):
        """Cache a freshly computed bitmap and clear the dirty flag"""
        self._composite = bitmap
        self._composite_generation = self.generation
        self.dirty = False

    def drop_composite(self):
        self._composite = None
        self._composite_generation = -1

    def __repr__(self) -> str:
        return (f"Image({self.width}x{self.height}, {len(self.layers)} layers, "
                f"selected={self.selected_layer}, dirty={self.dirty})")
