"""
Pixel Layers

Data and compositing core of a pixel-art editor: a multi-layer RGBA image,
per-pixel editing by display position, and a cached alpha composite.
"""

from pixel_layers.errors import (
    PixelLayersError, OutOfBoundsError, InvalidDimensionsError, NotInitializedError,
)
from pixel_layers.models import (
    Pixel, Vec2, Rect, ImageController, Image, Layer, Layers, ImageSettings, Tool,
)

__version__ = '0.1.0'

__all__ = [
    'Pixel', 'Vec2', 'Rect',
    'ImageController', 'Image', 'Layer', 'Layers', 'ImageSettings', 'Tool',
    'PixelLayersError', 'OutOfBoundsError', 'InvalidDimensionsError', 'NotInitializedError',
]
