"""Image model package: ImageController and its data types"""

from .core import ImageController
from ._internal.layer import Layer, Layers
from ._internal.image_data import Image
from ._internal.settings import ImageSettings, Tool

__all__ = [
    'ImageController',
    'Image',
    'Layer',
    'Layers',
    'ImageSettings',
    'Tool',
]
