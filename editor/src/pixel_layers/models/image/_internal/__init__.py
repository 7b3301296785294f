"""Internal implementation of the image model - import from pixel_layers.models.image instead"""

from .layer import Layer, Layers
from .settings import ImageSettings, Tool
from .image_data import Image

__all__ = ['Layer', 'Layers', 'ImageSettings', 'Tool', 'Image']
