"""
Pixel Layers - Data Models

This module contains the data model classes for layered pixel images.
This is the MODEL in MVC architecture.

Public API: Import ImageController, Layer, Layers, Pixel from here.
The models/image/_internal/ subdirectory contains internal implementation only.
"""

from .pixel import Pixel
from .transform import Vec2, Rect
from .image import ImageController, Image, Layer, Layers, ImageSettings, Tool

__all__ = ['Pixel', 'Vec2', 'Rect', 'ImageController', 'Image', 'Layer', 'Layers', 'ImageSettings', 'Tool']
