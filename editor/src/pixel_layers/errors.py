"""Exception types raised by the pixel layers core."""


class PixelLayersError(Exception):
    """Base class for all pixel layers errors"""


class OutOfBoundsError(PixelLayersError, IndexError):
    """Pixel coordinate or layer index outside the valid range"""


class InvalidDimensionsError(PixelLayersError, ValueError):
    """Non-positive image size, or a bitmap whose size does not match the image"""


class NotInitializedError(PixelLayersError, RuntimeError):
    """Operation attempted on an image before initialize() was called"""
