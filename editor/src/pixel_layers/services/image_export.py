"""
Pixel Layers - Image Export Service

Converts between float RGBA bitmaps and 8-bit Pillow images, and reads and
writes PNG files for the ImageController.

Row convention: pixel-space row 0 is the BOTTOM row of the image, while
Pillow row 0 is the top row, so rows are flipped on the way in and out.
"""

import logging

import numpy as np
from PIL import Image

from pixel_layers.constants import PIXEL_DTYPE
from pixel_layers.errors import InvalidDimensionsError

logger = logging.getLogger(__name__)


def bitmap_to_pil(bitmap: np.ndarray) -> Image.Image:
    """Convert a (height, width, 4) float bitmap to an RGBA Pillow image

    Channels are clamped to [0, 1] before scaling to 0-255.
    """
    data = np.clip(bitmap, 0.0, 1.0)
    data = np.rint(data * 255.0).astype(np.uint8)
    return Image.fromarray(np.ascontiguousarray(np.flipud(data)), 'RGBA')


def pil_to_layer_pixels(img: Image.Image, width: int, height: int) -> np.ndarray:
    """Convert a Pillow image to a (height, width, 4) float pixel grid

    Raises:
        InvalidDimensionsError: If the image size is not width x height
    """
    if img.size != (width, height):
        raise InvalidDimensionsError(
            f"Image is {img.size[0]}x{img.size[1]}, expected {width}x{height}")

    data = np.asarray(img.convert('RGBA'), dtype=PIXEL_DTYPE) / 255.0
    return np.flipud(data).copy()


def export_png(controller, path, force_update: bool = False):
    """Write the controller's composited image to a PNG file

    Args:
        controller: Initialized ImageController
        path: Output file path
        force_update: Recompute the composite even if the cache is fresh
    """
    bitmap = controller.get_final_image(force_update)
    bitmap_to_pil(bitmap).save(path, 'PNG')
    logger.info(f"Exported {controller.width}x{controller.height} image to {path}")


def load_layer_from_png(controller, path):
    """Append a new top layer filled from a PNG file

    Args:
        controller: Initialized ImageController
        path: PNG file path, same size as the image

    Returns:
        The new Layer

    Raises:
        InvalidDimensionsError: If the PNG size does not match the image
    """
    with Image.open(path) as img:
        pixels = pil_to_layer_pixels(img, controller.width, controller.height)

    layer = controller.add_layer()
    layer.pixels[...] = pixels
    controller.image.mark_dirty()

    logger.info(f"Loaded layer {layer.name} from {path}")
    return layer
