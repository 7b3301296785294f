"""Layer compositor.

Flattens a stack of layers into one RGBA pixel or a full bitmap.

Blending is applied bottom to top (ascending layer order), skipping disabled
layers, starting from a fully transparent accumulator:

    result.rgb = src.rgb + dst.rgb * (1 - src.a)
    result.a   = src.a   + dst.a   * (1 - src.a)

Note the source colour is NOT multiplied by its own alpha. Saved images and
reference renders depend on this exact arithmetic, so the premultiplied
"over" operator must not be substituted here.

All functions are pure: they never touch layer state or image caches.
"""

import logging
from typing import Iterable, List

import numpy as np

from pixel_layers.constants import CHANNEL_COUNT, PIXEL_DTYPE, TRANSPARENT_RGBA
from pixel_layers.models.pixel import Pixel

logger = logging.getLogger(__name__)


def blend_over(dst: Pixel, src: Pixel) -> Pixel:
    """Blend src on top of dst with the unpremultiplied over formula"""
    inv = 1 - src.a
    return Pixel(
        src.r + dst.r * inv,
        src.g + dst.g * inv,
        src.b + dst.b * inv,
        src.a + dst.a * inv,
    )


def blend_pixel_stack(pixels: Iterable[Pixel]) -> Pixel:
    """Blend an ordered sequence of pixels.

    Args:
        pixels: Pixels ordered bottom to top, disabled layers already removed

    Returns:
        Blended pixel; fully transparent for an empty sequence
    """
    color = Pixel(*TRANSPARENT_RGBA)
    for pixel in pixels:
        color = blend_over(color, pixel)
    return color


def visible_stack(layers) -> List:
    """Enabled layers sorted by ascending order (stable for equal orders)"""
    return sorted((layer for layer in layers if layer.enabled), key=lambda layer: layer.order)


def blend_pixel(layers, x: int, y: int) -> Pixel:
    """Blended colour of one coordinate across all enabled layers

    Args:
        layers: Iterable of Layer objects in any collection order
        x, y: Pixel coordinate (must be inside every layer)

    Returns:
        Blended pixel
    """
    return blend_pixel_stack(layer.get_pixel(x, y) for layer in visible_stack(layers))


def build_composite_image(layers, width: int, height: int) -> np.ndarray:
    """Composite every coordinate of the image.

    Applies the same per-pixel arithmetic as blend_pixel_stack, vectorised
    over the whole grid.

    Args:
        layers: Iterable of Layer objects in any collection order
        width: Image width
        height: Image height

    Returns:
        numpy array of shape (height, width, 4); row index is y
    """
    stack = visible_stack(layers)
    composite = np.zeros((height, width, CHANNEL_COUNT), dtype=PIXEL_DTYPE)

    for layer in stack:
        src = layer.pixels
        inv = 1 - src[..., 3:4]
        composite = src + composite * inv

    logger.debug(f"Composited {len(stack)} enabled layer(s) into {width}x{height} bitmap")
    return composite


def bitmap_pixel(bitmap: np.ndarray, x: int, y: int) -> Pixel:
    """Read one pixel of a composite bitmap as a Pixel"""
    return Pixel(*bitmap[y, x].tolist())
