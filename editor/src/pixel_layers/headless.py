"""Headless layer flattener.

Loads PNG files as layers (first file = bottom layer), composites them with
the same blend the editor uses, and writes the result as a PNG.

Usage:
    pixel-layers-flatten background.png lines.png -o out.png
    python -m pixel_layers.headless a.png b.png c.png -o out.png --hide 1 -v
"""

import argparse
import logging
import os
import sys

from PIL import Image

from pixel_layers.errors import PixelLayersError
from pixel_layers.models.image import ImageController
from pixel_layers.services.image_export import export_png, load_layer_from_png, pil_to_layer_pixels


def flatten_files(layer_paths, output_path, hidden=()):
    """Composite PNG files bottom-to-top into output_path

    Args:
        layer_paths: PNG paths, bottom layer first, all the same size
        output_path: Destination PNG path
        hidden: Layer indices (into layer_paths) to leave out of the composite

    Returns:
        The ImageController holding the loaded layers
    """
    with Image.open(layer_paths[0]) as first:
        width, height = first.size
        base_pixels = pil_to_layer_pixels(first, width, height)

    controller = ImageController()
    controller.initialize(width, height)

    base = controller.layers[0]
    base.pixels[...] = base_pixels
    base.name = os.path.splitext(os.path.basename(layer_paths[0]))[0]
    controller.image.mark_dirty()

    for path in layer_paths[1:]:
        layer = load_layer_from_png(controller, path)
        layer.name = os.path.splitext(os.path.basename(path))[0]

    for index in hidden:
        controller.set_layer_enabled(index, False)

    export_png(controller, output_path)
    return controller


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='pixel-layers-flatten',
        description='Flatten PNG layers (bottom first) into a single PNG.',
    )
    parser.add_argument(
        'layers',
        nargs='+',
        help='Layer PNG files, bottom layer first. All must have the same size.',
    )
    parser.add_argument(
        '-o', '--output',
        default='flattened.png',
        help='Output PNG path (default: flattened.png).',
    )
    parser.add_argument(
        '--hide',
        type=int,
        action='append',
        default=[],
        metavar='INDEX',
        help='Index of a layer to leave out (repeatable).',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging.',
    )
    args = parser.parse_args(argv)

    # Logging
    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    layer_paths = [os.path.abspath(p) for p in args.layers]
    for path in layer_paths:
        if not os.path.isfile(path):
            print(f"Error: Input file not found: {path}")
            return 1

    output_path = os.path.abspath(args.output)

    try:
        controller = flatten_files(layer_paths, output_path, hidden=args.hide)
    except (PixelLayersError, OSError) as e:
        print(f"Error: {e}")
        return 1

    print(f"Flattened {len(controller.layers)} layer(s) into {output_path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
