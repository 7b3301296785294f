"""
Image Serialization Mixin

Snapshot API for the ImageController. Snapshots are plain Python data
(dicts, lists, floats) so the host can store them in whatever format it
uses for undo history or project files.
"""

from copy import deepcopy
from typing import Any, Dict

from pixel_layers.constants import ACTION_RESTORE_SNAPSHOT
from pixel_layers.errors import InvalidDimensionsError
from ._internal.layer import Layers
from ._internal.settings import ImageSettings


class ImageSerializationMixin:
    """Mixin providing snapshot capture and restore for ImageController

    This mixin assumes the parent class has:
        - self._image: Image state
        - self._logger: logging.Logger instance
        - self._notify(description, layer_index)
        - self._require_initialized()
    """

    def get_snapshot(self) -> Dict[str, Any]:
        """Get complete state snapshot

        Returns:
            Serializable dictionary containing dimensions, layers with their
            pixel grids, the selected layer and the view/paint settings
        """
        self._require_initialized()
        image = self._image
        return {
            'width': image.width,
            'height': image.height,
            'selected_layer': image.selected_layer,
            'layers': image.layers.to_dict_list(),
            'settings': image.settings.to_dict(),
        }

    def set_snapshot(self, snapshot: Dict[str, Any]):
        """Restore state from snapshot

        Args:
            snapshot: Dictionary from get_snapshot()

        Raises:
            InvalidDimensionsError: If the snapshot size is not positive or a
                layer does not match it
        """
        snapshot = deepcopy(snapshot)
        width, height = snapshot['width'], snapshot['height']
        if width <= 0 or height <= 0:
            raise InvalidDimensionsError(f"Snapshot size must be positive, got {width}x{height}")

        layers = Layers.from_dict_list(snapshot['layers'])
        for layer in layers:
            if (layer.width, layer.height) != (width, height):
                raise InvalidDimensionsError(
                    f"Layer {layer.uuid} is {layer.width}x{layer.height}, image is {width}x{height}")

        self._notify(ACTION_RESTORE_SNAPSHOT, None)

        image = self._image
        image.width = width
        image.height = height
        image.layers = layers
        image.selected_layer = snapshot.get('selected_layer', 0)
        image.settings = ImageSettings.from_dict(snapshot.get('settings', {}))
        image.drop_composite()
        image.mark_dirty()
        self._initialized = True

        self._logger.debug("Restored from snapshot")
