"""
Image Layer Management Mixin

Layer CRUD and ordering operations for the ImageController.

Methods:
    - add_layer
    - remove_layer_at
    - sort_layers_by_order
    - select_layer
    - set_layer_enabled
    - set_layer_order
"""

from pixel_layers.constants import (
    DEFAULT_LAYER_NAME,
    ACTION_ADD_LAYER, ACTION_REMOVE_LAYER, ACTION_LAYER_ENABLED, ACTION_LAYER_ORDER,
)
from pixel_layers.errors import OutOfBoundsError
from pixel_layers.utils.logger import logger_raise
from ._internal.layer import Layer


class ImageLayerMixin:
    """Mixin providing layer management operations for ImageController

    This mixin assumes the parent class has:
        - self._image: Image state
        - self._logger: logging.Logger instance
        - self._notify(description, layer_index)
        - self._require_initialized()
    """

    def add_layer(self) -> Layer:
        """Append a fully transparent layer on top of the stack

        The new layer's order is one above the current highest order.

        Returns:
            The new Layer
        """
        self._require_initialized()
        image = self._image

        max_order = image.layers.max_order()
        order = 0 if max_order is None else max_order + 1

        self._notify(ACTION_ADD_LAYER, len(image.layers))

        layer = Layer(image.width, image.height, order=order,
                      name=f"{DEFAULT_LAYER_NAME} {len(image.layers) + 1}")
        image.layers.append(layer)
        image.mark_dirty()

        self._logger.debug(f"Added layer: {layer.uuid} (order {order})")
        return layer

    def remove_layer_at(self, index: int) -> Layer:
        """Remove layer by collection index

        If the removed index was selected, the selection moves down by one.
        Removing the selected index 0 leaves selected_layer at -1 (no
        selection); see has_selection(). Removing a layer below the
        selection shifts it down so it stays on the same layer.

        Args:
            index: Collection index

        Returns:
            The removed Layer

        Raises:
            OutOfBoundsError: If index is outside [0, len(layers))
        """
        self._require_initialized()
        self._check_layer_index(index, "Cannot remove layer")
        image = self._image

        self._notify(ACTION_REMOVE_LAYER, index)

        layer = image.layers.remove_at(index)
        if image.selected_layer >= index:
            image.selected_layer -= 1
        image.mark_dirty()

        self._logger.debug(f"Removed layer: {layer.uuid} (selected now {image.selected_layer})")
        return layer

    def sort_layers_by_order(self):
        """Stable sort of the layer collection by ascending order

        The selected index follows the selected layer to its new position.
        """
        image = self._image
        selected = None
        if 0 <= image.selected_layer < len(image.layers):
            selected = image.layers[image.selected_layer].uuid

        image.layers.sort_by_order()

        if selected is not None:
            image.selected_layer = image.layers.index_of_uuid(selected)

    def select_layer(self, index: int):
        """Set the selected layer index

        Raises:
            OutOfBoundsError: If index is outside [0, len(layers))
        """
        self._check_layer_index(index, "Cannot select layer")
        self._image.selected_layer = index

    def set_layer_enabled(self, index: int, enabled: bool):
        """Show or hide a layer in the composite"""
        self._check_layer_index(index, "Cannot toggle layer")
        layer = self._image.layers[index]
        if layer.enabled == bool(enabled):
            return

        self._notify(ACTION_LAYER_ENABLED, index)
        layer.enabled = bool(enabled)
        self._image.mark_dirty()

    def set_layer_order(self, index: int, order: int):
        """Change a layer's compositing order (the collection is not re-sorted)"""
        self._check_layer_index(index, "Cannot reorder layer")
        layer = self._image.layers[index]
        if layer.order == int(order):
            return

        self._notify(ACTION_LAYER_ORDER, index)
        layer.order = int(order)
        self._image.mark_dirty()

    def _check_layer_index(self, index: int, user_message: str):
        count = len(self._image.layers)
        if not 0 <= index < count:
            logger_raise(
                OutOfBoundsError(f"Layer index {index} out of range for {count} layers"),
                user_message)
