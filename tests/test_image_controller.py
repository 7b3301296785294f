"""
Tests for ImageController.

Covers:
- Initialization and the uninitialized guard
- Position-based pixel access and silent out-of-view handling
- Layer add/remove/select/enable/order and selection adjustment
- Dirty flag and composite cache coherence
- Listener notification before each mutation
- Snapshot capture and restore
- Host error sink in release mode
"""
import numpy as np
import pytest

from pixel_layers.constants import (
    ACTION_INITIALIZE, ACTION_COLOR_PIXEL, ACTION_ADD_LAYER, ACTION_REMOVE_LAYER,
    ACTION_LAYER_ENABLED, ACTION_LAYER_ORDER, ACTION_RESTORE_SNAPSHOT,
)
from pixel_layers.errors import InvalidDimensionsError, NotInitializedError, OutOfBoundsError
from pixel_layers.models.pixel import Pixel
from pixel_layers.models.transform import Vec2
from pixel_layers.utils import logger as logger_utils

from conftest import OPAQUE_RED, HALF_BLUE, OPAQUE_GREEN


def _paint(controller, x, y, rgba, layer_index=0):
    pos = controller.pixel_to_position(x, y)
    return controller.set_pixel_at_position(Pixel(*rgba), pos, layer_index)


# ══════════════════════════════════════════════════════════════════════════
# Initialization
# ══════════════════════════════════════════════════════════════════════════

class TestInitialize:

    def test_one_transparent_layer(self, controller_4x4):
        assert controller_4x4.is_initialized
        assert (controller_4x4.width, controller_4x4.height) == (4, 4)
        assert len(controller_4x4.layers) == 1
        assert controller_4x4.selected_layer == 0
        assert controller_4x4.dirty
        assert not controller_4x4.layers[0].pixels.any()

    @pytest.mark.parametrize("width,height", [(0, 4), (4, 0), (-2, -2)])
    def test_invalid_dimensions(self, fresh_controller, width, height):
        with pytest.raises(InvalidDimensionsError):
            fresh_controller.initialize(width, height)
        assert not fresh_controller.is_initialized

    def test_reinitialize_replaces_layers_keeps_settings(self, controller_4x4):
        controller_4x4.add_layer()
        controller_4x4.settings.grid_offset_x = 12.0
        controller_4x4.initialize(3, 5)
        assert (controller_4x4.width, controller_4x4.height) == (3, 5)
        assert len(controller_4x4.layers) == 1
        assert controller_4x4.layers[0].pixels.shape == (5, 3, 4)
        assert controller_4x4.settings.grid_offset_x == 12.0

    @pytest.mark.parametrize("call", [
        lambda c: c.get_final_image(),
        lambda c: c.add_layer(),
        lambda c: c.get_snapshot(),
        lambda c: c.get_display_rect(),
        lambda c: c.set_pixel_at_position(Pixel(1, 0, 0, 1), Vec2(0, 0), 0),
    ])
    def test_not_initialized(self, fresh_controller, call):
        with pytest.raises(NotInitializedError):
            call(fresh_controller)


# ══════════════════════════════════════════════════════════════════════════
# Pixel Access
# ══════════════════════════════════════════════════════════════════════════

class TestPixelAccess:

    def test_set_then_get_at_same_position(self, controller_8x8):
        pos = controller_8x8.pixel_to_position(3, 4)
        assert controller_8x8.set_pixel_at_position(Pixel(*OPAQUE_GREEN), pos, 0)
        assert controller_8x8.get_pixel_at_position(pos, 0) == Pixel(*OPAQUE_GREEN)
        assert controller_8x8.layers[0].get_pixel(3, 4) == Pixel(*OPAQUE_GREEN)

    def test_position_maps_through_display_rect(self, controller_8x8):
        controller_8x8.set_viewport_size(240, 200)
        controller_8x8.settings.grid_spacing = 7  # read back as 8
        rect = controller_8x8.get_display_rect()
        assert (rect.x, rect.y, rect.width, rect.height) == (0, 0, 240, 240)

        assert controller_8x8.set_pixel_at_position(Pixel(*OPAQUE_RED), Vec2(15, 200), 0)
        assert controller_8x8.layers[0].get_pixel(0, 0) == Pixel(*OPAQUE_RED)

    def test_outside_display_rect_is_ignored(self, controller_8x8, mutation_log):
        controller_8x8.get_final_image()
        generation = controller_8x8.generation
        controller_8x8.add_listener(mutation_log)

        assert not controller_8x8.set_pixel_at_position(Pixel(*OPAQUE_RED), Vec2(-500, -500), 0)
        assert not controller_8x8.dirty
        assert controller_8x8.generation == generation
        assert mutation_log.calls == []
        assert not controller_8x8.layers[0].pixels.any()

    def test_row_below_grid_is_ignored(self, controller_8x8):
        controller_8x8.set_viewport_size(240, 200)
        controller_8x8.settings.grid_spacing = 7
        # Bottom band of the rect maps to row -1
        assert not controller_8x8.set_pixel_at_position(Pixel(*OPAQUE_RED), Vec2(15, 230), 0)
        assert not controller_8x8.layers[0].pixels.any()

    def test_get_outside_is_transparent(self, controller_8x8):
        assert controller_8x8.get_pixel_at_position(Vec2(-1, -1), 0) == Pixel.clear()

    def test_invalid_layer_index_raises(self, controller_8x8):
        pos = controller_8x8.pixel_to_position(1, 1)
        with pytest.raises(OutOfBoundsError):
            controller_8x8.set_pixel_at_position(Pixel(*OPAQUE_RED), pos, 3)

    def test_paint_into_second_layer(self, controller_4x4):
        controller_4x4.add_layer()
        assert _paint(controller_4x4, 2, 1, HALF_BLUE, layer_index=1)
        assert controller_4x4.layers[1].get_pixel(2, 1) == Pixel(*HALF_BLUE)
        assert controller_4x4.layers[0].get_pixel(2, 1) == Pixel.clear()


# ══════════════════════════════════════════════════════════════════════════
# Layers
# ══════════════════════════════════════════════════════════════════════════

class TestLayerManagement:

    def test_add_layer_goes_on_top(self, controller_4x4):
        layer = controller_4x4.add_layer()
        assert layer.order == 1
        assert controller_4x4.layers[1] is layer
        assert controller_4x4.add_layer().order == 2
        assert not layer.pixels.any()

    def test_add_layer_after_reorder(self, controller_4x4):
        controller_4x4.set_layer_order(0, 10)
        assert controller_4x4.add_layer().order == 11

    def test_remove_selected_moves_selection_down(self, controller_4x4):
        controller_4x4.add_layer()
        controller_4x4.add_layer()
        controller_4x4.select_layer(1)

        controller_4x4.remove_layer_at(1)
        assert len(controller_4x4.layers) == 2
        assert controller_4x4.selected_layer == 0
        assert controller_4x4.has_selection()

    def test_remove_selected_first_layer_clears_selection(self, controller_4x4):
        controller_4x4.add_layer()
        controller_4x4.select_layer(0)
        controller_4x4.remove_layer_at(0)
        assert controller_4x4.selected_layer == -1
        assert not controller_4x4.has_selection()

    def test_remove_unselected_keeps_selection(self, controller_4x4):
        controller_4x4.add_layer()
        controller_4x4.add_layer()
        controller_4x4.select_layer(0)
        controller_4x4.remove_layer_at(2)
        assert controller_4x4.selected_layer == 0

    def test_remove_below_selection_follows_layer(self, controller_4x4):
        controller_4x4.add_layer()
        top = controller_4x4.add_layer()
        controller_4x4.select_layer(2)

        controller_4x4.remove_layer_at(0)
        assert controller_4x4.selected_layer == 1
        assert controller_4x4.layers[controller_4x4.selected_layer] is top
        assert controller_4x4.has_selection()

    def test_remove_with_no_selection_stays_unselected(self, controller_4x4):
        controller_4x4.add_layer()
        controller_4x4.remove_layer_at(0)
        assert controller_4x4.selected_layer == -1
        controller_4x4.remove_layer_at(0)
        assert controller_4x4.selected_layer == -1

    def test_remove_last_layer_allowed(self, controller_4x4):
        controller_4x4.remove_layer_at(0)
        assert len(controller_4x4.layers) == 0
        assert not controller_4x4.get_final_image().any()

    @pytest.mark.parametrize("index", [-1, 1, 7])
    def test_remove_out_of_bounds(self, controller_4x4, index):
        with pytest.raises(OutOfBoundsError):
            controller_4x4.remove_layer_at(index)
        assert len(controller_4x4.layers) == 1

    def test_select_out_of_bounds(self, controller_4x4):
        with pytest.raises(OutOfBoundsError):
            controller_4x4.select_layer(1)

    def test_disable_layer_hides_it(self, controller_2x2):
        controller_2x2.add_layer()
        _paint(controller_2x2, 0, 0, OPAQUE_RED, layer_index=0)
        _paint(controller_2x2, 0, 0, OPAQUE_GREEN, layer_index=1)
        assert tuple(controller_2x2.get_final_image()[0, 0]) == OPAQUE_GREEN

        controller_2x2.set_layer_enabled(1, False)
        assert controller_2x2.dirty
        assert tuple(controller_2x2.get_final_image()[0, 0]) == OPAQUE_RED

    def test_unchanged_enabled_is_noop(self, controller_2x2, mutation_log):
        controller_2x2.get_final_image()
        controller_2x2.add_listener(mutation_log)
        controller_2x2.set_layer_enabled(0, True)
        controller_2x2.set_layer_order(0, 0)
        assert not controller_2x2.dirty
        assert mutation_log.calls == []

    def test_recompute_sorts_layers_and_selection_follows(self, controller_2x2):
        top = controller_2x2.add_layer()
        bottom = controller_2x2.layers[0]
        controller_2x2.select_layer(1)
        controller_2x2.set_layer_order(1, -1)

        controller_2x2.get_final_image()
        assert controller_2x2.layers[0] is top
        assert controller_2x2.layers[1] is bottom
        assert controller_2x2.layers[controller_2x2.selected_layer] is top


# ══════════════════════════════════════════════════════════════════════════
# Composite Cache
# ══════════════════════════════════════════════════════════════════════════

class TestCompositeCache:

    def test_clean_image_returns_cached_bitmap(self, controller_4x4):
        first = controller_4x4.get_final_image()
        assert not controller_4x4.dirty
        assert controller_4x4.get_final_image() is first
        assert controller_4x4.composite_count == 1

    def test_mutation_invalidates_cache(self, controller_4x4):
        first = controller_4x4.get_final_image()
        before = first.copy()
        _paint(controller_4x4, 1, 1, OPAQUE_RED)
        assert controller_4x4.dirty

        second = controller_4x4.get_final_image()
        assert second is not first
        assert controller_4x4.composite_count == 2
        assert tuple(second[1, 1]) == OPAQUE_RED
        # Only the painted pixel (row 1, column 1) changed
        np.testing.assert_array_equal(np.argwhere((second != before).any(axis=2)), [[1, 1]])

        assert not controller_4x4.dirty
        assert controller_4x4.get_final_image(False) is second
        assert controller_4x4.composite_count == 2

    def test_force_update_recomputes(self, controller_4x4):
        controller_4x4.get_final_image()
        controller_4x4.get_final_image(force_update=True)
        assert controller_4x4.composite_count == 2

    def test_generation_bumps_on_mutation(self, controller_4x4):
        generation = controller_4x4.generation
        controller_4x4.add_layer()
        assert controller_4x4.generation > generation

    def test_copy_does_not_touch_cache(self, controller_4x4):
        copy = controller_4x4.get_final_image_copy()
        copy[...] = 1.0
        assert not controller_4x4.get_final_image().any()

    def test_two_by_two_scenario(self, controller_2x2):
        controller_2x2.add_layer()
        _paint(controller_2x2, 0, 0, OPAQUE_RED, layer_index=0)
        _paint(controller_2x2, 0, 0, HALF_BLUE, layer_index=1)

        bitmap = controller_2x2.get_final_image()
        # Source blue enters unscaled: b = 1 + 0 * (1 - 0.5)
        np.testing.assert_allclose(bitmap[0, 0], [0.5, 0.0, 1.0, 1.0])
        assert not bitmap[0, 1].any()
        assert not bitmap[1, 0].any()
        assert not bitmap[1, 1].any()


# ══════════════════════════════════════════════════════════════════════════
# Listeners
# ══════════════════════════════════════════════════════════════════════════

class TestListeners:

    def test_descriptions_and_indices(self, controller_4x4, mutation_log):
        controller_4x4.add_listener(mutation_log)
        controller_4x4.add_layer()
        _paint(controller_4x4, 0, 0, OPAQUE_RED, layer_index=1)
        controller_4x4.set_layer_enabled(0, False)
        controller_4x4.set_layer_order(0, 5)
        controller_4x4.remove_layer_at(1)
        controller_4x4.initialize(2, 2)

        assert mutation_log.calls == [
            (ACTION_ADD_LAYER, 1),
            (ACTION_COLOR_PIXEL, 1),
            (ACTION_LAYER_ENABLED, 0),
            (ACTION_LAYER_ORDER, 0),
            (ACTION_REMOVE_LAYER, 1),
            (ACTION_INITIALIZE, None),
        ]

    def test_called_before_mutation(self, controller_4x4):
        seen = []

        def listener(description, layer_index):
            layer = controller_4x4.layers[0]
            seen.append((description, len(controller_4x4.layers), layer.get_pixel(2, 2)))

        controller_4x4.add_listener(listener)
        controller_4x4.add_layer()
        _paint(controller_4x4, 2, 2, OPAQUE_RED)

        assert seen == [
            (ACTION_ADD_LAYER, 1, Pixel.clear()),
            (ACTION_COLOR_PIXEL, 2, Pixel.clear()),
        ]

    def test_remove_listener(self, controller_4x4, mutation_log):
        controller_4x4.add_listener(mutation_log)
        controller_4x4.add_listener(mutation_log)
        controller_4x4.add_layer()
        controller_4x4.remove_listener(mutation_log)
        controller_4x4.add_layer()
        assert mutation_log.calls == [(ACTION_ADD_LAYER, 1)]


# ══════════════════════════════════════════════════════════════════════════
# Snapshots
# ══════════════════════════════════════════════════════════════════════════

class TestSnapshot:

    def test_round_trip(self, controller_4x4, fresh_controller):
        controller_4x4.add_layer()
        _paint(controller_4x4, 1, 2, HALF_BLUE, layer_index=1)
        controller_4x4.set_layer_enabled(0, False)
        controller_4x4.settings.grid_spacing = 30
        snapshot = controller_4x4.get_snapshot()

        fresh_controller.set_snapshot(snapshot)
        assert fresh_controller.is_initialized
        assert fresh_controller.dirty
        assert [l.uuid for l in fresh_controller.layers] == [l.uuid for l in controller_4x4.layers]
        assert not fresh_controller.layers[0].enabled
        assert fresh_controller.settings.grid_spacing == 31.0
        np.testing.assert_array_equal(fresh_controller.get_final_image(),
                                      controller_4x4.get_final_image())

    def test_restore_undoes_later_changes(self, controller_4x4, mutation_log):
        snapshot = controller_4x4.get_snapshot()
        _paint(controller_4x4, 0, 0, OPAQUE_RED)
        controller_4x4.get_final_image()

        controller_4x4.add_listener(mutation_log)
        controller_4x4.set_snapshot(snapshot)
        assert mutation_log.calls == [(ACTION_RESTORE_SNAPSHOT, None)]
        assert controller_4x4.dirty
        assert not controller_4x4.get_final_image().any()

    def test_snapshot_is_detached(self, controller_4x4):
        snapshot = controller_4x4.get_snapshot()
        controller_4x4.set_snapshot(snapshot)
        snapshot['layers'][0]['pixels'][0][0] = [1.0, 1.0, 1.0, 1.0]
        assert not controller_4x4.layers[0].pixels.any()

    def test_layer_size_mismatch_rejected(self, controller_4x4):
        snapshot = controller_4x4.get_snapshot()
        snapshot['width'] = 5
        with pytest.raises(InvalidDimensionsError):
            controller_4x4.set_snapshot(snapshot)
        assert controller_4x4.width == 4


# ══════════════════════════════════════════════════════════════════════════
# Error Sink
# ══════════════════════════════════════════════════════════════════════════

class TestErrorSink:

    @pytest.fixture
    def sink(self, monkeypatch):
        received = []
        monkeypatch.setattr(logger_utils, 'DEBUG_MODE', False)
        logger_utils.set_error_sink(lambda title, message: received.append((title, message)))
        yield received
        logger_utils.set_error_sink(None)

    def test_release_mode_reports_then_raises(self, fresh_controller, sink):
        with pytest.raises(InvalidDimensionsError):
            fresh_controller.initialize(0, 3)
        assert sink == [("Error", "Cannot create image")]

    def test_bad_layer_index_reported(self, controller_4x4, sink):
        with pytest.raises(OutOfBoundsError):
            controller_4x4.remove_layer_at(4)
        assert sink == [("Error", "Cannot remove layer")]

    def test_debug_mode_skips_sink(self, fresh_controller, monkeypatch):
        received = []
        monkeypatch.setattr(logger_utils, 'DEBUG_MODE', True)
        logger_utils.set_error_sink(lambda title, message: received.append(message))
        try:
            with pytest.raises(NotInitializedError):
                fresh_controller.get_final_image()
        finally:
            logger_utils.set_error_sink(None)
        assert received == []
