"""
Shared fixtures for pixel layers tests.

Provides initialized controllers of a few sizes and a recording listener.
"""
import sys
import os
import pytest

# Ensure editor/src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'editor', 'src'))


# ── Colours used across tests ───────────────────────────────────────────

OPAQUE_RED = (1.0, 0.0, 0.0, 1.0)
HALF_BLUE = (0.0, 0.0, 1.0, 0.5)
OPAQUE_GREEN = (0.0, 1.0, 0.0, 1.0)


@pytest.fixture
def fresh_controller():
    """Uninitialized controller"""
    from pixel_layers.models.image import ImageController
    return ImageController()


@pytest.fixture
def controller_2x2():
    """Initialized 2x2 image with one layer"""
    from pixel_layers.models.image import ImageController
    controller = ImageController()
    controller.initialize(2, 2)
    return controller


@pytest.fixture
def controller_4x4():
    """Initialized 4x4 image with one layer"""
    from pixel_layers.models.image import ImageController
    controller = ImageController()
    controller.initialize(4, 4)
    return controller


@pytest.fixture
def controller_8x8():
    """Initialized 8x8 image with one layer"""
    from pixel_layers.models.image import ImageController
    controller = ImageController()
    controller.initialize(8, 8)
    return controller


@pytest.fixture
def mutation_log():
    """Listener that records (description, layer_index) calls"""
    calls = []

    def listener(description, layer_index):
        calls.append((description, layer_index))

    listener.calls = calls
    return listener
