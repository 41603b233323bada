"""
Tests for the info registry.
"""

import pytest

from ndmeta.calibration.axes import AXIS_KEY, AxisType, LinearAxis
from ndmeta.core.item import constant
from ndmeta.core.registry import (
    _registry,
    available_info_kinds,
    get_info_factory,
    register_info,
)
from ndmeta.core.store import SimpleMetadataStore


class TestRegistry:
    """Test the registry functionality."""

    def setup_method(self):
        """Set up each test by clearing the registry."""
        # Store original registry values to restore later
        with _registry._lock:
            self.original_factories = _registry._factories.copy()
            _registry._factories.clear()

    def teardown_method(self):
        """Restore original registry values after each test."""
        with _registry._lock:
            _registry._factories.clear()
            _registry._factories.update(self.original_factories)

    def test_register_info(self):
        """Test registering an info class."""

        @register_info("axes")
        class AxesInfo:
            def __init__(self, store):
                self.store = store

        with _registry._lock:
            assert _registry._factories["axes"] is AxesInfo

        assert get_info_factory("axes") is AxesInfo
        assert available_info_kinds() == ["axes"]

    def test_register_function(self):
        """Test that plain functions can be registered as factories."""

        @register_info("count")
        def count(store):
            return len(store)

        store = SimpleMetadataStore(1)
        store.add(constant("a", 1, 1))
        assert store.info("count") == 1

    def test_unknown_kind(self):
        """Test error for a kind nobody registered."""
        register_info("axes")(lambda store: None)
        with pytest.raises(ValueError) as e:
            get_info_factory("nope")
        assert "nope" in str(e.value)
        assert "axes" in str(e.value)

        with pytest.raises(ValueError):
            SimpleMetadataStore(1).info("nope")

    def test_reregister_replaces(self):
        register_info("kind")(lambda store: 1)
        register_info("kind")(lambda store: 2)
        assert SimpleMetadataStore(1).info("kind") == 2

    def test_info_bound_to_view(self, calibrated_store):
        """Test that info built on a view reads the view's metadata."""

        @register_info("calibrations")
        class Calibrations:
            def __init__(self, store):
                self.store = store

            def axis_types(self):
                return [
                    self.store.item(AXIS_KEY, d, of_type=LinearAxis).value().type
                    for d in range(self.store.num_dimensions)
                ]

        assert calibrated_store.info("calibrations").axis_types()[2] == AxisType.Z

        view = calibrated_store.slice(0, 4).rotate(1, 2)
        info = view.info("calibrations")
        assert info.store is view
        assert info.axis_types() == [
            AxisType.Y,
            AxisType.CHANNEL,
            AxisType.Z,
            AxisType.TIME,
        ]
