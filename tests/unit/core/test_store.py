"""
Tests for the root metadata store and the store lookup contract.
"""

import logging

import numpy as np
import pytest

from ndmeta.calibration.axes import AXIS_KEY, AxisType, LinearAxis
from ndmeta.core.errors import InvalidAxisError, ReadOnlyStoreError
from ndmeta.core.item import absent, constant, varying
from ndmeta.core.store import MetadataStore, SimpleMetadataStore


class TestLookup:
    """Test finding items by name, attachment and type."""

    def test_find_by_axis(self, calibrated_store):
        for d, axis_type in enumerate(
            [AxisType.X, AxisType.Y, AxisType.Z, AxisType.CHANNEL, AxisType.TIME]
        ):
            found = calibrated_store.item(AXIS_KEY, d)
            assert found.is_present
            assert found.value().type == axis_type

    def test_unattached_request_matches_any_attachment(self, varying_store):
        assert varying_store.item("lut").is_present
        assert varying_store.item("author").is_present

    def test_attachment_superset(self, varying_store):
        """Test that an item attached to more axes than requested is found."""
        exposure = varying_store.item("exposure", 3)
        assert exposure.is_present
        assert exposure.attached_axes == (2, 3)

    def test_attachment_must_include_request(self, varying_store):
        assert not varying_store.item("lut", 2).is_present
        assert not varying_store.item("author", 0).is_present

    def test_missing_name(self, varying_store):
        missing = varying_store.item("nothing", 1)
        assert not missing.is_present
        assert missing.name == "nothing"
        assert missing.attached_axes == (1,)
        assert missing.num_dimensions == 5

    def test_typed_lookup(self, varying_store):
        assert varying_store.item("author", of_type=str).is_present
        assert not varying_store.item("author", of_type=int).is_present
        # int64 array elements satisfy a lookup for int
        assert varying_store.item("lut", 3, of_type=int).is_present

    def test_typed_lookup_skips_wrong_type(self):
        """Test that a same-named item of another type does not shadow a match."""
        store = SimpleMetadataStore(2)
        store.add(constant("gain", "high", 2, 0))
        store.add(constant("gain", 2.5, 2, 0, 1))
        found = store.item("gain", 0, of_type=float)
        assert found.value() == 2.5
        assert store.item("gain", 0, of_type=str).value() == "high"

    def test_invalid_axis(self, varying_store):
        with pytest.raises(InvalidAxisError):
            varying_store.item("lut", 5)
        with pytest.raises(InvalidAxisError):
            varying_store.item("lut", -1)


class TestSimpleMetadataStore:
    """Test the in-memory store."""

    def test_add_and_len(self):
        store = SimpleMetadataStore(3)
        assert len(store) == 0
        store.add(constant("a", 1, 3))
        store.add(constant("b", 2, 3, 0))
        assert len(store) == 2
        assert store.is_writable

    def test_same_name_different_axes_coexist(self):
        store = SimpleMetadataStore(3)
        store.add(constant("unit", "um", 3, 0))
        store.add(constant("unit", "s", 3, 2))
        assert len(store) == 2
        assert store.item("unit", 0).value() == "um"
        assert store.item("unit", 2).value() == "s"

    def test_readd_replaces(self, caplog):
        """Test that an item with the same name and axes replaces the old one."""
        store = SimpleMetadataStore(3)
        store.add(constant("unit", "um", 3, 0))
        with caplog.at_level(logging.DEBUG, logger="ndmeta"):
            store.add(constant("unit", "nm", 3, 0))
        assert len(store) == 1
        assert store.item("unit", 0).value() == "nm"
        assert "Replacing metadata item 'unit'" in caplog.text

    def test_replace_keeps_order(self):
        store = SimpleMetadataStore(1)
        store.add(constant("a", 1, 1))
        store.add(constant("b", 2, 1))
        store.add(constant("a", 3, 1))
        assert [i.name for i in store.items()] == ["a", "b"]

    def test_rejects_wrong_dimensionality(self):
        store = SimpleMetadataStore(3)
        with pytest.raises(ValueError):
            store.add(constant("a", 1, 2))

    def test_rejects_absent_and_non_items(self):
        store = SimpleMetadataStore(3)
        with pytest.raises(ValueError):
            store.add(absent("a", 3))
        with pytest.raises(TypeError):
            store.add("not an item")

    def test_read_only_store(self):
        store = SimpleMetadataStore(2, items=[constant("a", 1, 2)], writable=False)
        assert not store.is_writable
        assert store.item("a").value() == 1
        with pytest.raises(ReadOnlyStoreError):
            store.add(constant("b", 2, 2))

    def test_frozen_copy(self):
        store = SimpleMetadataStore(2)
        store.add(constant("a", 1, 2))
        frozen = store.frozen()
        with pytest.raises(ReadOnlyStoreError):
            frozen.add(constant("b", 2, 2))
        # later writes to the original do not leak into the copy
        store.add(constant("b", 2, 2))
        assert len(frozen) == 1
        assert len(store) == 2

    def test_read_only_error_is_type_error(self):
        with pytest.raises(TypeError):
            SimpleMetadataStore(1, writable=False).add(constant("a", 1, 1))

    def test_negative_dimensionality(self):
        with pytest.raises(ValueError):
            SimpleMetadataStore(-1)

    def test_repr(self, varying_store):
        assert repr(varying_store) == "SimpleMetadataStore(num_dimensions=5, items=3)"


class TestAdapterStore:
    """Test a read-only store that only implements the abstract contract."""

    def make_store(self):
        class AttributeStore(MetadataStore):
            """Exposes a dict of attributes as unattached items."""

            def __init__(self, attrs, num_dimensions):
                self.attrs = attrs
                self._num_dimensions = num_dimensions

            @property
            def num_dimensions(self):
                return self._num_dimensions

            def items(self):
                return [
                    constant(k, v, self._num_dimensions) for k, v in self.attrs.items()
                ]

        return AttributeStore({"instrument": "scope", "wavelength": 488}, 3)

    def test_lookup_through_base_class(self):
        store = self.make_store()
        assert store.item("instrument").value() == "scope"
        assert store.item("wavelength", of_type=int).value() == 488
        assert not store.item("missing").is_present

    def test_add_rejected(self):
        store = self.make_store()
        assert not store.is_writable
        with pytest.raises(ReadOnlyStoreError):
            store.add(constant("x", 1, 3))

    def test_views_work(self):
        view = self.make_store().slice(0, 2)
        assert view.num_dimensions == 2
        assert view.item("instrument").value() == "scope"

    def test_cannot_instantiate_base(self):
        with pytest.raises(TypeError):
            MetadataStore()


def test_varying_item_in_store():
    """Test that the store returns the stored item itself."""
    store = SimpleMetadataStore(2)
    lut = varying("lut", np.arange(3), 2, 1)
    store.add(lut)
    assert store.item("lut", 1) is lut


def test_typed_lookup_object_array():
    """Test that an object array is matched on the type of its elements."""
    store = SimpleMetadataStore(2)
    calibrations = np.array(
        [LinearAxis(AxisType.X), LinearAxis(AxisType.Y)], dtype=object
    )
    store.add(varying("cal", calibrations, 2, 0))

    found = store.item("cal", of_type=LinearAxis)
    assert found.is_present
    assert found.value_type is LinearAxis
    assert found.get_at((1, 0)).type == AxisType.Y
    assert not store.item("cal", of_type=str).is_present


def test_typed_lookup_empty_object_array():
    store = SimpleMetadataStore(1)
    store.add(varying("empty", np.array([], dtype=object), 1, 0))
    assert store.item("empty").is_present
    assert not store.item("empty", of_type=LinearAxis).is_present
