"""
End-to-end scenarios combining stores, views and calibrations.
"""

import numpy as np
import pytest

import ndmeta
from ndmeta.calibration import AXIS_KEY, AxisType, EnumeratedAxis, LinearAxis
from ndmeta.core.queries import put_constant, put_varying, value_of


@pytest.fixture
def image_dataset():
    """A small XYCZT-like acquisition with calibrations and per-channel metadata."""
    data = np.zeros((8, 6, 3, 4, 2), dtype=np.uint16)
    store = ndmeta.SimpleMetadataStore(5)
    put_constant(store, AXIS_KEY, LinearAxis(AxisType.X, 0.5, 0.0, "um"), 0)
    put_constant(store, AXIS_KEY, LinearAxis(AxisType.Y, 0.5, 0.0, "um"), 1)
    put_constant(
        store, AXIS_KEY, EnumeratedAxis(AxisType.CHANNEL, ["DAPI", "GFP", "RFP"]), 2
    )
    put_constant(store, AXIS_KEY, LinearAxis(AxisType.Z, 2.0, 0.0, "um"), 3)
    put_constant(store, AXIS_KEY, LinearAxis(AxisType.TIME, 30.0, 0.0, "s"), 4)
    put_varying(store, "wavelength", np.array([405, 488, 561]), 2)
    put_constant(store, "instrument", "scope-1")
    return ndmeta.Dataset(data, store)


class TestScenarios:
    """Test realistic chains of views."""

    def test_single_channel_plane(self, image_dataset):
        """Test taking one channel at one time point."""
        view = image_dataset.slice(4, 1).slice(2, 1)
        store = view.store
        assert store.num_dimensions == 3
        assert [store.item(AXIS_KEY, d).value().type for d in range(3)] == [
            AxisType.X,
            AxisType.Y,
            AxisType.Z,
        ]
        # the channel was sliced away, so its items are gone
        assert not store.item("wavelength").is_present
        assert value_of(store, "wavelength", default=None) is None
        assert value_of(store, "instrument") == "scope-1"

    def test_channel_crop(self, image_dataset):
        """Test cropping to the last two channels with a translation."""
        view = image_dataset.translate(0, 0, -1, 0, 0)
        wavelength = view.store.item("wavelength", 2)
        assert [wavelength.get_at((0, 0, c, 0, 0)) for c in range(2)] == [488, 561]
        channels = view.store.item(AXIS_KEY, 2).value()
        assert channels.calibrated(0) == "GFP"

    def test_downsampled_xy(self, image_dataset):
        view = image_dataset.subsample(2, 2, 1)
        x = view.store.item(AXIS_KEY, 0, of_type=LinearAxis).value()
        assert x.scale == pytest.approx(1.0)
        assert x.unit == "um"
        assert view.store.item("wavelength", 2).get_at((0, 0, 2, 0, 0)) == 561

    def test_rotated_xy_calibration(self, image_dataset):
        """Test that a quarter turn swaps X and Y and flips Y."""
        view = image_dataset.rotate(0, 1)
        store = view.store
        flipped = store.item(AXIS_KEY, 0).value()
        assert flipped.type == AxisType.Y
        assert flipped.scale == pytest.approx(-0.5)
        x = store.item(AXIS_KEY, 1).value()
        assert x.type == AxisType.X
        assert x.scale == pytest.approx(0.5)

    def test_missing_metadata_defaults(self, image_dataset):
        store = image_dataset.store
        objective = store.item("objective").or_item(
            lambda: ndmeta.constant("objective", "unknown", 5)
        )
        assert objective.value() == "unknown"
        with pytest.raises(ndmeta.MetadataNotFoundError):
            store.item("objective").value()

    def test_views_never_write(self, image_dataset):
        view = image_dataset.slice(0, 0)
        with pytest.raises(ndmeta.ReadOnlyStoreError):
            put_constant(view.store, "note", "x")
        assert image_dataset.store.item("note").value_or(None) is None
