"""
Common test fixtures for ndmeta tests.
"""

import numpy as np
import pytest

from ndmeta.calibration.axes import AXIS_KEY, AxisType, LinearAxis
from ndmeta.core.item import constant, varying
from ndmeta.core.store import SimpleMetadataStore

# Axis order of the 5-D fixtures
XYZCT = (AxisType.X, AxisType.Y, AxisType.Z, AxisType.CHANNEL, AxisType.TIME)


@pytest.fixture
def calibrated_store():
    """5-D store (X, Y, Z, Channel, Time) with a linear calibration per axis.

    Axis ``d`` has scale ``d + 1`` and offset ``10 * d``.
    """
    store = SimpleMetadataStore(5)
    for d, axis_type in enumerate(XYZCT):
        calibration = LinearAxis(axis_type, scale=float(d + 1), offset=10.0 * d)
        store.add(constant(AXIS_KEY, calibration, 5, d))
    return store


@pytest.fixture
def channel_luts():
    """One lookup-table id per channel."""
    return np.array([100, 200, 300, 400])


@pytest.fixture
def varying_store(channel_luts):
    """5-D store with a per-channel item, a per-plane item and a global one."""
    store = SimpleMetadataStore(5)
    store.add(varying("lut", channel_luts, 5, 3))
    store.add(varying("exposure", np.arange(12).reshape(3, 4) * 10, 5, 2, 3))
    store.add(constant("author", "someone", 5))
    return store
