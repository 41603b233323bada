# ndmeta/calibration/axes.py
"""
Axis calibration values.

Calibrations are stored as constant items named ``AXIS_KEY`` attached to the
axis they describe. Both axis classes are ``Viewable``: seen through a view
they report calibrated values for view positions rather than for positions
of the original dataset.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

from ..core.item import Viewable
from ..core.transform import AxisTransform

AXIS_KEY = "axis"


class AxisType(Enum):
    X = "X"
    Y = "Y"
    Z = "Z"
    CHANNEL = "Channel"
    TIME = "Time"
    UNKNOWN = "Unknown"

    @property
    def is_spatial(self) -> bool:
        return self in (AxisType.X, AxisType.Y, AxisType.Z)


def _check_attachment(num_axes: int, what: str) -> bool:
    """
    Return True when a calibration has one axis to re-express along.

    Calibrations stored on no axis have nothing to re-express and are seen
    unchanged; calibrations stored on several axes are rejected.
    """
    if num_axes == 0:
        return False
    if num_axes != 1:
        raise ValueError(
            f"Axis calibrations attach to one axis, got {num_axes} {what}"
        )
    return True


def _single_axis(transform: AxisTransform) -> Optional[Tuple[int, bool]]:
    if not _check_attachment(transform.num_target_dimensions, "transformed axes"):
        return None
    return transform.translation[0], transform.component_inversion[0]


def _single_step(steps: Tuple[int, ...]) -> Optional[int]:
    if not _check_attachment(len(steps), "subsampling steps"):
        return None
    return steps[0]


@dataclass(frozen=True)
class LinearAxis(Viewable):
    """Calibration ``calibrated = scale * raw + offset``."""

    type: AxisType = AxisType.UNKNOWN
    scale: float = 1.0
    offset: float = 0.0
    unit: Optional[str] = None

    def calibrated(self, raw: float) -> float:
        return self.scale * raw + self.offset

    def raw(self, calibrated: float) -> float:
        """Inverse of ``calibrated``."""
        if self.scale == 0:
            raise ZeroDivisionError("Axis scale is zero; calibration is not invertible")
        return (calibrated - self.offset) / self.scale

    def view_transform(self, transform: AxisTransform) -> "LinearAxis":
        single = _single_axis(transform)
        if single is None:
            return self
        shift, inverted = single
        return LinearAxis(
            self.type,
            -self.scale if inverted else self.scale,
            self.offset + self.scale * shift,
            self.unit,
        )

    def view_subsample(self, steps: Tuple[int, ...]) -> "LinearAxis":
        step = _single_step(steps)
        if step is None:
            return self
        return LinearAxis(self.type, self.scale * step, self.offset, self.unit)


@dataclass(frozen=True)
class EnumeratedAxis(Viewable):
    """Calibration given as an explicit value for each raw index."""

    type: AxisType = AxisType.UNKNOWN
    values: Union[Mapping[int, Any], Sequence[Any]] = field(default_factory=dict)
    unit: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.values, Mapping):
            table: Dict[int, Any] = {int(k): v for k, v in self.values.items()}
        else:
            table = dict(enumerate(self.values))
        object.__setattr__(self, "values", table)

    def calibrated(self, raw: int) -> Any:
        try:
            return self.values[int(raw)]
        except KeyError:
            raise IndexError(f"No calibration value for index {raw}") from None

    def view_transform(self, transform: AxisTransform) -> "EnumeratedAxis":
        single = _single_axis(transform)
        if single is None:
            return self
        shift, inverted = single
        sign = -1 if inverted else 1
        # source index = shift + sign * view index
        return EnumeratedAxis(
            self.type,
            {sign * (index - shift): value for index, value in self.values.items()},
            self.unit,
        )

    def view_subsample(self, steps: Tuple[int, ...]) -> "EnumeratedAxis":
        step = _single_step(steps)
        if step is None:
            return self
        return EnumeratedAxis(
            self.type,
            {
                index // step: value
                for index, value in self.values.items()
                if index % step == 0
            },
            self.unit,
        )
