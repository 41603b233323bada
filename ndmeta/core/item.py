# ndmeta/core/item.py
"""
Metadata items: named values attached to a subset of a dataset's axes.

Three variants exist. ``ConstantItem`` holds a single value, ``VaryingItem``
reads from a lower-dimensional backing array or function addressed by the
positions along its varying axes, and ``AbsentItem`` stands in for metadata
that was requested but not found. Absence is explicit: ``is_present`` tells
the two apart, ``value_or``/``or_item`` substitute defaults, and forcing a
value out of an absent item raises ``MetadataNotFoundError``.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Sequence, Tuple, Union

import numpy as np

from .errors import MetadataNotFoundError
from .fluent import FluentViewMixin
from .transform import AxisTransform, check_axis, check_position

# Python types a numpy scalar may stand in for during typed lookups
_NUMPY_EQUIVALENTS = {
    bool: np.bool_,
    int: np.integer,
    float: np.floating,
    complex: np.complexfloating,
}


def normalize_axes(dims: Sequence[int], num_dimensions: int) -> Tuple[int, ...]:
    """Validate axis indices and return them as a strictly increasing tuple."""
    axes = sorted(check_axis(d, num_dimensions) for d in dims)
    if len(set(axes)) != len(axes):
        raise ValueError(f"Duplicate axes in {list(dims)}")
    return tuple(axes)


def matches_type(value_type: Optional[type], of_type: Optional[type]) -> bool:
    """
    Check whether values of ``value_type`` satisfy a requested ``of_type``.

    ``None`` or ``object`` requests match anything present. numpy scalar
    types match the builtin numeric type they represent, so an item backed
    by an ``int64`` array is found by a lookup for ``int``.
    """
    if of_type is None or of_type is object:
        return True
    if value_type is None:
        return False
    if issubclass(value_type, of_type):
        return True
    if issubclass(value_type, np.generic) and of_type in _NUMPY_EQUIVALENTS:
        return issubclass(value_type, _NUMPY_EQUIVALENTS[of_type])
    return False


class Viewable(ABC):
    """
    A metadata value that depends on position, such as an axis calibration.

    When an item holding such a value is seen through a view, the value is
    re-expressed in view coordinates. Both methods receive only the part of
    the view that acts on the item's attached axes, in attached-axis order.
    """

    @abstractmethod
    def view_transform(self, transform: AxisTransform) -> "Viewable":
        """Return this value as seen through ``transform`` (view -> source)."""
        pass

    @abstractmethod
    def view_subsample(self, steps: Tuple[int, ...]) -> "Viewable":
        """Return this value as seen when keeping every ``steps[i]``-th position."""
        pass


class MetadataItem(FluentViewMixin, ABC):
    """Abstract base class for a named, optionally axis-attached metadatum."""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def num_dimensions(self) -> int:
        pass

    @property
    @abstractmethod
    def attached_axes(self) -> Tuple[int, ...]:
        """Axes this item semantically concerns, strictly increasing."""
        pass

    @property
    def varying_axes(self) -> Tuple[int, ...]:
        """Axes along which the value actually changes."""
        return ()

    @property
    def is_present(self) -> bool:
        return True

    @property
    def value_type(self) -> Optional[type]:
        """Type of the values held, used for typed lookups; None when absent."""
        return type(self.value())

    @abstractmethod
    def get_at(self, position: Sequence[int]) -> Any:
        """Return the value at an ``num_dimensions``-dimensional position."""
        pass

    def value(self) -> Any:
        """Return the position-invariant value (the value at the origin)."""
        return self.get_at((0,) * self.num_dimensions)

    def value_or(self, default: Any) -> Any:
        """Return ``value()``, or ``default`` when this item is absent."""
        if not self.is_present:
            return default
        return self.value()

    def or_item(
        self, default: Union["MetadataItem", Callable[[], "MetadataItem"]]
    ) -> "MetadataItem":
        """
        Return this item, or ``default`` when this item is absent.

        Args:
            default: A replacement item, or a zero-argument callable that
                builds one; the callable is only invoked when needed.
        """
        if self.is_present:
            return self
        if isinstance(default, MetadataItem):
            return default
        return default()

    def is_attached_to(self, *dims: int) -> bool:
        attached = self.attached_axes
        return all(d in attached for d in dims)

    def _view_through(self, transform: AxisTransform) -> "MetadataItem":
        from ..view.item_view import MetadataItemView

        return MetadataItemView(self, transform)

    def _subsample_by(self, steps: Tuple[int, ...]) -> "MetadataItem":
        from ..view.subsample_view import MetadataItemSubsampleView

        return MetadataItemSubsampleView(self, steps)

    def __repr__(self) -> str:
        if self.attached_axes:
            attachment = f"attached to axes {list(self.attached_axes)}"
        else:
            attachment = "not attached to any axis"
        return f"{self.__class__.__name__} '{self.name}'; {attachment}"


class _RootItem(MetadataItem):
    """Shared storage for items created directly rather than as views."""

    def __init__(self, name: str, num_dimensions: int, attached_axes: Sequence[int]):
        if num_dimensions < 0:
            raise ValueError(f"Invalid dimensionality: {num_dimensions}")
        self._name = name
        self._num_dimensions = int(num_dimensions)
        self._attached_axes = normalize_axes(attached_axes, self._num_dimensions)

    @property
    def name(self) -> str:
        return self._name

    @property
    def num_dimensions(self) -> int:
        return self._num_dimensions

    @property
    def attached_axes(self) -> Tuple[int, ...]:
        return self._attached_axes


class ConstantItem(_RootItem):
    """A metadatum with the same value at every position."""

    def __init__(
        self,
        name: str,
        value: Any,
        num_dimensions: int,
        attached_axes: Sequence[int] = (),
    ):
        super().__init__(name, num_dimensions, attached_axes)
        self._value = value

    def get_at(self, position: Sequence[int]) -> Any:
        check_position(position, self._num_dimensions)
        return self._value

    def value(self) -> Any:
        return self._value

    def __repr__(self) -> str:
        return f"{super().__repr__()}; value = {self._value!r}"


class VaryingItem(_RootItem):
    """
    A metadatum whose value changes along its varying axes.

    The backing ``data`` is m-dimensional, one dimension per varying axis in
    declaration order. It may be a ``numpy.ndarray`` (or another indexable
    container) or a callable receiving the m coordinates as a tuple.
    """

    def __init__(
        self,
        name: str,
        data: Any,
        num_dimensions: int,
        attached_axes: Sequence[int] = (),
        varying_axes: Optional[Sequence[int]] = None,
        value_type: Optional[type] = None,
    ):
        super().__init__(name, num_dimensions, attached_axes)
        if varying_axes is None:
            self._varying_axes = self._attached_axes
        else:
            self._varying_axes = normalize_axes(varying_axes, self._num_dimensions)
        self._data = data
        self._value_type = value_type

    @property
    def varying_axes(self) -> Tuple[int, ...]:
        return self._varying_axes

    @property
    def data(self) -> Any:
        return self._data

    @property
    def value_type(self) -> Optional[type]:
        if self._value_type is not None:
            return self._value_type
        data = self._data
        if isinstance(data, np.ndarray) and data.ndim == len(self._varying_axes):
            # object arrays report the type of their elements
            if data.dtype.kind != "O" or data.size == 0:
                return data.dtype.type
        return type(self._lookup((0,) * len(self._varying_axes)))

    def get_at(self, position: Sequence[int]) -> Any:
        check_position(position, self._num_dimensions)
        return self._lookup(tuple(int(position[d]) for d in self._varying_axes))

    def _lookup(self, coords: Tuple[int, ...]) -> Any:
        data = self._data
        if callable(data):
            return data(coords)
        if isinstance(data, np.ndarray):
            for c, size in zip(coords, data.shape):
                if not 0 <= c < size:
                    raise IndexError(
                        f"Position {list(coords)} of item '{self._name}' is outside "
                        f"its backing array of shape {data.shape}"
                    )
            return data[coords]
        value = data
        for c in coords:
            if c < 0:
                raise IndexError(
                    f"Negative position {list(coords)} for item '{self._name}'"
                )
            value = value[c]
        return value


class AbsentItem(_RootItem):
    """Stand-in returned when no item matches a lookup."""

    @property
    def is_present(self) -> bool:
        return False

    @property
    def value_type(self) -> Optional[type]:
        return None

    def get_at(self, position: Sequence[int]) -> Any:
        raise MetadataNotFoundError(self._name, self._attached_axes)

    def value(self) -> Any:
        raise MetadataNotFoundError(self._name, self._attached_axes)


def constant(name: str, value: Any, num_dimensions: int, *dims: int) -> ConstantItem:
    """Create an item holding ``value`` everywhere, attached to ``dims``."""
    return ConstantItem(name, value, num_dimensions, dims)


def varying(
    name: str,
    data: Any,
    num_dimensions: int,
    *dims: int,
    varying_axes: Optional[Sequence[int]] = None,
    value_type: Optional[type] = None,
) -> VaryingItem:
    """
    Create an item backed by ``data``, attached to ``dims``.

    Args:
        name: Item name.
        data: Array, indexable container or callable, one dimension per
            varying axis.
        num_dimensions: Dimensionality of the dataset the item belongs to.
        *dims: Attached axes.
        varying_axes: Axes the value changes along; defaults to ``dims``.
        value_type: Value type reported to typed lookups; inferred when None.
    """
    return VaryingItem(
        name,
        data,
        num_dimensions,
        dims,
        varying_axes=varying_axes,
        value_type=value_type,
    )


def absent(name: str, num_dimensions: int, *dims: int) -> AbsentItem:
    return AbsentItem(name, num_dimensions, dims)


def item(name: str, data: Any, num_dimensions: int, *dims: int) -> MetadataItem:
    """Create a varying item for arrays and callables, a constant item otherwise."""
    if isinstance(data, np.ndarray) or callable(data):
        return varying(name, data, num_dimensions, *dims)
    return constant(name, data, num_dimensions, *dims)
