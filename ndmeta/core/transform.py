# ndmeta/core/transform.py
"""
Integer coordinate transforms used to derive views.

An ``AxisTransform`` maps positions of an m-dimensional *view* (the source
space) onto the n-dimensional space the view wraps (the target space). For
every target axis ``t`` it records which source axis feeds it, whether it is
instead held at a fixed value (a sliced axis), a translation and an
inversion flag:

    target[t] = translation[t]                           if zero[t]
    target[t] = translation[t] + (-1)^invert[t] * source[component[t]]

Stacked views compose their transforms with ``concatenate`` so that a lookup
through any number of views costs a single ``apply``.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .errors import InvalidAxisError


def check_axis(d: int, num_dimensions: int) -> int:
    """Return ``d`` as an int, raising InvalidAxisError if it is out of range."""
    if not 0 <= d < num_dimensions:
        raise InvalidAxisError(
            f"Axis {d} is out of range for {num_dimensions}-dimensional metadata"
        )
    return int(d)


def check_position(position: Sequence[int], num_dimensions: int) -> None:
    if len(position) != num_dimensions:
        raise ValueError(
            f"Position must be {num_dimensions}-dimensional, got {len(position)} "
            f"coordinates"
        )


def check_steps(steps: Sequence[int], num_dimensions: int) -> Tuple[int, ...]:
    """Validate a per-axis subsampling step vector."""
    steps = tuple(int(s) for s in steps)
    if len(steps) != num_dimensions:
        raise ValueError(
            f"Expected {num_dimensions} subsampling steps, got {len(steps)}"
        )
    if any(s <= 0 for s in steps):
        raise ValueError(f"Subsampling steps must be positive (got: {list(steps)})")
    return steps


def expand_steps(steps: Sequence[int], num_dimensions: int) -> Tuple[int, ...]:
    """Pad ``steps`` to ``num_dimensions`` entries by repeating the last one."""
    if not steps:
        raise ValueError("At least one subsampling step is required")
    if len(steps) > num_dimensions:
        raise ValueError(
            f"Got {len(steps)} subsampling steps for {num_dimensions} dimensions"
        )
    padded = list(steps) + [steps[-1]] * (num_dimensions - len(steps))
    return check_steps(padded, num_dimensions)


@dataclass(frozen=True)
class AxisTransform:
    """Immutable integer transform from view coordinates to wrapped coordinates."""

    num_source_dimensions: int
    num_target_dimensions: int
    component_mapping: Tuple[int, ...]
    component_zero: Tuple[bool, ...]
    translation: Tuple[int, ...]
    component_inversion: Tuple[bool, ...]

    def __post_init__(self):
        n = self.num_target_dimensions
        if self.num_source_dimensions < 0 or n < 0:
            raise ValueError("Dimensionality must be non-negative")
        for field_name in (
            "component_mapping",
            "component_zero",
            "translation",
            "component_inversion",
        ):
            values = getattr(self, field_name)
            if len(values) != n:
                raise ValueError(
                    f"{field_name} has {len(values)} entries, expected {n}"
                )
        object.__setattr__(
            self, "component_mapping", tuple(int(c) for c in self.component_mapping)
        )
        object.__setattr__(
            self, "component_zero", tuple(bool(z) for z in self.component_zero)
        )
        object.__setattr__(self, "translation", tuple(int(t) for t in self.translation))
        object.__setattr__(
            self,
            "component_inversion",
            tuple(bool(i) for i in self.component_inversion),
        )
        for t in range(n):
            if not self.component_zero[t]:
                c = self.component_mapping[t]
                if not 0 <= c < self.num_source_dimensions:
                    raise InvalidAxisError(
                        f"Target axis {t} maps from source axis {c}, outside "
                        f"[0, {self.num_source_dimensions})"
                    )

    def apply(self, position: Sequence[int], out=None) -> List[int]:
        """
        Map a view position onto the wrapped space.

        Args:
            position: Source (view) coordinates.
            out: Optional caller-owned buffer of length ``num_target_dimensions``
                that receives the result. A new list is created when omitted.

        Returns:
            The target coordinates (``out`` itself when it was given).
        """
        check_position(position, self.num_source_dimensions)
        if out is None:
            out = [0] * self.num_target_dimensions
        elif len(out) != self.num_target_dimensions:
            raise ValueError(
                f"Output buffer must hold {self.num_target_dimensions} coordinates"
            )
        for t in range(self.num_target_dimensions):
            value = self.translation[t]
            if not self.component_zero[t]:
                p = int(position[self.component_mapping[t]])
                value = value - p if self.component_inversion[t] else value + p
            out[t] = value
        return out

    def concatenate(self, other: "AxisTransform") -> "AxisTransform":
        """Return the transform that applies ``self`` first and then ``other``."""
        if other.num_source_dimensions != self.num_target_dimensions:
            raise ValueError(
                f"Cannot concatenate a {self.num_target_dimensions}-dimensional output "
                f"with a transform expecting {other.num_source_dimensions} dimensions"
            )
        mapping, zero, translation, inversion = [], [], [], []
        for t in range(other.num_target_dimensions):
            shift = other.translation[t]
            if other.component_zero[t]:
                mapping.append(0)
                zero.append(True)
                translation.append(shift)
                inversion.append(False)
                continue

            c = other.component_mapping[t]
            inner = self.translation[c]
            translation.append(
                shift - inner if other.component_inversion[t] else shift + inner
            )
            if self.component_zero[c]:
                mapping.append(0)
                zero.append(True)
                inversion.append(False)
            else:
                mapping.append(self.component_mapping[c])
                zero.append(False)
                inversion.append(
                    other.component_inversion[t] != self.component_inversion[c]
                )

        return AxisTransform(
            self.num_source_dimensions,
            other.num_target_dimensions,
            tuple(mapping),
            tuple(zero),
            tuple(translation),
            tuple(inversion),
        )

    def preconcatenate(self, other: "AxisTransform") -> "AxisTransform":
        """Return the transform that applies ``other`` first and then ``self``."""
        return other.concatenate(self)

    def inverse_component_mapping(self) -> Tuple[Optional[int], ...]:
        """
        For each source (view) axis, the target axis it feeds.

        Axes feeding nothing, such as those inserted by ``add_dimension``,
        map to None.
        """
        table: List[Optional[int]] = [None] * self.num_source_dimensions
        for t in range(self.num_target_dimensions):
            if not self.component_zero[t]:
                c = self.component_mapping[t]
                if table[c] is None:
                    table[c] = t
        return tuple(table)

    def restrict(self, axes: Sequence[int]) -> "AxisTransform":
        """
        Extract the translation and inversion acting on the given target axes.

        The result is square (``len(axes)`` dimensions) with an identity
        component mapping. Position-aware metadata values use it to re-express
        themselves in view space.
        """
        axes = [check_axis(a, self.num_target_dimensions) for a in axes]
        k = len(axes)
        return AxisTransform(
            k,
            k,
            tuple(range(k)),
            (False,) * k,
            tuple(self.translation[a] for a in axes),
            tuple(self.component_inversion[a] for a in axes),
        )

    def is_identity(self) -> bool:
        n = self.num_target_dimensions
        return (
            self.num_source_dimensions == n
            and self.component_mapping == tuple(range(n))
            and not any(self.component_zero)
            and not any(self.translation)
            and not any(self.component_inversion)
        )


def _square(
    n: int,
    mapping: Optional[Sequence[int]] = None,
    translation: Optional[Sequence[int]] = None,
    inversion: Optional[Sequence[bool]] = None,
) -> AxisTransform:
    return AxisTransform(
        n,
        n,
        tuple(range(n)) if mapping is None else tuple(mapping),
        (False,) * n,
        (0,) * n if translation is None else tuple(translation),
        (False,) * n if inversion is None else tuple(inversion),
    )


def identity(n: int) -> AxisTransform:
    return _square(n)


def hyper_slice(n: int, d: int, pos: int) -> AxisTransform:
    """View with axis ``d`` removed and held at ``pos``; n-1 view dimensions."""
    d = check_axis(d, n)
    mapping = [0] * n
    zero = [False] * n
    translation = [0] * n
    for e in range(n):
        if e < d:
            mapping[e] = e
        elif e > d:
            mapping[e] = e - 1
    zero[d] = True
    translation[d] = int(pos)
    return AxisTransform(
        n - 1, n, tuple(mapping), tuple(zero), tuple(translation), (False,) * n
    )


def add_dimension(n: int) -> AxisTransform:
    """View with one extra trailing axis that feeds no wrapped axis."""
    return AxisTransform(
        n + 1, n, tuple(range(n)), (False,) * n, (0,) * n, (False,) * n
    )


def translate(*translation: int) -> AxisTransform:
    """View where position ``x`` shows wrapped position ``x - translation``."""
    return _square(len(translation), translation=[-int(t) for t in translation])


def translate_inverse(*translation: int) -> AxisTransform:
    """View where position ``x`` shows wrapped position ``x + translation``."""
    return _square(len(translation), translation=[int(t) for t in translation])


def rotate(n: int, from_axis: int, to_axis: int) -> AxisTransform:
    """Rotate 90 degrees from ``from_axis`` towards ``to_axis``."""
    from_axis = check_axis(from_axis, n)
    to_axis = check_axis(to_axis, n)
    if from_axis == to_axis:
        return identity(n)
    mapping = list(range(n))
    inversion = [False] * n
    mapping[to_axis] = from_axis
    inversion[to_axis] = True
    mapping[from_axis] = to_axis
    return _square(n, mapping=mapping, inversion=inversion)


def permute(n: int, from_axis: int, to_axis: int) -> AxisTransform:
    """Swap two axes."""
    from_axis = check_axis(from_axis, n)
    to_axis = check_axis(to_axis, n)
    mapping = list(range(n))
    mapping[from_axis] = to_axis
    mapping[to_axis] = from_axis
    return _square(n, mapping=mapping)


def move_axis(n: int, from_axis: int, to_axis: int) -> AxisTransform:
    """Move ``from_axis`` to ``to_axis``, keeping the order of the others."""
    from_axis = check_axis(from_axis, n)
    to_axis = check_axis(to_axis, n)
    order = list(range(n))
    order.insert(to_axis, order.pop(from_axis))
    mapping = [0] * n
    for view_axis, wrapped_axis in enumerate(order):
        mapping[wrapped_axis] = view_axis
    return _square(n, mapping=mapping)


def invert_axis(n: int, d: int) -> AxisTransform:
    d = check_axis(d, n)
    inversion = [False] * n
    inversion[d] = True
    return _square(n, inversion=inversion)
